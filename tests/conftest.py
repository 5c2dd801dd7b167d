"""Pytest configuration, custom mark registration and shared fixtures."""

import httpx
import pytest


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: requires a live Spline API (SPLINE_API_KEY)")


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler):
        self.requests = []

        def record(request):
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def make_context():
    """Build a ToolContext whose clients talk to a RecordingTransport."""
    from spline_mcp.config import ApiConfig, OpenAIConfig, Settings
    from spline_mcp.server import build_context

    def factory(handler, api_key='test-key', openai_key=None):
        transport = RecordingTransport(handler)
        settings = Settings(
            api=ApiConfig(base_url='https://spline.test', api_key=api_key),
            openai=OpenAIConfig(base_url='https://openai.test/v1', api_key=openai_key),
        )
        return build_context(settings, transport=transport), transport

    return factory
