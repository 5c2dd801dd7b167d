"""Tests for the minimal diagnostic server."""

import pytest


class TestMinimalServer:

    @pytest.mark.asyncio
    async def test_lists_hello_tool(self):
        from spline_mcp import minimal

        result = await minimal.list_tools()
        assert [tool.name for tool in result.tools] == ['hello']

    @pytest.mark.asyncio
    async def test_hello_default_name(self):
        from spline_mcp import minimal

        result = await minimal.call_tool('hello', {})
        assert result.content[0].text == 'Hello, World!'

    @pytest.mark.asyncio
    async def test_hello_name(self):
        from spline_mcp import minimal

        result = await minimal.call_tool('hello', {'name': 'Spline'})
        assert result.content[0].text == 'Hello, Spline!'

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        from spline_mcp import minimal

        result = await minimal.call_tool('goodbye', {})
        assert result.isError
        assert result.content[0].text == 'Unknown tool: goodbye'

    @pytest.mark.asyncio
    async def test_test_resource(self):
        from spline_mcp import minimal

        [contents] = await minimal.read_resource('spline://test')
        assert contents.content == 'This is a test resource'
        assert contents.mime_type == 'text/plain'

    @pytest.mark.asyncio
    async def test_unknown_resource(self):
        from spline_mcp import minimal

        with pytest.raises(ValueError, match='Unknown resource URI'):
            await minimal.read_resource('spline://other')
