"""
Spline Webhooks - standalone demo server for receiving webhook calls and
forwarding them to Spline webhook URLs.
"""

from .server import WebhookStore, create_app

__all__ = ['WebhookStore', 'create_app']
