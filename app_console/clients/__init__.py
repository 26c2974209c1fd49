from django.conf import settings

from app_console.clients.base_provider import MailDataProvider
from app_console.clients.connector_provider import ConnectorDataProvider
from app_console.clients.demo_provider import DemoDataProvider, get_demo_provider


def get_data_provider() -> MailDataProvider:
    """
    The demo provider when CONSOLE_DEMO_MODE is on, otherwise the connector API client
    """
    if settings.CONSOLE_DEMO_MODE:
        return get_demo_provider()
    return ConnectorDataProvider(settings.CONSOLE_API_BASE_URL, settings.CONSOLE_API_TIMEOUT)


__all__ = [
    'MailDataProvider',
    'ConnectorDataProvider',
    'DemoDataProvider',
    'get_demo_provider',
    'get_data_provider',
]
