from django.conf import settings

from app_console.session import ClientSession


def console_context(request):
    """Provide app name, demo flag and the signed-in user to all console templates."""
    client_session = ClientSession.load(request) if hasattr(request, 'session') else ClientSession()
    return {
        'app_name': 'FusionMail',
        'demo_mode': settings.CONSOLE_DEMO_MODE,
        'webmail_user': client_session.user if client_session.is_authenticated else None,
    }
