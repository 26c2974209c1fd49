"""fusionmail URL Configuration

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/4.2/topics/http/urls/

Apps are mounted only when enabled in settings:
    api/      -> app_webmail (JSON connector to the mail server)
    console/  -> app_console (browser webmail)
"""

from django.conf import settings
from django.urls import path, include
from django.views.generic import RedirectView

urlpatterns = []

if settings.APP_WEBMAIL_ENABLED:
    from app_webmail import urls as app_webmail_urls
    urlpatterns.append(path('api/', include(app_webmail_urls)))

if settings.APP_CONSOLE_ENABLED:
    from app_console import urls as app_console_urls
    urlpatterns.append(path('console/', include(app_console_urls)))
    urlpatterns.append(path('', RedirectView.as_view(pattern_name='console:inbox', permanent=False)))
