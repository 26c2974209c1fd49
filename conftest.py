"""
Pytest configuration file.

Loads the Django settings (and with them the .env files) before any test module is
imported. Tests run with RUN_ENV=test, which switches both databases to in-memory sqlite.
"""
import os

import django
import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "fusionmail.settings")
os.environ.setdefault("RUN_ENV", "test")
django.setup()

from django.conf import settings

if "testserver" not in settings.ALLOWED_HOSTS:
    settings.ALLOWED_HOSTS.append("testserver")


@pytest.fixture(autouse=True)
def fresh_services():
    """Services cache their config on first use, drop them after every test"""
    yield
    from app_console.clients.demo_provider import reset_demo_provider
    from common.components.singleton import Singleton

    Singleton.reset_all_instances()
    reset_demo_provider()
