"""Template tags for the webmail console."""
import os
from datetime import datetime

from django import template
from django.contrib.staticfiles.finders import find
from django.templatetags.static import static

from common.utils.date_util import get_full_date_str, get_short_date_str

register = template.Library()


@register.simple_tag
def static_mtime(path):
    """
    Return static URL with file modification time as cache buster.
    Usage: {% static_mtime 'console/css/webmail.css' %}
    """
    url = static(path)
    found = find(path)
    if found and os.path.exists(found):
        mtime = int(os.path.getmtime(found))
        return f"{url}?v={mtime}"
    return url


@register.filter
def short_date(value):
    """Compact date of a message list row: time today, month and day this year."""
    if not isinstance(value, datetime):
        return ""
    return get_short_date_str(value)


@register.filter
def full_date(value):
    if not isinstance(value, datetime):
        return ""
    return get_full_date_str(value)
