"""
Notifications Module - Non-blocking toast notifications

A notifier is any callable that accepts a Notification. The web shell uses
``flash_notification``, which queues the toast through Flask message
flashing so the next rendered page shows it.
"""

from collections import namedtuple
from flask import flash, get_flashed_messages

Notification = namedtuple('Notification', ['title', 'description', 'variant'])

DEFAULT = 'default'
DESTRUCTIVE = 'destructive'

# Flash categories used by the toast partial
_CATEGORY_BY_VARIANT = {
    DEFAULT: 'success',
    DESTRUCTIVE: 'danger',
}


def build_notification(translate, key, variant=DEFAULT):
    """Build a Notification from the ``<key>.title``/``<key>.description`` pair"""
    return Notification(
        title=translate(f'{key}.title'),
        description=translate(f'{key}.description'),
        variant=variant,
    )


def flash_notification(notification):
    """Queue a toast for the next rendered page"""
    flash(
        {'title': notification.title, 'description': notification.description},
        _CATEGORY_BY_VARIANT.get(notification.variant, 'info'),
    )


def pop_notifications():
    """
    Drain queued toasts for rendering.

    Returns:
        list: dicts with ``title``, ``description`` and ``category``
    """
    toasts = []
    for category, message in get_flashed_messages(with_categories=True):
        if isinstance(message, dict):
            toasts.append({
                'title': message.get('title', ''),
                'description': message.get('description', ''),
                'category': category,
            })
        else:
            toasts.append({'title': str(message), 'description': '', 'category': category})
    return toasts
