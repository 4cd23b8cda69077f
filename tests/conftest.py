import os

import pytest
import requests

from app import create_app
from extensions import db, state_registry
from utils.i18n import LocaleCatalog, LocaleStore
from utils.preferences import MemoryPreferenceStore
from utils.transitions import ClassList, ManualScheduler, TransitionController

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
LOCALES = os.path.join(ROOT, 'locales')

# Slightly past each delay so float sums never land just short of a timer
EPSILON = 0.001


class FakeResponse:
    def __init__(self, status_code):
        self.status_code = status_code


class FakeRelay:
    """Stands in for ``requests.post``; records every call"""

    def __init__(self, status_code=200, error=None):
        self.status_code = status_code
        self.error = error
        self.calls = []

    def __call__(self, url, json=None, headers=None, timeout=None, **kwargs):
        self.calls.append({'url': url, 'json': json, 'headers': headers, 'timeout': timeout})
        if self.error is not None:
            raise self.error
        return FakeResponse(self.status_code)


class RecordingNotifier:
    def __init__(self):
        self.notifications = []

    def __call__(self, notification):
        self.notifications.append(notification)


@pytest.fixture
def app():
    app = create_app('testing')
    yield app
    state_registry.clear()
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def scheduler(app):
    return state_registry.scheduler


@pytest.fixture
def catalog():
    return LocaleCatalog.from_folder(LOCALES)


@pytest.fixture
def manual_scheduler():
    return ManualScheduler()


@pytest.fixture
def preferences():
    return MemoryPreferenceStore()


@pytest.fixture
def body_marker():
    return ClassList()


@pytest.fixture
def locale_store(catalog, preferences, manual_scheduler, body_marker):
    transitions = TransitionController(manual_scheduler, body_marker, 'language-transition')
    store = LocaleStore(catalog, preferences, transitions, strict=True)
    store.initialize()
    return store


@pytest.fixture
def relay(monkeypatch):
    fake = FakeRelay()
    monkeypatch.setattr(requests, 'post', fake)
    return fake


@pytest.fixture
def notifier():
    return RecordingNotifier()
