import pytest

from utils.preferences import MemoryPreferenceStore
from utils.theme import ThemeStore, parse_prefers_dark
from utils.transitions import DocumentMarkers, TransitionController
from conftest import EPSILON


@pytest.fixture
def markers():
    return DocumentMarkers()


def make_store(scheduler, markers, preferences=None):
    preferences = preferences if preferences is not None else MemoryPreferenceStore()
    transitions = TransitionController(scheduler, markers.body, 'theme-transition')
    return ThemeStore(preferences, markers.root, transitions)


def settle(scheduler, store):
    scheduler.advance(store.transitions.duration + EPSILON)


def test_os_dark_preference_used_without_stored_theme(manual_scheduler, markers):
    store = make_store(manual_scheduler, markers)

    assert store.initialize(prefers_dark=True) == 'dark'
    assert 'dark' in markers.root


@pytest.mark.parametrize('prefers_dark', [False, None])
def test_defaults_to_light(manual_scheduler, markers, prefers_dark):
    store = make_store(manual_scheduler, markers)

    assert store.initialize(prefers_dark=prefers_dark) == 'light'
    assert 'dark' not in markers.root


def test_stored_theme_wins_over_os_preference(manual_scheduler, markers):
    store = make_store(manual_scheduler, markers, MemoryPreferenceStore({'theme': 'light'}))

    assert store.initialize(prefers_dark=True) == 'light'


def test_invalid_stored_theme_is_treated_as_absent(manual_scheduler, markers):
    store = make_store(manual_scheduler, markers, MemoryPreferenceStore({'theme': 'sepia'}))

    assert store.initialize(prefers_dark=True) == 'dark'


def test_initialize_runs_once(manual_scheduler, markers):
    store = make_store(manual_scheduler, markers)
    store.initialize(prefers_dark=True)

    assert store.initialize(prefers_dark=False) == 'dark'


def test_toggle_commits_after_stage_delay(manual_scheduler, markers):
    preferences = MemoryPreferenceStore()
    store = make_store(manual_scheduler, markers, preferences)
    store.initialize()

    assert store.toggle() is True
    assert store.is_transitioning
    assert 'theme-transition' in markers.body
    assert store.theme == 'light'
    assert preferences.get('theme') is None

    manual_scheduler.advance(0.05 + EPSILON)
    assert store.theme == 'dark'
    assert preferences.get('theme') == 'dark'
    assert 'dark' in markers.root
    assert 'theme-transition' in markers.body

    manual_scheduler.advance(0.3)
    assert not store.is_transitioning
    assert 'theme-transition' not in markers.body


def test_double_toggle_restores_original_theme(manual_scheduler, markers):
    preferences = MemoryPreferenceStore()
    store = make_store(manual_scheduler, markers, preferences)
    original = store.initialize(prefers_dark=True)

    store.toggle()
    settle(manual_scheduler, store)
    store.toggle()
    settle(manual_scheduler, store)

    assert store.theme == original
    assert preferences.get('theme') == original
    assert preferences.writes == 2
    assert 'dark' in markers.root


def test_explicit_theme_is_applied(manual_scheduler, markers):
    preferences = MemoryPreferenceStore()
    store = make_store(manual_scheduler, markers, preferences)
    store.initialize(prefers_dark=True)

    store.toggle('dark')
    settle(manual_scheduler, store)

    assert store.theme == 'dark'
    assert preferences.get('theme') == 'dark'


def test_unknown_explicit_theme_is_rejected(manual_scheduler, markers):
    store = make_store(manual_scheduler, markers)
    store.initialize()

    with pytest.raises(ValueError):
        store.toggle('sepia')
    assert not store.is_transitioning


def test_toggle_rejected_during_transition(manual_scheduler, markers):
    preferences = MemoryPreferenceStore()
    store = make_store(manual_scheduler, markers, preferences)
    store.initialize()

    assert store.toggle() is True
    assert store.toggle() is False
    settle(manual_scheduler, store)

    assert store.theme == 'dark'
    assert preferences.writes == 1


@pytest.mark.parametrize('header, expected', [
    ('"dark"', True),
    ('dark', True),
    ('"light"', False),
    ('', None),
    (None, None),
    ('"no-preference"', None),
])
def test_parse_prefers_dark(header, expected):
    assert parse_prefers_dark(header) is expected
