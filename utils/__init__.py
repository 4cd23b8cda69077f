"""
Utils Package - Core presentation state and shell helpers
"""

from .transitions import (
    TransitionController,
    TransitionPhase,
    ClassList,
    DocumentMarkers,
    ThreadingScheduler,
    ManualScheduler,
    create_scheduler
)
from .preferences import (
    get_visitor_id,
    MemoryPreferenceStore,
    DatabasePreferenceStore,
    create_preference_store
)
from .theme import ThemeStore, parse_prefers_dark
from .i18n import (
    LocaleCatalog,
    LocaleStore,
    LocaleParityError,
    MissingTranslationError
)
from .contact import ContactFormData, ContactFormController
from .notifications import Notification, flash_notification, pop_notifications
from .data import load_portfolio, get_default_portfolio_data
from .state import PortfolioState, StateRegistry, create_portfolio_state
from .decorators import with_portfolio_state, get_portfolio_state, wants_json

__all__ = [
    # Transitions
    'TransitionController',
    'TransitionPhase',
    'ClassList',
    'DocumentMarkers',
    'ThreadingScheduler',
    'ManualScheduler',
    'create_scheduler',

    # Preferences
    'get_visitor_id',
    'MemoryPreferenceStore',
    'DatabasePreferenceStore',
    'create_preference_store',

    # Stores
    'ThemeStore',
    'parse_prefers_dark',
    'LocaleCatalog',
    'LocaleStore',
    'LocaleParityError',
    'MissingTranslationError',

    # Contact
    'ContactFormData',
    'ContactFormController',
    'Notification',
    'flash_notification',
    'pop_notifications',

    # Data
    'load_portfolio',
    'get_default_portfolio_data',

    # State
    'PortfolioState',
    'StateRegistry',
    'create_portfolio_state',
    'with_portfolio_state',
    'get_portfolio_state',
    'wants_json'
]
