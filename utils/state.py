"""
State Module - Per-visitor presentation state

A PortfolioState bundles everything one visitor's page depends on: the
theme and locale stores, the contact form, and the document markers their
transitions write to. Views receive it explicitly and pass it on to the
templates.
"""

import logging
import threading
from collections import OrderedDict
from .contact import ContactFormController
from .i18n import LocaleStore, LANGUAGE_TRANSITION_CLASS
from .preferences import create_preference_store
from .theme import ThemeStore, THEME_TRANSITION_CLASS
from .transitions import DocumentMarkers, TransitionController

logger = logging.getLogger(__name__)


class PortfolioState:
    def __init__(self, visitor_id, theme, locale, contact, markers):
        self.visitor_id = visitor_id
        self.theme = theme
        self.locale = locale
        self.contact = contact
        self.markers = markers

    @property
    def is_transitioning(self):
        return self.theme.is_transitioning or self.locale.is_transitioning

    def snapshot(self):
        """JSON-serializable view of the state"""
        return {
            'theme': self.theme.theme,
            'language': self.locale.language,
            'theme_transitioning': self.theme.is_transitioning,
            'language_transitioning': self.locale.is_transitioning,
            'markers': self.markers.as_dict(),
            'transition': {
                'stage_delay': self.theme.transitions.stage_delay,
                'settle_delay': self.theme.transitions.settle_delay,
            },
            'contact_open': self.contact.is_open,
        }

    def reload(self):
        """
        Re-read theme and language from the durable store.

        Several worker processes each hold their own state for the same
        visitor; a value committed by one is picked up here by the others.
        """
        self.theme.reload()
        self.locale.reload()

    def teardown(self):
        """Cancel pending transitions so no timer fires against this state"""
        self.theme.transitions.cancel()
        self.locale.transitions.cancel()


def create_portfolio_state(app, catalog, scheduler, visitor_id, prefers_dark=None):
    """
    Build and initialize the state for one visitor.

    Args:
        app: Flask application (configuration and database access)
        catalog: LocaleCatalog shared by all visitors
        scheduler: timer scheduler shared by all transitions
        visitor_id (str): visitor identifier from the session
        prefers_dark (bool, optional): OS dark-mode preference, None if unknown
    """
    config = app.config
    preferences = create_preference_store(app, visitor_id)
    markers = DocumentMarkers()

    def transition(marker_class):
        return TransitionController(
            scheduler,
            markers.body,
            marker_class,
            stage_delay=config['TRANSITION_STAGE_DELAY'],
            settle_delay=config['TRANSITION_SETTLE_DELAY'],
        )

    theme = ThemeStore(preferences, markers.root, transition(THEME_TRANSITION_CLASS))
    locale = LocaleStore(
        catalog,
        preferences,
        transition(LANGUAGE_TRANSITION_CLASS),
        default_language=config['DEFAULT_LANGUAGE'],
        strict=config['I18N_STRICT'],
    )
    contact = ContactFormController(
        config['FORM_RELAY_ENDPOINT'],
        locale.translate,
        timeout=config['FORM_RELAY_TIMEOUT'],
    )

    theme.initialize(prefers_dark)
    locale.initialize()
    logger.debug(f"Visitor {visitor_id} initialized: theme={theme.theme} language={locale.language}")
    return PortfolioState(visitor_id, theme, locale, contact, markers)


class StateRegistry:
    """
    Visitor id -> PortfolioState, bounded; least recently used are evicted.

    Follows the Flask extension pattern: create unbound, then ``init_app``.
    """

    def __init__(self, app=None):
        self.app = None
        self.catalog = None
        self.scheduler = None
        self.max_visitors = 1000
        self._states = OrderedDict()
        self._lock = threading.Lock()
        if app is not None:
            self.init_app(app)

    def init_app(self, app, catalog=None, scheduler=None):
        self.app = app
        self.catalog = catalog
        self.scheduler = scheduler
        self.max_visitors = app.config.get('STATE_REGISTRY_MAX_VISITORS', 1000)
        self.clear()
        app.extensions['portfolio_state'] = self

    def get(self, visitor_id, prefers_dark=None):
        """Return the visitor's state, creating it on first sight"""
        with self._lock:
            state = self._states.get(visitor_id)
            if state is not None:
                self._states.move_to_end(visitor_id)

        if state is not None:
            state.reload()
            return state

        state = create_portfolio_state(
            self.app, self.catalog, self.scheduler, visitor_id, prefers_dark)

        evicted = []
        with self._lock:
            existing = self._states.get(visitor_id)
            if existing is not None:
                return existing
            self._states[visitor_id] = state
            while len(self._states) > self.max_visitors:
                evicted.append(self._states.popitem(last=False)[1])

        for old in evicted:
            old.teardown()
            logger.debug(f"Evicted state for visitor {old.visitor_id}")
        return state

    def clear(self):
        with self._lock:
            states = list(self._states.values())
            self._states.clear()
        for state in states:
            state.teardown()

    def __len__(self):
        return len(self._states)

    def __contains__(self, visitor_id):
        return visitor_id in self._states
