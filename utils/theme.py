"""
Theme Module - Light/dark theme state for one visitor
"""

import logging

logger = logging.getLogger(__name__)

LIGHT = 'light'
DARK = 'dark'
THEMES = (LIGHT, DARK)
DEFAULT_THEME = LIGHT

THEME_STORAGE_KEY = 'theme'
DARK_MARKER_CLASS = 'dark'
THEME_TRANSITION_CLASS = 'theme-transition'

# Values of the Sec-CH-Prefers-Color-Scheme client hint
PREFERS_COLOR_SCHEME_HEADER = 'Sec-CH-Prefers-Color-Scheme'


def parse_prefers_dark(header_value):
    """
    Read the OS dark-mode preference from the client hint header.

    Returns:
        bool or None: None when the signal is unavailable
    """
    if not header_value:
        return None
    value = header_value.strip().strip('"').lower()
    if value == DARK:
        return True
    if value == LIGHT:
        return False
    return None


def opposite(theme):
    return LIGHT if theme == DARK else DARK


class ThemeStore:
    """
    Current theme plus its transition.

    Args:
        preferences: durable store with ``get``/``set``
        root_marker: ClassList of the document root (receives ``dark``)
        transitions: TransitionController owned by this store
    """

    def __init__(self, preferences, root_marker, transitions):
        self.preferences = preferences
        self.root_marker = root_marker
        self.transitions = transitions
        self.theme = DEFAULT_THEME
        self._initialized = False

    @property
    def is_transitioning(self):
        return self.transitions.is_transitioning

    def initialize(self, prefers_dark=None):
        """Resolve the theme: stored value, then OS preference, then light"""
        if self._initialized:
            return self.theme
        self._initialized = True

        stored = self.preferences.get(THEME_STORAGE_KEY)
        if stored is not None and stored not in THEMES:
            logger.warning(f"Ignoring invalid stored theme: {stored!r}")
        if stored in THEMES:
            self.theme = stored
        elif prefers_dark is not None:
            self.theme = DARK if prefers_dark else LIGHT
        else:
            self.theme = DEFAULT_THEME
        self._apply()
        return self.theme

    def reload(self):
        """Adopt a theme committed by another process; ignored mid-transition"""
        if self.is_transitioning:
            return self.theme
        stored = self.preferences.get(THEME_STORAGE_KEY)
        if stored in THEMES and stored != self.theme:
            self.theme = stored
            self._apply()
        return self.theme

    def toggle(self, explicit_value=None):
        """
        Switch to ``explicit_value`` or to the opposite theme.

        Returns:
            bool: False when a theme transition is already running
        """
        if explicit_value is not None and explicit_value not in THEMES:
            raise ValueError(f"Unsupported theme: {explicit_value!r}")
        target = explicit_value or opposite(self.theme)
        return self.transitions.begin_transition(lambda: self._commit(target))

    def _commit(self, theme):
        self.theme = theme
        self.preferences.set(THEME_STORAGE_KEY, theme)
        self._apply()
        logger.debug(f"Theme committed: {theme}")

    def _apply(self):
        self.root_marker.toggle(DARK_MARKER_CLASS, self.theme == DARK)
