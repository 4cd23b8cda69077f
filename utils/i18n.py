"""
I18n Module - Locale catalog and per-visitor language state

Locale files are nested JSON objects with string leaves, one file per
language (``locales/es.json``, ``locales/en.json``). Keys are addressed by
their dotted path, e.g. ``hero.title``.
"""

import json
import logging
import os

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ('es', 'en')
DEFAULT_LANGUAGE = 'es'

LANGUAGE_STORAGE_KEY = 'language'
LANGUAGE_TRANSITION_CLASS = 'language-transition'


class LocaleParityError(Exception):
    """Raised when locale dictionaries do not share the same key set"""

    def __init__(self, missing):
        self.missing = missing
        details = '; '.join(
            f"{lang} lacks {', '.join(sorted(keys))}" for lang, keys in sorted(missing.items()))
        super().__init__(f"Locale key sets differ: {details}")


class MissingTranslationError(KeyError):
    """Raised in strict mode when a key is absent from the active locale"""


def flatten(messages, prefix=''):
    """Flatten a nested dictionary into ``{'a.b': value}``"""
    flat = {}
    for key, value in messages.items():
        path = f'{prefix}{key}'
        if isinstance(value, dict):
            flat.update(flatten(value, prefix=f'{path}.'))
        elif isinstance(value, str):
            flat[path] = value
        else:
            raise TypeError(f"Translation {path!r} must be a string, got {type(value).__name__}")
    return flat


def find_parity_gaps(dictionaries):
    """
    Compare flattened dictionaries.

    Returns:
        dict: language -> set of keys present elsewhere but missing there
    """
    all_keys = set()
    for flat in dictionaries.values():
        all_keys.update(flat)
    gaps = {}
    for lang, flat in dictionaries.items():
        missing = all_keys - set(flat)
        if missing:
            gaps[lang] = missing
    return gaps


class LocaleCatalog:
    """Flattened, parity-checked dictionaries for all supported languages"""

    def __init__(self, dictionaries):
        gaps = find_parity_gaps(dictionaries)
        if gaps:
            raise LocaleParityError(gaps)
        self.dictionaries = dictionaries
        self.keys = frozenset(next(iter(dictionaries.values()), {}))

    @property
    def languages(self):
        return tuple(self.dictionaries)

    def lookup(self, language, path):
        return self.dictionaries.get(language, {}).get(path)

    @classmethod
    def from_folder(cls, folder, languages=SUPPORTED_LANGUAGES):
        dictionaries = {}
        for lang in languages:
            path = os.path.join(folder, f'{lang}.json')
            with open(path, 'r', encoding='utf-8') as f:
                dictionaries[lang] = flatten(json.load(f))
        return cls(dictionaries)


class LocaleStore:
    """
    Active language plus its transition.

    Missing keys: in strict mode ``translate`` raises
    MissingTranslationError; otherwise it logs a warning once per key and
    returns the caller's default, or the key itself.
    """

    def __init__(self, catalog, preferences, transitions,
                 default_language=DEFAULT_LANGUAGE, strict=False):
        self.catalog = catalog
        self.preferences = preferences
        self.transitions = transitions
        self.default_language = default_language
        self.strict = strict
        self.language = default_language
        self._reported = set()

    @property
    def is_transitioning(self):
        return self.transitions.is_transitioning

    def initialize(self):
        stored = self.preferences.get(LANGUAGE_STORAGE_KEY)
        if stored in self.catalog.languages:
            self.language = stored
        else:
            if stored is not None:
                logger.warning(f"Ignoring invalid stored language: {stored!r}")
            self.language = self.default_language
        return self.language

    def reload(self):
        if self.is_transitioning:
            return self.language
        stored = self.preferences.get(LANGUAGE_STORAGE_KEY)
        if stored in self.catalog.languages:
            self.language = stored
        return self.language

    def other_language(self):
        languages = self.catalog.languages
        index = languages.index(self.language) if self.language in languages else 0
        return languages[(index + 1) % len(languages)]

    def toggle(self):
        """
        Switch to the other supported language.

        Returns:
            bool: False when a language transition is already running
        """
        target = self.other_language()
        return self.transitions.begin_transition(lambda: self._commit(target))

    def _commit(self, language):
        self.language = language
        self.preferences.set(LANGUAGE_STORAGE_KEY, language)
        logger.debug(f"Language committed: {language}")

    def translate(self, path, default=None):
        value = self.catalog.lookup(self.language, path)
        if value is not None:
            return value
        if self.strict:
            raise MissingTranslationError(f"{self.language}:{path}")
        if (self.language, path) not in self._reported:
            self._reported.add((self.language, path))
            logger.warning(f"Missing translation {path!r} for language {self.language!r}")
        return default if default is not None else path
