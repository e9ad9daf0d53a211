"""
Translation store.

Holds the dictionary of the current language, loads dictionaries over HTTP
with a single fallback to the default language, and resolves dotted key
paths to display text. Lookups never raise: a missing key falls back to the
built-in texts and finally to the key path itself.
"""

import logging
import threading

from i18n import (
    DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES, LANGUAGE_NAMES,
    get_nested_value, interpolate,
)
from i18n.assets import AssetLoadError, translation_path
from i18n.fallbacks import get_fallback_text
from client.storage import LANGUAGE_KEY

logger = logging.getLogger(__name__)

MISSING_KEY_TEXT = '[missing translation]'


class TranslationStore:
    """Per-session translation state.

    Every ``load`` takes a new request generation. A response that arrives
    after a newer ``load`` has started is discarded, so a slow earlier
    language switch can never overwrite a later one.
    """

    def __init__(self, fetcher, storage=None, default_language=DEFAULT_LANGUAGE,
                 supported_languages=None):
        self._fetcher = fetcher
        self._storage = storage
        self.default_language = default_language
        self._supported = list(supported_languages or SUPPORTED_LANGUAGES)
        self._lock = threading.Lock()
        self._cache = {}
        self._translations = {}
        self._current = default_language
        self._generation = 0
        self._loading = False
        self._listeners = []

    # --- STATE ---

    @property
    def current_language(self):
        return self._current

    @property
    def is_loading(self):
        return self._loading

    def supported_languages(self):
        return list(self._supported)

    def is_supported(self, language):
        return language in self._supported

    def display_name(self, language):
        return LANGUAGE_NAMES.get(language, language)

    def are_translations_loaded(self):
        return bool(self._translations)

    def all_translations(self):
        """Return the current dictionary (for debugging)."""
        return dict(self._translations)

    def subscribe(self, callback):
        """Call ``callback(language)`` after every successful load.

        Returns a function that removes the subscription.
        """
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)
        return unsubscribe

    # --- LOADING ---

    def _fetch(self, language):
        """Return the dictionary for ``language`` (cached), or None on failure."""
        with self._lock:
            cached = self._cache.get(language)
        if cached is not None:
            return cached
        try:
            translations = self._fetcher.get_json(translation_path(language))
        except AssetLoadError as e:
            logger.warning(f"Failed to load translations for '{language}': {e}")
            return None
        with self._lock:
            self._cache[language] = translations
        return translations

    def load(self, language, remember=True):
        """Load ``language`` and make it current.

        Falls back to the default language once. If both fail the previous
        dictionary is kept and lookups use the built-in texts.

        Args:
            language: Language code to load
            remember: Persist the language as the manual preference

        Returns:
            bool: True if a dictionary was applied, False if every candidate
            failed or a newer load superseded this one
        """
        if not self.is_supported(language):
            logger.warning(f"Language '{language}' not supported, using '{self.default_language}'")
            language = self.default_language

        with self._lock:
            self._generation += 1
            generation = self._generation
            self._loading = True

        candidates = [language]
        if language != self.default_language:
            candidates.append(self.default_language)

        for candidate in candidates:
            translations = self._fetch(candidate)
            if translations is None:
                continue
            if candidate != language:
                logger.info(f"Fell back to '{candidate}' translations for '{language}'")
            return self._apply(generation, candidate, translations, remember)

        with self._lock:
            if generation == self._generation:
                self._loading = False
        logger.error("All translation fallbacks failed, using built-in texts")
        return False

    def _apply(self, generation, language, translations, remember):
        with self._lock:
            if generation != self._generation:
                logger.debug(f"Discarding stale translations for '{language}'")
                return False
            self._translations = translations
            self._current = language
            self._loading = False

        if remember and self._storage is not None:
            self._storage.set(LANGUAGE_KEY, language)

        for callback in list(self._listeners):
            callback(language)
        return True

    def preload(self, languages):
        """Fill the cache for ``languages`` without switching.

        Returns:
            list[bool]: Load result per supported language requested
        """
        return [self._fetch(lang) is not None for lang in languages if self.is_supported(lang)]

    # --- LOOKUP ---

    def translate(self, key_path, **params):
        """Get a translated string by key.

        Args:
            key_path: Translation key using dot notation (e.g., 'hero.title')
            **params: Values for ``{{name}}`` placeholders

        Returns:
            str: Translated text, built-in fallback text, the key path, or
                ``MISSING_KEY_TEXT`` for an empty key
        """
        key_path = str(key_path)
        text = None
        if self._translations:
            value = get_nested_value(self._translations, key_path)
            if isinstance(value, str):
                text = value
            else:
                logger.debug(f"Translation key not found: {key_path}")

        if text is None:
            text = get_fallback_text(self._current, key_path) or key_path or MISSING_KEY_TEXT

        return interpolate(text, params)
