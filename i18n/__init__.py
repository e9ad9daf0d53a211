"""
Internationalization (i18n) module for the Web Firm Solutions site.

Provides lightweight JSON-based translation support with:
- Supported language table and display names
- Locale string normalization (browser / OS locale -> language code)
- Request locale detection for server-rendered pages (query, cookie,
  Accept-Language header)
- Dot-notation lookup into nested translation dictionaries
"""

import os
import re

# Supported languages
SUPPORTED_LANGUAGES = ['en', 'ro', 'uk', 'de', 'fr']
DEFAULT_LANGUAGE = 'en'

LANGUAGE_COOKIE = 'webfirm_lang'

LANGUAGE_NAMES = {
    'en': 'English',
    'ro': 'Română',
    'uk': 'Українська',
    'de': 'Deutsch',
    'fr': 'Français',
}

LANGUAGE_FLAGS = {
    'en': '🇺🇸',
    'ro': '🇷🇴',
    'uk': '🇺🇦',
    'de': '🇩🇪',
    'fr': '🇫🇷',
}

# Browser locale prefix -> site language. 'es' is recognised but has no
# dictionary, so it resolves to the default.
LOCALE_ALIASES = {
    'en': 'en',
    'ro': 'ro',
    'uk': 'uk',
    'ru': 'uk',
    'de': 'de',
    'fr': 'fr',
    'es': 'es',
}

# Module directory
_MODULE_DIR = os.path.dirname(os.path.abspath(__file__))
TRANSLATIONS_DIR = os.path.join(_MODULE_DIR, 'translations')

_LOCALE_SPLIT = re.compile(r'[-_.@]')


def is_supported(lang):
    """Return True if ``lang`` has a dictionary on this site."""
    return lang in SUPPORTED_LANGUAGES


def normalize_language(value):
    """Map a locale string to a supported language code.

    Args:
        value: Locale string such as 'ro-RO', 'uk_UA.UTF-8' or 'RU'

    Returns:
        str or None: Supported language code, or None if unrecognised
    """
    if not value or not isinstance(value, str):
        return None
    prefix = _LOCALE_SPLIT.split(value.strip().lower(), 1)[0]
    mapped = LOCALE_ALIASES.get(prefix)
    if mapped and is_supported(mapped):
        return mapped
    return None


def parse_accept_language(header):
    """Return the first supported language from an Accept-Language header.

    Tags are taken in the order given; quality values are ignored, matching
    how browsers already sort the header.
    """
    for part in (header or '').split(','):
        # Parse language tag (e.g., "fr-FR;q=0.9" -> "fr")
        lang_tag = part.split(';')[0].strip()
        lang = normalize_language(lang_tag)
        if lang:
            return lang
    return None


def get_locale(request):
    """Detect the visitor's language for a server-rendered page.

    Priority order:
    1. URL parameter (?lang=xx)
    2. Cookie (webfirm_lang)
    3. Browser Accept-Language header
    4. Default language (en)

    Args:
        request: Starlette/FastAPI request

    Returns:
        str: Language code (e.g. 'en', 'ro', 'uk', 'de', 'fr')
    """
    # 1. Check URL parameter
    lang = request.query_params.get('lang')
    if lang and is_supported(lang):
        return lang

    # 2. Check cookie
    lang = request.cookies.get(LANGUAGE_COOKIE)
    if lang and is_supported(lang):
        return lang

    # 3. Parse Accept-Language header
    lang = parse_accept_language(request.headers.get('accept-language', ''))
    if lang:
        return lang

    # 4. Default
    return DEFAULT_LANGUAGE


def get_nested_value(d, key_path):
    """Get a value from a nested dictionary using dot notation.

    Args:
        d: Dictionary to search
        key_path: Dot-separated key path (e.g., 'hero.features.seo.title')

    Returns:
        Value at the key path, or None if not found
    """
    if not key_path:
        return None
    value = d
    for key in key_path.split('.'):
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return None
    return value


def interpolate(text, params):
    """Replace ``{{name}}`` placeholders in ``text`` with values from ``params``."""
    if not params:
        return text
    for name, value in params.items():
        text = text.replace('{{' + name + '}}', str(value))
    return text
