"""
Visitor language detection.

A stored manual preference always wins and skips detection. Otherwise an
ordered list of strategies is tried and the first one that yields a language
is used:

1. Result already detected in this session
2. Geo-IP country lookup (several public services, short timeout each)
3. Local timezone -> country table
4. Browser / OS locale string
5. Default language

Every network or parse failure is swallowed and the next strategy runs.
"""

import logging
import os
import re

import requests

from i18n import DEFAULT_LANGUAGE, is_supported, normalize_language
from client.storage import LANGUAGE_KEY, DETECTED_LANGUAGE_KEY

logger = logging.getLogger(__name__)

GEO_TIMEOUT_SECONDS = 3.0

# (name, url, JSON field holding the ISO country code)
GEO_SERVICES = [
    ('ipapi.co', 'https://ipapi.co/json/', 'country_code'),
    ('ipwho.is', 'https://ipwho.is/', 'country_code'),
    ('ip-api.com', 'http://ip-api.com/json/', 'countryCode'),
]

COUNTRY_LANGUAGES = {
    # Romanian
    'RO': 'ro', 'MD': 'ro',
    # Ukrainian
    'UA': 'uk',
    # German
    'DE': 'de', 'AT': 'de', 'CH': 'de', 'LI': 'de', 'LU': 'de',
    # French
    'FR': 'fr', 'BE': 'fr', 'MC': 'fr',
    # English
    'US': 'en', 'GB': 'en', 'CA': 'en', 'AU': 'en', 'IE': 'en', 'NZ': 'en',
    'ZA': 'en', 'IN': 'en', 'SG': 'en',
}

TIMEZONE_COUNTRIES = {
    'Europe/Bucharest': 'RO',
    'Europe/Chisinau': 'MD',
    'Europe/Kiev': 'UA',
    'Europe/Kyiv': 'UA',
    'Europe/Uzhgorod': 'UA',
    'Europe/Zaporozhye': 'UA',
    'Europe/Berlin': 'DE',
    'Europe/Vienna': 'AT',
    'Europe/Zurich': 'CH',
    'Europe/Vaduz': 'LI',
    'Europe/Luxembourg': 'LU',
    'Europe/Paris': 'FR',
    'Europe/Brussels': 'BE',
    'Europe/Monaco': 'MC',
    'Europe/London': 'GB',
    'Europe/Dublin': 'IE',
    'America/New_York': 'US',
    'America/Chicago': 'US',
    'America/Denver': 'US',
    'America/Los_Angeles': 'US',
    'America/Phoenix': 'US',
    'America/Anchorage': 'US',
    'Pacific/Honolulu': 'US',
    'America/Toronto': 'CA',
    'America/Vancouver': 'CA',
    'Australia/Sydney': 'AU',
    'Australia/Melbourne': 'AU',
    'Pacific/Auckland': 'NZ',
}

_COUNTRY_CODE = re.compile(r'^[A-Z]{2}$')


def country_to_language(country_code, default_language=DEFAULT_LANGUAGE):
    """Map an ISO country code to a site language (unmapped -> default)."""
    code = (country_code or '').strip().upper()
    language = COUNTRY_LANGUAGES.get(code)
    if language and is_supported(language):
        return language
    return default_language


def timezone_to_country(timezone_name):
    """Return the country code for an IANA timezone name, or None."""
    if not timezone_name:
        return None
    return TIMEZONE_COUNTRIES.get(timezone_name.strip())


class ClientEnvironment:
    """What the detector can see about the visitor's machine."""
    __slots__ = ('locale', 'timezone')

    def __init__(self, locale=None, timezone=None):
        self.locale = locale
        self.timezone = timezone

    @classmethod
    def from_os(cls):
        """Build from LC_ALL / LC_MESSAGES / LANG and TZ (or /etc/localtime)."""
        locale = None
        for var in ('LC_ALL', 'LC_MESSAGES', 'LANG'):
            if os.environ.get(var):
                locale = os.environ[var]
                break

        timezone = os.environ.get('TZ', '').lstrip(':') or None
        if timezone is None:
            link = os.path.realpath('/etc/localtime')
            if 'zoneinfo/' in link:
                timezone = link.split('zoneinfo/', 1)[1]
        return cls(locale=locale, timezone=timezone)


class LanguageDetector:
    """Resolve the visitor's language once per session."""

    def __init__(self, storage, session_storage, environment=None, http=None,
                 services=None, timeout=GEO_TIMEOUT_SECONDS,
                 default_language=DEFAULT_LANGUAGE):
        self.storage = storage
        self.session_storage = session_storage
        self.environment = environment or ClientEnvironment.from_os()
        self.http = http or requests.Session()
        self.services = list(GEO_SERVICES if services is None else services)
        self.timeout = timeout
        self.default_language = default_language
        self.strategies = [
            ('session', self._from_session_cache),
            ('geo-ip', self._from_geo_ip),
            ('timezone', self._from_timezone),
            ('locale', self._from_locale),
        ]

    def stored_preference(self):
        """Return the manually selected language, if any."""
        stored = self.storage.get(LANGUAGE_KEY)
        return stored if stored and is_supported(stored) else None

    def resolve(self):
        """Startup language: manual preference, otherwise ``detect()``."""
        stored = self.stored_preference()
        if stored:
            logger.info(f"Using stored language preference: {stored}")
            return stored
        return self.detect()

    def detect(self):
        """Run the strategy chain and cache the result for the session."""
        for name, strategy in self.strategies:
            language = strategy()
            if language:
                logger.info(f"Detected language '{language}' via {name}")
                break
        else:
            language = self.default_language
            logger.info(f"No detection strategy succeeded, using default '{language}'")

        self.session_storage.set(DETECTED_LANGUAGE_KEY, language)
        return language

    # --- STRATEGIES ---

    def _from_session_cache(self):
        cached = self.session_storage.get(DETECTED_LANGUAGE_KEY)
        return cached if cached and is_supported(cached) else None

    def lookup_country(self):
        """Ask each geolocation service in turn; first country code wins."""
        for name, url, field in self.services:
            try:
                response = self.http.get(url, timeout=self.timeout)
                response.raise_for_status()
                country = response.json().get(field)
            except (requests.RequestException, ValueError, AttributeError) as e:
                logger.debug(f"Geo lookup via {name} failed: {e}")
                continue
            if isinstance(country, str) and _COUNTRY_CODE.match(country.strip().upper()):
                return country.strip().upper()
            logger.debug(f"Geo lookup via {name} returned no country code")
        return None

    def _from_geo_ip(self):
        country = self.lookup_country()
        if country is None:
            return None
        return country_to_language(country, self.default_language)

    def _from_timezone(self):
        country = timezone_to_country(self.environment.timezone)
        if country is None:
            return None
        return country_to_language(country, self.default_language)

    def _from_locale(self):
        return normalize_language(self.environment.locale)
