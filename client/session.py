"""
Site session: one visitor's language, translations, SEO head and contact form.

Everything the browser app kept in global singletons lives on an explicit
``SiteSession`` object. Language changes fan out through the translation
store's subscription, so the SEO head always follows the current language.
"""

import logging

from client.contact import ContactPipeline
from client.messages import MessageClient
from client.storage import ClientStorage
from i18n import DEFAULT_LANGUAGE
from i18n.assets import HttpAssetFetcher
from i18n.detector import GEO_TIMEOUT_SECONDS, LanguageDetector
from i18n.store import TranslationStore
from seo import DEFAULT_SITE, normalize_route, resolve_route
from seo.applier import SEOApplier
from seo.metadata import SEOLoader

logger = logging.getLogger(__name__)


class SiteSession:
    """Startup flow: detect language -> load dictionary -> apply SEO.

    Args:
        fetcher: Asset fetcher for dictionaries and SEO descriptors
        storage: Persistent client storage (localStorage)
        session_storage: Per-session storage (sessionStorage)
        detector: LanguageDetector; built from the storages when omitted
        message_client: MessageClient, or None for the offline contact form
        site: Site identity (name, base_url, logo, email)
    """

    def __init__(self, fetcher, storage=None, session_storage=None, detector=None,
                 message_client=None, site=None, default_language=DEFAULT_LANGUAGE,
                 server_captcha=False):
        self.storage = storage if storage is not None else ClientStorage()
        self.session_storage = session_storage if session_storage is not None else ClientStorage()
        self.detector = detector or LanguageDetector(
            self.storage, self.session_storage, default_language=default_language)
        self.translations = TranslationStore(fetcher, self.storage, default_language)
        self.seo = SEOApplier(SEOLoader(fetcher, default_language), site=site)
        self.contact = ContactPipeline(
            self.translations.translate, self.storage, message_client,
            server_captcha=server_captcha)
        self.route = ''
        self._unsubscribe = self.translations.subscribe(self._on_language_change)

    @classmethod
    def from_config(cls, client_config, site=None, storage_path=None):
        """Build a session talking to a deployed site.

        ``client_config`` is the ``client`` section of the site config.
        """
        site = dict(site or DEFAULT_SITE)
        assets_url = client_config.get('assets_base_url') or site['base_url']
        api_base_url = client_config.get('api_base_url')
        storage = ClientStorage(storage_path)
        session_storage = ClientStorage()
        detector = LanguageDetector(
            storage, session_storage,
            timeout=client_config.get('geo_timeout_seconds', GEO_TIMEOUT_SECONDS))
        return cls(
            HttpAssetFetcher(assets_url),
            storage=storage,
            session_storage=session_storage,
            detector=detector,
            message_client=MessageClient(api_base_url) if api_base_url else None,
            site=site,
            server_captcha=client_config.get('server_captcha', False),
        )

    @property
    def language(self):
        return self.translations.current_language

    def translate(self, key_path, **params):
        return self.translations.translate(key_path, **params)

    def _on_language_change(self, language):
        self.seo.apply(language, self.route)

    def start(self, route=''):
        """Resolve the startup language and load everything for ``route``.

        A detected language is not stored as the manual preference.
        """
        self.route = normalize_route(route)
        manual = self.detector.stored_preference()
        language = manual or self.detector.resolve()
        logger.info(f"Starting session in '{language}' at /{self.route}")
        if not self.translations.load(language, remember=bool(manual)):
            # Dictionary unavailable; the head still needs a title
            self.seo.apply(self.translations.current_language, self.route)
        return self.language

    def set_language(self, language):
        """Explicit selection from the language selector; persisted."""
        return self.translations.load(language, remember=True)

    def navigate(self, route):
        """Client-side route change. Returns the route actually shown."""
        route, redirect_to = resolve_route(route)
        if redirect_to is not None:
            logger.debug(f"Redirecting /{route} -> /{redirect_to}")
            route = redirect_to
        self.route = route
        self.seo.apply(self.language, route)
        return route

    def close(self):
        self._unsubscribe()
