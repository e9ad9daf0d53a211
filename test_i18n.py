"""
Tests for language handling: locale normalization, translation store,
fallback texts, client storage and visitor language detection.

Run: python3 -m pytest test_i18n.py -v
  or: python3 test_i18n.py
"""

import os
import sys
import tempfile
import unittest
from unittest.mock import MagicMock

import requests

# Ensure project root is on sys.path
_script_dir = os.path.dirname(os.path.abspath(__file__))
if _script_dir not in sys.path:
    sys.path.insert(0, _script_dir)

from i18n.assets import AssetLoadError, translation_path


class FakeFetcher:
    """Asset fetcher serving a fixed map of path -> JSON object.

    ``hooks`` maps a path to a callable run before that path is answered.
    """

    def __init__(self, assets, hooks=None):
        self.assets = assets
        self.hooks = dict(hooks or {})
        self.calls = []

    def get_json(self, path):
        self.calls.append(path)
        hook = self.hooks.pop(path, None)
        if hook:
            hook()
        if path not in self.assets:
            raise AssetLoadError(f"missing {path}")
        return self.assets[path]


EN = {'hero': {'title': 'Hello', 'greeting': 'Hi {{name}}'}, 'nav': {'home': 'Home'}}
RO = {'hero': {'title': 'Salut'}}
FR = {'hero': {'title': 'Bonjour'}}


# ============================================================
# Language constants and locale parsing
# ============================================================

class TestNormalizeLanguage(unittest.TestCase):

    def test_locale_strings(self):
        from i18n import normalize_language
        self.assertEqual(normalize_language('ro-RO'), 'ro')
        self.assertEqual(normalize_language('uk_UA.UTF-8'), 'uk')
        self.assertEqual(normalize_language('DE'), 'de')

    def test_russian_maps_to_ukrainian(self):
        from i18n import normalize_language
        self.assertEqual(normalize_language('ru-RU'), 'uk')

    def test_recognised_but_unsupported(self):
        from i18n import normalize_language
        self.assertIsNone(normalize_language('es-ES'))
        self.assertIsNone(normalize_language('ja'))
        self.assertIsNone(normalize_language(''))
        self.assertIsNone(normalize_language(None))

    def test_accept_language(self):
        from i18n import parse_accept_language
        self.assertEqual(parse_accept_language('es-ES,fr-FR;q=0.9,en;q=0.8'), 'fr')
        self.assertIsNone(parse_accept_language('ja,zh;q=0.5'))

    def test_get_locale_priority(self):
        from i18n import get_locale
        request = MagicMock()
        request.query_params = {'lang': 'de'}
        request.cookies = {'webfirm_lang': 'ro'}
        request.headers = {'accept-language': 'fr'}
        self.assertEqual(get_locale(request), 'de')

        request.query_params = {'lang': 'xx'}
        self.assertEqual(get_locale(request), 'ro')

        request.cookies = {}
        self.assertEqual(get_locale(request), 'fr')

        request.headers = {}
        self.assertEqual(get_locale(request), 'en')

    def test_nested_value_and_interpolate(self):
        from i18n import get_nested_value, interpolate
        self.assertEqual(get_nested_value(EN, 'hero.title'), 'Hello')
        self.assertIsNone(get_nested_value(EN, 'hero.title.deeper'))
        self.assertIsNone(get_nested_value(EN, ''))
        self.assertEqual(interpolate('Hi {{name}}', {'name': 'Ana'}), 'Hi Ana')


# ============================================================
# Client storage
# ============================================================

class TestClientStorage(unittest.TestCase):

    def test_memory_storage(self):
        from client.storage import ClientStorage
        storage = ClientStorage()
        storage.set('a', [1, 2])
        self.assertEqual(storage.get('a'), [1, 2])
        self.assertIn('a', storage)
        storage.remove('a')
        self.assertIsNone(storage.get('a'))

    def test_file_storage_persists(self):
        from client.storage import ClientStorage
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'local.json')
            ClientStorage(path).set('webfirm_language', 'ro')
            self.assertEqual(ClientStorage(path).get('webfirm_language'), 'ro')

    def test_corrupt_file_is_ignored(self):
        from client.storage import ClientStorage
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'local.json')
            with open(path, 'w') as f:
                f.write('{not json')
            storage = ClientStorage(path)
            self.assertEqual(storage.get('x', 'default'), 'default')

    def test_unwritable_path_does_not_raise(self):
        from client.storage import ClientStorage
        with tempfile.TemporaryDirectory() as tmp:
            # A directory where the file should be
            storage = ClientStorage(tmp)
            storage.set('k', 'v')
            self.assertEqual(storage.get('k'), 'v')


# ============================================================
# Translation store
# ============================================================

class TestTranslationStore(unittest.TestCase):

    def _store(self, assets, hooks=None, storage=None):
        from i18n.store import TranslationStore
        fetcher = FakeFetcher(assets, hooks)
        return TranslationStore(fetcher, storage), fetcher

    def test_load_and_translate(self):
        store, _ = self._store({translation_path('en'): EN, translation_path('ro'): RO})
        self.assertTrue(store.load('ro'))
        self.assertEqual(store.current_language, 'ro')
        self.assertEqual(store.translate('hero.title'), 'Salut')
        self.assertTrue(store.are_translations_loaded())

    def test_interpolation(self):
        store, _ = self._store({translation_path('en'): EN})
        store.load('en')
        self.assertEqual(store.translate('hero.greeting', name='Ana'), 'Hi Ana')

    def test_failed_language_falls_back_to_default(self):
        store, fetcher = self._store({translation_path('en'): EN})
        self.assertTrue(store.load('de'))
        self.assertEqual(store.current_language, 'en')
        self.assertEqual(store.translate('hero.title'), 'Hello')
        self.assertEqual(fetcher.calls, [translation_path('de'), translation_path('en')])

    def test_unsupported_language_loads_default(self):
        store, fetcher = self._store({translation_path('en'): EN})
        store.load('es')
        self.assertEqual(store.current_language, 'en')
        self.assertEqual(fetcher.calls, [translation_path('en')])

    def test_all_failures_keep_previous_dictionary(self):
        store, fetcher = self._store({translation_path('en'): EN})
        store.load('en')
        fetcher.assets.clear()
        store._cache.clear()
        self.assertFalse(store.load('fr'))
        self.assertEqual(store.translate('hero.title'), 'Hello')
        self.assertFalse(store.is_loading)

    def test_missing_key_never_raises_and_is_not_empty(self):
        store, _ = self._store({translation_path('en'): EN})
        store.load('en')
        for key in ['does.not.exist', 'hero', 'hero.title.more', 'contact.form.name']:
            text = store.translate(key)
            self.assertIsInstance(text, str)
            self.assertTrue(text)

    def test_missing_key_uses_fallback_text(self):
        store, _ = self._store({translation_path('en'): EN, translation_path('ro'): RO})
        store.load('ro')
        self.assertEqual(store.translate('navigation.contact'), 'Contact')
        self.assertEqual(store.translate('nothing.here'), 'nothing.here')

    def test_translate_before_any_load(self):
        store, _ = self._store({})
        self.assertEqual(store.translate('contact.title'), "Let's Work Together")

    def test_stale_response_is_discarded(self):
        holder = {}

        def switch_to_french():
            # A later selection starts while the German request is in flight
            holder['store'].load('fr')

        store, _ = self._store(
            {translation_path('en'): EN, translation_path('de'): RO, translation_path('fr'): FR},
            hooks={translation_path('de'): switch_to_french},
        )
        holder['store'] = store
        self.assertFalse(store.load('de'))
        self.assertEqual(store.current_language, 'fr')
        self.assertEqual(store.translate('hero.title'), 'Bonjour')

    def test_remember_persists_preference(self):
        from client.storage import ClientStorage, LANGUAGE_KEY
        storage = ClientStorage()
        store, _ = self._store({translation_path('en'): EN, translation_path('ro'): RO}, storage=storage)
        store.load('ro', remember=False)
        self.assertIsNone(storage.get(LANGUAGE_KEY))
        store.load('ro')
        self.assertEqual(storage.get(LANGUAGE_KEY), 'ro')

    def test_subscribers_notified(self):
        store, _ = self._store({translation_path('en'): EN, translation_path('ro'): RO})
        seen = []
        unsubscribe = store.subscribe(seen.append)
        store.load('ro')
        unsubscribe()
        store.load('en')
        self.assertEqual(seen, ['ro'])

    def test_unsubscribe_twice_is_harmless(self):
        store, _ = self._store({translation_path('en'): EN})
        seen = []
        unsubscribe = store.subscribe(seen.append)
        unsubscribe()
        unsubscribe()
        self.assertTrue(store.load('en'))
        self.assertEqual(seen, [])

    def test_empty_key_returns_placeholder(self):
        from i18n.store import MISSING_KEY_TEXT
        store, _ = self._store({translation_path('en'): EN})
        self.assertEqual(store.translate(''), MISSING_KEY_TEXT)
        store.load('en')
        self.assertEqual(store.translate(''), MISSING_KEY_TEXT)
        self.assertTrue(MISSING_KEY_TEXT)

    def test_preload_uses_cache(self):
        store, fetcher = self._store({translation_path('en'): EN, translation_path('ro'): RO})
        self.assertEqual(store.preload(['en', 'ro', 'fr']), [True, True, False])
        store.load('ro')
        self.assertEqual(fetcher.calls.count(translation_path('ro')), 1)

    def test_shipped_dictionaries_load(self):
        from i18n import SUPPORTED_LANGUAGES
        from i18n.assets import LocalAssetFetcher
        from i18n.store import TranslationStore
        store = TranslationStore(LocalAssetFetcher())
        for lang in SUPPORTED_LANGUAGES:
            self.assertTrue(store.load(lang), lang)
            self.assertEqual(store.current_language, lang)
            self.assertTrue(store.translate('contact.notifications.success'))


# ============================================================
# Fallback texts
# ============================================================

class TestFallbackTexts(unittest.TestCase):

    def test_unknown_language_uses_english(self):
        from i18n.fallbacks import get_fallback_text
        self.assertEqual(get_fallback_text('xx', 'navigation.contact'), 'Contact')

    def test_no_empty_entries(self):
        from i18n.fallbacks import FALLBACK_TEXTS
        for lang, texts in FALLBACK_TEXTS.items():
            for key, text in texts.items():
                self.assertTrue(text, f"{lang}:{key}")


# ============================================================
# Asset fetchers
# ============================================================

class TestAssetFetchers(unittest.TestCase):

    def test_local_fetcher_rejects_traversal(self):
        from i18n.assets import LocalAssetFetcher
        fetcher = LocalAssetFetcher()
        with self.assertRaises(AssetLoadError):
            fetcher.get_json('/assets/i18n/../../pyproject.toml')
        with self.assertRaises(AssetLoadError):
            fetcher.get_json('/etc/passwd')

    def test_local_fetcher_reads_seo(self):
        from i18n.assets import LocalAssetFetcher, seo_path
        data = LocalAssetFetcher().get_json(seo_path('en'))
        self.assertIn('meta', data)

    def test_http_fetcher_wraps_errors(self):
        from i18n.assets import HttpAssetFetcher
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError('down')
        fetcher = HttpAssetFetcher('https://example.com/', session=session)
        with self.assertRaises(AssetLoadError):
            fetcher.get_json('/assets/i18n/en.json')
        url = session.get.call_args[0][0]
        self.assertEqual(url, 'https://example.com/assets/i18n/en.json')

    def test_http_fetcher_rejects_non_object(self):
        from i18n.assets import HttpAssetFetcher
        response = MagicMock()
        response.json.return_value = ['not', 'a', 'dict']
        session = MagicMock()
        session.get.return_value = response
        with self.assertRaises(AssetLoadError):
            HttpAssetFetcher('https://example.com', session=session).get_json('/assets/i18n/en.json')


# ============================================================
# Language detector
# ============================================================

def _geo_response(payload=None, error=None):
    response = MagicMock()
    if error:
        response.raise_for_status.side_effect = error
    response.json.return_value = payload or {}
    return response


class TestCountryMapping(unittest.TestCase):

    def test_country_to_language(self):
        from i18n.detector import country_to_language
        self.assertEqual(country_to_language('RO'), 'ro')
        self.assertEqual(country_to_language('US'), 'en')
        self.assertEqual(country_to_language('ua'), 'uk')
        self.assertEqual(country_to_language('JP'), 'en')
        self.assertEqual(country_to_language('JP', default_language='de'), 'de')
        self.assertEqual(country_to_language(None), 'en')

    def test_timezone_to_country(self):
        from i18n.detector import timezone_to_country
        self.assertEqual(timezone_to_country('Europe/Bucharest'), 'RO')
        self.assertIsNone(timezone_to_country('Asia/Tokyo'))
        self.assertIsNone(timezone_to_country(None))


class TestLanguageDetector(unittest.TestCase):

    def _detector(self, http=None, locale=None, timezone=None, stored=None):
        from client.storage import ClientStorage, LANGUAGE_KEY
        from i18n.detector import ClientEnvironment, LanguageDetector
        storage = ClientStorage()
        if stored:
            storage.set(LANGUAGE_KEY, stored)
        session_storage = ClientStorage()
        http = http or MagicMock()
        detector = LanguageDetector(
            storage, session_storage,
            environment=ClientEnvironment(locale=locale, timezone=timezone),
            http=http,
        )
        return detector, http, session_storage

    def test_stored_preference_skips_network(self):
        detector, http, _ = self._detector(stored='de')
        self.assertEqual(detector.resolve(), 'de')
        http.get.assert_not_called()

    def test_geo_ip_first_service(self):
        http = MagicMock()
        http.get.return_value = _geo_response({'country_code': 'RO'})
        detector, _, session_storage = self._detector(http=http)
        self.assertEqual(detector.resolve(), 'ro')
        self.assertEqual(http.get.call_count, 1)
        from client.storage import DETECTED_LANGUAGE_KEY
        self.assertEqual(session_storage.get(DETECTED_LANGUAGE_KEY), 'ro')

    def test_geo_ip_falls_through_services(self):
        http = MagicMock()
        http.get.side_effect = [
            requests.Timeout('slow'),
            _geo_response(error=requests.HTTPError('500')),
            _geo_response({'countryCode': 'FR'}),
        ]
        detector, _, _ = self._detector(http=http)
        self.assertEqual(detector.detect(), 'fr')
        self.assertEqual(http.get.call_count, 3)
        for call in http.get.call_args_list:
            self.assertEqual(call.kwargs['timeout'], 3.0)

    def test_unmapped_country_resolves_to_default(self):
        http = MagicMock()
        http.get.return_value = _geo_response({'country_code': 'JP'})
        detector, _, _ = self._detector(http=http, timezone='Europe/Berlin')
        self.assertEqual(detector.detect(), 'en')

    def test_timezone_when_geo_fails(self):
        http = MagicMock()
        http.get.side_effect = requests.ConnectionError('offline')
        detector, _, _ = self._detector(http=http, timezone='Europe/Kyiv', locale='de_DE.UTF-8')
        self.assertEqual(detector.detect(), 'uk')

    def test_locale_when_geo_and_timezone_fail(self):
        http = MagicMock()
        http.get.side_effect = requests.ConnectionError('offline')
        detector, _, _ = self._detector(http=http, timezone='Asia/Tokyo', locale='de_DE.UTF-8')
        self.assertEqual(detector.detect(), 'de')

    def test_default_when_everything_fails(self):
        http = MagicMock()
        http.get.side_effect = requests.ConnectionError('offline')
        detector, _, _ = self._detector(http=http, locale='ja_JP')
        self.assertEqual(detector.detect(), 'en')

    def test_invalid_json_is_skipped(self):
        http = MagicMock()
        bad = MagicMock()
        bad.json.side_effect = ValueError('no json')
        http.get.side_effect = [bad, _geo_response({'country_code': 'de'}), _geo_response({})]
        detector, _, _ = self._detector(http=http)
        self.assertEqual(detector.lookup_country(), 'DE')

    def test_session_cache_reused(self):
        http = MagicMock()
        http.get.return_value = _geo_response({'country_code': 'UA'})
        detector, _, _ = self._detector(http=http)
        self.assertEqual(detector.detect(), 'uk')
        self.assertEqual(detector.detect(), 'uk')
        self.assertEqual(http.get.call_count, 1)


if __name__ == '__main__':
    unittest.main()
