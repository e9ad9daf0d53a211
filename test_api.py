"""
Tests for the FastAPI site server: contact submission, admin endpoints,
rate limiting, server CAPTCHA, i18n assets and the SPA shell.

Run: python3 -m pytest test_api.py -v
  or: python3 test_api.py
"""

import os
import sys
import json
import asyncio
import threading
import shutil
import tempfile
import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

# Ensure project root is on sys.path
_script_dir = os.path.dirname(os.path.abspath(__file__))
if _script_dir not in sys.path:
    sys.path.insert(0, _script_dir)

from api import create_app
from api.rate_limit import limiter

ADMIN_KEY = 'test-admin-key'

VALID = {
    'name': '  Ana Popescu ',
    'email': ' Ana@Example.COM ',
    'message': 'I would like a new website for my bakery.',
}


def _solve(question):
    a, op, b = question.replace(' = ?', '').split(' ')
    a, b = int(a), int(b)
    return {'+': a + b, '-': a - b, '×': a * b}[op]


class ApiTestCase(unittest.TestCase):
    """Fresh app, messages file and rate-limit window per test."""

    config_overrides = {}

    def setUp(self):
        self.tmp = tempfile.mkdtemp()
        self.messages_file = os.path.join(self.tmp, 'data', 'messages.json')
        contact = {'messages_file': self.messages_file, 'admin_key': ADMIN_KEY}
        contact.update(self.config_overrides)
        self.app = create_app({'contact': contact})
        self.client = TestClient(self.app)
        limiter.reset()

    def tearDown(self):
        self.app.state.captchas.clear()
        shutil.rmtree(self.tmp, ignore_errors=True)

    def submit(self, **overrides):
        return self.client.post('/api/contact', json=dict(VALID, **overrides))


# ============================================================
# Health and contact submission
# ============================================================

class TestContactEndpoint(ApiTestCase):

    def test_health(self):
        resp = self.client.get('/api/health')
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data['status'], 'OK')
        self.assertEqual(data['service'], 'Web Firm Solutions Backend')
        self.assertTrue(data['timestamp'].endswith('Z'))

    def test_submit_stores_normalized_message(self):
        resp = self.submit()
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertTrue(data['success'])
        self.assertEqual(data['message'], 'Message received successfully')
        self.assertTrue(data['id'].isdigit())

        with open(self.messages_file) as f:
            stored = json.load(f)
        self.assertEqual(len(stored), 1)
        self.assertEqual(stored[0]['name'], 'Ana Popescu')
        self.assertEqual(stored[0]['email'], 'ana@example.com')
        self.assertEqual(stored[0]['status'], 'new')
        self.assertEqual(stored[0]['ip'], 'testclient')

    def test_validation_errors(self):
        cases = [
            ({'name': 'A'}, 'Name must be at least 2 characters long'),
            ({'name': None}, 'Name must be at least 2 characters long'),
            ({'email': 'no-at-sign'}, 'Valid email address is required'),
            ({'message': 'too short'}, 'Message must be at least 10 characters long'),
        ]
        for overrides, error in cases:
            resp = self.submit(**overrides)
            self.assertEqual(resp.status_code, 400, overrides)
            self.assertEqual(resp.json(), {'success': False, 'error': error})
        self.assertFalse(os.path.exists(self.messages_file))

    def test_form_encoded_submission(self):
        resp = self.client.post('/api/contact', data=VALID)
        self.assertEqual(resp.status_code, 200)
        with open(self.messages_file) as f:
            stored = json.load(f)
        self.assertEqual(stored[0]['name'], 'Ana Popescu')
        self.assertEqual(stored[0]['email'], 'ana@example.com')

    def test_form_encoded_validation_error(self):
        resp = self.client.post('/api/contact', data=dict(VALID, message='short'))
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()['error'], 'Message must be at least 10 characters long')

    def test_security_headers(self):
        for path in ('/api/health', '/'):
            resp = self.client.get(path)
            self.assertEqual(resp.headers['x-content-type-options'], 'nosniff', path)
            self.assertEqual(resp.headers['x-frame-options'], 'SAMEORIGIN', path)
            self.assertEqual(resp.headers['referrer-policy'], 'no-referrer', path)

    def test_malformed_body(self):
        resp = self.client.post('/api/contact', content='not json',
                                headers={'content-type': 'application/json'})
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(resp.json()['success'])

    def test_write_failure_returns_500(self):
        from api.store import MessageStoreError
        with patch('api.store.MessageStore.save', side_effect=MessageStoreError('disk full')):
            resp = self.submit()
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {'success': False, 'error': 'Failed to save message'})

    def test_ids_unique_within_same_millisecond(self):
        self.app.state.messages.clock = lambda: 1700000000.0
        first = self.submit().json()['id']
        second = self.submit().json()['id']
        self.assertEqual(first, '1700000000000')
        self.assertEqual(second, '1700000000001')


# ============================================================
# Rate limiting
# ============================================================

class TestRateLimit(ApiTestCase):

    def test_eleventh_request_rejected(self):
        for i in range(10):
            resp = self.submit()
            self.assertEqual(resp.status_code, 200, f"request {i + 1}")
        resp = self.submit()
        self.assertEqual(resp.status_code, 429)
        self.assertEqual(resp.json(), {
            'success': False,
            'error': 'Too many requests from this IP, please try again later.',
        })

    def test_other_endpoints_not_limited(self):
        for _ in range(15):
            self.assertEqual(self.client.get('/api/health').status_code, 200)


# ============================================================
# Server CAPTCHA
# ============================================================

class TestServerCaptcha(ApiTestCase):

    def test_correct_answer_once(self):
        challenge = self.client.get('/api/captcha').json()
        self.assertEqual(set(challenge), {'id', 'question'})
        answer = str(_solve(challenge['question']))

        resp = self.submit(captchaId=challenge['id'], captcha=answer)
        self.assertEqual(resp.status_code, 200)

        resp = self.submit(captchaId=challenge['id'], captcha=answer)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()['error'], 'Invalid or expired captcha')

    def test_wrong_answer_consumes_challenge(self):
        challenge = self.client.get('/api/captcha').json()
        answer = _solve(challenge['question'])
        self.assertEqual(self.submit(captchaId=challenge['id'], captcha=answer + 1).status_code, 400)
        self.assertEqual(self.submit(captchaId=challenge['id'], captcha=answer).status_code, 400)
        self.assertNotIn(challenge['id'], self.app.state.captchas)


class TestRequiredCaptcha(ApiTestCase):
    config_overrides = {'require_captcha': True}

    def test_missing_captcha_rejected(self):
        resp = self.submit()
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()['error'], 'Captcha is required')


class TestCaptchaEndpointLimits(ApiTestCase):
    config_overrides = {'captcha_rate_limit': '3 per minute'}

    def test_captcha_requests_rate_limited(self):
        for i in range(3):
            self.assertEqual(self.client.get('/api/captcha').status_code, 200, f"request {i + 1}")
        resp = self.client.get('/api/captcha')
        self.assertEqual(resp.status_code, 429)
        self.assertFalse(resp.json()['success'])


class TestServerCaptchaThreads(ApiTestCase):

    def test_challenges_do_not_start_threads(self):
        with TestClient(self.app) as client:
            self.assertEqual(client.get('/api/captcha').status_code, 200)
            before = threading.active_count()
            for _ in range(25):
                self.assertEqual(client.get('/api/captcha').status_code, 200)
            self.assertEqual(threading.active_count(), before)
            self.assertEqual(len(self.app.state.captchas), 26)


class TestCaptchaRegistry(unittest.IsolatedAsyncioTestCase):

    async def test_expires_after_ttl(self):
        from api.captcha import CaptchaRegistry
        registry = CaptchaRegistry(ttl_seconds=0.01)
        challenge = registry.create()
        self.assertIn(challenge.id, registry)
        await asyncio.sleep(0.05)
        self.assertNotIn(challenge.id, registry)
        self.assertFalse(registry.validate(challenge.id, str(challenge.answer)))

    async def test_validate_cancels_expiry(self):
        from api.captcha import CaptchaRegistry
        registry = CaptchaRegistry(ttl_seconds=600)
        challenge = registry.create()
        handle = registry._handles[challenge.id]
        self.assertTrue(registry.validate(challenge.id, str(challenge.answer)))
        self.assertTrue(handle.cancelled())
        self.assertEqual(len(registry), 0)

    async def test_deadline_checked_on_validate(self):
        from api.captcha import CaptchaRegistry
        now = [1000.0]
        registry = CaptchaRegistry(ttl_seconds=600, clock=lambda: now[0])
        challenge = registry.create()
        now[0] += 601
        self.assertFalse(registry.validate(challenge.id, str(challenge.answer)))
        self.assertEqual(len(registry), 0)

    async def test_many_challenges_start_no_threads(self):
        from api.captcha import CaptchaRegistry
        registry = CaptchaRegistry()
        before = threading.active_count()
        for _ in range(200):
            registry.create()
        self.assertEqual(threading.active_count(), before)
        self.assertEqual(len(registry), 200)
        registry.clear()
        self.assertEqual(len(registry), 0)


# ============================================================
# Admin endpoints
# ============================================================

class TestAdminEndpoints(ApiTestCase):

    def test_requires_key(self):
        for key in (None, 'wrong'):
            params = {'key': key} if key else {}
            resp = self.client.get('/api/admin/messages', params=params)
            self.assertEqual(resp.status_code, 401)
            self.assertEqual(resp.json(), {'success': False, 'error': 'Unauthorized'})
        resp = self.client.post('/api/admin/messages/1/read', params={'key': 'wrong'})
        self.assertEqual(resp.status_code, 401)
        resp = self.client.delete('/api/admin/messages', params={'key': 'wrong'})
        self.assertEqual(resp.status_code, 401)

    def test_round_trip_mark_as_read(self):
        message_id = self.submit().json()['id']

        resp = self.client.get('/api/admin/messages', params={'key': ADMIN_KEY})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertTrue(data['success'])
        self.assertEqual(data['total'], 1)
        message = data['messages'][0]
        self.assertEqual(message['id'], message_id)
        self.assertEqual(message['name'], 'Ana Popescu')
        self.assertEqual(message['email'], 'ana@example.com')
        self.assertEqual(message['message'], VALID['message'])
        self.assertEqual(message['status'], 'new')
        self.assertIsNone(message['readAt'])

        resp = self.client.post(f'/api/admin/messages/{message_id}/read', params={'key': ADMIN_KEY})
        self.assertEqual(resp.json(), {'success': True, 'message': 'Message marked as read'})

        message = self.client.get('/api/admin/messages', params={'key': ADMIN_KEY}).json()['messages'][0]
        self.assertEqual(message['status'], 'read')
        self.assertIsNotNone(message['readAt'])

    def test_newest_first(self):
        for name in ('First', 'Second', 'Third'):
            self.submit(name=name)
        names = [m['name'] for m in self.client.get(
            '/api/admin/messages', params={'key': ADMIN_KEY}).json()['messages']]
        self.assertEqual(names, ['Third', 'Second', 'First'])

    def test_mark_unknown_message(self):
        resp = self.client.post('/api/admin/messages/123/read', params={'key': ADMIN_KEY})
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {'success': False, 'error': 'Message not found'})

    def test_clear(self):
        self.submit()
        self.submit(name='Bob Smith')
        resp = self.client.delete('/api/admin/messages', params={'key': ADMIN_KEY})
        self.assertEqual(resp.json()['deleted'], 2)
        self.assertEqual(self.client.get(
            '/api/admin/messages', params={'key': ADMIN_KEY}).json()['total'], 0)

    def test_export(self):
        self.submit()
        resp = self.client.get('/api/admin/messages/export', params={'key': ADMIN_KEY, 'format': 'csv'})
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.headers['content-type'].startswith('text/csv'))
        self.assertIn('attachment; filename="webfirm-messages-', resp.headers['content-disposition'])
        self.assertTrue(resp.text.startswith('ID,Name,Email,Message,Timestamp,Status,Read At\n'))

        resp = self.client.get('/api/admin/messages/export', params={'key': ADMIN_KEY})
        self.assertEqual(resp.json()[0]['email'], 'ana@example.com')

        resp = self.client.get('/api/admin/messages/export', params={'key': ADMIN_KEY, 'format': 'xml'})
        self.assertEqual(resp.status_code, 400)

    def test_generated_key_when_unset(self):
        with patch.dict(os.environ, {'WEBFIRM_ADMIN_KEY': ''}):
            app = create_app({'contact': {'messages_file': self.messages_file}})
        key = app.state.config['contact']['admin_key']
        self.assertEqual(len(key), 32)
        client = TestClient(app)
        self.assertEqual(client.get('/api/admin/messages', params={'key': key}).status_code, 200)


# ============================================================
# i18n assets and SPA shell
# ============================================================

class TestI18nAndPages(ApiTestCase):

    def test_languages(self):
        data = self.client.get('/api/i18n/languages').json()
        self.assertEqual(data['languages'], ['en', 'ro', 'uk', 'de', 'fr'])
        self.assertEqual(data['default'], 'en')

    def test_translation_assets(self):
        resp = self.client.get('/assets/i18n/ro.json')
        self.assertEqual(resp.status_code, 200)
        self.assertIn('contact', resp.json())
        resp = self.client.get('/assets/i18n/seo/fr.json')
        self.assertEqual(resp.status_code, 200)
        self.assertIn('meta', resp.json())
        self.assertEqual(self.client.get('/assets/i18n/xx.json').status_code, 404)

    def test_home_shell_has_localized_head(self):
        resp = self.client.get('/', headers={'accept-language': 'de-DE,de;q=0.9'})
        self.assertEqual(resp.status_code, 200)
        html = resp.text
        self.assertIn('<html lang="de">', html)
        self.assertIn('property="og:locale" content="de_DE"', html)
        self.assertIn('hreflang="x-default"', html)
        self.assertIn('rel="canonical" href="https://webfirmsolutions.com/"', html)
        self.assertIn('data-schema="organization"', html)

    def test_lang_query_sets_cookie(self):
        resp = self.client.get('/?lang=ro')
        self.assertIn('<html lang="ro">', resp.text)
        self.assertEqual(resp.cookies.get('webfirm_lang'), 'ro')

    def test_admin_page_not_indexed(self):
        html = self.client.get('/admin').text
        self.assertIn('name="robots" content="noindex, nofollow"', html)

    def test_retired_pages_redirect(self):
        for path in ('/services', '/portfolio', '/404', '/does-not-exist'):
            resp = self.client.get(path, follow_redirects=False)
            self.assertEqual(resp.status_code, 302, path)
            self.assertEqual(resp.headers['location'], '/')

    def test_unknown_api_path_is_json_404(self):
        resp = self.client.get('/api/nope')
        self.assertEqual(resp.status_code, 404)
        self.assertFalse(resp.json()['success'])


if __name__ == '__main__':
    unittest.main()
