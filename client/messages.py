"""
Contact message service client.

Talks to the contact backend over HTTP and keeps a bounded local backup of
submitted messages in client storage.
"""

import io
import json
import logging
from datetime import datetime, timezone

import requests

from client.storage import MESSAGES_BACKUP_KEY

logger = logging.getLogger(__name__)

MAX_LOCAL_MESSAGES = 100
REQUEST_TIMEOUT = 10

CSV_HEADERS = ['ID', 'Name', 'Email', 'Message', 'Timestamp', 'Status', 'Read At']


class MessageServiceError(Exception):
    """A request to the contact backend failed."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


def _now_iso():
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


# --- LOCAL BACKUP ---

def local_messages(storage):
    """Messages backed up in client storage, oldest first."""
    messages = storage.get(MESSAGES_BACKUP_KEY, [])
    return messages if isinstance(messages, list) else []


def save_message_locally(storage, form, message_id):
    """Append a message to the local backup, keeping the newest 100."""
    messages = local_messages(storage)
    messages.append({
        'id': message_id,
        'name': form.get('name', ''),
        'email': form.get('email', ''),
        'message': form.get('message', ''),
        'timestamp': _now_iso(),
        'status': 'new',
    })
    storage.set(MESSAGES_BACKUP_KEY, messages[-MAX_LOCAL_MESSAGES:])
    logger.info(f"Message saved to local storage: {message_id}")


def clear_local_messages(storage):
    storage.remove(MESSAGES_BACKUP_KEY)


# --- EXPORT ---

def export_json(messages):
    return json.dumps(messages, ensure_ascii=False, indent=2)


def export_csv(messages):
    """CSV with a header row; name and message are always quoted."""
    out = io.StringIO()
    out.write(','.join(CSV_HEADERS) + '\n')
    for msg in messages:
        name = (msg.get('name') or '').replace('"', '""')
        body = (msg.get('message') or '').replace('"', '""')
        out.write(','.join([
            str(msg.get('id', '')),
            f'"{name}"',
            msg.get('email', ''),
            f'"{body}"',
            msg.get('timestamp', ''),
            msg.get('status', ''),
            msg.get('readAt') or '',
        ]) + '\n')
    return out.getvalue()


def export_filename(extension, today=None):
    today = today or datetime.now(timezone.utc)
    return f"webfirm-messages-{today.strftime('%Y-%m-%d')}.{extension}"


# --- HTTP CLIENT ---

class MessageClient:
    """HTTP client for the ``/api`` endpoints of the contact backend."""

    def __init__(self, api_base_url, session=None, timeout=REQUEST_TIMEOUT):
        self.api_base_url = api_base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method, path, **kwargs):
        url = f'{self.api_base_url}{path}'
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise MessageServiceError(f"Client error: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            error = data.get('error') if isinstance(data, dict) else None
            message = error or f"Server error: {response.status_code} {response.reason}"
            logger.error(f"{method} {path} failed: {message}")
            raise MessageServiceError(message, status_code=response.status_code)
        if data is None:
            raise MessageServiceError(f"Invalid JSON from {path}", status_code=response.status_code)
        return data

    def submit(self, form, captcha_id=None, captcha=None):
        """POST a contact message; returns ``{success, message, id}``."""
        payload = {
            'name': form.get('name', ''),
            'email': form.get('email', ''),
            'message': form.get('message', ''),
        }
        if captcha_id is not None:
            payload['captchaId'] = captcha_id
            payload['captcha'] = captcha
        result = self._request('POST', '/contact', json=payload)
        logger.info(f"Message submitted successfully: {result.get('id')}")
        return result

    def fetch_captcha(self):
        """GET a server-held challenge: ``{id, question}``."""
        return self._request('GET', '/captcha')

    def health(self):
        return self._request('GET', '/health')

    def list_messages(self, admin_key):
        return self._request('GET', '/admin/messages', params={'key': admin_key})

    def mark_as_read(self, message_id, admin_key):
        return self._request('POST', f'/admin/messages/{message_id}/read', params={'key': admin_key})

    def clear_messages(self, admin_key):
        return self._request('DELETE', '/admin/messages', params={'key': admin_key})

    def export_messages(self, admin_key, format='json'):
        """Download the server-side export; returns the file body as text."""
        url = f'{self.api_base_url}/admin/messages/export'
        try:
            response = self.session.get(
                url, params={'key': admin_key, 'format': format}, timeout=self.timeout)
        except requests.RequestException as e:
            raise MessageServiceError(f"Client error: {e}") from e
        if not response.ok:
            raise MessageServiceError(
                f"Server error: {response.status_code} {response.reason}",
                status_code=response.status_code)
        return response.text
