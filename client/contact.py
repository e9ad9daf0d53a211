"""
Contact form pipeline.

    idle -> challenge_generated -> validating -> submitting -> success | error

Checks run in a fixed order: honeypot, field validation, CAPTCHA, network.
Only validation problems and the final outcome become notifications; a
filled honeypot is dropped without any feedback.
"""

import logging
import re
import secrets

from client.captcha import CaptchaService, parse_answer
from client.messages import MessageServiceError, save_message_locally

logger = logging.getLogger(__name__)

IDLE = 'idle'
CHALLENGE_GENERATED = 'challenge_generated'
VALIDATING = 'validating'
SUBMITTING = 'submitting'
SUCCESS = 'success'
ERROR = 'error'

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
MIN_NAME_LENGTH = 2
MIN_MESSAGE_LENGTH = 10

HONEYPOT_FIELD = 'website'


class Notification:
    """Transient message shown to the visitor (toast)."""
    __slots__ = ('level', 'key', 'text')

    def __init__(self, level, key, text):
        self.level = level
        self.key = key
        self.text = text

    def __repr__(self):
        return f'Notification({self.level!r}, {self.key!r})'


class SubmissionResult:
    """Outcome of one ``submit`` call.

    status is one of: rejected, invalid, captcha_failed, sent,
    saved_locally, failed.
    """
    __slots__ = ('status', 'notification', 'message_id')

    def __init__(self, status, notification=None, message_id=None):
        self.status = status
        self.notification = notification
        self.message_id = message_id

    @property
    def ok(self):
        return self.status in ('sent', 'saved_locally')


def validate_fields(form):
    """Return the translation key of the first field problem, or None."""
    name = (form.get('name') or '').strip()
    email = (form.get('email') or '').strip()
    message = (form.get('message') or '').strip()

    if not name or not email or not message:
        return 'contact.notifications.required'
    if len(name) < MIN_NAME_LENGTH:
        return 'contact.notifications.nameTooShort'
    if not EMAIL_PATTERN.match(email):
        return 'contact.notifications.emailInvalid'
    if len(message) < MIN_MESSAGE_LENGTH:
        return 'contact.notifications.messageTooShort'
    return None


class ContactPipeline:
    """Drives one contact form.

    Args:
        translate: ``translate(key_path)`` used for notification text
        storage: Client storage holding the message backup
        message_client: MessageClient, or None when no backend is configured
        captcha: CaptchaService for locally generated challenges
        server_captcha: Ask the backend for challenges instead of generating them
    """

    def __init__(self, translate, storage, message_client=None, captcha=None,
                 server_captcha=False):
        self.translate = translate
        self.storage = storage
        self.message_client = message_client
        self.captcha = captcha or CaptchaService()
        self.server_captcha = server_captcha and message_client is not None
        self.state = IDLE
        self.challenge = None
        self._challenge_is_remote = False
        self._listeners = []

    def subscribe(self, callback):
        """Call ``callback(state)`` on every state change."""
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)
        return unsubscribe

    def _set_state(self, state):
        logger.debug(f"Contact form: {self.state} -> {state}")
        self.state = state
        for callback in list(self._listeners):
            callback(state)

    def _notify(self, level, key):
        return Notification(level, key, self.translate(key))

    # --- CHALLENGE ---

    def new_challenge(self):
        """Replace the current challenge; returns its public view ``{id, question}``."""
        self.challenge = None
        if self.server_captcha:
            try:
                self.challenge = self.message_client.fetch_captcha()
                self._challenge_is_remote = True
            except MessageServiceError as e:
                logger.warning(f"Server CAPTCHA unavailable, generating locally: {e}")
        if self.challenge is None:
            self.challenge = self.captcha.generate_challenge().public()
            self._challenge_is_remote = False
        self._set_state(CHALLENGE_GENERATED)
        return self.challenge

    def open(self):
        return self.new_challenge()

    def close(self):
        self.captcha.clear_challenge()
        self.challenge = None
        self._set_state(IDLE)

    # --- SUBMIT ---

    def submit(self, form):
        """Run the pipeline for ``form``.

        ``form`` holds name, email, message, captcha and the honeypot field.
        """
        if (form.get(HONEYPOT_FIELD) or '').strip():
            logger.warning("Bot detected via honeypot field")
            return SubmissionResult('rejected')

        if self.challenge is None:
            self.new_challenge()

        self._set_state(VALIDATING)
        problem = validate_fields(form)
        if problem:
            self._set_state(CHALLENGE_GENERATED)
            return SubmissionResult('invalid', self._notify('warning', problem))

        answer = form.get('captcha')
        if not self._check_captcha(answer):
            self.new_challenge()
            return SubmissionResult(
                'captcha_failed', self._notify('warning', 'contact.notifications.captcha'))

        payload = {
            'name': form['name'].strip(),
            'email': form['email'].strip(),
            'message': form['message'].strip(),
        }
        self._set_state(SUBMITTING)

        if self.message_client is None:
            message_id = secrets.token_hex(8)
            save_message_locally(self.storage, payload, message_id)
            self._finish(SUCCESS)
            return SubmissionResult(
                'saved_locally', self._notify('info', 'contact.notifications.savedLocally'),
                message_id)

        try:
            if self._challenge_is_remote:
                response = self.message_client.submit(
                    payload, captcha_id=self.challenge['id'], captcha=answer)
            else:
                response = self.message_client.submit(payload)
        except MessageServiceError as e:
            logger.error(f"Message submission failed: {e}")
            save_message_locally(self.storage, payload, secrets.token_hex(8))
            self._set_state(ERROR)
            self.new_challenge()
            return SubmissionResult('failed', self._notify('error', 'contact.notifications.failed'))

        message_id = response.get('id')
        save_message_locally(self.storage, payload, message_id)
        self._finish(SUCCESS)
        return SubmissionResult(
            'sent', self._notify('success', 'contact.notifications.success'), message_id)

    def _check_captcha(self, answer):
        if self.challenge is None:
            return False
        if self._challenge_is_remote:
            # Checked by the backend on submit
            return parse_answer(answer) is not None
        return self.captcha.validate_answer(answer, self.challenge['id'])

    def _finish(self, state):
        self._set_state(state)
        self.challenge = None
        self._set_state(IDLE)
