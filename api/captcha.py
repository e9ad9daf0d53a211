"""
Server-side CAPTCHA registry.

Challenges are kept in memory keyed by id. Each entry gets an event-loop
timer (``loop.call_later``) that deletes it after the TTL, plus a deadline
checked on validation in case the loop that scheduled it is gone.
Validation removes the entry immediately, so an id can be checked at most
once.
"""

import asyncio
import logging
import time

from client.captcha import generate_challenge, parse_answer

logger = logging.getLogger(__name__)

CAPTCHA_TTL_SECONDS = 600


class CaptchaRegistry:

    def __init__(self, ttl_seconds=CAPTCHA_TTL_SECONDS, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._challenges = {}
        self._deadlines = {}
        self._handles = {}

    def __len__(self):
        return len(self._challenges)

    def __contains__(self, challenge_id):
        return challenge_id in self._challenges

    def create(self):
        """Register a new challenge and return it.

        Must be called from a running event loop (the ``/api/captcha`` route).
        """
        loop = asyncio.get_running_loop()
        challenge = generate_challenge()
        self._challenges[challenge.id] = challenge
        self._deadlines[challenge.id] = self.clock() + self.ttl_seconds
        self._handles[challenge.id] = loop.call_later(
            self.ttl_seconds, self._expire, challenge.id)
        return challenge

    def _expire(self, challenge_id):
        removed = self._challenges.pop(challenge_id, None)
        self._deadlines.pop(challenge_id, None)
        self._handles.pop(challenge_id, None)
        if removed is not None:
            logger.debug(f"CAPTCHA {challenge_id} expired")

    def validate(self, challenge_id, answer):
        """Check ``answer`` and remove the challenge whether or not it matches."""
        challenge = self._challenges.pop(challenge_id, None)
        deadline = self._deadlines.pop(challenge_id, None)
        handle = self._handles.pop(challenge_id, None)
        if handle is not None:
            handle.cancel()
        if challenge is None or self.clock() >= deadline:
            return False
        value = parse_answer(answer)
        return value is not None and value == challenge.answer

    def clear(self):
        handles = list(self._handles.values())
        self._challenges.clear()
        self._deadlines.clear()
        self._handles.clear()
        for handle in handles:
            handle.cancel()
