"""
Arithmetic CAPTCHA challenges.

The generator is shared by the client (one challenge in memory) and the
server registry (many challenges keyed by id, see ``api.captcha``).
"""

import logging
import operator
import random
import secrets

logger = logging.getLogger(__name__)

OPERATIONS = (
    ('+', operator.add),
    ('-', operator.sub),
    ('×', operator.mul),
)


class CaptchaChallenge:
    __slots__ = ('question', 'answer', 'id')

    def __init__(self, question, answer, id):
        self.question = question
        self.answer = answer
        self.id = id

    def public(self):
        """Challenge without the answer."""
        return {'id': self.id, 'question': self.question}


def generate_challenge(rng=random):
    """Generate a ``"a op b = ?"`` challenge with a non-negative integer answer."""
    symbol, func = rng.choice(OPERATIONS)
    a = rng.randint(1, 10)
    b = rng.randint(1, 10)
    if symbol == '-' and a < b:
        a, b = b, a
    elif symbol == '×':
        a = rng.randint(1, 5)
        b = rng.randint(1, 5)
    return CaptchaChallenge(f'{a} {symbol} {b} = ?', func(a, b), secrets.token_hex(12))


def parse_answer(answer):
    """Parse user input as an integer; None when empty or not a number."""
    text = str(answer).strip() if answer is not None else ''
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        return None


class CaptchaService:
    """Holds the single challenge currently shown to the visitor."""

    def __init__(self, rng=random):
        self._rng = rng
        self._current = None

    def generate_challenge(self):
        self._current = generate_challenge(self._rng)
        return self._current

    def current_challenge(self):
        return self._current.public() if self._current else None

    def clear_challenge(self):
        self._current = None

    def validate_answer(self, answer, challenge_id):
        """Check ``answer`` against the current challenge.

        The challenge is cleared after any attempt, right or wrong.
        """
        challenge = self._current
        if challenge is None or challenge.id != challenge_id:
            logger.warning("Invalid CAPTCHA challenge id")
            return False
        self._current = None

        value = parse_answer(answer)
        if value is None:
            logger.debug("Empty or non-numeric CAPTCHA answer")
            return False
        return value == challenge.answer
