"""
Per-IP rate limiting for the contact and CAPTCHA endpoints (slowapi, in-memory storage).
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

logger = logging.getLogger(__name__)

DEFAULT_CONTACT_LIMIT = '10 per 15 minutes'
DEFAULT_CAPTCHA_LIMIT = '30 per minute'
RATE_LIMIT_MESSAGE = 'Too many requests from this IP, please try again later.'

limiter = Limiter(key_func=get_remote_address)

_limits = {'contact': DEFAULT_CONTACT_LIMIT, 'captcha': DEFAULT_CAPTCHA_LIMIT}


def set_contact_limit(value):
    _limits['contact'] = value or DEFAULT_CONTACT_LIMIT


def set_captcha_limit(value):
    _limits['captcha'] = value or DEFAULT_CAPTCHA_LIMIT


def contact_limit():
    """Current limit string for POST /api/contact."""
    return _limits['contact']


def captcha_limit():
    return _limits['captcha']


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    logger.warning(f"Rate limit exceeded for {get_remote_address(request)} on {request.url.path}")
    return JSONResponse(
        status_code=429,
        content={'success': False, 'error': RATE_LIMIT_MESSAGE},
    )
