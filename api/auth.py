"""
Shared-secret authentication for the admin endpoints.

The admin panel passes the key as a ``?key=`` query parameter; it must match
the configured secret exactly.
"""

import hmac
from typing import Optional

from fastapi import HTTPException, Query, Request, status


def verify_admin_key(key: Optional[str], expected: str) -> bool:
    """Constant-time comparison of a supplied key against the secret."""
    if not key or not expected:
        return False
    return hmac.compare_digest(key.encode('utf-8'), expected.encode('utf-8'))


async def require_admin_key(request: Request, key: Optional[str] = Query(None)) -> str:
    """Require the admin shared secret. Raises 401 if missing or wrong."""
    expected = request.app.state.config['contact']['admin_key']
    if not verify_admin_key(key, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return key
