"""
Contact router: health check, message submission and server CAPTCHA.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError

from api.models.contact import CaptchaResponse, ContactRequest, ContactResponse, HealthResponse
from api.rate_limit import captcha_limit, contact_limit, limiter
from api.store import MessageStoreError, now_iso, run_sync

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["contact"])

MIN_NAME_LENGTH = 2
MIN_MESSAGE_LENGTH = 10
FORM_CONTENT_TYPES = ('application/x-www-form-urlencoded', 'multipart/form-data')


def validate_contact(body: ContactRequest):
    """Return the first validation error for a submission, or None."""
    if not isinstance(body.name, str) or len(body.name.strip()) < MIN_NAME_LENGTH:
        return 'Name must be at least 2 characters long'
    if not isinstance(body.email, str) or '@' not in body.email:
        return 'Valid email address is required'
    if not isinstance(body.message, str) or len(body.message.strip()) < MIN_MESSAGE_LENGTH:
        return 'Message must be at least 10 characters long'
    return None


async def read_contact_body(request: Request) -> ContactRequest:
    """Parse a JSON or form-encoded submission into a ContactRequest."""
    content_type = request.headers.get('content-type', '')
    try:
        if content_type.startswith(FORM_CONTENT_TYPES):
            data = dict(await request.form())
        else:
            data = await request.json()
        return ContactRequest.model_validate(data)
    except (ValueError, ValidationError):
        raise HTTPException(status_code=400, detail="Invalid request body")


@router.get("/health", response_model=HealthResponse)
async def health(request: Request):
    return HealthResponse(
        status='OK',
        timestamp=now_iso(),
        service=request.app.state.config['site']['service'],
    )


@router.get("/captcha", response_model=CaptchaResponse)
@limiter.limit(captcha_limit)
async def new_captcha(request: Request):
    """Issue a challenge held by the server (answer never leaves it)."""
    challenge = request.app.state.captchas.create()
    return CaptchaResponse(**challenge.public())


@router.post("/contact", response_model=ContactResponse)
@limiter.limit(contact_limit)
async def submit_contact(request: Request, body: ContactRequest = Depends(read_contact_body)):
    """Validate and store a contact form submission."""
    error = validate_contact(body)
    if error:
        raise HTTPException(status_code=400, detail=error)

    contact_config = request.app.state.config['contact']
    if body.captchaId:
        if not request.app.state.captchas.validate(body.captchaId, body.captcha):
            raise HTTPException(status_code=400, detail="Invalid or expired captcha")
    elif contact_config.get('require_captcha'):
        raise HTTPException(status_code=400, detail="Captcha is required")

    name = body.name.strip()
    email = body.email.strip().lower()
    try:
        record = await run_sync(
            request.app.state.messages.add,
            name, email, body.message.strip(),
            ip=request.client.host if request.client else None,
            user_agent=request.headers.get('user-agent'),
        )
    except MessageStoreError as e:
        logger.error(f"Contact form error: {e}")
        raise HTTPException(status_code=500, detail="Failed to save message")

    logger.info(f"New message received from {name} ({email}) at {record['timestamp']}")
    return ContactResponse(message='Message received successfully', id=record['id'])
