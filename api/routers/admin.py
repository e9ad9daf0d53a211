"""
Admin router: list, mark-read, clear and export contact messages.

Every endpoint requires the shared secret as ``?key=``.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import Response

from api.auth import require_admin_key
from api.models.contact import ClearResponse, MarkReadResponse, MessagesResponse
from api.store import MessageStoreError, run_sync
from client.messages import export_csv, export_filename, export_json

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/admin/messages",
    tags=["admin"],
    dependencies=[Depends(require_admin_key)],
)

EXPORT_MEDIA_TYPES = {
    'json': 'application/json',
    'csv': 'text/csv',
}


@router.get("", response_model=MessagesResponse)
async def list_messages(request: Request):
    """All messages, newest first."""
    messages = await run_sync(request.app.state.messages.list_newest_first)
    return MessagesResponse(messages=messages, total=len(messages))


@router.get("/export")
async def export_messages(request: Request, format: str = Query('json')):
    """Download every message as a JSON or CSV file."""
    if format not in EXPORT_MEDIA_TYPES:
        raise HTTPException(status_code=400, detail=f"Unsupported export format '{format}'")
    messages = await run_sync(request.app.state.messages.list_newest_first)
    body = export_json(messages) if format == 'json' else export_csv(messages)
    logger.info(f"Exported {len(messages)} messages as {format}")
    return Response(
        content=body,
        media_type=EXPORT_MEDIA_TYPES[format],
        headers={'Content-Disposition': f'attachment; filename="{export_filename(format)}"'},
    )


@router.post("/{message_id}/read", response_model=MarkReadResponse)
async def mark_as_read(request: Request, message_id: str):
    try:
        record = await run_sync(request.app.state.messages.mark_as_read, message_id)
    except MessageStoreError as e:
        logger.error(f"Mark as read error: {e}")
        raise HTTPException(status_code=500, detail="Failed to update message")
    if record is None:
        raise HTTPException(status_code=404, detail="Message not found")
    return MarkReadResponse(message='Message marked as read')


@router.delete("", response_model=ClearResponse)
async def clear_messages(request: Request):
    try:
        deleted = await run_sync(request.app.state.messages.clear)
    except MessageStoreError as e:
        logger.error(f"Clear messages error: {e}")
        raise HTTPException(status_code=500, detail="Failed to clear messages")
    logger.info(f"Cleared {deleted} messages")
    return ClearResponse(message='All messages deleted', deleted=deleted)
