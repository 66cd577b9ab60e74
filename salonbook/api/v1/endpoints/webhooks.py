"""Identity provider webhook handler.

Thin HTTP layer; user mirroring lives in salonbook.services.users.
"""

import json
import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.core.config import settings
from salonbook.core.database import get_db
from salonbook.core.errors import AuthorizationError, ValidationError
from salonbook.services.users import upsert_user_from_identity, verify_signature

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/identity")
async def identity_webhook(request: Request, db: AsyncSession = Depends(get_db)):
    """Receive account events; only ``user.created`` is acted on."""
    body = await request.body()

    if settings.IDENTITY_WEBHOOK_SECRET:
        signature = request.headers.get("X-Webhook-Signature")
        if not verify_signature(body, signature, settings.IDENTITY_WEBHOOK_SECRET):
            raise AuthorizationError("Invalid webhook signature")

    try:
        payload = json.loads(body or b"{}")
    except json.JSONDecodeError:
        raise ValidationError("Body must be JSON")
    if not isinstance(payload, dict):
        raise ValidationError("Body must be a JSON object")

    event = payload.get("type")
    logger.info("Identity event: %s", event)
    if event != "user.created":
        return {"message": "Ignored"}

    data = payload.get("data") or {}
    if not isinstance(data, dict):
        raise ValidationError("Event data must be a JSON object", field="data")

    user = await upsert_user_from_identity(db, data)
    return {"success": True, "userId": user.id}
