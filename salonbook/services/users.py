"""Local mirror of identity-provider accounts."""

import hashlib
import hmac
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.core.errors import ValidationError
from salonbook.models.user import User

logger = logging.getLogger(__name__)


def verify_signature(payload_body: bytes, signature_header: str | None, secret: str) -> bool:
    """Check an ``sha256=<hex>`` HMAC header against the raw request body."""
    if not signature_header or not secret:
        return False
    digest = hmac.new(secret.encode(), msg=payload_body, digestmod=hashlib.sha256).hexdigest()
    return hmac.compare_digest("sha256=" + digest, signature_header)


async def upsert_user_from_identity(db: AsyncSession, data: dict) -> User:
    """Create the local user for a ``user.created`` event; existing rows are kept as-is."""
    if not isinstance(data, dict):
        raise ValidationError("Event data must be a JSON object", field="data")
    external_id = data.get("id")
    if not external_id or not isinstance(external_id, str):
        raise ValidationError("Missing user id in payload", field="data.id")

    emails = data.get("email_addresses") or []
    if not isinstance(emails, list) or not all(isinstance(e, dict) for e in emails):
        raise ValidationError("email_addresses must be a list of objects", field="data.email_addresses")
    first_name = data.get("first_name")
    if first_name is not None and not isinstance(first_name, str):
        raise ValidationError("first_name must be a string", field="data.first_name")

    result = await db.execute(select(User).where(User.external_id == external_id))
    user = result.scalar_one_or_none()
    if user:
        return user

    user = User(
        external_id=external_id,
        email=(emails[0].get("email_address") if emails else None) or "",
        name=first_name or "",
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # Duplicate delivery of the same event raced us
        await db.rollback()
        result = await db.execute(select(User).where(User.external_id == external_id))
        return result.scalar_one()

    logger.info("User created from identity webhook: external_id=%s", external_id)
    return user
