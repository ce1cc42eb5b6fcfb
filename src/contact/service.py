"""Public service interface for the Contact module."""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import select

from src.contact.database import ContactMessage
from src.core.errors import NotFoundError, ValidationError
from src.core.gateway import Gateway
from src.core.models import ContactStatus
from src.core.schemas import normalize_email

logger = logging.getLogger(__name__)

THANK_YOU = "Thank you for your message! We'll get back to you within 24 hours."


class ContactForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    inquiry_type: Optional[str] = Field(None, alias="inquiryType")
    message: Optional[str] = None


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


async def submit_contact_form(gateway: Gateway, form: ContactForm, user_id: Optional[str] = None) -> Dict[str, Any]:
    name = _clean(form.name)
    email = _clean(form.email)
    message = _clean(form.message)
    inquiry_type = _clean(form.inquiry_type)

    if not (name and email and message and inquiry_type):
        raise ValidationError("Missing required fields")
    email = normalize_email(email)

    record = ContactMessage(
        name=name,
        email=email,
        company=_clean(form.company),
        phone=_clean(form.phone),
        inquiry_type=inquiry_type,
        message=message,
        user_id=user_id,
        status=ContactStatus.NEW.value,
        created_at=datetime.utcnow(),
    )
    async with gateway.session() as session:
        session.add(record)
        await session.flush()
        message_id = record.id

    logger.info(f"Contact message {message_id} received ({inquiry_type})")
    return {"success": True, "message_id": message_id, "message": THANK_YOU}


async def list_contact_messages(
    gateway: Gateway,
    status: Optional[str] = None,
    inquiry_type: Optional[str] = None,
    limit: int = 100,
    offset: int = 0,
) -> List[Dict[str, Any]]:
    stmt = select(ContactMessage).order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
    if status:
        stmt = stmt.where(ContactMessage.status == status)
    if inquiry_type:
        stmt = stmt.where(ContactMessage.inquiry_type == inquiry_type)
    stmt = stmt.offset(offset).limit(limit)

    async with gateway.session() as session:
        result = await session.execute(stmt)
        return [m.to_dict() for m in result.scalars().all()]


async def update_message_status(gateway: Gateway, message_id: int, status: str) -> Dict[str, Any]:
    try:
        new_status = ContactStatus(status)
    except ValueError:
        raise ValidationError(f"Invalid status: {status}")

    async with gateway.session() as session:
        record = await session.get(ContactMessage, message_id)
        if record is None:
            raise NotFoundError(f"Contact message {message_id} not found")
        record.status = new_status.value
        return record.to_dict()
