from typing import Generic, TypeVar, List, Optional
from pydantic import BaseModel, EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from src.core.errors import ValidationError

T = TypeVar("T")

_EMAIL = TypeAdapter(EmailStr)


def normalize_email(value: str) -> str:
    """Validate with ``EmailStr`` and lower-case; raises ``ValidationError``."""
    try:
        return _EMAIL.validate_python(value.strip()).lower()
    except PydanticValidationError:
        raise ValidationError("Invalid email format")


class StandardResponse(BaseModel, Generic[T]):
    """Standard API response envelope."""
    status: str = "success"
    data: Optional[T] = None
    message: Optional[str] = None

class PaginatedResponse(BaseModel, Generic[T]):
    """Page-numbered API response envelope."""
    data: List[T]
    total: int
    page: int = 1
    limit: int
    status: str = "success"
