from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, timezone
from enum import Enum


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ContactStatus(str, Enum):
    NEW = "new"


class ContactCreate(BaseModel):
    name: str
    email: str
    subject: str
    message: str


class ContactInDB(ContactCreate):
    status: ContactStatus = Field(default=ContactStatus.NEW, validate_default=True)
    # Stored as createdAt, the key existing portfolio databases already use
    created_at: datetime = Field(default_factory=utc_now, serialization_alias="createdAt")

    model_config = ConfigDict(use_enum_values=True)
