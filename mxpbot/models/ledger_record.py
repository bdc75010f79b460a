from datetime import datetime

from beanie import Document, Indexed
from pydantic import Field


class LedgerRecord(Document):
    """Point balance per platform user; created on first read or first adjustment."""
    user_id: Indexed(str, unique=True)
    user_name: str | None = None  # last observed display name, never a key
    points: int = 0  # no floor or ceiling
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "users"
