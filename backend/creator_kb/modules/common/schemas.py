"""Shared Pydantic schema pieces."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class TimestampSchema(BaseModel):
    """Creation and last-update timestamps exposed on read schemas."""

    created_at: datetime
    updated_at: Optional[datetime] = None
