"""Event data model for trackl."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class Event(BaseModel):
    """A dated item tracked over the window [reference_date, date]."""

    namespace: str = Field(..., description="Namespace the event belongs to")
    id: Optional[str] = Field(None, description="Event identifier (assigned by the store)")
    icon: str = Field(..., description="Short icon, usually an emoji")
    date: datetime = Field(..., description="Target date / deadline (naive UTC)")
    reference_date: datetime = Field(..., description="Start of the tracking window (naive UTC)")
