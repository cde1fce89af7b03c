# kushon/models/notification.py

from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional, List

class NotificationPreferenceStatus(BaseModel):
    email_on_new_volume: bool = False

class NotificationPreferenceRecord(BaseModel):
    user_id: int
    title_id: int
    email_on_new_volume: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class Subscriber(BaseModel):
    """A recipient of new-volume emails for one title"""
    email: str
    name: str
    title_name: str

class FanoutReport(BaseModel):
    title_id: int
    volume_number: int
    attempted: int = 0
    delivered: int = 0
    failed: List[str] = []
