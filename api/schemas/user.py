# api/schemas/user.py
from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict

from kushon.models.progress import VolumeProgressUpdate

class UserBase(BaseModel):
    name: str
    email: str

class UserCreate(UserBase):
    pass

class User(UserBase):
    id: int
    created_at: datetime
    updated_at: datetime
    
    model_config = ConfigDict(from_attributes=True)

class VolumeProgressUpdateRequest(BaseModel):
    volumes: List[VolumeProgressUpdate]

class NotificationPreferenceUpdate(BaseModel):
    email_on_new_volume: bool

class NotificationPreferenceResponse(BaseModel):
    success: bool = True
    message: str
