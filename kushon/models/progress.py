# kushon/models/progress.py

from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional, List

class VolumeProgress(BaseModel):
    """One row of the reconciled progress view for a user and title"""
    volume_id: int
    volume_number: int
    volume_title: Optional[str] = None
    owned: bool = False
    notified: bool = False

class VolumeProgressUpdate(BaseModel):
    volume_id: int
    owned: bool

class UserVolumeRecord(BaseModel):
    user_id: int
    volume_id: int
    owned: bool
    notified: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class ProgressResponse(BaseModel):
    success: bool = True
    data: List[VolumeProgress]

class ProgressUpdateResponse(BaseModel):
    success: bool = True
    message: str
    data: List[UserVolumeRecord]
