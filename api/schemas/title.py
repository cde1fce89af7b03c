# api/schemas/title.py
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict

from kushon.sa.models.title import TitleStatus

class Volume(BaseModel):
    id: int
    number: int
    title_id: int
    title: Optional[str] = None
    cover_image: Optional[str] = None
    release_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class TitleBase(BaseModel):
    name: str
    slug: str
    publisher_id: int
    status: TitleStatus
    synopsis: Optional[str] = None
    author: Optional[str] = None
    genre: Optional[str] = None
    cover_image: Optional[str] = None

class Title(TitleBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class TitleWithVolumes(Title):
    volumes: List[Volume] = []

class CoverImageUpdate(BaseModel):
    cover_image: str
