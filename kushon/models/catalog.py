# kushon/models/catalog.py

from pydantic import BaseModel, Field
from typing import Optional, List
from kushon.sa.models.title import TitleStatus

class VolumeInput(BaseModel):
    number: int = Field(ge=1)
    title: Optional[str] = None
    cover_image: Optional[str] = None

class TitleCreate(BaseModel):
    name: str
    publisher_id: int
    synopsis: Optional[str] = None
    author: Optional[str] = None
    genre: Optional[str] = None
    cover_image: Optional[str] = None
    volumes: List[VolumeInput] = []

class TitleUpdate(BaseModel):
    """Partial update: only fields that are set are applied"""
    name: Optional[str] = None
    publisher_id: Optional[int] = None
    status: Optional[TitleStatus] = None
    synopsis: Optional[str] = None
    author: Optional[str] = None
    genre: Optional[str] = None
    cover_image: Optional[str] = None
    volumes: Optional[List[VolumeInput]] = None

class PublisherCreate(BaseModel):
    name: str
    country: Optional[str] = None
