# api/schemas/publisher.py
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict

from .title import TitleWithVolumes

class Publisher(BaseModel):
    id: int
    name: str
    country: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class PublisherWithTitles(Publisher):
    titles: List[TitleWithVolumes] = []
