# kushon/sa/models/title.py
from datetime import datetime
from enum import Enum
from sqlalchemy import Integer, String, Text, ForeignKey, DateTime, UniqueConstraint, Index
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin

class TitleStatus(str, Enum):
    ONGOING = "ONGOING"
    COMPLETED = "COMPLETED"
    HIATUS = "HIATUS"

class Title(Base, TimestampMixin):
    __tablename__ = 'title'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    slug: Mapped[str] = mapped_column(String(500), nullable=False)
    publisher_id: Mapped[int] = mapped_column(ForeignKey('publisher.id'), nullable=False)
    status: Mapped[TitleStatus] = mapped_column(SAEnum(TitleStatus, name='title_status'), nullable=False, default=TitleStatus.ONGOING)
    synopsis: Mapped[str | None] = mapped_column(Text, nullable=True)
    author: Mapped[str | None] = mapped_column(String(255), nullable=True)
    genre: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cover_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    # Relationships
    publisher = relationship('Publisher', back_populates='titles')
    volumes = relationship('Volume', back_populates='parent', order_by='Volume.number', cascade='all, delete-orphan')
    notification_preferences = relationship('NotificationPreference', back_populates='title', cascade='all, delete-orphan')

    __table_args__ = (
        Index('idx_title_slug', 'slug'),
        Index('idx_title_publisher_id', 'publisher_id'),
    )

class Volume(Base, TimestampMixin):
    __tablename__ = 'volume'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    title_id: Mapped[int] = mapped_column(ForeignKey('title.id'), nullable=False)
    title: Mapped[str | None] = mapped_column(String(500), nullable=True)  # Display label, e.g. "Romance Dawn"
    cover_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    release_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Relationships
    # "title" is the display label column, so the owning Title is exposed as "parent"
    parent = relationship('Title', back_populates='volumes')
    user_volumes = relationship('UserVolume', back_populates='volume', cascade='all, delete-orphan')

    __table_args__ = (
        UniqueConstraint('title_id', 'number', name='uix_volume_title_number'),
    )
