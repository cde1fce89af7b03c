# kushon/sa/models/publisher.py
from sqlalchemy import Integer, String
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin

class Publisher(Base, TimestampMixin):
    __tablename__ = 'publisher'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Relationships
    titles = relationship('Title', back_populates='publisher')
