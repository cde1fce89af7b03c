# kushon/sa/models/user.py
from sqlalchemy import Integer, String, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin

class User(Base, TimestampMixin):
    __tablename__ = 'user'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    # Relationships
    user_volumes = relationship('UserVolume', back_populates='user')
    notification_preferences = relationship('NotificationPreference', back_populates='user')

class UserVolume(Base, TimestampMixin):
    """A user's ownership fact for one volume. Rows are created lazily on first update."""
    __tablename__ = 'user_volume'

    user_id: Mapped[int] = mapped_column(ForeignKey('user.id'), primary_key=True)
    volume_id: Mapped[int] = mapped_column(ForeignKey('volume.id'), primary_key=True)
    owned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Stored and returned but not written by any flow yet
    notified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    user = relationship('User', back_populates='user_volumes')
    volume = relationship('Volume', back_populates='user_volumes')

    __table_args__ = (
        UniqueConstraint('user_id', 'volume_id', name='uix_user_volume_user_volume'),
    )

class NotificationPreference(Base, TimestampMixin):
    """Tracks which titles a user wants new-volume emails for."""
    __tablename__ = 'notification_preference'

    user_id: Mapped[int] = mapped_column(ForeignKey('user.id'), primary_key=True)
    title_id: Mapped[int] = mapped_column(ForeignKey('title.id'), primary_key=True)
    email_on_new_volume: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    user = relationship('User', back_populates='notification_preferences')
    title = relationship('Title', back_populates='notification_preferences')

    __table_args__ = (
        UniqueConstraint('user_id', 'title_id', name='uix_notification_preference_user_title'),
    )
