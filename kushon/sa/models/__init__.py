from .base import Base, TimestampMixin
from .publisher import Publisher
from .title import Title, TitleStatus, Volume
from .user import User, UserVolume, NotificationPreference

__all__ = [
    'Base',
    'TimestampMixin',
    'Publisher',
    'Title',
    'TitleStatus',
    'Volume',
    'User',
    'UserVolume',
    'NotificationPreference'
]
