from .database import Database
from .models import (
    Base, Publisher, Title, TitleStatus, Volume,
    User, UserVolume, NotificationPreference
)

__all__ = [
    'Database',
    'Base',
    'Publisher',
    'Title',
    'TitleStatus',
    'Volume',
    'User',
    'UserVolume',
    'NotificationPreference'
]
