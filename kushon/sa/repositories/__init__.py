from .publisher import PublisherRepository
from .title import TitleRepository
from .user import UserRepository
from .user_volume import UserVolumeRepository
from .notification import NotificationPreferenceRepository

__all__ = [
    'PublisherRepository',
    'TitleRepository',
    'UserRepository',
    'UserVolumeRepository',
    'NotificationPreferenceRepository'
]
