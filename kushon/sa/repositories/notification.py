# kushon/sa/repositories/notification.py

from typing import Optional, List
from datetime import datetime, UTC
from sqlalchemy.orm import Session, joinedload
from kushon.sa.models import NotificationPreference

class NotificationPreferenceRepository:
    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: int, title_id: int) -> Optional[NotificationPreference]:
        return (
            self.session.query(NotificationPreference)
            .filter(
                NotificationPreference.user_id == user_id,
                NotificationPreference.title_id == title_id
            )
            .first()
        )

    def upsert(self, user_id: int, title_id: int, email_on_new_volume: bool) -> NotificationPreference:
        """Create the preference row or overwrite its flag. Commits.

        ``updated_at`` is touched even when the flag does not change.
        """
        preference = self.get(user_id, title_id)
        if preference:
            preference.email_on_new_volume = email_on_new_volume
            preference.updated_at = datetime.now(UTC)
        else:
            preference = NotificationPreference(
                user_id=user_id,
                title_id=title_id,
                email_on_new_volume=email_on_new_volume
            )
            self.session.add(preference)

        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return preference

    def get_subscribers(self, title_id: int) -> List[NotificationPreference]:
        """
        Preferences opted into new-volume emails for a title, with user and title loaded.
        """
        return (
            self.session.query(NotificationPreference)
            .options(
                joinedload(NotificationPreference.user),
                joinedload(NotificationPreference.title)
            )
            .filter(
                NotificationPreference.title_id == title_id,
                NotificationPreference.email_on_new_volume.is_(True)
            )
            .order_by(NotificationPreference.user_id.asc())
            .all()
        )
