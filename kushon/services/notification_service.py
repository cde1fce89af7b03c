# kushon/services/notification_service.py

import logging
from typing import List, Optional, Protocol
from sqlalchemy.orm import Session

from kushon.exceptions import NotFoundError
from kushon.models.notification import (
    NotificationPreferenceStatus, NotificationPreferenceRecord, Subscriber, FanoutReport
)
from kushon.sa.repositories.notification import NotificationPreferenceRepository
from kushon.sa.repositories.title import TitleRepository
from kushon.sa.repositories.user import UserRepository

logger = logging.getLogger(__name__)


class EmailSender(Protocol):
    def send_new_volume_notification(
        self, user_email: str, user_name: str, title_name: str, volume_number: int
    ) -> None: ...


class NotificationService:
    """Notification preferences and new-volume email fanout."""

    def __init__(self, session: Session, email_service: Optional[EmailSender] = None):
        self.session = session
        self.email_service = email_service
        self.preference_repository = NotificationPreferenceRepository(session)
        self.title_repository = TitleRepository(session)
        self.user_repository = UserRepository(session)

    def get_notification_preference(self, user_id: int, title_id: int) -> NotificationPreferenceStatus:
        """Read the flag, reporting False when the user never set one"""
        preference = self.preference_repository.get(user_id, title_id)
        if preference is None:
            return NotificationPreferenceStatus(email_on_new_volume=False)
        return NotificationPreferenceStatus(email_on_new_volume=preference.email_on_new_volume)

    def update_notification_preference(
        self, user_id: int, title_id: int, email_on_new_volume: bool
    ) -> NotificationPreferenceRecord:
        """Set the new-volume email flag for a user on a title.

        Raises:
            NotFoundError: If the user or the title does not exist
        """
        if self.user_repository.get_by_id(user_id) is None:
            raise NotFoundError(f"User {user_id} not found")
        if self.title_repository.get_by_id(title_id) is None:
            raise NotFoundError(f"Title {title_id} not found")

        preference = self.preference_repository.upsert(user_id, title_id, email_on_new_volume)
        state = "enabled" if email_on_new_volume else "disabled"
        logger.info(f"New-volume emails {state} for user {user_id} on title {title_id}")
        return NotificationPreferenceRecord.model_validate(preference)

    def get_subscribers(self, title_id: int) -> List[Subscriber]:
        return [
            Subscriber(
                email=preference.user.email,
                name=preference.user.name,
                title_name=preference.title.name
            )
            for preference in self.preference_repository.get_subscribers(title_id)
        ]

    def notify_users_on_new_volume(self, title_id: int, volume_number: int) -> FanoutReport:
        """Email every subscriber of the title about a new volume.

        Never raises. A failed send is logged and the next subscriber is
        still attempted; the returned report lists the failed recipients.
        """
        report = FanoutReport(title_id=title_id, volume_number=volume_number)
        if self.email_service is None:
            logger.warning(f"No email service configured, skipping notifications for title {title_id}")
            return report

        try:
            subscribers = self.get_subscribers(title_id)
        except Exception as e:
            logger.error(f"Could not load subscribers for title {title_id}, volume {volume_number}: {str(e)}")
            return report

        if not subscribers:
            return report

        for subscriber in subscribers:
            report.attempted += 1
            try:
                self.email_service.send_new_volume_notification(
                    subscriber.email,
                    subscriber.name,
                    subscriber.title_name,
                    volume_number
                )
            except Exception as e:
                report.failed.append(subscriber.email)
                logger.error(
                    f"Error sending new-volume email to {subscriber.email} "
                    f"for '{subscriber.title_name}' (title {title_id}) volume {volume_number}: {str(e)}"
                )
                continue

            report.delivered += 1
            logger.info(
                f"Email sent to {subscriber.email} about volume {volume_number} of {subscriber.title_name}"
            )

        if report.failed:
            logger.warning(
                f"Fanout for title {title_id} volume {volume_number}: "
                f"{report.delivered}/{report.attempted} delivered"
            )
        return report
