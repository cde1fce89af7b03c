# api/dependencies.py
import logging
from fastapi import BackgroundTasks, Depends
from sqlalchemy.orm import Session

from kushon.sa.database import db, get_db
from kushon.services.catalog_service import CatalogService
from kushon.services.email_service import EmailService
from kushon.services.notification_service import NotificationService
from kushon.services.progress_service import ProgressService

logger = logging.getLogger(__name__)

def get_email_service() -> EmailService:
    return EmailService()

def notify_new_volume(title_id: int, volume_number: int) -> None:
    """Background fanout. Runs after the response with its own session."""
    with db.get_db() as session:
        NotificationService(session, get_email_service()).notify_users_on_new_volume(title_id, volume_number)

def get_progress_service(session: Session = Depends(get_db)) -> ProgressService:
    return ProgressService(session)

def get_notification_service(session: Session = Depends(get_db)) -> NotificationService:
    return NotificationService(session, get_email_service())

def get_catalog_service(
    background_tasks: BackgroundTasks,
    session: Session = Depends(get_db)
) -> CatalogService:
    def schedule_fanout(title_id: int, volume_number: int) -> None:
        logger.info(f"Scheduling notifications for volume {volume_number} of title {title_id}")
        background_tasks.add_task(notify_new_volume, title_id, volume_number)

    service = CatalogService(session)
    service.subscribe(schedule_fanout)
    return service
