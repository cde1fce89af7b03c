# api/routes/users.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from kushon.exceptions import NotFoundError, ValidationError
from kushon.models.notification import NotificationPreferenceStatus
from kushon.models.progress import ProgressResponse, ProgressUpdateResponse
from kushon.sa.database import get_db
from kushon.sa.repositories.user import UserRepository
from kushon.services.notification_service import NotificationService
from kushon.services.progress_service import ProgressService
from api.dependencies import get_progress_service, get_notification_service
from api.schemas.user import (
    User, UserCreate, VolumeProgressUpdateRequest,
    NotificationPreferenceUpdate, NotificationPreferenceResponse
)

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(user: UserCreate, db: Session = Depends(get_db)):
    try:
        return UserRepository(db).create_user(user.name, user.email)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.get("/{user_id}", response_model=User)
def get_user(user_id: int, db: Session = Depends(get_db)):
    db_user = UserRepository(db).get_by_id(user_id)
    if db_user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return db_user

# Volume progress

@router.get("/{user_id}/titles/{title_id}/volumes", response_model=ProgressResponse)
def get_volume_progress(
    user_id: int,
    title_id: int,
    service: ProgressService = Depends(get_progress_service)
):
    """
    Ownership progress for every volume of a title, ordered by volume number.
    Volumes the user never touched are reported as not owned.
    """
    try:
        return service.get_user_volume_progress(user_id, title_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.put("/{user_id}/titles/{title_id}/volumes", response_model=ProgressUpdateResponse)
def update_volume_progress(
    user_id: int,
    title_id: int,
    update: VolumeProgressUpdateRequest,
    service: ProgressService = Depends(get_progress_service)
):
    try:
        return service.update_user_volume_progress(user_id, title_id, update.volumes)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

# Notification preferences

@router.get("/{user_id}/titles/{title_id}/notifications", response_model=NotificationPreferenceStatus)
def get_notification_preference(
    user_id: int,
    title_id: int,
    service: NotificationService = Depends(get_notification_service)
):
    return service.get_notification_preference(user_id, title_id)

@router.put("/{user_id}/titles/{title_id}/notifications", response_model=NotificationPreferenceResponse)
def update_notification_preference(
    user_id: int,
    title_id: int,
    preference: NotificationPreferenceUpdate,
    service: NotificationService = Depends(get_notification_service)
):
    try:
        service.update_notification_preference(user_id, title_id, preference.email_on_new_volume)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    message = (
        "Email notifications enabled"
        if preference.email_on_new_volume
        else "Email notifications disabled"
    )
    return NotificationPreferenceResponse(success=True, message=message)
