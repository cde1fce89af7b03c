# kushon/services/progress_service.py

import logging
from typing import Iterable, List, Sequence
from sqlalchemy.orm import Session

from kushon.exceptions import NotFoundError, ValidationError
from kushon.models.progress import (
    VolumeProgress, VolumeProgressUpdate, UserVolumeRecord,
    ProgressResponse, ProgressUpdateResponse
)
from kushon.sa.models import Volume, UserVolume
from kushon.sa.repositories.title import TitleRepository
from kushon.sa.repositories.user_volume import UserVolumeRepository

logger = logging.getLogger(__name__)


def reconcile_progress(volumes: Sequence[Volume], user_volumes: Iterable[UserVolume]) -> List[VolumeProgress]:
    """Merge a title's volumes with a user's sparse ownership rows.

    Emits exactly one entry per volume in ascending number order. A volume
    with no ownership row reads as ``owned=False, notified=False``.
    """
    by_volume_id = {uv.volume_id: uv for uv in user_volumes}
    progress = []
    for volume in sorted(volumes, key=lambda v: v.number):
        row = by_volume_id.get(volume.id)
        progress.append(VolumeProgress(
            volume_id=volume.id,
            volume_number=volume.number,
            volume_title=volume.title,
            owned=row.owned if row is not None else False,
            notified=row.notified if row is not None else False,
        ))
    return progress


class ProgressService:
    """Per-user ownership progress over a title's volumes."""

    def __init__(self, session: Session):
        self.session = session
        self.title_repository = TitleRepository(session)
        self.user_volume_repository = UserVolumeRepository(session)

    def get_user_volume_progress(self, user_id: int, title_id: int) -> ProgressResponse:
        """Complete progress view for every volume of the title.

        Raises:
            NotFoundError: If the title does not exist
        """
        if self.title_repository.get_by_id(title_id) is None:
            raise NotFoundError(f"Title {title_id} not found")

        volumes = self.title_repository.get_volumes(title_id)
        user_volumes = self.user_volume_repository.get_for_volumes(
            user_id, [v.id for v in volumes]
        )
        return ProgressResponse(success=True, data=reconcile_progress(volumes, user_volumes))

    def update_user_volume_progress(
        self,
        user_id: int,
        title_id: int,
        updates: Sequence[VolumeProgressUpdate]
    ) -> ProgressUpdateResponse:
        """Apply ownership updates for volumes of one title, all or nothing.

        Args:
            user_id: The ID of the user
            title_id: The title every updated volume must belong to
            updates: Volume id and owned flag pairs; the last entry wins for repeated ids

        Returns:
            ProgressUpdateResponse with the applied rows

        Raises:
            NotFoundError: If the title does not exist
            ValidationError: If any volume does not belong to the title. Nothing is written.
        """
        title = self.title_repository.get_by_id(title_id, with_volumes=True)
        if title is None:
            raise NotFoundError(f"Title {title_id} not found")

        title_volume_ids = {v.id for v in title.volumes}
        invalid = sorted({u.volume_id for u in updates if u.volume_id not in title_volume_ids})
        if invalid:
            raise ValidationError(
                f"Volumes {invalid} do not belong to title {title_id}"
            )

        owned_by_volume = {u.volume_id: u.owned for u in updates}
        try:
            rows = self.user_volume_repository.upsert_many(user_id, owned_by_volume)
            self.session.commit()
        except Exception:
            self.session.rollback()
            logger.error(f"Progress update failed for user {user_id} on title {title_id}, rolled back")
            raise

        logger.info(f"Updated {len(rows)} volume(s) for user {user_id} on title {title_id}")
        return ProgressUpdateResponse(
            success=True,
            message="Progress updated",
            data=[UserVolumeRecord.model_validate(row) for row in rows]
        )
