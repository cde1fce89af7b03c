# kushon/sa/repositories/user_volume.py

from typing import Dict, Iterable, List
from datetime import datetime, UTC
from sqlalchemy.orm import Session
from kushon.sa.models import UserVolume

class UserVolumeRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_for_volumes(self, user_id: int, volume_ids: Iterable[int]) -> List[UserVolume]:
        """
        Ownership rows of one user restricted to the given volume ids.
        """
        volume_ids = list(volume_ids)
        if not volume_ids:
            return []
        return (
            self.session.query(UserVolume)
            .filter(
                UserVolume.user_id == user_id,
                UserVolume.volume_id.in_(volume_ids)
            )
            .all()
        )

    def upsert_many(self, user_id: int, owned_by_volume: Dict[int, bool]) -> List[UserVolume]:
        """Stage an upsert of every (user, volume) pair and flush once.

        Existing rows get ``owned`` and ``updated_at`` overwritten, missing
        rows are created with ``notified=False``. Nothing is committed here.

        Args:
            user_id: The ID of the user
            owned_by_volume: Mapping of volume id to the owned flag to store

        Returns:
            The staged UserVolume rows, one per volume id
        """
        existing = {
            row.volume_id: row
            for row in self.get_for_volumes(user_id, owned_by_volume.keys())
        }
        now = datetime.now(UTC)
        rows = []
        for volume_id, owned in owned_by_volume.items():
            row = existing.get(volume_id)
            if row:
                row.owned = owned
                row.updated_at = now
            else:
                row = UserVolume(
                    user_id=user_id,
                    volume_id=volume_id,
                    owned=owned,
                    notified=False
                )
                self.session.add(row)
            rows.append(row)
        self.session.flush()
        return rows
