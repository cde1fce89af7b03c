# kushon/sa/repositories/title.py

from typing import Optional, List
from sqlalchemy.orm import Session, selectinload
from kushon.sa.models import Title, Volume

class TitleRepository:
    """Catalog reads and writes for titles and their volumes.

    Write methods only flush. The calling service owns the commit so a
    title update and its volume changes land in one transaction.
    """

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, title_id: int, with_volumes: bool = False) -> Optional[Title]:
        query = self.session.query(Title)
        if with_volumes:
            query = query.options(selectinload(Title.volumes))
        return query.filter(Title.id == title_id).first()

    def get_all(self) -> List[Title]:
        """All titles with volumes, newest first."""
        return (
            self.session.query(Title)
            .options(selectinload(Title.volumes))
            .order_by(Title.created_at.desc(), Title.id.desc())
            .all()
        )

    def get_volumes(self, title_id: int) -> List[Volume]:
        """Volumes of a title ordered by ascending number."""
        return (
            self.session.query(Volume)
            .filter(Volume.title_id == title_id)
            .order_by(Volume.number.asc())
            .all()
        )

    def get_volume_by_number(self, title_id: int, number: int) -> Optional[Volume]:
        return (
            self.session.query(Volume)
            .filter(Volume.title_id == title_id, Volume.number == number)
            .first()
        )

    def create(self, **fields) -> Title:
        title = Title(**fields)
        self.session.add(title)
        self.session.flush()
        return title

    def create_volume(
        self,
        title_id: int,
        number: int,
        title: Optional[str] = None,
        cover_image: Optional[str] = None
    ) -> Volume:
        volume = Volume(
            title_id=title_id,
            number=number,
            title=title,
            cover_image=cover_image
        )
        self.session.add(volume)
        self.session.flush()
        return volume

    def update_volume_cover_image(self, volume: Volume, cover_image: str) -> None:
        volume.cover_image = cover_image
        self.session.flush()

    def delete(self, title: Title) -> None:
        """Delete a title. Volumes and their ownership rows go with it."""
        self.session.delete(title)
        self.session.flush()
