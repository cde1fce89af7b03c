# kushon/services/catalog_service.py

import logging
from typing import Any, Callable, Iterable, List, Optional, Sequence
from sqlalchemy.orm import Session

from kushon.exceptions import NotFoundError, ValidationError
from kushon.models.catalog import TitleCreate, TitleUpdate, VolumeInput
from kushon.sa.models import Publisher, Title, Volume
from kushon.sa.repositories.publisher import PublisherRepository
from kushon.sa.repositories.title import TitleRepository
from kushon.utils.slug import generate_slug

logger = logging.getLogger(__name__)

# Called as listener(title_id, volume_number) once per committed new volume
VolumeAddedListener = Callable[[int, int], Any]


class CatalogService:
    """Admin-side catalog writes: publishers, titles and their volume lists.

    New volumes are announced to ``volume added`` listeners only after the
    mutation that created them has committed. Listener errors are logged and
    never reach the caller.
    """

    def __init__(self, session: Session, listeners: Optional[Iterable[VolumeAddedListener]] = None):
        self.session = session
        self.title_repository = TitleRepository(session)
        self.publisher_repository = PublisherRepository(session)
        self.listeners: List[VolumeAddedListener] = list(listeners or [])

    def subscribe(self, listener: VolumeAddedListener) -> None:
        self.listeners.append(listener)

    # Publishers

    def create_publisher(self, name: str, country: Optional[str] = None) -> Publisher:
        publisher = self.publisher_repository.create(name, country)
        logger.info(f"Created publisher {publisher.id} ({publisher.name})")
        return publisher

    def list_publishers(self) -> List[Publisher]:
        return self.publisher_repository.get_all()

    def get_publisher(self, publisher_id: int) -> Publisher:
        publisher = self.publisher_repository.get_by_id(publisher_id)
        if publisher is None:
            raise NotFoundError(f"Publisher {publisher_id} not found")
        return publisher

    # Titles

    def create_title(self, data: TitleCreate) -> Title:
        """Create a title with its initial volumes. Initial volumes are not announced.

        Raises:
            NotFoundError: If the publisher does not exist
            ValidationError: If a volume number is listed more than once
        """
        self._require_publisher(data.publisher_id)
        numbers = [volume.number for volume in data.volumes]
        duplicates = sorted({number for number in numbers if numbers.count(number) > 1})
        if duplicates:
            raise ValidationError(f"Duplicate volume numbers: {duplicates}")
        try:
            title = self.title_repository.create(
                name=data.name,
                slug=generate_slug(data.name),
                publisher_id=data.publisher_id,
                synopsis=data.synopsis,
                author=data.author,
                genre=data.genre,
                cover_image=data.cover_image
            )
            for volume in data.volumes:
                self.title_repository.create_volume(
                    title.id, volume.number, volume.title, volume.cover_image
                )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        self.session.refresh(title)
        logger.info(f"Created title {title.id} ({title.slug}) with {len(data.volumes)} volume(s)")
        return title

    def list_titles(self) -> List[Title]:
        return self.title_repository.get_all()

    def get_title(self, title_id: int) -> Title:
        title = self.title_repository.get_by_id(title_id, with_volumes=True)
        if title is None:
            raise NotFoundError(f"Title {title_id} not found")
        return title

    def get_title_volumes(self, title_id: int) -> List[Volume]:
        self._require_title(title_id)
        return self.title_repository.get_volumes(title_id)

    def update_title(self, title_id: int, data: TitleUpdate) -> Title:
        """Apply a partial title update and any volume list changes in one transaction.

        Fields left unset or null keep their stored value. The slug follows
        the name. Once committed, each genuinely new volume is announced to
        the listeners.

        Raises:
            NotFoundError: If the title, or a newly referenced publisher, does not exist
        """
        title = self._require_title(title_id)
        fields = data.model_dump(exclude_unset=True, exclude_none=True, exclude={"volumes"})
        if "publisher_id" in fields:
            self._require_publisher(fields["publisher_id"])

        try:
            for field, value in fields.items():
                setattr(title, field, value)
            if "name" in fields:
                title.slug = generate_slug(fields["name"])

            created: List[Volume] = []
            if data.volumes is not None:
                created = self.apply_volume_changes(title_id, data.volumes)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        self.session.refresh(title)
        logger.info(f"Updated title {title_id}, {len(created)} new volume(s)")
        self._publish_volumes_added(title_id, [v.number for v in created])
        return title

    def apply_volume_changes(self, title_id: int, requested_volumes: Sequence[VolumeInput]) -> List[Volume]:
        """Diff requested volume numbers against the stored ones.

        Unknown numbers become new volumes. For known numbers only a supplied
        cover image is applied; number and label never change. Does not commit.

        Returns:
            The volumes created, in request order
        """
        created = []
        for requested in requested_volumes:
            existing = self.title_repository.get_volume_by_number(title_id, requested.number)
            if existing is None:
                volume = self.title_repository.create_volume(
                    title_id, requested.number, requested.title, requested.cover_image
                )
                created.append(volume)
            elif requested.cover_image:
                self.title_repository.update_volume_cover_image(existing, requested.cover_image)
        return created

    def update_title_cover(self, title_id: int, cover_image: str) -> Title:
        title = self._require_title(title_id)
        title.cover_image = cover_image
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        logger.info(f"Updated main cover of title {title_id}")
        return title

    def update_volume_cover(self, title_id: int, volume_number: int, cover_image: str) -> Optional[Volume]:
        """Set the cover of an existing volume. A missing volume is skipped and None returned."""
        volume = self.title_repository.get_volume_by_number(title_id, volume_number)
        if volume is None:
            logger.info(f"Volume {volume_number} not found for title {title_id}, skipping cover update")
            return None
        try:
            self.title_repository.update_volume_cover_image(volume, cover_image)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return volume

    def delete_title(self, title_id: int) -> bool:
        title = self.title_repository.get_by_id(title_id)
        if title is None:
            return False
        try:
            self.title_repository.delete(title)
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            logger.error(f"Error deleting title {title_id}: {str(e)}")
            return False
        logger.info(f"Deleted title {title_id}")
        return True

    def _publish_volumes_added(self, title_id: int, volume_numbers: Sequence[int]) -> None:
        for number in volume_numbers:
            for listener in self.listeners:
                try:
                    listener(title_id, number)
                except Exception as e:
                    logger.error(f"Volume-added listener failed for title {title_id} volume {number}: {str(e)}")

    def _require_title(self, title_id: int) -> Title:
        title = self.title_repository.get_by_id(title_id)
        if title is None:
            raise NotFoundError(f"Title {title_id} not found")
        return title

    def _require_publisher(self, publisher_id: int) -> None:
        if self.session.get(Publisher, publisher_id) is None:
            raise NotFoundError(f"Publisher {publisher_id} not found")
