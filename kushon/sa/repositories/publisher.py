# kushon/sa/repositories/publisher.py

from typing import Optional, List
from sqlalchemy.orm import Session, joinedload
from kushon.sa.models import Publisher, Title

class PublisherRepository:
    def __init__(self, session: Session):
        self.session = session

    def create(self, name: str, country: Optional[str] = None) -> Publisher:
        """Create a publisher and commit it."""
        publisher = Publisher(name=name, country=country)
        self.session.add(publisher)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return publisher

    def get_all(self) -> List[Publisher]:
        """All publishers ordered by name."""
        return self.session.query(Publisher).order_by(Publisher.name.asc()).all()

    def get_by_id(self, publisher_id: int) -> Optional[Publisher]:
        """
        Fetch a publisher with its titles and their volumes loaded.
        """
        return (
            self.session.query(Publisher)
            .options(joinedload(Publisher.titles).joinedload(Title.volumes))
            .filter(Publisher.id == publisher_id)
            .first()
        )
