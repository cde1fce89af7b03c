# kushon/sa/repositories/user.py

from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from kushon.sa.models import User
from kushon.exceptions import ValidationError

class UserRepository:
    """Repository for managing User entities."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.
        
        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def create_user(self, name: str, email: str) -> User:
        """Create a new user.
        
        Args:
            name: Display name used in notification emails
            email: Unique email address
            
        Returns:
            The created User object
            
        Raises:
            ValidationError: If a user with the given email already exists
        """
        if self.get_by_email(email):
            raise ValidationError(f"User with email '{email}' already exists")

        user = User(name=name, email=email)
        self.session.add(user)
        try:
            self.session.commit()
            return user
        except IntegrityError:
            self.session.rollback()
            raise ValidationError(f"User with email '{email}' already exists")

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.session.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.session.query(User).filter(User.email == email).first()
