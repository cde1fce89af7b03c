# tests/conftest.py
import sys
import pytest
from pathlib import Path

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from kushon.sa.database import Database
from kushon.sa.models import (
    Base, Publisher, Title, TitleStatus, Volume,
    User, NotificationPreference
)

@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory):
    """Create a temporary directory for the test database."""
    test_dir = tmp_path_factory.mktemp("test_db")
    return str(test_dir / "test_kushon.db")

@pytest.fixture(scope="session")
def database(test_db_path):
    """Create a test database instance"""
    db = Database(connection_string=f"sqlite:///{test_db_path}")
    
    # Drop all tables and recreate schema
    db.drop_db()
    db.init_db()
    
    yield db
    
    db.engine.dispose()

@pytest.fixture(autouse=True)
def cleanup_db(database):
    """Clean up database tables before each test"""
    # Delete all data from tables in reverse order of dependencies
    with database.engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())
    yield

@pytest.fixture(scope="function")
def db_session(database):
    """Create a new database session for a test"""
    session = database.get_session()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture
def sample_publisher(db_session):
    """Create a sample publisher for testing."""
    publisher = Publisher(name="Test Publisher", country="JP")
    db_session.add(publisher)
    db_session.commit()
    return publisher

@pytest.fixture
def sample_title(db_session, sample_publisher):
    """Create title "T1" with volumes numbered 1 to 3."""
    title = Title(
        name="T1",
        slug="t1",
        publisher_id=sample_publisher.id,
        status=TitleStatus.ONGOING,
        author="Test Author"
    )
    db_session.add(title)
    db_session.flush()

    # Added out of order so ordering has to come from the number column
    for number in (3, 1, 2):
        db_session.add(Volume(title_id=title.id, number=number, title=f"Volume {number}"))
    db_session.commit()
    return title

@pytest.fixture
def other_title(db_session, sample_publisher):
    """A second title with volumes 1 and 2, used for cross-title checks."""
    title = Title(name="Other Title", slug="other-title", publisher_id=sample_publisher.id)
    db_session.add(title)
    db_session.flush()
    for number in (1, 2):
        db_session.add(Volume(title_id=title.id, number=number))
    db_session.commit()
    return title

@pytest.fixture
def title_volumes(db_session, sample_title):
    """Volumes of the sample title keyed by number."""
    volumes = db_session.query(Volume).filter(Volume.title_id == sample_title.id).all()
    return {volume.number: volume for volume in volumes}

@pytest.fixture
def sample_user(db_session):
    """Create a sample user for testing."""
    user = User(name="U1", email="u1@example.com")
    db_session.add(user)
    db_session.commit()
    return user

@pytest.fixture
def subscribers(db_session, sample_title):
    """Three users opted into new-volume emails for the sample title."""
    users = []
    for i in range(1, 4):
        user = User(name=f"Reader {i}", email=f"reader{i}@example.com")
        db_session.add(user)
        db_session.flush()
        db_session.add(NotificationPreference(
            user_id=user.id,
            title_id=sample_title.id,
            email_on_new_volume=True
        ))
        users.append(user)
    db_session.commit()
    return users
