# tests/test_sa/test_models.py
import pytest
from sqlalchemy.exc import IntegrityError
from kushon.sa.models import Title, TitleStatus, Volume, User, UserVolume, NotificationPreference

def test_title_defaults(db_session, sample_publisher):
    """A new title starts ONGOING and gets timestamps"""
    title = Title(name="Fresh", slug="fresh", publisher_id=sample_publisher.id)
    db_session.add(title)
    db_session.commit()

    assert title.status == TitleStatus.ONGOING
    assert title.created_at is not None
    assert title.updated_at is not None

def test_title_relationships(db_session, sample_title):
    title = db_session.get(Title, sample_title.id)
    assert title.publisher.name == "Test Publisher"
    assert [v.number for v in title.volumes] == [1, 2, 3]
    assert title.volumes[0].parent is title

def test_volume_number_unique_per_title(db_session, sample_title, other_title):
    # Same number on another title is fine
    db_session.add(Volume(title_id=other_title.id, number=3))
    db_session.commit()

    db_session.add(Volume(title_id=sample_title.id, number=1))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()

def test_user_volume_defaults(db_session, title_volumes, sample_user):
    row = UserVolume(user_id=sample_user.id, volume_id=title_volumes[2].id)
    db_session.add(row)
    db_session.commit()

    assert row.owned is False
    assert row.notified is False
    assert row.volume.number == 2
    assert row.user.email == "u1@example.com"

def test_user_volume_natural_key(db_session, title_volumes, sample_user):
    db_session.add(UserVolume(user_id=sample_user.id, volume_id=title_volumes[1].id, owned=True))
    db_session.commit()
    db_session.expunge_all()

    db_session.add(UserVolume(user_id=sample_user.id, volume_id=title_volumes[1].id, owned=False))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()

def test_notification_preference_natural_key(db_session, sample_title, sample_user):
    db_session.add(NotificationPreference(user_id=sample_user.id, title_id=sample_title.id, email_on_new_volume=True))
    db_session.commit()
    db_session.expunge_all()

    db_session.add(NotificationPreference(user_id=sample_user.id, title_id=sample_title.id, email_on_new_volume=False))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()

def test_user_email_unique(db_session, sample_user):
    db_session.add(User(name="Copy", email=sample_user.email))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()

def test_foreign_keys_enforced(db_session, sample_user):
    """SQLite connections reject rows pointing at missing parents"""
    db_session.add(NotificationPreference(user_id=sample_user.id, title_id=9999, email_on_new_volume=True))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()

    assert db_session.query(NotificationPreference).count() == 0
