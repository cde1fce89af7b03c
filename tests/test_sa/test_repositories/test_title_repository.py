# tests/test_sa/test_repositories/test_title_repository.py
import pytest
from kushon.sa.models import Volume
from kushon.sa.repositories.title import TitleRepository

@pytest.fixture
def repo(db_session):
    return TitleRepository(db_session)

def test_get_by_id(repo, sample_title):
    assert repo.get_by_id(sample_title.id).name == "T1"
    assert repo.get_by_id(9999) is None

def test_get_by_id_with_volumes(repo, sample_title):
    title = repo.get_by_id(sample_title.id, with_volumes=True)
    assert [v.number for v in title.volumes] == [1, 2, 3]

def test_get_volumes_ordered(repo, sample_title, other_title):
    volumes = repo.get_volumes(sample_title.id)
    assert [v.number for v in volumes] == [1, 2, 3]
    assert all(v.title_id == sample_title.id for v in volumes)
    assert repo.get_volumes(9999) == []

def test_get_volume_by_number(repo, sample_title, other_title):
    volume = repo.get_volume_by_number(sample_title.id, 2)
    assert volume.number == 2
    assert volume.title_id == sample_title.id
    assert repo.get_volume_by_number(sample_title.id, 7) is None

def test_create_volume_and_cover(repo, db_session, sample_title):
    volume = repo.create_volume(sample_title.id, 4, "Four", None)
    repo.update_volume_cover_image(volume, "/covers/4.png")
    db_session.commit()

    stored = db_session.query(Volume).filter_by(title_id=sample_title.id, number=4).one()
    assert stored.title == "Four"
    assert stored.cover_image == "/covers/4.png"

def test_get_all_newest_first(repo, sample_title, other_title):
    titles = repo.get_all()
    assert [t.id for t in titles] == [other_title.id, sample_title.id]
