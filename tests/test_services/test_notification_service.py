# tests/test_services/test_notification_service.py

import logging
import pytest
from unittest.mock import Mock, call

from kushon.exceptions import EmailDeliveryError, NotFoundError
from kushon.sa.models import NotificationPreference
from kushon.services.notification_service import NotificationService

@pytest.fixture
def email_service():
    return Mock()

@pytest.fixture
def service(db_session, email_service):
    return NotificationService(db_session, email_service)

def test_preference_defaults_to_false(service, sample_user, sample_title):
    """Reading a preference that was never set does not raise"""
    preference = service.get_notification_preference(sample_user.id, sample_title.id)
    assert preference.email_on_new_volume is False

def test_preference_toggle(service, db_session, sample_user, sample_title):
    record = service.update_notification_preference(sample_user.id, sample_title.id, True)
    assert record.email_on_new_volume is True
    assert service.get_notification_preference(sample_user.id, sample_title.id).email_on_new_volume is True

    service.update_notification_preference(sample_user.id, sample_title.id, False)
    assert service.get_notification_preference(sample_user.id, sample_title.id).email_on_new_volume is False

    # Upsert keeps a single row per (user, title)
    count = db_session.query(NotificationPreference).filter_by(
        user_id=sample_user.id, title_id=sample_title.id
    ).count()
    assert count == 1

def test_preference_update_requires_existing_title_and_user(service, db_session, sample_user, sample_title):
    with pytest.raises(NotFoundError, match="Title 9999 not found"):
        service.update_notification_preference(sample_user.id, 9999, True)
    with pytest.raises(NotFoundError, match="User 9999 not found"):
        service.update_notification_preference(9999, sample_title.id, True)

    assert db_session.query(NotificationPreference).count() == 0
    assert service.get_notification_preference(sample_user.id, 9999).email_on_new_volume is False

def test_preference_repeat_touches_updated_at(service, db_session, sample_user, sample_title):
    first = service.update_notification_preference(sample_user.id, sample_title.id, True)
    second = service.update_notification_preference(sample_user.id, sample_title.id, True)

    assert second.email_on_new_volume is True
    assert second.updated_at.replace(tzinfo=None) >= first.updated_at.replace(tzinfo=None)

def test_notify_without_subscribers(service, email_service, sample_title, sample_user):
    service.update_notification_preference(sample_user.id, sample_title.id, False)

    report = service.notify_users_on_new_volume(sample_title.id, 4)

    email_service.send_new_volume_notification.assert_not_called()
    assert report.attempted == 0
    assert report.failed == []

def test_notify_sends_one_email_per_subscriber(service, email_service, sample_title, subscribers):
    report = service.notify_users_on_new_volume(sample_title.id, 4)

    assert email_service.send_new_volume_notification.call_args_list == [
        call("reader1@example.com", "Reader 1", "T1", 4),
        call("reader2@example.com", "Reader 2", "T1", 4),
        call("reader3@example.com", "Reader 3", "T1", 4),
    ]
    assert report.attempted == 3
    assert report.delivered == 3

def test_notify_skips_opted_out_users(service, email_service, db_session, sample_title, subscribers):
    service.update_notification_preference(subscribers[0].id, sample_title.id, False)

    service.notify_users_on_new_volume(sample_title.id, 4)

    recipients = [c.args[0] for c in email_service.send_new_volume_notification.call_args_list]
    assert recipients == ["reader2@example.com", "reader3@example.com"]

def test_notify_only_targets_the_given_title(service, email_service, db_session, other_title, subscribers):
    service.notify_users_on_new_volume(other_title.id, 3)
    email_service.send_new_volume_notification.assert_not_called()

def test_notify_isolates_delivery_failures(service, email_service, sample_title, subscribers, caplog):
    """The second send fails; the first and third are still attempted and nothing is raised"""
    email_service.send_new_volume_notification.side_effect = [
        None,
        EmailDeliveryError("mailbox unavailable"),
        None,
    ]

    with caplog.at_level(logging.ERROR, logger="kushon.services.notification_service"):
        report = service.notify_users_on_new_volume(sample_title.id, 7)

    assert email_service.send_new_volume_notification.call_count == 3
    assert report.attempted == 3
    assert report.delivered == 2
    assert report.failed == ["reader2@example.com"]
    assert "reader2@example.com" in caplog.text
    assert "volume 7" in caplog.text

def test_notify_tolerates_unexpected_errors(service, email_service, sample_title, subscribers):
    email_service.send_new_volume_notification.side_effect = RuntimeError("boom")

    report = service.notify_users_on_new_volume(sample_title.id, 2)

    assert report.attempted == 3
    assert report.delivered == 0
    assert len(report.failed) == 3

def test_notify_survives_subscriber_lookup_failure(service, email_service, sample_title):
    service.preference_repository = Mock()
    service.preference_repository.get_subscribers.side_effect = RuntimeError("connection lost")

    report = service.notify_users_on_new_volume(sample_title.id, 2)

    assert report.attempted == 0
    email_service.send_new_volume_notification.assert_not_called()

def test_notify_without_email_service(db_session, sample_title, subscribers):
    report = NotificationService(db_session).notify_users_on_new_volume(sample_title.id, 2)
    assert report.attempted == 0
