"""
Tests for NotificationService.
"""
import pytest

from familyhub.exceptions import NotificationNotFoundException
from familyhub.modules.notifications.models import Notification
from familyhub.modules.notifications.repository import NotificationRepository
from familyhub.modules.notifications.service import NotificationService


def _notify(service, family, user, title="Hello"):
    return service.notify(family.id, user.id, "test", title, "message")


class TestNotify:

    def test_notify_is_written_with_caller_transaction(self, db_session, family, child):
        service = NotificationService(db_session)
        notification = _notify(service, family, child)
        db_session.commit()

        assert notification.id is not None
        assert notification.read is False
        assert db_session.query(Notification).count() == 1

    def test_missing_recipient_is_skipped(self, db_session, family):
        assert NotificationService(db_session).notify(family.id, None, "test", "t", "m") is None
        assert db_session.query(Notification).count() == 0

    def test_failure_is_swallowed_and_transaction_survives(self, db_session, family, child, monkeypatch):
        """A failing write neither raises nor poisons the surrounding session"""
        def fail(db, notification):
            raise RuntimeError("boom")

        monkeypatch.setattr(NotificationRepository, "create", staticmethod(fail))
        child.name = "Renamed"

        assert _notify(NotificationService(db_session), family, child) is None

        db_session.commit()
        db_session.refresh(child)
        assert child.name == "Renamed"


class TestInbox:

    def test_list_unread_only(self, db_session, family, child):
        service = NotificationService(db_session)
        first = _notify(service, family, child, "first")
        _notify(service, family, child, "second")
        db_session.commit()

        service.mark_read(child, first.id)

        assert [n.title for n in service.list_for_user(child)] == ["second", "first"]
        assert [n.title for n in service.list_for_user(child, unread_only=True)] == ["second"]

    def test_cannot_mark_someone_elses(self, db_session, family, child, sibling):
        service = NotificationService(db_session)
        notification = _notify(service, family, child)
        db_session.commit()

        with pytest.raises(NotificationNotFoundException):
            service.mark_read(sibling, notification.id)

    def test_mark_all_read(self, db_session, family, child, sibling):
        service = NotificationService(db_session)
        _notify(service, family, child)
        _notify(service, family, child)
        _notify(service, family, sibling)
        db_session.commit()

        assert service.mark_all_read(child) == 2
        assert service.list_for_user(child, unread_only=True) == []
        assert len(service.list_for_user(sibling, unread_only=True)) == 1
