"""Unit tests for the User aggregate: profile, notifications, address book."""

import pytest

from marketplace.domain.exceptions import EntityNotFoundError, ValidationError
from marketplace.domain.model.user import Role, User
from marketplace.domain.model.value_objects import Address


def _user() -> User:
    return User.create("alice", "Alice@Example.com", "hash")


def _address(city: str = "LA") -> Address:
    return Address("1 Main St", city, "CA", "90001", "US")


class TestUserCreation:

    def test_email_normalised(self):
        user = _user()
        assert user.email == "alice@example.com"
        assert user.role == Role.CUSTOMER

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError, match="valid email"):
            User.create("alice", "not-an-email", "hash")

    def test_parse_role(self):
        assert Role.parse("vendor") == Role.VENDOR
        with pytest.raises(ValidationError, match="Invalid role"):
            Role.parse("superuser")


class TestNotifications:

    def test_notify_and_read(self):
        user = _user()
        n = user.notify("hello", order_id="o1")
        assert not n.is_read
        user.mark_notification_read(n.id)
        assert user.notifications[0].is_read

    def test_mark_all_and_clear(self):
        user = _user()
        user.notify("a")
        user.notify("b")
        user.mark_all_notifications_read()
        assert all(n.is_read for n in user.notifications)
        user.clear_notifications()
        assert user.notifications == []

    def test_delete_one(self):
        user = _user()
        keep = user.notify("keep")
        drop = user.notify("drop")
        user.delete_notification(drop.id)
        assert [n.id for n in user.notifications] == [keep.id]

    def test_unknown_notification(self):
        with pytest.raises(EntityNotFoundError, match="Notification not found"):
            _user().mark_notification_read("missing")


class TestAddressBook:

    def test_first_address_becomes_default(self):
        user = _user()
        first = user.add_address(_address())
        second = user.add_address(_address("SF"))
        assert first.is_default
        assert not second.is_default

    def test_only_one_default(self):
        user = _user()
        user.add_address(_address())
        second = user.add_address(_address("SF"), is_default=True)
        assert [a.is_default for a in user.addresses] == [False, True]
        user.set_default_address(user.addresses[0].id)
        assert [a.is_default for a in user.addresses] == [True, False]
        assert second.is_default is False

    def test_removing_default_promotes_next(self):
        user = _user()
        first = user.add_address(_address())
        user.add_address(_address("SF"))
        user.remove_address(first.id)
        assert len(user.addresses) == 1
        assert user.addresses[0].is_default

    def test_update_address(self):
        user = _user()
        saved = user.add_address(_address())
        user.update_address(saved.id, _address("NYC"))
        assert user.addresses[0].address.city == "NYC"

    def test_unknown_address(self):
        with pytest.raises(EntityNotFoundError, match="Address not found"):
            _user().remove_address("missing")
