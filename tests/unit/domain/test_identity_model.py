"""Unit tests for the Identity model and identity keys."""

from hello.domain.value import IdentityId, compose_identity_id
from tests.conftest import make_identity


class TestComposeIdentityId:
    def test_uid_then_provider(self):
        assert compose_identity_id("12345", "twitter") == "12345@twitter"

    def test_same_uid_differs_by_provider(self):
        assert compose_identity_id("1", "twitter") != compose_identity_id("1", "facebook")


class TestCanEdit:
    def test_owner(self):
        assert make_identity("1@twitter").can_edit(IdentityId("1@twitter"))

    def test_stranger(self):
        assert not make_identity("1@twitter").can_edit(IdentityId("2@twitter"))

    def test_administrator(self):
        admin = make_identity("1@twitter", is_administrator=True)

        assert admin.can_edit(IdentityId("2@facebook"))
