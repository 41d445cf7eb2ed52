"""Unit tests for sessiongate.services.renewal: the per-request identity state machine."""

import unittest
from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import MagicMock

from sessiongate.core.auth import build_auth_components
from sessiongate.core.exceptions import InvalidAccessToken, RefreshExpired, RefreshRevoked
from sessiongate.core.tokens import AccessClaims, RefreshClaims, TokenCodec, utcnow
from sessiongate.services.renewal import SessionRenewer
from tests.support import make_settings


def _user(**kwargs: object) -> SimpleNamespace:
    defaults: dict[str, object] = {
        "id": 5,
        "email": "writer@example.com",
        "name": "Writer",
        "role": "Contributor",
        "image": None,
        "status": "Active",
        "is_blocked": False,
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


class RenewerTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.components = build_auth_components(make_settings())
        self.renewer = SessionRenewer(MagicMock(), self.components)
        self.renewer.users = MagicMock()
        self.renewer.refresh_credentials = MagicMock()
        self.user = _user()
        self.renewer.users.get_by_id.return_value = self.user

    def _access(self, minutes_ago: int = 0) -> str:
        claims = AccessClaims(user_id=5, email="writer@example.com", name="Writer", role="Contributor")
        return self.components.access_codec.sign(claims, now=utcnow() - timedelta(minutes=minutes_ago))

    def _expired_access(self) -> str:
        return self._access(minutes_ago=30)

    def _refresh(self, days_ago: int = 0) -> str:
        claims = RefreshClaims.new(5, "writer@example.com")
        return self.components.refresh_codec.sign(claims, now=utcnow() - timedelta(days=days_ago))

    def _store(self, refresh_token: str, expires_in: timedelta = timedelta(days=7)) -> None:
        self.renewer.refresh_credentials.get_for_user.return_value = SimpleNamespace(
            user_id=5,
            token_hash=self.components.hasher.hash(refresh_token),
            expires_at=utcnow() + expires_in,
        )

    def _assert_no_credential_writes(self) -> None:
        self.renewer.refresh_credentials.replace.assert_not_called()
        self.renewer.refresh_credentials.delete_for_user.assert_not_called()


class TestNoCookies(RenewerTestCase):
    def test_anonymous_identity(self) -> None:
        result = self.renewer.resolve(None, None)
        self.assertIsNone(result.identity.id)
        self.assertIsNone(result.identity.email)
        self.assertIsNone(result.access_token)
        self.renewer.refresh_credentials.get_for_user.assert_not_called()


class TestValidAccessToken(RenewerTestCase):
    def test_identity_from_claims_without_store_access(self) -> None:
        result = self.renewer.resolve(self._access(), None)
        self.assertEqual(result.identity.id, 5)
        self.assertEqual(result.identity.role, "Contributor")
        self.assertIsNone(result.access_token)
        self.renewer.users.get_by_id.assert_not_called()
        self.renewer.refresh_credentials.get_for_user.assert_not_called()


class TestTamperedAccessToken(RenewerTestCase):
    def test_rejected_and_never_renewed(self) -> None:
        forger = TokenCodec(
            secret="attacker-secret-0123456789abcdef0123456789",
            algorithm="HS256",
            ttl=timedelta(minutes=15),
            token_type="access",
            claims_model=AccessClaims,
        )
        forged = forger.sign(AccessClaims(user_id=1, email="admin@example.com", role="Admin"))
        refresh = self._refresh()
        self._store(refresh)
        with self.assertRaises(InvalidAccessToken):
            self.renewer.resolve(forged, refresh)
        self.renewer.refresh_credentials.get_for_user.assert_not_called()


class TestExpiredAccessToken(RenewerTestCase):
    def test_renews_from_refresh_token(self) -> None:
        refresh = self._refresh()
        self._store(refresh)
        result = self.renewer.resolve(self._expired_access(), refresh)
        self.assertEqual(result.identity.id, 5)
        self.assertIsNotNone(result.access_token)
        renewed = self.components.access_codec.verify(result.access_token)
        self.assertEqual(renewed.user_id, 5)
        self._assert_no_credential_writes()

    def test_renewal_uses_fresh_user_row(self) -> None:
        self.user.role = "Editor"
        self.user.name = "Renamed Writer"
        refresh = self._refresh()
        self._store(refresh)
        result = self.renewer.resolve(self._expired_access(), refresh)
        self.assertEqual(result.identity.role, "Editor")
        self.assertEqual(result.identity.name, "Renamed Writer")

    def test_missing_access_cookie_also_renews(self) -> None:
        refresh = self._refresh()
        self._store(refresh)
        result = self.renewer.resolve(None, refresh)
        self.assertEqual(result.identity.id, 5)
        self.assertIsNotNone(result.access_token)

    def test_no_refresh_cookie_is_anonymous(self) -> None:
        result = self.renewer.resolve(self._expired_access(), None)
        self.assertIsNone(result.identity.id)
        self.assertIsNone(result.access_token)

    def test_repeated_renewals_all_succeed(self) -> None:
        refresh = self._refresh()
        self._store(refresh)
        for _ in range(3):
            result = self.renewer.resolve(self._expired_access(), refresh)
            self.assertEqual(result.identity.id, 5)
        self._assert_no_credential_writes()


class TestRenewalRefused(RenewerTestCase):
    def test_expired_refresh_token(self) -> None:
        refresh = self._refresh(days_ago=8)
        self._store(refresh)
        with self.assertRaises(RefreshExpired):
            self.renewer.resolve(self._expired_access(), refresh)

    def test_garbage_refresh_token(self) -> None:
        with self.assertRaises(RefreshRevoked):
            self.renewer.resolve(self._expired_access(), "garbage")

    def test_deleted_credential(self) -> None:
        self.renewer.refresh_credentials.get_for_user.return_value = None
        with self.assertRaises(RefreshRevoked):
            self.renewer.resolve(self._expired_access(), self._refresh())

    def test_stored_credential_past_expiry(self) -> None:
        refresh = self._refresh()
        self._store(refresh, expires_in=timedelta(seconds=-1))
        with self.assertRaises(RefreshExpired):
            self.renewer.resolve(self._expired_access(), refresh)

    def test_hash_mismatch_after_relogin(self) -> None:
        self._store(self._refresh())
        with self.assertRaises(RefreshRevoked):
            self.renewer.resolve(self._expired_access(), self._refresh())

    def test_user_gone(self) -> None:
        refresh = self._refresh()
        self._store(refresh)
        self.renewer.users.get_by_id.return_value = None
        with self.assertRaises(RefreshRevoked):
            self.renewer.resolve(self._expired_access(), refresh)

    def test_suspended_user(self) -> None:
        refresh = self._refresh()
        self._store(refresh)
        self.user.status = "Suspended"
        self.user.is_blocked = True
        with self.assertRaises(RefreshRevoked):
            self.renewer.resolve(self._expired_access(), refresh)

    def test_all_refusals_share_one_message(self) -> None:
        self.assertEqual(RefreshRevoked().message, RefreshExpired().message)


if __name__ == "__main__":
    unittest.main()
