"""Unit tests for sessiongate.core.config validation."""

import unittest

from pydantic import ValidationError

from tests.support import make_settings


class TestSettingsValidation(unittest.TestCase):
    def test_defaults_are_valid(self) -> None:
        settings = make_settings()
        self.assertEqual(settings.ACCESS_COOKIE_NAME, "token")
        self.assertEqual(settings.REFRESH_COOKIE_NAME, "refreshToken")
        self.assertEqual(settings.access_cookie_max_age, 15 * 60)
        self.assertEqual(settings.refresh_cookie_max_age, 7 * 24 * 60 * 60)

    def test_equal_secrets_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(ACCESS_TOKEN_SECRET="same-secret", REFRESH_TOKEN_SECRET="same-secret")

    def test_blank_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(ACCESS_TOKEN_SECRET="   ")

    def test_non_sql_database_url_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(DATABASE_URL="mysql://root@localhost/db")

    def test_access_ttl_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(ACCESS_TOKEN_EXPIRE_MINUTES=0)
        with self.assertRaises(ValidationError):
            make_settings(ACCESS_TOKEN_EXPIRE_MINUTES=1441)

    def test_samesite_normalized(self) -> None:
        settings = make_settings(REFRESH_COOKIE_SAMESITE="Strict")
        self.assertEqual(settings.REFRESH_COOKIE_SAMESITE, "strict")

    def test_invalid_samesite_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(ACCESS_COOKIE_SAMESITE="sometimes")

    def test_bcrypt_rounds_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(BCRYPT_ROUNDS=3)


if __name__ == "__main__":
    unittest.main()
