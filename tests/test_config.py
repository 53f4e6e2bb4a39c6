"""Tests for Settings validation: the app must refuse to start without store credentials."""

import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from app.core.config import Settings

BASE_ENV = {
    "SUPABASE_URL": "https://abc.supabase.co/",
    "SUPABASE_KEY": "anon-key",
}


class TestStoreSettings(unittest.TestCase):
    @patch.dict(os.environ, {}, clear=True)
    def test_missing_url_and_key_fail(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            Settings(_env_file=None)
        message = str(ctx.exception)
        self.assertIn("SUPABASE_URL", message)

    @patch.dict(os.environ, {"SUPABASE_URL": "https://abc.supabase.co"}, clear=True)
    def test_missing_key_fails(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None)

    @patch.dict(os.environ, {"SUPABASE_URL": "https://abc.supabase.co", "SUPABASE_ANON_KEY": "anon"}, clear=True)
    def test_anon_key_name_accepted(self) -> None:
        settings = Settings(_env_file=None)
        self.assertEqual(settings.SUPABASE_KEY.get_secret_value(), "anon")

    @patch.dict(os.environ, dict(BASE_ENV, SUPABASE_URL="ftp://abc"), clear=True)
    def test_url_scheme_checked(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None)

    @patch.dict(os.environ, BASE_ENV, clear=True)
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)
        self.assertEqual(settings.SUPABASE_URL, "https://abc.supabase.co")
        self.assertEqual(settings.SESSION_EXPIRE_HOURS, 24)
        self.assertEqual(settings.SESSION_COOKIE_NAME, "token")
        self.assertIsNone(settings.DATABASE_URL)
        self.assertEqual(settings.TEAM_PRESETS, ["Cá Kiếm", "Minato"])


class TestSecretSettings(unittest.TestCase):
    @patch.dict(os.environ, dict(BASE_ENV, APP_ENV="prod"), clear=True)
    def test_default_secret_rejected_in_prod(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None)

    @patch.dict(os.environ, dict(BASE_ENV, APP_ENV="prod", JWT_SECRET="a-real-secret"), clear=True)
    def test_custom_secret_accepted_in_prod(self) -> None:
        self.assertEqual(Settings(_env_file=None).APP_ENV, "prod")

    @patch.dict(os.environ, dict(BASE_ENV, DATABASE_URL="mysql://x"), clear=True)
    def test_database_url_must_be_postgres(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None)


if __name__ == "__main__":
    unittest.main()
