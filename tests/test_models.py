"""The ORM mirror must describe the columns the services read and write."""

import unittest

from app.models import Base, Registration, Team, User
from app.schemas.registration import RegistrationPayload


class TestTableLayout(unittest.TestCase):
    def test_all_tables_registered(self) -> None:
        self.assertEqual(set(Base.metadata.tables), {"users", "teams", "registrations"})

    def test_registration_columns(self) -> None:
        columns = set(Registration.__table__.columns.keys())
        self.assertEqual(columns, {"id", "team", "in_game_name", "tanks", "created_at"})
        written = set(RegistrationPayload(team="a", in_game_name="b", tanks="c").cleaned())
        self.assertTrue(written <= columns)

    def test_team_is_plain_text_not_foreign_key(self) -> None:
        self.assertEqual(list(Registration.__table__.c.team.foreign_keys), [])
        self.assertFalse(Team.__table__.c.name.unique)

    def test_users_store_hash_not_password(self) -> None:
        columns = set(User.__table__.columns.keys())
        self.assertIn("password_hash", columns)
        self.assertNotIn("password", columns)
        self.assertTrue(User.__table__.c.username.unique)


if __name__ == "__main__":
    unittest.main()
