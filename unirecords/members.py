"""University members and the user lookups they share."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RecordsError(Exception):
    """Raised when a records operation cannot be carried out."""


class UserRole(Enum):
    """Role stored for each account in the users table."""

    ADMIN = "admin"
    PROFESSOR = "professor"
    STUDENT = "student"


@dataclass
class Member:
    """A person registered at the university."""

    id: int
    name: str
    surname: str
    years_in_university: int

    def describe(self) -> str:
        """Short one-line description."""
        return f"id: {self.id}  {self.name} {self.surname}"

    def describe_all(self) -> str:
        """Full description including years at the university."""
        return (
            f"id: {self.id}  {self.name} {self.surname}"
            f"  years of beeing in university: {self.years_in_university}"
        )


def get_user_type(conn, login: str) -> UserRole | None:
    """Return the role of the account with this login, or None if absent."""
    cur = conn.cursor()
    cur.execute("SELECT role FROM users WHERE login = ?", (login,))
    row = cur.fetchone()
    if row is None:
        return None
    try:
        return UserRole(row[0])
    except ValueError:
        raise RecordsError("Invalid type of user") from None


def get_group_id(conn, group_name: str) -> int:
    """Return the id of a group, creating the group if it does not exist."""
    cur = conn.cursor()
    cur.execute('SELECT id FROM "groups" WHERE groupName = ?;', (group_name,))
    row = cur.fetchone()
    if row is not None:
        return row[0]
    cur.execute('INSERT INTO "groups" (groupName) VALUES (?);', (group_name,))
    return cur.lastrowid