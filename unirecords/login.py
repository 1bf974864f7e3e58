"""Login loop and the command-line entry point."""

from __future__ import annotations

import argparse
import sqlite3
from contextlib import closing

from unirecords.admin import admin_menu, get_admin
from unirecords.common import Color, Console, colored
from unirecords.members import RecordsError, UserRole, get_user_type
from unirecords.professor_service import get_professor, professor_self_menu
from unirecords.student_service import get_student, student_self_menu

_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    login TEXT NOT NULL UNIQUE,
    password TEXT NOT NULL,
    role TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS "groups" (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    groupName TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS subjects (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS professors (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    userId INTEGER,
    name TEXT NOT NULL,
    surname TEXT NOT NULL,
    groupId INTEGER,
    years INTEGER NOT NULL DEFAULT 0,
    subjectId INTEGER
);
CREATE TABLE IF NOT EXISTS students (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    userId INTEGER,
    name TEXT NOT NULL,
    surname TEXT NOT NULL,
    educationYear INTEGER NOT NULL DEFAULT 1,
    groupId INTEGER
);
CREATE TABLE IF NOT EXISTS scores (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    studentId INTEGER,
    subjectId INTEGER,
    mark INTEGER NOT NULL
);
"""

_ACCOUNT_PROMPTS = ("Login: ", "Password: ")


def _failures(conn) -> tuple[type[Exception], ...]:
    db_error = getattr(conn, "Error", None)
    if isinstance(db_error, type) and issubclass(db_error, Exception):
        return (RecordsError, db_error)
    return (RecordsError,)


def _enter(conn, console: Console, login: str, password: str) -> None:
    try:
        role = get_user_type(conn, login)
    except _failures(conn) as exc:
        console.write(colored(str(exc), Color.RED) + "\n")
        console.write("Error\n")
        return

    try:
        if role is None:
            console.write("Wrong login or password\n")
        elif role is UserRole.ADMIN:
            if get_admin(conn, login, password):
                admin_menu(conn, console, login)
            else:
                console.write(colored(
                    "Admin not found with given login and password", Color.YELLOW
                ) + "\n")
        elif role is UserRole.PROFESSOR:
            professor_self_menu(conn, console, get_professor(conn, login, password))
        else:
            student = get_student(conn, login, password)
            student_self_menu(conn, console, student, login, password)
    except _failures(conn) as exc:
        console.write(colored(str(exc), Color.RED) + "\n")


def log_in(conn, console: Console) -> None:
    """Ask for credentials repeatedly and open the menu matching each account."""
    login_prompt, secret_prompt = _ACCOUNT_PROMPTS
    while True:
        console.clear_screen()
        if console.read_char("If you want to exit program enter '0': ") == "0":
            return
        console.clear_screen()
        login = console.read_word(login_prompt)
        password = console.read_word(secret_prompt)
        _enter(conn, console, login, password)
        console.wait()


def _initialize_database(conn) -> None:
    with conn:
        conn.executescript(_SCHEMA)


def main(argv=None) -> int:
    """Open the records database and start the login loop."""
    parser = argparse.ArgumentParser(
        prog="unirecords", description="University records manager."
    )
    parser.add_argument(
        "database", nargs="?", default="university.db",
        help="path of the SQLite database file (default: university.db)",
    )
    args = parser.parse_args(argv)
    with closing(sqlite3.connect(args.database)) as conn:
        _initialize_database(conn)
        try:
            log_in(conn, Console())
        except (EOFError, KeyboardInterrupt):
            pass
    return 0