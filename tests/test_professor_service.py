import io
import sqlite3

import pytest

from unirecords.common import Console
from unirecords.members import RecordsError
from unirecords.professor import Professor
from unirecords.professor_service import (
    get_professor,
    professor_admin_menu,
    professor_self_menu,
    register_professor,
    update_professor,
)
from unirecords.student import Student
from unirecords.student_service import get_student, register_student

PASSWORD = "password"

SCHEMA = """
CREATE TABLE users (id INTEGER PRIMARY KEY, login TEXT UNIQUE NOT NULL,
                    password TEXT NOT NULL, role TEXT NOT NULL);
CREATE TABLE "groups" (id INTEGER PRIMARY KEY, groupName TEXT UNIQUE NOT NULL);
CREATE TABLE subjects (id INTEGER PRIMARY KEY, name TEXT UNIQUE NOT NULL);
CREATE TABLE students (id INTEGER PRIMARY KEY, userId INTEGER, name TEXT,
                       surname TEXT, educationYear INTEGER, groupId INTEGER);
CREATE TABLE professors (id INTEGER PRIMARY KEY, userId INTEGER, name TEXT,
                         surname TEXT, groupId INTEGER, years INTEGER, subjectId INTEGER);
CREATE TABLE scores (studentId INTEGER, subjectId INTEGER, mark INTEGER);
"""


@pytest.fixture
def conn():
    connection = sqlite3.connect(":memory:")
    connection.executescript(SCHEMA)
    yield connection
    connection.close()


def make_console(*lines):
    return Console(stdin=io.StringIO("".join(f"{line}\n" for line in lines)), stdout=io.StringIO())


def make_professor():
    return Professor(0, "Max", "Born", 5, "G1", "Physics")


def registered(conn):
    prof = make_professor()
    prof.id = register_professor(conn, prof, "max", PASSWORD)
    return prof


def test_register_and_get_round_trip(conn):
    prof = registered(conn)
    loaded = get_professor(conn, "max", PASSWORD)
    assert loaded == prof


def test_duplicate_login_rejected(conn):
    registered(conn)
    with pytest.raises(RecordsError, match="Login already exists"):
        register_professor(conn, Professor(0, "Other", "One", 1, "G2", "Art"), "max", PASSWORD)
    assert conn.execute("SELECT COUNT(*) FROM professors").fetchone()[0] == 1
    assert conn.execute('SELECT COUNT(*) FROM subjects WHERE name = ?', ("Art",)).fetchone()[0] == 0


def test_get_professor_rejects_wrong_password_and_role(conn):
    registered(conn)
    register_student(conn, Student(0, "Ann", "Lee", 1, "G1"), "ann", PASSWORD)
    with pytest.raises(RecordsError, match="Wrong login or password"):
        get_professor(conn, "max", "secret")
    with pytest.raises(RecordsError, match="Wrong login or password"):
        get_professor(conn, "ann", PASSWORD)


def test_update_professor_creates_group_and_subject(conn):
    prof = registered(conn)
    prof.group_curator = "G7"
    prof.subject = "Chemistry"
    prof.years_in_university = 9
    update_professor(conn, prof)
    assert get_professor(conn, "max", PASSWORD) == prof


def test_admin_menu_changes_group_and_saves(conn):
    prof = registered(conn)
    console = make_console("2", "G2", "", "3", "Math", "", "0")
    professor_admin_menu(conn, console, prof)
    loaded = get_professor(conn, "max", PASSWORD)
    assert (loaded.group_curator, loaded.subject) == ("G2", "Math")
    assert "Group curator updated successfully" in console.stdout.getvalue()


def test_admin_menu_next_year_is_saved(conn):
    prof = registered(conn)
    professor_admin_menu(conn, make_console("4", "", "0"), prof)
    assert get_professor(conn, "max", PASSWORD).years_in_university == 6


def test_self_menu_edits_student_and_keeps_scores(conn):
    prof = registered(conn)
    register_student(conn, Student(0, "Ann", "Lee", 1, "G1", [("math", 4)]), "ann", PASSWORD)
    console = make_console("2", "0", "3", "phys", "5", "", "0", "0")
    professor_self_menu(conn, console, prof)
    scores = get_student(conn, "ann", PASSWORD).scores
    assert sorted(scores) == [("math", 4), ("phys", 5)]


def test_self_menu_invalid_student_index(conn):
    prof = registered(conn)
    register_student(conn, Student(0, "Ann", "Lee", 1, "G1"), "ann", PASSWORD)
    console = make_console("2", "9", "", "0")
    professor_self_menu(conn, console, prof)
    assert "Invalid student ID" in console.stdout.getvalue()


def test_self_menu_advances_group(conn):
    prof = registered(conn)
    register_student(conn, Student(0, "Ann", "Lee", 2, "G1"), "ann", PASSWORD)
    register_student(conn, Student(0, "Bob", "Ray", 2, "G2"), "bob", PASSWORD)
    professor_self_menu(conn, make_console("3", "", "0"), prof)
    assert get_student(conn, "ann", PASSWORD).years_in_university == 3
    assert get_student(conn, "bob", PASSWORD).years_in_university == 2