import io
import sqlite3

import pytest

from unirecords.common import Console
from unirecords.members import RecordsError
from unirecords.student import Student
from unirecords.student_service import (
    advance_group,
    get_student,
    get_students_by_group,
    list_professors_for_group,
    register_student,
    student_admin_menu,
    student_self_menu,
    update_student,
)

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


def make_student(scores=None, year=1):
    return Student(id=0, name="Ann", surname="Lee", years_in_university=year,
                   group="G1", scores=list(scores or []))


def test_register_and_get_round_trip(conn):
    student = make_student([("math", 4), ("art", 5)], year=2)
    new_id = register_student(conn, student, "ann", PASSWORD)
    loaded = get_student(conn, "ann", PASSWORD)
    assert loaded.id == new_id
    assert (loaded.name, loaded.surname, loaded.years_in_university, loaded.group) == (
        "Ann", "Lee", 2, "G1")
    assert sorted(loaded.scores) == sorted(student.scores)


def test_duplicate_login_rejected_without_changes(conn):
    register_student(conn, make_student(), "ann", PASSWORD)
    with pytest.raises(RecordsError, match="Login already exists"):
        register_student(conn, make_student([("x", 3)]), "ann", PASSWORD)
    assert conn.execute("SELECT COUNT(*) FROM students").fetchone()[0] == 1
    assert conn.execute("SELECT COUNT(*) FROM subjects").fetchone()[0] == 0


def test_wrong_password_raises(conn):
    register_student(conn, make_student(), "ann", PASSWORD)
    with pytest.raises(RecordsError, match="Wrong login or password"):
        get_student(conn, "ann", "secret")


def test_non_student_login_raises(conn):
    conn.execute("INSERT INTO users (login, password, role) VALUES ('boss', ?, 'admin')", (PASSWORD,))
    with pytest.raises(RecordsError, match="Wrong login or password"):
        get_student(conn, "boss", PASSWORD)


def test_update_replaces_scores(conn):
    student = make_student([("math", 4)])
    student.id = register_student(conn, student, "ann", PASSWORD)
    student.name = "Anna"
    student.years_in_university = 3
    student.scores = [("bio", 2)]
    update_student(conn, student)
    loaded = get_student(conn, "ann", PASSWORD)
    assert loaded.name == "Anna"
    assert loaded.years_in_university == 3
    assert loaded.scores == [("bio", 2)]


def test_students_by_group_and_advance(conn):
    register_student(conn, make_student([("math", 3)]), "a", PASSWORD)
    register_student(conn, make_student(year=2), "b", PASSWORD)
    other = Student(id=0, name="Bob", surname="Ray", years_in_university=1, group="G2")
    register_student(conn, other, "c", PASSWORD)

    group = get_students_by_group(conn, "G1")
    assert len(group) == 2
    assert {s.group for s in group} == {"G1"}
    assert [("math", 3)] in [s.scores for s in group]

    assert advance_group(conn, "G1") == 2
    years = sorted(s.years_in_university for s in get_students_by_group(conn, "G1"))
    assert years == [2, 3]
    assert get_students_by_group(conn, "G2")[0].years_in_university == 1
    assert get_students_by_group(conn, "missing") == []


def test_list_professors_for_group(conn):
    register_student(conn, make_student(), "ann", PASSWORD)
    conn.execute("INSERT INTO subjects (name) VALUES ('Physics')")
    conn.execute("INSERT INTO professors (userId, name, surname, groupId, years, subjectId) "
                 "VALUES (9, 'Max', 'Born', 1, 5, 1)")
    assert list_professors_for_group(conn, "G1") == [(1, "Max", "Born", "Physics")]
    assert list_professors_for_group(conn, "G9") == []


def test_self_menu_refresh_loads_from_database(conn):
    register_student(conn, make_student([("math", 5)]), "ann", PASSWORD)
    stale = make_student()
    result = student_self_menu(conn, make_console("1", "0"), stale, "ann", PASSWORD)
    assert result.scores == [("math", 5)]


def test_self_menu_wrong_input(conn):
    console = make_console("x", "", "0")
    student = make_student()
    result = student_self_menu(conn, console, student, "ann", PASSWORD)
    assert result is student
    assert "Wrong input" in console.stdout.getvalue()


def test_admin_menu_add_edit_delete():
    student = make_student()
    student_admin_menu(make_console("3", "math", "4", "", "3", "art", "5", "", "0"), student)
    assert student.scores == [("math", 4), ("art", 5)]
    student_admin_menu(make_console("4", "math", "2", "", "5", "art", "", "0"), student)
    assert student.scores == [("math", 2)]


def test_admin_menu_reports_bad_mark():
    student = make_student()
    console = make_console("3", "math", "9", "", "0")
    student_admin_menu(console, student)
    assert student.scores == []
    assert "Mark must be between 2 and 5" in console.stdout.getvalue()


def test_admin_menu_sort_by_name_descending():
    student = make_student([("b", 3), ("a", 5), ("c", 4)])
    console = make_console("6", "n", "", "0")
    student_admin_menu(console, student)
    out = console.stdout.getvalue()
    assert out.index("Subject: c: 4") < out.index("Subject: b: 3") < out.index("Subject: a: 5")
    assert student.scores == [("b", 3), ("a", 5), ("c", 4)]


def test_admin_menu_session_retries_invalid_mark():
    student = make_student([("a", 3)])
    console = make_console("8", "7", "5", "", "0")
    student_admin_menu(console, student)
    assert student.scores == [("a", 5)]
    assert student.years_in_university == 2
    assert "Mark must be between 2 and 5" in console.stdout.getvalue()