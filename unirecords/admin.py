"""Administrator menu and database maintenance operations."""

from __future__ import annotations

from unirecords.common import Color, Console, colored
from unirecords.members import RecordsError, UserRole
from unirecords.professor import Professor
from unirecords.professor_service import professor_admin_menu, register_professor, update_professor
from unirecords.student import Student
from unirecords.student_service import register_student, student_admin_menu, update_student

_TEST_GROUP = "testGroup"
_TEST_PROFESSOR_LOGIN = "prof_test"
_TEST_STUDENT_LOGIN = "stud_test"
_TEST_PASSWORD = "password"
_TEST_SUBJECT = "testSubject"

_ACCOUNT_PROMPTS = ("Enter login: ", "Enter password: ")


class _NotFound(RecordsError):
    """A record requested by id does not exist."""


def _failures(conn) -> tuple[type[Exception], ...]:
    db_error = getattr(conn, "Error", None)
    if isinstance(db_error, type) and issubclass(db_error, Exception):
        return (RecordsError, db_error)
    return (RecordsError,)


def get_admin(conn, login: str, password: str) -> bool:
    """Whether an admin account with this login and password exists."""
    cur = conn.cursor()
    cur.execute(
        "SELECT login, password FROM users "
        "WHERE role = ? AND login = ? AND password = ? LIMIT 1;",
        (UserRole.ADMIN.value, login, password),
    )
    return cur.fetchone() is not None


def list_all_users(conn) -> tuple[list[tuple[int, str, str]], list[tuple[int, str, str]]]:
    """(id, name, surname) of all professors and of all students, ordered by id."""
    cur = conn.cursor()
    cur.execute("SELECT id, name, surname FROM professors ORDER BY id;")
    professors = [tuple(row) for row in cur.fetchall()]
    cur.execute("SELECT id, name, surname FROM students ORDER BY id;")
    students = [tuple(row) for row in cur.fetchall()]
    return professors, students


def start_next_year(conn) -> tuple[int, int]:
    """Advance every student and professor one year; return both row counts."""
    with conn:
        cur = conn.cursor()
        cur.execute("UPDATE students SET educationYear = educationYear + 1;")
        students = cur.rowcount
        cur.execute("UPDATE professors SET years = years + 1;")
        professors = cur.rowcount
    return students, professors


def check_extensions(conn) -> dict[str, int]:
    """Remove orphaned scores, subjects and groups; return how many rows went."""
    with conn:
        cur = conn.cursor()
        cur.execute(
            "DELETE FROM scores "
            "WHERE studentId NOT IN (SELECT id FROM students) "
            "OR subjectId NOT IN (SELECT id FROM subjects);"
        )
        scores = cur.rowcount
        cur.execute(
            "DELETE FROM subjects "
            "WHERE id NOT IN (SELECT DISTINCT subjectId FROM scores) "
            "AND id NOT IN (SELECT DISTINCT subjectId FROM professors);"
        )
        subjects = cur.rowcount
        cur.execute(
            'DELETE FROM "groups" WHERE id NOT IN (SELECT DISTINCT groupId FROM professors);'
        )
        groups = cur.rowcount
        cur.execute(
            'DELETE FROM "groups" WHERE id NOT IN (SELECT DISTINCT groupId FROM students);'
        )
        groups += cur.rowcount
    return {"scores": scores, "subjects": subjects, "groups": groups}


def start_editing_professor(conn, console: Console, professor_id: int) -> Professor:
    """Load a professor by id, run the edit menu and save the result."""
    cur = conn.cursor()
    cur.execute(
        "SELECT p.id, p.name, p.surname, p.years, sub.name, g.groupName "
        "FROM professors p "
        "JOIN subjects sub ON p.subjectId = sub.id "
        'JOIN "groups" g ON p.groupId = g.id '
        "WHERE p.id = ?;",
        (professor_id,),
    )
    row = cur.fetchone()
    if row is None:
        raise _NotFound(f"Professor with ID {professor_id} not found")
    prof_id, name, surname, years, subject, group = row
    professor = Professor(
        id=prof_id,
        name=name,
        surname=surname,
        years_in_university=years,
        group_curator=group,
        subject=subject,
    )
    professor_admin_menu(conn, console, professor)
    update_professor(conn, professor)
    return professor


def start_editing_student(conn, console: Console, student_id: int) -> Student:
    """Load a student by id with scores, run the edit menu and save the result."""
    cur = conn.cursor()
    cur.execute(
        "SELECT s.id, s.name, s.surname, s.educationYear, g.groupName "
        'FROM students s JOIN "groups" g ON s.groupId = g.id '
        "WHERE s.id = ?;",
        (student_id,),
    )
    row = cur.fetchone()
    if row is None:
        raise _NotFound(f"Student with ID {student_id} not found")
    stud_id, name, surname, year, group = row
    cur.execute(
        "SELECT sub.name, sc.mark FROM scores sc "
        "JOIN subjects sub ON sc.subjectId = sub.id WHERE sc.studentId = ?;",
        (student_id,),
    )
    student = Student(
        id=stud_id,
        name=name,
        surname=surname,
        years_in_university=year,
        group=group,
        scores=[(subject, mark) for subject, mark in cur.fetchall()],
    )
    student_admin_menu(console, student)
    update_student(conn, student)
    console.write(f"Student {student.name} successfully updated in database\n")
    return student


def _add_test_group(conn) -> str:
    with conn:
        cur = conn.cursor()
        cur.execute('INSERT INTO "groups" (groupName) VALUES (?);', (_TEST_GROUP,))
        return f"Group added successfully with ID: {cur.lastrowid}"


def _add_test_professor(conn) -> str:
    professor = Professor(
        id=0,
        name="testName",
        surname="testSurname",
        years_in_university=5,
        group_curator=_TEST_GROUP,
        subject="Mathematics",
    )
    register_professor(conn, professor, _TEST_PROFESSOR_LOGIN, _TEST_PASSWORD)
    return "Professor added successfully"


def _add_test_student(conn) -> str:
    student = Student(
        id=0,
        name="testStudent",
        surname="testSurname",
        years_in_university=2,
        group=_TEST_GROUP,
        scores=[("test1", 4), ("test2", 5), ("test3", 3)],
    )
    register_student(conn, student, _TEST_STUDENT_LOGIN, _TEST_PASSWORD)
    return "Student added successfully"


def _add_test_mark(conn) -> str:
    with conn:
        cur = conn.cursor()
        cur.execute(
            "SELECT s.id FROM students s JOIN users u ON s.userId = u.id WHERE u.login = ?;",
            (_TEST_STUDENT_LOGIN,),
        )
        row = cur.fetchone()
        if row is None:
            raise RecordsError("Student not found")
        student_id = row[0]
        cur.execute("SELECT id FROM subjects WHERE name = ?;", (_TEST_SUBJECT,))
        subject = cur.fetchone()
        if subject is None:
            cur.execute("INSERT INTO subjects (name) VALUES (?);", (_TEST_SUBJECT,))
            subject_id = cur.lastrowid
        else:
            subject_id = subject[0]
        cur.execute(
            "INSERT INTO scores (studentId, subjectId, mark) VALUES (?, ?, ?);",
            (student_id, subject_id, 5),
        )
    return "Marks added successfully"


def _remove_test_data(conn) -> str:
    with conn:
        cur = conn.cursor()
        cur.execute(
            "DELETE FROM scores WHERE studentId IN (SELECT s.id FROM students s "
            "JOIN users u ON s.userId = u.id WHERE u.login IN (?));",
            (_TEST_STUDENT_LOGIN,),
        )
        cur.execute(
            "DELETE FROM students WHERE userId IN (SELECT id FROM users WHERE login = ?);",
            (_TEST_STUDENT_LOGIN,),
        )
        cur.execute(
            "DELETE FROM professors WHERE userId IN (SELECT id FROM users WHERE login = ?);",
            (_TEST_PROFESSOR_LOGIN,),
        )
        cur.execute(
            "DELETE FROM subjects WHERE name IN (?, ?, ?, ?);",
            ("test1", "test2", "test3", _TEST_SUBJECT),
        )
        cur.execute(
            "DELETE FROM users WHERE login IN (?, ?);",
            (_TEST_STUDENT_LOGIN, _TEST_PROFESSOR_LOGIN),
        )
        cur.execute('DELETE FROM "groups" WHERE groupName = ?;', (_TEST_GROUP,))
    return "All test data deleted successfully"


def _run_step(conn, console: Console, title: str, failure: str, step) -> bool:
    if title:
        console.write(title + "\n")
    try:
        message = step(conn)
    except _failures(conn) as exc:
        console.write(colored(f"{failure}: {exc}", Color.RED) + "\n\n")
        return False
    console.write(colored(message, Color.GREEN) + "\n\n")
    return True


def run_tests(conn, console: Console) -> list[bool]:
    """Exercise registration against the database, then remove the test data.

    Returns whether each of the four steps and the final clean-up succeeded.
    """
    console.write("Starting tests...\n\n")
    results = [
        _run_step(conn, console, "Test 1: Adding a group...", "Failed to add group", _add_test_group),
        _run_step(conn, console, "Test 2: Adding a professor...", "Failed to add professor",
                  _add_test_professor),
        _run_step(conn, console, "Test 3: Adding a student...", "Failed to add student",
                  _add_test_student),
        _run_step(conn, console, "Test 4: Adding additional marks to student...",
                  "Failed to add marks", _add_test_mark),
    ]
    console.wait()
    console.write("Clearing up test data...\n")
    results.append(
        _run_step(conn, console, "", "Failed to cleanup test data", _remove_test_data)
    )
    console.write("Tests completed.\n")
    return results


def create_user(conn, console: Console) -> int | None:
    """Ask for a new professor or student and register them; return the new id."""
    console.write("Creating a new user...\n")
    role = console.read_char("Enter role of user to create (1. professor, 2. student): ")
    login_prompt, secret_prompt = _ACCOUNT_PROMPTS
    login = console.read_line(login_prompt)
    password = console.read_line(secret_prompt)

    try:
        if role == "1":
            name = console.read_line("Enter professor name: ")
            surname = console.read_line("Enter professor surname: ")
            years = console.read_int("Enter years in university: ")
            group = console.read_line("Enter group curator: ")
            subject = console.read_line("Enter subject: ")
            professor = Professor(
                id=0, name=name, surname=surname, years_in_university=years,
                group_curator=group, subject=subject,
            )
            new_id = register_professor(conn, professor, login, password)
            console.write("Professor registered successfully\n")
            return new_id
        if role == "2":
            name = console.read_line("Enter student name: ")
            surname = console.read_line("Enter student surname: ")
            year = console.read_int("Enter education year: ")
            group = console.read_line("Enter group: ")
            student = Student(
                id=0, name=name, surname=surname, years_in_university=year, group=group,
            )
            new_id = register_student(conn, student, login, password)
            console.write(colored(f"Student {name} successfully registered", Color.GREEN) + "\n")
            return new_id
    except (ValueError, *_failures(conn)) as exc:
        console.write(colored(str(exc), Color.RED) + "\n")
    return None


def _show_users(conn, console: Console) -> None:
    professors, students = list_all_users(conn)
    for title, rows, empty in (
        ("All professors in database:", professors, "No professors found in database"),
        ("All students in database:", students, "No students found in database"),
    ):
        if not rows:
            console.write(colored(empty, Color.YELLOW) + "\n")
        console.write(title + "\n")
        for user_id, name, surname in rows:
            console.write(f"ID: {user_id} | Name: {name} | Surname: {surname}\n")


def _edit_user(conn, console: Console) -> None:
    try:
        _show_users(conn, console)
        role = console.read_int("\nEnter role of user to edit (1. professors, 2. students): ")
        if role == 1:
            start_editing_professor(conn, console, console.read_int("Enter professor ID to edit: "))
        elif role == 2:
            start_editing_student(conn, console, console.read_int("Enter student ID to edit: "))
        else:
            console.write(colored("Invalid choice", Color.YELLOW) + "\n")
    except ValueError:
        console.write(colored("Invalid choice", Color.YELLOW) + "\n")
    except _NotFound as exc:
        console.write(colored(str(exc), Color.YELLOW) + "\n")
    except _failures(conn) as exc:
        console.write(colored(str(exc), Color.RED) + "\n")


def _next_year(conn, console: Console) -> None:
    try:
        start_next_year(conn)
    except _failures(conn) as exc:
        console.write(colored(f"Failed to start next year: {exc}", Color.RED) + "\n\n")
        return
    console.write(colored(
        "Started next year for all students and professors successfully", Color.GREEN
    ) + "\n")


def _check(conn, console: Console) -> None:
    console.write("Starting extension checks...\n\n")
    try:
        check_extensions(conn)
    except _failures(conn) as exc:
        console.write(colored(f"Error checking extensions: {exc}", Color.RED) + "\n")
        return
    for checked, name in (
        ("scores without valid students or subjects", "Scores"),
        ("subjects without assigned professors and students", "Subjects"),
        ("groups without assigned professors and students", "Groups"),
    ):
        console.write(f"Checking {checked}...\n")
        console.write(colored(f"{name} extension check completed successfully", Color.GREEN) + "\n")
    console.write("\nAll extension checks completed.\n")


_MENU = (
    "\nWhat do you want to do:"
    "\n1. Show all users & edit them"
    "\n2. Run tests"
    "\n3. Start next year for all members"
    "\n4. Check group, marks and subject extensions (clear if any issues found)"
    "\n5. Register user (professor/student)"
    "\n0. Exit"
    "\nEnter number: "
)

_ACTIONS = {
    "1": _edit_user,
    "2": run_tests,
    "3": _next_year,
    "4": _check,
    "5": create_user,
}


def admin_menu(conn, console: Console, login: str) -> None:
    """Main menu for a logged-in administrator."""
    while True:
        console.clear_screen()
        choice = console.read_char(f"Admin panel as {login}" + _MENU)
        if choice == "0":
            return
        action = _ACTIONS.get(choice)
        if action is None:
            console.write(colored("Wrong input", Color.YELLOW))
        else:
            console.clear_screen()
            action(conn, console)
        console.wait()