"""Database operations and interactive menus for professors."""

from __future__ import annotations

from unirecords.common import Color, Console, colored
from unirecords.members import RecordsError, UserRole, get_group_id
from unirecords.professor import Professor
from unirecords.student_service import (
    advance_group,
    get_students_by_group,
    student_admin_menu,
    update_student,
)


def _failures(conn) -> tuple[type[Exception], ...]:
    db_error = getattr(conn, "Error", None)
    if isinstance(db_error, type) and issubclass(db_error, Exception):
        return (RecordsError, db_error)
    return (RecordsError,)


def _subject_id(cur, name: str) -> int:
    cur.execute("SELECT id FROM subjects WHERE name = ?;", (name,))
    row = cur.fetchone()
    if row is not None:
        return row[0]
    cur.execute("INSERT INTO subjects (name) VALUES (?);", (name,))
    return cur.lastrowid


def register_professor(conn, professor: Professor, login: str, password: str) -> int:
    """Create the account and the professor profile; return the new id."""
    with conn:
        cur = conn.cursor()
        group_id = get_group_id(conn, professor.group_curator)
        cur.execute("SELECT 1 FROM users WHERE login = ?;", (login,))
        if cur.fetchone() is not None:
            raise RecordsError("Login already exists")
        cur.execute(
            "INSERT INTO users (login, password, role) VALUES (?, ?, ?);",
            (login, password, UserRole.PROFESSOR.value),
        )
        user_id = cur.lastrowid
        subject_id = _subject_id(cur, professor.subject)
        cur.execute(
            "INSERT INTO professors (userId, name, surname, groupId, years, subjectId) "
            "VALUES (?, ?, ?, ?, ?, ?);",
            (user_id, professor.name, professor.surname, group_id,
             professor.years_in_university, subject_id),
        )
        return cur.lastrowid


def update_professor(conn, professor: Professor) -> None:
    """Store the professor's details, creating group and subject if needed."""
    with conn:
        cur = conn.cursor()
        group_id = get_group_id(conn, professor.group_curator)
        subject_id = _subject_id(cur, professor.subject)
        cur.execute(
            "UPDATE professors SET name = ?, surname = ?, groupId = ?, years = ?, "
            "subjectId = ? WHERE id = ?;",
            (professor.name, professor.surname, group_id,
             professor.years_in_university, subject_id, professor.id),
        )


def get_professor(conn, login: str, password: str) -> Professor:
    """Load the professor who owns this login."""
    cur = conn.cursor()
    cur.execute(
        "SELECT id, role FROM users WHERE login = ? AND password = ?;",
        (login, password),
    )
    user = cur.fetchone()
    if user is None or user[1] != UserRole.PROFESSOR.value:
        raise RecordsError("Wrong login or password")
    cur.execute(
        "SELECT p.id, p.name, p.surname, p.years, g.groupName, sub.name "
        'FROM professors p JOIN "groups" g ON p.groupId = g.id '
        "JOIN subjects sub ON p.subjectId = sub.id WHERE p.userId = ?;",
        (user[0],),
    )
    row = cur.fetchone()
    if row is None:
        raise RecordsError("Professor profile not found")
    prof_id, name, surname, years, group, subject = row
    return Professor(
        id=prof_id,
        name=name,
        surname=surname,
        years_in_university=years,
        group_curator=group,
        subject=subject,
    )


def _edit_group_student(conn, console: Console, students) -> None:
    for position, student in enumerate(students):
        console.write(f"{position}. {student.describe()}\n")
    try:
        choice = console.read_int("\nEnter number of student to edit: ")
    except ValueError:
        choice = -1
    if not 0 <= choice < len(students):
        console.write(colored("Invalid student ID", Color.YELLOW) + "\n")
        console.wait()
        return
    student = students[choice]
    student_admin_menu(console, student)
    try:
        update_student(conn, student)
    except _failures(conn) as exc:
        console.write(colored(str(exc), Color.RED) + "\n")
        return
    console.write(f"Student {student.name} successfully updated in database\n")


def professor_self_menu(conn, console: Console, professor: Professor) -> None:
    """Menu shown to a logged-in professor."""
    group = professor.group_curator
    students = get_students_by_group(conn, group)
    if not students:
        console.write(colored(f"No students found in group '{group}'", Color.YELLOW) + "\n")
    while True:
        console.clear_screen()
        console.write(professor.describe() + "\n")
        choice = console.read_char(
            "\nWhat do you want to do:"
            "\n1. Show all information about professor"
            f"\n2. Edit students from {group}"
            f"\n3. Start next year for students in group {group}"
            "\n\n0. Exit"
            "\nEnter number: "
        )
        if choice == "0":
            return
        if choice == "1":
            console.clear_screen()
            console.write("\n" + professor.describe_all() + "\n")
            console.wait()
        elif choice == "2":
            console.clear_screen()
            _edit_group_student(conn, console, students)
        elif choice == "3":
            console.clear_screen()
            try:
                advance_group(conn, group)
            except _failures(conn) as exc:
                console.write(colored(str(exc), Color.RED) + "\n")
            else:
                console.write(
                    f"All students in group '{group}' have been advanced to the next year.\n"
                )
            console.wait()
        else:
            console.write(colored("Wrong input", Color.YELLOW))
            console.wait()


def professor_admin_menu(conn, console: Console, professor: Professor) -> None:
    """Menu for editing a professor; saves after every step."""
    while True:
        console.clear_screen()
        console.write(professor.describe() + "\n")
        choice = console.read_char(
            "\n\nWhat do you want to do:"
            "\n1. Print everything about professor"
            "\n2. Edit group curator"
            "\n3. Edit subject"
            f"\n4. Start next year in group {professor.group_curator}"
            "\n\n0. Exit"
            "\nEnter number: "
        )
        if choice == "1":
            console.clear_screen()
            console.write("\n" + professor.describe_all() + "\n")
            console.wait()
        elif choice == "2":
            console.clear_screen()
            professor.group_curator = console.read_word("Enter new group curator: ")
            console.write(colored("Group curator updated successfully", Color.GREEN) + "\n")
            console.wait()
        elif choice == "3":
            console.clear_screen()
            professor.subject = console.read_word("Enter new subject: ")
            console.write(colored("Subject updated successfully", Color.GREEN) + "\n")
            console.wait()
        elif choice == "4":
            console.clear_screen()
            console.write(professor.next_year() + "\n")
            console.wait()
        elif choice != "0":
            console.write(colored("Wrong input", Color.YELLOW))
            console.wait()

        try:
            update_professor(conn, professor)
        except _failures(conn) as exc:
            console.write(colored(str(exc), Color.RED) + "\n")
        else:
            console.write(colored(
                f"Professor {professor.name} successfully updated in database", Color.GREEN
            ) + "\n")

        if choice == "0":
            return