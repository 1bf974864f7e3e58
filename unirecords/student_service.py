"""Database operations and interactive menus for students."""

from __future__ import annotations

from unirecords.common import Color, Console, colored
from unirecords.members import RecordsError, UserRole, get_group_id
from unirecords.student import FINAL_YEAR, MAX_MARK, MIN_MARK, ScoreError, Student

_STUDENT_QUERY = (
    "SELECT s.id, s.name, s.surname, s.educationYear, g.groupName "
    'FROM students s JOIN "groups" g ON s.groupId = g.id '
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


def _read_scores(cur, student_id: int) -> list[tuple[str, int]]:
    cur.execute(
        "SELECT sub.name, sc.mark FROM scores sc "
        "JOIN subjects sub ON sc.subjectId = sub.id WHERE sc.studentId = ?;",
        (student_id,),
    )
    return [(name, mark) for name, mark in cur.fetchall()]


def _student_from_row(row, scores: list[tuple[str, int]]) -> Student:
    student_id, name, surname, year, group = row
    return Student(
        id=student_id,
        name=name,
        surname=surname,
        years_in_university=year,
        group=group,
        scores=scores,
    )


def register_student(conn, student: Student, login: str, password: str) -> int:
    """Create the account, the student profile and its scores; return the new id."""
    with conn:
        cur = conn.cursor()
        group_id = get_group_id(conn, student.group)
        cur.execute("SELECT 1 FROM users WHERE login = ?;", (login,))
        if cur.fetchone() is not None:
            raise RecordsError("Login already exists")
        cur.execute(
            "INSERT INTO users (login, password, role) VALUES (?, ?, ?);",
            (login, password, UserRole.STUDENT.value),
        )
        user_id = cur.lastrowid
        cur.execute(
            "INSERT INTO students (userId, name, surname, educationYear, groupId) "
            "VALUES (?, ?, ?, ?, ?);",
            (user_id, student.name, student.surname, student.years_in_university, group_id),
        )
        student_id = cur.lastrowid
        for subject, mark in student.scores:
            cur.execute(
                "INSERT INTO scores (studentId, subjectId, mark) VALUES (?, ?, ?);",
                (student_id, _subject_id(cur, subject), mark),
            )
    return student_id


def update_student(conn, student: Student) -> None:
    """Store the student's name, year and the full set of scores."""
    with conn:
        cur = conn.cursor()
        cur.execute(
            "UPDATE students SET name = ?, surname = ?, educationYear = ? WHERE id = ?;",
            (student.name, student.surname, student.years_in_university, student.id),
        )
        cur.execute("DELETE FROM scores WHERE studentId = ?;", (student.id,))
        for subject, mark in student.scores:
            cur.execute(
                "INSERT INTO scores (studentId, subjectId, mark) VALUES (?, ?, ?);",
                (student.id, _subject_id(cur, subject), mark),
            )


def get_student(conn, login: str, password: str) -> Student:
    """Load the student who owns this login, with their scores."""
    cur = conn.cursor()
    cur.execute(
        "SELECT id, role FROM users WHERE login = ? AND password = ?;",
        (login, password),
    )
    user = cur.fetchone()
    if user is None or user[1] != UserRole.STUDENT.value:
        raise RecordsError("Wrong login or password")
    cur.execute(_STUDENT_QUERY + "WHERE s.userId = ?;", (user[0],))
    row = cur.fetchone()
    if row is None:
        raise RecordsError("Student profile not found")
    return _student_from_row(row, _read_scores(cur, row[0]))


def get_students_by_group(conn, group: str) -> list[Student]:
    """All students of a group, with their scores."""
    cur = conn.cursor()
    cur.execute(_STUDENT_QUERY + "WHERE g.groupName = ?;", (group,))
    rows = cur.fetchall()
    return [_student_from_row(row, _read_scores(cur, row[0])) for row in rows]


def advance_group(conn, group: str) -> int:
    """Move every student of a group to the next year; return how many moved."""
    with conn:
        cur = conn.cursor()
        cur.execute(
            "UPDATE students SET educationYear = educationYear + 1 "
            'WHERE groupId = (SELECT id FROM "groups" WHERE groupName = ?);',
            (group,),
        )
        return cur.rowcount


def list_professors_for_group(conn, group: str) -> list[tuple[int, str, str, str]]:
    """(id, name, surname, subject) of every professor curating a group."""
    cur = conn.cursor()
    cur.execute(
        "SELECT p.id, p.name, p.surname, sub.name FROM professors p "
        "JOIN subjects sub ON p.subjectId = sub.id "
        'WHERE p.groupId = (SELECT id FROM "groups" WHERE groupName = ?);',
        (group,),
    )
    return [tuple(row) for row in cur.fetchall()]


def _show_scores(console: Console, student: Student) -> bool:
    if student.scores:
        console.write(student.format_scores() + "\n")
        return True
    console.write(colored("No subjects yet", Color.YELLOW) + "\n")
    return False


def _print_professors(conn, console: Console, group: str) -> None:
    try:
        professors = list_professors_for_group(conn, group)
    except _failures(conn) as exc:
        console.write(colored(str(exc), Color.RED) + "\n")
        return
    if not professors:
        console.write(colored(f"No professors found for group '{group}'", Color.YELLOW) + "\n")
        return
    console.write(f"Professors for group '{group}':\n")
    for prof_id, name, surname, subject in professors:
        console.write(f"ID: {prof_id}\tName: {name}\tSurname: {surname}\tSubject: {subject}\n")


def student_self_menu(conn, console: Console, student: Student, login: str, password: str) -> Student:
    """Menu shown to a logged-in student; return the last loaded record."""
    while True:
        console.clear_screen()
        console.write(student.describe() + "\n")
        _show_scores(console, student)
        choice = console.read_char(
            "\n1. Refresh\n2. Show information about your professors\n0. Exit\nEnter number: "
        )
        if choice == "0":
            return student
        if choice == "1":
            try:
                student = get_student(conn, login, password)
            except _failures(conn) as exc:
                console.write(colored(str(exc), Color.RED) + "\n")
        elif choice == "2":
            console.clear_screen()
            _print_professors(conn, console, student.group)
            console.wait()
        else:
            console.write(colored("Wrong input", Color.YELLOW))
            console.wait()


def _error(console: Console, exc: Exception) -> None:
    console.write(colored(f"Error: {exc}", Color.RED) + "\n")


def _add_subject(console: Console, student: Student) -> None:
    _show_scores(console, student)
    subject = console.read_word("\nWhat subject to add: ")
    try:
        mark = console.read_int(f"Enter mark of {subject}: ")
        student.add_subject(subject, mark)
    except (ScoreError, ValueError) as exc:
        _error(console, exc)
        return
    console.write(colored(f"Added: {subject} with mark {mark}", Color.GREEN) + "\n")


def _edit_mark(console: Console, student: Student) -> None:
    if not _show_scores(console, student):
        return
    subject = console.read_word("\nWhat subject to edit: ")
    try:
        mark = console.read_int(f"Enter mark of {subject}: ")
        old_mark = student.edit_mark(subject, mark)
    except (ScoreError, ValueError) as exc:
        _error(console, exc)
        return
    console.write(colored(f"Changed: {subject} from {old_mark} to {mark}", Color.GREEN) + "\n")


def _delete_score(console: Console, student: Student) -> None:
    if not _show_scores(console, student):
        return
    subject = console.read_word("\nEnter subject to delete: ")
    try:
        student.delete_score(subject)
    except ScoreError as exc:
        _error(console, exc)
        return
    console.write(colored(f"Deleted: {subject}", Color.GREEN) + "\n")


def _print_sorted(console: Console, rows: list[tuple[str, int]]) -> None:
    for subject, mark in rows:
        console.write(f"Subject: {subject}: {mark}\n")


def _sort_by_name(console: Console, student: Student) -> None:
    try:
        student.sorted_by_name()
    except ScoreError as exc:
        _error(console, exc)
        return
    answer = console.read_char("Do you want to sort A-Z? \n(y/n | default: y): ")
    _print_sorted(console, student.sorted_by_name(descending=answer in ("n", "N")))


def _sort_by_mark(console: Console, student: Student) -> None:
    try:
        student.sorted_by_mark()
    except ScoreError as exc:
        _error(console, exc)
        return
    answer = console.read_char("Do you want to sort from 5 to 2? \n(y/n | default: y): ")
    _print_sorted(console, student.sorted_by_mark(ascending=answer in ("n", "N")))


def _ask_mark(console: Console, subject: str) -> int:
    while True:
        try:
            mark = console.read_int(f"Enter new mark at the {subject}: ")
        except ValueError:
            mark = None
        if mark is not None and MIN_MARK <= mark <= MAX_MARK:
            return mark
        console.write(f"Mark must be between {MIN_MARK} and {MAX_MARK}\n")


def _start_session(console: Console, student: Student) -> None:
    marks: dict[str, int] = {}
    if student.is_graduating and student.years_in_university != FINAL_YEAR:
        for subject, _ in student.scores:
            marks[subject] = _ask_mark(console, subject)
    console.write(student.start_session(marks) + "\n\n")


def _print_all(console: Console, student: Student) -> None:
    console.write("\n" + student.describe_all() + "\n")


_ADMIN_ACTIONS = {
    "1": _print_all,
    "2": _show_scores,
    "3": _add_subject,
    "4": _edit_mark,
    "5": _delete_score,
    "6": _sort_by_name,
    "7": _sort_by_mark,
    "8": _start_session,
}

_ADMIN_MENU = (
    "\n\nWhat do you want to do:"
    "\n1. Print everything about student"
    "\n2. Print only scores"
    "\n3. Add subject"
    "\n4. Change mark"
    "\n5. Delete subject"
    "\n6. Sort by name of subject"
    "\n7. Sort by mark"
    "\n8. Start session"
    "\n\n0. Exit"
    "\nEnter number: "
)


def student_admin_menu(console: Console, student: Student) -> None:
    """Menu for editing a student's record in memory."""
    while True:
        console.clear_screen()
        console.write(student.describe() + "\n")
        choice = console.read_char(_ADMIN_MENU)
        if choice == "0":
            return
        action = _ADMIN_ACTIONS.get(choice)
        if action is None:
            console.write(colored("Wrong input", Color.YELLOW))
        else:
            console.clear_screen()
            action(console, student)
        console.wait()