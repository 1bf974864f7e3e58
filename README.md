# unirecords

A terminal front-end for a small university records database kept in an
SQLite file. It stores user accounts (admins, professors and students),
study groups, subjects and the marks students hold in them, and gives
each kind of user a menu of its own.

## Installing

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Running

```
unirecords [DATABASE]
```

`DATABASE` is the path of the SQLite file to use; it defaults to
`university.db` in the current directory. The tables are created if they
do not exist yet.

The program first asks whether to exit (enter `0`); any other answer
leads to a login and password prompt. What comes next depends on the
role stored for that login:

- **admin**: list every professor and student and edit any of them; run
  a self-check that registers a test group, professor, student and mark
  and then removes them again; start the next year for everyone; remove
  scores, subjects and groups that no longer refer to anything; and
  register new professors or students.
- **professor**: view their own record, edit the students of the group
  they curate, and advance that whole group to the next year.
- **student**: view their record and marks, reload them from the
  database, and list the professors whose group is theirs.

An unknown login gets "Wrong login or password". The program ends when
`0` is entered at the first prompt, when input ends, or on Ctrl-C.

## Marks and study years

Marks run from 2 to 5; anything outside that range is refused, as is a
subject a student already has (when adding) or lacks (when editing or
deleting). Scores can be listed sorted by subject name (A–Z by default)
or by mark (5 down to 2 by default).

Starting a session moves a student to the next study year and then sets
a new mark in every subject. A student finishing year 4 is marked as
graduated instead: the year count restarts at 1, now counting years
since graduation, and their scores are cleared. A professor's "next
year" adds one to their years of teaching.

## Using it from Python

The service functions take an open `sqlite3.Connection` whose tables
already exist (running the `unirecords` command once against a file
creates them).

```python
import sqlite3

from unirecords.student import Student
from unirecords.student_service import register_student, get_student

conn = sqlite3.connect("university.db")
password = "password"

student = Student(id=0, name="Ada", surname="Lovelace",
                  years_in_university=1, group="G1")
student.add_subject("Mathematics", 5)
register_student(conn, student, "ada", password)

loaded = get_student(conn, "ada", password)
print(loaded.describe_all())
```

What is available:

- `unirecords.members`: `Member`, `UserRole`, `RecordsError`,
  `get_user_type(conn, login)` (a `UserRole`, or `None` for an unknown
  login) and `get_group_id(conn, group_name)` (creates the group if it is
  missing).
- `unirecords.student`: `Student` with `has_subject`, `add_subject`,
  `edit_mark` (returns the old mark), `delete_score`, `sorted_by_name`,
  `sorted_by_mark`, `next_year`, `start_session(marks)` (a mapping from
  each subject to its new mark, all checked before anything changes),
  `format_scores`, `describe` and `describe_all`; and `ScoreError`.
- `unirecords.professor`: `Professor` with `next_year`, `describe` and
  `describe_all`.
- `unirecords.student_service`: `register_student`, `update_student`,
  `get_student`, `get_students_by_group`, `advance_group`,
  `list_professors_for_group`, and the menus `student_self_menu` and
  `student_admin_menu`.
- `unirecords.professor_service`: `register_professor`,
  `update_professor`, `get_professor`, and the menus
  `professor_self_menu` and `professor_admin_menu`.
- `unirecords.admin`: `get_admin`, `list_all_users`, `start_next_year`,
  `check_extensions` (returns how many scores, subjects and groups were
  removed), `create_user`, `start_editing_professor`,
  `start_editing_student`, `run_tests` and `admin_menu`.
- `unirecords.common`: `Console` (prompts and screen clearing on any
  pair of text streams), `Color` and `colored`.
- `unirecords.login`: `log_in(conn, console)` and `main(argv=None)`,
  the entry point of the `unirecords` command.

Operations that cannot be carried out raise
`unirecords.members.RecordsError`; invalid marks or subjects raise
`unirecords.student.ScoreError`, a subclass of it.

## What it does not do

- There is no way to create an admin account from the program. Add one
  directly to the `users` table, for example:

  ```python
  import sqlite3

  password = "password"
  with sqlite3.connect("university.db") as conn:
      conn.execute(
          "INSERT INTO users (login, password, role) VALUES (?, ?, 'admin')",
          ("admin", password),
      )
  ```

- Passwords are stored and compared as plain text; nothing is hashed.
- Only SQLite files are supported; there is no connection to a database
  server.