"""Student records: subjects, marks and progression through the years."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from unirecords.members import Member, RecordsError

MIN_MARK = 2
MAX_MARK = 5
FINAL_YEAR = 4


class ScoreError(RecordsError):
    """Raised when a subject or mark operation is invalid."""


def _check_mark(mark: int) -> None:
    if not MIN_MARK <= mark <= MAX_MARK:
        raise ScoreError(f"Mark must be between {MIN_MARK} and {MAX_MARK}")


@dataclass
class Student(Member):
    """A student with a group and a list of (subject, mark) scores."""

    group: str
    scores: list[tuple[str, int]] = field(default_factory=list)
    is_graduating: bool = True

    def format_scores(self) -> str:
        """List the current subjects and marks as text."""
        if not self.scores:
            return "No subjects yet"
        lines = [f"Current subjects ({len(self.scores)}):"]
        lines.extend(f"\t{subject}: {mark}" for subject, mark in self.scores)
        return "\n".join(lines)

    def has_subject(self, subject: str) -> bool:
        """Whether the student already has a mark in this subject."""
        return any(name == subject for name, _ in self.scores)

    def add_subject(self, subject: str, mark: int) -> None:
        """Add a new subject with its mark."""
        if self.has_subject(subject):
            raise ScoreError(f"Subject '{subject}' already exists")
        _check_mark(mark)
        self.scores.append((subject, mark))

    def edit_mark(self, subject: str, mark: int) -> int:
        """Change the mark of an existing subject and return the old mark."""
        if not self.has_subject(subject):
            raise ScoreError(f"Subject '{subject}' not found")
        _check_mark(mark)
        for position, (name, old_mark) in enumerate(self.scores):
            if name == subject:
                self.scores[position] = (name, mark)
                return old_mark
        raise ScoreError(f"Subject '{subject}' not found")

    def delete_score(self, subject: str) -> None:
        """Remove the first score for this subject."""
        for position, (name, _) in enumerate(self.scores):
            if name == subject:
                del self.scores[position]
                return
        raise ScoreError(f"Subject '{subject}' not found")

    def sorted_by_name(self, descending: bool = False) -> list[tuple[str, int]]:
        """Scores ordered by subject name, A-Z unless descending."""
        if not self.scores:
            raise ScoreError("Not subjects yet")
        return sorted(self.scores, key=lambda item: item[0], reverse=descending)

    def sorted_by_mark(self, ascending: bool = False) -> list[tuple[str, int]]:
        """Scores ordered by mark, highest first unless ascending."""
        if not self.scores:
            raise ScoreError("Not subjects yet")
        return sorted(self.scores, key=lambda item: item[1], reverse=not ascending)

    def next_year(self) -> str:
        """Advance the student one year and describe what happened."""
        if not self.is_graduating:
            message = (
                f"Student {self.name} end graduating at university "
                f"{self.years_in_university} years ago"
            )
            self.years_in_university += 1
            return message

        if self.years_in_university == FINAL_YEAR:
            self.years_in_university = 1
            self.is_graduating = False
            self.scores.clear()
            return f"Student {self.name} ended study in university"

        self.years_in_university += 1
        return f"Student {self.name} is now educating {self.years_in_university} year"

    def start_session(self, marks: Mapping[str, int]) -> str:
        """Advance a year and, if still studying, replace every mark.

        ``marks`` maps each current subject to its new mark. All marks are
        checked before anything changes.
        """
        keeps_studying = self.is_graduating and self.years_in_university != FINAL_YEAR
        if keeps_studying:
            for subject, _ in self.scores:
                if subject not in marks:
                    raise ScoreError(f"No mark given for '{subject}'")
                _check_mark(marks[subject])

        message = self.next_year()
        if self.is_graduating:
            self.scores = [(subject, marks[subject]) for subject, _ in self.scores]
            message += "\nAll marks for this student changed"
        return message

    def describe(self) -> str:
        """Short one-line description."""
        return (
            f"id: {self.id}\tStudent {self.name} {self.surname}\tGroup: {self.group}"
        )

    def describe_all(self) -> str:
        """Full description with year and scores."""
        header = f"Student id: {self.id} | {self.name} {self.surname}"
        if self.is_graduating:
            return (
                f"{header}\n\tGraduating year: {self.years_in_university}\n"
                f"{self.format_scores()}"
            )
        return (
            f"{header}\n\tStudent end studing at university "
            f"{self.years_in_university} years ago"
        )