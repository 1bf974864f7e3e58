"""Professor records."""

from __future__ import annotations

from dataclasses import dataclass

from unirecords.members import Member


@dataclass
class Professor(Member):
    """A professor who curates a group and teaches a subject."""

    group_curator: str
    subject: str

    def next_year(self) -> str:
        """Count one more year of teaching and describe it."""
        self.years_in_university += 1
        return f"{self.name} teaching students for {self.years_in_university} years"

    def describe(self) -> str:
        """Short one-line description."""
        return (
            f"id: {self.id}\tProfessor: {self.name} {self.surname}"
            f"\tGroup: {self.group_curator}"
        )

    def describe_all(self) -> str:
        """Full description with subject and years of teaching."""
        return (
            f"Professor id: {self.id} | {self.name} {self.surname}"
            f" Group: {self.group_curator} | with subject: {self.subject}"
            f"\n\tTeaching is university: {self.years_in_university} years"
        )