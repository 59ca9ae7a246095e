"""Student records: the two kinds of student and how their credits are weighted."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class StudentKind(str, Enum):
    """The kind of a student, valued by the label stored in the data file."""

    UNDERGRADUATE = "本科生"
    POSTGRADUATE = "研究生"

    @property
    def multiplier(self) -> float:
        """Factor applied to raw credits for this kind of student."""
        return _MULTIPLIERS[self]

    def __str__(self) -> str:
        return self.value


_MULTIPLIERS = {
    StudentKind.UNDERGRADUATE: 1.5,
    StudentKind.POSTGRADUATE: 2.0,
}


@dataclass
class Student(ABC):
    """A student with an id, personal details and raw (unweighted) credits."""

    student_id: str = ""
    name: str = ""
    gender: str = ""
    age: int = 0
    raw_credits: float = 0.0

    @abstractmethod
    def kind(self) -> StudentKind:
        """Return the kind of this student."""

    def credits(self) -> float:
        """Return the credits weighted by the student's kind."""
        return self.raw_credits * self.kind().multiplier


@dataclass
class Undergraduate(Student):
    """An undergraduate; credits count one and a half times."""

    def kind(self) -> StudentKind:
        return StudentKind.UNDERGRADUATE


@dataclass
class Postgraduate(Student):
    """A postgraduate; credits count double."""

    def kind(self) -> StudentKind:
        return StudentKind.POSTGRADUATE


_CLASSES: dict[StudentKind, type[Student]] = {
    StudentKind.UNDERGRADUATE: Undergraduate,
    StudentKind.POSTGRADUATE: Postgraduate,
}


def make_student(
    kind: StudentKind | str,
    student_id: str,
    name: str,
    gender: str,
    age: int,
    raw_credits: float,
) -> Student:
    """Create a student of the given kind.

    ``kind`` may be a :class:`StudentKind` or its label; an unknown label
    raises :class:`ValueError`.
    """
    cls = _CLASSES[StudentKind(kind)]
    return cls(student_id, name, gender, age, raw_credits)