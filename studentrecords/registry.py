"""The in-memory student roster, with form validation and persistence."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator

from .models import Student, StudentKind, make_student
from .storage import DEFAULT_PATH, StorageError, find_students, load_students, save_students

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class ValidationError(ValueError):
    """Raised when form input for a student is not acceptable."""


def _parse_int(text: str) -> int | None:
    if "_" in text:
        return None
    try:
        number = int(text, 10)
    except ValueError:
        return None
    return number if _INT_MIN <= number <= _INT_MAX else None


def _parse_float(text: str) -> float | None:
    if "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _check_identity(student_id: str, name: str) -> tuple[str, str]:
    student_id, name = student_id.strip(), name.strip()
    if not student_id or not name:
        raise ValidationError("学号和姓名不能为空！")
    return student_id, name


def _check_numbers(age_text: str, credits_text: str) -> tuple[int, float]:
    age = _parse_int(age_text.strip())
    if age is None or age <= 0:
        raise ValidationError("年龄必须是正整数！")
    credits = _parse_float(credits_text.strip())
    if credits is None or credits < 0:
        raise ValidationError("学分必须是非负数！")
    return age, credits


def validate_form(
    student_id: str, name: str, age_text: str, credits_text: str
) -> tuple[str, str, int, float]:
    """Check the fields of a student form.

    Returns the trimmed id and name with the parsed age and raw credits.
    Raises :class:`ValidationError` if the id or name is blank, the age is
    not a positive integer or the credits are not a non-negative number.
    """
    student_id, name = _check_identity(student_id, name)
    age, credits = _check_numbers(age_text, credits_text)
    return student_id, name, age, credits


class StudentRegistry:
    """All students known to the application, backed by a data file."""

    def __init__(self, path: str | os.PathLike[str] = DEFAULT_PATH) -> None:
        self.path = path
        self._students: list[Student] = []

    def __iter__(self) -> Iterator[Student]:
        return iter(self._students)

    def __len__(self) -> int:
        return len(self._students)

    def load(self) -> None:
        """Replace the roster with the contents of the data file.

        If the file cannot be read, an empty one is created where possible
        and :class:`StorageError` is raised; the roster is left empty.
        """
        self._students.clear()
        try:
            self._students.extend(load_students(self.path))
        except StorageError:
            try:
                with open(self.path, "w", encoding="utf-8"):
                    pass
            except OSError:
                pass
            raise

    def save(self) -> None:
        """Write the roster to the data file."""
        save_students(self._students, self.path)

    def get(self, student_id: str) -> Student:
        """Return the student with ``student_id``; raise KeyError if absent."""
        for student in self._students:
            if student.student_id == student_id:
                return student
        raise KeyError(student_id)

    def __contains__(self, student_id: object) -> bool:
        return any(student.student_id == student_id for student in self._students)

    def add(
        self,
        student_id: str,
        name: str,
        gender: str,
        kind: StudentKind | str,
        age_text: str,
        credits_text: str,
    ) -> Student:
        """Validate a new student's form, append the student and save.

        Raises :class:`ValidationError` for bad input or a duplicate id.
        """
        student_id, name = _check_identity(student_id, name)
        if student_id in self:
            raise ValidationError("该学号已存在！")
        age, credits = _check_numbers(age_text, credits_text)
        student = make_student(kind, student_id, name, gender, age, credits)
        self._students.append(student)
        self.save()
        return student

    def update(
        self,
        student_id: str,
        name: str,
        gender: str,
        kind: StudentKind | str,
        age_text: str,
        credits_text: str,
    ) -> Student:
        """Change the details of an existing student and save.

        The id itself cannot change. If the kind changes, the student is
        replaced in place by one of the new kind. Raises
        :class:`ValidationError` for bad input and KeyError for an unknown id.
        """
        student_id, name, age, credits = validate_form(
            student_id, name, age_text, credits_text
        )
        kind = StudentKind(kind)
        student = self.get(student_id)
        student.name = name
        student.gender = gender
        student.age = age
        student.raw_credits = credits
        if student.kind() is not kind:
            replacement = make_student(kind, student_id, name, gender, age, credits)
            position = self._students.index(student)
            self._students[position] = replacement
            student = replacement
        self.save()
        return student

    def delete(self, student_ids: Iterable[str]) -> int:
        """Remove every student whose id is given; save if any were removed.

        Returns the number of students removed.
        """
        doomed = set(student_ids)
        kept = [s for s in self._students if s.student_id not in doomed]
        removed = len(self._students) - len(kept)
        if removed:
            self._students[:] = kept
            self.save()
        return removed

    def search(self, keyword: str) -> list[Student]:
        """Find students by id or name.

        A blank keyword gives every student. Exact matches are preferred;
        if there are none, case-insensitive substring matches are returned.
        """
        keyword = keyword.strip()
        if not keyword:
            return list(self._students)
        results = find_students(self._students, keyword, True, True, True)
        if results:
            return results
        return find_students(self._students, keyword, True, True, False)