"""Reading, writing and searching student records in the plain-text data file."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from .models import Student, StudentKind, make_student

DEFAULT_PATH = "students.dat"

_FIELD_COUNT = 6
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class StorageError(Exception):
    """Raised when the data file cannot be read or written."""


def format_number(value: float) -> str:
    """Format a number the way the data file and the table show it (``%g``)."""
    return f"{value:g}"


def _to_int(text: str) -> int:
    if "_" in text:
        return 0
    try:
        number = int(text, 10)
    except ValueError:
        return 0
    return number if _INT_MIN <= number <= _INT_MAX else 0


def _to_float(text: str) -> float:
    if "_" in text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return 0.0


def _parse_line(line: str) -> Student | None:
    fields = [field for field in line.split(" ") if field]
    if len(fields) < _FIELD_COUNT:
        return None
    student_id, name, gender, age_text, credits_text, kind_text = fields[:_FIELD_COUNT]
    try:
        kind = StudentKind(kind_text)
    except ValueError:
        return None
    return make_student(
        kind, student_id, name, gender, _to_int(age_text), _to_float(credits_text)
    )


def load_students(path: str | os.PathLike[str] = DEFAULT_PATH) -> list[Student]:
    """Read every well-formed student record from ``path``.

    Blank lines, lines with too few fields and lines of an unknown kind are
    skipped. Raises :class:`StorageError` if the file cannot be opened.
    """
    try:
        with open(path, encoding="utf-8") as handle:
            lines = handle.read().splitlines()
    except OSError as exc:
        raise StorageError(f"无法打开文件：{os.fspath(path)}") from exc

    students = []
    for line in lines:
        if not line.strip():
            continue
        student = _parse_line(line)
        if student is not None:
            students.append(student)
    return students


def save_students(
    students: Iterable[Student], path: str | os.PathLike[str] = DEFAULT_PATH
) -> None:
    """Write all students to ``path``, replacing its contents.

    Raises :class:`StorageError` if the file cannot be written.
    """
    lines = [
        " ".join(
            (
                student.student_id,
                student.name,
                student.gender,
                str(student.age),
                format_number(student.raw_credits),
                student.kind().value,
            )
        )
        + "\n"
        for student in students
    ]
    try:
        with open(Path(path), "w", encoding="utf-8", newline="") as handle:
            handle.writelines(lines)
    except OSError as exc:
        raise StorageError(f"无法写入文件：{os.fspath(path)}") from exc


def _matches(value: str, keyword: str, exact: bool) -> bool:
    if exact:
        return value == keyword
    return keyword.casefold() in value.casefold()


def find_students(
    students: Iterable[Student],
    keyword: str,
    match_id: bool = True,
    match_name: bool = True,
    exact: bool = False,
) -> list[Student]:
    """Return the students whose id or name matches ``keyword``, in order.

    With ``exact`` the field must equal the keyword; otherwise it must
    contain it, ignoring case. An empty keyword, or matching on neither
    field, finds nothing.
    """
    if not keyword or not (match_id or match_name):
        return []
    return [
        student
        for student in students
        if (match_id and _matches(student.student_id, keyword, exact))
        or (match_name and _matches(student.name, keyword, exact))
    ]