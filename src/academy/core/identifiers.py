"""Monotonic identifier sequences.

Each component that creates entities owns its own sequence:
- Catalog: COU{N} from 100, SUB{N} from 10000
- Directory: STU{N} from 1000
- ExamBank: EXAM{N} from 1
"""

from __future__ import annotations

from dataclasses import dataclass, field

COURSE_PREFIX = "COU"
COURSE_START = 100
SUBJECT_PREFIX = "SUB"
SUBJECT_START = 10000
STUDENT_PREFIX = "STU"
STUDENT_START = 1000
EXAM_PREFIX = "EXAM"
EXAM_START = 1


@dataclass
class IdSequence:
    """Generates "{prefix}{n}" identifiers with n increasing from ``start``."""

    prefix: str
    start: int = 1
    _next: int = field(init=False, repr=False)

    def __post_init__(self):
        self._next = self.start

    def next_id(self) -> str:
        """Return the next identifier and advance the counter."""
        value = f"{self.prefix}{self._next}"
        self._next += 1
        return value

    def peek(self) -> str:
        """Return the identifier next_id() would produce, without advancing."""
        return f"{self.prefix}{self._next}"


def course_sequence() -> IdSequence:
    return IdSequence(COURSE_PREFIX, COURSE_START)


def subject_sequence() -> IdSequence:
    return IdSequence(SUBJECT_PREFIX, SUBJECT_START)


def student_sequence() -> IdSequence:
    return IdSequence(STUDENT_PREFIX, STUDENT_START)


def exam_sequence() -> IdSequence:
    return IdSequence(EXAM_PREFIX, EXAM_START)
