"""Student enrollment in courses and subjects.

Enrollment is idempotent and keyed by identifier. Course and subject
enrollment are independent: joining a course does not join its subjects.
There is no un-enrollment.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import structlog

from academy.core.catalog import Catalog, Course, Subject
from academy.core.directory import Student
from academy.utils.validators import ErrorKind

logger = structlog.get_logger(__name__)

FINISH_TOKEN = "0"


class EnrollmentOutcome(Enum):
    """What an enroll call did."""

    ENROLLED = "enrolled"
    ALREADY_ENROLLED = "already_enrolled"


@dataclass
class SelectionReport:
    """Outcome of one line of subject numbers typed by a student."""

    finished: bool = False
    enrolled: list[Subject] = field(default_factory=list)
    already_enrolled: list[Subject] = field(default_factory=list)
    ignored: list[str] = field(default_factory=list)
    error: ErrorKind | None = None
    message: str = ""


def enroll_course(student: Student, course: Course) -> EnrollmentOutcome:
    """Add a course to the student's enrollment unless already there."""
    if course.course_id in student.enrolled_course_ids:
        return EnrollmentOutcome.ALREADY_ENROLLED

    student.enrolled_course_ids.append(course.course_id)
    logger.info("course_enrolled", student_id=student.student_id, course_id=course.course_id)
    return EnrollmentOutcome.ENROLLED


def enroll_subject(student: Student, subject: Subject) -> EnrollmentOutcome:
    """Add a subject to the student's enrollment unless already there."""
    if subject.subject_id in student.enrolled_subject_ids:
        return EnrollmentOutcome.ALREADY_ENROLLED

    student.enrolled_subject_ids.append(subject.subject_id)
    logger.info("subject_enrolled", student_id=student.student_id, subject_id=subject.subject_id)
    return EnrollmentOutcome.ENROLLED


def enroll_subject_selection(student: Student, course: Course, raw: str) -> SelectionReport:
    """Enroll in the subjects of ``course`` named by 1-based numbers.

    ``raw`` is a whitespace-separated list such as "1 3". A lone "0" finishes
    the selection. Numbers are applied left to right; out-of-range numbers are
    ignored, and the first non-numeric token stops processing with a FORMAT
    error (numbers before it stay applied).
    """
    if raw.strip() == FINISH_TOKEN:
        return SelectionReport(finished=True, message="Finished subject selection.")

    report = SelectionReport()
    tokens = raw.split()
    if not tokens:
        report.error = ErrorKind.FORMAT
        report.message = "Invalid input format. Please enter numbers separated by spaces, or '0'."
        return report

    for token in tokens:
        try:
            number = int(token)
        except ValueError:
            report.error = ErrorKind.FORMAT
            report.message = (
                "Invalid input format. Please enter numbers separated by spaces, or '0'."
            )
            return report

        if not 1 <= number <= len(course.subjects):
            report.ignored.append(token)
            continue

        subject = course.subjects[number - 1]
        if enroll_subject(student, subject) is EnrollmentOutcome.ENROLLED:
            report.enrolled.append(subject)
        else:
            report.already_enrolled.append(subject)

    return report


def enrolled_courses(student: Student, catalog: Catalog) -> list[Course]:
    """Resolve the student's course ids, skipping ones the catalog lacks."""
    courses = []
    for course_id in student.enrolled_course_ids:
        course = catalog.find_course(course_id)
        if course is not None:
            courses.append(course)
    return courses


def enrolled_subjects(student: Student, catalog: Catalog) -> list[Subject]:
    """Resolve the student's subject ids, skipping ones the catalog lacks."""
    subjects = []
    for subject_id in student.enrolled_subject_ids:
        subject = catalog.find_subject(subject_id)
        if subject is not None:
            subjects.append(subject)
    return subjects
