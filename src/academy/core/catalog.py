"""Course catalog.

Responsibilities:
- Own all courses and, through them, all subjects
- Reject duplicate course names and duplicate subject names within a course
- Allocate COU/SUB identifiers from sequences owned by the catalog
- Resolve subject identifiers back to names for reporting
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from academy.core.identifiers import IdSequence, course_sequence, subject_sequence
from academy.utils.validators import ErrorKind, same_name

logger = structlog.get_logger(__name__)

# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass(eq=False)
class Subject:
    """A subject offered inside a course. Identity is the subject_id."""

    subject_id: str
    name: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Subject):
            return NotImplemented
        return self.subject_id == other.subject_id

    def __hash__(self) -> int:
        return hash(self.subject_id)

    def __str__(self) -> str:
        return f"ID: {self.subject_id}, Name: {self.name}"


@dataclass
class CatalogResult:
    """Result of a catalog mutation."""

    success: bool
    message: str
    course: Course | None = None
    subject: Subject | None = None
    error: ErrorKind | None = None


@dataclass(eq=False)
class Course:
    """A course and its ordered subjects. Identity is the course_id."""

    course_id: str
    name: str
    subjects: list[Subject] = field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Course):
            return NotImplemented
        return self.course_id == other.course_id

    def __hash__(self) -> int:
        return hash(self.course_id)

    def __str__(self) -> str:
        return f"ID: {self.course_id}, Name: {self.name}, Subjects: {len(self.subjects)}"

    def has_subject_named(self, name: str) -> bool:
        """Case-insensitive check for a subject name in this course."""
        return any(same_name(s.name, name) for s in self.subjects)

    def find_subject(self, subject_id: str) -> Subject | None:
        for subject in self.subjects:
            if subject.subject_id == subject_id:
                return subject
        return None

    def add_subject(self, subject: Subject) -> CatalogResult:
        """Append a subject unless one with the same name is already here."""
        if self.has_subject_named(subject.name):
            return CatalogResult(
                success=False,
                message=f"Subject '{subject.name}' already exists in '{self.name}'.",
                course=self,
                error=ErrorKind.DUPLICATE,
            )

        self.subjects.append(subject)
        return CatalogResult(
            success=True,
            message=(
                f"Subject '{subject.name}' (ID: {subject.subject_id}) "
                f"added to course '{self.name}'."
            ),
            course=self,
            subject=subject,
        )

    def remove_subject(self, subject_id: str) -> CatalogResult:
        """Remove the first subject whose identifier matches."""
        subject = self.find_subject(subject_id)
        if subject is None:
            return CatalogResult(
                success=False,
                message=f"Subject with ID '{subject_id}' not found in course '{self.name}'.",
                course=self,
                error=ErrorKind.NOT_FOUND,
            )

        self.subjects.remove(subject)
        return CatalogResult(
            success=True,
            message=f"Subject '{subject.name}' removed from course '{self.name}'.",
            course=self,
            subject=subject,
        )


# =============================================================================
# CATALOG
# =============================================================================


class Catalog:
    """Owns courses and subjects in insertion order."""

    def __init__(
        self,
        course_ids: IdSequence | None = None,
        subject_ids: IdSequence | None = None,
    ):
        self._courses: list[Course] = []
        self._course_ids = course_ids or course_sequence()
        self._subject_ids = subject_ids or subject_sequence()

    @property
    def courses(self) -> list[Course]:
        return list(self._courses)

    def list_courses(self) -> list[Course]:
        """All courses in insertion order."""
        return list(self._courses)

    def list_subjects_of(self, course: Course) -> list[Subject]:
        return list(course.subjects)

    def add_course(self, name: str) -> CatalogResult:
        """Create a course unless the name is blank or already used.

        Args:
            name: Course name (compared case-insensitively)

        Returns:
            CatalogResult with the new course on success
        """
        name = name.strip()
        if not name:
            return CatalogResult(
                success=False,
                message="Course name cannot be empty.",
                error=ErrorKind.FORMAT,
            )

        for existing in self._courses:
            if same_name(existing.name, name):
                return CatalogResult(
                    success=False,
                    message=(
                        f"A course with the name '{name}' already exists. "
                        "Please choose a different name."
                    ),
                    course=existing,
                    error=ErrorKind.DUPLICATE,
                )

        course = Course(course_id=self._course_ids.next_id(), name=name)
        self._courses.append(course)
        logger.info("course_added", course_id=course.course_id, name=name)
        return CatalogResult(
            success=True,
            message=f"Course '{name}' (ID: {course.course_id}) added successfully.",
            course=course,
        )

    def add_subject(self, course: Course, name: str) -> CatalogResult:
        """Create a subject inside ``course``.

        The duplicate check runs before an identifier is allocated, so a
        rejected name never consumes a SUB number.
        """
        name = name.strip()
        if not name:
            return CatalogResult(
                success=False,
                message="Subject name cannot be empty.",
                course=course,
                error=ErrorKind.FORMAT,
            )

        if course.has_subject_named(name):
            return CatalogResult(
                success=False,
                message=f"Subject '{name}' already exists in '{course.name}'.",
                course=course,
                error=ErrorKind.DUPLICATE,
            )

        subject = Subject(subject_id=self._subject_ids.next_id(), name=name)
        result = course.add_subject(subject)
        logger.info(
            "subject_added",
            course_id=course.course_id,
            subject_id=subject.subject_id,
            name=name,
        )
        return result

    def remove_subject(self, course: Course, subject_id: str) -> CatalogResult:
        result = course.remove_subject(subject_id.strip())
        if result.success:
            logger.info(
                "subject_removed",
                course_id=course.course_id,
                subject_id=result.subject.subject_id,
            )
        else:
            logger.debug("subject_remove_miss", course_id=course.course_id, subject_id=subject_id)
        return result

    def find_course(self, course_id: str) -> Course | None:
        for course in self._courses:
            if course.course_id == course_id:
                return course
        return None

    def find_course_by_name(self, name: str) -> Course | None:
        for course in self._courses:
            if same_name(course.name, name):
                return course
        return None

    def find_subject(self, subject_id: str) -> Subject | None:
        """Scan every course for a subject with this identifier."""
        for course in self._courses:
            subject = course.find_subject(subject_id)
            if subject is not None:
                return subject
        return None

    def find_subject_by_name(self, name: str) -> Subject | None:
        """First subject (in catalog order) with this name."""
        for course in self._courses:
            for subject in course.subjects:
                if same_name(subject.name, name):
                    return subject
        return None

    def subject_name(self, subject_id: str) -> str | None:
        subject = self.find_subject(subject_id)
        return subject.name if subject else None
