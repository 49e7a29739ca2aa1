"""User directory: registration and login.

Users are a tagged variant over Admin and Student. Role-specific behaviour
(menus) lives in the CLI and is chosen by the ``role`` tag, not by subclassing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

import structlog

from academy.core.identifiers import IdSequence, student_sequence
from academy.utils.validators import ErrorKind, same_name

logger = structlog.get_logger(__name__)

DEFAULT_MIN_AGE = 1
DEFAULT_MAX_AGE = 100


class Role(Enum):
    """Kind of account."""

    ADMIN = "admin"
    STUDENT = "student"


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass
class Admin:
    """Administrator account."""

    username: str
    password: str = field(repr=False)
    name: str = "Admin"
    role: Role = field(default=Role.ADMIN, init=False)


@dataclass
class Student:
    """Student account with enrollment and exam scores.

    Enrolled courses and subjects are stored as catalog identifiers, resolved
    through the Catalog when needed.
    """

    username: str
    password: str = field(repr=False)
    name: str
    student_id: str
    age: int
    email: str = ""
    enrolled_course_ids: list[str] = field(default_factory=list)
    enrolled_subject_ids: list[str] = field(default_factory=list)
    exam_scores: dict[str, int] = field(default_factory=dict)
    role: Role = field(default=Role.STUDENT, init=False)

    def score_for(self, subject_id: str) -> int | None:
        """Most recent score for a subject, or None if never taken."""
        return self.exam_scores.get(subject_id)

    def record_score(self, subject_id: str, score: int) -> None:
        """Store a score, replacing any previous one for the subject."""
        self.exam_scores[subject_id] = score

    def summary(self) -> str:
        return (
            f"ID: {self.student_id}, Name: {self.name}, Age: {self.age}, "
            f"Email: {self.email}, Username: {self.username}"
        )


User = Union[Admin, Student]


@dataclass
class DirectoryResult:
    """Result of a login or registration."""

    success: bool
    message: str
    user: User | None = None
    error: ErrorKind | None = None


# =============================================================================
# DIRECTORY
# =============================================================================


class Directory:
    """Owns every registered user, in registration order."""

    def __init__(
        self,
        student_ids: IdSequence | None = None,
        min_age: int = DEFAULT_MIN_AGE,
        max_age: int = DEFAULT_MAX_AGE,
    ):
        self._users: list[User] = []
        self._students: list[Student] = []
        self._student_ids = student_ids or student_sequence()
        self.min_age = min_age
        self.max_age = max_age

    @property
    def users(self) -> list[User]:
        return list(self._users)

    @property
    def students(self) -> list[Student]:
        return list(self._students)

    def is_username_taken(self, username: str) -> bool:
        """Case-insensitive check against every registered username."""
        return any(same_name(user.username, username) for user in self._users)

    def is_valid_age(self, age: int) -> bool:
        return self.min_age <= age <= self.max_age

    def authenticate(self, username: str, password: str) -> DirectoryResult:
        """Exact (case-sensitive) match on username and password.

        Returns:
            DirectoryResult with the first matching user, or AUTH_FAILURE
        """
        for user in self._users:
            if user.username == username and user.password == password:
                logger.info("login_succeeded", username=username, role=user.role.value)
                return DirectoryResult(success=True, message="Login successful!", user=user)

        logger.info("login_failed", username=username)
        return DirectoryResult(
            success=False,
            message="Invalid username or password. Please try again.",
            error=ErrorKind.AUTH_FAILURE,
        )

    def add_admin(self, username: str, password: str, name: str = "Admin") -> DirectoryResult:
        """Register an administrator (used when seeding)."""
        if self.is_username_taken(username):
            return DirectoryResult(
                success=False,
                message=f"Username '{username}' is already taken.",
                error=ErrorKind.DUPLICATE,
            )

        admin = Admin(username=username, password=password, name=name)
        self._users.append(admin)
        logger.debug("admin_added", username=username)
        return DirectoryResult(success=True, message=f"Admin '{username}' created.", user=admin)

    def register_student(
        self,
        name: str,
        age: int,
        email: str,
        username: str,
        password: str,
    ) -> DirectoryResult:
        """Create a student with the next STU identifier.

        Args:
            name: Display name
            age: Age in years, within [min_age, max_age]
            email: Contact email
            username: Login name, unique case-insensitively
            password: Plaintext password

        Returns:
            DirectoryResult with the new Student, or DUPLICATE/RANGE/FORMAT
        """
        if not username.strip():
            return DirectoryResult(
                success=False,
                message="Username cannot be empty.",
                error=ErrorKind.FORMAT,
            )

        if self.is_username_taken(username):
            return DirectoryResult(
                success=False,
                message="That username is already taken. Please choose a different one.",
                error=ErrorKind.DUPLICATE,
            )

        if not self.is_valid_age(age):
            return DirectoryResult(
                success=False,
                message=f"Age must be between {self.min_age} and {self.max_age}.",
                error=ErrorKind.RANGE,
            )

        student = Student(
            username=username,
            password=password,
            name=name,
            student_id=self._student_ids.next_id(),
            age=age,
            email=email,
        )
        self._students.append(student)
        self._users.append(student)

        logger.info("student_registered", student_id=student.student_id, username=username)
        return DirectoryResult(
            success=True,
            message=f"Student '{name}' registered successfully!",
            user=student,
        )

    def find_student(self, student_id: str) -> Student | None:
        """Case-insensitive lookup by student identifier."""
        wanted = student_id.strip().upper()
        for student in self._students:
            if student.student_id.upper() == wanted:
                return student
        return None

    def find_student_by_username(self, username: str) -> Student | None:
        for student in self._students:
            if same_name(student.username, username):
                return student
        return None
