"""Startup data for a fresh Academy.

Loads demonstration data from data/config/seed_v1.yaml (validated with
pydantic) and falls back to the built-in seed when the file is missing or
invalid.

Usage:
    from academy.config.seed import build_academy

    academy = build_academy()
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from academy.config.app_config import AppConfig, load_app_config
from academy.core.academy import Academy
from academy.core.catalog import Catalog
from academy.core.directory import Directory, Student
from academy.core.enrollment import enroll_course, enroll_subject
from academy.core.exam_bank import ExamBank, Question

logger = structlog.get_logger(__name__)

# =============================================================================
# SEED SCHEMAS
# =============================================================================


class AdminSeed(BaseModel):
    username: str = Field(..., min_length=1)
    password: str
    name: str = "Admin"


class CourseSeed(BaseModel):
    name: str = Field(..., min_length=1)
    subjects: list[str] = Field(default_factory=list)


class StudentSeed(BaseModel):
    """A demo student. Courses and subjects are referenced by name."""

    username: str = Field(..., min_length=1)
    password: str
    name: str
    age: int = Field(..., ge=1)
    email: str = ""
    courses: list[str] = Field(default_factory=list)
    subjects: list[str] = Field(default_factory=list)


class QuestionSeed(BaseModel):
    text: str = Field(..., min_length=1)
    options: list[str] = Field(..., min_length=2)
    correct: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _correct_in_options(self) -> "QuestionSeed":
        if self.correct >= len(self.options):
            raise ValueError(
                f"correct={self.correct} outside {len(self.options)} options: {self.text}"
            )
        return self


class ExamSeed(BaseModel):
    subject: str = Field(..., min_length=1)
    questions: list[QuestionSeed] = Field(..., min_length=1)


class SeedData(BaseModel):
    """Everything needed to populate an Academy."""

    admins: list[AdminSeed] = Field(default_factory=list)
    courses: list[CourseSeed] = Field(default_factory=list)
    students: list[StudentSeed] = Field(default_factory=list)
    exams: list[ExamSeed] = Field(default_factory=list)


# =============================================================================
# BUILT-IN SEED
# =============================================================================


def _get_default_seed() -> dict[str, Any]:
    """Demonstration data used when no seed file exists."""
    return {
        "admins": [{"username": "admin", "password": "admin123"}],
        "courses": [
            {"name": "Java Programming", "subjects": ["Core Java", "Advanced Java"]},
            {
                "name": "Python for Data Science",
                "subjects": ["Python Basics", "Data Analysis with Python"],
            },
            {
                "name": "Web Development",
                "subjects": ["HTML/CSS Fundamentals", "JavaScript Essentials"],
            },
        ],
        "students": [
            {
                "username": "alice",
                "password": "pass123",
                "name": "Alice Smith",
                "age": 20,
                "email": "alice@example.com",
                "courses": ["Java Programming"],
                "subjects": ["Core Java", "Advanced Java"],
            },
            {
                "username": "bob",
                "password": "pass456",
                "name": "Bob Johnson",
                "age": 22,
                "email": "bob@example.com",
                "courses": ["Python for Data Science"],
                "subjects": ["Python Basics", "Data Analysis with Python"],
            },
            {
                "username": "charlie",
                "password": "cpass",
                "name": "Charlie Brown",
                "age": 19,
                "email": "charlie@example.com",
                "courses": ["Web Development"],
                "subjects": ["HTML/CSS Fundamentals"],
            },
        ],
        "exams": [
            {
                "subject": "Core Java",
                "questions": [
                    {
                        "text": "What is the main purpose of encapsulation in OOP?",
                        "options": [
                            "To hide implementation details",
                            "To allow multiple inheritance",
                            "To enable polymorphism",
                            "To define interfaces",
                        ],
                        "correct": 0,
                    },
                    {
                        "text": "Which keyword is used to prevent a class from being inherited?",
                        "options": ["static", "final", "abstract", "private"],
                        "correct": 1,
                    },
                    {
                        "text": "What is the default value of an instance variable of type 'int' in Java?",
                        "options": ["null", "0", "false", "undefined"],
                        "correct": 1,
                    },
                    {
                        "text": "Which of these is a checked exception in Java?",
                        "options": [
                            "NullPointerException",
                            "ArrayIndexOutOfBoundsException",
                            "IOException",
                            "ArithmeticException",
                        ],
                        "correct": 2,
                    },
                    {
                        "text": "Which Java concept allows a class to take on multiple forms?",
                        "options": ["Inheritance", "Abstraction", "Polymorphism", "Encapsulation"],
                        "correct": 2,
                    },
                ],
            },
            {
                "subject": "Python Basics",
                "questions": [
                    {
                        "text": "Which symbol is used for single-line comments in Python?",
                        "options": ["//", "#", "/*", "<!--"],
                        "correct": 1,
                    },
                    {
                        "text": "What is the output of '2 ** 3' in Python?",
                        "options": ["6", "8", "9", "23"],
                        "correct": 1,
                    },
                    {
                        "text": "Which function converts a string to an integer in Python?",
                        "options": ["str_to_int()", "int()", "convert_to_int()", "parse_int()"],
                        "correct": 1,
                    },
                    {
                        "text": "What is PEP 8?",
                        "options": [
                            "A Python package manager",
                            "A Python web framework",
                            "A style guide for Python code",
                            "A Python testing library",
                        ],
                        "correct": 2,
                    },
                    {
                        "text": "Which of these data types is immutable in Python?",
                        "options": ["list", "dictionary", "set", "tuple"],
                        "correct": 3,
                    },
                ],
            },
            {
                "subject": "HTML/CSS Fundamentals",
                "questions": [
                    {
                        "text": "Which HTML tag is used to define an internal style sheet?",
                        "options": ["<script>", "<css>", "<style>", "<link>"],
                        "correct": 2,
                    },
                    {
                        "text": "What does CSS stand for?",
                        "options": [
                            "Creative Style Sheets",
                            "Cascading Style Sheets",
                            "Computer Style Sheets",
                            "Colorful Style Sheets",
                        ],
                        "correct": 1,
                    },
                    {
                        "text": "Which property is used to change the background color of an element?",
                        "options": ["color", "bgcolor", "background-color", "background"],
                        "correct": 2,
                    },
                    {
                        "text": "Which HTML element is used to specify a footer for a document or section?",
                        "options": ["<bottom>", "<footer>", "<end>", "<section>"],
                        "correct": 1,
                    },
                    {
                        "text": "In CSS, how do you select an element with id 'demo'?",
                        "options": [".demo", "#demo", "element.demo", "*demo"],
                        "correct": 1,
                    },
                ],
            },
        ],
    }


def default_seed() -> SeedData:
    return SeedData.model_validate(_get_default_seed())


def load_seed(path: Path | None = None) -> SeedData:
    """Load seed data from YAML, falling back to the built-in seed.

    Args:
        path: Seed file. Defaults to the seed_file setting of the app config.

    Returns:
        Validated SeedData.
    """
    if path is None:
        path = Path(load_app_config().seed_file)

    if not path.exists():
        logger.info("seed_file_not_found", path=str(path))
        return default_seed()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        seed = SeedData.model_validate(data)
        logger.debug("loaded_seed", path=str(path), courses=len(seed.courses))
        return seed
    except (yaml.YAMLError, ValidationError) as e:
        logger.error("failed_to_load_seed", path=str(path), error=str(e))
        return default_seed()


# =============================================================================
# POPULATION
# =============================================================================


def _enroll_seed_student(student: Student, data: StudentSeed, catalog: Catalog) -> None:
    for course_name in data.courses:
        course = catalog.find_course_by_name(course_name)
        if course is None:
            logger.warning("seed_course_unknown", student=data.username, course=course_name)
            continue
        enroll_course(student, course)

    for subject_name in data.subjects:
        subject = catalog.find_subject_by_name(subject_name)
        if subject is None:
            logger.warning("seed_subject_unknown", student=data.username, subject=subject_name)
            continue
        enroll_subject(student, subject)


def populate(academy: Academy, seed: SeedData) -> Academy:
    """Add the seed's admins, courses, students and exams to ``academy``.

    Entries the core rejects (duplicate names, unknown subjects) are logged
    and skipped.
    """
    directory = academy.directory
    catalog = academy.catalog

    for admin in seed.admins:
        result = directory.add_admin(admin.username, admin.password, admin.name)
        if not result.success:
            logger.warning("seed_admin_skipped", username=admin.username, reason=result.message)

    for course_data in seed.courses:
        result = catalog.add_course(course_data.name)
        if not result.success:
            logger.warning("seed_course_skipped", name=course_data.name, reason=result.message)
            continue
        for subject_name in course_data.subjects:
            added = catalog.add_subject(result.course, subject_name)
            if not added.success:
                logger.warning("seed_subject_skipped", name=subject_name, reason=added.message)

    for student_data in seed.students:
        result = directory.register_student(
            name=student_data.name,
            age=student_data.age,
            email=student_data.email,
            username=student_data.username,
            password=student_data.password,
        )
        if not result.success:
            logger.warning(
                "seed_student_skipped", username=student_data.username, reason=result.message
            )
            continue
        _enroll_seed_student(result.user, student_data, catalog)

    for exam_data in seed.exams:
        subject = catalog.find_subject_by_name(exam_data.subject)
        if subject is None:
            logger.warning("seed_exam_subject_unknown", subject=exam_data.subject)
            continue
        questions = [
            Question(text=q.text, options=tuple(q.options), correct_option_index=q.correct)
            for q in exam_data.questions
        ]
        result = academy.exam_bank.add_exam(subject.subject_id, subject.name, questions)
        if not result.success:
            logger.warning("seed_exam_skipped", subject=exam_data.subject, reason=result.message)

    logger.info(
        "academy_seeded",
        users=len(directory.users),
        courses=len(catalog.courses),
        exams=len(academy.exam_bank.exams),
    )
    return academy


def build_academy(seed: SeedData | None = None, config: AppConfig | None = None) -> Academy:
    """Create a fresh Academy populated from ``seed``.

    Args:
        seed: Seed data. Defaults to load_seed().
        config: App config for registration limits. Defaults to load_app_config().

    Returns:
        A populated Academy with its own identifier sequences.
    """
    config = config or load_app_config()
    if seed is None:
        seed = load_seed(Path(config.seed_file))

    academy = Academy(
        catalog=Catalog(),
        directory=Directory(
            min_age=config.registration.min_age,
            max_age=config.registration.max_age,
        ),
        exam_bank=ExamBank(),
    )
    return populate(academy, seed)
