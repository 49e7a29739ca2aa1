"""Core business logic.

Modules:
- identifiers: Monotonic COU/SUB/STU/EXAM sequences
- catalog: Courses and subjects
- directory: Admin and student accounts, login, registration
- enrollment: Student course/subject enrollment
- exam_bank: Exams and multiple-choice questions
- exam_session: Interactive exam taking and scoring
- results: PASS/FAIL reporting
- academy: Aggregate root for one process run
"""

__all__ = [
    "identifiers",
    "catalog",
    "directory",
    "enrollment",
    "exam_bank",
    "exam_session",
    "results",
    "academy",
]
