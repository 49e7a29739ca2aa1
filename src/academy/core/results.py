"""Exam results reporting.

Joins a student's score map with the Catalog (subject names) and the
ExamBank (question counts) and classifies each score:
- PASS when score >= pass_threshold * question_count
- FAIL otherwise
- NO_EXAM when the bank has no exam for the subject, so no total is known

Rows follow the score map's insertion order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from academy.core.catalog import Catalog
from academy.core.directory import Directory, Student
from academy.core.exam_bank import ExamBank
from academy.utils.validators import ErrorKind

DEFAULT_PASS_THRESHOLD = 0.6
UNKNOWN_SUBJECT = "Unknown Subject"
ALL_STUDENTS = "all"


class ResultStatus(Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    NO_EXAM = "NO EXAM"


@dataclass
class SubjectResult:
    """One row of a student's report."""

    subject_id: str
    subject_name: str
    score: int
    question_count: int | None
    status: ResultStatus

    @property
    def passed(self) -> bool:
        return self.status is ResultStatus.PASS

    @property
    def score_label(self) -> str:
        total = "?" if self.question_count is None else str(self.question_count)
        return f"{self.score}/{total}"


@dataclass
class StudentReport:
    """All results for one student."""

    student_id: str
    student_name: str
    results: list[SubjectResult] = field(default_factory=list)

    @property
    def has_results(self) -> bool:
        return bool(self.results)


@dataclass
class ReportLookup:
    """Reports found for an admin query ("all" or a student id)."""

    success: bool
    message: str
    reports: list[StudentReport] = field(default_factory=list)
    error: ErrorKind | None = None


def classify(score: int, question_count: int | None, pass_threshold: float) -> ResultStatus:
    """PASS/FAIL for a score, NO_EXAM when the total is unknown."""
    if question_count is None:
        return ResultStatus.NO_EXAM
    if score >= pass_threshold * question_count:
        return ResultStatus.PASS
    return ResultStatus.FAIL


def build_report(
    student: Student,
    catalog: Catalog,
    exam_bank: ExamBank,
    pass_threshold: float = DEFAULT_PASS_THRESHOLD,
) -> StudentReport:
    """Build the report for one student."""
    report = StudentReport(student_id=student.student_id, student_name=student.name)
    for subject_id, score in student.exam_scores.items():
        question_count = exam_bank.question_count(subject_id)
        report.results.append(
            SubjectResult(
                subject_id=subject_id,
                subject_name=catalog.subject_name(subject_id) or UNKNOWN_SUBJECT,
                score=score,
                question_count=question_count,
                status=classify(score, question_count, pass_threshold),
            )
        )
    return report


def report_for(
    query: str,
    directory: Directory,
    catalog: Catalog,
    exam_bank: ExamBank,
    pass_threshold: float = DEFAULT_PASS_THRESHOLD,
) -> ReportLookup:
    """Reports for every student ("all") or one student id, case-insensitive.

    Args:
        query: "all" or a student identifier such as "stu1000"
        directory: Where students are looked up
        catalog: Used to resolve subject names
        exam_bank: Used to resolve question counts
        pass_threshold: Fraction of questions needed to pass

    Returns:
        ReportLookup with one report per matched student, or NOT_FOUND
    """
    query = query.strip()
    if query.lower() == ALL_STUDENTS:
        reports = [
            build_report(student, catalog, exam_bank, pass_threshold)
            for student in directory.students
        ]
        return ReportLookup(success=True, message=f"{len(reports)} student(s)", reports=reports)

    student = directory.find_student(query)
    if student is None:
        return ReportLookup(
            success=False,
            message=f"Student with ID '{query}' not found.",
            error=ErrorKind.NOT_FOUND,
        )

    return ReportLookup(
        success=True,
        message=f"Results for {student.student_id}",
        reports=[build_report(student, catalog, exam_bank, pass_threshold)],
    )
