"""Exam bank.

Responsibilities:
- Own exams and their multiple-choice questions
- Allocate EXAM identifiers
- Keep at most one exam per subject (enforced when adding)
- Look up an exam by subject identifier
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import structlog

from academy.core.identifiers import IdSequence, exam_sequence
from academy.utils.validators import ErrorKind

logger = structlog.get_logger(__name__)

# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass(frozen=True)
class Question:
    """A multiple-choice question. correct_option_index is zero-based."""

    text: str
    options: tuple[str, ...]
    correct_option_index: int

    @property
    def option_count(self) -> int:
        return len(self.options)

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_option_index]

    def is_correct(self, option_index: int) -> bool:
        """Check a zero-based answer against the correct option."""
        return option_index == self.correct_option_index

    def is_well_formed(self) -> bool:
        return 0 <= self.correct_option_index < len(self.options)


@dataclass(frozen=True)
class Exam:
    """The exam for one subject."""

    exam_id: str
    subject_id: str
    subject_name: str
    questions: tuple[Question, ...]

    @property
    def question_count(self) -> int:
        return len(self.questions)


@dataclass
class ExamBankResult:
    """Result of adding an exam."""

    success: bool
    message: str
    exam: Exam | None = None
    error: ErrorKind | None = None


# =============================================================================
# EXAM BANK
# =============================================================================


class ExamBank:
    """Owns exams in creation order."""

    def __init__(self, exam_ids: IdSequence | None = None):
        self._exams: list[Exam] = []
        self._exam_ids = exam_ids or exam_sequence()

    @property
    def exams(self) -> list[Exam]:
        return list(self._exams)

    def add_exam(
        self,
        subject_id: str,
        subject_name: str,
        questions: Iterable[Question],
    ) -> ExamBankResult:
        """Create the exam for a subject.

        Args:
            subject_id: Catalog identifier of the subject
            subject_name: Subject name, stored for display
            questions: Questions in the order they will be asked

        Returns:
            ExamBankResult with the new exam, DUPLICATE if the subject
            already has one, RANGE if a question's answer index is invalid
        """
        questions = tuple(questions)

        if self.find_exam(subject_id) is not None:
            return ExamBankResult(
                success=False,
                message=f"An exam for '{subject_name}' already exists.",
                error=ErrorKind.DUPLICATE,
            )

        for number, question in enumerate(questions, 1):
            if not question.is_well_formed():
                return ExamBankResult(
                    success=False,
                    message=(
                        f"Question {number} of '{subject_name}' has correct option "
                        f"{question.correct_option_index} outside its "
                        f"{question.option_count} options."
                    ),
                    error=ErrorKind.RANGE,
                )

        exam = Exam(
            exam_id=self._exam_ids.next_id(),
            subject_id=subject_id,
            subject_name=subject_name,
            questions=questions,
        )
        self._exams.append(exam)
        logger.debug(
            "exam_added",
            exam_id=exam.exam_id,
            subject_id=subject_id,
            questions=exam.question_count,
        )
        return ExamBankResult(success=True, message=f"Exam {exam.exam_id} created.", exam=exam)

    def find_exam(self, subject_id: str) -> Exam | None:
        """First exam (in creation order) for the subject, or None."""
        for exam in self._exams:
            if exam.subject_id == subject_id:
                return exam
        return None

    def has_exam(self, subject_id: str) -> bool:
        return self.find_exam(subject_id) is not None

    def question_count(self, subject_id: str) -> int | None:
        """Number of questions in the subject's exam, or None without one."""
        exam = self.find_exam(subject_id)
        return exam.question_count if exam else None
