"""Interactive exam session.

Flow of one session:
1. Eligibility: enrolled subjects that have an exam in the bank
2. Selection: the student picks one by 1-based number (bad input aborts)
3. Retake gate: an existing score requires an explicit "yes" to continue
4. Question loop: every question once, in order; invalid answers re-prompt
5. Commit: the score replaces any previous one for the subject

Only the final integer score is kept; individual answers are discarded.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import structlog

from academy.core.catalog import Catalog
from academy.core.console_io import ConsoleIO
from academy.core.directory import Student
from academy.core.exam_bank import Exam, ExamBank, Question
from academy.utils.validators import ErrorKind, is_affirmative, parse_choice

logger = structlog.get_logger(__name__)

# =============================================================================
# TYPES
# =============================================================================


class SessionStatus(Enum):
    """How a session ended."""

    COMPLETED = "completed"
    NO_ELIGIBLE_SUBJECTS = "no_eligible_subjects"
    INVALID_SELECTION = "invalid_selection"
    RETAKE_CANCELLED = "retake_cancelled"


@dataclass(frozen=True)
class EligibleExam:
    """An enrolled subject paired with its exam."""

    subject_id: str
    subject_name: str
    exam: Exam


@dataclass
class ExamSessionResult:
    """Outcome of one exam session."""

    status: SessionStatus
    message: str
    subject_id: str | None = None
    score: int | None = None
    total: int | None = None
    error: ErrorKind | None = None

    @property
    def success(self) -> bool:
        return self.status is SessionStatus.COMPLETED


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def eligible_exams(student: Student, catalog: Catalog, exam_bank: ExamBank) -> list[EligibleExam]:
    """Enrolled subjects (in enrollment order) that have an exam.

    A subject later removed from the catalog stays eligible; its name then
    comes from the exam.
    """
    eligible = []
    for subject_id in student.enrolled_subject_ids:
        exam = exam_bank.find_exam(subject_id)
        if exam is None:
            continue
        name = catalog.subject_name(subject_id) or exam.subject_name
        eligible.append(EligibleExam(subject_id=subject_id, subject_name=name, exam=exam))
    return eligible


# =============================================================================
# SESSION
# =============================================================================


class ExamSession:
    """Runs one exam for one student against the console collaborators."""

    def __init__(
        self,
        student: Student,
        catalog: Catalog,
        exam_bank: ExamBank,
        io: ConsoleIO,
    ):
        self.student = student
        self.catalog = catalog
        self.exam_bank = exam_bank
        self.io = io

    def run(self) -> ExamSessionResult:
        """Run the whole session and commit the score if it completes."""
        eligible = eligible_exams(self.student, self.catalog, self.exam_bank)
        if not eligible:
            message = "You are not currently enrolled in any subjects that have an available exam."
            self.io.warning(message)
            self.io.info("Please enroll in subjects, or wait for an exam to be set up by the admin.")
            logger.info("exam_session_no_subjects", student_id=self.student.student_id)
            return ExamSessionResult(
                status=SessionStatus.NO_ELIGIBLE_SUBJECTS,
                message=message,
                error=ErrorKind.NO_ELIGIBLE_SUBJECTS,
            )

        selection = self._select(eligible)
        if isinstance(selection, ExamSessionResult):
            return selection

        if not self._confirm_retake(selection):
            self.io.info("Exam retake cancelled.")
            return ExamSessionResult(
                status=SessionStatus.RETAKE_CANCELLED,
                message="Exam retake cancelled.",
                subject_id=selection.subject_id,
            )

        exam = selection.exam
        self.io.heading(f"Starting Exam for {selection.subject_name}")
        self.io.info(f"Total Questions: {exam.question_count}")

        score = 0
        for number, question in enumerate(exam.questions, 1):
            if self._ask(number, exam.question_count, question):
                score += 1

        self.student.record_score(selection.subject_id, score)
        logger.info(
            "exam_completed",
            student_id=self.student.student_id,
            exam_id=exam.exam_id,
            subject_id=selection.subject_id,
            score=score,
            total=exam.question_count,
        )

        message = f"Your final score for {selection.subject_name}: {score}/{exam.question_count}"
        self.io.heading("Exam Completed!")
        self.io.success(message)
        self.io.info("Your result has been saved.")
        return ExamSessionResult(
            status=SessionStatus.COMPLETED,
            message=message,
            subject_id=selection.subject_id,
            score=score,
            total=exam.question_count,
        )

    def _select(self, eligible: list[EligibleExam]) -> EligibleExam | ExamSessionResult:
        self.io.heading("Subjects You Can Take an Exam For")
        for number, entry in enumerate(eligible, 1):
            self.io.info(f"{number}. {entry.subject_name}")

        raw = self.io.read_line("Enter the number of the subject for which you want to take the exam")
        choice = parse_choice(raw, len(eligible))
        if not choice.success:
            message = f"Invalid subject selection. {choice.message}"
            self.io.error(message)
            return ExamSessionResult(
                status=SessionStatus.INVALID_SELECTION,
                message=message,
                error=choice.error,
            )
        return eligible[choice.index]

    def _confirm_retake(self, selection: EligibleExam) -> bool:
        previous = self.student.score_for(selection.subject_id)
        if previous is None:
            return True

        self.io.warning(f"You have already taken the exam for {selection.subject_name}.")
        self.io.info(f"Your previous score: {previous}/{selection.exam.question_count}")
        answer = self.io.read_line("Do you want to retake the exam? (yes/no)")
        return is_affirmative(answer)

    def _ask(self, number: int, total: int, question: Question) -> bool:
        """Ask one question until a valid option is given; True if correct."""
        self.io.info(f"\nQuestion {number} of {total}:")
        self.io.info(question.text)
        for option_number, option in enumerate(question.options, 1):
            self.io.info(f"{option_number}. {option}")

        while True:
            raw = self.io.read_line(f"Enter your answer (1-{question.option_count})")
            choice = parse_choice(raw, question.option_count)
            if choice.success:
                break
            if choice.error is ErrorKind.FORMAT:
                self.io.warning("Invalid input. Please enter a numerical value.")
            else:
                self.io.warning("Invalid option. Please enter a number within the valid range.")

        if question.is_correct(choice.index):
            self.io.success("Correct Answer!")
            return True

        self.io.error(
            "Incorrect. The correct answer was: "
            f"{question.correct_option_index + 1}. {question.correct_option}"
        )
        return False
