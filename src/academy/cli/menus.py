"""Interactive console menus.

Top level: Login / Register Student / Exit. After login the user's role
selects the admin or student menu from ROLE_MENUS.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import structlog
import typer
from rich.console import Console
from rich.markup import escape

from academy.core.academy import Academy
from academy.core.catalog import Course
from academy.core.console_io import ConsoleIO
from academy.core.directory import Admin, Role, Student, User
from academy.core.enrollment import (
    EnrollmentOutcome,
    enroll_course,
    enroll_subject_selection,
    enrolled_courses,
    enrolled_subjects,
)
from academy.core.exam_session import ExamSession
from academy.core.results import (
    DEFAULT_PASS_THRESHOLD,
    ResultStatus,
    StudentReport,
    build_report,
    report_for,
)
from academy.utils.validators import FormatError, parse_choice, parse_int, validate_email

logger = structlog.get_logger(__name__)

SEPARATOR = "-" * 50


class TerminalIO:
    """ConsoleIO backed by typer prompts and a rich Console."""

    def __init__(self, console: Console):
        self.console = console

    def read_line(self, prompt: str) -> str:
        return typer.prompt(prompt, default="", show_default=False)

    def read_secret(self, prompt: str) -> str:
        return typer.prompt(prompt, default="", show_default=False, hide_input=True)

    def heading(self, message: str) -> None:
        self.console.print(f"\n[bold]--- {escape(message)} ---[/bold]")

    def info(self, message: str) -> None:
        self.console.print(escape(message))

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓ {escape(message)}[/green]")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠ {escape(message)}[/yellow]")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗ {escape(message)}[/red]")


@dataclass
class MenuContext:
    """What every menu action needs."""

    academy: Academy
    io: ConsoleIO
    pass_threshold: float = DEFAULT_PASS_THRESHOLD


# =============================================================================
# HELPERS
# =============================================================================


def _choose(io: ConsoleIO, title: str, options: list[str]) -> int | None:
    """Show a numbered menu; zero-based choice, or None after a bad entry."""
    io.heading(title)
    for number, label in enumerate(options, 1):
        io.info(f"{number}. {label}")

    choice = parse_choice(io.read_line("Enter your choice"), len(options))
    if not choice.success:
        io.warning(f"Invalid choice. {choice.message}")
        return None
    return choice.index


def _pick_course(io: ConsoleIO, courses: list[Course], prompt: str) -> Course | None:
    """Read a 1-based course number; bad input aborts the calling action."""
    choice = parse_choice(io.read_line(prompt), len(courses))
    if not choice.success:
        io.error(f"Invalid course selection. {choice.message}")
        return None
    return courses[choice.index]


def render_report(io: ConsoleIO, report: StudentReport) -> None:
    io.heading(f"Exam Results for {report.student_name} (ID: {report.student_id})")
    if not report.has_results:
        io.info(f"No exam results available for {report.student_name} yet.")
        return

    for row in report.results:
        io.info(f"Subject: {row.subject_name} (ID: {row.subject_id})")
        io.info(f"  Score: {row.score_label}")
        if row.status is ResultStatus.PASS:
            io.success("Status: PASS")
        elif row.status is ResultStatus.FAIL:
            io.error("Status: FAIL")
        else:
            io.warning("Status: NO EXAM (no exam found for this subject)")
    io.info(SEPARATOR)


def show_courses(ctx: MenuContext) -> None:
    courses = ctx.academy.catalog.list_courses()
    if not courses:
        ctx.io.warning("No courses are available in the system at the moment.")
        return

    ctx.io.heading("All Available Courses")
    for number, course in enumerate(courses, 1):
        ctx.io.info(f"{number}. {course.name} (ID: {course.course_id})")
        if course.subjects:
            ctx.io.info("   Subjects offered:")
            for subject in course.subjects:
                ctx.io.info(f"     - {subject.name} (ID: {subject.subject_id})")
        else:
            ctx.io.info("   No subjects are currently available for this course.")
        ctx.io.info(SEPARATOR)


# =============================================================================
# TOP LEVEL
# =============================================================================


def run_main_loop(ctx: MenuContext) -> None:
    """Login / register / exit until the user exits."""
    options = ["Login", "Register Student", "Exit"]
    while True:
        choice = _choose(ctx.io, "Welcome to Student Management System", options)
        if choice is None:
            continue
        if choice == 0:
            login(ctx)
        elif choice == 1:
            register_student(ctx)
        else:
            ctx.io.info("Exiting Student Management System. Goodbye!")
            return


def login(ctx: MenuContext) -> User | None:
    """Authenticate and hand over to the role's menu until logout."""
    username = ctx.io.read_line("Enter username")
    password = ctx.io.read_secret("Enter password")

    result = ctx.academy.directory.authenticate(username, password)
    if not result.success:
        ctx.io.error(result.message)
        return None

    ctx.io.success(result.message)
    ROLE_MENUS[result.user.role](ctx, result.user)
    return result.user


def register_student(ctx: MenuContext) -> Student | None:
    """Prompt for student details, re-asking for bad age or taken username."""
    directory = ctx.academy.directory
    io = ctx.io

    name = io.read_line("Enter student's full name")

    while True:
        try:
            age = parse_int(io.read_line("Enter student's age"))
        except FormatError:
            io.warning("Invalid input. Please enter a numerical value for age.")
            continue
        if directory.is_valid_age(age):
            break
        io.warning(f"Age must be between {directory.min_age} and {directory.max_age}.")

    email = io.read_line("Enter student's email address")
    if not validate_email(email):
        io.warning(f"'{email}' does not look like an email address; saving it anyway.")

    while True:
        username = io.read_line("Choose a username")
        if not username.strip():
            io.warning("Username cannot be empty.")
        elif directory.is_username_taken(username):
            io.warning("That username is already taken. Please choose a different one.")
        else:
            break

    password = io.read_secret("Choose a password")

    result = directory.register_student(
        name=name, age=age, email=email, username=username, password=password
    )
    if not result.success:
        io.error(result.message)
        return None

    student = result.user
    io.success(result.message)
    io.info(f"Your Student ID is: {student.student_id}")
    io.info(f"You can now login with username: {student.username} and your chosen password.")
    return student


# =============================================================================
# ADMIN MENU
# =============================================================================


def add_course(ctx: MenuContext) -> None:
    result = ctx.academy.catalog.add_course(ctx.io.read_line("Enter the name of the new course"))
    if result.success:
        ctx.io.success(result.message)
    else:
        ctx.io.error(result.message)


def manage_course_subjects(ctx: MenuContext) -> None:
    """Pick a course, then add/remove/view its subjects until "Back"."""
    catalog = ctx.academy.catalog
    io = ctx.io

    courses = catalog.list_courses()
    if not courses:
        io.warning("No courses are available to manage subjects. Please add a course first.")
        return

    io.heading("Available Courses for Subject Management")
    for number, course in enumerate(courses, 1):
        io.info(f"{number}. {course.name} (ID: {course.course_id})")
    course = _pick_course(io, courses, "Enter the number of the course to manage subjects for")
    if course is None:
        return

    options = [
        f"Add Subject to {course.name}",
        f"Remove Subject from {course.name}",
        f"View All Subjects in {course.name}",
        "Back to Admin Menu",
    ]
    while True:
        choice = _choose(io, f"Managing Subjects for: {course.name}", options)
        if choice is None:
            continue

        if choice == 0:
            result = catalog.add_subject(course, io.read_line("Enter the name of the new subject to add"))
            if result.success:
                io.success(result.message)
            else:
                io.error(result.message)

        elif choice == 1:
            if not course.subjects:
                io.warning(f"There are no subjects in '{course.name}' to remove.")
                continue
            io.heading(f"Subjects in {course.name}")
            for subject in course.subjects:
                io.info(str(subject))
            result = catalog.remove_subject(course, io.read_line("Enter the Subject ID to remove"))
            if result.success:
                io.success(result.message)
            else:
                io.error(result.message)

        elif choice == 2:
            if not course.subjects:
                io.info(f"No subjects have been added to '{course.name}' yet.")
                continue
            io.heading(f"All Subjects in {course.name}")
            for subject in course.subjects:
                io.info(str(subject))

        else:
            return


def view_registered_students(ctx: MenuContext) -> None:
    students = ctx.academy.directory.students
    if not students:
        ctx.io.warning("No students are registered in the system yet.")
        return

    catalog = ctx.academy.catalog
    ctx.io.heading("All Registered Students")
    for student in students:
        ctx.io.info(student.summary())
        courses = enrolled_courses(student, catalog)
        if courses:
            ctx.io.info(
                "  Enrolled Courses: "
                + "; ".join(f"{c.name} (ID: {c.course_id})" for c in courses)
            )
        subjects = enrolled_subjects(student, catalog)
        if subjects:
            ctx.io.info(
                "  Enrolled Subjects: "
                + "; ".join(f"{s.name} (ID: {s.subject_id})" for s in subjects)
            )
        ctx.io.info(SEPARATOR)


def view_student_results(ctx: MenuContext) -> None:
    directory = ctx.academy.directory
    io = ctx.io

    if not directory.students:
        io.warning("No students registered to view exam results.")
        return

    io.heading("Available Students for Result Viewing")
    for student in directory.students:
        io.info(f"ID: {student.student_id}, Name: {student.name}")

    query = io.read_line(
        "Enter student ID to view results (or type 'all' to view results for all students)"
    )
    lookup = report_for(
        query,
        directory,
        ctx.academy.catalog,
        ctx.academy.exam_bank,
        ctx.pass_threshold,
    )
    if not lookup.success:
        io.error(lookup.message)
        return

    for report in lookup.reports:
        render_report(io, report)


def admin_menu(ctx: MenuContext, admin: Admin) -> None:
    actions: list[Callable[[MenuContext], None]] = [
        add_course,
        manage_course_subjects,
        view_registered_students,
        view_student_results,
    ]
    options = [
        "Add Course",
        "Manage Course (Add/Remove Subjects)",
        "View All Registered Students",
        "View Student Exam Results",
        "Logout",
    ]
    while True:
        choice = _choose(ctx.io, "Admin Menu", options)
        if choice is None:
            continue
        if choice == len(actions):
            logger.info("logout", username=admin.username)
            ctx.io.success("Admin logged out successfully.")
            return
        actions[choice](ctx)


# =============================================================================
# STUDENT MENU
# =============================================================================


def select_course_and_subjects(ctx: MenuContext, student: Student) -> None:
    """Enroll in one course, then in any of its subjects until "0"."""
    io = ctx.io
    courses = ctx.academy.catalog.list_courses()
    if not courses:
        io.warning("No courses available to select. Please contact the admin to add courses.")
        return

    show_courses(ctx)
    course = _pick_course(io, courses, "Enter the number of the course you wish to enroll in")
    if course is None:
        return

    if enroll_course(student, course) is EnrollmentOutcome.ENROLLED:
        io.success(f"{student.name} successfully enrolled in {course.name}.")
    else:
        io.warning(f"{student.name} is already enrolled in {course.name}.")

    if not course.subjects:
        io.warning(
            f"The selected course '{course.name}' has no subjects yet. Cannot enroll in subjects."
        )
        return

    while True:
        io.heading(f"Subjects Available in {course.name}")
        for number, subject in enumerate(course.subjects, 1):
            io.info(f"{number}. {subject.name} (ID: {subject.subject_id})")

        report = enroll_subject_selection(
            student,
            course,
            io.read_line(
                "Enter the numbers of subjects you want to enroll in (e.g., 1 3), or '0' to finish"
            ),
        )
        if report.finished:
            io.info(report.message)
            return

        for subject in report.enrolled:
            io.success(f"{student.name} successfully enrolled in subject {subject.name}.")
        for subject in report.already_enrolled:
            io.warning(f"{student.name} is already enrolled in subject {subject.name}.")
        for token in report.ignored:
            io.warning(f"Invalid subject number '{token}' ignored.")
        if report.error is not None:
            io.error(report.message)


def take_exam(ctx: MenuContext, student: Student) -> None:
    ExamSession(student, ctx.academy.catalog, ctx.academy.exam_bank, ctx.io).run()


def view_my_results(ctx: MenuContext, student: Student) -> None:
    report = build_report(student, ctx.academy.catalog, ctx.academy.exam_bank, ctx.pass_threshold)
    render_report(ctx.io, report)


def student_menu(ctx: MenuContext, student: Student) -> None:
    actions: list[Callable[[MenuContext, Student], None]] = [
        lambda c, _s: show_courses(c),
        select_course_and_subjects,
        take_exam,
        view_my_results,
    ]
    options = [
        "View Available Courses",
        "Select Course and Choose Subjects",
        "Take Exam",
        "View My Exam Result",
        "Logout",
    ]
    while True:
        ctx.io.info(f"\nHello, {student.name} (ID: {student.student_id})!")
        choice = _choose(ctx.io, "Student Menu", options)
        if choice is None:
            continue
        if choice == len(actions):
            logger.info("logout", username=student.username)
            ctx.io.success("Student logged out successfully.")
            return
        actions[choice](ctx, student)


ROLE_MENUS: dict[Role, Callable[[MenuContext, User], None]] = {
    Role.ADMIN: admin_menu,
    Role.STUDENT: student_menu,
}
