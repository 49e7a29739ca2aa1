"""CLI commands for the academy console.

Commands:
- run: Interactive session (login, registration, admin and student menus)
- courses: List the seeded catalog
- exams: List the seeded exam bank

State lives in memory for the duration of one command.
"""

import logging
import sys
from pathlib import Path

import structlog
import typer
from rich.console import Console
from rich.table import Table

from academy.cli.menus import MenuContext, TerminalIO, run_main_loop
from academy.config.app_config import load_app_config
from academy.config.seed import build_academy, load_seed
from academy.core.academy import Academy

app = typer.Typer(
    name="academy",
    help="Console student management: courses, enrollment and multiple-choice exams.",
    no_args_is_help=True,
)

console = Console()


def _configure_logging(level_name: str) -> None:
    """Route structlog to stderr, filtered at ``level_name``."""
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.WARNING

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def _load_academy(seed_file: Path | None) -> Academy:
    config = load_app_config()
    seed = load_seed(seed_file) if seed_file else None
    return build_academy(seed=seed, config=config)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs on stderr"),
) -> None:
    """Console student management system."""
    config = load_app_config()
    _configure_logging("DEBUG" if verbose else config.log_level)


@app.command()
def run(
    seed_file: Path | None = typer.Option(
        None, "--seed", "-s", help="YAML seed file (overrides config)"
    ),
) -> None:
    """Start the interactive console.

    Loads the seed data, then loops over Login / Register Student / Exit.
    Nothing is saved when the session ends.
    """
    config = load_app_config()
    academy = _load_academy(seed_file)

    console.print(
        f"[dim]System initialized: {len(academy.catalog.courses)} courses, "
        f"{len(academy.directory.students)} students, "
        f"{len(academy.exam_bank.exams)} exams.[/dim]"
    )

    ctx = MenuContext(
        academy=academy,
        io=TerminalIO(console),
        pass_threshold=config.grading.pass_threshold,
    )
    run_main_loop(ctx)


@app.command()
def courses(
    seed_file: Path | None = typer.Option(
        None, "--seed", "-s", help="YAML seed file (overrides config)"
    ),
) -> None:
    """List the seeded courses and their subjects."""
    academy = _load_academy(seed_file)
    catalog_courses = academy.catalog.list_courses()

    if not catalog_courses:
        console.print("[yellow]No courses in the seed data[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Course ID")
    table.add_column("Course")
    table.add_column("Subject ID")
    table.add_column("Subject")
    table.add_column("Exam")

    for course in catalog_courses:
        if not course.subjects:
            table.add_row(course.course_id, course.name, "-", "-", "-")
            continue
        for subject in course.subjects:
            exam = academy.exam_bank.find_exam(subject.subject_id)
            table.add_row(
                course.course_id,
                course.name,
                subject.subject_id,
                subject.name,
                exam.exam_id if exam else "-",
            )

    console.print(f"\n[bold]Courses ({len(catalog_courses)}):[/bold]\n")
    console.print(table)


@app.command()
def exams(
    seed_file: Path | None = typer.Option(
        None, "--seed", "-s", help="YAML seed file (overrides config)"
    ),
) -> None:
    """List the seeded exams."""
    academy = _load_academy(seed_file)
    bank_exams = academy.exam_bank.exams

    if not bank_exams:
        console.print("[yellow]No exams in the seed data[/yellow]")
        return

    console.print(f"\n[bold]Exams ({len(bank_exams)}):[/bold]\n")
    for exam in bank_exams:
        console.print(f"  [bold]{exam.exam_id}[/bold]")
        console.print(f"    [dim]subject:[/dim]   {exam.subject_name} ({exam.subject_id})")
        console.print(f"    [dim]questions:[/dim] {exam.question_count}")
        console.print()
