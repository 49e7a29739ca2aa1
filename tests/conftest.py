"""Shared fixtures for academy tests.

Every test runs against an isolated config file whose seed_file does not
exist, so the built-in demo seed is used and ./data is never read.
"""

import pytest
import structlog

from academy.config.app_config import CONFIG_ENV_VAR, AppConfig, clear_config_cache
from academy.config.seed import build_academy, default_seed
from academy.core.catalog import Catalog
from academy.core.directory import Directory
from academy.core.exam_bank import ExamBank, Question


class ScriptedIO:
    """ConsoleIO that replays canned input lines and records output."""

    def __init__(self, *inputs: str):
        self._inputs = list(inputs)
        self.prompts: list[str] = []
        self.messages: list[tuple[str, str]] = []

    def read_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._inputs:
            raise AssertionError(f"No scripted input left for prompt: {prompt}")
        return self._inputs.pop(0)

    def read_secret(self, prompt: str) -> str:
        return self.read_line(prompt)

    def heading(self, message: str) -> None:
        self.messages.append(("heading", message))

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    @property
    def output(self) -> str:
        return "\n".join(message for _, message in self.messages)

    @property
    def remaining(self) -> int:
        return len(self._inputs)

    def lines(self, level: str) -> list[str]:
        return [message for kind, message in self.messages if kind == level]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the app config at a temp file with no seed file.

    Also undoes the stderr logging set up by CLI invocations.
    """
    config_file = tmp_path / "app_config_v1.yaml"
    config_file.write_text(
        f'seed_file: "{tmp_path / "missing_seed.yaml"}"\n', encoding="utf-8"
    )
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
    clear_config_cache()
    yield config_file
    clear_config_cache()
    structlog.reset_defaults()


@pytest.fixture
def make_io():
    """Factory for ScriptedIO: make_io("1", "2", ...)."""
    return ScriptedIO


@pytest.fixture
def academy():
    """Academy populated with the built-in demo seed.

    IDs: Java Programming=COU100 (Core Java=SUB10000, Advanced Java=SUB10001),
    Python for Data Science=COU101 (Python Basics=SUB10002, ...),
    Web Development=COU102 (HTML/CSS Fundamentals=SUB10004, ...);
    alice=STU1000, bob=STU1001, charlie=STU1002;
    Core Java=EXAM1, Python Basics=EXAM2, HTML/CSS Fundamentals=EXAM3.
    """
    return build_academy(seed=default_seed(), config=AppConfig())


@pytest.fixture
def alice(academy):
    return academy.directory.find_student("STU1000")


@pytest.fixture
def catalog() -> Catalog:
    return Catalog()


@pytest.fixture
def directory() -> Directory:
    return Directory()


@pytest.fixture
def core_java_questions() -> list[Question]:
    """Five questions whose correct options are 0, 1, 1, 2, 2."""
    return [
        Question("Q1", ("a", "b", "c", "d"), 0),
        Question("Q2", ("a", "b", "c", "d"), 1),
        Question("Q3", ("a", "b", "c", "d"), 1),
        Question("Q4", ("a", "b", "c", "d"), 2),
        Question("Q5", ("a", "b", "c", "d"), 2),
    ]


@pytest.fixture
def exam_bank() -> ExamBank:
    return ExamBank()
