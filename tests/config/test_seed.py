"""Tests for seed loading and academy population."""

import pytest
from pydantic import ValidationError

from academy.config.app_config import AppConfig, RegistrationConfig
from academy.config.seed import (
    QuestionSeed,
    SeedData,
    build_academy,
    default_seed,
    load_seed,
)


class TestDefaultSeed:
    """Tests for the built-in demo data."""

    def test_counts(self, academy):
        """Three courses, six subjects, one admin, three students, three exams."""
        assert len(academy.catalog.courses) == 3
        assert sum(len(c.subjects) for c in academy.catalog.courses) == 6
        assert len(academy.directory.users) == 4
        assert [s.username for s in academy.directory.students] == ["alice", "bob", "charlie"]
        assert [e.exam_id for e in academy.exam_bank.exams] == ["EXAM1", "EXAM2", "EXAM3"]

    def test_enrollments(self, academy):
        """Demo students start enrolled by id."""
        charlie = academy.directory.find_student_by_username("charlie")

        assert charlie.enrolled_course_ids == ["COU102"]
        assert charlie.enrolled_subject_ids == ["SUB10004"]

    def test_fresh_sequences_per_academy(self):
        """Two academies allocate ids independently."""
        first = build_academy(seed=default_seed(), config=AppConfig())
        second = build_academy(seed=default_seed(), config=AppConfig())

        assert first.catalog.add_course("Extra").course.course_id == "COU103"
        assert second.catalog.add_course("Extra").course.course_id == "COU103"

    def test_build_without_seed_uses_builtin(self):
        """A missing seed file falls back to the demo data."""
        academy = build_academy()

        assert len(academy.directory.students) == 3


class TestLoadSeed:
    """Tests for load_seed."""

    def test_reads_yaml(self, tmp_path):
        """A valid YAML file replaces the demo data."""
        path = tmp_path / "seed.yaml"
        path.write_text(
            "admins:\n"
            "  - {username: root, password: toor}\n"
            "courses:\n"
            "  - {name: Math, subjects: [Algebra]}\n"
            "exams:\n"
            "  - subject: Algebra\n"
            "    questions:\n"
            "      - {text: '1+1?', options: ['1', '2'], correct: 1}\n",
            encoding="utf-8",
        )

        seed = load_seed(path)
        academy = build_academy(seed=seed, config=AppConfig())

        assert [c.name for c in academy.catalog.courses] == ["Math"]
        assert academy.exam_bank.question_count("SUB10000") == 1
        assert academy.directory.authenticate("root", "toor").success is True

    def test_invalid_yaml_falls_back(self, tmp_path):
        """A seed that fails validation is replaced by the demo data."""
        path = tmp_path / "seed.yaml"
        path.write_text("students:\n  - {username: x}\n", encoding="utf-8")

        assert load_seed(path) == default_seed()

    def test_missing_file_falls_back(self, tmp_path):
        assert load_seed(tmp_path / "missing.yaml") == default_seed()


class TestSeedValidation:
    """Tests for seed schemas and population rules."""

    def test_correct_index_must_fit_options(self):
        """correct must point at one of the options."""
        with pytest.raises(ValidationError):
            QuestionSeed(text="Q", options=["a", "b"], correct=2)

    def test_duplicate_entries_skipped(self):
        """Duplicates are skipped without stopping population."""
        seed = SeedData.model_validate(
            {
                "courses": [
                    {"name": "Math", "subjects": ["Algebra", "algebra"]},
                    {"name": "MATH"},
                ],
                "exams": [
                    {"subject": "Algebra", "questions": [{"text": "Q", "options": ["a", "b"], "correct": 0}]},
                    {"subject": "Algebra", "questions": [{"text": "Q", "options": ["a", "b"], "correct": 1}]},
                    {"subject": "Geometry", "questions": [{"text": "Q", "options": ["a", "b"], "correct": 1}]},
                ],
            }
        )

        academy = build_academy(seed=seed, config=AppConfig())

        assert len(academy.catalog.courses) == 1
        assert len(academy.catalog.courses[0].subjects) == 1
        assert len(academy.exam_bank.exams) == 1

    def test_age_limits_from_config(self):
        """Students outside the configured age range are skipped."""
        config = AppConfig(registration=RegistrationConfig(min_age=21, max_age=100))

        academy = build_academy(seed=default_seed(), config=config)

        assert [s.username for s in academy.directory.students] == ["bob"]
