"""Tests for student enrollment."""

import pytest

from academy.core.enrollment import (
    EnrollmentOutcome,
    enroll_course,
    enroll_subject,
    enroll_subject_selection,
    enrolled_courses,
    enrolled_subjects,
)
from academy.utils.validators import ErrorKind


@pytest.fixture
def math_course(catalog):
    course = catalog.add_course("Math").course
    catalog.add_subject(course, "Algebra")
    catalog.add_subject(course, "Geometry")
    return course


@pytest.fixture
def student(directory):
    return directory.register_student("Dana", 21, "dana@example.com", "dana", "pw").user


class TestEnrollCourse:
    """Tests for enroll_course."""

    def test_enroll_course_is_idempotent(self, student, math_course):
        """Repeated enrollment keeps the course exactly once."""
        outcomes = [enroll_course(student, math_course) for _ in range(3)]

        assert outcomes[0] is EnrollmentOutcome.ENROLLED
        assert outcomes[1:] == [EnrollmentOutcome.ALREADY_ENROLLED] * 2
        assert student.enrolled_course_ids == [math_course.course_id]

    def test_course_enrollment_does_not_enroll_subjects(self, student, math_course):
        """Joining a course leaves subject enrollment empty."""
        enroll_course(student, math_course)

        assert student.enrolled_subject_ids == []


class TestEnrollSubject:
    """Tests for enroll_subject."""

    def test_enroll_subject_is_idempotent(self, student, math_course):
        """A subject is stored once."""
        algebra = math_course.subjects[0]

        assert enroll_subject(student, algebra) is EnrollmentOutcome.ENROLLED
        assert enroll_subject(student, algebra) is EnrollmentOutcome.ALREADY_ENROLLED
        assert student.enrolled_subject_ids == [algebra.subject_id]

    def test_subject_without_course_enrollment(self, student, math_course):
        """Subjects can be joined without joining their course."""
        enroll_subject(student, math_course.subjects[1])

        assert student.enrolled_course_ids == []
        assert student.enrolled_subject_ids == [math_course.subjects[1].subject_id]


class TestSubjectSelection:
    """Tests for enroll_subject_selection."""

    def test_zero_finishes(self, student, math_course):
        """A lone 0 ends selection without changes."""
        report = enroll_subject_selection(student, math_course, " 0 ")

        assert report.finished is True
        assert student.enrolled_subject_ids == []

    def test_multiple_numbers(self, student, math_course):
        """Selecting "1 2" enrolls both subjects in order."""
        report = enroll_subject_selection(student, math_course, "1 2")

        assert [s.name for s in report.enrolled] == ["Algebra", "Geometry"]
        assert report.error is None
        assert len(student.enrolled_subject_ids) == 2

    def test_out_of_range_ignored(self, student, math_course):
        """Numbers outside the list are reported and skipped."""
        report = enroll_subject_selection(student, math_course, "3 1 -1")

        assert report.ignored == ["3", "-1"]
        assert [s.name for s in report.enrolled] == ["Algebra"]

    def test_already_enrolled_reported(self, student, math_course):
        """Repeats are reported separately from new enrollments."""
        enroll_subject_selection(student, math_course, "1")
        report = enroll_subject_selection(student, math_course, "1")

        assert report.enrolled == []
        assert [s.name for s in report.already_enrolled] == ["Algebra"]

    def test_non_numeric_stops_processing(self, student, math_course):
        """Tokens before the bad one are applied; the rest are not."""
        report = enroll_subject_selection(student, math_course, "1 x 2")

        assert report.error is ErrorKind.FORMAT
        assert student.enrolled_subject_ids == [math_course.subjects[0].subject_id]

    def test_blank_line_is_format_error(self, student, math_course):
        """An empty line is malformed."""
        report = enroll_subject_selection(student, math_course, "")

        assert report.finished is False
        assert report.error is ErrorKind.FORMAT


class TestResolution:
    """Tests for resolving enrolled ids through the catalog."""

    def test_enrolled_courses_and_subjects(self, student, catalog, math_course):
        """Ids resolve to catalog objects in enrollment order."""
        enroll_course(student, math_course)
        enroll_subject(student, math_course.subjects[1])
        enroll_subject(student, math_course.subjects[0])

        assert enrolled_courses(student, catalog) == [math_course]
        assert [s.name for s in enrolled_subjects(student, catalog)] == ["Geometry", "Algebra"]

    def test_removed_subject_skipped(self, student, catalog, math_course):
        """Subjects removed from the catalog are not resolved."""
        algebra = math_course.subjects[0]
        enroll_subject(student, algebra)
        catalog.remove_subject(math_course, algebra.subject_id)

        assert enrolled_subjects(student, catalog) == []
        assert student.enrolled_subject_ids == [algebra.subject_id]
