"""Tests for the course catalog."""

from academy.core.catalog import Catalog, Course, Subject
from academy.core.identifiers import IdSequence
from academy.utils.validators import ErrorKind


class TestAddCourse:
    """Tests for Catalog.add_course."""

    def test_add_course_assigns_id(self, catalog):
        """First course gets COU100, next COU101."""
        first = catalog.add_course("Math")
        second = catalog.add_course("Physics")

        assert first.success is True
        assert first.course.course_id == "COU100"
        assert second.course.course_id == "COU101"
        assert first.course.subjects == []

    def test_duplicate_course_name_any_case(self, catalog):
        """Adding "math" after "Math" is a DUPLICATE and nothing is added."""
        catalog.add_course("Math")
        result = catalog.add_course("math")

        assert result.success is False
        assert result.error is ErrorKind.DUPLICATE
        assert len(catalog.list_courses()) == 1

    def test_blank_course_name_rejected(self, catalog):
        """Blank names are a FORMAT error."""
        result = catalog.add_course("   ")

        assert result.success is False
        assert result.error is ErrorKind.FORMAT
        assert catalog.list_courses() == []

    def test_list_courses_keeps_insertion_order(self, catalog):
        """Courses come back in the order they were added."""
        for name in ["Zoology", "Art", "Math"]:
            catalog.add_course(name)

        assert [c.name for c in catalog.list_courses()] == ["Zoology", "Art", "Math"]

    def test_injected_sequences_are_used(self):
        """Catalog allocates ids from the sequences it is given."""
        catalog = Catalog(
            course_ids=IdSequence("COU", 500),
            subject_ids=IdSequence("SUB", 7),
        )
        course = catalog.add_course("Math").course
        subject = catalog.add_subject(course, "Algebra").subject

        assert course.course_id == "COU500"
        assert subject.subject_id == "SUB7"


class TestSubjects:
    """Tests for adding and removing subjects."""

    def test_add_subject_in_order(self, catalog):
        """Subjects keep insertion order and get SUB ids from 10000."""
        course = catalog.add_course("Math").course
        catalog.add_subject(course, "Algebra")
        catalog.add_subject(course, "Geometry")

        assert [s.name for s in catalog.list_subjects_of(course)] == ["Algebra", "Geometry"]
        assert [s.subject_id for s in course.subjects] == ["SUB10000", "SUB10001"]

    def test_duplicate_subject_name_rejected(self, catalog):
        """Same subject name (any case) in one course is a DUPLICATE."""
        course = catalog.add_course("Math").course
        catalog.add_subject(course, "Algebra")
        result = catalog.add_subject(course, "ALGEBRA")

        assert result.success is False
        assert result.error is ErrorKind.DUPLICATE
        assert len(course.subjects) == 1

    def test_rejected_subject_does_not_consume_id(self, catalog):
        """A rejected duplicate leaves the SUB counter untouched."""
        course = catalog.add_course("Math").course
        catalog.add_subject(course, "Algebra")
        catalog.add_subject(course, "algebra")
        geometry = catalog.add_subject(course, "Geometry").subject

        assert geometry.subject_id == "SUB10001"

    def test_same_subject_name_in_other_course_allowed(self, catalog):
        """Duplicate check is scoped to one course."""
        math = catalog.add_course("Math").course
        physics = catalog.add_course("Physics").course
        catalog.add_subject(math, "Mechanics")

        assert catalog.add_subject(physics, "Mechanics").success is True

    def test_course_add_subject_object_duplicate(self):
        """Course.add_subject reports an already existing name."""
        course = Course(course_id="COU1", name="Math")
        course.add_subject(Subject("SUB1", "Algebra"))
        result = course.add_subject(Subject("SUB2", "algebra"))

        assert result.success is False
        assert result.error is ErrorKind.DUPLICATE
        assert [s.subject_id for s in course.subjects] == ["SUB1"]

    def test_remove_subject_by_id(self, catalog):
        """remove_subject drops the matching subject."""
        course = catalog.add_course("Math").course
        algebra = catalog.add_subject(course, "Algebra").subject
        catalog.add_subject(course, "Geometry")

        result = catalog.remove_subject(course, algebra.subject_id)

        assert result.success is True
        assert [s.name for s in course.subjects] == ["Geometry"]

    def test_remove_unknown_subject_not_found(self, catalog):
        """Unknown id is NOT_FOUND and the list is unchanged."""
        course = catalog.add_course("Math").course
        catalog.add_subject(course, "Algebra")
        before = list(course.subjects)

        result = course.remove_subject("SUB99999")

        assert result.success is False
        assert result.error is ErrorKind.NOT_FOUND
        assert course.subjects == before


class TestLookups:
    """Tests for catalog lookups."""

    def test_find_subject_scans_all_courses(self, catalog):
        """find_subject finds subjects in any course."""
        catalog.add_course("Math")
        physics = catalog.add_course("Physics").course
        optics = catalog.add_subject(physics, "Optics").subject

        assert catalog.find_subject(optics.subject_id) is optics
        assert catalog.subject_name(optics.subject_id) == "Optics"
        assert catalog.subject_name("SUB1") is None

    def test_subject_equality_by_id(self):
        """Subjects with the same id are equal regardless of name."""
        assert Subject("SUB1", "Algebra") == Subject("SUB1", "Renamed")
        assert Subject("SUB1", "Algebra") != Subject("SUB2", "Algebra")

    def test_find_course_by_name_case_insensitive(self, catalog):
        """find_course_by_name ignores case."""
        course = catalog.add_course("Web Development").course

        assert catalog.find_course_by_name("web development") is course
        assert catalog.find_course(course.course_id) is course
        assert catalog.find_course("COU1") is None
