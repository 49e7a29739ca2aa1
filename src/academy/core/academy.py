"""In-memory state for one process run."""

from __future__ import annotations

from dataclasses import dataclass, field

from academy.core.catalog import Catalog
from academy.core.directory import Directory
from academy.core.exam_bank import ExamBank


@dataclass
class Academy:
    """Aggregate root: the catalog, the user directory and the exam bank."""

    catalog: Catalog = field(default_factory=Catalog)
    directory: Directory = field(default_factory=Directory)
    exam_bank: ExamBank = field(default_factory=ExamBank)
