"""Data models for pattern-aware modularity analysis.

A scanned file ends up as exactly one of:
- FileModularityResult: classified (or unclassified) and scored
- ExemptedFile: test or generated code, never scored
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Pattern(Enum):
    """Structural role a source file plays.

    Values are the short tags used on the command line and in JSON output.
    Classification order lives in ``patterns.PATTERN_RULES``, not here.
    """

    TEST = "test"
    GENERATED = "generated"
    TYPE_DEFINITIONS = "types"
    CONTROLLER = "controller"
    DATA_STORE = "store"
    ROUTE_TABLE = "routes"
    STATE_MACHINE = "state-machine"
    MIDDLEWARE = "middleware"
    UI_COMPONENT = "component"
    UTILITY = "utility"


class Rating(Enum):
    """Qualitative band for a 0-10 modularity score."""

    ELITE = "elite"  # 9-10
    GOOD = "good"  # 7-8
    ACCEPTABLE = "acceptable"  # 5-6
    NEEDS_WORK = "needs-work"  # 3-4
    POOR = "poor"  # 0-2

    @classmethod
    def from_score(cls, score: int) -> Rating:
        if score >= 9:
            return cls.ELITE
        if score >= 7:
            return cls.GOOD
        if score >= 5:
            return cls.ACCEPTABLE
        if score >= 3:
            return cls.NEEDS_WORK
        return cls.POOR


class ModularityFlag(Enum):
    """Diagnostic emitted by a scoring rule."""

    NO_SINGLE_RESPONSIBILITY = "no-single-responsibility"
    NO_INTERNAL_STRUCTURE = "no-internal-structure"
    HIGH_COUPLING = "high-coupling"
    LOW_COHESION = "low-cohesion"
    UTILITY_GRAB_BAG = "utility-grab-bag"


@dataclass(frozen=True)
class SizeThresholds:
    """Line counts past which a file is a warning (yellow) or severe (red)."""

    yellow: int
    red: int


@dataclass(frozen=True)
class StructuralSignals:
    """Text-derived structure of a single file.

    Attributes:
        has_sections: At least one section-divider comment
        section_count: Number of section-divider comments
        export_count: Top-level ``export`` declarations
        import_count: Top-level ``import`` statements
        has_nested_classes: More than one class definition in the file
        method_count: Indented method-like declarations
    """

    has_sections: bool = False
    section_count: int = 0
    export_count: int = 0
    import_count: int = 0
    has_nested_classes: bool = False
    method_count: int = 0


@dataclass(frozen=True)
class FileModularityResult:
    path: str
    lines: int
    pattern: Optional[Pattern]
    score: int
    rating: Rating
    flags: tuple[ModularityFlag, ...]
    signals: StructuralSignals


@dataclass(frozen=True)
class ExemptedFile:
    path: str
    lines: int
    reason: str


@dataclass(frozen=True)
class LargestFile:
    path: str
    lines: int
    score: int


@dataclass(frozen=True)
class RatingDistribution:
    """Count of included files per rating band."""

    elite: int = 0
    good: int = 0
    acceptable: int = 0
    needs_work: int = 0
    poor: int = 0

    @property
    def total(self) -> int:
        return self.elite + self.good + self.acceptable + self.needs_work + self.poor


@dataclass(frozen=True)
class ModularitySummary:
    """Aggregate view over the included (post-filter) files.

    ``total_files`` and ``total_lines`` cover the whole scanned set, exempt and
    filtered-out files included. ``avg_score`` is 10.0 when nothing qualified.
    """

    total_files: int
    total_lines: int
    avg_score: float
    distribution: RatingDistribution
    largest_files: tuple[LargestFile, ...] = ()


@dataclass(frozen=True)
class ModularityOptions:
    """Filters for a repository run.

    Attributes:
        min_lines: Scored files shorter than this are dropped from ``files``
        include_all: Ignore ``min_lines``
        patterns: Allow-list of patterns; unclassified files still pass
        workers: Thread pool size (None or 1 = sequential)
    """

    min_lines: int = 100
    include_all: bool = False
    patterns: Optional[frozenset[Pattern]] = None
    workers: Optional[int] = None


@dataclass(frozen=True)
class ModularityResult:
    """Files sorted worst-first (score ascending, then largest first)."""

    files: list[FileModularityResult]
    summary: ModularitySummary
    exempted: list[ExemptedFile] = field(default_factory=list)
