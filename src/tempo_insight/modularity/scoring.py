"""Pattern-aware modularity scoring.

A well-organized 2,500-line store can be easier to maintain than a 300-line
file with no structure, so size is judged against the file's pattern and
then adjusted for organization, coupling and API surface.

Every rule reads the original signals, never the running score, so rules
are independent and can be tested one at a time.
"""

from __future__ import annotations

import re
from typing import Optional

from .models import (
    ModularityFlag,
    Pattern,
    SizeThresholds,
    StructuralSignals,
)

# ---------------------------------------------------------------------------
# Thresholds
# ---------------------------------------------------------------------------

PATTERN_THRESHOLDS: dict[Pattern, SizeThresholds] = {
    Pattern.CONTROLLER: SizeThresholds(yellow=800, red=1200),
    Pattern.DATA_STORE: SizeThresholds(yellow=1500, red=2500),
    Pattern.ROUTE_TABLE: SizeThresholds(yellow=1000, red=1500),
    Pattern.TYPE_DEFINITIONS: SizeThresholds(yellow=800, red=1200),
    Pattern.STATE_MACHINE: SizeThresholds(yellow=600, red=900),
    Pattern.UI_COMPONENT: SizeThresholds(yellow=250, red=400),
    Pattern.MIDDLEWARE: SizeThresholds(yellow=400, red=600),
    Pattern.UTILITY: SizeThresholds(yellow=150, red=250),
}

DEFAULT_THRESHOLDS = SizeThresholds(yellow=300, red=500)

# Exempt patterns have no thresholds at all; they never reach the scorer.
EXEMPT_REASONS: dict[Pattern, str] = {
    Pattern.TEST: "Test files are exempt",
    Pattern.GENERATED: "Generated files are exempt",
}

# Patterns that legitimately run larger get the benefit of the doubt
RECOGNIZED_PATTERNS = frozenset(
    {
        Pattern.CONTROLLER,
        Pattern.DATA_STORE,
        Pattern.ROUTE_TABLE,
        Pattern.STATE_MACHINE,
    }
)

# Internal structure only matters past this size
STRUCTURE_MIN_LINES = 300

HIGH_COUPLING_IMPORTS = 15
SEVERE_COUPLING_IMPORTS = 25
EXPORT_BLOAT_LIMIT = 20
GRAB_BAG_EXPORT_LIMIT = 10

MIN_SCORE = 0
MAX_SCORE = 10

# ---------------------------------------------------------------------------
# Signal extraction
# ---------------------------------------------------------------------------

SECTION_DIVIDER_RE = re.compile(r"//\s*={4,}|/\*\s*={4,}|//\s*-{4,}")
EXPORT_RE = re.compile(
    r"^export\s+(const|function|class|interface|type|enum|default)", re.MULTILINE
)
IMPORT_RE = re.compile(r"^import\s+", re.MULTILINE)
CLASS_RE = re.compile(r"\bclass\s+\w+")
METHOD_RE = re.compile(
    r"^\s+(async\s+)?(private\s+|public\s+|protected\s+)?\w+\s*\([^)]*\)\s*[:{]",
    re.MULTILINE,
)
ROLE_CLASS_RE = re.compile(r"class\s+\w*(Manager|Handler|Service|Controller|Store)")
GENERIC_MODULE_RE = re.compile(r"(utils?|helpers?|misc|common)\.ts$", re.IGNORECASE)
GRAB_BAG_PATH_RE = re.compile(r"(utils?|helpers?)\.ts$", re.IGNORECASE)


def extract_signals(content: str) -> StructuralSignals:
    """Derive structural signals from raw file text."""
    section_count = len(SECTION_DIVIDER_RE.findall(content))
    return StructuralSignals(
        has_sections=section_count > 0,
        section_count=section_count,
        export_count=len(EXPORT_RE.findall(content)),
        import_count=len(IMPORT_RE.findall(content)),
        has_nested_classes=len(CLASS_RE.findall(content)) > 1,
        method_count=len(METHOD_RE.findall(content)),
    )


def thresholds_for(pattern: Optional[Pattern]) -> SizeThresholds:
    """Size thresholds for a pattern (None = unclassified).

    Raises:
        ValueError: If the pattern is exempt from scoring
    """
    if pattern in EXEMPT_REASONS:
        raise ValueError(f"{pattern.value} files are exempt and have no size thresholds")
    if pattern is None:
        return DEFAULT_THRESHOLDS
    return PATTERN_THRESHOLDS.get(pattern, DEFAULT_THRESHOLDS)


def has_single_responsibility(content: str, path: str) -> bool:
    """Heuristic: several role-named classes or a catch-all filename mean no."""
    if len(ROLE_CLASS_RE.findall(content)) > 1:
        return False
    if GENERIC_MODULE_RE.search(path):
        return False
    return True


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


def score_file(
    lines: int,
    pattern: Optional[Pattern],
    signals: StructuralSignals,
    content: str,
    path: str,
) -> tuple[int, tuple[ModularityFlag, ...]]:
    """Score a file's modularity on a 0-10 scale.

    Args:
        lines: Line count of the file
        pattern: Classified pattern, None for unclassified
        signals: Signals extracted from ``content``
        content: Raw file text
        path: Repository-relative path

    Returns:
        (score, flags) with flags in rule order
    """
    score = MAX_SCORE
    flags: list[ModularityFlag] = []
    thresholds = thresholds_for(pattern)

    # 1. Size relative to the pattern's thresholds
    if lines > thresholds.red:
        score -= 3
    elif lines > thresholds.yellow:
        score -= 1

    # 2. Single responsibility
    if not has_single_responsibility(content, path):
        score -= 2
        flags.append(ModularityFlag.NO_SINGLE_RESPONSIBILITY)

    # 3. Internal structure in large files
    if lines > STRUCTURE_MIN_LINES:
        if signals.has_sections or signals.has_nested_classes:
            score += 1
        else:
            score -= 2
            flags.append(ModularityFlag.NO_INTERNAL_STRUCTURE)

    # 4. Coupling. Only the moderate branch carries the flag.
    if signals.import_count > SEVERE_COUPLING_IMPORTS:
        score -= 2
    elif signals.import_count > HIGH_COUPLING_IMPORTS:
        score -= 1
        flags.append(ModularityFlag.HIGH_COUPLING)

    # 5. Bloated export surface
    if signals.export_count > EXPORT_BLOAT_LIMIT and pattern is not Pattern.TYPE_DEFINITIONS:
        score -= 1
        flags.append(ModularityFlag.LOW_COHESION)

    # 6. Recognized pattern credit
    if pattern in RECOGNIZED_PATTERNS:
        score += 1

    # 7. Utility grab-bag
    if GRAB_BAG_PATH_RE.search(path) and signals.export_count > GRAB_BAG_EXPORT_LIMIT:
        score -= 2
        flags.append(ModularityFlag.UTILITY_GRAB_BAG)

    return max(MIN_SCORE, min(MAX_SCORE, score)), tuple(flags)
