"""Repository-wide modularity analysis.

Scans a directory, classifies and scores every source file, and summarizes
the result. Output order is score ascending, then lines descending, so the
worst and largest files come first.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Union

from ..config import AnalysisConfig
from ..file_ops import count_lines, safe_read_file, scan_source_files
from ..logging_config import get_logger
from .models import (
    ExemptedFile,
    FileModularityResult,
    LargestFile,
    ModularityOptions,
    ModularityResult,
    ModularitySummary,
    Rating,
    RatingDistribution,
)
from .patterns import classify
from .scoring import EXEMPT_REASONS, extract_signals, score_file

logger = get_logger(__name__)

LARGEST_FILES_LIMIT = 5

FileOutcome = Union[FileModularityResult, ExemptedFile]


def analyze_file(filepath: Path, root_dir: Path) -> FileOutcome:
    """Classify and score a single file.

    Raises:
        FileAccessError: If the file cannot be read
    """
    content = safe_read_file(filepath)
    lines = count_lines(content)
    rel_path = filepath.relative_to(root_dir).as_posix()
    pattern = classify(rel_path, content)

    if pattern in EXEMPT_REASONS:
        return ExemptedFile(path=rel_path, lines=lines, reason=EXEMPT_REASONS[pattern])

    signals = extract_signals(content)
    score, flags = score_file(lines, pattern, signals, content, rel_path)
    logger.debug(
        f"{rel_path}: {lines} lines, pattern={pattern.value if pattern else None}, score={score}"
    )

    return FileModularityResult(
        path=rel_path,
        lines=lines,
        pattern=pattern,
        score=score,
        rating=Rating.from_score(score),
        flags=flags,
        signals=signals,
    )


def sort_results(files: list[FileModularityResult]) -> list[FileModularityResult]:
    """Worst first: score ascending, lines descending, then path."""
    return sorted(files, key=lambda f: (f.score, -f.lines, f.path))


def analyze_modularity(
    root_dir: Union[str, Path],
    options: Optional[ModularityOptions] = None,
    config: Optional[AnalysisConfig] = None,
) -> ModularityResult:
    """Analyze every source file under ``root_dir``.

    Args:
        root_dir: Repository root
        options: Inclusion filters (defaults: min_lines=100, no pattern filter)
        config: Scanner settings; defaults to ``AnalysisConfig()``

    Returns:
        ModularityResult with sorted files, summary and exempted files

    Raises:
        InvalidPathError: If root_dir is not a directory
        FileAccessError: If any file cannot be read (the run is aborted)
    """
    options = options or ModularityOptions()
    config = config or AnalysisConfig()
    root = Path(root_dir).resolve()

    all_files = scan_source_files(
        root,
        extensions=config.source_extensions,
        ignore_dirs=config.ignore_dirs,
        follow_symlinks=config.follow_symlinks,
    )
    logger.info(f"Analyzing modularity of {len(all_files)} files under {root}")

    workers = options.workers if options.workers is not None else config.workers
    if workers is not None and workers > 1 and len(all_files) > 1:
        # One file per task; order is restored by the sort below
        with ThreadPoolExecutor(max_workers=workers) as executor:
            outcomes = list(executor.map(lambda fp: analyze_file(fp, root), all_files))
    else:
        outcomes = [analyze_file(fp, root) for fp in all_files]

    files: list[FileModularityResult] = []
    exempted: list[ExemptedFile] = []
    total_lines = 0

    for outcome in outcomes:
        total_lines += outcome.lines

        if isinstance(outcome, ExemptedFile):
            exempted.append(outcome)
            continue

        if not options.include_all and outcome.lines < options.min_lines:
            continue
        if options.patterns and outcome.pattern and outcome.pattern not in options.patterns:
            continue

        files.append(outcome)

    files = sort_results(files)
    summary = summarize(files, total_files=len(all_files), total_lines=total_lines)

    logger.info(
        f"Scored {len(files)} files, exempted {len(exempted)}, "
        f"average score {summary.avg_score}"
    )
    return ModularityResult(files=files, summary=summary, exempted=exempted)


def summarize(
    files: list[FileModularityResult], total_files: int, total_lines: int
) -> ModularitySummary:
    """Build the summary from the included files.

    ``files`` is not reordered; largest files come from a sorted copy.
    """
    counts = {rating: 0 for rating in Rating}
    for f in files:
        counts[f.rating] += 1

    if files:
        avg_score = round(sum(f.score for f in files) / len(files), 1)
    else:
        avg_score = 10.0

    largest = sorted(files, key=lambda f: (-f.lines, f.path))[:LARGEST_FILES_LIMIT]

    return ModularitySummary(
        total_files=total_files,
        total_lines=total_lines,
        avg_score=avg_score,
        distribution=RatingDistribution(
            elite=counts[Rating.ELITE],
            good=counts[Rating.GOOD],
            acceptable=counts[Rating.ACCEPTABLE],
            needs_work=counts[Rating.NEEDS_WORK],
            poor=counts[Rating.POOR],
        ),
        largest_files=tuple(LargestFile(path=f.path, lines=f.lines, score=f.score) for f in largest),
    )
