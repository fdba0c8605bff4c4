"""
Safe file operations for Tempo Insight.

Directory enumeration and UTF-8 reads used by the modularity analyzer.
"""

import os
from pathlib import Path
from typing import Iterable, Optional

from .exceptions import FileAccessError, InvalidPathError
from .logging_config import get_logger

logger = get_logger(__name__)


def count_lines(content: str) -> int:
    """Number of newline-separated segments, so an empty file has one line."""
    return len(content.split("\n"))


def safe_read_file(
    filepath: Path,
    encoding: str = "utf-8",
    errors: str = "strict",
) -> str:
    """
    Read a text file, converting every failure into FileAccessError.

    Line endings are returned untranslated.

    Args:
        filepath: File to read
        encoding: Text encoding
        errors: How to handle encoding errors

    Returns:
        File contents as string

    Raises:
        FileAccessError: If file cannot be read or decoded
    """
    try:
        with open(filepath, encoding=encoding, errors=errors, newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise FileAccessError(filepath, f"Encoding error: {e}")
    except OSError as e:
        raise FileAccessError(filepath, f"OS error: {e}")


def scan_source_files(
    root_dir: Path,
    extensions: Iterable[str],
    ignore_dirs: Optional[Iterable[str]] = None,
    follow_symlinks: bool = False,
) -> list[Path]:
    """
    Enumerate source files under a root directory.

    Directories whose name is in ``ignore_dirs`` are pruned before descent.
    Only files whose suffix is in ``extensions`` are returned.

    Args:
        root_dir: Directory to scan
        extensions: File suffixes to include (e.g. ['.ts', '.tsx'])
        ignore_dirs: Directory names to skip
        follow_symlinks: Whether to follow symbolic links

    Returns:
        Sorted list of absolute file paths

    Raises:
        InvalidPathError: If root_dir is not a directory
        FileAccessError: If the directory walk fails
    """
    root = Path(root_dir).resolve()
    if not root.is_dir():
        raise InvalidPathError(root, "Not a directory")

    ext_set = set(extensions)
    skip = set(ignore_dirs or ())
    results: list[Path] = []

    def _on_error(err: OSError) -> None:
        raise FileAccessError(Path(err.filename or root), f"Directory scan failed: {err}")

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error, followlinks=follow_symlinks):
        # Prune in place so os.walk never descends into ignored directories
        dirnames[:] = [d for d in dirnames if d not in skip]

        for name in filenames:
            path = Path(dirpath) / name
            if path.suffix not in ext_set:
                continue
            if path.is_symlink() and not follow_symlinks:
                continue
            results.append(path)

    results.sort()
    logger.debug(f"Scanned {root}: {len(results)} source files")
    return results
