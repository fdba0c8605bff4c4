"""Extract commit history via the git CLI."""

import re
import subprocess
from pathlib import Path
from typing import Optional

from ..exceptions import GitHistoryError
from ..logging_config import get_logger
from .models import Commit

logger = get_logger(__name__)


class GitExtractor:
    """Parse ``git log`` into a list of Commit objects (newest first)."""

    # Maximum git log output size (50MB) to prevent OOM on huge repos
    _MAX_OUTPUT_BYTES = 50 * 1024 * 1024

    # Matches: 40-char hex hash | unix timestamp | author email | subject
    # Subject can contain | characters, so we use maxsplit=3 during parsing
    _HEADER_RE = re.compile(r"^[0-9a-f]{40}\|\d+\|[^|]*\|.*$")

    def __init__(
        self,
        repo_path: str,
        max_commits: int = 0,
        since: Optional[str] = None,
        until: Optional[str] = None,
    ):
        self.repo_path = str(Path(repo_path).resolve())
        self.max_commits = max_commits
        self.since = since
        self.until = until

    def is_git_repo(self) -> bool:
        try:
            result = subprocess.run(
                ["git", "-C", self.repo_path, "rev-parse", "--git-dir"],
                capture_output=True,
                text=True,
                timeout=5,
            )
            return result.returncode == 0
        except (FileNotFoundError, subprocess.TimeoutExpired):
            return False

    def head_sha(self) -> Optional[str]:
        """SHA of HEAD, or None for an empty or unreadable repository."""
        try:
            result = subprocess.run(
                ["git", "-C", self.repo_path, "rev-parse", "HEAD"],
                capture_output=True,
                text=True,
                timeout=5,
            )
        except (FileNotFoundError, subprocess.TimeoutExpired):
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def extract(self) -> list[Commit]:
        """Run git log and parse it.

        Raises:
            GitHistoryError: If git is missing or the log command fails
        """
        raw = self._run_git_log()
        commits = self.parse_log(raw)
        logger.debug(f"Parsed {len(commits)} commits from {self.repo_path}")
        return commits

    def _build_command(self) -> list[str]:
        cmd = [
            "git",
            "-C",
            self.repo_path,
            "log",
            "--format=%H|%at|%ae|%s",
        ]
        if self.since:
            cmd.append(f"--since={self.since}")
        if self.until:
            cmd.append(f"--until={self.until}")
        if self.max_commits:
            cmd.append(f"-n{self.max_commits}")
        return cmd

    def _run_git_log(self) -> str:
        try:
            proc = subprocess.Popen(
                self._build_command(),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError as e:
            raise GitHistoryError(self.repo_path, f"git executable not found: {e}")

        try:
            chunks = []
            total_size = 0
            stdout = proc.stdout
            if stdout is None:
                raise GitHistoryError(self.repo_path, "no output stream")
            while True:
                chunk = stdout.read(1024 * 1024)  # 1MB chunks
                if not chunk:
                    break
                total_size += len(chunk)
                if total_size > self._MAX_OUTPUT_BYTES:
                    logger.warning(
                        "git log output exceeded %dMB limit, truncating",
                        self._MAX_OUTPUT_BYTES // (1024 * 1024),
                    )
                    proc.kill()
                    break
                chunks.append(chunk)

            try:
                proc.wait(timeout=30)
            except subprocess.TimeoutExpired:
                proc.kill()
                raise GitHistoryError(self.repo_path, "git log timed out")

            if proc.returncode != 0 and proc.returncode != -9:  # -9 = killed
                stderr = proc.stderr.read() if proc.stderr else ""
                raise GitHistoryError(self.repo_path, stderr.strip() or "git log failed")
            return "".join(chunks)
        finally:
            if proc.stdout:
                proc.stdout.close()
            if proc.stderr:
                proc.stderr.close()

    @classmethod
    def parse_log(cls, raw: str) -> list[Commit]:
        """Parse ``%H|%at|%ae|%s`` lines into commits, skipping malformed ones."""
        commits = []
        for line in raw.split("\n"):
            line = line.strip()
            if not line:
                continue
            if not cls._HEADER_RE.match(line):
                logger.debug(f"Skipping unparsable git log line: {line[:60]}")
                continue

            parts = line.split("|", 3)
            commits.append(
                Commit(
                    hash=parts[0],
                    timestamp=int(parts[1]),
                    author=parts[2],
                    subject=parts[3] if len(parts) > 3 else "",
                )
            )
        return commits
