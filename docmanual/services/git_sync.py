import logging
import subprocess
from typing import List, Sequence

from docmanual.core.config import settings

logger = logging.getLogger(__name__)


class GitSync:
    """Коммит и push данных руководства после изменений"""

    def __init__(
        self,
        repo_dir: str,
        remote: str = "origin",
        branch: str = "main",
        paths: Sequence[str] = ("data", "uploads"),
        push: bool = True,
        enabled: bool = True
    ):
        self.repo_dir = repo_dir
        self.remote = remote
        self.branch = branch
        self.paths = list(paths)
        self.push = push
        self.enabled = enabled

    @classmethod
    def from_settings(cls) -> "GitSync":
        return cls(
            repo_dir=settings.git_repo_dir,
            remote=settings.git_remote,
            branch=settings.git_branch,
            paths=settings.git_paths,
            push=settings.git_push,
            enabled=settings.git_autocommit
        )

    def _run(self, args: List[str]) -> subprocess.CompletedProcess:
        return subprocess.run(
            ["git", *args],
            cwd=self.repo_dir,
            check=True,
            capture_output=True,
            text=True,
        )

    def _has_staged_changes(self) -> bool:
        # diff --cached --quiet завершается с кодом 1, если есть изменения
        result = subprocess.run(
            ["git", "diff", "--cached", "--quiet"],
            cwd=self.repo_dir,
            capture_output=True,
            text=True,
        )
        return result.returncode == 1

    def commit(self, message: str) -> bool:
        """Коммит (и push) изменений; ошибки только логируются"""
        if not self.enabled:
            return False

        try:
            self._run(["add", "--all", "--", *self.paths])
            if not self._has_staged_changes():
                logger.info("Git sync: nothing to commit")
                return False

            self._run(["commit", "-m", message])
            if self.push:
                self._run(["push", self.remote, self.branch])
        except FileNotFoundError:
            logger.error("Git sync failed: 'git' executable not found")
            return False
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            logger.error("Git sync failed: %s %s", " ".join(e.cmd), stderr)
            return False

        logger.info("Git sync: committed %r", message)
        return True
