"""Git repository management for the bootstrap command."""
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple

from shipyard.core.logger import get_logger

logger = get_logger(__name__)


class GitManager:
    """Manages git operations on a local working directory."""

    def __init__(self, path: Optional[Path] = None, mock: bool = False):
        self.path = Path(path) if path else Path.cwd()
        self.mock = mock

    def _run(self, args: List[str]) -> Tuple[bool, str, str]:
        """Run a git command and return success, stdout, stderr."""
        if self.mock:
            logger.info(f"MOCK: Would run git {' '.join(args)} in {self.path}")
            return True, "", ""

        try:
            result = subprocess.run(
                ['git'] + args,
                cwd=self.path,
                capture_output=True,
                text=True,
                check=True
            )
            return True, (result.stdout or "").strip(), (result.stderr or "").strip()
        except subprocess.CalledProcessError as e:
            return False, e.stdout.strip() if e.stdout else "", e.stderr.strip() if e.stderr else str(e)
        except FileNotFoundError:
            return False, "", "Git not found. Please install git first."

    def is_available(self) -> bool:
        """Check that git is installed."""
        success, _, _ = self._run(['--version'])
        return success

    def repo_exists(self) -> bool:
        """Check if a git repository already exists at the working directory."""
        return (self.path / ".git").exists()

    def init(self) -> Tuple[bool, str]:
        """Initialize a repository."""
        logger.info(f"Initializing git repository in {self.path}")
        success, _, stderr = self._run(['init'])
        return success, stderr

    def add_all(self) -> Tuple[bool, str]:
        """Stage every file in the working tree."""
        success, _, stderr = self._run(['add', '-A'])
        return success, stderr

    def commit(self, message: str) -> Tuple[bool, str]:
        """Create a commit.

        Returns:
            (success, detail); "nothing to commit" is reported as success
            with that detail.
        """
        success, stdout, stderr = self._run(['commit', '-m', message])
        if success:
            return True, ""

        detail = stderr or stdout
        if "nothing to commit" in stdout or "nothing to commit" in stderr:
            logger.info("No changes to commit")
            return True, "nothing to commit"
        return False, detail

    def remote_exists(self, name: str) -> bool:
        """Check whether a remote with this name is configured."""
        if self.mock:
            return False
        success, stdout, _ = self._run(['remote'])
        if not success:
            return False
        return name in stdout.split()

    def set_remote(self, name: str, url: str) -> Tuple[bool, bool, str]:
        """Point remote `name` at `url`, adding it or updating it in place.

        Returns:
            (success, updated, stderr) where updated means set-url was used
        """
        if self.remote_exists(name):
            logger.info(f"Updating remote {name} -> {url}")
            success, _, stderr = self._run(['remote', 'set-url', name, url])
            return success, True, stderr

        logger.info(f"Adding remote {name} -> {url}")
        success, _, stderr = self._run(['remote', 'add', name, url])
        return success, False, stderr

    def rename_branch(self, branch: str) -> Tuple[bool, str]:
        """Rename (or set) the current branch."""
        success, _, stderr = self._run(['branch', '-M', branch])
        return success, stderr
