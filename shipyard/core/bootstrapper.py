"""One-time repository setup: init, initial commit and origin remote."""
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from shipyard.core.errors import BootstrapAborted, ShipyardError
from shipyard.core.logger import get_logger
from shipyard.services.git_manager import GitManager

logger = get_logger(__name__)

DEFAULT_REPO_NAME = "shipyard-images"
HOSTING_HOST = "github.com"
REMOTE_NAME = "origin"
BRANCH_NAME = "main"

INITIAL_COMMIT_MESSAGE = """Initial commit: container images for data connectors

- sqlserver, databricks and snowflake sub-projects, one Dockerfile each
- shipyard deploy tooling to build, tag and push the images
- docker.io publishing under the DOCKER_USERNAME namespace"""

AFFIRMATIVE_ANSWERS = {"y", "yes"}

PromptFn = Callable[[str], str]
ConfirmFn = Callable[[str], bool]


def remote_url(username: str, repo_name: str, host: str = HOSTING_HOST) -> str:
    """Build the HTTPS clone URL for a repository on the hosting service."""
    return f"https://{host}/{username}/{repo_name}.git"


def _default_prompt(message: str) -> str:
    return input(f"{message}: ")


def _default_confirm(message: str) -> bool:
    return input(f"{message} [y/N]: ").strip().lower() in AFFIRMATIVE_ANSWERS


@dataclass
class BootstrapResult:
    """What the bootstrap run changed."""
    repo_name: str
    username: str
    remote_url: str
    initialized: bool = False
    remote_updated: bool = False
    committed: bool = False
    branch: str = BRANCH_NAME


class RepositoryBootstrapper:
    """Initializes a repository and points it at the hosting service.

    Prompting goes through the `prompt` and `confirm` callables so the
    interactive steps can be driven from tests or the CLI.
    """

    def __init__(
        self,
        git: Optional[GitManager] = None,
        prompt: Optional[PromptFn] = None,
        confirm: Optional[ConfirmFn] = None,
        host: str = HOSTING_HOST,
    ):
        self.git = git or GitManager()
        self.prompt = prompt or _default_prompt
        self.confirm = confirm or _default_confirm
        self.host = host

    @property
    def path(self) -> Path:
        return self.git.path

    def run(self, repo_name: str = DEFAULT_REPO_NAME, username: str = "") -> BootstrapResult:
        """Run the bootstrap sequence.

        Raises:
            ShipyardError: If git is missing, no username is given, or a git
                step fails
            BootstrapAborted: If the confirmation is declined
        """
        if not self.git.is_available():
            raise ShipyardError("git is not installed. Please install git first.")

        username = (username or "").strip()
        if not username:
            username = (self.prompt("Hosting username") or "").strip()
        if not username:
            raise ShipyardError("A username is required to configure the remote")

        url = remote_url(username, repo_name, self.host)
        if not self.confirm(f"Initialize {self.path} and set {REMOTE_NAME} to {url}?"):
            raise BootstrapAborted("Bootstrap cancelled, no changes made")

        result = BootstrapResult(repo_name=repo_name, username=username, remote_url=url)

        if self.git.repo_exists():
            logger.info(f"Git repository already exists in {self.path}")
        else:
            self._check(self.git.init(), "initialize git repository")
            result.initialized = True

        self._check(self.git.add_all(), "stage files")

        success, detail = self.git.commit(INITIAL_COMMIT_MESSAGE)
        if not success:
            raise ShipyardError(f"Failed to commit: {detail}")
        result.committed = detail != "nothing to commit"

        success, updated, stderr = self.git.set_remote(REMOTE_NAME, url)
        if not success:
            raise ShipyardError(f"Failed to configure remote {REMOTE_NAME}: {stderr}")
        result.remote_updated = updated

        self._check(self.git.rename_branch(BRANCH_NAME), f"set branch to {BRANCH_NAME}")
        return result

    @staticmethod
    def _check(outcome, action: str):
        success, stderr = outcome
        if not success:
            raise ShipyardError(f"Failed to {action}: {stderr}")
