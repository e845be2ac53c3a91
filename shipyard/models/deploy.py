"""Deploy run models: run configuration, per-target results and the ledger."""
from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple

from shipyard.core.errors import ShipyardError

SELECT_ALL = "all"
LATEST_TAG = "latest"


class Action(str, Enum):
    """What a deploy run does with the selected targets."""
    BUILD = "build"
    PUSH = "push"
    ALL = "all"


class Outcome(str, Enum):
    """Result of one phase for one target."""
    NOT_ATTEMPTED = "not attempted"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def attempted(self) -> bool:
        return self is not Outcome.NOT_ATTEMPTED


@dataclass(frozen=True)
class Target:
    """A buildable sub-project and where its image is published."""
    name: str
    repository: str  # registry/namespace/name, no tag

    def image_ref(self, tag: str) -> str:
        return f"{self.repository}:{tag}"


@dataclass(frozen=True)
class RunConfig:
    """Parsed options for one deploy run."""
    action: Action = Action.BUILD
    selector: str = SELECT_ALL
    version: str = LATEST_TAG
    push: bool = False

    def __post_init__(self):
        if not self.version or not self.version.strip():
            raise ShipyardError("Version label must not be empty")
        if self.version != self.version.strip():
            raise ShipyardError(f"Version label must not contain surrounding whitespace: {self.version!r}")

    @property
    def runs_build(self) -> bool:
        return self.action in (Action.BUILD, Action.ALL)

    @property
    def runs_push(self) -> bool:
        return self.action in (Action.PUSH, Action.ALL) or self.push

    @property
    def tags(self) -> Tuple[str, ...]:
        """Tags applied to every image: the version label, then latest."""
        if self.version == LATEST_TAG:
            return (LATEST_TAG,)
        return (self.version, LATEST_TAG)


@dataclass
class TargetResult:
    """Build and push outcome for one target."""
    build: Outcome = Outcome.NOT_ATTEMPTED
    push: Outcome = Outcome.NOT_ATTEMPTED

    @property
    def attempted(self) -> bool:
        return self.build.attempted or self.push.attempted

    @property
    def failed(self) -> bool:
        return Outcome.FAILED in (self.build, self.push)


class ResultLedger:
    """Ordered record of per-target outcomes for a single run."""

    def __init__(self):
        self._results: "OrderedDict[str, TargetResult]" = OrderedDict()

    def _entry(self, target: str) -> TargetResult:
        if target not in self._results:
            self._results[target] = TargetResult()
        return self._results[target]

    def record_build(self, target: str, success: bool):
        self._entry(target).build = Outcome.SUCCEEDED if success else Outcome.FAILED

    def record_push(self, target: str, success: bool):
        self._entry(target).push = Outcome.SUCCEEDED if success else Outcome.FAILED

    def get(self, target: str) -> TargetResult:
        return self._results.get(target, TargetResult())

    def build_succeeded(self, target: str) -> bool:
        return self.get(target).build is Outcome.SUCCEEDED

    def any_build_succeeded(self) -> bool:
        return any(r.build is Outcome.SUCCEEDED for r in self._results.values())

    def attempted(self) -> Dict[str, TargetResult]:
        """Targets that had at least one phase attempted, in run order."""
        return OrderedDict(
            (name, result) for name, result in self._results.items() if result.attempted
        )

    @property
    def has_failures(self) -> bool:
        return any(r.failed for r in self._results.values())

    def __len__(self) -> int:
        return len(self.attempted())


@dataclass
class ExitReport:
    """Outcome of a whole deploy run."""
    ledger: ResultLedger = field(default_factory=ResultLedger)
    aborted: bool = False
    message: str = ""

    @property
    def exit_code(self) -> int:
        if self.aborted or self.ledger.has_failures:
            return 1
        return 0
