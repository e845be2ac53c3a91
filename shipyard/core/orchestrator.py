"""Build and push orchestration across sub-project targets.

A run resolves the selected targets, checks that the container engine is
usable, then builds and/or pushes each target in order. Per-target failures
are recorded in the ledger and never stop the run; only a missing engine
aborts it.
"""
from pathlib import Path
from typing import List, Optional

from shipyard.core.config import DeployConfig
from shipyard.core.errors import ShipyardError
from shipyard.core.logger import get_logger
from shipyard.models.deploy import (
    SELECT_ALL,
    Action,
    ExitReport,
    ResultLedger,
    RunConfig,
    Target,
)
from shipyard.services.container_engine import ContainerEngine

logger = get_logger(__name__)


class DeployOrchestrator:
    """Sequences builds and pushes for the configured targets."""

    def __init__(
        self,
        config: DeployConfig,
        engine: Optional[ContainerEngine] = None,
        project_root: Optional[Path] = None,
    ):
        self.config = config
        self.engine = engine or ContainerEngine()
        self.project_root = Path(project_root) if project_root else Path.cwd()

    def resolve_targets(self, selector: str) -> List[Target]:
        """Turn a selector into the ordered list of targets to process.

        Raises:
            ShipyardError: If the name is unknown, or a single named target
                has no directory under the project root
        """
        if selector == SELECT_ALL:
            names = list(self.config.targets)
        elif selector in self.config.targets:
            names = [selector]
            target_dir = self.project_root / selector
            if not target_dir.is_dir():
                raise ShipyardError(f"Target directory not found: {target_dir}")
        else:
            known = ", ".join(self.config.targets)
            raise ShipyardError(f"Unknown target '{selector}' (expected one of: {known}, all)")

        return [Target(name=n, repository=self.config.image_repository(n)) for n in names]

    def run(self, run_config: RunConfig) -> ExitReport:
        """Execute one deploy run and return its report.

        Raises:
            ShipyardError: If target resolution fails (before any work)
        """
        targets = self.resolve_targets(run_config.selector)
        ledger = ResultLedger()
        report = ExitReport(ledger=ledger)

        if self.config.namespace_is_placeholder:
            logger.warning(
                f"DOCKER_USERNAME is not set, using placeholder namespace "
                f"'{self.config.namespace}'"
            )

        if not self.engine.is_available():
            report.aborted = True
            report.message = f"{self.engine.executable} is not installed or not running"
            logger.error(report.message)
            return report

        if run_config.runs_build:
            self._build_phase(targets, run_config, ledger)

        if run_config.runs_push:
            self._push_phase(targets, run_config, ledger)

        return report

    def _build_phase(self, targets: List[Target], run_config: RunConfig, ledger: ResultLedger):
        for target in targets:
            refs = [target.image_ref(tag) for tag in run_config.tags]
            try:
                success = self.engine.build(self.project_root / target.name, refs)
            except Exception as e:
                logger.error(f"Build of {target.name} raised: {e}")
                success = False

            ledger.record_build(target.name, success)
            if success:
                logger.info(f"✓ Built {target.name}")
            else:
                logger.error(f"✗ Build failed for {target.name}")

    def _push_phase(self, targets: List[Target], run_config: RunConfig, ledger: ResultLedger):
        explicit_push = run_config.action is Action.PUSH

        # TODO: confirm with image owners that explicit push is meant to skip
        # the build gate (re-pushing known-good images).
        if not explicit_push and not ledger.any_build_succeeded():
            logger.warning("No successful builds in this run, skipping push")
            return

        if not self.engine.probe_registry(self.config.probe_image):
            logger.warning(
                f"Could not reach {self.config.registry}; you may need to run "
                f"'{self.engine.executable} login' first"
            )

        for target in targets:
            if not explicit_push and not ledger.build_succeeded(target.name):
                logger.info(f"Skipping push for {target.name} (not built in this run)")
                continue

            success = True
            for tag in run_config.tags:
                try:
                    pushed = self.engine.push(target.image_ref(tag))
                except Exception as e:
                    logger.error(f"Push of {target.image_ref(tag)} raised: {e}")
                    pushed = False
                success = success and pushed

            ledger.record_push(target.name, success)
            if success:
                logger.info(f"✓ Pushed {target.name}")
            else:
                logger.error(f"✗ Push failed for {target.name}")
