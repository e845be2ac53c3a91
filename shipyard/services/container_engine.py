"""Container engine wrapper for building and pushing images."""
import subprocess
from pathlib import Path
from typing import Sequence

from shipyard.core.logger import get_logger

logger = get_logger(__name__)


class ContainerEngine:
    """Runs docker build/push/pull and reports success as a bool."""

    def __init__(self, executable: str = "docker", mock: bool = False):
        self.executable = executable
        self.mock = mock

    def _run(self, args: Sequence[str], stream: bool = False) -> bool:
        """Run one engine command; any failure to launch counts as failure."""
        cmd = [self.executable] + list(args)
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            if stream:
                # Let build and push progress go straight to the terminal
                result = subprocess.run(cmd, check=False)
            else:
                result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            logger.error(f"Failed to run {self.executable}: {e}")
            return False

        if result.returncode != 0:
            stderr = getattr(result, "stderr", None)
            if stderr:
                logger.debug(f"Error output: {stderr.strip()}")
            return False
        return True

    def is_available(self) -> bool:
        """Check that the engine executable is installed and answers."""
        if self.mock:
            logger.info(f"MOCK: Would check {self.executable} --version")
            return True
        return self._run(["--version"])

    def build(self, context_dir: Path, image_refs: Sequence[str]) -> bool:
        """Build the image in `context_dir`, tagging it with every ref."""
        if self.mock:
            logger.info(f"MOCK: Would build {context_dir} as {', '.join(image_refs)}")
            return True

        args = ["build"]
        for ref in image_refs:
            args.extend(["-t", ref])
        args.append(str(context_dir))

        logger.info(f"Building {image_refs[0]} from {context_dir}")
        return self._run(args, stream=True)

    def push(self, image_ref: str) -> bool:
        """Push one image reference to its registry."""
        if self.mock:
            logger.info(f"MOCK: Would push {image_ref}")
            return True

        logger.info(f"Pushing {image_ref}")
        return self._run(["push", image_ref], stream=True)

    def probe_registry(self, probe_image: str) -> bool:
        """Pull a small image to see whether the registry is reachable."""
        if self.mock:
            logger.info(f"MOCK: Would pull {probe_image}")
            return True
        return self._run(["pull", probe_image])
