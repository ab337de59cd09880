"""
Host target triple detection.

Cargo places output under ``target/<profile>`` when no ``--target`` is given
and under ``target/<triple>/<profile>`` otherwise. Omitting ``--target`` for
the host's own triple lets desktop builds share cached work with plain
``cargo build`` / ``cargo test`` runs. The host triple is read from
``rustc --version --verbose``; failing to read it is never fatal.
"""

import logging
import subprocess
from typing import Optional

from cargojni.core.exceptions import HostTripleDetectionError

logger = logging.getLogger(__name__)

HOST_PREFIX = "host: "


class HostTripleDetector:
    """
    Ask rustc for its default target triple.

    Example:
        >>> HostTripleDetector("rustc").detect()
        'x86_64-unknown-linux-gnu'
    """

    def __init__(self, rustc_command: str = "rustc"):
        self.rustc_command = rustc_command

    def detect(self) -> Optional[str]:
        """
        Detect the host triple.

        Returns:
            The triple, or None if rustc could not be run or its output
            had no ``host:`` line. A warning is logged in that case and
            callers fall back to always passing ``--target``.
        """
        try:
            triple = self._query()
        except HostTripleDetectionError as e:
            logger.warning(str(e))
            return None

        logger.info(f"Default rust target triple: {triple}")
        return triple

    def _query(self) -> str:
        command = [self.rustc_command, "--version", "--verbose"]
        try:
            result = subprocess.run(
                command, capture_output=True, text=True, check=False
            )
        except OSError as e:
            raise HostTripleDetectionError(
                f"Failed to get default target triple from {self.rustc_command}: {e}"
            ) from e

        if result.returncode != 0:
            logger.debug(f"{self.rustc_command} stderr: {result.stderr.strip()}")
            raise HostTripleDetectionError(
                f"Failed to get default target triple from {self.rustc_command} "
                f"(exit code: {result.returncode})"
            )

        triple = parse_host_triple(result.stdout)
        if triple is None:
            raise HostTripleDetectionError(
                f"Failed to parse `{self.rustc_command} -Vv` output: no '{HOST_PREFIX.strip()}' line"
            )
        return triple


def parse_host_triple(output: str) -> Optional[str]:
    """
    Extract the ``host:`` value from ``rustc -Vv`` output.

    Example:
        >>> parse_host_triple("rustc 1.80.0\\nhost: aarch64-apple-darwin\\n")
        'aarch64-apple-darwin'
    """
    for line in output.splitlines():
        if line.startswith(HOST_PREFIX):
            triple = line[len(HOST_PREFIX) :].strip()
            return triple or None
    return None


__all__ = ["HostTripleDetector", "parse_host_triple"]
