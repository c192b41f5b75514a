"""pkg-config invocation helpers.

Wraps every call to the discovery tool so callers share the same
error handling and DEBUG traces. Nothing here caches: each query spawns a
fresh process so results always reflect the current system state.
"""
from __future__ import annotations

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from typing import List, Optional, Sequence

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, Timer
from errors import ToolMissing

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryResult:
    """Outcome of a single pkg-config call."""
    returncode: int
    stdout: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def text(self) -> str:
        return self.stdout.strip()


@dataclass(frozen=True)
class PkgConfig:
    """Resolved location of the pkg-config binary.

    Build it with ``PkgConfig.locate()`` once and hand it to whatever needs to
    query the system; it carries no other state.
    """
    path: str

    @classmethod
    def locate(cls, candidate: Optional[str] = None) -> "PkgConfig":
        """Find pkg-config and verify it is executable.

        Lookup order: ``candidate``, ``$FFTWPROBE_PKG_CONFIG``, ``$PKG_CONFIG``,
        then ``pkg-config`` on ``PATH``.

        Raises:
            ToolMissing: nothing executable was found.
        """
        name = (
            candidate
            or os.environ.get(Constants.ENV_PKG_CONFIG)
            or os.environ.get(Constants.ENV_PKG_CONFIG_FALLBACK)
            or Constants.PKG_CONFIG_BINARY
        )
        path = shutil.which(name)
        if not path or not os.path.isfile(path) or not os.access(path, os.X_OK):
            raise ToolMissing(
                f"pkg-config not found ({name!r}), required to locate FFTW3"
            )
        if is_debug_enabled(logger):
            logger.debug(
                "Located pkg-config",
                extra=extra_context(
                    event="tool_located", component="pkg_config", action="locate", target=path
                ),
            )
        return cls(path=path)

    def run(self, args: Sequence[str]) -> QueryResult:
        """Run pkg-config with ``args``.

        A process that cannot be spawned is reported as a failed query
        (returncode -1), the same as a nonzero exit.
        """
        cmd: List[str] = [self.path, *args]
        with Timer() as t:
            try:
                proc = subprocess.run(
                    cmd,
                    capture_output=True,
                    text=True,
                    check=False,
                )
                result = QueryResult(returncode=proc.returncode, stdout=proc.stdout or "")
            except OSError as exc:
                logger.debug("Failed to execute pkg-config: %s", exc)
                result = QueryResult(returncode=-1, stdout="")
        if is_debug_enabled(logger):
            logger.debug(
                "pkg-config query",
                extra=extra_context(
                    event="subprocess",
                    component="pkg_config",
                    action=" ".join(args),
                    outcome="success" if result.ok else "failure",
                    returncode=result.returncode,
                    duration_ms=t.duration_ms(),
                ),
            )
        return result

    def exists(self, package: str) -> bool:
        """Probe one package through its linker flags.

        Non-empty output is the only positive signal; errors and empty output
        both mean absent.
        """
        result = self.run(["--silence-errors", "--libs", package])
        return result.ok and bool(result.text)

    def cflags(self, packages: Sequence[str]) -> QueryResult:
        return self.run(["--cflags", *packages])

    def libs(self, packages: Sequence[str]) -> QueryResult:
        return self.run(["--libs", *packages])

    def modversion(self, packages: Sequence[str]) -> QueryResult:
        return self.run(["--modversion", *packages])
