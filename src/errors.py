"""Exception hierarchy for FFTW3 discovery.

Every failure is raised straight to the caller; the CLI maps each class to an
exit code.
"""
from __future__ import annotations

from typing import Iterable, Tuple


class FftwProbeError(Exception):
    """Base class for all discovery errors."""


class ToolMissing(FftwProbeError):
    """pkg-config could not be located or is not executable."""


class InvalidPrecisionTag(FftwProbeError):
    """A precision outside of f, d, l, q was requested."""

    def __init__(self, tag: object, allowed: str = "d, f, l, q"):
        self.tag = tag
        super().__init__(f"precision: {tag!r} is not a valid fftw precision ({allowed} allowed)")


class LibraryAbsent(FftwProbeError):
    """No FFTW3 precision variant is installed."""


class VersionParseError(FftwProbeError):
    """A version string could not be read as major[.minor[.patch]]."""

    def __init__(self, literal: str, what: str = "version string"):
        self.literal = literal
        super().__init__(f"couldn't parse {what} '{literal}'")


class VersionTooLow(FftwProbeError):
    """The weakest installed variant is older than the requirement.

    ``installed`` holds ``(tag, package, version_string)`` rows in the order the
    packages were queried.
    """

    def __init__(self, installed: Iterable[Tuple[str, str, str]], required: str):
        self.installed = list(installed)
        self.required = required
        lines = "".join(
            f"   {package:>6.6s} ({tag}) library has v{version}\n"
            for tag, package, version in self.installed
        )
        super().__init__(
            f"installed FFTW version is too low (looking for {required}):\n{lines}"
        )
