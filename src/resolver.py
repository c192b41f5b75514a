"""Precision resolution, flag aggregation and version reconciliation for FFTW3.

FFTW3 ships one library per numeric precision (``fftw3f``, ``fftw3``,
``fftw3l``, ``fftw3q``). ``PrecisionResolver`` asks pkg-config which of those
are installed and answers cflags/libs/version questions over the installed
subset. Every call queries pkg-config again; nothing is cached.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Union

from common.logging_utils import extra_context, is_debug_enabled
from common.pkg_config import PkgConfig, QueryResult
from errors import LibraryAbsent, VersionParseError, VersionTooLow
from versioning.models import (
    Found,
    NotFound,
    PrecisionTag,
    Resolution,
    SemVer,
    format_requirement,
)
from versioning.parser import (
    RequirementLike,
    normalize_tags,
    parse_installed_version,
    parse_requested_version,
)

logger = logging.getLogger(__name__)

TagsArg = Optional[Iterable[Union[str, PrecisionTag]]]


class PrecisionResolver:
    """Answers FFTW3 discovery questions through a located pkg-config."""

    def __init__(self, tool: PkgConfig):
        """Initialize the resolver.

        Args:
            tool: pkg-config location, typically from ``PkgConfig.locate()``.
        """
        self.tool = tool

    def resolve(self, tags: TagsArg = None) -> Resolution:
        """Determine which of ``tags`` are installed.

        Args:
            tags: Precisions to probe; None or empty means all four.

        Returns:
            Found with a tag -> package mapping of the installed subset, or
            NotFound when none of them is installed.

        Raises:
            InvalidPrecisionTag: a tag is outside f, d, l, q. Raised before
                any probe runs.
        """
        wanted = normalize_tags(tags)
        packages = {}
        for tag in wanted:
            if tag in packages:
                continue
            if self.tool.exists(tag.package):
                packages[tag] = tag.package

        if is_debug_enabled(logger):
            logger.debug(
                "Resolved precisions",
                extra=extra_context(
                    event="decision",
                    component="resolver",
                    action="resolve",
                    outcome="found" if packages else "not_found",
                    requested="".join(t.value for t in wanted),
                    installed="".join(t.value for t in packages),
                ),
            )
        if packages:
            return Found(packages)
        return NotFound()

    def _require(self, tags: TagsArg, message: str = "No fftw package found!") -> Found:
        resolution = self.resolve(tags)
        if not resolution:
            raise LibraryAbsent(message)
        return resolution

    def _flags(self, query: Callable[[List[str]], QueryResult], kind: str, tags: TagsArg) -> str:
        found = self._require(tags)
        packages = found.sorted_packages()
        result = query(packages)
        if not result.ok:
            raise LibraryAbsent(
                f"pkg-config --{kind} failed for {' '.join(packages)} (exit {result.returncode})"
            )
        return result.text

    def cflags(self, tags: TagsArg = None) -> str:
        """Compiler flags for the installed subset of ``tags``.

        Raises:
            LibraryAbsent: none of ``tags`` is installed.
        """
        return self._flags(self.tool.cflags, "cflags", tags)

    def libs(self, tags: TagsArg = None) -> str:
        """Linker flags for the installed subset of ``tags``.

        Raises:
            LibraryAbsent: none of ``tags`` is installed.
        """
        return self._flags(self.tool.libs, "libs", tags)

    def installed_versions(self, found: Found) -> List[tuple]:
        """Return ``(tag, package, version_string, SemVer)`` rows in sorted package order."""
        packages = found.sorted_packages()
        result = self.tool.modversion(packages)
        lines = [line.strip() for line in result.stdout.splitlines() if line.strip()]
        if not result.ok or not lines:
            raise LibraryAbsent("no library found for version check")
        if len(lines) != len(packages):
            raise VersionParseError(
                result.text,
                f"pkg-config --modversion output ({len(lines)} lines for {len(packages)} packages)",
            )
        return [
            (found.tag_for(pkg), pkg, line, parse_installed_version(line))
            for pkg, line in zip(packages, lines)
        ]

    def effective_version(self) -> SemVer:
        """Lowest version across every installed precision."""
        found = self._require(None, "no library found for version check")
        return min(row[3] for row in self.installed_versions(found))

    def require_version(self, requirement: RequirementLike) -> None:
        """Check that every installed precision is at least ``requirement``.

        Prefer an explicit ``(major, minor, patch)`` triple; numeric literals
        are ambiguous (see ``parse_requested_version``).

        Raises:
            VersionParseError: the requirement or an installed version is unreadable.
            LibraryAbsent: no precision is installed.
            VersionTooLow: the oldest installed precision is below the requirement.
        """
        required = parse_requested_version(requirement)
        found = self._require(None, "no library found for version check")
        rows = self.installed_versions(found)
        effective = min(row[3] for row in rows)

        if is_debug_enabled(logger):
            logger.debug(
                "Version check",
                extra=extra_context(
                    event="decision",
                    component="resolver",
                    action="require_version",
                    outcome="ok" if effective >= required else "too_low",
                    effective=str(effective),
                    required=str(required),
                ),
            )
        if effective < required:
            raise VersionTooLow(
                [(tag.value, pkg, text) for tag, pkg, text, _ in rows],
                format_requirement(required),
            )
