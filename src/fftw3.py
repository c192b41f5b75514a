"""Library-level entry points for FFTW3 discovery.

Typical use from a build script::

    import fftw3

    fftw3.load((3, 3, 0))            # presence + minimum version
    cflags = fftw3.cflags()          # every installed precision
    ldflags = fftw3.libs(["f"])      # single precision only
    if fftw3.precisions(["q"]):
        ...

Each function takes an optional ``tool``; when omitted, pkg-config is located
for that call. Pass a ``PkgConfig`` explicitly to locate it only once.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from common.pkg_config import PkgConfig
from errors import LibraryAbsent
from resolver import PrecisionResolver, TagsArg
from versioning.models import Found, PrecisionTag, Resolution
from versioning.parser import RequirementLike

logger = logging.getLogger(__name__)


def _resolver(tool: Optional[PkgConfig]) -> PrecisionResolver:
    return PrecisionResolver(tool if tool is not None else PkgConfig.locate())


def precisions(tags: TagsArg = None, tool: Optional[PkgConfig] = None) -> Resolution:
    """Installed subset of ``tags`` (all precisions by default)."""
    return _resolver(tool).resolve(tags)


def cflags(tags: TagsArg = None, tool: Optional[PkgConfig] = None) -> str:
    """Compiler flags for the installed subset of ``tags``."""
    return _resolver(tool).cflags(tags)


def libs(tags: TagsArg = None, tool: Optional[PkgConfig] = None) -> str:
    """Linker flags for the installed subset of ``tags``."""
    return _resolver(tool).libs(tags)


def require_version(requirement: RequirementLike, tool: Optional[PkgConfig] = None) -> None:
    """Raise unless every installed precision is at least ``requirement``.

    Numeric literals such as ``3.3`` or ``3.003004`` are accepted but are
    ambiguous past minor version 9; pass a ``(major, minor, patch)`` tuple.
    """
    _resolver(tool).require_version(requirement)


def load(requirement: Optional[RequirementLike] = None, tool: Optional[PkgConfig] = None) -> Found:
    """Fail unless FFTW3 is present, and optionally check its version.

    Returns the resolution over all precisions.
    """
    resolver = _resolver(tool)
    found = resolver.resolve()
    if not found:
        raise LibraryAbsent(
            "the FFTW3 library appears not to be present on your system "
            "(also check the pkg-config tool)"
        )
    if requirement is not None:
        resolver.require_version(requirement)
    return found


def ensure_installed(
    build: Callable[[], None],
    tags: TagsArg = None,
    tool: Optional[PkgConfig] = None,
) -> Found:
    """Resolve ``tags``, running ``build`` once if nothing is installed.

    ``build`` is an opaque source-build step. After it returns, at least the
    double precision library must be visible to pkg-config.

    The result only ever holds tags from ``tags``.

    Raises:
        LibraryAbsent: the build did not make double precision discoverable,
            or none of ``tags`` is installed after it.
    """
    resolver = _resolver(tool)
    found = resolver.resolve(tags)
    if found:
        return found

    logger.info("FFTW3 not found; running source build fallback")
    build()

    after = resolver.resolve([PrecisionTag.D])
    if not after:
        raise LibraryAbsent("source build finished but fftw3 (double precision) is still not found")
    found = resolver.resolve(tags)
    if not found:
        raise LibraryAbsent(
            "source build finished and provides fftw3, but none of the requested precisions"
        )
    return found
