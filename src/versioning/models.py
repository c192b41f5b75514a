"""Data models for precision resolution and version checks."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Tuple, Union

import semantic_version

from constants import Constants


class PrecisionTag(Enum):
    """Numeric precision variants FFTW3 is built in."""
    F = "f"
    D = "d"
    L = "l"
    Q = "q"

    @property
    def suffix(self) -> str:
        """Library-name suffix for this precision ('' for double)."""
        return Constants.PRECISION_SUFFIXES[self.value]

    @property
    def package(self) -> str:
        """pkg-config package identifier, e.g. ``fftw3f``."""
        return Constants.PACKAGE_BASE + self.suffix


ALL_PRECISIONS: Tuple[PrecisionTag, ...] = tuple(
    PrecisionTag(p) for p in Constants.DEFAULT_PRECISIONS
)


@dataclass(frozen=True)
class Found:
    """Resolution outcome when at least one precision is installed."""
    packages: Mapping[PrecisionTag, str]

    def __post_init__(self):
        if not self.packages:
            raise ValueError("Found requires at least one installed precision")

    def __bool__(self) -> bool:
        return True

    @property
    def tags(self) -> List[PrecisionTag]:
        return list(self.packages)

    def sorted_packages(self) -> List[str]:
        """Package identifiers in lexicographic order, the order used for every combined query."""
        return sorted(self.packages.values())

    def tag_for(self, package: str) -> PrecisionTag:
        for tag, pkg in self.packages.items():
            if pkg == package:
                return tag
        raise KeyError(package)

    def as_dict(self) -> Dict[str, str]:
        return {tag.value: pkg for tag, pkg in self.packages.items()}


@dataclass(frozen=True)
class NotFound:
    """Resolution outcome when none of the queried precisions is installed."""

    def __bool__(self) -> bool:
        return False


Resolution = Union[Found, NotFound]

# A (major, minor, patch) triple; compared lexicographically.
SemVer = semantic_version.Version


def semver(major: int, minor: int = 0, patch: int = 0) -> SemVer:
    """Build a SemVer triple."""
    return semantic_version.Version(major=int(major), minor=int(minor), patch=int(patch))


def format_requirement(version: SemVer) -> str:
    """Render a requirement the way error messages show it: ``vMAJOR.MINOR.PATCH``."""
    return f"v{version.major}.{version.minor}.{version.patch}"
