"""Parsing for precision tags and FFTW version strings."""

import re
from collections.abc import Sequence
from typing import Iterable, List, Optional, Union

import semantic_version

from constants import Constants
from errors import InvalidPrecisionTag, VersionParseError
from .models import ALL_PRECISIONS, PrecisionTag, SemVer, semver

_ALLOWED = ", ".join(sorted(Constants.PRECISION_SUFFIXES))

# pkg-config --modversion output, e.g. "3.3.10", "3.3", "3"
_INSTALLED_RE = re.compile(r'^\s*(\d+)(?:\.(\d+)(?:\.(\d+))?)?')

# Requested versions arrive as host numeric literals, so the fractional part is ambiguous.
_PACKED_RE = re.compile(r'^\s*(\d+)(?:\.(\d{3})(\d*))?\s*$')
_SINGLE_DIGIT_MINOR_RE = re.compile(r'^\s*(\d+)\.(\d)\s*$')
_DOTTED_RE = re.compile(r'[vV]?(\d+)(?:\.(\d+)(?:\.(\d+))?)?')

RequirementLike = Union[str, int, float, SemVer, Sequence]


def coerce_tag(tag: Union[str, PrecisionTag]) -> PrecisionTag:
    """Return ``tag`` as a PrecisionTag, raising InvalidPrecisionTag otherwise."""
    if isinstance(tag, PrecisionTag):
        return tag
    try:
        return PrecisionTag(tag)
    except ValueError:
        raise InvalidPrecisionTag(tag, _ALLOWED) from None


def normalize_tags(tags: Optional[Iterable[Union[str, PrecisionTag]]]) -> List[PrecisionTag]:
    """Validate a tag sequence; empty or None means every precision.

    All tags are checked before anything is returned, so a malformed input
    never yields a partial list.
    """
    if not tags:
        return list(ALL_PRECISIONS)
    if isinstance(tags, (str, PrecisionTag)):
        # A bare string is a single tag, never a packed list.
        tags = [tags]
    out = [coerce_tag(t) for t in tags]
    return out or list(ALL_PRECISIONS)


def parse_precision_tags(packed: Optional[str]) -> List[PrecisionTag]:
    """Convert a packed string such as ``"fdq"`` into tags.

    Meant for command-line and config boundaries; the resolver itself only
    takes sequences.
    """
    if not packed:
        return list(ALL_PRECISIONS)
    return [coerce_tag(ch) for ch in packed.strip()]


def parse_installed_version(line: str) -> SemVer:
    """Parse a ``pkg-config --modversion`` line into a triple.

    Missing minor or patch components default to 0.
    """
    m = _INSTALLED_RE.match(line or "")
    if not m:
        raise VersionParseError(line, "fftw3 version string")
    major, minor, patch = m.groups()
    return semver(major, minor or 0, patch or 0)


def parse_requested_version(requested: RequirementLike) -> SemVer:
    """Parse a caller-supplied minimum version.

    Triples (any sequence of up to three ints) and
    ``semantic_version.Version`` objects are taken as-is and are
    the preferred input. Strings and numbers go through the numeric-literal
    rules, in order:

    * ``3`` / ``3.002`` / ``3.003004``: three or more fractional digits are a
      packed minor (first three) plus patch (the rest);
    * ``3.3``: a single fractional digit is the minor version;
    * anything else matching ``[v]MAJOR[.MINOR[.PATCH]]`` is read as dotted.

    The second rule means ``3.10`` cannot be written as a number (it reads as
    ``3.1`` once numified); use a triple or ``"v3.10.0"``.
    """
    if isinstance(requested, semantic_version.Version):
        return semver(requested.major, requested.minor, requested.patch)
    if isinstance(requested, Sequence) and not isinstance(requested, (str, bytes)):
        if not 1 <= len(requested) <= 3 or any(
                isinstance(p, bool) or not isinstance(p, int) or p < 0 for p in requested):
            raise VersionParseError(str(requested), "requested version")
        return semver(*requested)
    if isinstance(requested, bool) or not isinstance(requested, (str, int, float)):
        raise VersionParseError(str(requested), "requested version")

    literal = str(requested)

    m = _PACKED_RE.match(literal)
    if m:
        major, minor, patch = m.groups()
        return semver(major, minor or 0, patch or 0)

    m = _SINGLE_DIGIT_MINOR_RE.match(literal)
    if m:
        return semver(m.group(1), m.group(2), 0)

    m = _DOTTED_RE.search(literal)
    if m:
        major, minor, patch = m.groups()
        return semver(major, minor or 0, patch or 0)

    raise VersionParseError(literal, "requested version string")
