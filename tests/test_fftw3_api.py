"""Tests for the fftw3 module-level entry points."""

import pytest

import fftw3
from common.pkg_config import PkgConfig
from errors import LibraryAbsent, ToolMissing, VersionTooLow
from versioning.models import NotFound, PrecisionTag

DOUBLE = {"fftw3": {"libs": "-lfftw3", "cflags": "-I/usr/local/include", "version": "3.3.10"}}
DOUBLE_AND_QUAD = dict(DOUBLE, fftw3q={"libs": "-lfftw3q -lquadmath", "version": "3.3.10"})


class TestPublicOperations:
    """precisions/cflags/libs/require_version with an explicit tool."""

    def test_precisions(self, fake_system, tool):
        fake_system(DOUBLE_AND_QUAD)
        assert fftw3.precisions(tool=tool).as_dict() == {"d": "fftw3", "q": "fftw3q"}
        assert fftw3.precisions(["q"], tool=tool).as_dict() == {"q": "fftw3q"}

    def test_flags(self, fake_system, tool):
        fake_system(DOUBLE_AND_QUAD)
        assert fftw3.cflags(tool=tool) == "-I/usr/local/include"
        assert fftw3.libs(tool=tool) == "-lfftw3 -lfftw3q -lquadmath"

    def test_nothing_installed(self, fake_system, tool):
        fake_system({})
        assert isinstance(fftw3.precisions(tool=tool), NotFound)
        with pytest.raises(LibraryAbsent):
            fftw3.cflags(tool=tool)
        with pytest.raises(LibraryAbsent):
            fftw3.libs(tool=tool)
        with pytest.raises(LibraryAbsent, match="version check"):
            fftw3.require_version((3, 3, 0), tool=tool)

    def test_require_version(self, fake_system, tool):
        fake_system(DOUBLE)
        fftw3.require_version("3.003010", tool=tool)
        with pytest.raises(VersionTooLow):
            fftw3.require_version((3, 4, 0), tool=tool)

    def test_locates_tool_when_not_given(self, fake_system, monkeypatch):
        fake_system(DOUBLE)
        monkeypatch.setattr(PkgConfig, "locate", classmethod(lambda cls, candidate=None: cls("/usr/bin/pkg-config")))
        assert fftw3.libs() == "-lfftw3"

    def test_missing_tool_surfaces(self, monkeypatch):
        def missing(cls, candidate=None):
            raise ToolMissing("pkg-config not found")

        monkeypatch.setattr(PkgConfig, "locate", classmethod(missing))
        with pytest.raises(ToolMissing):
            fftw3.precisions()


class TestLoad:
    """load(): presence check plus optional version check."""

    def test_present(self, fake_system, tool):
        fake_system(DOUBLE)
        found = fftw3.load(tool=tool)
        assert found.tags == [PrecisionTag.D]

    def test_absent(self, fake_system, tool):
        fake_system({})
        with pytest.raises(LibraryAbsent, match="appears not to be present"):
            fftw3.load(tool=tool)

    def test_with_version(self, fake_system, tool):
        fake_system(DOUBLE)
        fftw3.load((3, 3, 10), tool=tool)
        with pytest.raises(VersionTooLow):
            fftw3.load((3, 3, 11), tool=tool)


class TestEnsureInstalled:
    """ensure_installed(): source-build fallback hook."""

    def test_no_build_when_present(self, fake_system, tool):
        fake_system(DOUBLE)
        calls = []
        found = fftw3.ensure_installed(lambda: calls.append(1), tool=tool)
        assert calls == []
        assert found.as_dict() == {"d": "fftw3"}

    def test_build_then_found(self, fake_system, tool):
        system = fake_system({})

        def build():
            system.installed.update(DOUBLE)

        found = fftw3.ensure_installed(build, tool=tool)
        assert found.as_dict() == {"d": "fftw3"}

    def test_build_without_requested_precision(self, fake_system, tool):
        system = fake_system({})
        with pytest.raises(LibraryAbsent, match="none of the requested precisions"):
            fftw3.ensure_installed(lambda: system.installed.update(DOUBLE), ["q"], tool=tool)

    def test_build_result_limited_to_requested(self, fake_system, tool):
        system = fake_system({})
        found = fftw3.ensure_installed(lambda: system.installed.update(DOUBLE_AND_QUAD), ["q"], tool=tool)
        assert found.as_dict() == {"q": "fftw3q"}

    def test_build_did_not_help(self, fake_system, tool):
        fake_system({})
        with pytest.raises(LibraryAbsent, match="still not found"):
            fftw3.ensure_installed(lambda: None, tool=tool)

    def test_build_must_provide_double(self, fake_system, tool):
        system = fake_system({})
        single = {"fftw3f": {"libs": "-lfftw3f"}}
        with pytest.raises(LibraryAbsent):
            fftw3.ensure_installed(lambda: system.installed.update(single), tool=tool)
