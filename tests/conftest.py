"""Shared fixtures: a scripted stand-in for the pkg-config binary."""

import logging
import subprocess

import pytest

from common.pkg_config import PkgConfig

PKG_CONFIG_PATH = "/usr/bin/pkg-config"


class FakePkgConfigSystem:
    """Answers pkg-config command lines from a table of installed packages.

    ``installed`` maps package name to a dict with optional ``libs``,
    ``cflags`` and ``version`` keys.
    """

    def __init__(self, installed=None):
        self.installed = dict(installed or {})
        self.calls = []
        self.shell_commands = []
        # Packages a shell (build) command "installs" when run.
        self.installed_by_build = {}

    def _reply(self, cmd, rc, out=""):
        return subprocess.CompletedProcess(cmd, rc, stdout=out, stderr="")

    def __call__(self, cmd, **kwargs):
        if kwargs.get("shell"):
            self.shell_commands.append(cmd)
            self.installed.update(self.installed_by_build)
            return self._reply(cmd, 0)
        self.calls.append(list(cmd[1:]))
        args = list(cmd[1:])
        if args[:2] == ["--silence-errors", "--libs"]:
            pkg = args[2]
            info = self.installed.get(pkg)
            if info is None:
                return self._reply(cmd, 1)
            return self._reply(cmd, 0, info.get("libs", f"-l{pkg}") + "\n")

        flag, pkgs = args[0], args[1:]
        if any(p not in self.installed for p in pkgs):
            return self._reply(cmd, 1)
        if flag == "--modversion":
            return self._reply(cmd, 0, "".join(self.installed[p].get("version", "3.3.10") + "\n" for p in pkgs))
        key = flag.lstrip("-")
        parts = []
        for p in pkgs:
            value = self.installed[p].get(key, "" if key == "cflags" else f"-l{p}")
            if value:
                parts.append(value)
        return self._reply(cmd, 0, " ".join(parts) + "\n")

    def queries(self, flag):
        """Calls whose first argument is ``flag`` (existence lookups excluded)."""
        return [c for c in self.calls if c and c[0] == flag]


@pytest.fixture
def tool():
    return PkgConfig(path=PKG_CONFIG_PATH)


@pytest.fixture
def fake_system(monkeypatch):
    """Install a FakePkgConfigSystem behind subprocess.run and return a setter."""
    system = FakePkgConfigSystem()
    monkeypatch.setattr("common.pkg_config.subprocess.run", system)

    def install(installed):
        system.installed = dict(installed)
        return system

    return install


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler and level changes made by configure_logging()."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if getattr(handler, "_fftwprobe", False):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
