import os
import subprocess

import pytest

from pacdef.backend.debian import Debian, build_base_command_with_privileges, we_are_root
from pacdef.grouping.package import Package


class _Recorder:
    def __init__(self, returncode=0):
        self.returncode = returncode
        self.calls = []

    def __call__(self, args, **kwargs):
        self.calls.append(list(args))
        return subprocess.CompletedProcess(args, self.returncode, stdout=b"", stderr=b"")


@pytest.fixture
def recorder(monkeypatch):
    rec = _Recorder()
    monkeypatch.setattr(subprocess, "run", rec)
    return rec


@pytest.fixture
def status_file(tmp_path):
    path = tmp_path / "status"
    path.write_text(
        "Package: vim\n"
        "Status: install ok installed\n"
        "Description: editor\n"
        " with a long description\n"
        "\n"
        "Package: libc6\n"
        "Status: install ok installed\n"
        "\n"
        "Package: oldpkg\n"
        "Status: deinstall ok config-files\n"
    )
    return path


@pytest.fixture
def extended_states(tmp_path):
    path = tmp_path / "extended_states"
    path.write_text("Package: libc6\nArchitecture: amd64\nAuto-Installed: 1\n")
    return path


def test_all_installed(status_file, extended_states):
    debian = Debian(status_file, extended_states)
    assert debian.get_all_installed_packages() == {Package("vim"), Package("libc6")}


def test_explicitly_installed(status_file, extended_states):
    debian = Debian(status_file, extended_states)
    assert debian.get_explicitly_installed_packages() == {Package("vim")}


def test_explicit_without_extended_states(status_file, tmp_path):
    debian = Debian(status_file, tmp_path / "absent")
    assert debian.get_explicitly_installed_packages() == debian.get_all_installed_packages()


def test_we_are_root(monkeypatch):
    monkeypatch.setattr(os, "geteuid", lambda: 0)
    assert we_are_root() is True
    monkeypatch.setattr(os, "geteuid", lambda: 1000)
    assert we_are_root() is False


def test_privileged_command(monkeypatch):
    monkeypatch.setattr(os, "geteuid", lambda: 0)
    assert build_base_command_with_privileges("apt") == ["apt"]
    monkeypatch.setattr(os, "geteuid", lambda: 1000)
    assert build_base_command_with_privileges("apt") == ["sudo", "apt"]


def test_make_dependency_uses_apt_mark(monkeypatch, recorder):
    monkeypatch.setattr(os, "geteuid", lambda: 1000)
    recorder.returncode = 4
    assert Debian().make_dependency([Package("vim")]) == 4
    assert recorder.calls == [["sudo", "apt-mark", "auto", "vim"]]


def test_install_as_root(monkeypatch, recorder):
    monkeypatch.setattr(os, "geteuid", lambda: 0)
    assert Debian().install_packages([Package("vim")], True) == 0
    assert recorder.calls == [["apt", "install", "--yes", "vim"]]


def test_remove_as_user(monkeypatch, recorder):
    monkeypatch.setattr(os, "geteuid", lambda: 1000)
    assert Debian().remove_packages([Package("vim")], False) == 0
    assert recorder.calls == [["sudo", "apt", "remove", "vim"]]


def test_section_and_capabilities():
    debian = Debian()
    assert debian.section == "debian"
    assert debian.binary == "apt"
    assert debian.supports_as_dependency is True