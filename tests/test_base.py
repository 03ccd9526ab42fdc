import subprocess
from pathlib import Path

import pytest

from pacdef.backend.base import Backend, group_assignments
from pacdef.grouping.group import Group
from pacdef.grouping.package import Package
from pacdef.grouping.section import Section


class FakeBackend(Backend):
    section = "fake"
    default_binary = "fakepm"
    switches_info = ("--info",)
    switches_install = ("--add",)
    switches_noconfirm = ("--yes",)
    switches_remove = ("--drop", "--recursive")
    switches_make_dependency = ("--as-dep",)
    supports_as_dependency = True

    def __init__(self, installed=(), explicit=(), failure=None):
        super().__init__()
        self.installed = set(installed)
        self.explicit = set(explicit)
        self.failure = failure

    def get_all_installed_packages(self):
        if self.failure is not None:
            raise self.failure
        return set(self.installed)

    def get_explicitly_installed_packages(self):
        if self.failure is not None:
            raise self.failure
        return set(self.explicit)


@pytest.fixture
def calls(monkeypatch):
    recorded = []
    returncodes = []

    def fake_run(command, **kwargs):
        recorded.append(list(command))
        code = returncodes.pop(0) if returncodes else 0
        return subprocess.CompletedProcess(command, code)

    monkeypatch.setattr(subprocess, "run", fake_run)
    return recorded, returncodes


def _pkgs(*names):
    return {Package.from_string(name) for name in names}


def test_load_collects_own_section_only():
    groups = [
        Group("one", {Section("fake", _pkgs("a", "b")), Section("other", _pkgs("x"))}, Path("/g1")),
        Group("two", {Section("fake", _pkgs("c"))}, Path("/g2")),
    ]
    backend = FakeBackend()
    backend.load(groups)
    assert backend.packages == _pkgs("a", "b", "c")


def test_missing_packages_sorted():
    backend = FakeBackend(installed=_pkgs("b"))
    backend.packages = _pkgs("c", "a", "b")
    assert backend.get_missing_packages_sorted() == [Package("a"), Package("c")]


def test_missing_packages_ignore_repo_when_one_side_has_none():
    backend = FakeBackend(installed=_pkgs("a"))
    backend.packages = _pkgs("core/a")
    assert backend.get_missing_packages_sorted() == []


def test_unmanaged_packages_sorted():
    backend = FakeBackend(explicit=_pkgs("z", "m", "a"))
    backend.packages = _pkgs("m")
    assert backend.get_unmanaged_packages_sorted() == [Package("a"), Package("z")]


def test_missing_packages_error_is_wrapped():
    backend = FakeBackend(failure=OSError("boom"))
    with pytest.raises(RuntimeError) as info:
        Backend.get_missing_packages_sorted(backend)
    assert isinstance(info.value.__cause__, OSError)
    assert str(info.value.__cause__) == "boom"


def test_unmanaged_packages_error_is_wrapped():
    backend = FakeBackend(failure=ValueError("bad"))
    with pytest.raises(RuntimeError) as info:
        Backend.get_unmanaged_packages_sorted(backend)
    assert isinstance(info.value.__cause__, ValueError)
    assert str(info.value.__cause__) == "bad"


def test_install_command(calls):
    recorded, _ = calls
    backend = FakeBackend()
    code = backend.install_packages([Package("a"), Package("b", "repo")], False)
    assert code == 0
    assert recorded == [["fakepm", "--add", "a", "repo/b"]]


def test_install_command_noconfirm(calls):
    recorded, returncodes = calls
    returncodes.append(1)
    assert FakeBackend().install_packages([Package("a")], True) == 1
    assert recorded == [["fakepm", "--add", "--yes", "a"]]


def test_remove_command_and_exit_code(calls):
    recorded, returncodes = calls
    returncodes.append(3)
    code = FakeBackend().remove_packages([Package("a")], True)
    assert code == 3
    assert recorded == [["fakepm", "--drop", "--recursive", "--yes", "a"]]


def test_make_dependency_command(calls):
    recorded, returncodes = calls
    returncodes.append(2)
    assert FakeBackend().make_dependency([Package("a"), Package("b")]) == 2
    assert recorded == [["fakepm", "--as-dep", "a", "b"]]


def test_show_package_info_uses_overridden_binary(calls):
    recorded, _ = calls
    backend = FakeBackend()
    backend.binary = "otherpm"
    assert backend.show_package_info(Package("a")) == 0
    assert recorded == [["otherpm", "--info", "a"]]


def test_group_assignments_groups_and_sorts():
    first = Group("first", set(), Path("/first"))
    second = Group("second", set(), Path("/second"))
    result = group_assignments(
        [(Package("z"), first), (Package("b"), second), (Package("a"), first)]
    )
    assert result == {first: [Package("a"), Package("z")], second: [Package("b")]}


def test_assign_group_writes_group_files(tmp_path):
    existing = tmp_path / "existing"
    existing.write_text("[fake]\nold\n")
    fresh = tmp_path / "fresh"
    fresh.write_text("[other]\nx\n")
    existing_group = Group.from_file(existing, tmp_path)
    fresh_group = Group.from_file(fresh, tmp_path)

    FakeBackend().assign_group(
        [
            (Package("new"), existing_group),
            (Package("alpha"), existing_group),
            (Package("tool"), fresh_group),
        ]
    )

    assert existing.read_text().startswith("[fake]\nalpha\nnew\n")
    reloaded_existing = Group.from_file(existing, tmp_path)
    sections = {section.name: section for section in reloaded_existing.sections}
    assert sections["fake"].packages == _pkgs("old", "new", "alpha")

    reloaded_fresh = Group.from_file(fresh, tmp_path)
    sections = {section.name: section for section in reloaded_fresh.sections}
    assert set(sections) == {"other", "fake"}
    assert sections["fake"].packages == _pkgs("tool")