import subprocess

import pytest

from pacdef.backend.flatpak import Flatpak
from pacdef.grouping.package import Package


class _Recorder:
    def __init__(self, returncode=0, stdout=b""):
        self.returncode = returncode
        self.stdout = stdout
        self.calls = []

    def __call__(self, args, **kwargs):
        self.calls.append(list(args))
        return subprocess.CompletedProcess(args, self.returncode, stdout=self.stdout, stderr=b"")


@pytest.fixture
def recorder(monkeypatch):
    rec = _Recorder(stdout=b"org.example.App\norg.example.Tool\n\n")
    monkeypatch.setattr(subprocess, "run", rec)
    return rec


def test_explicit_packages_systemwide(recorder):
    result = Flatpak().get_explicitly_installed_packages()
    assert result == {Package("org.example.App"), Package("org.example.Tool")}
    assert recorder.calls == [["flatpak", "list", "--columns=application", "--app"]]


def test_all_packages_for_user(recorder):
    flatpak = Flatpak()
    flatpak.systemwide = False
    result = flatpak.get_all_installed_packages()
    assert result == {Package("org.example.App"), Package("org.example.Tool")}
    assert recorder.calls == [["flatpak", "list", "--columns=application", "--user"]]


def test_install_for_user(recorder):
    flatpak = Flatpak()
    flatpak.systemwide = False
    recorder.returncode = 1
    assert flatpak.install_packages([Package("org.example.App")], True) == 1
    assert recorder.calls == [["flatpak", "install", "--user", "--assumeyes", "org.example.App"]]


def test_remove_systemwide(recorder):
    code = Flatpak().remove_packages([Package("org.example.App")], False)
    assert code == 0
    assert recorder.calls == [["flatpak", "uninstall", "org.example.App"]]


def test_show_info_for_user(recorder):
    flatpak = Flatpak()
    flatpak.systemwide = False
    assert flatpak.show_package_info(Package("org.example.App")) == 0
    assert recorder.calls == [["flatpak", "info", "--user", "org.example.App"]]


def test_make_dependency_not_supported():
    flatpak = Flatpak()
    assert flatpak.supports_as_dependency is False
    with pytest.raises(RuntimeError, match="not supported by flatpak"):
        flatpak.make_dependency([Package("org.example.App")])


def test_default_is_systemwide():
    assert Flatpak().systemwide is True