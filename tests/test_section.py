import pytest

from pacdef.grouping.package import Package
from pacdef.grouping.section import Section, split_sections


def test_from_lines_parses_packages():
    lines = ["[arch]", "vim", "# comment", "", "extra/git  # vcs"]
    section = Section.from_lines(lines)
    assert section.name == "arch"
    assert section.packages == {Package("vim"), Package("git", "extra")}


def test_from_lines_skips_lines_before_header():
    section = Section.from_lines(["stray", "  ", "[rust]", "ripgrep"])
    assert section.name == "rust"
    assert section.packages == {Package("ripgrep")}


def test_from_lines_strips_brackets_from_header():
    section = Section.from_lines(["[[python]]  ", "black"])
    assert section.name == "python"


def test_from_lines_stops_at_next_header():
    section = Section.from_lines(["[a]", "x", "[b]", "y"])
    assert section.name == "a"
    assert section.packages == {Package("x")}


def test_empty_section_raises():
    with pytest.raises(ValueError, match=r"\[flatpak\] is empty"):
        Section.from_lines(["[flatpak]", "# nothing here", ""])


def test_missing_header_raises():
    with pytest.raises(ValueError, match="finding beginning of next section"):
        Section.from_lines(["vim", "git"])


def test_split_sections():
    lines = ["junk", "[a]", "x", "[b]", "y", "z"]
    assert list(split_sections(lines)) == [["junk", "[a]", "x"], ["[b]", "y", "z"]]


def test_split_sections_without_header_yields_one_block():
    assert list(split_sections(["vim", "git"])) == [["vim", "git"]]


def test_split_sections_of_nothing():
    assert list(split_sections([])) == []


def test_split_then_parse_every_block():
    lines = ["[a]", "x", "[b]", "", "[c]", "z"]
    results = []
    for block in split_sections(lines):
        try:
            results.append(Section.from_lines(block).name)
        except ValueError:
            results.append(None)
    assert results == ["a", None, "c"]


def test_str_lists_sorted_packages():
    section = Section("arch", {Package("zsh"), Package("bash"), Package("git", "extra")})
    assert str(section) == "[arch]\nbash\nextra/git\nzsh"


def test_equality_and_ordering_by_name():
    assert Section("a", {Package("x")}) == Section("a", {Package("y")})
    assert len({Section("a", {Package("x")}), Section("a")}) == 1
    names = [s.name for s in sorted([Section("rust"), Section("arch"), Section("flatpak")])]
    assert names == sorted(names)
    assert names[0] == "arch"