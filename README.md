# pacdef

A Python library for declarative package management across several Linux
package managers.

You describe the packages you want in plain-text *group files*. `pacdef`
reads them, asks each package manager what is installed, and tells you which
declared packages are missing and which installed packages no group declares.
It can then install or remove them through the package manager.

## Installation

```
pip install .
```

The only runtime dependency is PyYAML, used for the configuration file.

## Group files

Group files live in `$XDG_CONFIG_HOME/pacdef/groups` (by default
`~/.config/pacdef/groups`; see `pacdef.paths.get_group_dir`). Subdirectories
are allowed, and the group name is the path relative to that directory, for
example `generic/base`.

```
[arch]
base
core/linux   # a repository may come before the name
neovim

[flatpak]
org.mozilla.firefox

[python]
black
```

Everything after `#` is a comment. A section with no packages is skipped with
a warning, as is a file with no sections at all. Two packages are equal when
their names match and, if both name a repository, the repositories match too.

`Group.load(group_dir, warn_not_symlinks)` reads every file below the group
directory (creating the directory if needed) and returns a set of `Group`
objects. With `warn_not_symlinks` true, it prints a warning for every group
file that is neither a symlink nor inside a symlinked directory.

## Backends

| Section     | Class                          | How installed packages are found                       |
|-------------|--------------------------------|--------------------------------------------------------|
| `[arch]`    | `pacdef.backend.arch.Arch`     | pacman's local database in `/var/lib/pacman/local`     |
| `[debian]`  | `pacdef.backend.debian.Debian` | `/var/lib/dpkg/status` and `/var/lib/apt/extended_states` |
| `[flatpak]` | `pacdef.backend.flatpak.Flatpak` | `flatpak list --columns=application`                 |
| `[python]`  | `pacdef.backend.python.Python` | `pip list --format json --user`                        |
| `[rust]`    | `pacdef.backend.rust.Rust`     | `~/.cargo/.crates2.json`                               |

`pacdef.backend.registry.iter_backends()` yields a fresh instance of each, and
`included_sections()` returns their section names sorted.

Every backend offers `load(groups)`, `get_missing_packages_sorted()`,
`get_unmanaged_packages_sorted()`, `install_packages(packages, noconfirm)`,
`remove_packages(packages, noconfirm)`, `show_package_info(package)` and
`assign_group(to_assign)`; the commands return the package manager's exit
code. `make_dependency(packages)` works for `Arch` and `Debian`, which set
`supports_as_dependency`; the others raise `RuntimeError`. `Debian` runs its
commands through `sudo` unless the effective user is root.

Settings a caller applies from the configuration: `Arch.binary` (the AUR
helper) and `Arch.aur_rm_args`, and `Flatpak.systemwide` (false adds
`--user`).

## Example

```python
from pacdef.backend.registry import iter_backends
from pacdef.backend.arch import Arch
from pacdef.backend.flatpak import Flatpak
from pacdef.backend.todo import ToDoPerBackend
from pacdef.config import Config
from pacdef.grouping.group import Group
from pacdef.paths import binary_in_path, get_config_path, get_group_dir

config = Config.load(get_config_path())
groups = Group.load(get_group_dir(), config.warn_not_symlinks)

missing = ToDoPerBackend()
for backend in iter_backends():
    if backend.section in config.disabled_backends:
        continue
    if isinstance(backend, Arch):
        backend.binary = config.aur_helper
        backend.aur_rm_args = list(config.aur_rm_args)
    if isinstance(backend, Flatpak):
        backend.systemwide = config.flatpak_systemwide
    if not binary_in_path(backend.binary):
        continue
    backend.load(groups)
    missing.push(backend, backend.get_missing_packages_sorted())

if not missing.nothing_to_do_for_all_backends():
    missing.show()
    missing.install_missing_packages(noconfirm=False)
```

`ToDoPerBackend.render()` returns the text that `show()` prints: a `[section]`
header per backend followed by its packages. `install_missing_packages` and
`remove_unmanaged_packages` raise `RuntimeError` if a package manager fails.

## Searching

`pacdef.search.search_packages(regex, groups)` prints every package whose name
matches the regular expression, under its group and section, and raises
`pacdef.errors.NoPackagesFound` when nothing matches. `find_matches` and
`render_matches` return the matches and the text without printing.

## Configuration

`pacdef.config.Config.load(path)` reads `$XDG_CONFIG_HOME/pacdef/pacdef.yaml`
(`pacdef.paths.get_config_path()`); it raises
`pacdef.errors.ConfigFileNotFound` if the file is missing and `ValueError` if it
is malformed. `Config.save(path)` writes it back. All keys are optional:

```yaml
aur_helper: paru            # binary used for the arch backend
aur_rm_args: []             # extra arguments when removing arch packages
flatpak_systemwide: true    # false installs flatpaks with --user
warn_not_symlinks: true
disabled_backends: []       # e.g. [python, rust]
```

## Other helpers

- `pacdef.args.parse_args(argv)` parses a command line such as
  `["package", "sync", "--noconfirm"]` into a `GroupCommand`, `PackageCommand`
  or `VersionCommand`; `build_parser()` returns the underlying
  `argparse.ArgumentParser`, with short aliases (`g`, `p`, `e`, `i`, `l`, `n`,
  `r`, `s`, `sy`, `c`, `u`, `se`).
- `pacdef.cmd.run_edit_command(files)` opens files in `$EDITOR` (or
  `$VISUAL`) and returns the exit code.
- `pacdef.ui.get_user_confirmation()` asks `Continue? [Y/n]`;
  `read_single_char_from_terminal()` reads one key press.
- `pacdef.review.strategy.Strategy` holds, for one backend, the packages to
  delete, to mark as dependency and to assign to groups, and carries them out
  with `execute()`.
- `Group.save_packages(section_header, packages)` writes packages into a group
  file, adding the section if it does not exist.

## What this package does not do

- It installs no `pacdef` command. `parse_args` turns a command line into a
  command object, but nothing in the package carries the command out; a
  caller combines the pieces above, as in the example.
- It has no interactive review session that asks about each unmanaged package
  in turn. Only `Strategy`, which executes decisions already made, is
  included.
- It has no ready-made operations for importing, creating, listing, showing or
  removing group files, nor for printing version information beyond
  `pacdef.args.get_version_string()`.

## Development

```
pip install -e '.[test]'
pytest
```