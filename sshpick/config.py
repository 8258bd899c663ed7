"""Reading SSH host entries from an OpenSSH client configuration file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Union

_GROUP_PREFIX = "#group:"
_HOST_PREFIX = "Host "

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class SshHost:
    """A selectable host from the SSH config, with its optional display group.

    Groups come from ``#group:<name>`` comments: every host after such a
    comment belongs to that group until the next group comment.
    """

    name: str
    group: Optional[str] = None


def get_ssh_config_path() -> Path:
    """Return the path of the user's SSH config file.

    Uses ``$HOME/.ssh/config``, falling back to ``%USERPROFILE%/.ssh/config``.
    Raises RuntimeError when neither variable is set.
    """
    for variable in ("HOME", "USERPROFILE"):
        base = os.environ.get(variable)
        if base is not None:
            return Path(base) / ".ssh" / "config"
    raise RuntimeError("Neither HOME nor USERPROFILE environment variable is set")


def _iter_hosts(lines: Iterator[str]) -> Iterator[SshHost]:
    current_group: Optional[str] = None
    for line in lines:
        trimmed = line.strip()

        if trimmed.startswith(_GROUP_PREFIX):
            group_name = trimmed[len(_GROUP_PREFIX):].strip().lower()
            if group_name:
                current_group = group_name
            continue

        if trimmed.startswith("#"):
            continue

        if trimmed.startswith(_HOST_PREFIX) and "*" not in trimmed:
            host_name = trimmed[len(_HOST_PREFIX):].strip()
            if host_name:
                yield SshHost(host_name, current_group)


def parse_ssh_config(path: PathLike) -> list[SshHost]:
    """Parse every non-wildcard ``Host`` entry from the config file at *path*.

    Hosts whose line contains ``*`` are skipped. Raises OSError when the
    file cannot be read.
    """
    with open(path, encoding="utf-8", newline="\n") as handle:
        return list(_iter_hosts(iter(handle)))