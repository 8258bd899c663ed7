"""Command line entry point: pick a host from the SSH config and connect."""

from __future__ import annotations

import argparse
import subprocess
import sys
from typing import Optional, Sequence

from sshpick.config import get_ssh_config_path, parse_ssh_config
from sshpick.selector import run_selector


def _error(message: str) -> None:
    print(message, file=sys.stderr)


def _build_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        prog="sshpick",
        description="Interactively pick a host from ~/.ssh/config and connect to it.",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the selector and connect with ssh; return the exit status."""
    _build_parser().parse_args(argv)

    try:
        config_path = get_ssh_config_path()
    except RuntimeError as error:
        _error(f"Error: {error}")
        return 1

    if not config_path.exists():
        _error(f"SSH config file not found at: {config_path}")
        _error("Create one at ~/.ssh/config with Host entries")
        return 1

    try:
        hosts = parse_ssh_config(config_path)
    except OSError as error:
        _error(f"Error reading SSH config: {error}")
        return 1

    if not hosts:
        _error("No hosts found in SSH config file")
        return 1

    try:
        host = run_selector(hosts)
    except OSError as error:
        _error(f"Error: {error}")
        return 1

    if host is None:
        return 0

    print(f"Connecting to {host}...", flush=True)
    try:
        completed = subprocess.run(["ssh", host], check=False)
    except OSError as error:
        _error(f"Failed to execute ssh command: {error}")
        return 1

    if completed.returncode == 0:
        return 0
    return completed.returncode if completed.returncode > 0 else 1


if __name__ == "__main__":
    sys.exit(main())