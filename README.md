# sshpick

An interactive, fuzzy-searching picker for the hosts in your `~/.ssh/config`.
Run it, type a few letters, press Enter, and you are connected.

## Install

```
pip install .
```

The package has no dependencies beyond the Python standard library
(Python 3.10 or later).

## Usage

```
sshpick
```

sshpick reads `$HOME/.ssh/config`, or `%USERPROFILE%\.ssh\config` when `HOME`
is not set. It lists every `Host` entry, leaving out any line that contains a
`*`, such as `Host *` or `Host *.example.com`. When you pick a host, it runs
`ssh <host>` and exits with the status `ssh` returns.

It exits with status 1 and a message on standard error when the config file
is missing, cannot be read, holds no hosts, or when standard input is not a
terminal.

Keys:

- type to filter the list with fuzzy matching (case-insensitive); matches at
  the start of a name, at word boundaries and in unbroken runs rank above
  scattered ones
- `↑` / `↓` move the selection
- `Backspace` removes the last character of the search
- `Enter` connects to the selected host
- `Esc` or `Ctrl+C` quits without connecting

With an empty search the hosts are listed alphabetically, ignoring case. With
a search, they are ordered by score and then alphabetically.

## Groups

You can sort hosts into sections by putting a `#group:<name>` comment in your
SSH config. Every `Host` after that comment belongs to the group, up to the
next `#group:` comment:

```
Host scratch-box
    HostName 192.0.2.5

#group:production
Host prod-web
    HostName 10.0.1.10
Host prod-db
    HostName 10.0.1.20

#group:Staging
Host stage-web
    HostName 10.0.2.10
```

Group names are lowercased and trimmed, and an empty `#group:` is ignored.
Groups are shown as headers in alphabetical order. Hosts that come before the
first group comment appear under an "Other" header at the bottom. That header
is shown only when the config has at least one group.

## Using it as a library

```python
from sshpick.config import get_ssh_config_path, parse_ssh_config
from sshpick.filter import filter_and_rank_hosts

hosts = parse_ssh_config(get_ssh_config_path())
for match in filter_and_rank_hosts(hosts, "prod"):
    print(match.host.name, match.host.group, match.score)
```

- `sshpick.config` — `SshHost` (`name`, `group`), `get_ssh_config_path()` and
  `parse_ssh_config(path)`, which raises `OSError` if the file cannot be read.
- `sshpick.filter` — `filter_and_rank_hosts(hosts, query)` returning
  `HostMatch` objects (`host`, `score`), and `fuzzy_score(haystack, needle)`,
  which returns `None` when the needle is not a subsequence of the haystack.
- `sshpick.highlight` — `render_host_with_highlight(text, query)` wraps each
  case-insensitive occurrence of the query in ANSI highlight codes.
- `sshpick.renderer` — `group_matches`, `calculate_visible_items` and
  `render_ui`, which draws the selector screen to a stream of your choice.
- `sshpick.selector` — `run_selector(hosts)` opens the interactive picker and
  returns the chosen host name, or `None` if the user cancelled.
  `SelectorState.handle_key(event)` drives the same logic from `KeyEvent`
  values without a terminal.

## What it does not do

sshpick only looks at `Host` lines and `#group:` comments. It does not follow
`Include` directives, does not read `HostName`, `User` or other options, and
treats a line such as `Host a b` as a single host named `a b`. It passes the
chosen name to `ssh` unchanged.