"""
SSH client configuration — keep exactly one Host stanza for the target host.

Text-level patching of ``~/.ssh/config``:

  - a stanza runs from a ``Host``/``Match`` line to the next one
  - the first stanza naming the host gets its ``IdentityFile`` rewritten
    in place (or inserted right after the ``Host`` line)
  - later stanzas naming the host are folded away: removed when the host
    is their only pattern, otherwise the host is dropped from their
    ``Host`` line
  - no stanza → a new one is appended

The file is replaced atomically (temp file + rename), so an
interrupted run never leaves a half-written config or a ``.bak`` file.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from devbootstrap.core.errors import SshConfigError
from devbootstrap.core.services.environment import expand_home

logger = logging.getLogger(__name__)

_STANZA_KEYWORDS = ("host", "match")
_DEFAULT_INDENT = "  "


@dataclass
class _Stanza:
    start: int              # index of the Host line
    end: int                # index one past the last line
    patterns: list[str]


def _split_directive(line: str) -> tuple[str, str]:
    """Split ``Keyword value`` / ``Keyword=value`` into (keyword lowercased, value)."""
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return "", ""
    for i, ch in enumerate(stripped):
        if ch.isspace() or ch == "=":
            keyword = stripped[:i]
            value = stripped[i:].lstrip(" \t=").strip()
            return keyword.lower(), _unquote(value)
    return stripped.lower(), ""


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"' and '"' not in value[1:-1]:
        return value[1:-1]
    return value


def _quote(value: object) -> str:
    """Quote a directive value that contains whitespace."""
    text = str(value)
    return f'"{text}"' if any(ch.isspace() for ch in text) else text


def _host_patterns(value: str) -> list[str]:
    return [p.strip('"') for p in value.split()]


def _names_host(stanza: _Stanza, host: str) -> bool:
    """Host patterns match case-insensitively, as in ssh."""
    return host.lower() in (p.lower() for p in stanza.patterns)


def _stanzas(lines: list[str]) -> list[_Stanza]:
    starts: list[tuple[int, str, str]] = []
    for i, line in enumerate(lines):
        keyword, value = _split_directive(line)
        if keyword in _STANZA_KEYWORDS:
            starts.append((i, keyword, value))

    stanzas = []
    for n, (start, keyword, value) in enumerate(starts):
        end = starts[n + 1][0] if n + 1 < len(starts) else len(lines)
        patterns = _host_patterns(value) if keyword == "host" else []
        stanzas.append(_Stanza(start=start, end=end, patterns=patterns))
    return stanzas


def host_stanza_count(text: str, host: str) -> int:
    """Number of Host stanzas naming ``host``."""
    return sum(1 for s in _stanzas(text.splitlines()) if _names_host(s, host))


def host_identity_file(text: str, host: str) -> str | None:
    """The first IdentityFile configured for ``host``, or None."""
    lines = text.splitlines()
    for stanza in _stanzas(lines):
        if not _names_host(stanza, host):
            continue
        for line in lines[stanza.start + 1 : stanza.end]:
            keyword, value = _split_directive(line)
            if keyword == "identityfile":
                return value
        return None
    return None


def render_host_stanza(host: str, key_path: Path, macos: bool) -> list[str]:
    """A fresh stanza: agent forwarding of the key, keychain on macOS."""
    lines = [f"Host {host}", f"{_DEFAULT_INDENT}AddKeysToAgent yes"]
    if macos:
        lines.append(f"{_DEFAULT_INDENT}UseKeychain yes")
    lines.append(f"{_DEFAULT_INDENT}IdentityFile {_quote(key_path)}")
    return lines


def patch_identity_file(
    text: str,
    host: str,
    key_path: Path,
    *,
    macos: bool = False,
    home: Path | None = None,
) -> tuple[str, str]:
    """Return (new_text, action) with ``host`` pointing at ``key_path``.

    Actions: ``unchanged``, ``updated``, ``inserted``, ``appended``.
    """
    lines = text.splitlines()
    matching = [s for s in _stanzas(lines) if _names_host(s, host)]

    if not matching:
        if lines and lines[-1].strip():
            lines.append("")
        lines.extend(render_host_stanza(host, key_path, macos))
        return "\n".join(lines) + "\n", "appended"

    primary, duplicates = matching[0], matching[1:]
    action = "unchanged"

    # Fold duplicates first, bottom-up, so primary's indices stay valid
    for stanza in reversed(duplicates):
        remaining = [p for p in stanza.patterns if p.lower() != host.lower()]
        if not remaining:
            del lines[stanza.start : stanza.end]
        else:
            lines[stanza.start] = "Host " + " ".join(remaining)
        action = "updated"

    identity_index = None
    indent = _DEFAULT_INDENT
    for i in range(primary.start + 1, primary.end):
        keyword, value = _split_directive(lines[i])
        if keyword:
            indent = lines[i][: len(lines[i]) - len(lines[i].lstrip())] or _DEFAULT_INDENT
        if keyword == "identityfile":
            identity_index = i
            break

    new_line = f"{indent}IdentityFile {_quote(key_path)}"
    if identity_index is None:
        lines.insert(primary.start + 1, new_line)
        action = "inserted"
    else:
        _kw, current = _split_directive(lines[identity_index])
        current_path = expand_home(current, home) if home else Path(current)
        if current_path != key_path:
            lines[identity_index] = new_line
            action = "updated"

    return "\n".join(lines) + "\n", action


def update_ssh_config(
    config_path: Path,
    host: str,
    key_path: Path,
    *,
    macos: bool = False,
    home: Path | None = None,
) -> str:
    """Point ``host``'s IdentityFile at ``key_path`` in the config file.

    Creates the file (mode 600) if missing.

    Returns:
        The action taken (see ``patch_identity_file``).

    Raises:
        SshConfigError: If the file cannot be read or written.
    """
    try:
        config_path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        if not config_path.exists():
            config_path.touch(mode=0o600)
        os.chmod(config_path, 0o600)
        text = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SshConfigError(f"Cannot prepare {config_path}: {e}") from e

    new_text, action = patch_identity_file(text, host, key_path, macos=macos, home=home)
    if action == "unchanged":
        logger.debug("%s already uses %s for %s", config_path, key_path, host)
        return action

    _atomic_write(config_path, new_text)
    logger.info("SSH config %s: %s IdentityFile for %s", config_path, action, host)
    return action


def _atomic_write(path: Path, text: str) -> None:
    fd, tmp_name = tempfile.mkstemp(prefix=".config.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.chmod(tmp_name, 0o600)
        os.replace(tmp_name, path)
    except OSError as e:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise SshConfigError(f"Cannot write {path}: {e}") from e
