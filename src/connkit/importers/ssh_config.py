"""OpenSSH client config (``~/.ssh/config``) importer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Final

from connkit.importers.base import BaseImporter, ImportResult, expand_home
from connkit.models.connection import Connection
from connkit.models.protocol import SshConfig

WILDCARD_REASON: Final[str] = "wildcard pattern unsupported"

_HANDLED: Final[frozenset[str]] = frozenset(
    {
        "hostname",
        "port",
        "user",
        "identityfile",
        "identitiesonly",
        "proxyjump",
        "controlmaster",
        "forwardagent",
    }
)

# Directives that change parsing scope rather than describe a host.
_IGNORED: Final[frozenset[str]] = frozenset({"include"})


@dataclass
class _HostBlock:
    patterns: list[str]
    options: dict[str, str] = field(default_factory=dict)
    # Unhandled directives with their original spelling, in file order.
    extra: dict[str, str] = field(default_factory=dict)

    def add(self, key: str, value: str) -> None:
        key_lower = key.lower()
        if key_lower in _IGNORED or key_lower in self.options:
            # First occurrence wins, as in ssh(1).
            return
        self.options[key_lower] = value
        if key_lower not in _HANDLED:
            self.extra[key] = value


def parse_line(line: str) -> tuple[str, str] | None:
    """Split ``Key Value`` or ``Key=Value``; returns None when either side is empty."""
    key, sep, value = line.partition("=")
    if sep and key.strip() and " " not in key.strip() and value.strip():
        return key.strip(), _unquote(value.strip())

    parts = line.split(None, 1)
    if len(parts) == 2 and parts[1].strip():
        return parts[0], _unquote(parts[1].strip())
    return None


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


def _is_yes(value: str | None) -> bool:
    return value is not None and value.lower() == "yes"


def _parse_port(value: str | None) -> int:
    if value is None or not value.isdigit():
        return 22
    port = int(value)
    return port if 0 < port <= 65535 else 22


class SshConfigImporter(BaseImporter):
    format_id: ClassVar[str] = "ssh-config"
    display_name: ClassVar[str] = "SSH Config"

    def import_text(self, text: str, *, source: str = "<string>") -> ImportResult:
        result = ImportResult()
        block: _HostBlock | None = None

        for line_num, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            parsed = parse_line(line)
            if parsed is None:
                result.skip(f"line {line_num}", "Invalid syntax", source)
                continue

            key, value = parsed
            key_lower = key.lower()

            if key_lower == "host":
                if block is not None:
                    self._emit(block, source, result)
                block = _HostBlock(patterns=value.split())
            elif key_lower == "match":
                # Match options are conditional and do not belong to the preceding Host.
                if block is not None:
                    self._emit(block, source, result)
                block = None
            elif block is not None:
                block.add(key, value)

        if block is not None:
            self._emit(block, source, result)

        return result

    def _emit(self, block: _HostBlock, source: str, result: ImportResult) -> None:
        for alias in block.patterns:
            if "*" in alias or "?" in alias or alias.startswith("!"):
                result.skip(alias, WILDCARD_REASON, source)
                continue
            result.connections.append(self._build(alias, block))

    def _build(self, alias: str, block: _HostBlock) -> Connection:
        options = block.options
        ssh = SshConfig(
            identities_only=_is_yes(options.get("identitiesonly")),
            proxy_jump=options.get("proxyjump"),
            use_control_master=options.get("controlmaster", "").lower() in ("auto", "yes"),
            agent_forwarding=_is_yes(options.get("forwardagent")),
            custom_options=dict(block.extra),
        )
        identity = options.get("identityfile")
        if identity:
            ssh.use_key_file(expand_home(identity))

        return Connection(
            name=alias,
            host=options.get("hostname", alias),
            port=_parse_port(options.get("port")),
            username=options.get("user"),
            protocol_config=ssh,
        )
