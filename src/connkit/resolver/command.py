from __future__ import annotations

import shlex
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ConnectionCommand:
    """External program plus ordered arguments; never executed by the resolver."""

    program: str
    args: list[str] = field(default_factory=list)

    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def command_line(self) -> str:
        """Plain space-joined rendering, as printed before execution."""
        return " ".join(self.argv())

    def shell_line(self) -> str:
        """Shell-quoted rendering suitable for copy/paste."""
        return shlex.join(self.argv())
