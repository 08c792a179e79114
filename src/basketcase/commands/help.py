"""``basketcase help [<command> ...]``."""

from __future__ import annotations

import textwrap

from basketcase.commands.base import Command


class HelpCommand(Command):
    synopsis = "[<command>]"
    help = "Display usage instructions."

    def execute(self) -> None:
        from basketcase.registry import DEFAULT_REGISTRY, PROGRAM

        registry = self.registry or DEFAULT_REGISTRY
        if not self.targets:
            self.echo(registry.usage())
            return
        for name in self.targets:
            command_class = registry.lookup(name)
            self.echo("")
            self.echo(f"% {PROGRAM} {name} {command_class.synopsis}".rstrip())
            self.echo("")
            self.echo(textwrap.indent(command_class.help.rstrip("\n"), "    "))
