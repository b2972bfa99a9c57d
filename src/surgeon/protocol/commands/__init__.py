"""
Protocol commands.

Each command is a Command subclass looked up by name in COMMANDS.
"""

from surgeon.protocol.commands.base import Command, CommandContext
from surgeon.protocol.commands.catalog import List, Params
from surgeon.protocol.commands.session import About, Open, SetDir
from surgeon.protocol.commands.xrun import XRun

COMMANDS: dict[str, type[Command]] = {
    command.name: command
    for command in (About, List, Open, Params, SetDir, XRun)
}

__all__ = [
    "Command",
    "CommandContext",
    "COMMANDS",
    "About",
    "List",
    "Open",
    "Params",
    "SetDir",
    "XRun",
]
