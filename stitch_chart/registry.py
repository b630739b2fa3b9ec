"""Command discovery.

Every non-private module in stitch_chart/commands/ that defines a
module-level `command` (a Command) is registered under `command.name`.
Discovery runs once; later calls reuse the same dict.
"""

import importlib
import pkgutil

import stitch_chart.commands as _commands_pkg
from stitch_chart.core.types import Command

_registry: dict[str, Command] = {}


def _command_modules() -> list[str]:
    found = pkgutil.iter_modules(_commands_pkg.__path__)
    return sorted(name for _finder, name, _ispkg in found if not name.startswith('_'))


def discover() -> dict[str, Command]:
    """Import all command modules and return the registry.

    Raises RuntimeError if two modules register the same command name.
    """
    if _registry:
        return _registry

    for modname in _command_modules():
        module = importlib.import_module(f'{_commands_pkg.__name__}.{modname}')
        cmd = getattr(module, 'command', None)
        if not isinstance(cmd, Command):
            continue
        if cmd.name in _registry:
            raise RuntimeError(f'Command {cmd.name!r} registered twice (stitch_chart.commands.{modname})')
        _registry[cmd.name] = cmd

    return _registry


def get(name: str) -> Command:
    """Get a command by name."""
    reg = discover()
    if name not in reg:
        raise KeyError(f'Unknown command: {name}. Available: {", ".join(sorted(reg))}')
    return reg[name]


def all_commands() -> dict[str, Command]:
    return discover()
