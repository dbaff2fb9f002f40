import importlib
import importlib.util

import pytest


def test_terminal_exported_at_package_root():
    import pureansi

    # Terminal is the public entry point, so it must be reachable from the root
    assert hasattr(pureansi, "Terminal")
    assert pureansi.Terminal is importlib.import_module("pureansi.terminal").Terminal


@pytest.mark.parametrize("name", importlib.import_module("pureansi").__all__)
def test_every_root_export_resolves(name):
    import pureansi

    assert getattr(pureansi, name) is not None


@pytest.mark.parametrize(
    "module",
    ["pureansi.protocol", "pureansi.emulation", "pureansi.warnings", "pureansi.utils"],
)
def test_subpackage_exports_resolve(module):
    mod = importlib.import_module(module)
    for name in mod.__all__:
        assert hasattr(mod, name), f"{module} is missing {name}"


def test_command_types_are_closed_union():
    from typing import get_args

    from pureansi.protocol import commands

    members = set(get_args(commands.TermCmd))
    exported = {getattr(commands, name) for name in commands.__all__ if name != "TermCmd"}
    assert members == exported
    assert len(members) == 14


def test_module_entry_point_exists():
    assert importlib.util.find_spec("pureansi.__main__") is not None
