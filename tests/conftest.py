"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from surgeon.config import SurgeonConfig
from surgeon.filesystem.changes import CreateFile, Remove, Rename
from surgeon.protocol.commands import CommandContext
from surgeon.protocol.dispatch import Dispatcher, Session
from surgeon.refactoring.base import Transformation
from surgeon.refactoring.builtins import register_builtins
from surgeon.refactoring.registry import TransformationRegistry
from surgeon.refactoring.types import Config, Description, Parameter, Result
from surgeon.text.edits import EditSet

# Enable async tests without marking each one
pytest_plugins = ["pytest_asyncio"]

SOURCE = "package main\n\nfunc main() {\n\tcount := 1\n\tcount++\n}\n"


class ScriptedTransformation(Transformation):
    """
    Transformation whose result is supplied by the test.

    ``build`` receives the Config and returns the Result; every Config
    seen is recorded in ``configs``.
    """

    def __init__(self, build=None, name="Scripted", params=()):
        self._build = build or (lambda config: Result())
        self._name = name
        self._params = tuple(params)
        self.configs: list[Config] = []

    def description(self) -> Description:
        return Description(name=self._name, params=self._params)

    def run(self, config: Config) -> Result:
        self.configs.append(config)
        return self._build(config)


@pytest.fixture
def project(tmp_path) -> Path:
    """Working directory containing a single Go-like source file."""
    root = tmp_path / "proj"
    root.mkdir()
    (root / "a.go").write_text(SOURCE)
    return root


@pytest.fixture
def scripted():
    """A scripted transformation that renames ``count`` to ``total`` on line 4."""

    def build(config: Config) -> Result:
        result = Result()
        result.log.info("starting")
        result.log.warn("check the result")
        edits = EditSet()
        offset = SOURCE.index("count")
        edits.replace(offset, len("count"), "total")
        result.edits[config.selection.filename] = edits
        return result

    return ScriptedTransformation(
        build,
        name="Scripted Rename",
        params=[
            Parameter(label="New Name:", prompt="Name to use", default="x"),
            Parameter(label="Exported:", prompt="Export it?", default=False),
        ],
    )


@pytest.fixture
def fs_changing():
    """A transformation that only requests file system changes."""

    def build(config: Config) -> Result:
        return Result(
            fs_changes=[
                CreateFile("/p/new.go", "package main\n"),
                Remove("/p/old.go"),
                Rename("/p/b.go", "c.go"),
            ]
        )

    return ScriptedTransformation(build, name="Shuffle Files")


@pytest.fixture
def registry(scripted, fs_changing) -> TransformationRegistry:
    registry = TransformationRegistry()
    register_builtins(registry)
    registry.register("scripted", scripted)
    registry.register("shuffle", fs_changing)
    return registry


@pytest.fixture
def context(registry) -> CommandContext:
    return CommandContext(registry=registry, config=SurgeonConfig(about_text="about surgeon"))


@pytest.fixture
def session(context) -> Session:
    """A fresh session over the test registry."""
    return Session(Dispatcher(context))


@pytest.fixture
def configured(session, project) -> Session:
    """A session that has been opened and pointed at ``project``."""
    assert session.handle("open").is_ok
    assert session.handle("setdir", {"mode": "local", "directory": str(project)}).is_ok
    return session


@pytest.fixture
def textselection() -> dict:
    """textselection input covering ``count`` on line 4 of a.go."""
    return {
        "filename": "a.go",
        "startline": 4,
        "startcol": 2,
        "endline": 4,
        "endcol": 7,
    }
