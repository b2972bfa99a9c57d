"""Tests for the transformation registry, selections and built-ins."""

import pytest

from surgeon.filesystem.local import LocalFileSystem
from surgeon.refactoring.builtins import Null, Rename, register_builtins
from surgeon.refactoring.registry import TransformationRegistry, default_registry
from surgeon.refactoring.types import Config, Log, Quality, Selection, Severity


class TestRegistry:
    """Tests for TransformationRegistry."""

    def test_register_and_lookup(self):
        registry = TransformationRegistry()
        null = Null()
        registry.register("null", null)
        assert registry.lookup("null") is null
        assert registry.lookup("other") is None
        assert "null" in registry
        assert len(registry) == 1

    def test_duplicate_rejected(self):
        registry = TransformationRegistry()
        registry.register("null", Null())
        with pytest.raises(ValueError, match="already registered"):
            registry.register("null", Null())

    def test_unregister(self):
        registry = TransformationRegistry()
        registry.register("null", Null())
        assert registry.unregister("null")
        assert not registry.unregister("null")

    def test_all_registered_sorted_copy(self):
        registry = TransformationRegistry()
        registry.register("rename", Rename())
        registry.register("null", Null())
        listing = registry.all_registered()
        assert list(listing) == ["null", "rename"]
        listing.clear()
        assert len(registry) == 2

    def test_default_registry_has_builtins(self):
        assert default_registry() is default_registry()
        assert {"null", "rename"} <= set(default_registry().all_registered())


class TestSelection:
    """Tests for selection offsets."""

    TEXT = "ab\ncde\n\nf"

    @pytest.mark.parametrize(
        "start, end, expected",
        [
            ((1, 1), (1, 3), (0, 2)),
            ((2, 1), (2, 4), (3, 6)),
            ((3, 1), (4, 2), (7, 9)),
        ],
    )
    def test_to_offsets(self, start, end, expected):
        selection = Selection("f", *start, *end)
        assert selection.to_offsets(self.TEXT) == expected

    @pytest.mark.parametrize("line, col", [(0, 1), (1, 0), (9, 1), (1, 9)])
    def test_out_of_range(self, line, col):
        with pytest.raises(ValueError):
            Selection("f", line, col, line, col).to_offsets(self.TEXT)

    def test_str(self):
        assert str(Selection("a.go", 1, 2, 3, 4)) == "a.go:1,2:3,4"


class TestLog:
    """Tests for transformation logs."""

    def test_entries_in_order(self):
        log = Log()
        log.info("a")
        log.warn("b")
        assert [e.severity for e in log.entries] == [Severity.INFO, Severity.WARNING]
        assert not log.contains_errors
        log.error("c")
        assert log.contains_errors


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "m.py"
    path.write_text("def total(xs):\n    total = 0\n    subtotal = 1\n    return total\n")
    return path


def rename_config(path, args, start=(1, 5), end=(1, 10)):
    return Config(
        file_system=LocalFileSystem(),
        scope=None,
        selection=Selection(str(path), *start, *end),
        args=args,
    )


class TestBuiltins:
    """Tests for the shipped transformations."""

    def test_null_changes_nothing(self, source):
        result = Null().run(rename_config(source, []))
        assert result.edits == {}
        assert result.fs_changes == []
        assert Null().description().quality == Quality.IN_TESTING

    def test_rename_whole_words(self, source):
        result = Rename().run(rename_config(source, ["amount"]))
        assert not result.log.contains_errors
        edits = result.edits[str(source)]
        assert len(edits) == 3
        assert edits.apply_to_string(source.read_text()) == (
            "def amount(xs):\n    amount = 0\n    subtotal = 1\n    return amount\n"
        )

    def test_rename_at_cursor(self, source):
        result = Rename().run(rename_config(source, ["amount"], start=(2, 7), end=(2, 7)))
        assert len(result.edits[str(source)]) == 3

    @pytest.mark.parametrize(
        "args, message",
        [
            ([], "exactly one argument"),
            (["a", "b"], "exactly one argument"),
            ([3], "exactly one argument"),
            (["1abc"], "not a valid identifier"),
        ],
    )
    def test_rename_bad_arguments(self, source, args, message):
        result = Rename().run(rename_config(source, args))
        assert result.edits == {}
        (entry,) = result.log.entries
        assert entry.severity is Severity.ERROR
        assert message in entry.message

    def test_rename_requires_identifier_selection(self, source):
        result = Rename().run(rename_config(source, ["x"], start=(1, 1), end=(1, 10)))
        assert result.edits == {}
        assert "select an identifier" in result.log.entries[0].message

    def test_rename_same_name_warns(self, source):
        result = Rename().run(rename_config(source, ["total"]))
        assert result.edits == {}
        assert result.log.entries[0].severity is Severity.WARNING

    def test_rename_missing_file(self, tmp_path):
        result = Rename().run(rename_config(tmp_path / "none.py", ["x"]))
        assert result.log.contains_errors

    def test_rename_without_file_system(self, source):
        config = rename_config(source, ["x"])
        config.file_system = None
        assert Rename().run(config).log.contains_errors

    def test_register_builtins(self):
        registry = TransformationRegistry()
        register_builtins(registry)
        assert registry.lookup("rename").description().params[0].label == "New Name:"
