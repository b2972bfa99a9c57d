"""Transformations shipped with surgeon."""

from __future__ import annotations

import logging
import re

from surgeon.refactoring.base import Transformation
from surgeon.refactoring.registry import TransformationRegistry
from surgeon.refactoring.types import (
    Config,
    Description,
    Parameter,
    Quality,
    Result,
)
from surgeon.text.edits import EditSet

logger = logging.getLogger(__name__)

IDENTIFIER = re.compile(r"[A-Za-z_]\w*")


class Null(Transformation):
    """Makes no changes. Used to exercise clients end to end."""

    def description(self) -> Description:
        return Description(
            name="Null Refactoring",
            quality=Quality.IN_TESTING,
            synopsis="Does nothing",
        )

    def run(self, config: Config) -> Result:
        return Result()


class Rename(Transformation):
    """
    Renames every whole-word occurrence of the selected identifier.

    This is a lexical rename within the selected file only: it does not
    resolve scopes, so shadowed names and identically named members are
    renamed too. An empty selection renames the identifier under the
    cursor.
    """

    def description(self) -> Description:
        return Description(
            name="Rename",
            params=(
                Parameter(
                    label="New Name:",
                    prompt="What to rename this identifier to.",
                    default="",
                ),
            ),
            quality=Quality.PRODUCTION,
            synopsis="Changes the name of an identifier",
        )

    def run(self, config: Config) -> Result:
        result = Result()
        log = result.log

        if len(config.args) != 1 or not isinstance(config.args[0], str):
            log.error("Rename requires exactly one argument: the new name")
            return result
        new_name = config.args[0]
        if not IDENTIFIER.fullmatch(new_name):
            log.error(f"The new name {new_name!r} is not a valid identifier")
            return result
        if config.file_system is None:
            log.error("No file system is configured")
            return result

        filename = config.selection.filename
        try:
            text = config.file_system.read_file(filename)
            start, end = config.selection.to_offsets(text)
        except (OSError, ValueError) as e:
            log.error(f"Unable to read selection in {filename}: {e}")
            return result

        old_name = _identifier_at(text, start, end)
        if old_name is None:
            log.error("Please select an identifier to rename")
            return result
        if old_name == new_name:
            log.warn(f"The identifier is already named {new_name}")
            return result

        edits = EditSet()
        pattern = re.compile(rf"(?<!\w){re.escape(old_name)}(?!\w)")
        for match in pattern.finditer(text):
            edits.replace(match.start(), len(old_name), new_name)

        logger.debug(f"Renaming {old_name} -> {new_name}: {len(edits)} occurrences in {filename}")
        log.info(f"Renamed {len(edits)} occurrence(s) of {old_name} to {new_name}")
        result.edits[filename] = edits
        return result


def _identifier_at(text: str, start: int, end: int) -> str | None:
    """Return the identifier the range covers, or the one at ``start`` if empty."""
    if start < end:
        selected = text[start:end].strip()
        return selected if IDENTIFIER.fullmatch(selected) else None
    for match in IDENTIFIER.finditer(text):
        if match.start() <= start <= match.end():
            return match.group()
        if match.start() > start:
            break
    return None


def register_builtins(registry: TransformationRegistry) -> None:
    """Register every built-in transformation."""
    registry.register("null", Null())
    registry.register("rename", Rename())
