"""Translation of transformation results into xrun reply fields.

A transformation reports its outcome as a log, per-file edit sets and file
system changes. Clients never see those types directly: log entries become
``{severity, message}`` objects, edit sets become either patch files on
disk (patch mode) or the edited content inline (text mode), and file system
changes become tagged records.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Iterable

from surgeon.filesystem.base import FileSystem
from surgeon.filesystem.changes import FSChange
from surgeon.protocol.errors import ProtocolError
from surgeon.refactoring.types import Log, Result, Severity
from surgeon.text.edits import EditConflictError, EditRangeError, EditSet
from surgeon.text.patch import apply_to_file, create_patch_for_file

logger = logging.getLogger(__name__)

PATCH_MODE = "patch"
TEXT_MODE = "text"
OUTPUT_MODES = frozenset({PATCH_MODE, TEXT_MODE})

# Severity labels on the wire; informational entries carry no label
SEVERITY_LABELS: dict[Severity, str] = {
    Severity.INFO: "",
    Severity.WARNING: "warning",
    Severity.ERROR: "error",
}


def translate_log(log: Log) -> list[dict[str, str]]:
    """Convert log entries to wire format, preserving order."""
    return [
        {"severity": SEVERITY_LABELS[entry.severity], "message": entry.message}
        for entry in log.entries
    ]


def display_path(path: str, working_dir: str | None) -> str:
    """
    Name ``path`` for the client.

    Paths inside the working directory are reported relative to it; any
    other path is reported as given.
    """
    if not working_dir:
        return path
    try:
        relative = os.path.relpath(path, working_dir)
    except ValueError:
        # Different drives on Windows
        return path
    if relative == os.pardir or relative.startswith(os.pardir + os.sep):
        return path
    return relative


def write_patches(
    edits: dict[str, EditSet],
    fs: FileSystem,
    working_dir: str | None = None,
    suffix: str = ".diff",
) -> list[dict[str, str]]:
    """
    Write one unified diff per edited file and describe them.

    Every patch is computed before anything is written, so a file that
    cannot be read or edited aborts the run with no patch files created.
    If a write fails, every patch file this call touched is put back the
    way it was: restored to its earlier content or removed if it is new.

    Args:
        edits: Edit sets keyed by absolute filename.
        fs: File system to read sources from and write patches to.
        working_dir: Directory reported names are made relative to.
        suffix: Appended to each source path to name its patch file.

    Returns:
        ``{filename, patchFile}`` records, in the order of ``edits``.

    Raises:
        ProtocolError: IOFailure if a patch cannot be computed or written.
    """
    rendered: list[tuple[str, str, str]] = []
    for filename, edit_set in edits.items():
        try:
            patch = create_patch_for_file(edit_set, filename, fs)
        except (OSError, ValueError, EditRangeError, EditConflictError) as e:
            raise ProtocolError.io_failure(f"Unable to create patch for {filename}: {e}")
        rendered.append((filename, filename + suffix, patch.render(filename, filename)))

    # Content of patch files left by an earlier run, None where there was none
    previous: dict[str, str | None] = {}
    for _, patch_file, _ in rendered:
        try:
            previous[patch_file] = fs.read_file(patch_file)
        except FileNotFoundError:
            previous[patch_file] = None
        except (OSError, ValueError) as e:
            raise ProtocolError.io_failure(f"Unable to read existing patch file {patch_file}: {e}")

    attempted: list[str] = []
    try:
        for _, patch_file, diff in rendered:
            attempted.append(patch_file)
            fs.write_file(patch_file, diff)
    except OSError as e:
        _restore(fs, attempted, previous)
        raise ProtocolError.io_failure(f"Unable to write patch file: {e}")

    logger.debug(f"Wrote {len(attempted)} patch file(s)")
    return [
        {
            "filename": display_path(filename, working_dir),
            "patchFile": display_path(patch_file, working_dir),
        }
        for filename, patch_file, _ in rendered
    ]


def _restore(fs: FileSystem, paths: Iterable[str], previous: dict[str, str | None]) -> None:
    """Put each patch file back the way it was before this run."""
    for path in paths:
        try:
            if previous[path] is not None:
                fs.write_file(path, previous[path])
            elif fs.exists(path):
                fs.remove(path)
        except OSError as e:
            logger.warning(f"Could not restore patch file {path}: {e}")


def apply_edits(
    edits: dict[str, EditSet],
    fs: FileSystem,
    working_dir: str | None = None,
) -> list[dict[str, str]]:
    """
    Return the edited content of each file without modifying it.

    Raises:
        ProtocolError: IOFailure if a file cannot be read or edited.
    """
    files = []
    for filename, edit_set in edits.items():
        try:
            content = apply_to_file(edit_set, filename, fs)
        except (OSError, ValueError, EditRangeError, EditConflictError) as e:
            raise ProtocolError.io_failure(f"Unable to apply edits to {filename}: {e}")
        files.append({"filename": display_path(filename, working_dir), "content": content})
    return files


def serialize_fs_changes(changes: Iterable[FSChange]) -> list[dict[str, Any]]:
    """Convert file system changes to wire records, preserving order."""
    return [change.to_dict() for change in changes]


def translate_result(
    result: Result,
    description: str,
    fs: FileSystem,
    mode: str = PATCH_MODE,
    working_dir: str | None = None,
    diff_suffix: str = ".diff",
) -> dict[str, Any]:
    """
    Build the reply fields for a finished xrun.

    Args:
        result: What the transformation produced.
        description: Display name of the transformation.
        fs: Session file system.
        mode: "patch" to write diff files, "text" to return content inline.
        working_dir: Directory reported names are made relative to.
        diff_suffix: Suffix for patch files in patch mode.

    Returns:
        ``description``, ``log`` and ``files``, plus ``fsChanges`` when the
        transformation requested any file system changes.

    Raises:
        ProtocolError: IOFailure if edits cannot be turned into files.
    """
    if mode not in OUTPUT_MODES:
        raise ProtocolError.invalid_enum("mode", OUTPUT_MODES)

    if mode == PATCH_MODE:
        files = write_patches(result.edits, fs, working_dir, diff_suffix)
    else:
        files = apply_edits(result.edits, fs, working_dir)

    fields: dict[str, Any] = {
        "description": description,
        "log": translate_log(result.log),
        "files": files,
    }
    if result.fs_changes:
        fields["fsChanges"] = serialize_fs_changes(result.fs_changes)
    return fields
