"""Text edits and unified diff patches."""

from surgeon.text.edits import Edit, EditSet, EditConflictError, EditRangeError
from surgeon.text.patch import (
    Patch,
    create_patch,
    create_patch_for_file,
    apply_to_file,
)

__all__ = [
    "Edit",
    "EditSet",
    "EditConflictError",
    "EditRangeError",
    "Patch",
    "create_patch",
    "create_patch_for_file",
    "apply_to_file",
]
