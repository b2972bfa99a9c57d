"""
File system abstraction.

Sessions bind one backend when the working directory is configured;
transformations read sources through it and the result translator writes
patch files through it.
"""

from surgeon.filesystem.base import FileSystem
from surgeon.filesystem.local import LocalFileSystem
from surgeon.filesystem.changes import CreateFile, Remove, Rename, FSChange

__all__ = [
    "FileSystem",
    "LocalFileSystem",
    "CreateFile",
    "Remove",
    "Rename",
    "FSChange",
]
