"""Transformation interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from surgeon.refactoring.types import Config, Description, Result


class Transformation(ABC):
    """
    A named source rewrite.

    Implementations must not raise for problems with the user's code or
    selection; those are reported as ERROR entries in ``Result.log`` so the
    client can show them next to any warnings.
    """

    @abstractmethod
    def description(self) -> Description:
        """Return static metadata: display name, parameters, quality."""

    @abstractmethod
    def run(self, config: Config) -> Result:
        """
        Compute edits for the given selection and arguments.

        Args:
            config: File system, scope, selection and user arguments.

        Returns:
            The log, per-file edits and file system changes.
        """
