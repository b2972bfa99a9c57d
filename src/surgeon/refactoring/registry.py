"""Registry of transformations available to sessions."""

from __future__ import annotations

import logging

from surgeon.refactoring.base import Transformation

logger = logging.getLogger(__name__)


class TransformationRegistry:
    """
    Maps short names (``rename``, ``null``) to transformations.

    Registration order is irrelevant; listings are sorted by short name.
    """

    def __init__(self) -> None:
        self._transformations: dict[str, Transformation] = {}

    def register(self, short_name: str, transformation: Transformation) -> None:
        """
        Register a transformation.

        Args:
            short_name: Name clients pass as ``transformation``.
            transformation: The implementation.

        Raises:
            ValueError: If the short name is already taken.
        """
        if short_name in self._transformations:
            raise ValueError(f"Transformation already registered: {short_name}")
        self._transformations[short_name] = transformation
        logger.debug(f"Registered transformation {short_name!r}")

    def unregister(self, short_name: str) -> bool:
        """Remove a transformation. Returns True if it was registered."""
        return self._transformations.pop(short_name, None) is not None

    def lookup(self, short_name: str) -> Transformation | None:
        """Return the named transformation, or None if it is not registered."""
        return self._transformations.get(short_name)

    def all_registered(self) -> dict[str, Transformation]:
        """Return a copy of the registry, ordered by short name."""
        return dict(sorted(self._transformations.items()))

    def __contains__(self, short_name: object) -> bool:
        return short_name in self._transformations

    def __len__(self) -> int:
        return len(self._transformations)


_default_registry: TransformationRegistry | None = None


def default_registry() -> TransformationRegistry:
    """Return the process-wide registry, populated with the built-ins."""
    global _default_registry
    if _default_registry is None:
        from surgeon.refactoring.builtins import register_builtins

        _default_registry = TransformationRegistry()
        register_builtins(_default_registry)
    return _default_registry
