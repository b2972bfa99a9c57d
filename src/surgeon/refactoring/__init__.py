"""
Transformation interface and registry.

A transformation receives a Config (file system, scope, selection and
arguments) and returns a Result holding its log, per-file edit sets and
file system changes. The protocol layer only ever talks to transformations
through this contract.
"""

from surgeon.refactoring.types import (
    Config,
    Description,
    Log,
    LogEntry,
    Parameter,
    Quality,
    Result,
    Selection,
    Severity,
)
from surgeon.refactoring.base import Transformation
from surgeon.refactoring.registry import TransformationRegistry, default_registry

__all__ = [
    "Config",
    "Description",
    "Log",
    "LogEntry",
    "Parameter",
    "Quality",
    "Result",
    "Selection",
    "Severity",
    "Transformation",
    "TransformationRegistry",
    "default_registry",
]
