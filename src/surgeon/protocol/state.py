"""Session state machine for the command protocol."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from surgeon.filesystem.base import FileSystem

logger = logging.getLogger(__name__)


class SessionStage(IntEnum):
    """
    Session lifecycle stages.

    Stage transitions:
        FRESH -> OPENED -> CONFIGURED

    Stages only ever advance. There is no terminal stage; a session lives
    until its connection ends.
    """

    FRESH = 0
    OPENED = 1
    CONFIGURED = 2

    def __str__(self) -> str:
        return self.name


class InvalidStageTransition(Exception):
    """Raised when a transition would move a session to an earlier stage."""

    def __init__(self, from_stage: SessionStage, to_stage: SessionStage):
        self.from_stage = from_stage
        self.to_stage = to_stage
        super().__init__(
            f"Invalid stage transition: {from_stage.name} -> {to_stage.name}"
        )


# Modes accepted by setdir
LOCAL_MODE = "local"
WEB_MODE = "web"


@dataclass
class SessionState:
    """
    Mutable per-session record.

    Only the ``open`` and ``setdir`` commands change it.
    """

    stage: SessionStage = SessionStage.FRESH
    """Current lifecycle stage."""

    mode: str | None = None
    """Either "local" or "web" once setdir succeeds."""

    working_dir: str | None = None
    """Directory that selection filenames are resolved against."""

    filesystem: "FileSystem | None" = None
    """Backend bound by setdir."""

    def can_advance_to(self, stage: SessionStage) -> bool:
        """Check if moving to ``stage`` keeps the stage monotonic."""
        return stage >= self.stage

    def advance(self, stage: SessionStage) -> None:
        """
        Move to ``stage``.

        Advancing to the current stage is a no-op.

        Args:
            stage: The target stage.

        Raises:
            InvalidStageTransition: If ``stage`` is earlier than the current one.
        """
        if not self.can_advance_to(stage):
            raise InvalidStageTransition(self.stage, stage)
        if stage == self.stage:
            return

        old_stage = self.stage
        self.stage = stage
        logger.debug(f"Session stage {old_stage} -> {stage}")

    def configure(self, mode: str, working_dir: str | None, filesystem: "FileSystem | None") -> None:
        """Bind mode, directory and file system, then advance to CONFIGURED."""
        if not self.can_advance_to(SessionStage.CONFIGURED):
            raise InvalidStageTransition(self.stage, SessionStage.CONFIGURED)
        self.mode = mode
        self.working_dir = working_dir
        self.filesystem = filesystem
        self.advance(SessionStage.CONFIGURED)

    def __str__(self) -> str:
        return f"SessionState({self.stage.name}, mode={self.mode}, dir={self.working_dir})"
