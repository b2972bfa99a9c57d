"""Tests for the session state machine."""

from dataclasses import replace

import pytest

from surgeon.filesystem.local import LocalFileSystem
from surgeon.protocol.state import (
    InvalidStageTransition,
    SessionStage,
    SessionState,
)


class TestSessionStage:
    """Tests for stage ordering."""

    def test_stages_are_ordered(self):
        assert SessionStage.FRESH < SessionStage.OPENED < SessionStage.CONFIGURED

    def test_integer_values(self):
        assert [int(s) for s in SessionStage] == [0, 1, 2]

    def test_str_is_name(self):
        assert str(SessionStage.OPENED) == "OPENED"


class TestSessionState:
    """Tests for SessionState transitions."""

    def test_fresh_by_default(self):
        state = SessionState()
        assert state.stage == SessionStage.FRESH
        assert state.mode is None
        assert state.working_dir is None
        assert state.filesystem is None

    def test_advance(self):
        state = SessionState()
        state.advance(SessionStage.OPENED)
        assert state.stage == SessionStage.OPENED
        assert state.can_advance_to(SessionStage.CONFIGURED)
        assert not state.can_advance_to(SessionStage.FRESH)

    def test_advance_to_same_stage_is_noop(self):
        state = SessionState(stage=SessionStage.CONFIGURED)
        state.advance(SessionStage.CONFIGURED)
        assert state.stage == SessionStage.CONFIGURED

    def test_cannot_move_backwards(self):
        state = SessionState(stage=SessionStage.CONFIGURED)
        with pytest.raises(InvalidStageTransition, match="CONFIGURED -> OPENED"):
            state.advance(SessionStage.OPENED)
        assert state.stage == SessionStage.CONFIGURED

    def test_configure_binds_fields(self, tmp_path):
        state = SessionState(stage=SessionStage.OPENED)
        fs = LocalFileSystem()
        state.configure("local", str(tmp_path), fs)
        assert state.stage == SessionStage.CONFIGURED
        assert state.mode == "local"
        assert state.working_dir == str(tmp_path)
        assert state.filesystem is fs

    def test_equality_compares_fields(self):
        state = SessionState(stage=SessionStage.OPENED)
        before = replace(state)
        assert before == state
        state.advance(SessionStage.CONFIGURED)
        assert before != state
