"""
Tests for the undo/redo HistoryLog.
"""

from PF_Libs.AdjustLib.history import HistoryLog


class TestHistoryLog:
    def test_initial_state(self):
        log = HistoryLog("s0")

        assert len(log) == 1
        assert log.cursor == 0
        assert log.current == "s0"
        assert not log.can_undo
        assert not log.can_redo

    def test_commit_moves_cursor(self):
        log = HistoryLog("s0")
        log.commit("s1")
        log.commit("s2")

        assert len(log) == 3
        assert log.cursor == 2
        assert log.current == "s2"
        assert log.can_undo
        assert not log.can_redo

    def test_undo_and_redo(self):
        log = HistoryLog("s0")
        log.commit("s1")

        assert log.undo() == "s0"
        assert log.cursor == 0
        assert log.can_redo
        assert log.redo() == "s1"
        assert log.cursor == 1

    def test_undo_at_start_is_noop(self):
        log = HistoryLog("s0")

        assert log.undo() is None
        assert log.cursor == 0
        assert len(log) == 1

    def test_redo_at_end_is_noop(self):
        log = HistoryLog("s0")
        log.commit("s1")

        assert log.redo() is None
        assert log.cursor == 1
        assert len(log) == 2

    def test_commit_after_undo_discards_redo_branch(self):
        log = HistoryLog("s0")
        log.commit("s1")
        log.commit("s2")
        log.undo()
        log.undo()

        log.commit("s3")

        assert log.entries == ["s0", "s3"]
        assert log.cursor == 1
        assert not log.can_redo

    def test_entries_is_a_copy(self):
        log = HistoryLog("s0")
        entries = log.entries
        entries.append("x")

        assert len(log) == 1

    def test_reinitialize(self):
        log = HistoryLog("s0")
        log.commit("s1")
        log.undo()

        log.reinitialize("fresh")

        assert log.entries == ["fresh"]
        assert log.cursor == 0
        assert not log.can_undo
        assert not log.can_redo
