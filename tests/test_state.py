import pytest

from ytmenu.state import AppState, MenuState


def loaded_state(count, per_page=10):
    state = AppState(per_page=per_page)
    state.load_results("query", [f"t{i}" for i in range(count)], [f"u{i}" for i in range(count)])
    return state


class TestCursor:
    """Tests for cursor movement within a page."""

    def test_down_wraps_to_top(self):
        """Test moving down from the last row wraps to row 0."""
        state = loaded_state(25)
        state.menu = MenuState(page=1, cursor_row=9)

        state.move_cursor(1)

        assert state.menu == MenuState(page=1, cursor_row=0)

    def test_up_wraps_to_bottom(self):
        """Test moving up from row 0 wraps to the last row."""
        state = loaded_state(25)

        state.move_cursor(-1)

        assert state.menu == MenuState(page=0, cursor_row=9)

    def test_plain_move(self):
        state = loaded_state(25)

        state.move_cursor(1)
        state.move_cursor(1)

        assert state.menu.cursor_row == 2


class TestPaging:
    """Tests for clamped paging."""

    def test_page_up_at_first_page(self):
        state = loaded_state(25)

        assert state.change_page(-1) is False
        assert state.menu.page == 0

    def test_page_down_at_last_page(self):
        state = loaded_state(25)
        state.menu.page = 2

        assert state.change_page(1) is False
        assert state.menu.page == 2

    def test_page_down_keeps_cursor(self):
        state = loaded_state(25)
        state.menu.cursor_row = 4

        assert state.change_page(1) is True
        assert state.menu == MenuState(page=1, cursor_row=4)

    @pytest.mark.parametrize("count,pages", [(0, 1), (1, 1), (10, 1), (11, 2), (60, 6)])
    def test_max_pages(self, count, pages):
        assert loaded_state(count).max_pages == pages


class TestSelection:
    """Tests for resolving the selected result."""

    def test_selected_index(self):
        state = loaded_state(25)
        state.menu = MenuState(page=1, cursor_row=3)

        assert state.selected_index() == 13
        assert state.selected_url() == "u13"

    def test_selection_past_end_is_none(self):
        """Test a cursor on an empty row of the last page selects nothing."""
        state = loaded_state(25)
        state.menu = MenuState(page=2, cursor_row=7)

        assert state.selected_index() is None
        assert state.selected_url() is None

    def test_no_results(self):
        assert AppState().selected_url() is None

    def test_visible_range(self):
        state = loaded_state(25)
        state.menu.page = 2

        assert state.visible_range() == range(20, 25)


class TestResults:
    """Tests for replacing and restoring results."""

    def test_load_resets_position(self):
        state = loaded_state(25)
        state.menu = MenuState(page=2, cursor_row=4)

        state.load_results("new", ["a"], ["b"])

        assert state.menu == MenuState()
        assert state.query == "new"

    def test_load_rejects_mismatched_lengths(self):
        with pytest.raises(ValueError):
            AppState().load_results("q", ["a", "b"], ["u"])

    def test_snapshot_restore(self):
        state = loaded_state(25)
        state.menu = MenuState(page=1, cursor_row=6)
        snap = state.snapshot()

        state.load_results("other", ["x"], ["y"])
        state.restore(snap)

        assert state.query == "query"
        assert state.titles == [f"t{i}" for i in range(25)]
        assert state.urls == [f"u{i}" for i in range(25)]
        assert state.menu == MenuState(page=1, cursor_row=6)

    def test_snapshot_independent_of_later_moves(self):
        state = loaded_state(25)
        snap = state.snapshot()

        state.move_cursor(1)

        assert snap.menu == MenuState()
