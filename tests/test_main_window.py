import pytest
from PySide6.QtCore import QEvent, QPointF, Qt
from PySide6.QtGui import QMouseEvent
from PySide6.QtWidgets import QApplication

from tictactoe_vip.game_logic import DEFAULT_TIME, LOCKED_STATUS, GameEngine, GameState
from tictactoe_vip.ui.board_widget import BoardWidget
from tictactoe_vip.ui.main_window import TIMER_COLOR, TIMER_LOW_COLOR, TicTacToeVIPWindow


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def window(qapp, clock):
    win = TicTacToeVIPWindow(clock=clock)
    yield win
    win.stop_timer()
    win.deleteLater()


def test_initial_render(window):
    assert window.timer_label.text() == "05:00"
    assert window.status_label.text() == "Player X's turn"
    assert window.vip_status_label.isHidden()
    assert window.locked_frame.isHidden()
    assert TIMER_COLOR in window.timer_label.styleSheet()


def test_cell_click_places_mark(window):
    window.board_widget.cell_clicked.emit(4)
    assert window.engine.state.board[4] == "X"
    assert window.board_widget.state is window.engine.state
    assert window.status_label.text() == "Player O's turn"


def test_timer_tick_uses_elapsed_seconds(window, clock):
    window.start_timer()
    assert window.tick_timer.isActive()
    clock.now += 0.5
    window._on_timer_tick()
    assert window.engine.state.time_left == DEFAULT_TIME
    clock.now += 0.6
    window._on_timer_tick()
    assert window.engine.state.time_left == DEFAULT_TIME - 1
    clock.now += 3
    window._on_timer_tick()
    assert window.engine.state.time_left == DEFAULT_TIME - 4
    assert window.timer_label.text() == "04:56"


def test_stop_timer(window):
    window.start_timer()
    window.stop_timer()
    assert not window.tick_timer.isActive()


def test_locked_banner_and_vip_unlock(qapp, clock):
    win = TicTacToeVIPWindow(GameEngine(GameState(time_left=2)), clock=clock)
    win.start_timer()
    clock.now += 2
    win._on_timer_tick()
    assert win.engine.state.locked
    assert not win.locked_frame.isHidden()
    assert win.status_label.text() == LOCKED_STATUS
    assert not win.new_game_button.isEnabled()
    assert not win.reset_button.isEnabled()
    assert TIMER_LOW_COLOR in win.timer_label.styleSheet()

    win.vip_code_input.setText("ABC123")
    win.activate_vip_button.click()
    assert win.vip_code_input.text() == ""
    assert win.engine.state.is_vip
    assert win.locked_frame.isHidden()
    assert not win.vip_status_label.isHidden()
    assert win.vip_status_label.text() == "VIP Status: ACTIVE (60 minutes)"
    assert win.timer_label.text() == "60:00"
    assert win.new_game_button.isEnabled()
    win.stop_timer()


def test_blank_vip_code_changes_nothing(window):
    before = window.engine.state
    window.vip_code_input.setText("  ")
    window.activate_vip()
    assert window.engine.state is before
    assert window.vip_code_input.text() == ""


def test_new_game_and_reset_buttons(window):
    window.board_widget.cell_clicked.emit(0)
    window.new_game_button.click()
    assert window.engine.state.board == ("",) * 9
    window.board_widget.cell_clicked.emit(0)
    window.reset_button.click()
    assert window.engine.state.board == ("",) * 9
    assert window.engine.state.time_left == DEFAULT_TIME


def test_board_index_mapping(window):
    window.board_widget.resize(300, 300)
    assert window.board_widget.index_at(10, 10) == 0
    assert window.board_widget.index_at(150, 150) == 4
    assert window.board_widget.index_at(290, 290) == 8
    assert window.board_widget.index_at(-5, 10) is None


def test_show_starts_and_close_stops_timer(window):
    assert not window.tick_timer.isActive()
    window.show()
    assert window.tick_timer.isActive()
    window.close()
    assert not window.tick_timer.isActive()


def release_at(widget, x, y):
    event = QMouseEvent(QEvent.MouseButtonRelease, QPointF(x, y), QPointF(x, y),
                        Qt.LeftButton, Qt.NoButton, Qt.NoModifier)
    QApplication.sendEvent(widget, event)


@pytest.fixture
def board(qapp):
    widget = BoardWidget()
    widget.resize(300, 300)
    yield widget
    widget.deleteLater()


def test_board_click_emits_index(board):
    emitted = []
    board.cell_clicked.connect(emitted.append)
    release_at(board, 150, 150)
    assert emitted == [4]


def test_inactive_board_ignores_clicks(board):
    board.set_state(GameState(active=False))
    emitted = []
    board.cell_clicked.connect(emitted.append)
    release_at(board, 150, 150)
    assert emitted == []
