import os

import pytest

# no display needed for widget tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication

from tictactoe_vip.game_logic import GameState


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def fresh_state() -> GameState:
    return GameState()
