import logging
import time

from ..game_logic import GameEngine, format_time, is_low_time
from ..ui.board_widget import BoardWidget

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QLabel, QLineEdit, QFrame, QSizePolicy
)
from PySide6.QtGui import QAction
from PySide6.QtCore import Qt, QTimer, Slot

log = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000
CONTACT_EMAIL = "dengluffy@gmail.com"

TIMER_COLOR = "#fdbb2d"
TIMER_LOW_COLOR = "#e74c3c"


class TicTacToeVIPWindow(QMainWindow):
    """
    main window: renders engine snapshots, forwards intents,
    owns the one second tick timer
    """
    def __init__(self, engine=None, clock=time.monotonic):
        """
        init engine, ui widgets, timer
        """
        super().__init__()
        self.engine = engine if engine is not None else GameEngine()
        self._clock = clock               # monotonic seconds source
        self._last_tick = None
        self.board_widget = BoardWidget(self.engine.state, parent=self)

        self.tick_timer = QTimer(self)
        self.tick_timer.setInterval(TICK_INTERVAL_MS)
        self.tick_timer.timeout.connect(self._on_timer_tick)

        self._setup_ui()
        self._render()

    def _setup_ui(self):
        '''window look + layout'''
        self.setWindowTitle("Tic Tac Toe - VIP Edition")
        self.setStyleSheet("""
            QMainWindow { background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
                stop:0 #1a2a6c, stop:0.5 #b21f1f, stop:1 #fdbb2d); }
            QFrame#card { background-color: #2c3e50; border-radius: 12px; }
            QFrame#vipCard { background-color: white; border: 2px dashed #4a6491;
                border-radius: 12px; }
            QFrame#lockedCard { background-color: #e74c3c; border-radius: 12px; }
            QLabel { color: white; }
            QPushButton { background-color: #2c3e50; color: white; border: none;
                border-radius: 6px; padding: 8px 14px; font-size: 14px; }
            QPushButton:disabled { background-color: #7f8c8d; }
        """)
        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.main_layout = QVBoxLayout(self.central_widget)
        self.main_layout.setSpacing(14)

        self._create_menu_bar()            # top menu
        self._create_header()
        self._create_timer_section()
        self._create_vip_section()

        self.status_label = QLabel("")
        self.status_label.setAlignment(Qt.AlignCenter)
        self.status_label.setStyleSheet("font-size: 20px; font-weight: bold;")
        self.main_layout.addWidget(self.status_label)

        self.main_layout.addWidget(self.board_widget, 1)
        self.board_widget.cell_clicked.connect(self._on_cell_clicked)

        self._create_bottom_controls()     # new game + reset buttons
        self._create_locked_section()

    def _card(self, name="card"):
        frame = QFrame()
        frame.setObjectName(name)
        layout = QVBoxLayout(frame)
        layout.setAlignment(Qt.AlignCenter)
        self.main_layout.addWidget(frame)
        return frame, layout

    def _create_menu_bar(self):
        '''game menu actions'''
        game_menu = self.menuBar().addMenu("Game")
        new_action = QAction("New Game", self)
        new_action.triggered.connect(self.new_game)
        reset_action = QAction("Reset Game", self)
        reset_action.triggered.connect(self.reset_game)
        quit_action = QAction("Quit", self)
        quit_action.triggered.connect(self.close)
        for act in (new_action, reset_action): game_menu.addAction(act)
        game_menu.addSeparator(); game_menu.addAction(quit_action)

    def _create_header(self):
        _, layout = self._card()
        title = QLabel("Tic Tac Toe")
        title.setStyleSheet("font-size: 28px; font-weight: bold;")
        subtitle = QLabel("VIP Edition - Play without limits!")
        subtitle.setStyleSheet("font-size: 16px; color: rgba(255,255,255,0.9);")
        for w in (title, subtitle):
            w.setAlignment(Qt.AlignCenter); layout.addWidget(w)

    def _create_timer_section(self):
        _, layout = self._card()
        caption = QLabel("Game Timer")
        caption.setStyleSheet("font-size: 20px; font-weight: 600;")
        self.timer_label = QLabel("")
        hint = QLabel("Time remaining in your session")
        hint.setStyleSheet("font-size: 14px; color: rgba(255,255,255,0.8);")
        for w in (caption, self.timer_label, hint):
            w.setAlignment(Qt.AlignCenter); layout.addWidget(w)

    def _create_vip_section(self):
        _, layout = self._card("vipCard")
        title = QLabel("VIP Access")
        title.setStyleSheet("color: #2c3e50; font-size: 18px; font-weight: 600;")
        info = QLabel("Enter your VIP code to unlock unlimited play")
        info.setStyleSheet("color: black; font-size: 16px;")
        info.setWordWrap(True)
        for w in (title, info):
            w.setAlignment(Qt.AlignCenter); layout.addWidget(w)
        # code input + button
        row = QHBoxLayout()
        self.vip_code_input = QLineEdit()
        self.vip_code_input.setPlaceholderText("Enter VIP code")
        self.vip_code_input.setStyleSheet("color: black; border: 1px solid #4a6491; padding: 6px;")
        self.vip_code_input.returnPressed.connect(self.activate_vip)
        self.activate_vip_button = QPushButton("Activate VIP")
        self.activate_vip_button.clicked.connect(self.activate_vip)
        row.addWidget(self.vip_code_input, 1); row.addWidget(self.activate_vip_button)
        layout.addLayout(row)
        self.vip_status_label = QLabel("")
        self.vip_status_label.setAlignment(Qt.AlignCenter)
        self.vip_status_label.setStyleSheet(
            "color: #2c3e50; background-color: #fdbb2d; font-size: 14px;"
            " font-weight: 600; border-radius: 14px; padding: 8px 16px;")
        layout.addWidget(self.vip_status_label)

    def _create_bottom_controls(self):
        # new game + reset buttons
        self.controls_bottom_widget = QWidget()
        hl = QHBoxLayout(self.controls_bottom_widget)
        self.new_game_button = QPushButton("New Game"); self.new_game_button.clicked.connect(self.new_game)
        self.reset_button = QPushButton("Reset Game"); self.reset_button.clicked.connect(self.reset_game)
        for w in (self.new_game_button, self.reset_button):
            w.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
            hl.addWidget(w)
        self.main_layout.addWidget(self.controls_bottom_widget)

    def _create_locked_section(self):
        self.locked_frame, layout = self._card("lockedCard")
        title = QLabel("Game Locked!")
        title.setStyleSheet("font-size: 18px; font-weight: bold;")
        body = QLabel("Your free session has ended. Please enter a VIP code to continue playing.")
        body.setWordWrap(True)
        body.setStyleSheet("font-size: 16px;")
        contact = QLabel("For VIP purchases and any questions, email us at:")
        contact.setStyleSheet("font-size: 14px; color: rgba(255,255,255,0.8);")
        email = QLabel(CONTACT_EMAIL)
        email.setStyleSheet("font-size: 14px; font-weight: bold;")
        email.setTextInteractionFlags(Qt.TextSelectableByMouse)
        for w in (title, body, contact, email):
            w.setAlignment(Qt.AlignCenter); layout.addWidget(w)

    def _render(self):
        """
        push the engine's current snapshot into every widget
        """
        state = self.engine.state
        self.board_widget.set_state(state)
        self.status_label.setText(state.status)
        color = TIMER_LOW_COLOR if is_low_time(state) else TIMER_COLOR
        self.timer_label.setStyleSheet(
            f"font-size: 40px; font-weight: bold; font-family: monospace; color: {color};")
        self.timer_label.setText(format_time(state.time_left))
        self.vip_status_label.setText(state.vip_status)
        self.vip_status_label.setVisible(bool(state.vip_status))
        self.locked_frame.setVisible(state.locked)
        # locked sessions only accept a vip code
        self.new_game_button.setEnabled(not state.locked)
        self.reset_button.setEnabled(not state.locked)

    @Slot(int)
    def _on_cell_clicked(self, index):
        self.engine.make_move(index)
        self._render()

    @Slot()
    def new_game(self):
        self.engine.new_game()
        self._render()

    @Slot()
    def reset_game(self):
        self.engine.reset_game()
        self._render()

    @Slot()
    def activate_vip(self):
        # field is cleared whether or not the code was taken
        code = self.vip_code_input.text()
        self.vip_code_input.clear()
        self.engine.activate_vip(code)
        self._render()

    def start_timer(self):
        if self.tick_timer.isActive():
            return
        self._last_tick = self._clock()
        self.tick_timer.start()
        log.debug("tick timer started")

    def stop_timer(self):
        self.tick_timer.stop()
        self._last_tick = None
        log.debug("tick timer stopped")

    @Slot()
    def _on_timer_tick(self):
        """
        one tick per whole elapsed second, so a stalled loop catches up
        """
        now = self._clock()
        if self._last_tick is None:
            self._last_tick = now
        elapsed = int(now - self._last_tick)
        if elapsed <= 0:
            return
        self._last_tick += elapsed
        self.engine.advance(elapsed)
        self._render()

    def showEvent(self, event):
        # timer lives while the window is on screen
        super().showEvent(event)
        self.start_timer()

    def closeEvent(self, event):
        # ensure cleanup on close
        self.stop_timer()
        event.accept()
