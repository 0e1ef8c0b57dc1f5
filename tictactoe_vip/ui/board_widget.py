from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import Qt, QSize, Signal, QPointF, QRectF
from PySide6.QtGui import QPainter, QColor, QPen, QFont

from ..game_logic import BOARD_SIZE, GameState, winning_line

X_COLOR = QColor("#e74c3c")
O_COLOR = QColor("#3498db")
CELL_COLOR = QColor(255, 255, 255, 230)
BOARD_COLOR = QColor(255, 255, 255, 26)
LINE_COLOR = QColor("#fdbb2d")


class BoardWidget(QWidget):
    """
    draws the latest snapshot and turns clicks into cell indices
    """
    cell_clicked = Signal(int)  # emits flat index 0-8

    def __init__(self, state=None, parent=None):
        super().__init__(parent)
        self.state = state if state is not None else GameState()
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setMinimumSize(QSize(240, 240))

    def set_state(self, state):
        # swap in new snapshot and repaint
        self.state = state
        self.update()

    def heightForWidth(self, width):
        # keep square shape
        return width

    def hasHeightForWidth(self):
        return True

    def _geometry(self):
        w, h = self.width(), self.height()
        side = min(w, h)
        return (w-side)/2, (h-side)/2, side

    def cell_rect(self, index):
        ox, oy, side = self._geometry()
        cell = side / BOARD_SIZE
        gap = cell * 0.06
        row, col = divmod(index, BOARD_SIZE)
        return QRectF(ox + col*cell + gap, oy + row*cell + gap,
                      cell - 2*gap, cell - 2*gap)

    def paintEvent(self, event):
        """
        draw cells, X/O marks, and the winning line
        """
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        ox, oy, side = self._geometry()
        painter.fillRect(QRectF(ox, oy, side, side), BOARD_COLOR)
        font = QFont("Arial", max(int(side / BOARD_SIZE * 0.4), 1), QFont.Bold)
        painter.setFont(font)
        for index, sym in enumerate(self.state.board):
            rect = self.cell_rect(index)
            painter.setPen(Qt.NoPen)
            painter.setBrush(CELL_COLOR)
            painter.drawRoundedRect(rect, 8, 8)
            if not sym:
                continue
            painter.setPen(QPen(X_COLOR if sym == 'X' else O_COLOR, 4))
            painter.drawText(rect, Qt.AlignCenter, sym)
        # strike through the winning triple
        line = winning_line(self.state.board)
        if line is not None:
            first, last = self.cell_rect(line[0]), self.cell_rect(line[-1])
            painter.setPen(QPen(LINE_COLOR, 8, Qt.SolidLine, Qt.RoundCap))
            painter.drawLine(QPointF(first.center()), QPointF(last.center()))
        painter.end()

    def index_at(self, x, y):
        """
        map widget coords to a cell index, None outside the grid
        """
        ox, oy, side = self._geometry()
        if side <= 0 or not (ox <= x < ox+side and oy <= y < oy+side):
            return None
        cell = side / BOARD_SIZE
        col = int((x-ox)//cell); row = int((y-oy)//cell)
        # clamp to valid range
        row = max(0, min(row, BOARD_SIZE-1)); col = max(0, min(col, BOARD_SIZE-1))
        return row*BOARD_SIZE + col

    def mouseReleaseEvent(self, event):
        """
        handle clicks: emit index if the game takes moves
        """
        if not self.state.active:
            return
        index = self.index_at(event.position().x(), event.position().y())
        if index is not None:
            self.cell_clicked.emit(index)  # notify main window
