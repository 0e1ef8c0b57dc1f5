import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt
from PySide6.QtGui import QPalette, QColor
from .ui.main_window import TicTacToeVIPWindow

# -----------------------------------------------------------------------------
# COLOR CONSTANTS
# -----------------------------------------------------------------------------

WINDOW_COLOR = QColor(26, 42, 108)
WINDOW_TEXT_COLOR = Qt.white
BASE_COLOR = Qt.white
TEXT_COLOR = Qt.black
BUTTON_COLOR = QColor(44, 62, 80)
BUTTON_TEXT_COLOR = Qt.white
HIGHLIGHT_COLOR = QColor(74, 100, 145)
HIGHLIGHTED_TEXT_COLOR = Qt.white
PLACEHOLDER_TEXT_COLOR = QColor(127, 140, 141)

DISABLED_BUTTON_TEXT_COLOR = QColor(189, 195, 199)

# -----------------------------------------------------------------------------
# LOGGING
# -----------------------------------------------------------------------------

LOG_DIR = os.path.join("data", "logs")          # relative to the working directory
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def init_logging(level=logging.INFO):
    """
    rotating file log plus console output for the whole package
    """
    os.makedirs(LOG_DIR, exist_ok=True)
    logger = logging.getLogger("tictactoe_vip")
    logger.setLevel(level)
    # fresh handlers on each launch
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    fmt = logging.Formatter(LOG_FORMAT)
    file_handler = RotatingFileHandler(os.path.join(LOG_DIR, "app.log"), maxBytes=200_000,
                                       backupCount=3, encoding="utf-8", delay=True)
    console = logging.StreamHandler()
    for handler in (file_handler, console):
        handler.setFormatter(fmt)
        logger.addHandler(handler)
    logger.propagate = False
    return logger


def install_excepthook(logger):
    # log uncaught errors from qt slots before the default hook prints them
    default_hook = sys.excepthook

    def hook(exc_type, exc_value, exc_traceback):
        logger.exception("Unhandled exception", exc_info=(exc_type, exc_value, exc_traceback))
        default_hook(exc_type, exc_value, exc_traceback)

    sys.excepthook = hook

# -----------------------------------------------------------------------------
# PALETTE SETUP
# -----------------------------------------------------------------------------

def apply_default_palette(app: QApplication):
    """
    Apply the VIP edition palette using predefined constants.
    """
    palette = QPalette()
    palette.setColor(QPalette.Window, WINDOW_COLOR)
    palette.setColor(QPalette.WindowText, WINDOW_TEXT_COLOR)
    palette.setColor(QPalette.Base, BASE_COLOR)
    palette.setColor(QPalette.Text, TEXT_COLOR)
    palette.setColor(QPalette.Button, BUTTON_COLOR)
    palette.setColor(QPalette.ButtonText, BUTTON_TEXT_COLOR)
    palette.setColor(QPalette.Highlight, HIGHLIGHT_COLOR)
    palette.setColor(QPalette.HighlightedText, HIGHLIGHTED_TEXT_COLOR)
    # Placeholder text in the vip code field
    palette.setColor(QPalette.PlaceholderText, PLACEHOLDER_TEXT_COLOR)
    palette.setColor(QPalette.Disabled, QPalette.ButtonText, DISABLED_BUTTON_TEXT_COLOR)
    app.setPalette(palette)

# -----------------------------------------------------------------------------
# ENTRY POINT
# -----------------------------------------------------------------------------

def main():
    logger = init_logging()
    install_excepthook(logger)

    app = QApplication(sys.argv)
    app.setStyle('Fusion')
    apply_default_palette(app)

    window = TicTacToeVIPWindow()
    window.resize(480, 900)
    window.show()
    logger.info("session started")
    return app.exec()


if __name__ == '__main__':
    sys.exit(main())
