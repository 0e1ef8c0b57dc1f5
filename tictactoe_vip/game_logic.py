import logging
from dataclasses import dataclass, field, replace

from .exceptions import InvalidCellIndex

log = logging.getLogger(__name__)

BOARD_SIZE = 3                       # fixed 3x3 grid
BOARD_CELLS = BOARD_SIZE * BOARD_SIZE
EMPTY = ''
DEFAULT_TIME = 300                   # free session, 5 min
VIP_TIME = 3600                      # vip session, 60 min
LOW_TIME_WARNING = 60                # timer turns red at or below this

VIP_STATUS_ACTIVE = "VIP Status: ACTIVE (60 minutes)"
LOCKED_STATUS = "Game locked. Enter VIP code to continue."
TIE_STATUS = "It's a tie!"

# rows, cols, diags over row-major indices
WINNING_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


def _empty_board():
    return (EMPTY,) * BOARD_CELLS


def other_player(player):
    return 'O' if player == 'X' else 'X'


def turn_status(player):
    return f"Player {player}'s turn"


@dataclass(frozen=True)
class GameState:
    """
    immutable snapshot of one session
    every transition returns a new GameState
    """
    board: tuple = field(default_factory=_empty_board)
    current_player: str = 'X'
    active: bool = True
    is_vip: bool = False
    time_left: int = DEFAULT_TIME
    status: str = turn_status('X')
    locked: bool = False
    vip_status: str = ""


def winning_line(board):
    """
    first triple holding three equal marks, or None
    """
    for a, b, c in WINNING_LINES:
        if board[a] != EMPTY and board[a] == board[b] == board[c]:
            return (a, b, c)
    return None


def is_board_full(board):
    return all(cell != EMPTY for cell in board)


def format_time(seconds):
    """
    seconds -> 'MM:SS', zero padded
    """
    minutes, secs = divmod(max(seconds, 0), 60)
    return f"{minutes:02d}:{secs:02d}"


def is_low_time(state):
    return state.time_left <= LOW_TIME_WARNING


def tick(state):
    """
    one elapsed second: count down, lock free sessions at zero
    """
    if state.time_left <= 0:
        return state                 # floor, never negative
    state = replace(state, time_left=state.time_left - 1)
    # expiry locks a free session even after a win or tie;
    # the lock text replaces the result
    if state.time_left == 0 and not state.is_vip:
        state = replace(state, active=False, locked=True, status=LOCKED_STATUS)
    return state


def make_move(state, cell_index):
    """
    place current player's mark, then check win, tie, or pass the turn
    returns the input state untouched when the move is rejected
    """
    if not 0 <= cell_index < BOARD_CELLS:
        raise InvalidCellIndex(cell_index)
    if not state.active or state.board[cell_index] != EMPTY:
        return state
    if not state.is_vip and state.time_left <= 0:
        return state

    board = list(state.board)
    board[cell_index] = state.current_player
    board = tuple(board)

    if winning_line(board) is not None:
        # status names the player who just moved
        return replace(state, board=board, active=False,
                       status=f"Player {state.current_player} wins!")
    if is_board_full(board):
        return replace(state, board=board, active=False, status=TIE_STATUS)

    nxt = other_player(state.current_player)
    return replace(state, board=board, current_player=nxt, status=turn_status(nxt))


def new_game(state):
    """
    clear board, X to move; timer and vip untouched
    """
    if state.locked:
        return state
    return replace(state, board=_empty_board(), active=True,
                   current_player='X', status=turn_status('X'))


def reset_game(state):
    """
    like new_game, but a free session also gets its timer refilled
    vip sessions keep whatever time they have left
    """
    if state.locked:
        return state
    state = new_game(state)
    if not state.is_vip:
        state = replace(state, time_left=DEFAULT_TIME)
    return state


def activate_vip(state, code):
    """
    any non-blank code unlocks; no backend check is done
    the board is kept as is, even a finished one
    """
    if not code or not code.strip():
        return state
    return replace(
        state,
        is_vip=True,
        time_left=VIP_TIME,
        vip_status=VIP_STATUS_ACTIVE,
        locked=False,
        active=True,
        status=f"VIP Activated! Player {state.current_player}'s turn",
    )


class GameEngine:
    """
    holds the current snapshot and runs every intent through the
    transition functions above; callers must use it from one thread
    """
    def __init__(self, state=None):
        self.state = state if state is not None else GameState()

    def _apply(self, name, new_state):
        # log accepted vs rejected intents
        if new_state is self.state:
            log.debug("%s rejected (%s)", name, self.state.status)
        else:
            log.debug("%s -> %s", name, new_state.status)
        self.state = new_state
        return self.state

    def tick(self):
        was_locked = self.state.locked
        self.state = tick(self.state)
        if self.state.locked and not was_locked:
            log.info("free session expired, game locked")
        return self.state

    def advance(self, seconds):
        """
        apply one tick per elapsed second (catch up after a stall)
        """
        for _ in range(max(int(seconds), 0)):
            if self.state.time_left <= 0:
                break
            self.tick()
        return self.state

    def make_move(self, cell_index):
        return self._apply(f"move {cell_index}", make_move(self.state, cell_index))

    def new_game(self):
        return self._apply("new game", new_game(self.state))

    def reset_game(self):
        return self._apply("reset game", reset_game(self.state))

    def activate_vip(self, code):
        new_state = activate_vip(self.state, code)
        if new_state is not self.state:
            log.info("vip activated")
        return self._apply("activate vip", new_state)
