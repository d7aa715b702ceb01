
"""Game engine: state machine, gravity, lock, scoring.

The engine owns the board, the active and upcoming pieces and the randomizer
for one session. Everything it talks to on the outside (keyboard, screen,
speakers, rumble, overlay text) is handed in at construction:

  • input      – anything with ``just_pressed(name) -> bool``
  • renderer   – anything with ``draw(engine)``; called once at the end of a tick
  • listeners  – ``Listener`` subclasses notified of gameplay events

so the whole thing can be built and driven without a window.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Set

from tetris_board import Board, Color
from tetris_config import CONFIG
from tetris_piece import Piece, COLS
from tetris_rng import BagRandom

log = logging.getLogger(__name__)

COMMANDS = ("left", "right", "down", "rotate", "space", "pause", "mute")

SCORE_TABLE = {1: 100, 2: 300, 3: 500, 4: 800}   # multiplied by level
SOFT_DROP_PER_CELL = 1
HARD_DROP_PER_CELL = 2


class Mode(Enum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameover"


def gravity_interval(level: int) -> int:
    """Milliseconds between gravity steps at ``level`` (1-based)."""
    base, step = CONFIG["GRAVITY_BASE_MS"], CONFIG["GRAVITY_STEP_MS"]
    return max(CONFIG["GRAVITY_MIN_MS"], base - (level - 1) * step)


@dataclass
class ClearHold:
    """Rows just removed, kept around for the flash animation."""
    rows: List[int]
    snapshot: List[List[Color]]
    elapsed: float = 0.0


class Listener:
    """No-op base for audio, haptics and UI collaborators."""
    def on_move(self): pass
    def on_rotate(self): pass
    def on_soft_drop(self): pass
    def on_hard_drop(self): pass
    def on_line_clear(self, count: int): pass
    def on_level_up(self, level: int): pass
    def on_game_over(self, score: int): pass
    def on_mode_change(self, mode: Mode, engine: "Engine"): pass
    def on_mute(self, muted: bool): pass


class NullInput:
    def just_pressed(self, name: str) -> bool:
        return False


class Engine:
    def __init__(self, input=None, renderer=None, listeners: Iterable[Listener] = (),
                 seed: Optional[int] = None):
        self.input = input if input is not None else NullInput()
        self.renderer = renderer
        self.listeners: List[Listener] = list(listeners)
        self.seed = seed

        self.mode = Mode.MENU
        self.board = Board()
        self.rng = BagRandom(seed)
        self.current: Optional[Piece] = None
        self.upcoming: Optional[Piece] = Piece(self.rng.next_piece())
        self.x = 0
        self.y = 0

        self.score = 0
        self.level = 1
        self.lines = 0
        self.drop_timer = 0.0
        self.hold: Optional[ClearHold] = None
        self.muted = bool(CONFIG["START_MUTED"])

    # ---------- notifications ----------
    def _emit(self, hook: str, *args):
        for listener in self.listeners:
            getattr(listener, hook)(*args)

    def _set_mode(self, mode: Mode):
        log.debug("mode %s -> %s", self.mode.value, mode.value)
        self.mode = mode
        self._emit("on_mode_change", mode, self)

    # ---------- top-level transitions ----------
    def start(self) -> bool:
        if self.mode not in (Mode.MENU, Mode.GAME_OVER):
            return False
        self.score = 0
        self.level = 1
        self.lines = 0
        self.drop_timer = 0.0
        self.hold = None
        self.board = Board()
        self.rng = BagRandom(self.seed)
        self.current = None
        # preview comes from the new bag so the first bag stays a permutation
        self.upcoming = Piece(self.rng.next_piece())
        self._set_mode(Mode.PLAYING)
        self._spawn()
        return True

    def pause(self) -> bool:
        if self.mode is not Mode.PLAYING:
            return False
        self._set_mode(Mode.PAUSED)
        return True

    def resume(self) -> bool:
        if self.mode is not Mode.PAUSED:
            return False
        self._set_mode(Mode.PLAYING)
        return True

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        self._emit("on_mute", self.muted)
        return self.muted

    def _game_over(self):
        log.info("game over: score=%d level=%d lines=%d", self.score, self.level, self.lines)
        self._set_mode(Mode.GAME_OVER)
        self._emit("on_game_over", self.score)

    # ---------- per frame ----------
    def tick(self, dt: float):
        """Advance one frame of ``dt`` milliseconds."""
        pressed = {name for name in COMMANDS if self.input.just_pressed(name)}

        if "mute" in pressed:
            self.toggle_mute()

        if self.mode is Mode.PLAYING:
            self._play(pressed, dt)
        elif self.mode is Mode.PAUSED:
            if "pause" in pressed: self.resume()
        elif self.mode is Mode.MENU or self.mode is Mode.GAME_OVER:
            if "space" in pressed: self.start()

        if self.renderer is not None:
            self.renderer.draw(self)

    def _play(self, pressed: Set[str], dt: float):
        if self.hold is not None:
            if "pause" in pressed:
                self.pause()
                return
            self.hold.elapsed += dt
            if self.hold.elapsed > CONFIG["CLEAR_HOLD_MS"]:
                self.hold = None
            return

        if "left" in pressed: self.move(-1)
        if "right" in pressed: self.move(1)
        if "rotate" in pressed: self.rotate(1)
        if "down" in pressed: self.soft_drop()
        if "space" in pressed: self.hard_drop()
        if "pause" in pressed and self.mode is Mode.PLAYING:
            self.pause()

        if self.mode is Mode.PLAYING and self.hold is None:
            self._gravity(dt)

    def _gravity(self, dt: float):
        self.drop_timer += dt
        if self.drop_timer < gravity_interval(self.level):
            return
        self.drop_timer = 0.0
        if self.board.is_valid_position(self.current, self.x, self.y + 1):
            self.y += 1
        else:
            self._lock()

    # ---------- player actions ----------
    def _can_act(self) -> bool:
        return self.mode is Mode.PLAYING and self.hold is None and self.current is not None

    def move(self, dx: int) -> bool:
        if not self._can_act(): return False
        if not self.board.is_valid_position(self.current, self.x + dx, self.y):
            return False
        self.x += dx
        self._emit("on_move")
        return True

    def rotate(self, direction: int = 1) -> bool:
        if not self._can_act(): return False
        res = self.current.rotate(direction, self.board, self.x, self.y)
        if not res.success:
            return False
        self.x, self.y = res.x, res.y
        self._emit("on_rotate")
        return True

    def soft_drop(self) -> bool:
        if not self._can_act(): return False
        if not self.board.is_valid_position(self.current, self.x, self.y + 1):
            return False
        self.y += 1
        self.score += SOFT_DROP_PER_CELL
        self._emit("on_soft_drop")
        return True

    def hard_drop(self) -> int:
        """Drop straight to the landing row and lock; returns rows descended."""
        if not self._can_act(): return 0
        drop_y = self.board.get_ghost_y(self.current, self.x, self.y)
        dist = drop_y - self.y
        self.y = drop_y
        self.score += dist * HARD_DROP_PER_CELL
        self._lock()
        self._emit("on_hard_drop")
        return dist

    # ---------- lock / spawn ----------
    def _lock(self):
        self.board.place_piece(self.current, self.x, self.y)
        log.debug("locked %s at (%d, %d)", self.current.kind, self.x, self.y)
        rows = self.board.full_rows()
        if rows:
            snapshot = [list(self.board.grid[y]) for y in rows]
            count, rows = self.board.clear_lines()
            self.score += SCORE_TABLE[count] * self.level
            self.lines += count
            level = self.lines // CONFIG["LINES_PER_LEVEL"] + 1
            if level > self.level:
                self.level = level
                log.info("level up: %d", level)
                self._emit("on_level_up", level)
            log.info("cleared %d line(s), score=%d", count, self.score)
            self._emit("on_line_clear", count)
            self.hold = ClearHold(rows, snapshot)
        # next piece comes in right away, even while the cleared rows flash
        self._spawn()

    def _spawn(self):
        self.current = self.upcoming if self.upcoming is not None else Piece(self.rng.next_piece())
        self.upcoming = Piece(self.rng.next_piece())
        self.x = (COLS - self.current.width) // 2
        self.y = 0
        if not self.board.is_valid_position(self.current, self.x, self.y):
            self._game_over()

    # ---------- read-only views ----------
    @property
    def ghost_y(self) -> Optional[int]:
        if self.current is None: return None
        return self.board.get_ghost_y(self.current, self.x, self.y)
