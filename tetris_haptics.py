
"""Rumble feedback on the first connected game controller"""
import logging
from typing import List, Optional

import pygame

from tetris_engine import Listener

log = logging.getLogger(__name__)


class Rumble(Listener):
    """Vibration patterns alternate on/off durations in ms, starting with on."""
    def __init__(self):
        self.pad: Optional["pygame.joystick.JoystickType"] = None
        try:
            pygame.joystick.init()
            if pygame.joystick.get_count() > 0:
                self.pad = pygame.joystick.Joystick(0)
                log.info("rumble on %s", self.pad.get_name())
        except pygame.error as exc:
            log.warning("no controller for rumble: %s", exc)

    def vibrate(self, pattern: List[int]):
        if self.pad is None: return
        # rumble() plays a single pulse; a pattern collapses to its total length
        strength = min(1.0, 0.4 + 0.2 * ((len(pattern) + 1) // 2))
        try:
            self.pad.rumble(strength, strength, sum(pattern))
        except pygame.error as exc:
            log.warning("rumble failed: %s", exc)

    def on_hard_drop(self): self.vibrate([30])
    def on_line_clear(self, count):
        self.vibrate([50, 20, 50] if count == 4 else [30])
    def on_game_over(self, score): self.vibrate([100, 50, 100, 50, 200])
