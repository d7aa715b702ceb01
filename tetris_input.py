
"""Keyboard -> edge-triggered commands"""
from typing import Dict, Set
import pygame

KEYMAP: Dict[int, str] = {
    pygame.K_LEFT: "left",  pygame.K_a: "left",
    pygame.K_RIGHT: "right", pygame.K_d: "right",
    pygame.K_DOWN: "down",
    pygame.K_UP: "rotate", pygame.K_w: "rotate",
    pygame.K_SPACE: "space",
    pygame.K_p: "pause",
    pygame.K_m: "mute",
}

class KeyInput:
    """Reports each command once per key press; reading it consumes it."""
    def __init__(self):
        self.held: Set[str] = set(); self.fresh: Set[str] = set()

    def handle(self, e):
        if e.type not in (pygame.KEYDOWN, pygame.KEYUP): return
        name = KEYMAP.get(e.key)
        if name is None: return
        if e.type == pygame.KEYDOWN:
            # key repeat would re-send KEYDOWN while held
            if name not in self.held:
                self.held.add(name); self.fresh.add(name)
        else:
            self.held.discard(name); self.fresh.discard(name)

    def just_pressed(self, name: str) -> bool:
        if name in self.fresh:
            self.fresh.discard(name); return True
        return False

    def is_held(self, name: str) -> bool:
        return name in self.held
