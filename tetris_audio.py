
"""Sound effects: short synthesized tones played through pygame.mixer"""
import logging
import math
from array import array
from typing import Dict, List, Tuple

import pygame

from tetris_config import CONFIG
from tetris_engine import Listener

log = logging.getLogger(__name__)

RATE = 22050

# (freq Hz, seconds, wave, volume, start offset seconds)
Tone = Tuple[float, float, str, float, float]

EFFECTS: Dict[str, List[Tone]] = {
    "move":     [(200, 0.05, "square", 0.05, 0)],
    "rotate":   [(300, 0.08, "square", 0.08, 0)],
    "soft":     [(180, 0.03, "square", 0.04, 0)],
    "hard":     [(150, 0.10, "square", 0.15, 0), (100, 0.15, "square", 0.10, 0)],
    "level":    [(400, 0.10, "sine", 0.2, 0), (500, 0.10, "sine", 0.2, 0), (600, 0.20, "sine", 0.2, 0)],
    "gameover": [(150, 0.30, "sawtooth", 0.3, 0), (100, 0.50, "sawtooth", 0.3, 0.2)],
}
for n, f in enumerate((200, 250, 300, 350), start=1):
    EFFECTS[f"clear{n}"] = [(f, 0.20, "square", 0.2, 0), (f * 1.5, 0.15, "square", 0.15, 0)]


def _wave(kind: str, phase: float) -> float:
    if kind == "square": return 1.0 if phase < 0.5 else -1.0
    if kind == "sawtooth": return 2.0 * phase - 1.0
    return math.sin(2 * math.pi * phase)


def synth(tones: List[Tone], rate: int = RATE) -> List[float]:
    """Mix tones into one float buffer with an exponential fade on each."""
    total = max(int((start + dur) * rate) for _, dur, _, _, start in tones)
    buf = [0.0] * total
    for freq, dur, kind, vol, start in tones:
        n = int(dur * rate); s0 = int(start * rate)
        # decay to 1% of the start volume over the tone
        k = math.log(0.01) / max(n, 1)
        for i in range(n):
            phase = (freq * i / rate) % 1.0
            buf[s0 + i] += vol * math.exp(k * i) * _wave(kind, phase)
    return buf


class ToneAudio(Listener):
    def __init__(self, muted: bool = False):
        self.muted = muted
        self.sounds: Dict[str, "pygame.mixer.Sound"] = {}
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=RATE, size=-16, channels=1)
            rate, size, channels = pygame.mixer.get_init()
            if abs(size) != 16:
                log.warning("mixer opened with %d-bit samples, need 16; running silent", abs(size))
                return
            for name, tones in EFFECTS.items():
                self.sounds[name] = self._build(tones, rate, channels)
        except pygame.error as exc:
            log.warning("audio unavailable, running silent: %s", exc)
            self.sounds = {}

    @staticmethod
    def _build(tones, rate, channels):
        pcm = array("h")
        for v in synth(tones, rate):
            s = int(max(-1.0, min(1.0, v)) * 32767)
            pcm.extend([s] * channels)
        snd = pygame.mixer.Sound(buffer=pcm.tobytes())
        snd.set_volume(float(CONFIG["VOLUME"]))
        return snd

    def play(self, name: str):
        if self.muted: return
        snd = self.sounds.get(name)
        if snd is None: return
        try:
            snd.play()
        except pygame.error as exc:
            log.warning("could not play %s: %s", name, exc)

    def on_move(self): self.play("move")
    def on_rotate(self): self.play("rotate")
    def on_soft_drop(self): self.play("soft")
    def on_hard_drop(self): self.play("hard")
    def on_line_clear(self, count): self.play(f"clear{min(max(count, 1), 4)}")
    def on_level_up(self, level): self.play("level")
    def on_game_over(self, score): self.play("gameover")
    def on_mute(self, muted): self.muted = muted
