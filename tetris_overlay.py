
"""Menu / pause / game-over overlay and mute indicator"""
import pygame
from tetris_engine import Listener, Mode

class Overlay(Listener):
    def __init__(self, muted=False):
        self.active = True
        self.title = "TETRIS"
        self.lines = ["Press SPACE to start"]
        self.muted = muted

    def on_mode_change(self, mode, engine):
        if mode is Mode.PLAYING:
            self.active = False; return
        self.active = True
        if mode is Mode.PAUSED:
            self.title, self.lines = "PAUSED", ["Press P to resume"]
        elif mode is Mode.GAME_OVER:
            self.title = "GAME OVER"
            self.lines = [f"Final Score: {engine.score:,}", "Press SPACE to restart"]
        else:
            self.title, self.lines = "TETRIS", ["Press SPACE to start"]

    def on_mute(self, muted):
        self.muted = muted

    def draw(self, screen, font, big_font, rect):
        if self.active:
            s = pygame.Surface(rect.size, pygame.SRCALPHA); s.fill((20,25,40,210))
            screen.blit(s, rect.topleft)
            t = big_font.render(self.title, True, (255,255,255))
            screen.blit(t, t.get_rect(center=(rect.centerx, rect.centery - 30)))
            y = rect.centery + 10
            for line in self.lines:
                m = font.render(line, True, (200,210,235))
                screen.blit(m, m.get_rect(center=(rect.centerx, y))); y += 24

    def draw_mute_icon(self, screen, font, pos):
        txt = "Sound: off (M)" if self.muted else "Sound: on (M)"
        col = (165,120,120) if self.muted else (165,175,215)
        screen.blit(font.render(txt, True, col), pos)
