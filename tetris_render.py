
"""
Rendering for the Tetris project.

- Pre-render block cell Surfaces per color (solid + ghost outline) and blit them.
- Pre-render static background (grid + panel frame) once per Dims.
- Cache HUD text surfaces; re-render only when values change.
- Cache a BOARD SURFACE with all *locked* blocks; rebuild it only when the grid changes.
"""
from __future__ import annotations
import math
import pygame
from dataclasses import dataclass
from typing import Dict, Tuple, Optional
from tetris_layout import Dims
from tetris_piece import COLS, ROWS, Piece
from tetris_overlay import Overlay
from tetris_engine import Mode

Color = Tuple[int,int,int]

@dataclass
class HudCache:
    score: int = -1
    level: int = -1
    lines: int = -1
    next_kind: str = ""
    title: Optional[pygame.Surface] = None
    score_s: Optional[pygame.Surface] = None
    level_s: Optional[pygame.Surface] = None
    lines_s: Optional[pygame.Surface] = None
    next_label: Optional[pygame.Surface] = None
    preview: Optional[pygame.Surface] = None
    controls: Optional[list] = None

class Renderer:
    """Draws one frame per engine tick onto ``screen`` and flips the display."""
    def __init__(self, screen: pygame.Surface, dims: Dims, font: pygame.font.Font,
                 big_font: pygame.font.Font, overlay: Overlay):
        self.screen = screen
        self.dims = dims
        self.font = font
        self.big_font = big_font
        self.overlay = overlay
        self.cell_surf: Dict[Color, pygame.Surface] = {}
        self.ghost_surf: Dict[Color, pygame.Surface] = {}
        self.hud = HudCache()
        self._make_static()
        # Board surface cache (only locked blocks)
        self.board_surface = pygame.Surface((dims.board_w, dims.board_h), pygame.SRCALPHA)
        self._board_key = None
        self.board_rect = pygame.Rect(dims.board_x, dims.board_y, dims.board_w, dims.board_h)

    # ---------- Static background (grid + panel) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill((10,13,34))
        grid_col = (40,50,90)
        for x in range(COLS+1):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.bg, grid_col, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(ROWS+1):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.bg, grid_col, (d.board_x, Y), (d.board_x + d.board_w, Y))
        panel_rect = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.board_h)
        pygame.draw.rect(self.bg, (21,25,53), panel_rect)
        pygame.draw.rect(self.bg, (50,60,100), panel_rect, 1)
        pc = d.preview_cell
        frame = pygame.Rect(d.preview_x-6, d.preview_y-6, pc*4+12, pc*4+12)
        pygame.draw.rect(self.bg, (15,18,40), frame)
        pygame.draw.rect(self.bg, (55,65,110), frame, 1)

    # ---------- Cell sprites, built on first use per color ----------
    def _cell(self, col: Color) -> pygame.Surface:
        s = self.cell_surf.get(col)
        if s is None:
            c = self.dims.cell
            s = pygame.Surface((c-2, c-2)); s.fill(col)
            self.cell_surf[col] = s
        return s

    def _ghost(self, col: Color) -> pygame.Surface:
        g = self.ghost_surf.get(col)
        if g is None:
            c = self.dims.cell
            g = pygame.Surface((c-8, c-8), pygame.SRCALPHA)
            pygame.draw.rect(g, col, (0,0,c-8,c-8), 2)
            self.ghost_surf[col] = g
        return g

    # ---------- Board surface cache ----------
    def _sync_board_surface(self, grid):
        key = tuple(tuple(row) for row in grid)
        if key == self._board_key: return
        self._board_key = key
        self.board_surface.fill((0,0,0,0))
        c = self.dims.cell
        for y in range(ROWS):
            for x in range(COLS):
                col = grid[y][x]
                if col:
                    self.board_surface.blit(self._cell(col), (x*c + 1, y*c + 1))

    # ---------- Per-cell helpers ----------
    def draw_cell(self, col: Color, bx: int, by: int, alpha: int = 255):
        if by < 0: return
        s = self._cell(col)
        if alpha < 255:
            s = s.copy(); s.set_alpha(alpha)
        rx = self.dims.board_x + bx*self.dims.cell + 1
        ry = self.dims.board_y + by*self.dims.cell + 1
        self.screen.blit(s, (rx, ry))

    def draw_ghost_cell(self, col: Color, bx: int, by: int):
        if by < 0: return
        rx = self.dims.board_x + bx*self.dims.cell + 4
        ry = self.dims.board_y + by*self.dims.cell + 4
        self.screen.blit(self._ghost(col), (rx, ry))

    # ---------- HUD / Panel ----------
    def _preview_surface(self, piece: Piece) -> pygame.Surface:
        pc = self.dims.preview_cell
        s = pygame.Surface((pc*4, pc*4), pygame.SRCALPHA)
        shape = piece.get_shape()
        offx = (4 - len(shape[0])) * pc // 2
        offy = (4 - len(shape)) * pc // 2
        block = pygame.Surface((pc-2, pc-2)); block.fill(piece.color)
        for y, row in enumerate(shape):
            for x, v in enumerate(row):
                if v: s.blit(block, (offx + x*pc + 1, offy + y*pc + 1))
        return s

    def draw_panel_hud(self, score: int, level: int, lines: int, upcoming: Optional[Piece]):
        d = self.dims
        f = self.font
        screen = self.screen
        if self.hud.title is None:
            self.hud.title = f.render("Tetris", True, (197,202,233))
            self.hud.next_label = f.render("Next:", True, (200,210,240))
        if score != self.hud.score:
            self.hud.score = score
            self.hud.score_s = f.render(f"Score: {score:,}", True, (200,210,240))
        if level != self.hud.level:
            self.hud.level = level
            self.hud.level_s = f.render(f"Level: {level}", True, (200,210,240))
        if lines != self.hud.lines:
            self.hud.lines = lines
            self.hud.lines_s = f.render(f"Lines: {lines}", True, (200,210,240))
        kind = upcoming.kind if upcoming else ""
        if kind != self.hud.next_kind:
            self.hud.next_kind = kind
            self.hud.preview = self._preview_surface(upcoming) if upcoming else None
        screen.blit(self.hud.title, (d.panel_x + 12, d.panel_y + 12))
        screen.blit(self.hud.score_s, (d.panel_x + 12, d.panel_y + 44))
        screen.blit(self.hud.level_s, (d.panel_x + 12, d.panel_y + 68))
        screen.blit(self.hud.lines_s, (d.panel_x + 12, d.panel_y + 92))
        screen.blit(self.hud.next_label, (d.panel_x + 12, d.panel_y + 126))
        if self.hud.preview:
            screen.blit(self.hud.preview, (d.preview_x, d.preview_y))
        if not self.hud.controls:
            self.hud.controls = [
                f.render("Controls:", True, (200,210,240)),
                f.render("←/→ Move", True, (165,175,215)),
                f.render("↓ Soft drop", True, (165,175,215)),
                f.render("↑ Rotate", True, (165,175,215)),
                f.render("Space Hard drop", True, (165,175,215)),
                f.render("P Pause", True, (165,175,215)),
            ]
        y = d.panel_y + 260
        for surf in self.hud.controls:
            screen.blit(surf, (d.panel_x + 12, y)); y += 20
        self.overlay.draw_mute_icon(screen, f, (d.panel_x + 12, y + 12))

    # ---------- Frame ----------
    def draw(self, engine):
        self.screen.blit(self.bg, (0,0))
        self._sync_board_surface(engine.board.grid)
        self.screen.blit(self.board_surface, self.board_rect.topleft)

        hold = engine.hold
        if hold is not None:
            alpha = int(255 * (0.5 + 0.5 * math.sin(hold.elapsed / 50)))
            for y, row in zip(hold.rows, hold.snapshot):
                for x, col in enumerate(row):
                    if col: self.draw_cell(col, x, y, alpha)

        p = engine.current
        if engine.mode is Mode.PLAYING and p is not None:
            gy = engine.ghost_y
            if gy != engine.y:
                for bx, by in p.cells(engine.x, gy): self.draw_ghost_cell(p.color, bx, by)
            for bx, by in p.cells(engine.x, engine.y): self.draw_cell(p.color, bx, by)

        self.draw_panel_hud(engine.score, engine.level, engine.lines, engine.upcoming)
        self.overlay.draw(self.screen, self.font, self.big_font, self.board_rect)
        pygame.display.flip()
