"""
view.py — View layer.

Draws a frame from a Snapshot (plus a little animation state of its own).
No game rules live here: everything it needs comes from the snapshot, the
difficulty profile and the score table handed in by the controller.

Rendering notes:
  - Pre-rendered board surface with grid lines (drawn once, blitted every frame)
  - Snake painted in its blended colour, head brighter, tail darker
  - Herbs pulse gently; flickering herbs are skipped on their hidden frames
  - Overlays per phase: countdown, paused, game over
  - Menu, intro and score-history screens

Board rows run from y = -1 to rows - 2 in the model, so every cell is
drawn one row lower than its y coordinate.

Public API:
    GameView(screen)                          — bind to a pygame surface
    view.render_game(snapshot, profile)       — draw an in-game frame
    view.render_menu(profiles, selected)      — draw the start menu
    view.render_history(profiles, scores)     — draw the best-score table
    view.render_intro(tagline, sections)      — draw the how-to-play card
"""

import math
import pygame

from .config import (
    WIDTH, HEIGHT, PANEL_H, GAME_W, GAME_H,
    OFFSET_X, OFFSET_Y, CELL,
    BG, BOARD_BG, GRID_COL, UI_COL, TEXT_COL, ACCENT_COL, BLACK,
    PANEL_BG, BORDER_COL, CHANNELS, CHANNEL_COLORS,
    PHASE_COUNTDOWN, PHASE_PAUSED, PHASE_OVER,
)
from .simulation import Snapshot

FOOTER_PAD = 14


# ─────────────────────── colour helpers ──────────────────────────
def _lerp_color(c1: tuple, c2: tuple, t: float) -> tuple:
    t = max(0.0, min(1.0, t))
    return tuple(int(c1[i] + (c2[i] - c1[i]) * t) for i in range(3))


def _with_alpha(color: tuple, alpha: int) -> tuple:
    return (*color[:3], max(0, min(255, alpha)))


def _brighten(color: tuple, factor: float) -> tuple:
    return tuple(min(255, int(c * factor)) for c in color[:3])


def wrap_text(text: str, font: pygame.font.Font, max_width: int) -> list[str]:
    """Greedy word wrap; a single word wider than max_width gets its own line."""
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and font.size(candidate)[0] > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def cell_rect(cell: tuple[int, int]) -> pygame.Rect:
    """Screen rectangle of a board cell."""
    x, y = cell
    return pygame.Rect(OFFSET_X + x * CELL, OFFSET_Y + (y + 1) * CELL, CELL, CELL)


# ─────────────────────────── GameView ────────────────────────────
class GameView:
    """Renders complete frames; the controller picks which screen."""

    # ── Construction ─────────────────────────────────────────────
    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self._init_fonts()
        self._build_static_surfaces()

        # Score rack-up animation state
        self._disp_score: float = 0.0

        # For overlay title pulse animation
        self._anim_tick: int = 0

    # ── Main entries ─────────────────────────────────────────────
    def render_game(self, snap: Snapshot, profile) -> None:
        self._anim_tick += 1
        self._disp_score += (snap.score - self._disp_score) * 0.25
        if snap.score == 0:
            self._disp_score = 0.0

        self.screen.fill(BG)
        self.screen.blit(self._board_surf, (OFFSET_X, OFFSET_Y))

        self._draw_foods(snap)
        self._draw_snake(snap)
        self._draw_border()
        self._draw_panel(snap, profile)
        self._draw_footer(snap)

        if snap.phase == PHASE_COUNTDOWN:
            self._draw_countdown_overlay(snap, profile)
        elif snap.phase == PHASE_PAUSED:
            self._draw_paused_overlay()
        elif snap.phase == PHASE_OVER:
            self._draw_game_over_overlay(snap)

        pygame.display.flip()

    def render_menu(self, profiles: list, selected: int) -> None:
        self._anim_tick += 1
        self.screen.fill(BG)
        cy = 40
        cy = self._draw_animated_title("HERB SNAKE", ACCENT_COL, cy, self.font_title)
        cy = self._draw_text_line("CHOOSE A PATH", UI_COL, cy + 8, self.font_med)
        cy += 18
        for i, profile in enumerate(profiles):
            color = ACCENT_COL if i == selected else UI_COL
            prefix = "►  " if i == selected else "   "
            cy = self._draw_button(f"{prefix}{i + 1}. {profile.label}", color, cy)
            cy = self._draw_text_line(profile.description, UI_COL, cy + 4, self.font_tiny)
            cy += 14
        cy += 10
        self._draw_controls_hint(cy, [
            ("↑↓ / 1-2", "SELECT"), ("ENTER", "START"),
            ("I", "INTRO"), ("H", "HISTORY"), ("Q", "QUIT"),
        ])
        pygame.display.flip()

    def render_history(self, profiles: list, scores: dict) -> None:
        self._anim_tick += 1
        self.screen.fill(BG)
        cy = 50
        cy = self._draw_animated_title("BEST SCORES", ACCENT_COL, cy, self.font_title)
        cy += 20
        for profile in profiles:
            cy = self._draw_text_line(profile.label, UI_COL, cy, self.font_small)
            cy = self._draw_text_line(str(scores.get(profile.key, 0)), TEXT_COL, cy, self.font_big)
            cy += 16
        cy += 10
        self._draw_controls_hint(cy, [("X", "RESET ALL"), ("ESC", "BACK")])
        pygame.display.flip()

    def render_intro(self, tagline: str, sections) -> None:
        self._anim_tick += 1
        self.screen.fill(BG)
        margin = 30
        text_w = WIDTH - margin * 2
        cy = 30
        cy = self._draw_animated_title("HOW TO PLAY", ACCENT_COL, cy, self.font_title)
        for line in wrap_text(tagline, self.font_med, text_w):
            cy = self._draw_text_line(line, TEXT_COL, cy, self.font_med)
        cy += 8

        card = pygame.Surface((WIDTH - margin, HEIGHT - cy - 70), pygame.SRCALPHA)
        card.fill(_with_alpha(PANEL_BG, 200))
        self.screen.blit(card, (margin // 2, cy - 6))

        for heading, paragraphs in sections:
            head = self.font_small.render(f"~ {heading} ~", True, ACCENT_COL)
            self.screen.blit(head, (margin, cy))
            cy += head.get_height() + 6
            for paragraph in paragraphs:
                for line in wrap_text(paragraph, self.font_tiny, text_w):
                    surf = self.font_tiny.render(line, True, UI_COL)
                    self.screen.blit(surf, (margin, cy))
                    cy += surf.get_height() + 2
                cy += 6
            cy += 6

        self._draw_controls_hint(HEIGHT - 50, [("ESC", "BACK")])
        pygame.display.flip()

    # ── Static surface pre-builds ─────────────────────────────────
    def _build_static_surfaces(self) -> None:
        self._board_surf = pygame.Surface((GAME_W, GAME_H))
        self._board_surf.fill(BOARD_BG)
        for x in range(0, GAME_W + 1, CELL):
            pygame.draw.line(self._board_surf, GRID_COL, (x, 0), (x, GAME_H))
        for y in range(0, GAME_H + 1, CELL):
            pygame.draw.line(self._board_surf, GRID_COL, (0, y), (GAME_W, y))

    # ── Herbs ────────────────────────────────────────────────────
    def _draw_foods(self, snap: Snapshot) -> None:
        pulse = 0.85 + 0.15 * math.sin(self._anim_tick * 0.12)
        for food in snap.visible_foods:
            rect = cell_rect(food.position)
            color = CHANNEL_COLORS[food.channel]
            r = max(3, int((CELL // 2 - 2) * pulse))
            glow = pygame.Surface((CELL * 2, CELL * 2), pygame.SRCALPHA)
            pygame.draw.circle(glow, _with_alpha(color, 60), (CELL, CELL), r + 6)
            self.screen.blit(glow, (rect.centerx - CELL, rect.centery - CELL))
            pygame.draw.circle(self.screen, color, rect.center, r)
            pygame.draw.circle(self.screen, _brighten(color, 1.5),
                               (rect.centerx - r // 3, rect.centery - r // 3),
                               max(1, r // 3))

    # ── Snake body ───────────────────────────────────────────────
    def _draw_snake(self, snap: Snapshot) -> None:
        if not snap.snake:
            return
        color = snap.rgb
        dim = _lerp_color(color, BLACK, 0.45)
        length = len(snap.snake)
        for i, cell in enumerate(snap.snake):
            t = 1.0 - (i / max(length - 1, 1)) * 0.6
            seg = _lerp_color(dim, color, t)
            rect = cell_rect(cell).inflate(-4, -4)
            radius = rect.width // 2 - 1 if i == 0 else rect.width // 4
            pygame.draw.rect(self.screen, seg, rect, border_radius=max(1, radius))
        self._draw_eyes(snap)

    def _draw_eyes(self, snap: Snapshot) -> None:
        rect = cell_rect(snap.snake[0])
        dx, dy = {"up": (0, -1), "down": (0, 1), "left": (-1, 0), "right": (1, 0)}[snap.heading]
        px, py = -dy, dx  # perpendicular
        for sign in (+1, -1):
            ex = int(rect.centerx + dx * 4 + sign * px * 4)
            ey = int(rect.centery + dy * 4 + sign * py * 4)
            pygame.draw.circle(self.screen, (235, 235, 235), (ex, ey), 3)
            pygame.draw.circle(self.screen, BLACK, (ex + dx, ey + dy), 1)

    # ── Border ───────────────────────────────────────────────────
    def _draw_border(self) -> None:
        pygame.draw.rect(self.screen, BORDER_COL,
                         (OFFSET_X - 2, OFFSET_Y - 2, GAME_W + 4, GAME_H + 4), 2,
                         border_radius=6)

    # ── HUD Panel ─────────────────────────────────────────────────
    def _draw_panel(self, snap: Snapshot, profile) -> None:
        pygame.draw.rect(self.screen, PANEL_BG, (0, 0, WIDTH, PANEL_H))
        pygame.draw.line(self.screen, BORDER_COL, (0, PANEL_H - 1), (WIDTH, PANEL_H - 1), 1)

        self.screen.blit(self.font_small.render("SCORE", True, UI_COL), (16, 8))
        self.screen.blit(
            self.font_big.render(str(int(round(self._disp_score))), True, snap.rgb), (16, 26),
        )

        best = self.font_small.render(f"BEST {snap.best_score}", True, ACCENT_COL)
        self.screen.blit(best, best.get_rect(topright=(WIDTH - 16, 10)))
        speed = self.font_tiny.render(f"{snap.tick_interval:.3f}s / STEP", True, UI_COL)
        self.screen.blit(speed, speed.get_rect(topright=(WIDTH - 16, 34)))

        label = self.font_tiny.render(profile.label, True, UI_COL)
        self.screen.blit(label, label.get_rect(center=(WIDTH // 2, 18)))

        if snap.phase == PHASE_PAUSED:
            badge = self.font_tiny.render("[ PAUSED ]", True, ACCENT_COL)
            self.screen.blit(badge, badge.get_rect(center=(WIDTH // 2, 42)))

    def _draw_footer(self, snap: Snapshot) -> None:
        """Herb counters, one per channel."""
        y = OFFSET_Y + GAME_H + FOOTER_PAD
        slot = WIDTH // len(CHANNELS)
        for i, (channel, count) in enumerate(zip(CHANNELS, snap.counts)):
            cx = slot * i + slot // 2
            pygame.draw.circle(self.screen, CHANNEL_COLORS[channel], (cx - 18, y + 12), 9)
            txt = self.font_med.render(str(count), True, TEXT_COL)
            self.screen.blit(txt, txt.get_rect(midleft=(cx - 2, y + 12)))

    # ── Overlay infrastructure ────────────────────────────────────
    def _draw_overlay_base(self, alpha: int = 200) -> None:
        surf = pygame.Surface((GAME_W, GAME_H), pygame.SRCALPHA)
        surf.fill((6, 10, 6, alpha))
        self.screen.blit(surf, (OFFSET_X, OFFSET_Y))

    def _draw_animated_title(self, title: str, color: tuple,
                             cy: int, font: pygame.font.Font) -> int:
        pulse = 0.82 + 0.18 * math.sin(self._anim_tick * 0.05)
        bright = _brighten(color, pulse)
        surf = font.render(title, True, bright)
        gw, gh = surf.get_width() + 50, surf.get_height() + 16
        glow = pygame.Surface((gw, gh), pygame.SRCALPHA)
        glow.fill(_with_alpha(color, int(35 * pulse)))
        self.screen.blit(glow, (WIDTH // 2 - gw // 2, cy - 8))
        self.screen.blit(surf, surf.get_rect(center=(WIDTH // 2, cy + surf.get_height() // 2)))
        return cy + surf.get_height() + 14

    def _draw_text_line(self, text: str, color: tuple,
                        cy: int, font: pygame.font.Font) -> int:
        if not text:
            return cy + 10
        surf = font.render(text, True, color)
        self.screen.blit(surf, surf.get_rect(center=(WIDTH // 2, cy)))
        return cy + surf.get_height() + 8

    def _draw_button(self, label: str, color: tuple, cy: int) -> int:
        btn_w = min(WIDTH - 20, max(260, self.font_small.size(label)[0] + 40))
        btn_h = 38
        bx = WIDTH // 2 - btn_w // 2
        bg = pygame.Surface((btn_w, btn_h), pygame.SRCALPHA)
        bg.fill(_with_alpha(color, 22))
        self.screen.blit(bg, (bx, cy))
        pygame.draw.rect(self.screen, color, (bx, cy, btn_w, btn_h), 2, border_radius=4)
        txt = self.font_small.render(label, True, color)
        self.screen.blit(txt, txt.get_rect(center=(WIDTH // 2, cy + btn_h // 2)))
        return cy + btn_h + 10

    def _draw_controls_hint(self, cy: int, hints: list) -> None:
        width = WIDTH // max(1, len(hints))
        for i, (key, action) in enumerate(hints):
            x = width * i + width // 2
            k_surf = self.font_tiny.render(key,    True, TEXT_COL)
            a_surf = self.font_tiny.render(action, True, UI_COL)
            kw = k_surf.get_width() + 12
            kh = k_surf.get_height() + 4
            pygame.draw.rect(self.screen, (32, 44, 32), (x - kw // 2, cy, kw, kh), border_radius=3)
            pygame.draw.rect(self.screen, BORDER_COL, (x - kw // 2, cy, kw, kh), 1, border_radius=3)
            self.screen.blit(k_surf, k_surf.get_rect(center=(x, cy + kh // 2)))
            self.screen.blit(a_surf, a_surf.get_rect(center=(x, cy + kh + 10)))

    # ── State overlays ────────────────────────────────────────────
    def _draw_countdown_overlay(self, snap: Snapshot, profile) -> None:
        self._draw_overlay_base(150)
        cy = OFFSET_Y + GAME_H // 2 - 70
        cy = self._draw_text_line(profile.label, UI_COL, cy, self.font_small)
        cy = self._draw_animated_title(str(snap.countdown), ACCENT_COL, cy + 6, self.font_huge)
        self._draw_text_line("ARROWS / WASD TO STEER", UI_COL, cy + 6, self.font_tiny)

    def _draw_paused_overlay(self) -> None:
        self._draw_overlay_base()
        cy = OFFSET_Y + GAME_H // 2 - 36
        cy = self._draw_animated_title("PAUSED", ACCENT_COL, cy, self.font_title)
        cy += 6
        self._draw_text_line("PRESS  P  TO RESUME", UI_COL, cy, self.font_med)

    def _draw_game_over_overlay(self, snap: Snapshot) -> None:
        self._draw_overlay_base()
        cy = OFFSET_Y + 60
        cy = self._draw_animated_title("DOWN THE MOUNTAIN~", TEXT_COL, cy, self.font_title)
        cy += 4
        cy = self._draw_text_line(snap.end_message, snap.rgb, cy, self.font_med)
        cy = self._draw_text_line(
            "HIT THE WALL" if snap.hit_wall else "BIT ITS OWN TAIL", UI_COL, cy, self.font_tiny,
        )
        cy += 10
        cy = self._draw_text_line(f"SCORE: {snap.score}", TEXT_COL, cy, self.font_big)
        if snap.new_best:
            cy = self._draw_text_line("★  NEW HIGH SCORE  ★", ACCENT_COL, cy, self.font_small)
        else:
            cy = self._draw_text_line(f"BEST: {snap.best_score}", UI_COL, cy, self.font_small)
        cy += 14
        self._draw_button("R / ENTER — PLAY AGAIN", ACCENT_COL, cy)

    # ── Font init ─────────────────────────────────────────────────
    def _init_fonts(self) -> None:
        specs = [
            ("font_huge",  "courier", 72, True),
            ("font_title", "courier", 34, True),
            ("font_big",   "courier", 26, True),
            ("font_med",   "courier", 17, False),
            ("font_small", "courier", 14, True),
            ("font_tiny",  "courier", 12, False),
        ]
        for attr, name, size, bold in specs:
            try:
                setattr(self, attr, pygame.font.SysFont(name, size, bold=bold))
            except Exception:
                setattr(self, attr, pygame.font.SysFont(None, size))

