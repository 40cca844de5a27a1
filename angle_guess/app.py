"""Pygame UI shell for Guess the Angle.

The window is the UI host and rendering surface for the game core: it keeps
the named fields, paints the three round drawings and forwards Enter presses
as commit events. Deterministic generation, scoring and state live in
angle_guess/* (core modules).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

import pygame

from .config import GameConfig
from .drawing import Drawing
from .errors import MissingHostElement
from .game_core import CommitOutcome, GameState, RoundController, build_game
from .host import ALL_FIELDS, ANSWER_FIELDS, BREAKDOWN_FIELD, GUESS_FIELDS, SCORE_FIELD, TITLE_FIELD
from .seed import ROUND_COUNT

logger = logging.getLogger(__name__)

WINDOW_SIZE = (960, 540)
TARGET_FPS = 60

COLUMN_TITLES = ("Guess", "The", "Angle")

CATEGORY_COLORS: dict[str, tuple[int, int, int]] = {
    "perfect": (120, 220, 255),
    "good": (140, 220, 140),
    "almost": (240, 210, 110),
    "error": (240, 150, 90),
    "failure": (235, 90, 90),
}


class Screen(Protocol):
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def render(self, surface: pygame.Surface) -> None: ...


class App:
    def __init__(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        self._surface = surface
        self._font = font
        self._screens: list[Screen] = []
        self._running = True

    @property
    def running(self) -> bool:
        return self._running

    @property
    def font(self) -> pygame.font.Font:
        return self._font

    def push(self, screen: Screen) -> None:
        self._screens.append(screen)

    def quit(self) -> None:
        self._running = False

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.quit()
            return
        if not self._screens:
            return
        self._screens[-1].handle_event(event)

    def render(self) -> None:
        if not self._screens:
            return
        self._screens[-1].render(self._surface)


@dataclass(slots=True)
class _Field:
    text: str = ""
    enabled: bool = False
    tag: str | None = None


class GameScreen:
    """One session of three rounds; F5 discards it and starts a fresh one."""

    def __init__(self, app: App, *, config: GameConfig) -> None:
        self._app = app
        self._config = config
        self._dates = config.date_source()
        self._small_font = pygame.font.Font(None, 30)
        self._tiny_font = pygame.font.Font(None, 22)
        self._new_session()

    @property
    def controller(self) -> RoundController:
        return self._controller

    def _new_session(self) -> None:
        self._fields: dict[str, _Field] = {field_id: _Field() for field_id in ALL_FIELDS}
        self._handlers: dict[str, Callable[[], object]] = {}
        self._drawings: dict[int, Drawing] = {}
        self._focused: str | None = None
        self._overlay = False
        self._last_outcome: object | None = None

        self._controller = build_game(host=self, surface=self, dates=self._dates, config=self._config)
        self._controller.start()

    # UI host

    def _field(self, field_id: str) -> _Field:
        try:
            return self._fields[field_id]
        except KeyError:
            raise MissingHostElement(field_id) from None

    def field_value(self, field_id: str) -> str:
        return self._field(field_id).text

    def set_field_content(self, field_id: str, text: str, *, tag: str | None = None) -> None:
        field = self._field(field_id)
        field.text = text
        field.tag = tag

    def set_field_enabled(self, field_id: str, enabled: bool) -> None:
        self._field(field_id).enabled = bool(enabled)

    def focus(self, field_id: str) -> None:
        self._field(field_id)
        self._focused = field_id

    def on_commit(self, field_id: str, handler: Callable[[], object]) -> None:
        self._field(field_id)
        self._handlers[field_id] = handler

    def show_overlay(self) -> None:
        self._overlay = True

    # Rendering surface

    def render_round(self, round_index: int, drawing: Drawing) -> None:
        self._drawings[round_index] = drawing

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        if event.key == pygame.K_ESCAPE:
            self._app.quit()
            return
        if event.key == pygame.K_F5:
            logger.info("new session requested")
            self._new_session()
            return
        if self._overlay or self._focused is None:
            return

        field = self._fields[self._focused]
        if not field.enabled:
            return

        if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            handler = self._handlers.get(self._focused)
            if handler is not None:
                self._last_outcome = handler()
            return
        if event.key == pygame.K_BACKSPACE:
            field.text = field.text[:-1]
            return

        ch = getattr(event, "unicode", "")
        if ch and ch.isdigit() and len(field.text) < 3:
            field.text += ch

    def render(self, surface: pygame.Surface) -> None:
        w, h = surface.get_size()
        bg = (4, 12, 84)
        panel_bg = (8, 18, 104)
        header_bg = (18, 30, 118)
        border = (226, 236, 255)
        text_main = (238, 245, 255)
        text_muted = (188, 204, 228)

        surface.fill(bg)

        margin = max(10, min(24, w // 34))
        frame = pygame.Rect(margin, margin, max(280, w - margin * 2), max(220, h - margin * 2))
        pygame.draw.rect(surface, panel_bg, frame)
        pygame.draw.rect(surface, border, frame, 2)

        header_h = max(40, min(56, h // 7))
        header = pygame.Rect(frame.x + 2, frame.y + 2, frame.w - 4, header_h)
        pygame.draw.rect(surface, header_bg, header)
        pygame.draw.line(surface, border, (header.x, header.bottom), (header.right, header.bottom), 1)

        title = self._app.font.render("Guess the Angle", True, text_main)
        surface.blit(title, title.get_rect(center=header.center))

        active = self._controller.active_index
        status = "Finished" if active is None else f"Round {active + 1}/{ROUND_COUNT}"
        stats = self._tiny_font.render(status, True, text_muted)
        surface.blit(stats, stats.get_rect(midright=(header.right - 12, header.centery)))

        content = pygame.Rect(
            frame.x + max(14, w // 48),
            header.bottom + max(12, h // 36),
            frame.w - max(28, w // 24),
            frame.bottom - header.bottom - max(62, h // 9),
        )
        col_w = content.w // ROUND_COUNT
        for idx in range(ROUND_COUNT):
            column = pygame.Rect(content.x + idx * col_w, content.y, col_w, content.h)
            self._render_column(surface, column, idx)

        if self._last_outcome is CommitOutcome.INVALID:
            footer = "Type a whole number from 0 to 360, then press Enter"
        elif self._controller.state is GameState.FINISHED:
            footer = "F5: New game  |  Esc: Quit"
        else:
            footer = "0-9: Type degrees  |  Enter: Confirm  |  F5: New game  |  Esc: Quit"
        footer_text = self._tiny_font.render(footer, True, text_muted)
        surface.blit(footer_text, footer_text.get_rect(midbottom=(frame.centerx, frame.bottom - 12)))

        if self._overlay:
            self._render_overlay(surface)

    def _render_column(self, surface: pygame.Surface, column: pygame.Rect, idx: int) -> None:
        text_main = (238, 245, 255)
        text_muted = (188, 204, 228)

        label = self._small_font.render(COLUMN_TITLES[idx], True, text_muted)
        surface.blit(label, label.get_rect(midtop=(column.centerx, column.y)))

        box_h = self._small_font.get_height() + 10
        side = max(40, min(column.w - 24, column.h - label.get_height() - box_h * 3 - 24))
        art = pygame.Rect(0, 0, side, side)
        art.midtop = (column.centerx, column.y + label.get_height() + 8)
        drawing = self._drawings.get(idx)
        if drawing is not None:
            _paint_drawing(surface, art, drawing)

        guess = self._fields[GUESS_FIELDS[idx]]
        box = pygame.Rect(0, 0, min(side, 140), box_h)
        box.midtop = (column.centerx, art.bottom + 10)
        # Inputs for rounds not yet reached stay hidden.
        if guess.enabled or guess.text:
            focused = guess.enabled and self._focused == GUESS_FIELDS[idx]
            pygame.draw.rect(surface, (244, 248, 255) if guess.enabled else (9, 20, 106), box)
            pygame.draw.rect(surface, (124, 148, 202), box, 2 if focused else 1)
            color = (16, 32, 88) if guess.enabled else text_main
            caret = "_" if focused else ""
            value = self._small_font.render(f"{guess.text}{caret}", True, color)
            surface.blit(value, value.get_rect(center=box.center))

        answer = self._fields[ANSWER_FIELDS[idx]]
        if answer.text:
            y = box.bottom + 6
            lines = answer.text.split("\n")
            for n, line in enumerate(lines):
                color = CATEGORY_COLORS.get(answer.tag or "", text_main) if n > 0 else text_main
                rendered = self._small_font.render(line, True, color)
                surface.blit(rendered, rendered.get_rect(midtop=(column.centerx, y)))
                y += self._small_font.get_linesize()

    def _render_overlay(self, surface: pygame.Surface) -> None:
        w, h = surface.get_size()
        shade = pygame.Surface((w, h), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 170))
        surface.blit(shade, (0, 0))

        popup = pygame.Rect(0, 0, max(260, int(w * 0.6)), max(160, int(h * 0.45)))
        popup.center = (w // 2, h // 2)
        pygame.draw.rect(surface, (8, 18, 104), popup)
        pygame.draw.rect(surface, (226, 236, 255), popup, 2)

        inner = popup.inflate(-32, -32)
        title_rect = pygame.Rect(inner.x, inner.y, inner.w, inner.h // 2)
        self._draw_wrapped_text(
            surface,
            self._fields[TITLE_FIELD].text,
            title_rect,
            color=(238, 245, 255),
            font=self._small_font,
            max_lines=3,
        )

        y = title_rect.bottom + 4
        for field_id in (SCORE_FIELD, BREAKDOWN_FIELD):
            rendered = self._small_font.render(self._fields[field_id].text, True, (188, 204, 228))
            surface.blit(rendered, rendered.get_rect(midtop=(popup.centerx, y)))
            y += self._small_font.get_linesize() + 4

    def _draw_wrapped_text(
        self,
        surface: pygame.Surface,
        text: str,
        rect: pygame.Rect,
        *,
        color: tuple[int, int, int],
        font: pygame.font.Font,
        max_lines: int,
    ) -> None:
        words = str(text).split()
        lines: list[str] = []
        cur = ""
        for word in words:
            trial = word if cur == "" else f"{cur} {word}"
            if font.size(trial)[0] <= rect.w:
                cur = trial
                continue
            if cur:
                lines.append(cur)
            cur = word
        if cur:
            lines.append(cur)

        y = rect.y
        line_h = font.get_linesize() + 2
        for line in lines[: max(0, max_lines)]:
            surface.blit(font.render(line, True, color), (rect.x, y))
            y += line_h


def _paint_drawing(surface: pygame.Surface, rect: pygame.Rect, drawing: Drawing) -> None:
    """Paint an abstract drawing scaled into ``rect``; discs first, then rays."""

    scale = rect.w / drawing.size

    def to_local(point: tuple[float, float]) -> tuple[float, float]:
        return (point[0] * scale, point[1] * scale)

    def to_screen(point: tuple[float, float]) -> tuple[float, float]:
        x, y = to_local(point)
        return (rect.x + x, rect.y + y)

    for disc in drawing.discs:
        radius = max(1.0, disc.radius * scale)
        if disc.clip is None:
            pygame.draw.circle(surface, disc.color, to_screen(disc.center), radius)
            continue

        # Clip through alpha: keep the disc only where the polygon mask is opaque.
        layer = pygame.Surface(rect.size, pygame.SRCALPHA)
        pygame.draw.circle(layer, (*disc.color, 255), to_local(disc.center), radius)
        mask = pygame.Surface(rect.size, pygame.SRCALPHA)
        pygame.draw.polygon(mask, (255, 255, 255, 255), [to_local(p) for p in disc.clip])
        layer.blit(mask, (0, 0), special_flags=pygame.BLEND_RGBA_MIN)
        surface.blit(layer, rect.topleft)

    width = max(1, int(round(scale)))
    for ray in drawing.rays:
        pygame.draw.line(surface, ray.color, to_screen(ray.start), to_screen(ray.end), width)


def run(
    *,
    max_frames: int | None = None,
    event_injector: Callable[[int], None] | None = None,
    config: GameConfig | None = None,
) -> int:
    cfg = config or GameConfig.from_env()

    pygame.init()
    pygame.display.set_caption("Guess the Angle")
    surface = pygame.display.set_mode(WINDOW_SIZE, pygame.RESIZABLE)

    font = pygame.font.Font(None, 36)
    clock = pygame.time.Clock()

    app = App(surface=surface, font=font)
    app.push(GameScreen(app, config=cfg))

    frame = 0
    try:
        while app.running:
            if event_injector is not None:
                event_injector(frame)

            for event in pygame.event.get():
                app.handle_event(event)

            app.render()

            pygame.display.flip()

            frame += 1
            if max_frames is not None and frame >= max_frames:
                break

            clock.tick(TARGET_FPS)
    finally:
        pygame.quit()

    return 0
