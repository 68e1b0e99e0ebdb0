"""Launch screen listing the active control bindings."""
from __future__ import annotations

from typing import List, Optional

import pygame

from astro_arcade.engine.input import InputBindings, InputMapper
from astro_arcade.engine.scene import Scene

TITLE = "ASTRO ARCADE"
PROMPT = "Press any key or tap to launch"
TITLE_COLOR = (200, 240, 255)
PROMPT_COLOR = (180, 200, 220)
HINT_COLOR = (140, 160, 180)
QUIT_KEYS = (pygame.K_q, pygame.K_ESCAPE)

ACTION_LABELS = (
    ("turn_left", "Turn left"),
    ("turn_right", "Turn right"),
    ("thrust", "Thrust"),
    ("fire", "Fire"),
    ("decrease_thrust", "Less thrust"),
    ("increase_thrust", "More thrust"),
    ("restart", "Restart"),
)


def _binding_label(name: str) -> str:
    if name.startswith("K_"):
        return pygame.key.name(getattr(pygame, name, 0)) or name[2:]
    return name.replace("BUTTON_", "").lower() + " click"


def control_lines(bindings: InputBindings) -> List[str]:
    lines = []
    for action, label in ACTION_LABELS:
        names = bindings.actions.get(action, [])
        if names:
            lines.append(f"{label}: {' / '.join(_binding_label(name) for name in names)}")
    return lines


class TitleScene(Scene):
    def __init__(self, manager) -> None:
        super().__init__(manager)
        self.title_font: Optional[pygame.font.Font] = None
        self.hint_font: Optional[pygame.font.Font] = None
        self.controls: List[str] = []

    def on_enter(self, **context) -> None:
        mapper: Optional[InputMapper] = context.get("input")
        self.controls = control_lines(mapper.bindings if mapper else InputBindings())
        self.title_font = pygame.font.SysFont("consolas", 32)
        self.hint_font = pygame.font.SysFont("consolas", 18)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN and event.key in QUIT_KEYS:
            pygame.event.post(pygame.event.Event(pygame.QUIT))
        elif event.type in (pygame.KEYDOWN, pygame.MOUSEBUTTONDOWN, pygame.FINGERDOWN):
            self.manager.request("arcade")

    def render(self, surface: pygame.Surface) -> None:
        surface.fill((0, 0, 0))
        center_x = surface.get_width() / 2
        y = surface.get_height() / 2 - 140
        for text, font, color, gap in (
            (TITLE, self.title_font, TITLE_COLOR, 56),
            (PROMPT, self.title_font, PROMPT_COLOR, 64),
        ):
            rendered = font.render(text, True, color)
            surface.blit(rendered, (center_x - rendered.get_width() / 2, y))
            y += gap
        for line in self.controls:
            rendered = self.hint_font.render(line, True, HINT_COLOR)
            surface.blit(rendered, (center_x - rendered.get_width() / 2, y))
            y += rendered.get_height() + 4


__all__ = ["TitleScene", "control_lines"]
