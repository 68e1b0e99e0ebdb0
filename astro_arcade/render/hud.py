"""Heads-up display drawing."""
from __future__ import annotations

from typing import List, Optional, Sequence

import pygame

from astro_arcade.engine.input import TouchButton
from astro_arcade.world.state import HUDStatus

HUD_COLOR = (220, 235, 255)
MESSAGE_COLOR = (255, 230, 120)
BUTTON_COLOR = (120, 160, 200)
BUTTON_ACTIVE_COLOR = (230, 240, 255)
HUD_MARGIN = 12
LINE_SPACING = 4


def format_thrust(multiplier: float) -> str:
    return f"{multiplier:.1f}"


def hud_lines(status: HUDStatus) -> List[str]:
    return [
        f"Score: {status.score}",
        f"Lives: {status.lives}",
        f"Thrust: {format_thrust(status.thrust_multiplier)}x",
        f"Power-up: {status.power_up_label}",
    ]


class HUD:
    """Write-only display of score, lives, thrust and the active power-up."""

    def __init__(self) -> None:
        self.status: Optional[HUDStatus] = None
        self.font: Optional[pygame.font.Font] = None
        self.message_font: Optional[pygame.font.Font] = None

    def update(self, status: HUDStatus) -> None:
        self.status = status

    def _ensure_fonts(self) -> None:
        if self.font is None:
            self.font = pygame.font.SysFont("consolas", 20)
        if self.message_font is None:
            self.message_font = pygame.font.SysFont("consolas", 36, bold=True)

    def draw(
        self,
        surface: pygame.Surface,
        buttons: Sequence[TouchButton] = (),
        pressed: Sequence[str] = (),
        restart_hint: bool = False,
    ) -> None:
        if self.status is None:
            return
        self._ensure_fonts()
        y = HUD_MARGIN
        for line in hud_lines(self.status):
            text = self.font.render(line, True, HUD_COLOR)
            surface.blit(text, (HUD_MARGIN, y))
            y += text.get_height() + LINE_SPACING

        for button in buttons:
            color = BUTTON_ACTIVE_COLOR if button.action in pressed else BUTTON_COLOR
            pygame.draw.rect(surface, color, button.rect, 2, border_radius=10)
            label = self.font.render(button.label, True, color)
            surface.blit(label, label.get_rect(center=button.rect.center))

        if self.status.message:
            self._draw_centered(surface, self.status.message, 0)
            if restart_hint:
                self._draw_centered(surface, "Press Enter to restart", 48, font=self.font)

    def _draw_centered(
        self,
        surface: pygame.Surface,
        message: str,
        offset: int,
        font: Optional[pygame.font.Font] = None,
    ) -> None:
        font = font or self.message_font
        text = font.render(message, True, MESSAGE_COLOR)
        x = surface.get_width() / 2 - text.get_width() / 2
        y = surface.get_height() / 2 - text.get_height() / 2 + offset
        surface.blit(text, (x, y))


__all__ = ["HUD", "format_thrust", "hud_lines"]
