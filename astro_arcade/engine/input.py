"""Input mapping, rebind support and control-intent sampling."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pygame

from astro_arcade.engine.logger import ChannelLogger, GameLogger
from astro_arcade.world.state import ControlIntent

DEFAULT_BINDINGS = {
    "turn_left": ["K_LEFT", "K_a"],
    "turn_right": ["K_RIGHT", "K_d"],
    "thrust": ["K_UP", "K_w"],
    "fire": ["K_SPACE", "BUTTON_LEFT"],
    "decrease_thrust": ["K_MINUS", "K_KP_MINUS"],
    "increase_thrust": ["K_EQUALS", "K_KP_PLUS"],
    "restart": ["K_RETURN", "K_r"],
}

HELD_ACTIONS = ("turn_left", "turn_right", "thrust", "fire")
TRIGGER_ACTIONS = ("decrease_thrust", "increase_thrust", "restart")

MOUSE_BUTTONS = {
    "BUTTON_LEFT": 0,
    "BUTTON_MIDDLE": 1,
    "BUTTON_RIGHT": 2,
}

TOUCH_BUTTON_SIZE = 72
TOUCH_BUTTON_MARGIN = 16


@dataclass
class InputBindings:
    """Runtime structure representing current bindings."""

    actions: Dict[str, List[str]] = field(default_factory=lambda: {k: list(v) for k, v in DEFAULT_BINDINGS.items()})

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> "InputBindings":
        """Overlay the ``bindings`` block of the settings on the defaults."""

        actions = {k: list(v) for k, v in DEFAULT_BINDINGS.items()}
        overrides = settings.get("bindings") or {}
        if isinstance(overrides, Mapping):
            actions.update({k: list(v) for k, v in overrides.items()})
        return cls(actions=actions)

    @classmethod
    def load(cls, path: Path) -> "InputBindings":
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError:
            return cls()
        return cls.from_settings(data if isinstance(data, dict) else {})

    def save(self, path: Path) -> None:
        path.write_text(json.dumps({"bindings": self.actions}, indent=2))

    def key_actions(self) -> Dict[int, List[str]]:
        """Resolve key names such as ``K_SPACE`` to pygame key codes."""

        resolved: Dict[int, List[str]] = {}
        for action, names in self.actions.items():
            for name in names:
                if not name.startswith("K_"):
                    continue
                code = getattr(pygame, name, None)
                if isinstance(code, int):
                    resolved.setdefault(code, []).append(action)
        return resolved

    def button_actions(self) -> Dict[int, List[str]]:
        """Map 1-based pygame mouse button numbers to actions."""

        resolved: Dict[int, List[str]] = {}
        for action, names in self.actions.items():
            for name in names:
                if name in MOUSE_BUTTONS:
                    resolved.setdefault(MOUSE_BUTTONS[name] + 1, []).append(action)
        return resolved


@dataclass
class TouchButton:
    action: str
    label: str
    rect: pygame.Rect


def layout_touch_buttons(screen_size: Tuple[int, int]) -> List[TouchButton]:
    """Place the on-screen control pad along the bottom edge."""

    width, height = screen_size
    size = TOUCH_BUTTON_SIZE
    margin = TOUCH_BUTTON_MARGIN
    top = height - size - margin
    return [
        TouchButton("turn_left", "<", pygame.Rect(margin, top, size, size)),
        TouchButton("turn_right", ">", pygame.Rect(margin * 2 + size, top, size, size)),
        TouchButton("thrust", "^", pygame.Rect(width - (size + margin) * 2, top, size, size)),
        TouchButton("fire", "*", pygame.Rect(width - size - margin, top, size, size)),
    ]


class InputMapper:
    """Turns keyboard, pointer and touch events into a :class:`ControlIntent`.

    Event handlers only flip flags; the simulation calls :meth:`sample` once
    per tick to take a snapshot.
    """

    def __init__(
        self,
        bindings: Optional[InputBindings] = None,
        screen_size: Tuple[int, int] = (0, 0),
        logger: Optional[GameLogger] = None,
    ) -> None:
        self.bindings = bindings or InputBindings()
        self._key_actions = self.bindings.key_actions()
        self._button_actions = self.bindings.button_actions()
        self.held: Dict[str, bool] = {action: False for action in HELD_ACTIONS}
        self.triggers: Dict[str, bool] = {action: False for action in TRIGGER_ACTIONS}
        self.screen_size = screen_size
        self.touch_buttons: List[TouchButton] = layout_touch_buttons(screen_size)
        self._pointer_actions: Dict[object, List[str]] = {}
        self._log: Optional[ChannelLogger] = logger.channel("input") if logger else None

    def set_screen_size(self, screen_size: Tuple[int, int]) -> None:
        self.screen_size = screen_size
        self.touch_buttons = layout_touch_buttons(screen_size)

    def _set(self, action: str, pressed: bool) -> None:
        if action in self.held:
            self.held[action] = pressed
        elif action in self.triggers and pressed:
            self.triggers[action] = True
        if self._log:
            self._log.debug("%s %s", action, "down" if pressed else "up")

    def _touch_button_at(self, position: Tuple[float, float]) -> Optional[TouchButton]:
        for button in self.touch_buttons:
            if button.rect.collidepoint(position):
                return button
        return None

    def _press_pointer(self, pointer: object, position: Tuple[float, float], fallback: List[str]) -> None:
        button = self._touch_button_at(position)
        actions = [button.action] if button is not None else list(fallback)
        if not actions:
            return
        self._pointer_actions[pointer] = actions
        for action in actions:
            self._set(action, True)

    def _release_pointer(self, pointer: object) -> None:
        for action in self._pointer_actions.pop(pointer, []):
            self._set(action, False)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type in (pygame.KEYDOWN, pygame.KEYUP):
            pressed = event.type == pygame.KEYDOWN
            for action in self._key_actions.get(event.key, ()):
                self._set(action, pressed)
            return
        if event.type == pygame.MOUSEBUTTONDOWN:
            self._press_pointer(("mouse", event.button), event.pos, self._button_actions.get(event.button, []))
            return
        if event.type == pygame.MOUSEBUTTONUP:
            self._release_pointer(("mouse", event.button))
            return
        if event.type == pygame.FINGERDOWN:
            width, height = self.screen_size
            self._press_pointer(("finger", event.finger_id), (int(event.x * width), int(event.y * height)), [])
            return
        if event.type == pygame.FINGERUP:
            self._release_pointer(("finger", event.finger_id))

    def action(self, name: str) -> bool:
        return self.held.get(name, False) or self.triggers.get(name, False)

    def consume_action(self, name: str) -> bool:
        value = self.triggers.get(name, False)
        if name in self.triggers:
            self.triggers[name] = False
        return value

    def sample(self) -> ControlIntent:
        """Snapshot the current intent and clear pending thrust triggers."""

        return ControlIntent(
            turn_left=self.held["turn_left"],
            turn_right=self.held["turn_right"],
            thrusting=self.held["thrust"],
            firing=self.held["fire"],
            decrease_thrust=self.consume_action("decrease_thrust"),
            increase_thrust=self.consume_action("increase_thrust"),
        )

    def release_all(self) -> None:
        for action in self.held:
            self.held[action] = False
        for action in self.triggers:
            self.triggers[action] = False
        self._pointer_actions.clear()


__all__ = [
    "DEFAULT_BINDINGS",
    "InputBindings",
    "InputMapper",
    "TouchButton",
    "layout_touch_buttons",
]
