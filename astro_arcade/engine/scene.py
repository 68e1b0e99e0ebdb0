"""Scene switching between the title screen and the arcade."""
from __future__ import annotations

from typing import Any, Dict, Optional, Type

import pygame


class Scene:
    """One screen of the game. Collaborators arrive through ``on_enter``."""

    def __init__(self, manager: "SceneManager") -> None:
        self.manager = manager

    def on_enter(self, **context: Any) -> None:  # pragma: no cover - hooks
        pass

    def on_exit(self) -> None:  # pragma: no cover - hooks
        pass

    def handle_event(self, event: pygame.event.Event) -> None:
        pass

    def render(self, surface: pygame.Surface) -> None:
        pass


class SceneManager:
    """Holds the active scene and the context shared with every scene.

    Scenes ask for a switch with :meth:`request`; the switch happens once the
    current event has been handled so a scene never exits mid-callback.
    """

    def __init__(self) -> None:
        self._registry: Dict[str, Type[Scene]] = {}
        self._current: Optional[Scene] = None
        self._current_name: Optional[str] = None
        self._requested: Optional[str] = None
        self.context: Dict[str, Any] = {}

    def register(self, name: str, scene_cls: Type[Scene]) -> None:
        self._registry[name] = scene_cls

    def set_context(self, **values: Any) -> None:
        self.context.update(values)

    def activate(self, name: str, **overrides: Any) -> Scene:
        scene_cls = self._registry.get(name)
        if scene_cls is None:
            raise KeyError(f"Scene '{name}' is not registered")
        if self._current is not None:
            self._current.on_exit()
        scene = scene_cls(self)
        self._current = scene
        self._current_name = name
        self._requested = None
        scene.on_enter(**{**self.context, **overrides})
        return scene

    def request(self, name: str) -> None:
        if name not in self._registry:
            raise KeyError(f"Scene '{name}' is not registered")
        self._requested = name

    def active(self) -> Optional[Scene]:
        return self._current

    @property
    def active_name(self) -> Optional[str]:
        return self._current_name

    def _apply_request(self) -> None:
        if self._requested is not None:
            self.activate(self._requested)

    def handle_event(self, event: pygame.event.Event) -> None:
        if self._current is not None:
            self._current.handle_event(event)
        self._apply_request()

    def render(self, surface: pygame.Surface) -> None:
        self._apply_request()
        if self._current is not None:
            self._current.render(surface)


__all__ = ["Scene", "SceneManager"]
