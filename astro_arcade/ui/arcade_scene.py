"""Playing scene: wires input, simulation, renderer and HUD together."""
from __future__ import annotations

import random
from typing import Optional

import pygame

from astro_arcade.engine.input import InputMapper
from astro_arcade.engine.logger import GameLogger
from astro_arcade.engine.scene import Scene
from astro_arcade.engine.scheduler import Scheduler
from astro_arcade.math.geometry import FieldBounds
from astro_arcade.render.hud import HUD
from astro_arcade.render.renderer import ArcadeRenderer
from astro_arcade.render.state import RenderSnapshot
from astro_arcade.world.simulation import SimulationLoop
from astro_arcade.world.tuning import TICK_RATE


class ArcadeScene(Scene):
    def __init__(self, manager) -> None:
        super().__init__(manager)
        self.input: InputMapper | None = None
        self.logger: GameLogger | None = None
        self.scheduler: Scheduler | None = None
        self.simulation: SimulationLoop | None = None
        self.renderer: ArcadeRenderer | None = None
        self.hud = HUD()
        self.snapshot: RenderSnapshot | None = None

    def on_enter(self, **kwargs) -> None:
        self.input = kwargs["input"]
        self.logger = kwargs.get("logger")
        self.scheduler = kwargs["scheduler"]
        settings = kwargs.get("settings", {})
        width, height = kwargs.get("screen_size", (960, 720))
        seed: Optional[int] = settings.get("seed")
        self.input.release_all()
        self.input.set_screen_size((width, height))
        self.simulation = SimulationLoop(
            self.scheduler,
            FieldBounds(width, height),
            rng=random.Random(seed),
            logger=self.logger,
            render=self._receive_snapshot,
            hud=self.hud.update,
            intent_source=self.input.sample,
            tick_rate=settings.get("simHz", TICK_RATE),
        )
        self.simulation.reset()
        self.snapshot = self.simulation.snapshot()

    def on_exit(self) -> None:
        if self.simulation is not None:
            self.simulation.halt()
            self.simulation.machine.cancel_pending()

    def _receive_snapshot(self, snapshot: RenderSnapshot) -> None:
        self.snapshot = snapshot

    def handle_event(self, event: pygame.event.Event) -> None:
        if self.simulation is None or self.input is None:
            return
        if event.type == pygame.VIDEORESIZE:
            self.simulation.resize(event.w, event.h)
            self.input.set_screen_size((event.w, event.h))
            self.snapshot = self.simulation.snapshot()
            return
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.manager.request("title")
            return
        self.input.handle_event(event)
        restart = self.input.consume_action("restart")
        if restart and self.simulation.state.is_over:
            self.input.release_all()
            self.simulation.reset()
            self.snapshot = self.simulation.snapshot()

    def render(self, surface: pygame.Surface) -> None:
        if self.renderer is None:
            self.renderer = ArcadeRenderer(surface)
        else:
            self.renderer.set_surface(surface)
        if self.simulation is not None and not self.simulation.state.is_playing:
            # No ticks run outside PLAYING.
            self.snapshot = self.simulation.snapshot()
        if self.snapshot is not None:
            self.renderer.draw(self.snapshot)
        pressed = [action for action, held in self.input.held.items() if held] if self.input else []
        buttons = self.input.touch_buttons if self.input else ()
        over = self.simulation is not None and self.simulation.state.is_over
        self.hud.draw(surface, buttons, pressed, restart_hint=over)


__all__ = ["ArcadeScene"]
