"""Entry point for Astro Arcade."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pygame

from astro_arcade.engine.input import InputBindings, InputMapper
from astro_arcade.engine.logger import init_logger
from astro_arcade.engine.loop import FrameDriver
from astro_arcade.engine.scene import SceneManager
from astro_arcade.engine.scheduler import Scheduler
from astro_arcade.ui.arcade_scene import ArcadeScene
from astro_arcade.ui.title_scene import TitleScene


SETTINGS_PATH = Path("settings.json")
DEFAULT_SETTINGS: Dict[str, Any] = {
    "resolution": [960, 720],
    "simHz": 45,
    "maxFps": 60,
    "seed": None,
}


def load_settings(path: Path = SETTINGS_PATH) -> Dict[str, Any]:
    settings = dict(DEFAULT_SETTINGS)
    if not path.exists():
        return settings
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError:
        return settings
    if isinstance(data, dict):
        settings.update(data)
    return settings


def main() -> None:
    settings = load_settings()
    pygame.init()
    resolution = tuple(settings.get("resolution", DEFAULT_SETTINGS["resolution"]))

    screen = pygame.display.set_mode(resolution, pygame.RESIZABLE)
    pygame.display.set_caption("Astro Arcade")
    clock = pygame.time.Clock()

    logger = init_logger(settings)
    input_mapper = InputMapper(InputBindings.from_settings(settings), screen.get_size(), logger)
    scheduler = Scheduler()

    manager = SceneManager()
    manager.register("title", TitleScene)
    manager.register("arcade", ArcadeScene)
    manager.set_context(
        input=input_mapper,
        logger=logger,
        scheduler=scheduler,
        settings=settings,
        screen_size=screen.get_size(),
    )
    manager.activate("title")

    def process_events() -> None:
        nonlocal screen
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                driver.stop()
                return
            if event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                manager.set_context(screen_size=(event.w, event.h))
            manager.handle_event(event)

    def render() -> None:
        manager.render(screen)
        pygame.display.flip()
        clock.tick(settings.get("maxFps", 60))

    driver = FrameDriver(scheduler, render, process_events)
    try:
        driver.run()
    finally:
        pygame.quit()
        print("\nUsage: Left/Right or A/D rotate, Up/W thrust, Space fires, -/= adjust thrust, Enter restarts after game over.")


if __name__ == "__main__":
    main()
