import random

from esper import World

from .events.bus import EventBus
from pairs.components.game_state import GameMode, GameState
from pairs.components.settings_panel import SettingsPanel
from pairs.settings import GameSettings


def create_world(
    event_bus: EventBus,
    settings: GameSettings | None = None,
    *,
    rng: random.Random | None = None,
) -> World:
    """Create the world with its singleton state and settings panel entities.

    The board itself is only created when a game starts.
    """
    world = World()
    setattr(world, "random", rng or random.Random())

    settings = (settings or GameSettings()).validate()
    state_entity = world.create_entity()
    world.add_component(state_entity, GameState(mode=GameMode.IDLE, settings=settings))
    world.create_entity(SettingsPanel.from_settings(settings))
    return world
