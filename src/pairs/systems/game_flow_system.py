from __future__ import annotations

import logging
from typing import Callable

from esper import World

from pairs.components.settings_panel import ConfirmPrompt
from pairs.events.bus import (
    EventBus,
    EVENT_CONFIRM_ACCEPTED,
    EVENT_CONFIRM_DECLINED,
    EVENT_CONFIRM_REQUIRED,
    EVENT_SETTINGS_APPLY_REQUEST,
    EVENT_SETTINGS_INVALID,
    EVENT_START_GAME_REQUEST,
)
from pairs.settings import ConfigurationError, GameSettings
from pairs.systems.board import BoardSystem
from pairs.utils.game_state import get_game_state

logger = logging.getLogger(__name__)

ACTION_START = "start"
ACTION_APPLY = "apply"


class GameFlowSystem:
    """Handles start-game and apply-settings requests behind the discard confirmation.

    With a ``confirm_discard`` callable the gate blocks on it. Without one, a
    ``ConfirmPrompt`` entity is spawned and the request is replayed once the
    player accepts it.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        board_system: BoardSystem,
        *,
        confirm_discard: Callable[[], bool] | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.board_system = board_system
        self._confirm_discard = confirm_discard
        self.event_bus.subscribe(EVENT_START_GAME_REQUEST, self.on_start_game_request)
        self.event_bus.subscribe(EVENT_SETTINGS_APPLY_REQUEST, self.on_settings_apply_request)
        self.event_bus.subscribe(EVENT_CONFIRM_ACCEPTED, self.on_confirm_accepted)
        self.event_bus.subscribe(EVENT_CONFIRM_DECLINED, self.on_confirm_declined)

    def on_start_game_request(self, sender, **payload) -> None:
        self.request_start()

    def on_settings_apply_request(self, sender, **payload) -> None:
        values = {
            "rows": payload.get("rows"),
            "columns": payload.get("columns"),
            "group_size": payload.get("group_size"),
            "start_symbol": payload.get("start_symbol"),
            "move_timeout_seconds": payload.get("timeout_seconds", 0),
        }
        self.request_apply(**values)

    def request_start(self) -> bool:
        if not self._confirm(ACTION_START):
            return False
        self._start()
        return True

    def request_apply(self, **values) -> bool:
        try:
            settings = GameSettings(**{k: int(v) for k, v in values.items()}).validate()
        except (TypeError, ValueError) as exc:
            # ConfigurationError is a ValueError; int(None) lands here as TypeError.
            reason = str(exc) if isinstance(exc, ConfigurationError) else f"invalid settings: {exc}"
            logger.warning("Rejected settings %s: %s", values, reason)
            self.event_bus.emit(EVENT_SETTINGS_INVALID, reason=reason)
            return False
        if not self._confirm(ACTION_APPLY, settings=settings):
            return False
        self._apply(settings)
        return True

    def on_confirm_accepted(self, sender, **payload) -> None:
        prompt = self._pop_prompt()
        if prompt is None:
            return
        if prompt.action == ACTION_APPLY:
            self._apply(prompt.payload["settings"])
        else:
            self._start()

    def on_confirm_declined(self, sender, **payload) -> None:
        prompt = self._pop_prompt()
        if prompt is not None:
            logger.debug("Kept running game, %s request declined", prompt.action)

    def pending_prompt(self) -> ConfirmPrompt | None:
        for _, prompt in self.world.get_component(ConfirmPrompt):
            return prompt
        return None

    def _confirm(self, action: str, **payload) -> bool:
        if not self.board_system.game_in_progress():
            return True
        if self._confirm_discard is not None:
            return bool(self._confirm_discard())
        # Only the latest request waits for an answer.
        self._pop_prompt()
        self.world.create_entity(ConfirmPrompt(action=action, payload=payload))
        self.event_bus.emit(EVENT_CONFIRM_REQUIRED, action=action)
        return False

    def _pop_prompt(self) -> ConfirmPrompt | None:
        for ent, prompt in list(self.world.get_component(ConfirmPrompt)):
            self.world.delete_entity(ent, immediate=True)
            return prompt
        return None

    def _start(self) -> None:
        state = get_game_state(self.world)
        self.board_system.create_game(state.settings if state else None)

    def _apply(self, settings: GameSettings) -> None:
        state = get_game_state(self.world)
        if state is not None:
            state.settings = settings
        logger.info("Applying settings %s", settings)
        self.board_system.teardown(reason="settings_applied")
        self.board_system.create_game(settings)
