from __future__ import annotations

from esper import World

from pairs.components.game_clock import GameClock, TurnTimer
from pairs.components.settings_panel import ConfirmPrompt
from pairs.constants import CLOCK_PERIOD_SECONDS
from pairs.events.bus import (
    EventBus,
    EVENT_ELAPSED_TIME_CHANGED,
    EVENT_TICK,
    EVENT_TIME_REMAINING_CHANGED,
    EVENT_TURN_TIMEOUT,
)


class ClockSystem:
    """Turns frame ticks into whole-second periods for the timer handles.

    The clock only counts and reports. What a timeout means is decided by the
    board system listening for ``EVENT_TURN_TIMEOUT``.
    """

    def __init__(self, world: World, event_bus: EventBus, *, period: float = CLOCK_PERIOD_SECONDS) -> None:
        self.world = world
        self.event_bus = event_bus
        self.period = period
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **payload) -> None:
        try:
            dt = float(payload.get("dt", 0.0))
        except (TypeError, ValueError):
            return
        if dt <= 0:
            return
        # Both clocks are frozen while the player is asked to discard the game.
        if self._prompt_active():
            return
        self._advance_game_clocks(dt)
        self._advance_turn_timers(dt)

    def _prompt_active(self) -> bool:
        return any(True for _ in self.world.get_component(ConfirmPrompt))

    def _advance_game_clocks(self, dt: float) -> None:
        for _, clock in list(self.world.get_component(GameClock)):
            clock.accumulator += dt
            while clock.accumulator >= self.period:
                clock.accumulator -= self.period
                clock.elapsed_seconds += 1
                self.event_bus.emit(EVENT_ELAPSED_TIME_CHANGED, seconds=clock.elapsed_seconds)

    def _advance_turn_timers(self, dt: float) -> None:
        for ent, timer in list(self.world.get_component(TurnTimer)):
            timer.accumulator += dt
            while timer.accumulator >= self.period:
                timer.accumulator -= self.period
                timer.remaining_seconds -= 1
                self.event_bus.emit(EVENT_TIME_REMAINING_CHANGED, seconds=max(timer.remaining_seconds, 0))
                if timer.remaining_seconds <= 0:
                    self.event_bus.emit(EVENT_TURN_TIMEOUT, board_entity=ent)
                    break
