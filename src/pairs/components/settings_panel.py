"""Components backing the settings panel and the discard confirmation prompt."""
from dataclasses import dataclass, field
from typing import Any, Dict, List

from pairs.settings import SETTINGS_FIELDS, GameSettings


@dataclass(slots=True)
class SettingsPanel:
    """Editable copy of the settings plus the live symbol preview."""

    values: Dict[str, int] = field(default_factory=dict)
    visible: bool = False
    focused_field: str = SETTINGS_FIELDS[0]
    preview: List[int] = field(default_factory=list)
    apply_enabled: bool = True

    @classmethod
    def from_settings(cls, settings: GameSettings) -> "SettingsPanel":
        return cls(values={name: getattr(settings, name) for name in SETTINGS_FIELDS})


@dataclass(slots=True)
class ConfirmPrompt:
    """A start/apply request waiting for the player to confirm discarding the game."""

    action: str
    payload: Dict[str, Any] = field(default_factory=dict)
    message: str = "The current game is not finished. Start a new one anyway?"
