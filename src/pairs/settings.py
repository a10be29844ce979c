"""Game configuration values and the layout validation shared by setup and the settings panel."""
from __future__ import annotations

from dataclasses import dataclass

from pairs.constants import (
    DEFAULT_COLUMNS,
    DEFAULT_GROUP_SIZE,
    DEFAULT_MOVE_TIMEOUT_SECONDS,
    DEFAULT_ROWS,
    DEFAULT_START_SYMBOL,
    MAX_SYMBOL,
    MIN_GROUP_SIZE,
)


class ConfigurationError(ValueError):
    """Raised when a board layout or option value cannot produce a game."""


SETTINGS_FIELDS = ("rows", "columns", "group_size", "start_symbol", "move_timeout_seconds")


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Options chosen for a game. Validation is explicit via ``validate``."""

    rows: int = DEFAULT_ROWS
    columns: int = DEFAULT_COLUMNS
    group_size: int = DEFAULT_GROUP_SIZE
    start_symbol: int = DEFAULT_START_SYMBOL
    move_timeout_seconds: int = DEFAULT_MOVE_TIMEOUT_SECONDS

    @property
    def tile_count(self) -> int:
        return self.rows * self.columns

    @property
    def total_groups(self) -> int:
        return self.tile_count // self.group_size

    def validate(self) -> "GameSettings":
        check_layout(self.rows, self.columns, self.group_size)
        if self.start_symbol < 0 or self.start_symbol + self.total_groups - 1 > MAX_SYMBOL:
            raise ConfigurationError(
                f"start symbol {self.start_symbol} leaves no room for {self.total_groups} symbols"
            )
        if self.move_timeout_seconds < 0:
            raise ConfigurationError("move timeout must not be negative")
        return self


def check_layout(rows: int, columns: int, group_size: int) -> None:
    """Raise ``ConfigurationError`` unless the board splits evenly into groups."""
    if rows <= 0 or columns <= 0:
        raise ConfigurationError(f"board must have positive size, got {rows}x{columns}")
    if group_size < MIN_GROUP_SIZE:
        raise ConfigurationError(f"group size must be at least {MIN_GROUP_SIZE}, got {group_size}")
    if (rows * columns) % group_size != 0:
        raise ConfigurationError(
            f"{rows * columns} tiles cannot be split into groups of {group_size}"
        )


def is_valid_layout(rows: int, columns: int, group_size: int) -> bool:
    try:
        check_layout(rows, columns, group_size)
    except ConfigurationError:
        return False
    return True


def preview_symbols(rows: int, columns: int, group_size: int, start_symbol: int) -> list[int]:
    """Return the distinct symbols a game with these values would use."""
    check_layout(rows, columns, group_size)
    return list(range(start_symbol, start_symbol + rows * columns // group_size))


def generate_symbols(rows: int, columns: int, group_size: int, start_symbol: int) -> list[int]:
    """Return every tile symbol in order: each distinct symbol repeated ``group_size`` times."""
    symbols: list[int] = []
    for symbol in preview_symbols(rows, columns, group_size, start_symbol):
        symbols.extend([symbol] * group_size)
    return symbols
