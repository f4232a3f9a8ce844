"""Suppression-effect field: water/retardant deposits and firebreaks."""

import logging
import math
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

WATER_WEIGHT = 0.8
RETARDANT_WEIGHT = 0.9


class SuppressionKind(Enum):
    """Material dropped on the lattice by a suppression action."""
    Water = "water"
    Retardant = "retardant"


@dataclass
class SuppressionEffect:
    """Suppression state of a single lattice position."""

    water_level: float = 0.0
    retardant_level: float = 0.0
    remaining_time: float = 0.0
    is_firebreak: bool = False

    @property
    def modifier(self) -> float:
        """Combined suppression strength in [0, 1]."""
        return min(1.0, self.water_level * WATER_WEIGHT + self.retardant_level * RETARDANT_WEIGHT)

    @property
    def active(self) -> bool:
        return self.water_level > 0.0 or self.retardant_level > 0.0 or self.is_firebreak

    def deposit(self, kind: SuppressionKind, level: float, duration: float) -> None:
        # Re-application refreshes, it never stacks
        if kind == SuppressionKind.Water:
            self.water_level = max(self.water_level, level)
        else:
            self.retardant_level = max(self.retardant_level, level)
        self.remaining_time = max(self.remaining_time, duration)

    def decay(self, dt: float) -> None:
        if self.remaining_time <= 0.0:
            return
        self.remaining_time -= dt
        if self.remaining_time <= 0.0:
            self.water_level = 0.0
            self.retardant_level = 0.0

    def snapshot(self) -> "SuppressionSnapshot":
        return SuppressionSnapshot(
            water_level=self.water_level,
            retardant_level=self.retardant_level,
            remaining_time=self.remaining_time,
            is_firebreak=self.is_firebreak,
        )


@dataclass(frozen=True)
class SuppressionSnapshot:
    """Read-only view of a suppression entry."""

    water_level: float
    retardant_level: float
    remaining_time: float
    is_firebreak: bool


class SuppressionField:
    """Per-position suppression entries stored in a flat ``y * width + x`` array.

    Positions outside the field are silently ignored by every operation, so
    callers can drop suppression near the lattice border without clipping
    the footprint themselves.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self._effects = [SuppressionEffect() for _ in range(width * height)]

    def is_valid_position(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def entry(self, index: int) -> SuppressionEffect:
        return self._effects[index]

    def _get(self, x: int, y: int) -> SuppressionEffect | None:
        if not self.is_valid_position(x, y):
            return None
        return self._effects[y * self.width + x]

    def apply(
        self,
        center: tuple[int, int],
        radius: int,
        kind: SuppressionKind,
        effectiveness: float,
        duration: float,
    ) -> int:
        """
        Deposit water or retardant around ``center``.

        Every position within Euclidean ``radius`` (inclusive) receives
        ``effectiveness * (1 - distance / radius)`` merged with ``max``.
        A zero radius covers only the center at full strength.

        Returns:
            Number of in-bounds positions touched
        """
        cx, cy = center
        radius = int(radius)
        effectiveness = min(1.0, max(0.0, effectiveness))
        touched = 0

        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                effect = self._get(cx + dx, cy + dy)
                if effect is None:
                    continue
                distance = math.hypot(dx, dy)
                if distance > radius:
                    continue
                distance_factor = 1.0 - distance / radius if radius > 0 else 1.0
                effect.deposit(kind, effectiveness * distance_factor, duration)
                touched += 1

        logger.debug(
            f"{kind.value} deposit at {center} r={radius} eff={effectiveness:.2f} "
            f"for {duration}s touched {touched} cells"
        )
        return touched

    def mark_firebreak(self, position: tuple[int, int]) -> None:
        """Flag a position as a permanent firebreak, wiping any deposit there."""
        effect = self._get(*position)
        if effect is None:
            return
        effect.water_level = 0.0
        effect.retardant_level = 0.0
        effect.remaining_time = 0.0
        effect.is_firebreak = True

    def decay(self, dt: float) -> None:
        for effect in self._effects:
            effect.decay(dt)

    def modifier(self, position: tuple[int, int]) -> float:
        effect = self._get(*position)
        return 0.0 if effect is None else effect.modifier

    def is_firebreak(self, position: tuple[int, int]) -> bool:
        effect = self._get(*position)
        return effect is not None and effect.is_firebreak

    def has_effect(self, position: tuple[int, int]) -> bool:
        effect = self._get(*position)
        return effect is not None and effect.active

    def snapshot(self, position: tuple[int, int]) -> SuppressionSnapshot | None:
        effect = self._get(*position)
        return None if effect is None else effect.snapshot()
