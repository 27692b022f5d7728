"""
Speed table for the power evaluator.

Maps a monster speed rating to the energy it gains per game turn. A monster at
normal speed (110) gains 10 energy per turn; the table flattens out at both
ends so very slow and very fast monsters stay within sane bounds.
"""

from collections.abc import Sequence
from typing import Any

from bestiary.core.constants import HASTE_BONUS, SpellFlag

# fmt: off
ENERGY_PER_TURN: tuple[int, ...] = (
    # Slow
    1,  1,  1,  1,  1,  1,  1,  1,  1,  1,
    1,  1,  1,  1,  1,  1,  1,  1,  1,  1,
    1,  1,  1,  1,  1,  1,  1,  1,  1,  1,
    1,  1,  1,  1,  1,  1,  1,  1,  1,  1,
    1,  1,  1,  1,  1,  1,  1,  1,  1,  1,
    1,  1,  1,  1,  1,  1,  1,  1,  1,  1,
    # S-50
    1,  1,  1,  1,  1,  1,  1,  1,  1,  1,
    # S-40
    2,  2,  2,  2,  2,  2,  2,  2,  2,  2,
    # S-30
    2,  2,  2,  2,  2,  2,  2,  3,  3,  3,
    # S-20
    3,  3,  3,  3,  3,  4,  4,  4,  4,  4,
    # S-10
    5,  5,  5,  5,  6,  6,  7,  7,  8,  9,
    # Normal
    10, 11, 12, 13, 14, 15, 16, 17, 18, 19,
    # F+10
    20, 21, 22, 23, 24, 25, 26, 27, 28, 29,
    # F+20
    30, 31, 32, 33, 34, 35, 36, 36, 37, 37,
    # F+30
    38, 38, 39, 39, 40, 40, 40, 41, 41, 41,
    # F+40
    42, 42, 42, 43, 43, 43, 44, 44, 44, 44,
    # F+50
    45, 45, 45, 45, 45, 46, 46, 46, 46, 46,
    # F+60
    47, 47, 47, 47, 47, 48, 48, 48, 48, 48,
    # F+70
    49, 49, 49, 49, 49, 49, 49, 49, 49, 49,
    # Fast
    49, 49, 49, 49, 49, 49, 49, 49, 49, 49,
)
# fmt: on


class SpeedTable:
    """Read-only lookup from speed rating to energy per game turn."""

    def __init__(self, energy: Sequence[int] | None = None) -> None:
        """
        Initialize the table.

        Args:
            energy (Sequence[int] | None):
                Energy per turn indexed by speed. Defaults to the classic
                200-entry table.

        """
        self._energy = tuple(energy) if energy is not None else ENERGY_PER_TURN
        if not self._energy:
            raise ValueError("SpeedTable requires at least one entry")

    def __len__(self) -> int:
        return len(self._energy)

    def energy(self, speed: int, hasted: bool = False) -> int:
        """
        Returns the energy per game turn for the given speed.

        Args:
            speed (int): The speed rating.
            hasted (bool): Whether the monster can haste itself.

        Returns:
            int: The energy gained per game turn.

        """
        index = speed + (HASTE_BONUS if hasted else 0)
        index = max(0, min(index, len(self._energy) - 1))
        return self._energy[index]

    def energy_for(self, template: Any) -> int:
        """Returns the energy for a monster template, counting self-haste."""
        return self.energy(template.speed, template.casts(SpellFlag.HASTE))


DEFAULT_SPEED_TABLE = SpeedTable()
