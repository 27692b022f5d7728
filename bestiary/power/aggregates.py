"""
Per-depth population aggregates.

Running totals of effective hit points, damage and a weighted population count
for every depth, used as divisors when normalizing monster power.
"""

from dataclasses import dataclass

from bestiary.core.constants import MAX_DEPTH, OVERFLOW_DEPTHS, MonsterFlag
from bestiary.monster.template import MonsterTemplate

# Base population weight of a single monster.
BASE_COUNT = 10
FRIEND_COUNT = 20
FRIENDS_COUNT = 50


@dataclass(frozen=True)
class DepthContribution:
    """The totals held by one depth slot."""

    hp: int
    dam: int
    count: int


def population_count(template: MonsterTemplate, energy: int) -> int:
    """
    Returns the population weight of a monster before rarity is considered.

    Group monsters and multipliers count as several so they do not skew the
    averages.

    Args:
        template (MonsterTemplate): The monster.
        energy (int): The monster's energy per game turn.

    Returns:
        int: The weight.

    """
    count = BASE_COUNT
    if template.has(MonsterFlag.FRIEND):
        count = FRIEND_COUNT
    elif template.has(MonsterFlag.FRIENDS):
        count = FRIENDS_COUNT

    if template.has(MonsterFlag.MULTIPLY):
        if template.has_any(MonsterFlag.KILL_WALL, MonsterFlag.PASS_WALL):
            count *= max(1, energy)
        elif template.has_any(MonsterFlag.OPEN_DOOR, MonsterFlag.BASH_DOOR):
            count *= max(1, energy * 3 // 2)
        else:
            count *= max(1, energy // 2)
    return count


class DepthAggregator:
    """Per-depth totals of effective hp, damage and population count."""

    def __init__(self, depths: int = MAX_DEPTH) -> None:
        self.depths = depths
        self.tot_hp: list[int] = [0] * depths
        self.tot_dam: list[int] = [0] * depths
        self.mon_count: list[int] = [0] * depths

    def reset(self) -> None:
        """Sets every total back to zero."""
        for totals in (self.tot_hp, self.tot_dam, self.mon_count):
            totals[:] = [0] * self.depths

    def accumulate(self, template: MonsterTemplate, hp: int, dam: int, energy: int) -> None:
        """
        Adds a monster to every depth from its own level down to the bottom.

        Unplaced, unique and hand-placed (rarity 0) monsters are skipped. The
        hp and damage scaled down at the overflow depths and for rarity carry
        over to deeper slots.

        Args:
            template (MonsterTemplate): The monster.
            hp (int): Its scaled effective hit points.
            dam (int): Its estimated damage.
            energy (int): Its energy per game turn.

        """
        if not template.is_placed or not template.spawns_naturally:
            return

        rarity = template.rarity
        for depth in range(template.level, self.depths):
            if depth in OVERFLOW_DEPTHS and template.level < depth:
                hp //= 10
                dam //= 10

            count = population_count(template, energy)

            # Very rare monsters count less.
            if rarity > count:
                hp = hp * count // rarity
                dam = dam * count // rarity
                count = rarity

            self.tot_hp[depth] += hp
            self.tot_dam[depth] += dam
            self.mon_count[depth] += count // rarity

    def contribution(self, depth: int) -> DepthContribution:
        """Returns the totals of one depth slot."""
        return DepthContribution(
            hp=self.tot_hp[depth],
            dam=self.tot_dam[depth],
            count=self.mon_count[depth],
        )

    def averages(self, depth: int) -> tuple[int, int] | None:
        """
        Returns the average hp and damage at a depth, scaled by 10.

        Args:
            depth (int): The depth slot.

        Returns:
            tuple[int, int] | None: (av_hp, av_dam), or None when the depth
            has no population to average over.

        """
        if not self.tot_hp[depth] or not self.tot_dam[depth] or not self.mon_count[depth]:
            return None
        return (
            self.tot_hp[depth] * 10 // self.mon_count[depth],
            self.tot_dam[depth] * 10 // self.mon_count[depth],
        )

    def populated_depths(self) -> list[int]:
        """Returns the depths that hold any population."""
        return [depth for depth in range(self.depths) if self.mon_count[depth]]
