"""
Toughness estimation module.

Estimates a monster's effective hit points: base hit points adjusted for
mobility, healing, evasion, resistances and armor.
"""

from bestiary.core.constants import (
    BASIC_IMMUNITIES,
    ESCAPE_SPELLS,
    HIGH_RESISTANCES,
    MonsterFlag,
    SpellFlag,
)
from bestiary.monster.template import MonsterTemplate

# Resist score thresholds and their multipliers, highest first.
RESIST_TIERS = ((12, 6), (10, 4), (8, 3), (6, 2))

# Penalties for defensive holes once a monster is quite resistant.
HOLE_PENALTIES = (
    (MonsterFlag.NO_SLEEP, 3),
    (MonsterFlag.NO_FEAR, 2),
    (MonsterFlag.NO_CONF, 2),
    (MonsterFlag.NO_STUN, 1),
)
VULNERABILITY_PENALTIES = (
    (MonsterFlag.HURT_ROCK, 1),
    (MonsterFlag.HURT_LIGHT, 1),
)


class ToughnessEstimator:
    """Computes effective hit points for monster templates."""

    @staticmethod
    def hide_bonus(template: MonsterTemplate) -> int:
        """Returns how hard the monster is to detect by mind-reading."""
        if template.has(MonsterFlag.EMPTY_MIND):
            return 2
        bonus = 0
        if template.has(MonsterFlag.COLD_BLOOD):
            bonus += 1
        if template.has(MonsterFlag.WEIRD_MIND):
            bonus += 1
        return bonus

    @staticmethod
    def resist_score(template: MonsterTemplate) -> int:
        """
        Returns the resistance score, before the final x25 scaling.

        Two points per basic immunity on top of a base of 1, multiplied by
        tier, reduced by defensive holes and raised by high resistances.

        Args:
            template (MonsterTemplate): The monster to evaluate.

        Returns:
            int: The resistance score.

        """
        resists = 1 + 2 * sum(1 for flag in BASIC_IMMUNITIES if template.has(flag))

        for threshold, multiplier in RESIST_TIERS:
            if resists >= threshold:
                resists *= multiplier
                break

        if resists >= 6:
            for flag, penalty in VULNERABILITY_PENALTIES:
                if template.has(flag):
                    resists -= penalty
            for flag, penalty in HOLE_PENALTIES:
                if not template.has(flag):
                    resists -= penalty
            resists = max(resists, 5)

        if resists >= 3:
            resists += sum(1 for flag in HIGH_RESISTANCES if template.has(flag))

        return resists

    def estimate_effective_hp(self, template: MonsterTemplate) -> int:
        """
        Estimates the effective hit points of a monster.

        Args:
            template (MonsterTemplate): The monster to evaluate.

        Returns:
            int: The effective hit points, at least 1.

        """
        hp = template.avg_hp

        # Stationary monsters without ranged attacks are easy to avoid.
        if template.has(MonsterFlag.NEVER_MOVE) and not (
            template.freq_innate or template.freq_spell
        ):
            hp = max(hp // 2, 1)

        if template.casts(SpellFlag.HEAL):
            hp = hp * 6 // 5
        if template.has(MonsterFlag.REGENERATE):
            hp = hp * 10 // 9
        if template.has(MonsterFlag.PASS_WALL):
            hp = hp * 3 // 2

        if template.has(MonsterFlag.INVISIBLE):
            hp = hp * (template.level + self.hide_bonus(template) + 1) // max(1, template.level)

        if template.casts_any(*ESCAPE_SPELLS):
            hp = hp * 6 // 5

        if template.has(MonsterFlag.MULTIPLY):
            hp *= 2

        resists = self.resist_score(template) * 25
        armor = template.armor_class + resists
        if resists < armor // 3:
            hp += hp * resists // (150 + template.level)
        else:
            hp += (hp * armor // 3) // (150 + template.level)

        return max(hp, 1)
