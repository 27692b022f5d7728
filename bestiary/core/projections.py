"""
Projection tables for the power evaluator.

Holds the worst-case damage formulas of every breath, bolt, ball, curse and
nuisance ability, the resistance adjustment applied to elemental damage, and
the additive bonuses of melee blow effects.

Formulas are dice expressions evaluated by the dice parser with the variables
``[RLEV]`` (monster level, at least 1), ``[DAM]`` (the adjusted damage of the
ability) and ``[BREATH]`` (the adjusted breath damage).
"""

from dataclasses import dataclass

from bestiary.core.constants import Aspect, BlowEffect, Element, SpellFlag
from bestiary.core.dice_parser import VarInfo, evaluate_expression, get_max_roll

# Elements a single basic resistance divides by three.
BASIC_ELEMENTS = (Element.ACID, Element.ELEC, Element.FIRE, Element.COLD, Element.POIS)

# High resistances: damage * numerator / (d6 + 6).
HIGH_RESIST_NUMERATOR: dict[Element, int] = {
    Element.NETHER: 6,
    Element.CHAOS: 6,
    Element.DISEN: 6,
    Element.SHARD: 6,
    Element.NEXUS: 6,
    Element.LIGHT: 4,
    Element.DARK: 4,
    Element.SOUND: 5,
}

# The d6 resistance roll, fixed by aspect.
RESIST_ROLL: dict[Aspect, int] = {
    Aspect.MINIMISE: 1,
    Aspect.AVERAGE: 3,
    Aspect.MAXIMISE: 6,
}


def resist_adjust(element: Element | None, dam: int, aspect: Aspect = Aspect.MINIMISE) -> int:
    """
    Returns the damage a resistant target takes from a projection.

    Args:
        element (Element | None):
            The projection element, None for pure damage.
        dam (int):
            The unresisted damage.
        aspect (Aspect):
            How strongly the resistance is assumed to work. MINIMISE assumes the
            weakest resistance, i.e. the most damage getting through.

    Returns:
        int: The adjusted damage.

    """
    if element is None:
        return dam
    if element in BASIC_ELEMENTS:
        return (dam + 2) // 3
    numerator = HIGH_RESIST_NUMERATOR.get(element)
    if numerator is None:
        return dam
    return dam * numerator // (RESIST_ROLL[aspect] + 6)


@dataclass(frozen=True)
class Breath:
    """A breath attack: damage scales with the breather's hit points."""

    element: Element
    divisor: int
    cap: int
    threat: str

    def damage(self, avg_hp: int, aspect: Aspect = Aspect.MINIMISE) -> int:
        """Returns the resisted breath damage for a monster with avg_hp."""
        return resist_adjust(self.element, min(self.cap, avg_hp // self.divisor), aspect)

    def threat_value(self, breath_dam: int, rlev: int) -> int:
        """Returns the threat contributed when this breath is the strongest seen."""
        return evaluate_expression(
            self.threat,
            [VarInfo(name="BREATH", value=breath_dam), VarInfo(name="RLEV", value=rlev)],
        )


@dataclass(frozen=True)
class Spell:
    """A spell, curse, summon or nuisance ability with a fixed threat value."""

    damage: str
    element: Element | None = None
    threat: str = "[DAM]"

    def threat_value(self, rlev: int, aspect: Aspect = Aspect.MINIMISE) -> int:
        """
        Returns the threat of this ability cast by a monster of level rlev.

        Damage dice are maximised; the resistance is fixed by aspect.
        """
        level = VarInfo(name="RLEV", value=rlev)
        dam = resist_adjust(self.element, get_max_roll(self.damage, [level]), aspect)
        return evaluate_expression(self.threat, [VarInfo(name="DAM", value=dam), level])


# Extra threat on top of the breath damage, keyed by element.
_PLUS = "[BREATH]+{}"
_LEVEL_SCALED = "[BREATH]+2000//([RLEV]+1)"

# Breaths in evaluation order. Order matters: a breath only replaces the
# running value when its damage beats it, and then adds its own bonus.
BREATHS: dict[SpellFlag, Breath] = {
    SpellFlag.BR_ACID: Breath(Element.ACID, 3, 1600, _PLUS.format(20)),
    SpellFlag.BR_ELEC: Breath(Element.ELEC, 3, 1600, _PLUS.format(10)),
    SpellFlag.BR_FIRE: Breath(Element.FIRE, 3, 1600, _PLUS.format(10)),
    SpellFlag.BR_COLD: Breath(Element.COLD, 3, 1600, _PLUS.format(10)),
    SpellFlag.BR_POIS: Breath(Element.POIS, 3, 800, "[BREATH]*5//4+[RLEV]"),
    SpellFlag.BR_NETH: Breath(Element.NETHER, 6, 550, _LEVEL_SCALED),
    SpellFlag.BR_CHAO: Breath(Element.CHAOS, 6, 500, _LEVEL_SCALED),
    SpellFlag.BR_DISE: Breath(Element.DISEN, 6, 500, _PLUS.format(50)),
    SpellFlag.BR_SHAR: Breath(Element.SHARD, 6, 500, "[BREATH]*5//4+5"),
    SpellFlag.BR_LIGHT: Breath(Element.LIGHT, 6, 400, _PLUS.format(10)),
    SpellFlag.BR_DARK: Breath(Element.DARK, 6, 400, _PLUS.format(10)),
    SpellFlag.BR_SOUN: Breath(Element.SOUND, 6, 500, _PLUS.format(20)),
    SpellFlag.BR_NEXU: Breath(Element.NEXUS, 6, 400, _PLUS.format(20)),
    SpellFlag.BR_TIME: Breath(Element.TIME, 3, 150, _LEVEL_SCALED),
    SpellFlag.BR_INER: Breath(Element.INERTIA, 6, 200, _PLUS.format(30)),
    SpellFlag.BR_GRAV: Breath(Element.GRAVITY, 3, 200, _PLUS.format(30)),
    SpellFlag.BR_PLAS: Breath(Element.PLASMA, 6, 150, _PLUS.format(30)),
    SpellFlag.BR_WALL: Breath(Element.FORCE, 6, 200, _PLUS.format(30)),
}

_SAVED = "[DAM]//2"
_NETHER = "[DAM]+2000//([RLEV]+1)"

# Every other ability contributes the maximum of its threat values.
SPELLS: dict[SpellFlag, Spell] = {
    # Balls
    SpellFlag.BA_ACID: Spell("15+[RLEV]*3", Element.ACID, "[DAM]+20"),
    SpellFlag.BA_ELEC: Spell("8+[RLEV]*3//2", Element.ELEC, "[DAM]+10"),
    SpellFlag.BA_FIRE: Spell("10+[RLEV]*7//2", Element.FIRE, "[DAM]+10"),
    SpellFlag.BA_COLD: Spell("10+[RLEV]*3//2", Element.COLD, "[DAM]+10"),
    SpellFlag.BA_POIS: Spell("8"),
    SpellFlag.BA_NETH: Spell("50+10d10+[RLEV]", Element.NETHER, _NETHER),
    SpellFlag.BA_WATE: Spell("50+[RLEV]*5//2", None, "[DAM]+20"),
    SpellFlag.BA_MANA: Spell("[RLEV]*5+10d10", None, "[DAM]+100"),
    SpellFlag.BA_DARK: Spell("[RLEV]*5+10d10", Element.DARK, "[DAM]+10"),
    # Curses, halved for the saving throw
    SpellFlag.DRAIN_MANA: Spell("5"),
    SpellFlag.MIND_BLAST: Spell("8d8", None, _SAVED),
    SpellFlag.BRAIN_SMASH: Spell("12d15", None, _SAVED),
    SpellFlag.CAUSE_1: Spell("3d8", None, _SAVED),
    SpellFlag.CAUSE_2: Spell("8d8", None, _SAVED),
    SpellFlag.CAUSE_3: Spell("10d15", None, _SAVED),
    SpellFlag.CAUSE_4: Spell("15d15", None, _SAVED),
    # Bolts
    SpellFlag.BO_ACID: Spell("7d8+[RLEV]//3", Element.ACID, "[DAM]+20"),
    SpellFlag.BO_ELEC: Spell("4d8+[RLEV]//3", Element.ELEC, "[DAM]+10"),
    SpellFlag.BO_FIRE: Spell("9d8+[RLEV]//3", Element.FIRE, "[DAM]+10"),
    SpellFlag.BO_COLD: Spell("6d8+[RLEV]//3", Element.COLD, "[DAM]+10"),
    SpellFlag.BO_NETH: Spell("30+5d5+[RLEV]*3//2", Element.NETHER, _NETHER),
    SpellFlag.BO_WATE: Spell("10d10+[RLEV]", None, "[DAM]+20"),
    SpellFlag.BO_MANA: Spell("50+[RLEV]*7//2"),
    SpellFlag.BO_PLAS: Spell("10+8d7+[RLEV]"),
    SpellFlag.BO_ICEE: Spell("6d6+[RLEV]", Element.COLD),
    # Projectiles
    SpellFlag.ARROW_1: Spell("1d6"),
    SpellFlag.ARROW_2: Spell("3d6"),
    SpellFlag.ARROW_3: Spell("5d6"),
    SpellFlag.ARROW_4: Spell("7d6"),
    SpellFlag.BOULDER: Spell("12*(1+[RLEV]//7)"),
    SpellFlag.MISSILE: Spell("2d6"),
    # Annoyances
    SpellFlag.SCARE: Spell("5"),
    SpellFlag.BLIND: Spell("10"),
    SpellFlag.CONF: Spell("10"),
    SpellFlag.SLOW: Spell("15"),
    SpellFlag.HOLD: Spell("25"),
    SpellFlag.HASTE: Spell("70"),
    SpellFlag.HEAL: Spell("30"),
    SpellFlag.BLINK: Spell("15"),
    SpellFlag.TELE_TO: Spell("25"),
    SpellFlag.TELE_AWAY: Spell("25"),
    SpellFlag.TELE_LEVEL: Spell("40"),
    SpellFlag.DARKNESS: Spell("5"),
    SpellFlag.TRAPS: Spell("10"),
    SpellFlag.FORGET: Spell("25"),
    # Summons
    SpellFlag.S_KIN: Spell("[RLEV]*2"),
    SpellFlag.SHRIEK: Spell("[RLEV]*3//2"),
    SpellFlag.S_HI_DEMON: Spell("250"),
    SpellFlag.S_MONSTER: Spell("40"),
    SpellFlag.S_MONSTERS: Spell("80"),
    SpellFlag.S_ANIMAL: Spell("30"),
    SpellFlag.S_SPIDER: Spell("20"),
    SpellFlag.S_HOUND: Spell("100"),
    SpellFlag.S_HYDRA: Spell("150"),
    SpellFlag.S_ANGEL: Spell("150"),
    SpellFlag.S_DEMON: Spell("[RLEV]*3//2"),
    SpellFlag.S_UNDEAD: Spell("[RLEV]*3//2"),
    SpellFlag.S_DRAGON: Spell("[RLEV]*3//2"),
    SpellFlag.S_HI_UNDEAD: Spell("400"),
    SpellFlag.S_HI_DRAGON: Spell("400"),
    SpellFlag.S_WRAITH: Spell("450"),
    SpellFlag.S_UNIQUE: Spell("500"),
}

# Flat damage added to a blow for its side effect. Poison is handled apart.
BLOW_EFFECT_BONUS: dict[BlowEffect, int] = {
    # minor
    BlowEffect.EAT_GOLD: 5,
    BlowEffect.EAT_ITEM: 5,
    BlowEffect.EAT_FOOD: 5,
    BlowEffect.EAT_LIGHT: 5,
    BlowEffect.LOSE_CHR: 5,
    # elements / sustains
    BlowEffect.TERRIFY: 10,
    BlowEffect.ELEC: 10,
    BlowEffect.COLD: 10,
    BlowEffect.FIRE: 10,
    # elements / major
    BlowEffect.ACID: 20,
    BlowEffect.BLIND: 20,
    BlowEffect.CONFUSE: 20,
    BlowEffect.LOSE_STR: 20,
    BlowEffect.LOSE_INT: 20,
    BlowEffect.LOSE_WIS: 20,
    BlowEffect.LOSE_DEX: 20,
    BlowEffect.HALLU: 20,
    # major
    BlowEffect.UN_BONUS: 30,
    BlowEffect.UN_POWER: 30,
    BlowEffect.LOSE_CON: 30,
    BlowEffect.PARALYZE: 40,
    BlowEffect.LOSE_ALL: 40,
    # experience drain
    BlowEffect.EXP_10: 5,
    BlowEffect.EXP_20: 5,
    BlowEffect.EXP_40: 10,
    BlowEffect.EXP_80: 10,
    # earthquakes
    BlowEffect.SHATTER: 300,
}


def blow_effect_damage(effect: BlowEffect, atk_dam: int, level: int) -> int:
    """
    Adds the side-effect value of a blow to its raw damage.

    Args:
        effect (BlowEffect): The blow effect.
        atk_dam (int): The maximum dice damage of the blow.
        level (int): The monster level.

    Returns:
        int: The blow damage including its effect.

    """
    if effect == BlowEffect.POISON:
        return atk_dam * 5 // 4 + level
    return atk_dam + BLOW_EFFECT_BONUS.get(effect, 0)
