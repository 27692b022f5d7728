"""
Tests for the projection tables: resistances, breaths, spells and blow effects.
"""

from bestiary.core import projections
from bestiary.core.constants import Aspect, BlowEffect, Element, SpellFlag
from bestiary.core.projections import (
    BREATHS,
    SPELLS,
    blow_effect_damage,
    resist_adjust,
)


def test_unresisted_damage_is_unchanged():
    assert resist_adjust(None, 30) == 30
    assert resist_adjust(Element.PLASMA, 70) == 70


def test_basic_elements_divide_by_three_rounding_up():
    assert resist_adjust(Element.ACID, 30) == 10
    assert resist_adjust(Element.FIRE, 31) == 11


def test_high_resistances_depend_on_the_roll():
    assert resist_adjust(Element.NETHER, 70) == 60
    assert resist_adjust(Element.NETHER, 70, Aspect.MAXIMISE) == 35
    assert resist_adjust(Element.LIGHT, 70) == 40
    assert resist_adjust(Element.SOUND, 70) == 50


def test_breath_damage_is_capped_and_resisted():
    poison = BREATHS[SpellFlag.BR_POIS]
    # min(800, 900 // 3) resisted: (300 + 2) // 3
    assert poison.damage(900) == 100
    assert poison.damage(9000) == 267


def test_breath_threat_values():
    assert BREATHS[SpellFlag.BR_POIS].threat_value(100, 10) == 135
    assert BREATHS[SpellFlag.BR_NETH].threat_value(50, 9) == 250
    assert BREATHS[SpellFlag.BR_FIRE].threat_value(10, 5) == 20


def test_breaths_start_with_the_basic_elements():
    assert list(BREATHS)[:4] == [
        SpellFlag.BR_ACID,
        SpellFlag.BR_ELEC,
        SpellFlag.BR_FIRE,
        SpellFlag.BR_COLD,
    ]


def test_spell_threat_values():
    # 15 + 5*3 = 30, resisted to 10, plus 20.
    assert SPELLS[SpellFlag.BA_ACID].threat_value(5) == 30
    # 8d8 maximised and halved for the save.
    assert SPELLS[SpellFlag.MIND_BLAST].threat_value(5) == 32
    assert SPELLS[SpellFlag.BOULDER].threat_value(14) == 36
    assert SPELLS[SpellFlag.S_KIN].threat_value(10) == 20
    assert SPELLS[SpellFlag.S_UNIQUE].threat_value(1) == 500


def test_spell_damage_rolls_are_maximised(mocker):
    max_roll = mocker.spy(projections, "get_max_roll")
    assert SPELLS[SpellFlag.CAUSE_2].threat_value(5) == 32
    max_roll.assert_called_once()
    assert max_roll.call_args.args[0] == "8d8"


def test_breaths_are_not_in_the_spell_table():
    assert not any(flag.is_breath for flag in SPELLS)


def test_blow_effect_damage():
    assert blow_effect_damage(BlowEffect.HURT, 10, 5) == 10
    assert blow_effect_damage(BlowEffect.EAT_GOLD, 4, 5) == 9
    assert blow_effect_damage(BlowEffect.SHATTER, 10, 1) == 310
    assert blow_effect_damage(BlowEffect.POISON, 8, 10) == 20
