"""
Tests for the toughness estimator.
"""

import pytest

from bestiary.core.constants import BASIC_IMMUNITIES, MonsterFlag, SpellFlag
from bestiary.power.toughness import ToughnessEstimator


@pytest.fixture
def estimator():
    return ToughnessEstimator()


def test_hide_bonus(make_template):
    assert ToughnessEstimator.hide_bonus(make_template()) == 0
    assert ToughnessEstimator.hide_bonus(
        make_template(flags={MonsterFlag.COLD_BLOOD, MonsterFlag.WEIRD_MIND})
    ) == 2
    assert ToughnessEstimator.hide_bonus(
        make_template(flags={MonsterFlag.EMPTY_MIND, MonsterFlag.COLD_BLOOD})
    ) == 2


def test_resist_score_without_immunities(goblin):
    assert ToughnessEstimator.resist_score(goblin) == 1


def test_resist_score_tiers_and_holes(make_template):
    three = set(BASIC_IMMUNITIES[:3])
    # 7 doubled to 14, minus 8 for the missing NO_* flags.
    assert ToughnessEstimator.resist_score(make_template(flags=three)) == 6
    # 11 quadrupled to 44, minus 8.
    assert ToughnessEstimator.resist_score(make_template(flags=set(BASIC_IMMUNITIES))) == 36
    sturdy = set(BASIC_IMMUNITIES) | {
        MonsterFlag.NO_SLEEP,
        MonsterFlag.NO_FEAR,
        MonsterFlag.NO_CONF,
        MonsterFlag.NO_STUN,
    }
    assert ToughnessEstimator.resist_score(make_template(flags=sturdy)) == 44


def test_high_resistances_need_a_basic_base(make_template):
    assert ToughnessEstimator.resist_score(make_template(flags={MonsterFlag.RES_NETH})) == 1
    one = {MonsterFlag.IM_FIRE, MonsterFlag.RES_NETH, MonsterFlag.RES_NEXUS}
    assert ToughnessEstimator.resist_score(make_template(flags=one)) == 5


def test_effective_hp(estimator, goblin):
    assert estimator.estimate_effective_hp(goblin) == 21


def test_immunities_never_lower_effective_hp(estimator, make_template):
    values = [
        estimator.estimate_effective_hp(make_template(flags=set(BASIC_IMMUNITIES[:n])))
        for n in range(len(BASIC_IMMUNITIES) + 1)
    ]
    assert values == sorted(values)
    assert values[-1] > values[0]


def test_stationary_without_ranged_attacks_is_halved(estimator, make_template):
    assert estimator.estimate_effective_hp(make_template(flags={MonsterFlag.NEVER_MOVE})) == 10
    caster = make_template(flags={MonsterFlag.NEVER_MOVE}, freq_spell=10)
    assert estimator.estimate_effective_hp(caster) == 21


def test_healing_and_invisibility(estimator, make_template):
    assert estimator.estimate_effective_hp(make_template(spell_flags={SpellFlag.HEAL})) == 25
    assert estimator.estimate_effective_hp(make_template(flags={MonsterFlag.INVISIBLE})) == 25


def test_heavy_armor_uses_the_resist_branch(estimator, make_template):
    assert estimator.estimate_effective_hp(make_template(armor_class=300)) == 23


def test_effective_hp_is_at_least_one(estimator, make_template):
    assert estimator.estimate_effective_hp(make_template(avg_hp=0)) == 1


def test_vulnerabilities_cost_resistant_monsters(make_template):
    sturdy = set(BASIC_IMMUNITIES) | {
        MonsterFlag.NO_SLEEP,
        MonsterFlag.NO_FEAR,
        MonsterFlag.NO_CONF,
        MonsterFlag.NO_STUN,
    }
    rock = make_template(flags=sturdy | {MonsterFlag.HURT_ROCK})
    assert ToughnessEstimator.resist_score(rock) == 43
    both = make_template(flags=sturdy | {MonsterFlag.HURT_ROCK, MonsterFlag.HURT_LIGHT})
    assert ToughnessEstimator.resist_score(both) == 42
    # 14 - 1 - 8 lands on the floor of 5.
    lit = make_template(flags=set(BASIC_IMMUNITIES[:3]) | {MonsterFlag.HURT_LIGHT})
    assert ToughnessEstimator.resist_score(lit) == 5
    # Below 6 there is nothing to lose.
    weak = make_template(flags={MonsterFlag.IM_FIRE, MonsterFlag.HURT_ROCK})
    assert ToughnessEstimator.resist_score(weak) == 3


def test_water_immunity_counts_as_high_resistance(make_template):
    wet = make_template(flags={MonsterFlag.IM_FIRE, MonsterFlag.IM_WATER})
    assert ToughnessEstimator.resist_score(wet) == 4
    sturdy = set(BASIC_IMMUNITIES) | {
        MonsterFlag.NO_SLEEP,
        MonsterFlag.NO_FEAR,
        MonsterFlag.NO_CONF,
        MonsterFlag.NO_STUN,
        MonsterFlag.IM_WATER,
    }
    assert ToughnessEstimator.resist_score(make_template(flags=sturdy)) == 45


def test_regeneration(estimator, make_template):
    # 20*10//9 = 22, plus (22*25//3)//155 = 1.
    troll = make_template(flags={MonsterFlag.REGENERATE})
    assert estimator.estimate_effective_hp(troll) == 23


def test_wall_passing(estimator, make_template):
    # 20*3//2 = 30, plus (30*25//3)//155 = 1.
    ghost = make_template(flags={MonsterFlag.PASS_WALL})
    assert estimator.estimate_effective_hp(ghost) == 31


@pytest.mark.parametrize(
    "spell", [SpellFlag.TPORT, SpellFlag.TELE_AWAY, SpellFlag.TELE_LEVEL]
)
def test_escape_spells(estimator, make_template, spell):
    # 20*6//5 = 24, plus (24*25//3)//155 = 1.
    trickster = make_template(spell_flags={spell}, freq_spell=10)
    assert estimator.estimate_effective_hp(trickster) == 25


def test_multipliers_count_double(estimator, make_template):
    # 20*2 = 40, plus (40*25//3)//155 = 2.
    louse = make_template(flags={MonsterFlag.MULTIPLY})
    assert estimator.estimate_effective_hp(louse) == 42
