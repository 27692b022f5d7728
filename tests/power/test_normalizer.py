"""
Tests for the multi-pass power normalizer.
"""

import sys
from pathlib import Path

import pytest

from bestiary.core.constants import MonsterFlag
from bestiary.core.content import load_bestiary
from bestiary.core.error_handling import PowerEvaluationError, PowerStatus
from bestiary.power.dump import format_power_row
from bestiary.power.normalizer import (
    PowerNormalizer,
    evaluate_bestiary_power,
    group_power,
)

SAMPLE_BESTIARY = Path(__file__).parents[2] / "data" / "monsters.json"


@pytest.fixture
def sample_table():
    return load_bestiary(SAMPLE_BESTIARY)


def test_single_monster_without_rebalance(goblin):
    report = evaluate_bestiary_power([goblin])
    assert report.status == PowerStatus.SUCCESS
    assert report.passes == 3
    assert report.templates == 1
    assert report.rebalanced is False
    assert goblin.melee_dam == 23
    assert goblin.hp == 10
    assert goblin.power == 230
    # 230 // (100 // 10) // (230 // 10)
    assert goblin.scaled_power == 1
    assert report.total_power == 1


def test_rebalance_off_keeps_level_rarity_and_experience(goblin):
    evaluate_bestiary_power([goblin])
    assert goblin.level == 5
    assert goblin.rarity == 1
    assert goblin.experience == 7


def test_rebalanced_monsters_are_worth_some_experience(make_template):
    # 1 * 23 // (4 * 25) rounds down to nothing.
    weakling = make_template(avg_hp=1, experience=0)
    evaluate_bestiary_power([weakling], rebalance=True)
    assert weakling.experience == 1


def test_rebalance_off_keeps_zero_experience(make_template):
    template = make_template(experience=0)
    evaluate_bestiary_power([template])
    assert template.experience == 0


def test_rebalance_rewrites_level_and_experience(goblin):
    report = evaluate_bestiary_power([goblin], rebalance=True)
    assert report.rebalanced is True
    # First pass derives level 4; later passes evaluate at that level.
    assert goblin.level == 4
    assert goblin.experience == 4
    assert goblin.rarity == 1
    assert goblin.melee_dam == 22
    assert goblin.power == 220
    assert goblin.scaled_power == 1


def test_uniques_keep_their_level(make_template):
    boss = make_template(flags={MonsterFlag.UNIQUE})
    evaluate_bestiary_power([boss], rebalance=True)
    assert boss.level == 5
    # 21 * 23 // (5 * 25)
    assert boss.experience == 3
    # Uniques are not aggregated, so there is nothing to divide by.
    assert boss.scaled_power == boss.power == 230
    assert boss.rarity == 1


def test_unplaced_monsters_are_worth_no_experience(make_template):
    town = make_template(level=0, experience=5)
    evaluate_bestiary_power([town], rebalance=True)
    assert town.experience == 0
    assert town.level == 0
    assert town.power >= 1
    assert town.scaled_power >= 1


def test_rebalance_rederives_hand_placed_rarity(make_template):
    guardian = make_template(rarity=0)
    common = make_template(index=1, name="Orc")
    evaluate_bestiary_power([guardian, common], rebalance=True)
    assert guardian.level == common.level == 4
    assert guardian.scaled_power == common.scaled_power == 1
    assert guardian.rarity == common.rarity == 1


def test_rebalance_off_keeps_hand_placed_rarity(make_template):
    guardian = make_template(rarity=0)
    common = make_template(index=1, name="Orc")
    evaluate_bestiary_power([guardian, common])
    assert guardian.rarity == 0


def test_rarity_does_not_change_raw_power(make_template):
    common = make_template()
    rare = make_template(rarity=50)
    evaluate_bestiary_power([common])
    evaluate_bestiary_power([rare])
    assert common.power == rare.power


def test_evaluation_is_idempotent(sample_table):
    evaluate_bestiary_power(sample_table)
    first = [format_power_row(template) for template in sample_table]
    evaluate_bestiary_power(sample_table)
    assert [format_power_row(template) for template in sample_table] == first


def test_sample_bestiary_outputs_are_sane(sample_table):
    report = evaluate_bestiary_power(sample_table, rebalance=True)
    assert report.templates == len(sample_table)
    assert report.total_power == sum(template.scaled_power for template in sample_table)
    for template in sample_table:
        assert template.power >= 1
        assert template.scaled_power >= 1
        assert template.hp >= 1
        assert template.melee_dam >= 1
        assert template.highest_threat >= 1
        if template.is_placed:
            assert 1 <= template.level <= 99
            assert template.experience >= 1
        else:
            assert template.experience == 0


def test_fast_multipliers_are_more_powerful(make_template):
    slow = make_template(speed=0, flags={MonsterFlag.MULTIPLY})
    fast = make_template(speed=130, flags={MonsterFlag.MULTIPLY})
    evaluate_bestiary_power([slow])
    evaluate_bestiary_power([fast])
    assert fast.power > slow.power


def test_fast_wall_passing_multipliers_are_more_powerful(make_template):
    flags = {MonsterFlag.MULTIPLY, MonsterFlag.PASS_WALL}
    slow = make_template(speed=0, flags=flags)
    fast = make_template(speed=130, flags=flags)
    evaluate_bestiary_power([slow])
    evaluate_bestiary_power([fast])
    # Energy 1 leaves the unmodified power as the maximum.
    assert slow.power == slow.hp * 5
    assert fast.power > slow.power


def test_group_power(make_template):
    assert group_power(make_template(), 100, 10) == 100
    assert group_power(make_template(flags={MonsterFlag.FRIEND}), 100, 10) == 200
    assert group_power(make_template(flags={MonsterFlag.FRIENDS}), 100, 10) == 500
    assert group_power(make_template(flags={MonsterFlag.ESCORTS}), 100, 10) == 300
    assert group_power(make_template(flags={MonsterFlag.ESCORT}), 100, 10) == 200
    lord = make_template(flags={MonsterFlag.UNIQUE, MonsterFlag.FRIENDS, MonsterFlag.ESCORT})
    assert group_power(lord, 100, 10) == 200


def test_group_power_for_multipliers(make_template):
    breeder = make_template(flags={MonsterFlag.MULTIPLY})
    assert group_power(breeder, 100, 1) == 100
    assert group_power(breeder, 100, 20) == 1000
    digger = make_template(flags={MonsterFlag.MULTIPLY, MonsterFlag.KILL_WALL})
    assert group_power(digger, 100, 20) == 2000
    opener = make_template(flags={MonsterFlag.MULTIPLY, MonsterFlag.BASH_DOOR})
    assert group_power(opener, 100, 20) == 3000


def test_normalizer_runs_exactly_three_passes(mocker, goblin):
    normalizer = PowerNormalizer()
    run_pass = mocker.spy(normalizer, "run_pass")
    normalizer.run([goblin])
    assert run_pass.call_count == 3
    assert [call.args[0] for call in run_pass.call_args_list] == [0, 1, 2]


def test_allocation_failure_is_reported(mocker):
    log_critical = mocker.patch("bestiary.power.normalizer.log_critical")
    with pytest.raises(PowerEvaluationError) as excinfo:
        PowerNormalizer._allocate_power(sys.maxsize)
    assert excinfo.value.status == PowerStatus.ALLOCATION_FAILURE
    log_critical.assert_called_once()


def test_allocation_failure_leaves_no_partial_result(mocker, goblin):
    mocker.patch.object(
        PowerNormalizer,
        "_allocate_power",
        side_effect=PowerEvaluationError("no memory", PowerStatus.ALLOCATION_FAILURE),
    )
    with pytest.raises(PowerEvaluationError):
        evaluate_bestiary_power([goblin])
    assert goblin.power == 0
    assert goblin.scaled_power == 0
