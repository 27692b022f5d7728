"""
Tests for the rich report tables.
"""

from rich.console import Console

from bestiary.core.error_handling import PowerStatus
from bestiary.core.sheets import depth_summary, power_table, print_power_report
from bestiary.power.aggregates import DepthAggregator
from bestiary.power.normalizer import PowerReport


def test_power_table_lists_named_monsters(make_template):
    table = [make_template(), make_template(name="", index=1)]
    table[0].scaled_power = 17
    out = power_table(table)
    assert out.row_count == 1
    console = Console(width=120)
    with console.capture() as capture:
        console.print(out)
    rendered = capture.get()
    assert "Goblin" in rendered
    assert "17" in rendered


def test_depth_summary_lists_populated_depths(goblin):
    aggregator = DepthAggregator(depths=8)
    aggregator.accumulate(goblin, hp=10, dam=23, energy=10)
    out = depth_summary(aggregator)
    # Depths 5, 6 and 7.
    assert out.row_count == 3


def test_print_power_report(mocker):
    cprint = mocker.patch("bestiary.core.sheets.cprint")
    mocker.patch("bestiary.core.sheets.crule")
    report = PowerReport(
        status=PowerStatus.SUCCESS,
        passes=3,
        total_power=42,
        rebalanced=False,
        templates=2,
    )
    print_power_report(report)
    printed = " ".join(str(call.args[0]) for call in cprint.call_args_list)
    assert "SUCCESS" in printed
    assert "42" in printed
