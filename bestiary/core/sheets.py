"""
Module for printing evaluated bestiaries and per-depth summaries.
"""

from collections.abc import Iterable

from rich.table import Table

from bestiary.core.error_handling import PowerStatus
from bestiary.core.utils import cprint, crule
from bestiary.monster.template import MonsterTemplate
from bestiary.power.aggregates import DepthAggregator
from bestiary.power.normalizer import PowerReport


def power_table(table: Iterable[MonsterTemplate]) -> Table:
    """
    Builds a table with the evaluated statistics of every named monster.

    Args:
        table (Iterable[MonsterTemplate]): The evaluated templates.

    Returns:
        Table: One row per monster.

    """
    out = Table(title="Monster Power", pad_edge=False)
    out.add_column("#", style="cyan", justify="right")
    out.add_column("Lvl", justify="right")
    out.add_column("Rar", justify="right")
    out.add_column("", style="bold")
    out.add_column("Name", style="bold")
    out.add_column("Power", justify="right")
    out.add_column("Scaled", style="magenta", justify="right")
    out.add_column("Melee", style="red", justify="right")
    out.add_column("Spell", style="blue", justify="right")
    out.add_column("HP", style="green", justify="right")
    for template in table:
        if template.is_empty:
            continue
        out.add_row(
            str(template.index),
            str(template.level),
            str(template.rarity),
            template.symbol,
            template.name,
            str(template.power),
            str(template.scaled_power),
            str(template.melee_dam),
            str(template.spell_dam),
            str(template.hp),
        )
    return out


def depth_summary(aggregator: DepthAggregator) -> Table:
    """
    Builds a table of the per-depth totals and averages.

    Only depths holding any population are listed.
    """
    out = Table(title="Depth Averages", pad_edge=False)
    out.add_column("Depth", style="cyan", justify="right")
    out.add_column("Count", justify="right")
    out.add_column("Total HP", justify="right")
    out.add_column("Total Dam", justify="right")
    out.add_column("Avg HP", style="green", justify="right")
    out.add_column("Avg Dam", style="red", justify="right")
    for depth in aggregator.populated_depths():
        slot = aggregator.contribution(depth)
        averages = aggregator.averages(depth)
        av_hp, av_dam = averages if averages else ("-", "-")
        out.add_row(
            str(depth),
            str(slot.count),
            str(slot.hp),
            str(slot.dam),
            str(av_hp),
            str(av_dam),
        )
    return out


def print_power_table(table: Iterable[MonsterTemplate]) -> None:
    """Prints the evaluated statistics of every named monster."""
    cprint(power_table(table))


def print_depth_summary(aggregator: DepthAggregator) -> None:
    """Prints the per-depth totals of the last evaluation pass."""
    cprint(depth_summary(aggregator))


def print_power_report(report: PowerReport) -> None:
    """
    Prints the summary of a power evaluation.

    Args:
        report (PowerReport): The report to print.

    """
    style = "bold green" if report.status == PowerStatus.SUCCESS else "bold red"
    crule("Power Evaluation", style=style)
    cprint(f"  Status       : [{style}]{report.status.name}[/]")
    cprint(f"  Monsters     : {report.templates}")
    cprint(f"  Passes       : {report.passes}")
    cprint(f"  Rebalanced   : {'yes' if report.rebalanced else 'no'}")
    cprint(f"  Total power  : [magenta]{report.total_power}[/]")
