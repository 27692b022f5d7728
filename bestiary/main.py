"""
Main entry point for the bestiary power evaluator.

Loads a bestiary from JSON, evaluates the combat power of every monster over
three normalization passes and reports the results. Optionally rewrites level,
experience and rarity from the evaluated power, saves the evaluated bestiary
and writes the pipe-delimited power dump.
"""

import argparse
import sys
from pathlib import Path

from bestiary.core.config import DEFAULT_DUMP_PATH, PowerSettings
from bestiary.core.content import load_bestiary, save_bestiary
from bestiary.core.error_handling import PowerEvaluationError
from bestiary.core.logging import log_error, setup_logging
from bestiary.core.sheets import (
    print_depth_summary,
    print_power_report,
    print_power_table,
)
from bestiary.power.dump import write_power_dump
from bestiary.power.normalizer import PowerNormalizer

EXIT_OK = 0
EXIT_EVALUATION_FAILED = 1
EXIT_BAD_INPUT = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="bestiary-power",
        description="Evaluate and normalize the combat power of a bestiary",
    )
    p.add_argument(
        "bestiary",
        type=Path,
        help="JSON file holding the list of monsters",
    )
    p.add_argument(
        "--rebalance",
        action="store_true",
        help="Rewrite level, experience and rarity from the evaluated power",
    )
    p.add_argument(
        "--dump",
        nargs="?",
        type=Path,
        const=DEFAULT_DUMP_PATH,
        default=None,
        metavar="PATH",
        help=f"Write the power dump (default: {DEFAULT_DUMP_PATH})",
    )
    p.add_argument(
        "--output",
        type=Path,
        default=None,
        metavar="PATH",
        help="Save the evaluated bestiary to this JSON file",
    )
    p.add_argument(
        "--table",
        action="store_true",
        help="Print the evaluated bestiary and the depth averages",
    )
    p.add_argument(
        "--verbose",
        action="store_true",
        help="Log per-monster derivations",
    )
    return p.parse_args(argv)


def run(settings: PowerSettings) -> int:
    """
    Runs one evaluation with the given settings.

    Args:
        settings (PowerSettings): The run settings.

    Returns:
        int: The process exit code.

    """
    try:
        table = load_bestiary(settings.bestiary_path)
    except ValueError as e:
        log_error(f"Unable to read bestiary: {e}", {"file_path": str(settings.bestiary_path)})
        return EXIT_BAD_INPUT

    normalizer = PowerNormalizer(rebalance=settings.rebalance)
    try:
        report = normalizer.run(table)
    except PowerEvaluationError as e:
        log_error(f"Power evaluation failed: {e}", {"status": e.status.name})
        return EXIT_EVALUATION_FAILED

    if settings.show_table:
        print_power_table(table)
        print_depth_summary(normalizer.aggregator)
    print_power_report(report)

    if settings.dump:
        write_power_dump(table, settings.dump_path)
    if settings.output_path is not None:
        save_bestiary(table, settings.output_path)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    settings = PowerSettings.from_args(parse_args(argv))
    setup_logging(settings.log_level)
    return run(settings)


if __name__ == "__main__":
    sys.exit(main())
