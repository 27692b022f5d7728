"""
Tests for the command line entry point.
"""

import json
from pathlib import Path

import pytest

from bestiary.core.config import DEFAULT_DUMP_PATH
from bestiary.core.error_handling import PowerEvaluationError, PowerStatus
from bestiary.main import (
    EXIT_BAD_INPUT,
    EXIT_EVALUATION_FAILED,
    EXIT_OK,
    main,
    parse_args,
)

SAMPLE_BESTIARY = Path(__file__).parents[1] / "data" / "monsters.json"


@pytest.fixture(autouse=True)
def quiet_reports(mocker):
    mocker.patch("bestiary.core.sheets.cprint")
    mocker.patch("bestiary.core.sheets.crule")


def test_parse_args_dump_without_path():
    args = parse_args(["monsters.json", "--dump"])
    assert args.bestiary == Path("monsters.json")
    assert args.dump == DEFAULT_DUMP_PATH
    assert args.rebalance is False


def test_parse_args_without_dump():
    args = parse_args(["monsters.json", "--rebalance", "--table"])
    assert args.dump is None
    assert args.rebalance is True
    assert args.table is True


def test_main_evaluates_sample_bestiary():
    assert main([str(SAMPLE_BESTIARY), "--table"]) == EXIT_OK


def test_main_writes_dump_and_output(tmp_path):
    dump = tmp_path / "power.txt"
    output = tmp_path / "evaluated.json"
    code = main(
        [str(SAMPLE_BESTIARY), "--rebalance", "--dump", str(dump), "--output", str(output)]
    )
    assert code == EXIT_OK
    lines = dump.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("index|level|rarity")
    saved = json.loads(output.read_text(encoding="utf-8"))
    assert len(saved) == len(lines) - 1
    assert all(entry["scaled_power"] >= 1 for entry in saved)


def test_main_rejects_missing_file(tmp_path):
    assert main([str(tmp_path / "nope.json")]) == EXIT_BAD_INPUT


def test_main_reports_evaluation_failure(mocker):
    mocker.patch(
        "bestiary.main.PowerNormalizer.run",
        side_effect=PowerEvaluationError("no memory", PowerStatus.ALLOCATION_FAILURE),
    )
    assert main([str(SAMPLE_BESTIARY)]) == EXIT_EVALUATION_FAILED
