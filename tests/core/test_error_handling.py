"""
Tests for the error handler and the validation helpers.
"""

import pytest

from bestiary.core.error_handling import (
    ERROR_HANDLER,
    ErrorSeverity,
    PowerEvaluationError,
    PowerStatus,
    ensure_int_in_range,
    ensure_list_of_strings,
    ensure_non_negative_int,
    log_critical,
    require_non_empty_string,
)


@pytest.fixture(autouse=True)
def clean_history():
    ERROR_HANDLER.clear()
    yield
    ERROR_HANDLER.clear()


def test_power_evaluation_error_carries_status():
    error = PowerEvaluationError("out of memory", PowerStatus.ALLOCATION_FAILURE)
    assert error.status == PowerStatus.ALLOCATION_FAILURE
    assert str(error) == "out of memory"
    assert isinstance(error, RuntimeError)


def test_critical_errors_are_recorded():
    log_critical("boom", {"templates": 3})
    assert len(ERROR_HANDLER.error_history) == 1
    assert ERROR_HANDLER.error_history[0].severity == ErrorSeverity.CRITICAL
    assert ERROR_HANDLER.error_history[0].context == {"templates": 3}


def test_require_non_empty_string():
    assert require_non_empty_string("Kobold", "name") == "Kobold"
    with pytest.raises(ValueError):
        require_non_empty_string("", "name")
    with pytest.raises(ValueError):
        require_non_empty_string(12, "name")


def test_ensure_non_negative_int_corrects_values():
    assert ensure_non_negative_int(4, "speed") == 4
    assert ensure_non_negative_int(-4, "speed") == 0
    assert ensure_non_negative_int(2.7, "speed") == 2
    assert ensure_non_negative_int("x", "speed", default=110) == 110
    assert ensure_non_negative_int(True, "speed", default=1) == 1
    assert len(ERROR_HANDLER.error_history) == 4
    assert all(
        error.severity == ErrorSeverity.MEDIUM for error in ERROR_HANDLER.error_history
    )


def test_ensure_int_in_range_clamps():
    assert ensure_int_in_range(50, "freq", 0, 100) == 50
    assert ensure_int_in_range(150, "freq", 0, 100) == 100
    assert ensure_int_in_range(-1, "freq", 0, 100) == 0
    assert ensure_int_in_range(None, "freq", 0, 100, default=25) == 25


def test_ensure_list_of_strings():
    assert ensure_list_of_strings(None, "flags") == []
    assert ensure_list_of_strings("UNIQUE", "flags") == []
    assert ensure_list_of_strings(["UNIQUE", 3, "EVIL"], "flags") == ["UNIQUE", "EVIL"]
