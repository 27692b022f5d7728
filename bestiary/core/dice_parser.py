"""
Dice parser module for the power evaluator.

Evaluates damage formulas such as ``"15+[RLEV]*3"`` or ``"8d8"`` without
rolling: every dice term is fixed to its minimum, average or maximum value and
the remaining integer arithmetic is evaluated in a sandbox.
"""

import re
from collections.abc import Callable
from typing import Any

from catchery import log_warning
from pydantic import BaseModel, Field

from bestiary.core.constants import Aspect


class VarInfo(BaseModel):
    """Class to hold variable information."""

    name: str = Field(description="Variable name")
    value: int = Field(description="Variable value")

    def model_post_init(self, _: Any) -> None:
        """Validates fields after model initialization."""
        if not self.name or not isinstance(self.name, str):
            raise ValueError("name must be a non-empty string")
        if not isinstance(self.value, int):
            raise ValueError("value must be an integer")
        # Normalize name to uppercase.
        self.name = self.name.upper().strip()

    def replace_in_expr(self, expr: str) -> str:
        """
        Replaces occurrences of the variable in the expression with its value.

        Args:
            expr (str): The expression to perform replacements in.

        Returns:
            str: The expression with variable replaced by its value.

        """
        if not expr or not self.name:
            return expr
        return expr.replace(f"[{self.name}]", f"({self.value})")


DICE_PATTERN = re.compile(r"^(\d*)[dD](\d+)$")


# ---- Variable Substitution ----
def substitute_variables(
    expr: str,
    variables: list[VarInfo] | None = None,
) -> str:
    """
    Substitutes variables in the expression with their corresponding values.

    Args:
        expr (str):
            The expression to substitute variables in.
        variables (list[VarInfo] | None):
            The variables values to use for substitution.

    Returns:
        str: The expression with variables substituted.

    """
    expr = expr.upper().strip()
    if expr == "" or expr.isdigit():
        return expr
    for variable in variables or []:
        expr = variable.replace_in_expr(expr)
    return expr


# ---- Dice Parsing ----
def extract_dice_terms(expr: str) -> list[str]:
    """
    Extracts all dice terms like '1d8', '2D6', or 'd4' from an expression.

    Args:
        expr (str): The expression to extract dice terms from.

    Returns:
        list[str]: List of dice terms found in the expression.

    """
    expr = expr.upper().strip()
    if not expr or expr.isdigit():
        return []
    return re.findall(r"\b\d*D\d+\b", expr)


def _parse_term_and_process_dice(
    term: str,
    dice_action: Callable[[int, int], list[int]],
) -> tuple[int, list[int]]:
    """Parses a dice term and processes the dice based on the provided action.

    Args:
        term (str): The dice term to process (e.g., '2d6').
        dice_action (Callable[[int, int], list[int]]): A function that takes
            (num_dice, sides) and returns a list of individual dice results.

    Returns:
        tuple[int, list[int]]: The total and individual processed dice.

    """
    term = term.upper().strip()
    if not term:
        return 0, []
    if term.isdigit():
        value = int(term)
        return value, [value]

    match = DICE_PATTERN.match(term)
    if not match:
        log_warning(
            f"Invalid dice string format: '{term}'",
            {"term": term},
        )
        return 0, []

    num_str, sides_str = match.groups()
    num = int(num_str) if num_str else 1
    sides = int(sides_str)

    if num <= 0 or sides <= 0:
        log_warning(
            f"Dice count and sides must be positive, got {num}d{sides}",
            {"term": term, "num": num, "sides": sides},
        )
        return 0, []

    dice = dice_action(num, sides)
    return sum(dice), dice


def _assume_min_individual_dice(num: int, sides: int) -> list[int]:
    """The minimum roll for any die is always 1."""
    return [1] * num


def _assume_average_individual_dice(num: int, sides: int) -> list[int]:
    """Rounded-down average of each die."""
    return [(sides + 1) // 2] * num


def _assume_max_individual_dice(num: int, sides: int) -> list[int]:
    """The maximum roll of each die is its number of sides."""
    return [sides] * num


_DICE_ACTIONS: dict[Aspect, Callable[[int, int], list[int]]] = {
    Aspect.MINIMISE: _assume_min_individual_dice,
    Aspect.AVERAGE: _assume_average_individual_dice,
    Aspect.MAXIMISE: _assume_max_individual_dice,
}


def parse_term_and_assume_max_dice(term: str) -> tuple[int, list[int]]:
    """
    Parses a dice term and assumes the maximum roll for each die.

    Args:
        term (str): The dice term to parse.

    Returns:
        tuple[int, list[int]]: Total maximum result and list of maximum rolls.

    """
    return _parse_term_and_process_dice(term, _assume_max_individual_dice)


def dice_maximum(term: str) -> int:
    """
    Returns the maximum total of a bare dice term such as '3d8'.

    Args:
        term (str): The dice term.

    Returns:
        int: The number of dice times the number of sides, 0 if invalid.

    """
    total, _ = parse_term_and_assume_max_dice(term)
    return total


def _evaluate(expr: str, original: str) -> int:
    """Evaluates integer arithmetic left after dice and variable substitution."""
    try:
        return int(eval(expr, {"__builtins__": None}, {}))
    except Exception as e:
        log_warning(
            f"Failed to evaluate '{expr}': {e}",
            {
                "expression": expr,
                "original": original,
                "error": str(e),
                "context": "formula_evaluation",
            },
        )
        return 0


def _process_dice_expression(expr: str, aspect: Aspect) -> int:
    """Replaces dice terms by their fixed value and evaluates the result.

    Args:
        expr (str): The dice expression to process, variables already substituted.
        aspect (Aspect): How each die is fixed.

    Returns:
        int: The total result of the processed dice expression.

    """
    if not expr:
        return 0
    expr = expr.upper().strip()
    if expr.isdigit():
        return int(expr)

    processed_expr = expr
    for term in extract_dice_terms(expr):
        total, _ = _parse_term_and_process_dice(term, _DICE_ACTIONS[aspect])
        processed_expr = re.sub(
            r"\b" + re.escape(term) + r"\b", str(total), processed_expr, count=1
        )
    return _evaluate(processed_expr, expr)


# ---- Public API ----
def get_roll(
    expr: str,
    variables: list[VarInfo] | None = None,
    aspect: Aspect = Aspect.MAXIMISE,
) -> int:
    """
    Gets the value of a dice expression with every die fixed by aspect.

    Args:
        expr (str):
            The dice expression to analyze.
        variables (list[VarInfo] | None):
            A list of variable information for substitution.
        aspect (Aspect):
            Whether dice are minimised, averaged or maximised.

    Returns:
        int:
            The resulting value.

    """
    if not expr:
        return 0
    return _process_dice_expression(substitute_variables(expr, variables), aspect)


def get_max_roll(expr: str, variables: list[VarInfo] | None = None) -> int:
    """Gets the maximum possible roll for a dice expression."""
    return get_roll(expr, variables, Aspect.MAXIMISE)


def evaluate_expression(
    expr: str,
    variables: list[VarInfo] | None = None,
) -> int:
    """
    Evaluates a dice-free integer expression with variable substitution.

    Args:
        expr (str):
            The expression to evaluate.
        variables (list[VarInfo] | None):
            A list of variable information for substitution.

    Returns:
        int:
            The result of the expression evaluation.

    """
    if not expr:
        return 0
    substituted = substitute_variables(expr, variables)
    if substituted.isdigit():
        return int(substituted)
    return _evaluate(substituted, expr)
