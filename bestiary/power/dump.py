"""
Diagnostic power dump.

Writes the evaluated statistics of every monster as a pipe-delimited table,
one row per non-empty template.
"""

from collections.abc import Iterable
from pathlib import Path

from bestiary.core.logging import log_info
from bestiary.monster.template import MonsterTemplate

DUMP_COLUMNS = (
    "index",
    "level",
    "rarity",
    "symbol",
    "name",
    "power",
    "scaled_power",
    "melee_dam",
    "spell_dam",
    "hp",
)


def format_power_row(template: MonsterTemplate) -> str:
    """Formats one template as a dump row, in DUMP_COLUMNS order."""
    return "|".join(str(getattr(template, column)) for column in DUMP_COLUMNS)


def write_power_dump(table: Iterable[MonsterTemplate], path: Path) -> int:
    """
    Writes the power dump of a bestiary.

    Args:
        table (Iterable[MonsterTemplate]): The evaluated templates.
        path (Path): The destination file.

    Returns:
        int: The number of rows written, header excluded.

    Raises:
        OSError: If the file cannot be written.

    """
    rows = [format_power_row(template) for template in table if not template.is_empty]
    with open(path, "w", encoding="utf-8") as f:
        f.write("|".join(DUMP_COLUMNS) + "\n")
        for row in rows:
            f.write(row + "\n")
    log_info(f"Wrote power dump with {len(rows)} rows", {"file_path": str(path)})
    return len(rows)
