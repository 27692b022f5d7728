"""
Bestiary loading and saving.

Reads a JSON list of monster templates, repairing malformed entries with the
validation helpers so that one bad record does not stop a whole run, and
writes evaluated tables back out including their derived statistics.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

from catchery import log_warning

from bestiary.core.constants import (
    MAX_BLOWS,
    MAX_DEPTH,
    NORMAL_SPEED,
    BlowEffect,
    BlowMethod,
    MonsterFlag,
    SpellFlag,
)
from bestiary.core.error_handling import (
    ensure_int_in_range,
    ensure_list_of_strings,
    ensure_non_negative_int,
    require_non_empty_string,
)
from bestiary.core.logging import log_error, log_info
from bestiary.monster.template import MonsterBlow, MonsterTemplate

_E = TypeVar("_E", bound=Enum)


def _parse_enum_names(
    names: list[str],
    enum_type: type[_E],
    context: dict[str, Any],
) -> set[_E]:
    """Converts flag names to enum members, dropping the unknown ones."""
    members: set[_E] = set()
    for name in names:
        try:
            members.add(enum_type[name.strip().upper()])
        except KeyError:
            log_warning(
                f"Unknown {enum_type.__name__} '{name}' ignored.",
                {**context, "flag": name},
            )
    return members


def _blow_from_dict(data: Any, context: dict[str, Any]) -> MonsterBlow | None:
    """Builds a blow, returning None for entries that cannot be repaired."""
    if not isinstance(data, dict):
        log_warning("Blow entry is not an object, skipping.", {**context, "blow": data})
        return None
    try:
        return MonsterBlow(
            method=BlowMethod[str(data.get("method", "NONE")).upper()],
            effect=BlowEffect[str(data.get("effect", "HURT")).upper()],
            dice=str(data.get("dice", "0d0")),
        )
    except (KeyError, ValueError) as e:
        log_warning(
            f"Invalid blow skipped: {e}",
            {**context, "blow": data},
        )
        return None


def template_from_dict(data: dict[str, Any], index: int = 0) -> MonsterTemplate:
    """
    Builds a MonsterTemplate from its JSON representation.

    Numeric fields outside their valid range are clamped with a warning;
    unknown flags and broken blows are dropped with a warning.

    Args:
        data (dict[str, Any]): The JSON object describing the monster.
        index (int): The index used when the data does not carry one.

    Returns:
        MonsterTemplate: The template.

    Raises:
        ValueError: If the monster has no name.

    """
    name = require_non_empty_string(data.get("name"), "name", {"index": index})
    context = {"name": name}

    blows: list[MonsterBlow] = []
    for entry in data.get("blows", []) or []:
        blow = _blow_from_dict(entry, context)
        if blow is not None:
            blows.append(blow)
    if len(blows) > MAX_BLOWS:
        log_warning(
            f"Monster has {len(blows)} blows, keeping the first {MAX_BLOWS}.",
            context,
        )
        blows = blows[:MAX_BLOWS]

    return MonsterTemplate(
        index=ensure_non_negative_int(data.get("index", index), "index", index, context),
        name=name,
        symbol=str(data.get("symbol", "?")) or "?",
        level=ensure_int_in_range(data.get("level", 0), "level", 0, MAX_DEPTH - 1, context=context),
        speed=ensure_non_negative_int(data.get("speed", NORMAL_SPEED), "speed", NORMAL_SPEED, context),
        armor_class=ensure_non_negative_int(data.get("armor_class", 0), "armor_class", 0, context),
        avg_hp=ensure_non_negative_int(data.get("avg_hp", 1), "avg_hp", 1, context),
        rarity=ensure_non_negative_int(data.get("rarity", 1), "rarity", 1, context),
        blows=blows,
        flags=_parse_enum_names(
            ensure_list_of_strings(data.get("flags"), "flags", context),
            MonsterFlag,
            context,
        ),
        spell_flags=_parse_enum_names(
            ensure_list_of_strings(data.get("spell_flags"), "spell_flags", context),
            SpellFlag,
            context,
        ),
        freq_spell=ensure_int_in_range(data.get("freq_spell", 0), "freq_spell", 0, 100, context=context),
        freq_innate=ensure_int_in_range(data.get("freq_innate", 0), "freq_innate", 0, 100, context=context),
        experience=ensure_non_negative_int(data.get("experience", 0), "experience", 0, context),
    )


def template_to_dict(template: MonsterTemplate) -> dict[str, Any]:
    """
    Converts a template, derived statistics included, to a JSON object.

    Flags are written sorted by name so saved files are stable.
    """
    data = template.model_dump(mode="json")
    data["flags"] = sorted(flag.name for flag in template.flags)
    data["spell_flags"] = sorted(spell.name for spell in template.spell_flags)
    return data


def load_bestiary(path: Path) -> list[MonsterTemplate]:
    """
    Loads a bestiary from a JSON file holding a list of monsters.

    Entries without a name are logged and skipped. Indices default to the
    entry's position in the file.

    Args:
        path (Path): The JSON file to read.

    Returns:
        list[MonsterTemplate]: The templates, in file order.

    Raises:
        ValueError: If the file is missing, unreadable or not a JSON list.

    """
    try:
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        if not path.is_file():
            raise ValueError(f"Not a file: {path}")
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"Expected list in {path}, got {type(data).__name__}")
    except (json.JSONDecodeError, FileNotFoundError, ValueError) as e:
        raise ValueError(f"File {path} raised an error: {e}") from e

    table: list[MonsterTemplate] = []
    for position, entry in enumerate(data):
        if not isinstance(entry, dict):
            log_error(
                f"Bestiary entry {position} is not an object, skipping.",
                {"file_path": str(path), "position": position},
            )
            continue
        try:
            table.append(template_from_dict(entry, position))
        except ValueError as e:
            log_error(
                f"Bestiary entry {position} skipped: {e}",
                {"file_path": str(path), "position": position},
            )

    log_info(f"Loaded {len(table)} monsters", {"file_path": str(path)})
    return table


def save_bestiary(table: list[MonsterTemplate], path: Path) -> None:
    """
    Writes a bestiary, derived statistics included, to a JSON file.

    Args:
        table (list[MonsterTemplate]): The templates to write.
        path (Path): The destination file.

    """
    with open(path, "w", encoding="utf-8") as f:
        json.dump([template_to_dict(template) for template in table], f, indent=2)
    log_info(f"Saved {len(table)} monsters", {"file_path": str(path)})
