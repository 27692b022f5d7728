"""
Shared fixtures for the bestiary power tests.
"""

import pytest

from bestiary.core.constants import BlowEffect, BlowMethod
from bestiary.monster.template import MonsterBlow, MonsterTemplate


@pytest.fixture
def make_template():
    """Factory building a plain level 5 monster, overridable per field."""

    def _make(**overrides) -> MonsterTemplate:
        fields = {
            "index": 0,
            "name": "Goblin",
            "symbol": "o",
            "level": 5,
            "speed": 110,
            "armor_class": 0,
            "avg_hp": 20,
            "rarity": 1,
            "blows": [
                MonsterBlow(
                    method=BlowMethod.HIT,
                    effect=BlowEffect.EAT_GOLD,
                    dice="1d4",
                )
            ],
            "experience": 7,
        }
        fields.update(overrides)
        return MonsterTemplate(**fields)

    return _make


@pytest.fixture
def goblin(make_template):
    """
    A level 5 thief at normal speed.

    Melee: (4 + 5) per round, 9*3 + 9*10//7 = 39 over the window, 60%
    accuracy gives 23. Effective hp: 20 + (20*25//3)//155 = 21.
    """
    return make_template()
