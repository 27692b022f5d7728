"""
Monster module: the template model evaluated by the power system.
"""

from .template import MonsterBlow, MonsterTemplate

__all__ = [
    "MonsterBlow",
    "MonsterTemplate",
]
