"""
Monster template module.

Defines the MonsterTemplate and MonsterBlow models: one species' static combat
definition plus the derived statistics filled in by the power evaluation.
"""

from typing import Any

from pydantic import BaseModel, Field

from bestiary.core.constants import (
    MAX_BLOWS,
    MAX_DEPTH,
    NORMAL_SPEED,
    BlowEffect,
    BlowMethod,
    MonsterFlag,
    SpellFlag,
)
from bestiary.core.dice_parser import DICE_PATTERN, dice_maximum


class MonsterBlow(BaseModel):
    """A single melee attack slot."""

    method: BlowMethod = Field(
        default=BlowMethod.NONE,
        description="How the blow is delivered; NONE marks an empty slot",
    )
    effect: BlowEffect = Field(
        default=BlowEffect.HURT,
        description="The special effect of the blow",
    )
    dice: str = Field(
        default="0d0",
        description="The damage dice of the blow (e.g., '1d4')",
    )

    def model_post_init(self, _: Any) -> None:
        """Validates fields after model initialization."""
        self.dice = self.dice.strip().lower()
        if self.dice != "0d0" and not DICE_PATTERN.match(self.dice):
            raise ValueError(f"Invalid blow dice: '{self.dice}'")

    @property
    def is_empty(self) -> bool:
        """Returns True if this slot holds no attack."""
        return self.method == BlowMethod.NONE

    @property
    def max_damage(self) -> int:
        """Returns the maximum dice damage of the blow."""
        if self.dice == "0d0":
            return 0
        return dice_maximum(self.dice)

    def __str__(self) -> str:
        return f"{self.method.display_name} ({self.effect.display_name}) {self.dice}"


class MonsterTemplate(BaseModel):
    """
    Represents one monster species: its raw combat inputs and the derived
    statistics recomputed by every power evaluation pass.

    Templates are owned by the caller's table and mutated in place.
    """

    # Identity.
    index: int = Field(default=0, ge=0, description="Position in the bestiary")
    name: str = Field(default="", description="The name of the monster")
    symbol: str = Field(default="?", description="The display symbol")

    # Raw combat inputs.
    level: int = Field(
        default=0,
        ge=0,
        lt=MAX_DEPTH,
        description="Native depth; 0 marks an unplaced monster",
    )
    speed: int = Field(
        default=NORMAL_SPEED,
        ge=0,
        description="Speed rating, 110 being normal speed",
    )
    armor_class: int = Field(default=0, ge=0, description="Armor class")
    avg_hp: int = Field(default=1, ge=0, description="Average base hit points")
    rarity: int = Field(
        default=1,
        ge=0,
        description="Inverse spawn weight; 0 means never randomly generated",
    )
    blows: list[MonsterBlow] = Field(
        default_factory=list,
        max_length=MAX_BLOWS,
        description="Up to four melee attack slots",
    )
    flags: set[MonsterFlag] = Field(
        default_factory=set,
        description="Movement, defense and behaviour traits",
    )
    spell_flags: set[SpellFlag] = Field(
        default_factory=set,
        description="Spell and innate abilities",
    )
    freq_spell: int = Field(
        default=0,
        ge=0,
        le=100,
        description="Spell casting frequency, in percent",
    )
    freq_innate: int = Field(
        default=0,
        ge=0,
        le=100,
        description="Innate attack frequency, in percent",
    )
    experience: int = Field(default=0, ge=0, description="Experience value")

    # Derived outputs.
    melee_dam: int = Field(default=0, description="Estimated melee damage")
    spell_dam: int = Field(default=0, description="Estimated spell damage")
    highest_threat: int = Field(default=0, description="Combined threat figure")
    hp: int = Field(default=0, description="Scaled effective hit points")
    power: int = Field(default=0, description="Raw power score")
    scaled_power: int = Field(default=0, description="Depth-normalized power")

    def has(self, flag: MonsterFlag) -> bool:
        """Returns True if the monster has the given trait."""
        return flag in self.flags

    def has_any(self, *flags: MonsterFlag) -> bool:
        """Returns True if the monster has at least one of the given traits."""
        return any(flag in self.flags for flag in flags)

    def casts(self, spell: SpellFlag) -> bool:
        """Returns True if the monster has the given spell ability."""
        return spell in self.spell_flags

    def casts_any(self, *spells: SpellFlag) -> bool:
        """Returns True if the monster has at least one of the given abilities."""
        return any(spell in self.spell_flags for spell in spells)

    @property
    def rlev(self) -> int:
        """The monster level, forced to at least 1 for town monsters."""
        return max(self.level, 1)

    @property
    def is_placed(self) -> bool:
        """Returns True if the monster has a native depth."""
        return self.level > 0

    @property
    def is_unique(self) -> bool:
        return MonsterFlag.UNIQUE in self.flags

    @property
    def spawns_naturally(self) -> bool:
        """Returns True if the monster takes part in random generation."""
        return not self.is_unique and self.rarity > 0

    @property
    def is_empty(self) -> bool:
        """Returns True for placeholder entries without a name."""
        return not self.name

    @property
    def active_blows(self) -> list[MonsterBlow]:
        """The blows that are actually delivered."""
        return [blow for blow in self.blows if not blow.is_empty]

    def __hash__(self) -> int:
        return hash((self.index, self.name))

    def __str__(self) -> str:
        return f"{self.name} ({self.symbol}, L{self.level})"
