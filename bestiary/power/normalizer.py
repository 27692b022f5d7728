"""
Power normalization module.

Runs the damage and toughness estimators over the whole bestiary, aggregates
per-depth population totals and normalizes every monster's power against the
averages of its depth. In rebalance mode the normalized figures are folded
back into each template's level, experience and rarity.

The bestiary is always refined over exactly POWER_PASSES passes; later
content depends on that count, so there is no convergence test.
"""

from collections.abc import MutableSequence

from pydantic import BaseModel, Field

from bestiary.core.constants import POWER_PASSES, MonsterFlag
from bestiary.core.error_handling import (
    PowerEvaluationError,
    PowerStatus,
    log_critical,
)
from bestiary.core.logging import log_debug, log_info
from bestiary.core.speed import DEFAULT_SPEED_TABLE, SpeedTable
from bestiary.monster.template import MonsterTemplate
from bestiary.power.aggregates import DepthAggregator
from bestiary.power.curves import derive_experience, derive_level, derive_rarity
from bestiary.power.damage import DamageEstimator
from bestiary.power.toughness import ToughnessEstimator

BestiaryTable = MutableSequence[MonsterTemplate]


class PowerReport(BaseModel):
    """Summary of a complete power evaluation."""

    status: PowerStatus = Field(
        default=PowerStatus.SUCCESS,
        description="Outcome of the evaluation",
    )
    passes: int = Field(
        default=0,
        ge=0,
        description="Number of passes performed",
    )
    total_power: int = Field(
        default=0,
        description="Sum of every template's scaled power",
    )
    rebalanced: bool = Field(
        default=False,
        description="Whether level, experience and rarity were rewritten",
    )
    templates: int = Field(
        default=0,
        ge=0,
        description="Number of templates evaluated",
    )


def group_power(template: MonsterTemplate, power: int, energy: int) -> int:
    """
    Scales a monster's raw power for the company it keeps.

    Args:
        template (MonsterTemplate): The monster.
        power (int): Effective hp times damage.
        energy (int): The monster's energy per game turn.

    Returns:
        int: The adjusted power.

    """
    # Average in-level group size is 5.
    if not template.is_unique:
        if template.has(MonsterFlag.FRIEND):
            power *= 2
        elif template.has(MonsterFlag.FRIENDS):
            power *= 5

    if template.has(MonsterFlag.ESCORTS):
        power *= 3
    elif template.has(MonsterFlag.ESCORT):
        power *= 2

    # Fast multipliers are much worse than slow ones, more so if they get
    # through walls or doors.
    if template.has(MonsterFlag.MULTIPLY):
        if template.has_any(MonsterFlag.KILL_WALL, MonsterFlag.PASS_WALL):
            power = max(power, power * energy)
        elif template.has_any(MonsterFlag.OPEN_DOOR, MonsterFlag.BASH_DOOR):
            power = max(power, power * energy * 3 // 2)
        else:
            power = max(power, power * energy // 2)
    return power


class PowerNormalizer:
    """Evaluates and normalizes the power of every template in a bestiary."""

    def __init__(
        self,
        speed_table: SpeedTable | None = None,
        rebalance: bool = False,
    ) -> None:
        """
        Initialize the normalizer.

        Args:
            speed_table (SpeedTable | None):
                Speed to energy lookup. Defaults to the shared table.
            rebalance (bool):
                Whether level, experience and rarity are rewritten.

        """
        self.speed_table = speed_table or DEFAULT_SPEED_TABLE
        self.rebalance = rebalance
        self.damage = DamageEstimator(self.speed_table)
        self.toughness = ToughnessEstimator()
        self.aggregator = DepthAggregator()

    @staticmethod
    def _allocate_power(size: int) -> list[int]:
        """Allocates scratch storage for raw power scores."""
        try:
            return [0] * size
        except MemoryError as e:
            log_critical(
                "Unable to allocate power storage",
                {"templates": size},
                e,
            )
            raise PowerEvaluationError(
                f"Unable to allocate power storage for {size} templates",
                PowerStatus.ALLOCATION_FAILURE,
            ) from e

    def _refresh_level_and_experience(
        self, template: MonsterTemplate, hp: int, dam: int
    ) -> None:
        """Derives level and experience from effective hp and damage."""
        if not template.is_placed:
            template.experience = 0
            return

        level = template.level
        if not template.is_unique:
            level = derive_level(hp * dam // 25, template.highest_threat)
            if self.rebalance:
                template.level = level

        if self.rebalance:
            template.experience = max(derive_experience(hp, dam, level), 1)
            log_debug(
                f"Rebalanced {template.name}",
                {"level": template.level, "experience": template.experience},
            )

    def _evaluate(self, template: MonsterTemplate) -> int:
        """
        First phase for one template: estimates, derivations, raw power and
        aggregation. Returns the raw power.
        """
        dam, _ = self.damage.estimate_max_damage(template)
        hp = self.toughness.estimate_effective_hp(template)

        self._refresh_level_and_experience(template, hp, dam)

        # Fixed scaling factor keeping the products small.
        hp = max(hp // 2, 1)
        template.hp = hp

        energy = self.speed_table.energy_for(template)
        power = group_power(template, hp * dam, energy)

        self.aggregator.accumulate(template, hp, dam, energy)
        return power

    def _normalize(self, template: MonsterTemplate, power: int) -> None:
        """Second phase for one template: divides by its depth averages."""
        template.power = max(power, 1)

        scaled = power
        averages = self.aggregator.averages(template.level)
        if averages is not None:
            av_hp, av_dam = averages
            if av_hp > 0:
                scaled //= av_hp
            if av_dam > 0:
                scaled //= av_dam
        template.scaled_power = max(scaled, 1)

        if self.rebalance and averages is not None:
            template.rarity = derive_rarity(template.scaled_power)

    def run_pass(self, pass_index: int, table: BestiaryTable) -> BestiaryTable:
        """
        Performs one full pass over the bestiary.

        Every template is evaluated and aggregated before any template is
        normalized, since normalization reads the finished depth totals.

        Args:
            pass_index (int): Zero-based index of the pass.
            table (BestiaryTable): The templates, mutated in place.

        Returns:
            BestiaryTable: The same table.

        """
        power = self._allocate_power(len(table))
        self.aggregator.reset()

        for i, template in enumerate(table):
            power[i] = self._evaluate(template)

        for template, raw_power in zip(table, power):
            self._normalize(template, raw_power)

        log_info(
            f"Power pass {pass_index + 1}/{POWER_PASSES} complete",
            {
                "templates": len(table),
                "populated_depths": len(self.aggregator.populated_depths()),
                "scaled_power": sum(template.scaled_power for template in table),
            },
        )
        return table

    def run(self, table: BestiaryTable) -> PowerReport:
        """
        Evaluates the whole bestiary over exactly POWER_PASSES passes.

        Args:
            table (BestiaryTable): The templates, mutated in place.

        Returns:
            PowerReport: The run summary, including the total scaled power.

        Raises:
            PowerEvaluationError: If scratch storage cannot be allocated.

        """
        for pass_index in range(POWER_PASSES):
            table = self.run_pass(pass_index, table)

        return PowerReport(
            status=PowerStatus.SUCCESS,
            passes=POWER_PASSES,
            total_power=sum(template.scaled_power for template in table),
            rebalanced=self.rebalance,
            templates=len(table),
        )


def evaluate_bestiary_power(
    table: BestiaryTable,
    rebalance: bool = False,
    speed_table: SpeedTable | None = None,
) -> PowerReport:
    """
    Evaluates the power of every template in a bestiary.

    Args:
        table (BestiaryTable): The templates, mutated in place.
        rebalance (bool): Whether level, experience and rarity are rewritten.
        speed_table (SpeedTable | None): Speed to energy lookup.

    Returns:
        PowerReport: The run summary.

    """
    return PowerNormalizer(speed_table=speed_table, rebalance=rebalance).run(table)
