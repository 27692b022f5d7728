"""
Damage estimation module.

Estimates the maximum damage a monster can deal over ten game rounds by
combining its most dangerous spell or breath with its melee blows, then
adjusting for speed, accuracy, mobility and grouping.
"""

from bestiary.core.constants import MonsterFlag, SpellFlag
from bestiary.core.logging import log_debug
from bestiary.core.projections import BREATHS, SPELLS, blow_effect_damage
from bestiary.core.speed import DEFAULT_SPEED_TABLE, SpeedTable
from bestiary.monster.template import MonsterBlow, MonsterTemplate

# Damage is estimated over this many rounds.
ROUNDS = 10

# Spells are assumed to be cast at least this often, in percent.
MIN_SPELL_FREQ = 10


class DamageEstimator:
    """Computes worst-case damage output and threat for monster templates."""

    def __init__(self, speed_table: SpeedTable | None = None) -> None:
        self.speed_table = speed_table or DEFAULT_SPEED_TABLE

    def spell_threat(self, template: MonsterTemplate) -> int:
        """
        Returns the threat of the single most dangerous spell-like ability.

        Breaths are checked first, in table order: a breath replaces the
        running value only when its raw damage beats it, and then adds its
        own bonus. Every other ability keeps a running maximum.

        Args:
            template (MonsterTemplate): The monster to evaluate.

        Returns:
            int: The per-cast threat value, before frequency scaling.

        """
        rlev = template.rlev
        spell_dam = 0
        for flag, breath in BREATHS.items():
            if not template.casts(flag):
                continue
            breath_dam = breath.damage(template.avg_hp)
            if spell_dam < breath_dam:
                spell_dam = breath.threat_value(breath_dam, rlev)
        for flag, spell in SPELLS.items():
            if template.casts(flag):
                spell_dam = max(spell_dam, spell.threat_value(rlev))
        return spell_dam

    def spell_damage(self, template: MonsterTemplate) -> int:
        """Returns the spell damage over the whole window, scaled by frequency."""
        spell_dam = self.spell_threat(template) * ROUNDS
        if spell_dam:
            freq = max(template.freq_spell, MIN_SPELL_FREQ)
            spell_dam = spell_dam * freq // 100
        return spell_dam

    @staticmethod
    def blow_damage(blow: MonsterBlow, level: int) -> int:
        """
        Returns the maximum damage of one blow including its side effect.

        Args:
            blow (MonsterBlow): The blow to evaluate.
            level (int): The monster level.

        Returns:
            int: The blow damage.

        """
        atk_dam = blow_effect_damage(blow.effect, blow.max_damage, level)
        if blow.method.is_stunning:
            atk_dam = atk_dam * 4 // 3
        elif blow.method.is_cutting:
            atk_dam = atk_dam * 7 // 5
        return atk_dam

    def melee_damage(self, template: MonsterTemplate, energy: int) -> int:
        """
        Returns the melee damage over the window, adjusted for reaching the
        target, accuracy and mobility. Never less than 1.

        Args:
            template (MonsterTemplate): The monster to evaluate.
            energy (int): The monster's energy per game turn.

        Returns:
            int: The melee damage estimate.

        """
        melee_dam = 0
        if not template.has(MonsterFlag.NEVER_BLOW):
            melee_dam = sum(
                self.blow_damage(blow, template.level) for blow in template.active_blows
            )

        # Monsters that bypass walls always reach the target.
        if template.has_any(MonsterFlag.KILL_WALL, MonsterFlag.PASS_WALL):
            melee_dam *= ROUNDS
        else:
            melee_dam = melee_dam * 3 + melee_dam * energy // 7

        # Accuracy grows with level.
        melee_dam = melee_dam * min(45 + template.rlev * 3, 95) // 100

        if not template.has(MonsterFlag.MULTIPLY):
            melee_dam = self._mobility_adjust(template, melee_dam)

        return max(melee_dam, 1)

    @staticmethod
    def _mobility_adjust(template: MonsterTemplate, melee_dam: int) -> int:
        """Reduces melee damage of erratic and stationary monsters."""
        if template.has_any(MonsterFlag.RAND_25, MonsterFlag.RAND_50):
            reduce = 100
            if template.has(MonsterFlag.RAND_25):
                reduce -= 25
            if template.has(MonsterFlag.RAND_50):
                reduce -= 50
            # Even random movers bump into the target one time in eight.
            reduce += (100 - reduce) // 8
            melee_dam = melee_dam * reduce // 100

        if template.has(MonsterFlag.NEVER_MOVE):
            if template.casts_any(SpellFlag.TELE_TO, SpellFlag.BLINK):
                melee_dam = melee_dam // 5 + 4 * melee_dam * template.freq_spell // 500
                # Spell failure chance.
                if not template.has(MonsterFlag.STUPID):
                    melee_dam = (
                        melee_dam // 5
                        + 4 * melee_dam * min(75 + (template.rlev + 3) // 4, 100) // 500
                    )
            elif template.has(MonsterFlag.INVISIBLE):
                melee_dam //= 3
            else:
                melee_dam //= 5
        return melee_dam

    def estimate_max_damage(self, template: MonsterTemplate) -> tuple[int, int]:
        """
        Estimates the maximum damage the monster deals over ten rounds.

        Writes melee_dam, spell_dam and highest_threat back into the template.

        Args:
            template (MonsterTemplate): The monster to evaluate.

        Returns:
            tuple[int, int]: The speed-adjusted damage and the threat figure.

        """
        energy = self.speed_table.energy_for(template)

        spell_dam = self.spell_damage(template)
        melee_dam = self.melee_damage(template, energy)

        threat = spell_dam + melee_dam
        template.spell_dam = spell_dam
        template.melee_dam = melee_dam

        # Energy 10 is normal speed: double speed doubles damage.
        dam = threat * energy // 10

        # Fast multipliers are the worst kind.
        if template.has(MonsterFlag.MULTIPLY):
            threat = threat * energy // 5

        if template.has(MonsterFlag.FRIENDS):
            threat *= 2
        elif template.has(MonsterFlag.FRIEND):
            threat = threat * 3 // 2

        template.highest_threat = max(threat, 1)
        dam = max(dam, 1)

        log_debug(
            f"Estimated damage for {template.name}",
            {
                "melee": melee_dam,
                "spell": spell_dam,
                "threat": template.highest_threat,
                "damage": dam,
            },
        )
        return dam, template.highest_threat
