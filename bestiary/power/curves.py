"""
Discretization curves for depth level, rarity and experience.

These are deliberately ad hoc: each walks ``j`` upwards while subtracting
growing terms from a target value, so the integer truncation of every step is
part of the curve and must not be replaced by a closed form.
"""

from bestiary.core.constants import EXPERIENCE_HP_THRESHOLD, MAX_LEVEL

# (lower bound on j, base level, divisor), deepest band first.
LEVEL_BANDS = ((250, 90, 20), (130, 70, 6), (40, 40, 3))

# (upper bound, rounding increment) for two significant figures.
EXPERIENCE_ROUNDING = (
    (1_000, 10),
    (10_000, 100),
    (100_000, 1_000),
    (1_000_000, 10_000),
    (10_000_000, 100_000),
)


def level_steps(mexp: int, threat: int) -> int:
    """
    Returns the raw step count j of the level curve.

    Args:
        mexp (int): Toughness times damage, divided by 25.
        threat (int): The monster's threat figure.

    Returns:
        int: The first j where both values are exhausted.

    """
    j = 1
    while mexp > j + 4 or threat > j + 5:
        mexp -= j * j
        threat -= j + 4
        j += 1
    return j


def band_level(j: int) -> int:
    """Compresses a raw step count into a depth level, capped at MAX_LEVEL."""
    for lower, base, divisor in LEVEL_BANDS:
        if j > lower:
            return min(base + (j - lower) // divisor, MAX_LEVEL)
    return min(j, MAX_LEVEL)


def derive_level(mexp: int, threat: int) -> int:
    """
    Derives a depth level from a monster's toughness-damage product and threat.

    Args:
        mexp (int): Toughness times damage, divided by 25.
        threat (int): The monster's threat figure.

    Returns:
        int: The candidate depth level, between 1 and MAX_LEVEL.

    """
    return band_level(level_steps(mexp, threat))


def derive_rarity(power: int) -> int:
    """
    Derives a rarity from a normalized power score.

    Args:
        power (int): The depth-normalized power.

    Returns:
        int: The rarity, at least 1.

    """
    j = 1
    while power > j:
        power -= j * j
        j += 1
    return j


def round_experience(mexp: int) -> int:
    """Rounds experience above 100 to two significant figures."""
    if mexp <= 100:
        return mexp
    for upper, step in EXPERIENCE_ROUNDING:
        if mexp < upper:
            return (mexp + step // 2) // step * step
    return mexp


def derive_experience(hp: int, dam: int, level: int) -> int:
    """
    Derives the experience value of a monster.

    Very tough monsters divide before multiplying to keep the values small.

    Args:
        hp (int): The effective hit points.
        dam (int): The estimated damage.
        level (int): The monster level, at least 1.

    Returns:
        int: The rounded experience value.

    """
    level = max(level, 1)
    if hp > EXPERIENCE_HP_THRESHOLD:
        mexp = (hp // 25) * (dam // level)
    else:
        mexp = hp * dam // (level * 25)
    return round_experience(mexp)
