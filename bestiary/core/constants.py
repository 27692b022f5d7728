"""
Constants and enumerations for the power evaluator.

Defines global constants and the enumerations for monster capability tags,
spell abilities, melee blow methods and effects, projection elements and dice
aspects used throughout the bestiary.
"""

from enum import Enum

# Number of per-depth aggregate slots; valid monster levels are 0..MAX_DEPTH-1.
MAX_DEPTH = 128

# Derived levels never exceed this value.
MAX_LEVEL = 99

# Speed rating of a monster moving at normal speed (energy 10).
NORMAL_SPEED = 110

# Speed offset granted to monsters that can haste themselves.
HASTE_BONUS = 5

# Number of refinement passes over the bestiary. Always exactly this many.
POWER_PASSES = 3

# Depths at which aggregate contributions are scaled down by 10.
OVERFLOW_DEPTHS = (90, 65, 40)

# Above this effective hp, experience is divided before multiplying.
EXPERIENCE_HP_THRESHOLD = 10000

# Maximum number of melee blow slots per monster.
MAX_BLOWS = 4


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.lower().replace("_", " ").capitalize()


class MonsterFlag(NiceEnum):
    """Movement, defense and behaviour traits of a monster."""

    UNIQUE = "UNIQUE"
    NEVER_BLOW = "NEVER_BLOW"
    NEVER_MOVE = "NEVER_MOVE"
    KILL_WALL = "KILL_WALL"
    PASS_WALL = "PASS_WALL"
    OPEN_DOOR = "OPEN_DOOR"
    BASH_DOOR = "BASH_DOOR"
    RAND_25 = "RAND_25"
    RAND_50 = "RAND_50"
    MULTIPLY = "MULTIPLY"
    INVISIBLE = "INVISIBLE"
    STUPID = "STUPID"
    FRIEND = "FRIEND"
    FRIENDS = "FRIENDS"
    ESCORT = "ESCORT"
    ESCORTS = "ESCORTS"
    REGENERATE = "REGENERATE"
    EMPTY_MIND = "EMPTY_MIND"
    COLD_BLOOD = "COLD_BLOOD"
    WEIRD_MIND = "WEIRD_MIND"
    IM_ACID = "IM_ACID"
    IM_FIRE = "IM_FIRE"
    IM_COLD = "IM_COLD"
    IM_ELEC = "IM_ELEC"
    IM_POIS = "IM_POIS"
    IM_WATER = "IM_WATER"
    RES_NETH = "RES_NETH"
    RES_NEXUS = "RES_NEXUS"
    RES_DISE = "RES_DISE"
    HURT_ROCK = "HURT_ROCK"
    HURT_LIGHT = "HURT_LIGHT"
    NO_SLEEP = "NO_SLEEP"
    NO_FEAR = "NO_FEAR"
    NO_CONF = "NO_CONF"
    NO_STUN = "NO_STUN"


# Immunities counted towards the basic resistance score.
BASIC_IMMUNITIES = (
    MonsterFlag.IM_ACID,
    MonsterFlag.IM_FIRE,
    MonsterFlag.IM_COLD,
    MonsterFlag.IM_ELEC,
    MonsterFlag.IM_POIS,
)

# Resistances granting a bonus once a monster is somewhat resistant.
HIGH_RESISTANCES = (
    MonsterFlag.IM_WATER,
    MonsterFlag.RES_NETH,
    MonsterFlag.RES_NEXUS,
    MonsterFlag.RES_DISE,
)


class SpellFlag(NiceEnum):
    """Innate and spell abilities: breaths, bolts, balls, curses and summons."""

    # Breaths.
    BR_ACID = "BR_ACID"
    BR_ELEC = "BR_ELEC"
    BR_FIRE = "BR_FIRE"
    BR_COLD = "BR_COLD"
    BR_POIS = "BR_POIS"
    BR_NETH = "BR_NETH"
    BR_CHAO = "BR_CHAO"
    BR_DISE = "BR_DISE"
    BR_SHAR = "BR_SHAR"
    BR_LIGHT = "BR_LIGHT"
    BR_DARK = "BR_DARK"
    BR_SOUN = "BR_SOUN"
    BR_NEXU = "BR_NEXU"
    BR_TIME = "BR_TIME"
    BR_INER = "BR_INER"
    BR_GRAV = "BR_GRAV"
    BR_PLAS = "BR_PLAS"
    BR_WALL = "BR_WALL"
    # Balls.
    BA_ACID = "BA_ACID"
    BA_ELEC = "BA_ELEC"
    BA_FIRE = "BA_FIRE"
    BA_COLD = "BA_COLD"
    BA_POIS = "BA_POIS"
    BA_NETH = "BA_NETH"
    BA_WATE = "BA_WATE"
    BA_MANA = "BA_MANA"
    BA_DARK = "BA_DARK"
    # Curses.
    DRAIN_MANA = "DRAIN_MANA"
    MIND_BLAST = "MIND_BLAST"
    BRAIN_SMASH = "BRAIN_SMASH"
    CAUSE_1 = "CAUSE_1"
    CAUSE_2 = "CAUSE_2"
    CAUSE_3 = "CAUSE_3"
    CAUSE_4 = "CAUSE_4"
    # Bolts.
    BO_ACID = "BO_ACID"
    BO_ELEC = "BO_ELEC"
    BO_FIRE = "BO_FIRE"
    BO_COLD = "BO_COLD"
    BO_NETH = "BO_NETH"
    BO_WATE = "BO_WATE"
    BO_MANA = "BO_MANA"
    BO_PLAS = "BO_PLAS"
    BO_ICEE = "BO_ICEE"
    # Projectiles.
    ARROW_1 = "ARROW_1"
    ARROW_2 = "ARROW_2"
    ARROW_3 = "ARROW_3"
    ARROW_4 = "ARROW_4"
    BOULDER = "BOULDER"
    MISSILE = "MISSILE"
    # Status and utility.
    SCARE = "SCARE"
    BLIND = "BLIND"
    CONF = "CONF"
    SLOW = "SLOW"
    HOLD = "HOLD"
    HASTE = "HASTE"
    HEAL = "HEAL"
    BLINK = "BLINK"
    TPORT = "TPORT"
    TELE_TO = "TELE_TO"
    TELE_AWAY = "TELE_AWAY"
    TELE_LEVEL = "TELE_LEVEL"
    DARKNESS = "DARKNESS"
    TRAPS = "TRAPS"
    FORGET = "FORGET"
    SHRIEK = "SHRIEK"
    # Summons.
    S_KIN = "S_KIN"
    S_MONSTER = "S_MONSTER"
    S_MONSTERS = "S_MONSTERS"
    S_ANIMAL = "S_ANIMAL"
    S_SPIDER = "S_SPIDER"
    S_HOUND = "S_HOUND"
    S_HYDRA = "S_HYDRA"
    S_ANGEL = "S_ANGEL"
    S_DEMON = "S_DEMON"
    S_HI_DEMON = "S_HI_DEMON"
    S_UNDEAD = "S_UNDEAD"
    S_HI_UNDEAD = "S_HI_UNDEAD"
    S_DRAGON = "S_DRAGON"
    S_HI_DRAGON = "S_HI_DRAGON"
    S_WRAITH = "S_WRAITH"
    S_UNIQUE = "S_UNIQUE"

    @property
    def is_breath(self) -> bool:
        """Returns True if this ability is a breath attack."""
        return self.name.startswith("BR_")


# Abilities that let a monster escape from a fight.
ESCAPE_SPELLS = (SpellFlag.TPORT, SpellFlag.TELE_AWAY, SpellFlag.TELE_LEVEL)


class BlowMethod(NiceEnum):
    """The way a melee blow is delivered."""

    NONE = "NONE"
    HIT = "HIT"
    TOUCH = "TOUCH"
    PUNCH = "PUNCH"
    KICK = "KICK"
    CLAW = "CLAW"
    BITE = "BITE"
    STING = "STING"
    BUTT = "BUTT"
    CRUSH = "CRUSH"
    ENGULF = "ENGULF"
    CRAWL = "CRAWL"
    DROOL = "DROOL"
    SPIT = "SPIT"
    GAZE = "GAZE"
    WAIL = "WAIL"
    SPORE = "SPORE"
    BEG = "BEG"
    INSULT = "INSULT"
    MOAN = "MOAN"

    @property
    def is_stunning(self) -> bool:
        """Returns True if blows of this kind can stun."""
        return self in (BlowMethod.PUNCH, BlowMethod.KICK, BlowMethod.BUTT, BlowMethod.CRUSH)

    @property
    def is_cutting(self) -> bool:
        """Returns True if blows of this kind can cut."""
        return self in (BlowMethod.CLAW, BlowMethod.BITE)


class BlowEffect(NiceEnum):
    """The special effect carried by a melee blow."""

    NONE = "NONE"
    HURT = "HURT"
    POISON = "POISON"
    UN_BONUS = "UN_BONUS"
    UN_POWER = "UN_POWER"
    EAT_GOLD = "EAT_GOLD"
    EAT_ITEM = "EAT_ITEM"
    EAT_FOOD = "EAT_FOOD"
    EAT_LIGHT = "EAT_LIGHT"
    ACID = "ACID"
    ELEC = "ELEC"
    FIRE = "FIRE"
    COLD = "COLD"
    BLIND = "BLIND"
    CONFUSE = "CONFUSE"
    TERRIFY = "TERRIFY"
    PARALYZE = "PARALYZE"
    LOSE_STR = "LOSE_STR"
    LOSE_INT = "LOSE_INT"
    LOSE_WIS = "LOSE_WIS"
    LOSE_DEX = "LOSE_DEX"
    LOSE_CON = "LOSE_CON"
    LOSE_CHR = "LOSE_CHR"
    LOSE_ALL = "LOSE_ALL"
    SHATTER = "SHATTER"
    EXP_10 = "EXP_10"
    EXP_20 = "EXP_20"
    EXP_40 = "EXP_40"
    EXP_80 = "EXP_80"
    HALLU = "HALLU"


class Element(NiceEnum):
    """Projection elements, used to adjust damage for a target's resistance."""

    ACID = "ACID"
    ELEC = "ELEC"
    FIRE = "FIRE"
    COLD = "COLD"
    POIS = "POIS"
    NETHER = "NETHER"
    CHAOS = "CHAOS"
    DISEN = "DISEN"
    SHARD = "SHARD"
    LIGHT = "LIGHT"
    DARK = "DARK"
    SOUND = "SOUND"
    NEXUS = "NEXUS"
    TIME = "TIME"
    INERTIA = "INERTIA"
    GRAVITY = "GRAVITY"
    PLASMA = "PLASMA"
    FORCE = "FORCE"
    WATER = "WATER"
    MANA = "MANA"
    ICE = "ICE"


class Aspect(NiceEnum):
    """How a random quantity is fixed when computing a closed-form estimate."""

    MINIMISE = "MINIMISE"
    AVERAGE = "AVERAGE"
    MAXIMISE = "MAXIMISE"
