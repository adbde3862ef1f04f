"""Game-wide enums, reference ids, and fixed lookup tables.

Ids match the records in the hosted parts/properties tables. Names are
kept alongside every id because drafts saved before ids existed only
carry the name.
"""

from enum import IntEnum, StrEnum


class EntityKind(StrEnum):
    """Which progression table a level is evaluated against."""
    PLAYER = "PLAYER"
    CREATURE = "CREATURE"


class ArchetypeKind(StrEnum):
    POWER = "power"
    POWERED_MARTIAL = "powered-martial"
    MARTIAL = "martial"


class Ability(StrEnum):
    STRENGTH = "strength"
    VITALITY = "vitality"
    AGILITY = "agility"
    ACUITY = "acuity"
    INTELLIGENCE = "intelligence"
    CHARISMA = "charisma"


ABILITY_NAMES: tuple[str, ...] = tuple(a.value for a in Ability)

# Defense governed by each ability (defense = 10 + ability + defense skill).
ABILITY_DEFENSE: dict[str, str] = {
    Ability.STRENGTH: "might",
    Ability.VITALITY: "fortitude",
    Ability.AGILITY: "reflex",
    Ability.ACUITY: "discernment",
    Ability.INTELLIGENCE: "mental_fortitude",
    Ability.CHARISMA: "resolve",
}


class PartId(IntEnum):
    """Power and technique part ids."""
    # Technique damage / actions
    TRUE_DAMAGE = 1
    REACTION = 2
    LONG_ACTION = 3
    QUICK_OR_FREE_ACTION = 4
    SPLIT_DAMAGE_DICE = 5
    ADDITIONAL_DAMAGE = 6
    ADD_WEAPON_ATTACK = 7

    # Power actions
    POWER_LONG_ACTION = 81
    POWER_REACTION = 82
    POWER_QUICK_OR_FREE_ACTION = 83

    # Area of effect
    LINE_OF_EFFECT = 88
    CONE_OF_EFFECT = 89
    CYLINDER_OF_EFFECT = 231
    SPHERE_OF_EFFECT = 232
    TRAIL_OF_EFFECT = 233

    # Power range
    POWER_RANGE = 292

    # Power damage types
    MAGIC_DAMAGE = 294
    LIGHT_DAMAGE = 295
    PHYSICAL_DAMAGE = 296
    ELEMENTAL_DAMAGE = 297
    POISON_OR_NECROTIC_DAMAGE = 298
    SONIC_DAMAGE = 299
    SPIRITUAL_DAMAGE = 300
    PSYCHIC_DAMAGE = 301

    # Duration modifiers
    DURATION_ENDS_ON_ACTIVATION = 302
    DURATION_NO_HARM = 303
    DURATION_FOCUS = 304
    DURATION_SUSTAIN = 305
    DURATION_PERMANENT = 306

    # Duration base types
    DURATION_DAYS = 375
    DURATION_HOUR = 376
    DURATION_ROUND = 377
    DURATION_MINUTE = 378


PART_NAMES: dict[int, str] = {
    PartId.REACTION: "Reaction",
    PartId.LONG_ACTION: "Long Action",
    PartId.QUICK_OR_FREE_ACTION: "Quick or Free Action",
    PartId.SPLIT_DAMAGE_DICE: "Split Damage Dice",
    PartId.ADDITIONAL_DAMAGE: "Additional Damage",
    PartId.ADD_WEAPON_ATTACK: "Add Weapon Attack",
    PartId.POWER_LONG_ACTION: "Power Long Action",
    PartId.POWER_REACTION: "Power Reaction",
    PartId.POWER_QUICK_OR_FREE_ACTION: "Power Quick or Free Action",
    PartId.LINE_OF_EFFECT: "Line of Effect",
    PartId.CONE_OF_EFFECT: "Cone of Effect",
    PartId.CYLINDER_OF_EFFECT: "Cylinder of Effect",
    PartId.SPHERE_OF_EFFECT: "Sphere of Effect",
    PartId.TRAIL_OF_EFFECT: "Trail of Effect",
    PartId.POWER_RANGE: "Power Range",
    PartId.MAGIC_DAMAGE: "Magic Damage",
    PartId.LIGHT_DAMAGE: "Light Damage",
    PartId.PHYSICAL_DAMAGE: "Physical Damage",
    PartId.ELEMENTAL_DAMAGE: "Elemental Damage",
    PartId.POISON_OR_NECROTIC_DAMAGE: "Poison or Necrotic Damage",
    PartId.SONIC_DAMAGE: "Sonic Damage",
    PartId.SPIRITUAL_DAMAGE: "Spiritual Damage",
    PartId.PSYCHIC_DAMAGE: "Psychic Damage",
    PartId.DURATION_ENDS_ON_ACTIVATION: "Duration Ends On Activation",
    PartId.DURATION_NO_HARM: "No Harm or Adaptation for Duration",
    PartId.DURATION_FOCUS: "Focus for Duration",
    PartId.DURATION_SUSTAIN: "Sustain for Duration",
    PartId.DURATION_PERMANENT: "Duration (Permanent)",
    PartId.DURATION_DAYS: "Duration (Days)",
    PartId.DURATION_HOUR: "Duration (Hour)",
    PartId.DURATION_ROUND: "Duration (Round)",
    PartId.DURATION_MINUTE: "Duration (Minute)",
}


class PropertyId(IntEnum):
    """Item property ids. Ids 1-17 are system-derived ("general")."""
    DAMAGE_REDUCTION = 1
    ARMOR_STRENGTH_REQUIREMENT = 2
    ARMOR_AGILITY_REQUIREMENT = 3
    ARMOR_VITALITY_REQUIREMENT = 4
    AGILITY_REDUCTION = 5
    WEAPON_STRENGTH_REQUIREMENT = 6
    WEAPON_AGILITY_REQUIREMENT = 7
    WEAPON_VITALITY_REQUIREMENT = 8
    WEAPON_ACUITY_REQUIREMENT = 9
    WEAPON_INTELLIGENCE_REQUIREMENT = 10
    WEAPON_CHARISMA_REQUIREMENT = 11
    SPLIT_DAMAGE_DICE = 12
    RANGE = 13
    TWO_HANDED = 14
    SHIELD_BASE = 15
    ARMOR_BASE = 16
    WEAPON_DAMAGE = 17
    CRITICAL_RANGE_PLUS_1 = 22
    SHIELD_AMOUNT = 39
    SHIELD_DAMAGE = 40


PROPERTY_NAMES: dict[int, str] = {
    PropertyId.DAMAGE_REDUCTION: "Damage Reduction",
    PropertyId.ARMOR_STRENGTH_REQUIREMENT: "Armor Strength Requirement",
    PropertyId.ARMOR_AGILITY_REQUIREMENT: "Armor Agility Requirement",
    PropertyId.ARMOR_VITALITY_REQUIREMENT: "Armor Vitality Requirement",
    PropertyId.AGILITY_REDUCTION: "Agility Reduction",
    PropertyId.WEAPON_STRENGTH_REQUIREMENT: "Weapon Strength Requirement",
    PropertyId.WEAPON_AGILITY_REQUIREMENT: "Weapon Agility Requirement",
    PropertyId.WEAPON_VITALITY_REQUIREMENT: "Weapon Vitality Requirement",
    PropertyId.WEAPON_ACUITY_REQUIREMENT: "Weapon Acuity Requirement",
    PropertyId.WEAPON_INTELLIGENCE_REQUIREMENT: "Weapon Intelligence Requirement",
    PropertyId.WEAPON_CHARISMA_REQUIREMENT: "Weapon Charisma Requirement",
    PropertyId.SPLIT_DAMAGE_DICE: "Split Damage Dice",
    PropertyId.RANGE: "Range",
    PropertyId.TWO_HANDED: "Two-Handed",
    PropertyId.SHIELD_BASE: "Shield Base",
    PropertyId.ARMOR_BASE: "Armor Base",
    PropertyId.WEAPON_DAMAGE: "Weapon Damage",
    PropertyId.CRITICAL_RANGE_PLUS_1: "Critical Range +1",
    PropertyId.SHIELD_AMOUNT: "Shield Amount",
    PropertyId.SHIELD_DAMAGE: "Shield Damage",
}

# Properties the item creator adds on its own; hidden from manual selection.
GENERAL_PROPERTY_IDS: frozenset[int] = frozenset(range(1, 18))
GENERAL_PROPERTY_NAMES: frozenset[str] = frozenset(
    PROPERTY_NAMES[pid] for pid in GENERAL_PROPERTY_IDS
)

# Requirement property per (armament type, ability). Armor only carries
# the three physical abilities.
REQUIREMENT_PROPERTY: dict[tuple[str, str], int] = {
    ("Weapon", Ability.STRENGTH): PropertyId.WEAPON_STRENGTH_REQUIREMENT,
    ("Weapon", Ability.AGILITY): PropertyId.WEAPON_AGILITY_REQUIREMENT,
    ("Weapon", Ability.VITALITY): PropertyId.WEAPON_VITALITY_REQUIREMENT,
    ("Weapon", Ability.ACUITY): PropertyId.WEAPON_ACUITY_REQUIREMENT,
    ("Weapon", Ability.INTELLIGENCE): PropertyId.WEAPON_INTELLIGENCE_REQUIREMENT,
    ("Weapon", Ability.CHARISMA): PropertyId.WEAPON_CHARISMA_REQUIREMENT,
    ("Armor", Ability.STRENGTH): PropertyId.ARMOR_STRENGTH_REQUIREMENT,
    ("Armor", Ability.AGILITY): PropertyId.ARMOR_AGILITY_REQUIREMENT,
    ("Armor", Ability.VITALITY): PropertyId.ARMOR_VITALITY_REQUIREMENT,
}


# Die sizes that can be expressed on the dice ladder.
STANDARD_DIE_SIZES: frozenset[int] = frozenset({4, 6, 8, 10, 12})


# Power damage type -> damage part id. Aliases collapse onto one part.
POWER_DAMAGE_PARTS: dict[str, int] = {
    "magic": PartId.MAGIC_DAMAGE,
    "light": PartId.LIGHT_DAMAGE,
    "radiant": PartId.LIGHT_DAMAGE,
    "fire": PartId.ELEMENTAL_DAMAGE,
    "cold": PartId.ELEMENTAL_DAMAGE,
    "ice": PartId.ELEMENTAL_DAMAGE,
    "lightning": PartId.ELEMENTAL_DAMAGE,
    "acid": PartId.ELEMENTAL_DAMAGE,
    "poison": PartId.POISON_OR_NECROTIC_DAMAGE,
    "necrotic": PartId.POISON_OR_NECROTIC_DAMAGE,
    "sonic": PartId.SONIC_DAMAGE,
    "spiritual": PartId.SPIRITUAL_DAMAGE,
    "psychic": PartId.PSYCHIC_DAMAGE,
    "physical": PartId.PHYSICAL_DAMAGE,
    "bludgeoning": PartId.PHYSICAL_DAMAGE,
    "piercing": PartId.PHYSICAL_DAMAGE,
    "slashing": PartId.PHYSICAL_DAMAGE,
}

# Area shape -> (part id, display label). Order is the display priority.
AREA_PARTS: dict[str, tuple[int, str]] = {
    "sphere": (PartId.SPHERE_OF_EFFECT, "Sphere"),
    "cylinder": (PartId.CYLINDER_OF_EFFECT, "Cylinder"),
    "cone": (PartId.CONE_OF_EFFECT, "Cone"),
    "line": (PartId.LINE_OF_EFFECT, "Line"),
    "trail": (PartId.TRAIL_OF_EFFECT, "Trail"),
}

DURATION_PARTS: dict[str, int] = {
    "rounds": PartId.DURATION_ROUND,
    "minutes": PartId.DURATION_MINUTE,
    "hours": PartId.DURATION_HOUR,
    "days": PartId.DURATION_DAYS,
    "permanent": PartId.DURATION_PERMANENT,
}

# Discrete duration values per type; the option level is the index.
DURATION_LADDERS: dict[str, tuple[int, ...]] = {
    "rounds": (1, 2, 3, 4, 5, 6),
    "minutes": (1, 10, 30),
    "hours": (1, 6, 12),
    "days": (1, 7, 14),
    "permanent": (1,),
}

DURATION_UNITS: dict[str, str] = {
    "rounds": "Round",
    "minutes": "Minute",
    "hours": "Hour",
    "days": "Day",
}


# Action selector value -> (display base, option level on the action part).
ACTION_SELECTIONS: dict[str, tuple[str, int | None]] = {
    "basic": ("Basic", None),
    "quick": ("Quick", 0),
    "free": ("Free", 1),
    "long3": ("Long (3)", 0),
    "long4": ("Long (4)", 1),
}

ROMAN_NUMERALS: tuple[str, ...] = (
    "I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX", "X",
)
