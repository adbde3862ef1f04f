"""Cost derivation for items, powers and techniques."""

from realms_rules.calculators.costs import Aggregate, CostTotals, PartContribution, aggregate
from realms_rules.calculators.item_calc import (
    ItemCosts,
    ItemForm,
    build_item_properties,
    calculate_item_costs,
    currency_cost_and_rarity,
    derive_item_display,
)
from realms_rules.calculators.lookup import PartTable, resolve_ref
from realms_rules.calculators.mechanics import MechanicContext, build_mechanic_entries
from realms_rules.calculators.power_calc import PowerCosts, calculate_power_costs, derive_power_display
from realms_rules.calculators.technique_calc import (
    TechniqueCosts,
    calculate_technique_costs,
    derive_technique_display,
)

__all__ = [
    "Aggregate",
    "CostTotals",
    "ItemCosts",
    "ItemForm",
    "MechanicContext",
    "PartContribution",
    "PartTable",
    "PowerCosts",
    "TechniqueCosts",
    "aggregate",
    "build_item_properties",
    "build_mechanic_entries",
    "calculate_item_costs",
    "calculate_power_costs",
    "calculate_technique_costs",
    "currency_cost_and_rarity",
    "derive_item_display",
    "derive_power_display",
    "derive_technique_display",
    "resolve_ref",
]
