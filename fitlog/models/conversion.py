"""
Unit & Macro Conversion - stateless helpers used at data-entry boundaries.

Weights are converted to kilograms once, when a form is committed. Nothing is
rounded here; rounding belongs to display formatting.
"""

from typing import Dict

from .enums import MacroType, WeightUnit

LB_TO_KG = 0.453592
KG_TO_LB = 2.20462

# Grams of the macro inside one portion and kcal per gram, used for calories.
MACRO_GRAMS_IN_CALORIE_FORMULA: Dict[MacroType, float] = {
    MacroType.PROTEIN: 25,
    MacroType.CARBS: 30,
    MacroType.VEGETABLES: 50,
    MacroType.FATS: 10,
}
MACRO_KCAL_PER_GRAM: Dict[MacroType, float] = {
    MacroType.PROTEIN: 4,
    MacroType.CARBS: 4,
    MacroType.VEGETABLES: 1,
    MacroType.FATS: 9,
}

# Calories per 1.0 portion: protein 100, carbs 120, vegetables 50, fats 90.
MACRO_CALORIES_PER_PORTION: Dict[MacroType, float] = {
    macro: MACRO_GRAMS_IN_CALORIE_FORMULA[macro] * MACRO_KCAL_PER_GRAM[macro]
    for macro in MacroType
}

# Food weight per portion for display. Independent of the calorie formula
# grams above; protein and carbs intentionally differ.
MACRO_GRAMS_PER_PORTION: Dict[MacroType, float] = {
    MacroType.PROTEIN: 100,
    MacroType.CARBS: 80,
    MacroType.VEGETABLES: 100,
    MacroType.FATS: 10,
}


def to_kg(value: float, from_unit: WeightUnit) -> float:
    """Convert a weight entered in from_unit to kilograms."""
    if WeightUnit(from_unit) is WeightUnit.LB:
        return value * LB_TO_KG
    return value


def from_kg(kg: float, to_unit: WeightUnit) -> float:
    """Convert a stored kilogram weight to to_unit."""
    if WeightUnit(to_unit) is WeightUnit.LB:
        return kg * KG_TO_LB
    return kg


def macro_calories(macro: MacroType, portions: float) -> float:
    """Estimated kcal for a number of hand portions of one macro."""
    return portions * MACRO_CALORIES_PER_PORTION[MacroType(macro)]


def macro_weight(macro: MacroType, portions: float) -> float:
    """Estimated food weight in grams for a number of hand portions."""
    return portions * MACRO_GRAMS_PER_PORTION[MacroType(macro)]


def calories_from_servings(calories_per_unit: float, amount: float) -> float:
    """Total kcal for `amount` units at `calories_per_unit` each."""
    return calories_per_unit * amount
