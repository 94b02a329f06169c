"""
Nutrition Model - food and meal entries.
"""

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .daily_log import new_id
from .enums import EntryStatus, MacroType, NutritionUnit
from .conversion import macro_calories, macro_weight

MEAL_TYPES = ["breakfast", "lunch", "dinner", "snack", "other"]
DEFAULT_MEAL_TYPE = "lunch"
PENDING_DESCRIPTION = "Pending"
DEFAULT_HAND_PORTION_DESCRIPTION = "Eating out"


class NutritionEntry(BaseModel):
    """
    One food/meal log, recorded either by amount and unit or by hand portions.

    Calories are never cached: `estimated_calories` is derived on every read
    from manual_calories, unit/amount and the macro portions.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=new_id)
    timestamp: datetime
    meal_type: str = DEFAULT_MEAL_TYPE
    entry_description: str = ""
    photo_handles: List[str] = Field(default_factory=list)

    # Amount-and-unit mode
    amount: float = 0.0
    unit: NutritionUnit = NutritionUnit.HAND_PORTION

    # Hand-portion mode
    protein_portions: Optional[float] = Field(default=None, ge=0)
    carb_portions: Optional[float] = Field(default=None, ge=0)
    veg_portions: Optional[float] = Field(default=None, ge=0)
    fat_portions: Optional[float] = Field(default=None, ge=0)

    manual_calories: Optional[float] = None  # total kcal override
    note: Optional[str] = None
    status: EntryStatus = EntryStatus.COMPLETE

    @field_validator("status", mode="before")
    @classmethod
    def _missing_status_is_complete(cls, value):
        # Records saved before status existed must not show up as pending
        return EntryStatus.COMPLETE if value is None else value

    def macro_portions(self) -> Dict[MacroType, float]:
        """Portions per macro, only for the macros that were filled in."""
        portions = {
            MacroType.PROTEIN: self.protein_portions,
            MacroType.CARBS: self.carb_portions,
            MacroType.VEGETABLES: self.veg_portions,
            MacroType.FATS: self.fat_portions,
        }
        return {macro: value for macro, value in portions.items() if value is not None}

    @property
    def estimated_calories(self) -> float:
        if self.manual_calories is not None:
            return self.manual_calories
        if self.unit is NutritionUnit.CALORIE:
            return self.amount
        return sum(
            macro_calories(macro, portions)
            for macro, portions in self.macro_portions().items()
        )

    @property
    def estimated_weight_grams(self) -> float:
        return sum(
            macro_weight(macro, portions)
            for macro, portions in self.macro_portions().items()
        )

    @property
    def is_hand_portion_mode(self) -> bool:
        return bool(self.macro_portions())

    @property
    def is_pending(self) -> bool:
        return self.status is EntryStatus.PENDING
