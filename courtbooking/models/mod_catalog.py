from pydantic import BaseModel, Field
from typing import List, Optional
from decimal import Decimal
from enum import Enum

class CourtType(str, Enum):
    INDOOR = "indoor"
    OUTDOOR = "outdoor"

class RuleType(str, Enum):
    MULTIPLIER = "multiplier"
    FLAT = "flat"
    CONDITIONAL = "conditional"

class Court(BaseModel):
    id: str
    name: str
    type: CourtType
    base_price: Decimal = Field(ge=0)
    is_active: bool = True

    class Config:
        from_attributes = True

class CoachWindow(BaseModel):
    day: int = Field(ge=0, le=6)   # 0-6 (Sun-Sat)
    start_time: str                # "10:00"
    end_time: str                  # "18:00"

class Coach(BaseModel):
    id: str
    name: str
    price_per_hour: Decimal = Field(ge=0)
    availability: List[CoachWindow] = []
    is_active: bool = True

    class Config:
        from_attributes = True

class Equipment(BaseModel):
    id: str
    name: str
    total_stock: int = Field(ge=0)    # total inventory, not what is currently free
    price_per_unit: Decimal = Field(ge=0)
    is_active: bool = True

    class Config:
        from_attributes = True

class PricingCondition(BaseModel):
    # A missing field means the rule does not filter on that axis
    days: Optional[List[int]] = None
    start_hour: Optional[int] = None
    end_hour: Optional[int] = None
    court_type: Optional[CourtType] = None

class PricingRule(BaseModel):
    id: str
    name: str
    type: RuleType
    condition: PricingCondition = Field(default_factory=PricingCondition)
    value: Decimal     # multiplier factor or flat amount, depending on type
    is_active: bool = True

    class Config:
        from_attributes = True
