from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.models import HabitCategory

class HabitBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=1000)
    category: HabitCategory = HabitCategory.WELLNESS
    color: str = "bg-blue-500"
    icon: Optional[str] = Field(None, max_length=50)
    target_days: int = Field(7, ge=1, le=7, alias="targetDays")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Название привычки не может быть пустым')
        return v.strip()

class HabitCreate(HabitBase):
    pass

class HabitUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    category: Optional[HabitCategory] = None
    color: Optional[str] = None
    icon: Optional[str] = Field(None, max_length=50)
    target_days: Optional[int] = Field(None, ge=1, le=7, alias="targetDays")

class ToggleResult(BaseModel):
    habitId: Union[int, str]
    date: str
    completed: bool

class Preferences(BaseModel):
    notifications: Optional[bool] = None
    darkMode: Optional[bool] = None

class HealthCheck(BaseModel):
    status: str
    service: str
    version: str
    timestamp: float
    storage_available: bool
