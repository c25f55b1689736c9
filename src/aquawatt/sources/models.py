"""Data models for the usage data sources.

These mirror the rows the dashboard reads from its hosted backend and are
independent of how a particular source obtains them.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class WeeklyUsagePoint(BaseModel):
    """Usage for one day of the trailing week."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(description="Short weekday label, e.g. 'Mon'")
    water: float = Field(ge=0, description="Water used, litres")
    electricity: float = Field(ge=0, description="Electricity used, kWh")


class RoomUsage(BaseModel):
    """Usage totals for one room over the last 30 days."""

    model_config = ConfigDict(frozen=True)

    room: str
    total_water: float = Field(ge=0)
    total_electricity: float = Field(ge=0)


class BillingRecord(BaseModel):
    """A billing period for the current user."""

    model_config = ConfigDict(frozen=True)

    id: str
    period_start: date
    period_end: date
    water_usage: float = 0.0
    electricity_usage: float = 0.0
    water_cost: float
    electricity_cost: float
    total_amount: float
    status: str = "pending"
    due_date: date | None = None


class ConnectedDevice(BaseModel):
    """A metering device registered to the user."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    device_type: str = Field(description="'water' or 'electricity' meter, plug, etc.")
    room: str | None = None
    is_active: bool = True
