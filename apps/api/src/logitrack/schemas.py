from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Coordinates(_CamelModel):
    latitude: float = Field(allow_inf_nan=False)
    longitude: float = Field(allow_inf_nan=False)


class ContactPoint(Coordinates):
    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    email: str | None = None


class DriverInfo(_CamelModel):
    id: str | None = None
    name: str | None = None
    phone: str | None = None


class AddOns(_CamelModel):
    fragile_items: bool = False
    heavy_item: bool = False


class JobCreateRequest(_CamelModel):
    driver_info: DriverInfo
    pickup_info: ContactPoint
    dropoff_info: ContactPoint
    current_coords: Coordinates | None = None
    status: str | None = None
    priority: Literal["low", "medium", "high"] | None = None
    is_urgent: bool = False
    note: str | None = None
    add_ons: AddOns = Field(default_factory=AddOns)


class StatusUpdateRequest(_CamelModel):
    status: str | None = None


class CoordinateUpdateRequest(_CamelModel):
    current_coords: Coordinates
