from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class AddToCartRequest(CamelBaseModel):
    product_id: str
    modifier_ids: list[str] = Field(default_factory=list)
    comment: str | None = None
    quantity: int = 1


class PlaceOrderRequest(CamelBaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    customer_name: str = Field(min_length=1)
    table_number: str | None = None
    priority: bool = False
    allergies: list[str] = Field(default_factory=list)
    payment_method: Literal["CARD", "CASH"] = "CARD"
