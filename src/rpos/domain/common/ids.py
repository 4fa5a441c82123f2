from __future__ import annotations

from typing import NewType

ProductId = NewType("ProductId", str)
ModifierGroupId = NewType("ModifierGroupId", str)
ModifierId = NewType("ModifierId", str)
CartLineId = NewType("CartLineId", str)
OrderId = NewType("OrderId", str)
