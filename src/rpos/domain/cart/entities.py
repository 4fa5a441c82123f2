from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import Iterable

from rpos.domain.catalog.entities import ModifierAction, Product
from rpos.domain.common.ids import CartLineId, ModifierId


@dataclass(frozen=True, eq=False)
class Modifier:
    """A selected option on a cart line. Two modifiers are equal iff their ids are."""

    modifier_id: ModifierId
    name: str
    price: int
    action: ModifierAction = ModifierAction.ADD

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError("modifier price must be >= 0")
        if self.action == ModifierAction.REMOVE and self.price != 0:
            raise ValueError("remove modifiers must not carry a price")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Modifier):
            return NotImplemented
        return self.modifier_id == other.modifier_id

    def __hash__(self) -> int:
        return hash(self.modifier_id)


def canonical_modifiers(modifiers: Iterable[Modifier]) -> tuple[Modifier, ...]:
    unique: dict[str, Modifier] = {}
    for modifier in modifiers:
        unique.setdefault(str(modifier.modifier_id), modifier)
    return tuple(unique[key] for key in sorted(unique))


def configuration_signature(
    product_id: str,
    modifier_ids: Iterable[str],
    comment: str | None,
) -> str:
    """Canonical key for a purchasable configuration.

    Format: compact JSON ``["<product_id>",["<mod_a>","<mod_b>"],"<comment>"]`` with
    modifier ids sorted and de-duplicated. The comment is kept verbatim.
    """
    canonical = [str(product_id), sorted(set(str(mid) for mid in modifier_ids)), comment or ""]
    return json.dumps(canonical, separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True)
class CartLine:
    line_id: CartLineId = field(compare=False)
    product: Product
    quantity: int
    modifiers: tuple[Modifier, ...] = ()
    comment: str = ""

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")
        object.__setattr__(self, "modifiers", canonical_modifiers(self.modifiers))

    @property
    def signature(self) -> str:
        return configuration_signature(
            self.product.product_id,
            (modifier.modifier_id for modifier in self.modifiers),
            self.comment,
        )

    @property
    def unit_price(self) -> int:
        return self.product.price + sum(modifier.price for modifier in self.modifiers)

    @property
    def line_total(self) -> int:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Cart:
    lines: tuple[CartLine, ...] = ()
    version: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def total(self) -> int:
        return sum(line.line_total for line in self.lines)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def find(self, signature: str) -> CartLine | None:
        for line in self.lines:
            if line.signature == signature:
                return line
        return None

    def add(
        self,
        line_id: CartLineId,
        product: Product,
        modifiers: Iterable[Modifier] = (),
        comment: str | None = None,
        quantity: int = 1,
    ) -> Cart:
        quantity = max(1, int(quantity))
        incoming = CartLine(
            line_id=line_id,
            product=product,
            quantity=quantity,
            modifiers=tuple(modifiers),
            comment=comment or "",
        )
        existing = self.find(incoming.signature)
        if existing is None:
            return replace(self, lines=self.lines + (incoming,), version=self.version + 1)

        merged = replace(existing, quantity=existing.quantity + quantity)
        lines = tuple(merged if line is existing else line for line in self.lines)
        return replace(self, lines=lines, version=self.version + 1)

    def remove(self, line_id: str) -> Cart:
        lines = tuple(line for line in self.lines if line.line_id != line_id)
        if len(lines) == len(self.lines):
            return self
        return replace(self, lines=lines, version=self.version + 1)

    def cleared(self) -> Cart:
        return replace(self, lines=(), version=self.version + 1)
