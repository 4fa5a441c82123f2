from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from rpos.domain.common.ids import ModifierGroupId, ModifierId, ProductId


class SelectionRule(str, Enum):
    SINGLE = "SINGLE"
    MULTI = "MULTI"


class ModifierAction(str, Enum):
    ADD = "add"
    REMOVE = "remove"


@dataclass(frozen=True)
class Nutrients:
    proteins: int
    fats: int
    carbs: int


@dataclass(frozen=True)
class Product:
    product_id: ProductId
    name: str
    category: str
    price: int
    old_price: int | None = None
    description: str = ""
    weight: str | None = None
    calories: int | None = None
    nutrients: Nutrients | None = None
    badges: tuple[str, ...] = ()
    modifier_group_ids: tuple[ModifierGroupId, ...] = ()

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if self.price < 0:
            raise ValueError("price must be >= 0")
        if self.old_price is not None and self.old_price <= self.price:
            raise ValueError("old_price must be greater than price")


@dataclass(frozen=True)
class ModifierOption:
    modifier_id: ModifierId
    name: str
    price: int = 0
    calories: int = 0

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError("modifier price must be >= 0")


@dataclass(frozen=True)
class ModifierGroup:
    group_id: ModifierGroupId
    title: str
    selection: SelectionRule
    required: bool
    action: ModifierAction
    options: tuple[ModifierOption, ...] = ()

    def __post_init__(self) -> None:
        if self.action == ModifierAction.REMOVE:
            priced = [option.modifier_id for option in self.options if option.price != 0]
            if priced:
                raise ValueError(
                    f"remove modifiers must not carry a price: group={self.group_id}, "
                    f"options={','.join(priced)}"
                )
        if self.required and self.selection == SelectionRule.SINGLE and not self.options:
            raise ValueError("required single-choice group must have at least one option")

    def option(self, modifier_id: str) -> ModifierOption | None:
        for option in self.options:
            if option.modifier_id == modifier_id:
                return option
        return None


@dataclass(frozen=True)
class Catalog:
    """Read-only menu: products plus the modifier groups they may carry."""

    version: int
    categories: tuple[str, ...] = ()
    products: tuple[Product, ...] = ()
    modifier_groups: tuple[ModifierGroup, ...] = ()
    _products_by_id: dict[str, Product] = field(init=False, repr=False, compare=False)
    _groups_by_id: dict[str, ModifierGroup] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.version < 1:
            raise ValueError("version must be >= 1")
        products_by_id = {str(product.product_id): product for product in self.products}
        if len(products_by_id) != len(self.products):
            raise ValueError("product ids must be unique")
        groups_by_id = {str(group.group_id): group for group in self.modifier_groups}
        if len(groups_by_id) != len(self.modifier_groups):
            raise ValueError("modifier group ids must be unique")
        for product in self.products:
            missing = [gid for gid in product.modifier_group_ids if gid not in groups_by_id]
            if missing:
                raise ValueError(
                    f"product {product.product_id} references unknown modifier groups: "
                    f"{','.join(missing)}"
                )
        object.__setattr__(self, "_products_by_id", products_by_id)
        object.__setattr__(self, "_groups_by_id", groups_by_id)

    def get_product(self, product_id: str) -> Product | None:
        return self._products_by_id.get(product_id)

    def groups_for(self, product: Product) -> list[ModifierGroup]:
        return [self._groups_by_id[str(gid)] for gid in product.modifier_group_ids]
