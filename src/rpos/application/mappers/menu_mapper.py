from __future__ import annotations

from rpos.application.dto.responses import (
    MenuResponse,
    ModifierGroupResponse,
    ModifierOptionResponse,
    NutrientsResponse,
    ProductResponse,
)
from rpos.domain.catalog.entities import Catalog


def to_menu_response(catalog: Catalog) -> MenuResponse:
    return MenuResponse(
        menuVersion=catalog.version,
        categories=list(catalog.categories),
        products=[
            ProductResponse(
                productId=str(product.product_id),
                name=product.name,
                category=product.category,
                price=product.price,
                oldPrice=product.old_price,
                description=product.description,
                weight=product.weight,
                calories=product.calories,
                nutrients=(
                    NutrientsResponse(
                        proteins=product.nutrients.proteins,
                        fats=product.nutrients.fats,
                        carbs=product.nutrients.carbs,
                    )
                    if product.nutrients
                    else None
                ),
                badges=list(product.badges),
                modifierGroupIds=[str(gid) for gid in product.modifier_group_ids],
            )
            for product in catalog.products
        ],
        modifierGroups=[
            ModifierGroupResponse(
                groupId=str(group.group_id),
                title=group.title,
                selection=group.selection.value,
                required=group.required,
                action=group.action.value,
                options=[
                    ModifierOptionResponse(
                        modifierId=str(option.modifier_id),
                        name=option.name,
                        price=option.price,
                        calories=option.calories,
                    )
                    for option in group.options
                ],
            )
            for group in catalog.modifier_groups
        ],
    )
