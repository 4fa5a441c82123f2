from __future__ import annotations

from rpos.domain.catalog.entities import (
    Catalog,
    ModifierAction,
    ModifierGroup,
    ModifierOption,
    Nutrients,
    Product,
    SelectionRule,
)
from rpos.domain.common.ids import ModifierGroupId, ModifierId, ProductId

CATALOG_VERSION = 1

SIZE_GROUP = ModifierGroupId("g_size")
REMOVE_GROUP = ModifierGroupId("g_remove")
EXTRAS_GROUP = ModifierGroupId("g_extras")

_BURGER_GROUPS = (SIZE_GROUP, REMOVE_GROUP, EXTRAS_GROUP)

MODIFIER_GROUPS: tuple[ModifierGroup, ...] = (
    ModifierGroup(
        group_id=SIZE_GROUP,
        title="Portion size",
        selection=SelectionRule.SINGLE,
        required=True,
        action=ModifierAction.ADD,
        options=(
            ModifierOption(ModifierId("sz_s"), "Standard", price=0),
            ModifierOption(ModifierId("sz_l"), "Large (+30%)", price=150, calories=120),
        ),
    ),
    ModifierGroup(
        group_id=REMOVE_GROUP,
        title="Remove ingredients",
        selection=SelectionRule.MULTI,
        required=False,
        action=ModifierAction.REMOVE,
        options=(
            ModifierOption(ModifierId("rem_onion"), "No onion"),
            ModifierOption(ModifierId("rem_sauce"), "No sauce"),
        ),
    ),
    ModifierGroup(
        group_id=EXTRAS_GROUP,
        title="Add flavour",
        selection=SelectionRule.MULTI,
        required=False,
        action=ModifierAction.ADD,
        options=(
            ModifierOption(ModifierId("ext_jalapeno"), "Jalapeno", price=49, calories=10),
            ModifierOption(ModifierId("ext_cheese"), "Cheese sauce", price=39, calories=90),
            ModifierOption(ModifierId("ext_bacon"), "Bacon", price=69, calories=150),
        ),
    ),
)

PRODUCTS: tuple[Product, ...] = (
    Product(
        product_id=ProductId("p1"),
        name='Grand Beef "Maestro"',
        category="Burgers",
        price=490,
        old_price=550,
        weight="340 g",
        calories=850,
        nutrients=Nutrients(proteins=45, fats=30, carbs=55),
        description="Two Black Angus patties, triple cheddar, pickles, onion confit, smoky sauce.",
        badges=("HIT", "NEW"),
        modifier_group_ids=_BURGER_GROUPS,
    ),
    Product(
        product_id=ProductId("p2"),
        name="Cheeseburger Junior",
        category="Burgers",
        price=190,
        weight="160 g",
        calories=320,
        nutrients=Nutrients(proteins=18, fats=14, carbs=35),
        description="Beef patty, cheese, mustard and ketchup on a soft bun.",
        modifier_group_ids=_BURGER_GROUPS,
    ),
    Product(
        product_id=ProductId("p3"),
        name="Spicy Chicken Tower",
        category="Burgers",
        price=380,
        weight="290 g",
        calories=610,
        nutrients=Nutrients(proteins=28, fats=25, carbs=48),
        description="Crispy chicken fillet, jalapeno, iceberg lettuce and sriracha.",
        badges=("HOT",),
        modifier_group_ids=_BURGER_GROUPS,
    ),
    Product(
        product_id=ProductId("p4"),
        name="Caesar Roll XL",
        category="Wraps",
        price=290,
        weight="250 g",
        calories=420,
        nutrients=Nutrients(proteins=22, fats=18, carbs=40),
        description="Grilled chicken, parmesan, tomatoes and caesar dressing in a wheat wrap.",
        modifier_group_ids=(REMOVE_GROUP,),
    ),
    Product(
        product_id=ProductId("p5"),
        name="French Fries",
        category="Snacks",
        price=150,
        weight="120 g",
        calories=380,
        nutrients=Nutrients(proteins=4, fats=19, carbs=45),
        description="Golden potato sticks fried until crisp.",
        badges=("VEGAN",),
        modifier_group_ids=(SIZE_GROUP,),
    ),
    Product(
        product_id=ProductId("p6"),
        name="Nuggets (9 pcs)",
        category="Snacks",
        price=240,
        old_price=300,
        weight="180 g",
        calories=410,
        nutrients=Nutrients(proteins=26, fats=22, carbs=20),
        description="Tender chicken fillet in tempura batter.",
    ),
    Product(
        product_id=ProductId("p7"),
        name="Cheese Sticks",
        category="Snacks",
        price=210,
        weight="150 g",
        calories=390,
        nutrients=Nutrients(proteins=15, fats=25, carbs=28),
        badges=("NEW",),
    ),
    Product(
        product_id=ProductId("p8"),
        name="Cola Zero",
        category="Drinks",
        price=120,
        weight="0.5 l",
        calories=1,
        nutrients=Nutrients(proteins=0, fats=0, carbs=0),
    ),
    Product(
        product_id=ProductId("p9"),
        name='Milkshake "Berry Boom"',
        category="Drinks",
        price=210,
        weight="0.4 l",
        calories=350,
        nutrients=Nutrients(proteins=8, fats=12, carbs=55),
        badges=("KIDS",),
    ),
    Product(
        product_id=ProductId("p10"),
        name="Cappuccino Grande",
        category="Drinks",
        price=180,
        weight="0.4 l",
        calories=120,
        nutrients=Nutrients(proteins=6, fats=5, carbs=10),
    ),
    Product(
        product_id=ProductId("p11"),
        name='Combo "Hearty Lunch"',
        category="Combo",
        price=590,
        old_price=750,
        weight="850 g",
        calories=1200,
        nutrients=Nutrients(proteins=50, fats=60, carbs=120),
        badges=("PROMO",),
        modifier_group_ids=(SIZE_GROUP,),
    ),
)


def build_catalog() -> Catalog:
    categories = tuple(dict.fromkeys(product.category for product in PRODUCTS))
    return Catalog(
        version=CATALOG_VERSION,
        categories=categories,
        products=PRODUCTS,
        modifier_groups=MODIFIER_GROUPS,
    )
