from __future__ import annotations

import json
import threading
import time

import pytest

from fakes import FailingPublisher, FixedClock, RecordingPublisher
from rpos.application.dto.requests import AddToCartRequest
from rpos.application.ports.repositories import OptimisticConcurrencyError
from rpos.application.use_cases.cart import (
    AddToCart,
    CartConflictError,
    ClearCart,
    GetCart,
    InvalidModifierSelectionError,
    RemoveFromCart,
    UnknownModifierError,
    UnknownProductError,
    resolve_modifiers,
)
from rpos.application.use_cases.context import TraceContext
from rpos.domain.cart.entities import Cart
from rpos.domain.catalog.entities import (
    Catalog,
    ModifierAction,
    ModifierGroup,
    ModifierOption,
    Product,
    SelectionRule,
)
from rpos.domain.common.ids import ModifierGroupId, ModifierId, ProductId
from rpos.infrastructure.memory.cart_repo import InMemoryCartRepository
from rpos.infrastructure.memory.store import InMemoryStore

TRACE = TraceContext(trace_id="trace-1", request_id="req-1")


class StaleCartRepository:
    def __init__(self) -> None:
        self.cart = Cart()

    def get(self) -> Cart:
        return self.cart

    def save(self, cart: Cart, expected_version: int) -> Cart:
        raise OptimisticConcurrencyError("cart version mismatch")


class SlowReadCartRepository(InMemoryCartRepository):
    """Keeps each read open long enough for a second writer to read the same version."""

    def get(self) -> Cart:
        cart = super().get()
        time.sleep(0.05)
        return cart


def _add_use_case(catalog, repository, publisher, store=None) -> AddToCart:
    return AddToCart(
        catalog=catalog,
        cart_repository=repository,
        publisher=publisher,
        clock=FixedClock(),
        unit_of_work=store or InMemoryStore(),
    )


def test_add_defaults_required_single_choice_group(catalog: Catalog) -> None:
    burger = catalog.get_product("p1")

    modifiers = resolve_modifiers(catalog, burger, [])

    assert [modifier.modifier_id for modifier in modifiers] == ["sz_s"]


def test_single_choice_group_rejects_two_options(catalog: Catalog) -> None:
    with pytest.raises(InvalidModifierSelectionError):
        resolve_modifiers(catalog, catalog.get_product("p1"), ["sz_s", "sz_l"])


def test_required_multi_group_without_selection_is_rejected() -> None:
    group = ModifierGroup(
        group_id=ModifierGroupId("g_sauce"),
        title="Sauce",
        selection=SelectionRule.MULTI,
        required=True,
        action=ModifierAction.ADD,
        options=(ModifierOption(ModifierId("sc_bbq"), "BBQ", price=30),),
    )
    product = Product(
        product_id=ProductId("p_nuggets"),
        name="Nuggets",
        category="Snacks",
        price=240,
        modifier_group_ids=(group.group_id,),
    )
    catalog = Catalog(version=1, products=(product,), modifier_groups=(group,))

    with pytest.raises(InvalidModifierSelectionError):
        resolve_modifiers(catalog, product, [])


def test_modifier_outside_product_groups_is_unknown(catalog: Catalog) -> None:
    with pytest.raises(UnknownModifierError):
        resolve_modifiers(catalog, catalog.get_product("p8"), ["ext_bacon"])


def test_add_to_cart_merges_and_publishes(catalog: Catalog, publisher: RecordingPublisher) -> None:
    repository = InMemoryCartRepository(InMemoryStore())
    use_case = _add_use_case(catalog, repository, publisher)
    request = AddToCartRequest(productId="p1", modifierIds=["sz_l", "ext_bacon"])

    use_case.execute(request, TRACE)
    response = use_case.execute(
        AddToCartRequest(productId="p1", modifierIds=["ext_bacon", "sz_l"]),
        TRACE,
    )

    assert len(response.lines) == 1
    assert response.lines[0].quantity == 2
    assert response.lines[0].unitPrice == 490 + 150 + 69
    assert response.total == 2 * (490 + 150 + 69)
    assert response.version == 2

    channel, message = publisher.messages[-1]
    envelope = json.loads(message)
    assert channel == "events:cart"
    assert envelope["event_type"] == "cart.updated"
    assert envelope["request_id"] == "req-1"
    assert envelope["payload"]["total"] == response.total


def test_add_unknown_product_leaves_cart_untouched(
    catalog: Catalog, publisher: RecordingPublisher
) -> None:
    repository = InMemoryCartRepository(InMemoryStore())

    with pytest.raises(UnknownProductError):
        _add_use_case(catalog, repository, publisher).execute(
            AddToCartRequest(productId="p404"),
            TRACE,
        )

    assert repository.get().is_empty
    assert publisher.messages == []


def test_concurrent_cart_change_raises_conflict(catalog: Catalog) -> None:
    use_case = _add_use_case(catalog, StaleCartRepository(), RecordingPublisher())

    with pytest.raises(CartConflictError):
        use_case.execute(AddToCartRequest(productId="p8"), TRACE)


def test_publish_failure_does_not_undo_cart_change(catalog: Catalog) -> None:
    repository = InMemoryCartRepository(InMemoryStore())

    response = _add_use_case(catalog, repository, FailingPublisher()).execute(
        AddToCartRequest(productId="p8"),
        TRACE,
    )

    assert response.itemCount == 1
    assert repository.get().item_count == 1


def test_remove_and_clear(catalog: Catalog, publisher: RecordingPublisher) -> None:
    store = InMemoryStore()
    repository = InMemoryCartRepository(store)
    added = _add_use_case(catalog, repository, publisher, store).execute(
        AddToCartRequest(productId="p8", quantity=3),
        TRACE,
    )
    line_id = added.lines[0].lineId
    remove = RemoveFromCart(
        cart_repository=repository,
        publisher=publisher,
        clock=FixedClock(),
        unit_of_work=store,
    )

    unchanged = remove.execute("crt_missing", TRACE)
    assert unchanged.version == added.version

    removed = remove.execute(line_id, TRACE)
    assert removed.lines == []

    _add_use_case(catalog, repository, publisher, store).execute(
        AddToCartRequest(productId="p5"),
        TRACE,
    )
    clear = ClearCart(
        cart_repository=repository,
        publisher=publisher,
        clock=FixedClock(),
        unit_of_work=store,
    )
    cleared = clear.execute(TRACE)
    assert cleared.total == 0
    assert GetCart(cart_repository=repository).execute().itemCount == 0


def test_concurrent_adds_of_same_product_merge_without_conflict(catalog: Catalog) -> None:
    store = InMemoryStore()
    repository = SlowReadCartRepository(store)
    use_case = _add_use_case(catalog, repository, RecordingPublisher(), store)
    errors: list[str] = []

    def add() -> None:
        try:
            use_case.execute(AddToCartRequest(productId="p8"), TRACE)
        except Exception as exc:
            errors.append(type(exc).__name__)

    threads = [threading.Thread(target=add) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)

    cart = repository.get()
    assert errors == []
    assert len(cart.lines) == 1
    assert cart.lines[0].quantity == 2
    assert cart.version == 2
