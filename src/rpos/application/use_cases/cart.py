from __future__ import annotations

from typing import Callable
from uuid import uuid4

from rpos.application.dto.requests import AddToCartRequest
from rpos.application.dto.responses import CartResponse
from rpos.application.mappers.event_envelope import CART_CHANNEL, serialize_cart_event
from rpos.application.mappers.order_mapper import to_cart_response
from rpos.application.metrics.order_lifecycle import record_cart
from rpos.application.ports.clock import Clock
from rpos.application.ports.publisher import EventPublisher
from rpos.application.ports.repositories import CartRepository, OptimisticConcurrencyError
from rpos.application.ports.transactions import UnitOfWork
from rpos.application.use_cases.context import TraceContext
from rpos.application.use_cases.publishing import publish_quietly
from rpos.domain.cart.entities import Cart, Modifier
from rpos.domain.catalog.entities import Catalog, Product, SelectionRule
from rpos.domain.common.ids import CartLineId


class UnknownProductError(Exception):
    pass


class UnknownModifierError(Exception):
    pass


class InvalidModifierSelectionError(Exception):
    pass


class CartConflictError(Exception):
    pass


def resolve_modifiers(catalog: Catalog, product: Product, modifier_ids: list[str]) -> list[Modifier]:
    """Turn requested option ids into Modifiers, enforcing each group's cardinality.

    A required single-choice group left empty falls back to its first option.
    """
    remaining = set(modifier_ids)
    selected: list[Modifier] = []
    for group in catalog.groups_for(product):
        options = [option for option in group.options if option.modifier_id in remaining]
        remaining -= {option.modifier_id for option in options}

        if group.selection == SelectionRule.SINGLE and len(options) > 1:
            raise InvalidModifierSelectionError(
                f"modifier group {group.group_id} accepts exactly one option"
            )
        if not options and group.required:
            if group.selection != SelectionRule.SINGLE:
                raise InvalidModifierSelectionError(
                    f"modifier group {group.group_id} requires a selection"
                )
            options = [group.options[0]]

        selected.extend(
            Modifier(
                modifier_id=option.modifier_id,
                name=option.name,
                price=option.price,
                action=group.action,
            )
            for option in options
        )

    if remaining:
        raise UnknownModifierError(
            f"modifiers not available for product {product.product_id}: "
            f"{','.join(sorted(remaining))}"
        )
    return selected


class _CartUseCase:
    def __init__(
        self,
        cart_repository: CartRepository,
        publisher: EventPublisher,
        clock: Clock,
        unit_of_work: UnitOfWork,
    ) -> None:
        self._cart_repository = cart_repository
        self._publisher = publisher
        self._clock = clock
        self._unit_of_work = unit_of_work

    def _change(self, mutate: Callable[[Cart], Cart], trace_ctx: TraceContext) -> Cart:
        with self._unit_of_work.atomic():
            cart = self._cart_repository.get()
            updated = mutate(cart)
            if updated is cart:
                return cart
            try:
                persisted = self._cart_repository.save(updated, expected_version=cart.version)
            except OptimisticConcurrencyError as exc:
                raise CartConflictError(
                    "cart was modified concurrently, retry the request"
                ) from exc

        record_cart(persisted)
        publish_quietly(
            self._publisher,
            channel=CART_CHANNEL,
            message=serialize_cart_event(
                occurred_at=self._clock.now(),
                cart=persisted,
                trace_id=trace_ctx.trace_id,
                request_id=trace_ctx.request_id,
            ),
        )
        return persisted


class AddToCart(_CartUseCase):
    def __init__(
        self,
        catalog: Catalog,
        cart_repository: CartRepository,
        publisher: EventPublisher,
        clock: Clock,
        unit_of_work: UnitOfWork,
    ) -> None:
        super().__init__(
            cart_repository=cart_repository,
            publisher=publisher,
            clock=clock,
            unit_of_work=unit_of_work,
        )
        self._catalog = catalog

    def execute(self, request_dto: AddToCartRequest, trace_ctx: TraceContext) -> CartResponse:
        product = self._catalog.get_product(request_dto.product_id)
        if product is None:
            raise UnknownProductError(f"product {request_dto.product_id} does not exist")

        modifiers = resolve_modifiers(self._catalog, product, request_dto.modifier_ids)
        line_id = CartLineId(f"crt_{uuid4().hex[:12]}")
        persisted = self._change(
            lambda cart: cart.add(
                line_id=line_id,
                product=product,
                modifiers=modifiers,
                comment=request_dto.comment,
                quantity=request_dto.quantity,
            ),
            trace_ctx,
        )
        return to_cart_response(persisted)


class RemoveFromCart(_CartUseCase):
    def execute(self, line_id: str, trace_ctx: TraceContext) -> CartResponse:
        return to_cart_response(self._change(lambda cart: cart.remove(line_id), trace_ctx))


class ClearCart(_CartUseCase):
    def execute(self, trace_ctx: TraceContext) -> CartResponse:
        persisted = self._change(
            lambda cart: cart if cart.is_empty else cart.cleared(),
            trace_ctx,
        )
        return to_cart_response(persisted)


class GetCart:
    def __init__(self, cart_repository: CartRepository) -> None:
        self._cart_repository = cart_repository

    def execute(self) -> CartResponse:
        return to_cart_response(self._cart_repository.get())
