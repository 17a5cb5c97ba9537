"""Application service: Checkout use case.

Turns the operator's cart into one bill.  The cart does an optimistic
stock check when items are added; the sales service re-checks stock and
is the only authority on whether the sale goes through.

On failure the cart is left exactly as it was so the operator can adjust
quantities and retry.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timezone

from chakki.domain.exceptions import DomainException, EmptyCart
from chakki.domain.model.cart import Cart
from chakki.domain.model.sale import (
    CheckoutLine,
    CheckoutRequest,
    CheckoutResult,
    Operator,
)
from chakki.domain.repository.sales_gateway import SalesGateway

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_idempotency_key() -> str:
    return uuid.uuid4().hex


class CheckoutHandler:

    def __init__(
        self,
        sales_gateway: SalesGateway,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._sales_gateway = sales_gateway
        self._clock = clock

    def build_request(
        self,
        cart: Cart,
        operator: Operator,
        idempotency_key: str | None = None,
    ) -> CheckoutRequest:
        if cart.is_empty:
            raise EmptyCart("Cart is empty. Add at least one product before checkout")

        lines = tuple(
            CheckoutLine(
                product_id=item.product.id,
                quantity=item.quantity,
                total=item.line_total,
            )
            for item in cart.items
        )
        return CheckoutRequest(
            items=lines,
            operator=operator,
            date=self._clock(),
            idempotency_key=idempotency_key or new_idempotency_key(),
        )

    def handle(
        self,
        cart: Cart,
        operator: Operator,
        idempotency_key: str | None = None,
    ) -> CheckoutResult:
        """Submit the cart as a single bill.

        Steps:
        1. Refuse an empty cart (no call to the sales service).
        2. Build one request with every line and its computed total.
        3. Submit it in a single call.
        4. Clear the cart only after the service confirms.

        Passing the *idempotency_key* of a failed attempt lets the sales
        service recognise a retry of a request that actually succeeded.
        """
        request = self.build_request(cart, operator, idempotency_key)

        try:
            result = self._sales_gateway.checkout(request)
        except DomainException as exc:
            logger.warning(
                "Checkout by %s failed (%d items, key=%s): %s",
                operator.name,
                len(request.items),
                request.idempotency_key,
                exc,
            )
            raise

        cart.clear()
        logger.info(
            "Checkout completed: bill %s by %s, %d items, total %s",
            result.bill_id,
            result.operator_name,
            len(result.items),
            result.total_amount,
        )
        return result
