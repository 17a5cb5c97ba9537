"""Application service: Delete Sale use case (administrator).

A hard remove.  Stock is not returned to the product; corrections are
made separately with a stock update.
"""

from __future__ import annotations

import logging

from chakki.domain.repository.sales_gateway import SalesGateway

logger = logging.getLogger(__name__)


class DeleteSaleHandler:

    def __init__(self, sales_gateway: SalesGateway) -> None:
        self._sales_gateway = sales_gateway

    def handle(self, sale_id: str) -> None:
        self._sales_gateway.delete_sale(sale_id)
        logger.info("Deleted sale %s", sale_id)
