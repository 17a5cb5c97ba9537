"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  ``CHAKKI_BACKEND``
picks between the local JSON files and the remote REST API.
"""

from __future__ import annotations

from functools import lru_cache

from chakki.application.receipt import ReceiptHeader
from chakki.domain.model.sale import Operator
from chakki.domain.repository.product_repository import ProductRepository
from chakki.domain.repository.sales_gateway import SalesGateway
from chakki.infrastructure.api.client import ApiClient
from chakki.infrastructure.api.rest_product_repository import RestProductRepository
from chakki.infrastructure.api.rest_sales_gateway import RestSalesGateway
from chakki.infrastructure.config import Settings, get_settings
from chakki.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from chakki.infrastructure.persistence.json_sales_service import JsonSalesService


def settings() -> Settings:
    return get_settings()


@lru_cache
def api_client() -> ApiClient:
    cfg = settings()
    return ApiClient(cfg.api_base_url, token=cfg.api_token, timeout=cfg.api_timeout)


def product_repository() -> ProductRepository:
    cfg = settings()
    if cfg.backend == "rest":
        return RestProductRepository(api_client(), cfg.currency_code)
    return JsonProductRepository(cfg.data_dir / "products.json", cfg.currency_code)


def sales_gateway() -> SalesGateway:
    cfg = settings()
    if cfg.backend == "rest":
        return RestSalesGateway(api_client(), cfg.currency_code)
    return JsonSalesService(
        cfg.data_dir / "sales.json", product_repository(), cfg.currency_code
    )


def receipt_header() -> ReceiptHeader:
    cfg = settings()
    return ReceiptHeader(
        business_name=cfg.business_name,
        address=cfg.business_address,
        phone=cfg.business_phone,
    )


def operator(operator_id: str | None = None, operator_name: str | None = None) -> Operator:
    cfg = settings()
    return Operator(
        id=operator_id or cfg.operator_id,
        name=operator_name or cfg.operator_name,
    )
