"""Domain service: Bill Grouping.

Reconstructs multi-item transactions from the flat list of Sale rows the
sales service returns.  Rows sharing a bill identifier become one Bill;
rows without one each form a Bill of their own.

Pure and deterministic: the same input always yields the same bills in
the same order.
"""

from __future__ import annotations

from collections.abc import Iterable

from chakki.domain.model.sale import Bill, BillKey, Sale


def group_bills(sales: Iterable[Sale]) -> list[Bill]:
    """Group sales into bills, newest bill first.

    Line items keep the order in which they appear in *sales*.  Bills are
    ordered by the timestamp of their first line item, descending; bills
    with equal timestamps keep first-appearance order.
    """
    groups: dict[BillKey, list[Sale]] = {}
    for sale in sales:
        groups.setdefault(sale.bill_key, []).append(sale)

    bills = [Bill(key=key, items=tuple(items)) for key, items in groups.items()]
    # sorted() is stable, so ties keep insertion order
    return sorted(bills, key=lambda bill: bill.date, reverse=True)
