"""
Builds the per-seller performance report.

The work happens in three passes over data held fully in memory:
index sellers and products, accumulate every receipt into its seller's
working record, then rank sellers by profit and assign bonuses.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from . import settings, utils
from .errors import (
    InvalidInputError,
    InvalidStrategyError,
    UnknownProductError,
    UnknownSellerError,
)
from .schemas import (
    Product,
    PurchaseRecord,
    ReportRow,
    SalesDataset,
    Seller,
    SellerStats,
    TopProduct,
)
from .strategies import (
    BonusFn,
    RevenueFn,
    calculate_bonus_by_profit,
    calculate_simple_revenue,
)

logger = logging.getLogger(__name__)

COLLECTIONS = ("sellers", "products", "purchase_records")


def analyze_sales_data(
    data: SalesDataset | Mapping[str, Any] | None,
    calculate_revenue: RevenueFn = calculate_simple_revenue,
    calculate_bonus: BonusFn = calculate_bonus_by_profit,
) -> list[ReportRow]:
    """
    Produces one ReportRow per seller, ordered by profit (highest first).

    Raises InvalidInputError or InvalidStrategyError before any processing,
    and a LookupFailure if a receipt references an unknown seller or SKU.
    Nothing partial is ever returned.
    """
    dataset = validate_dataset(data)
    if not callable(calculate_revenue) or not callable(calculate_bonus):
        raise InvalidStrategyError("Revenue and bonus strategies must both be callable.")

    seller_index, product_index = build_indexes(dataset.sellers, dataset.products)
    accumulate_purchases(
        dataset.purchase_records, seller_index, product_index, calculate_revenue
    )
    ranked = rank_sellers(list(seller_index.values()), calculate_bonus)

    logger.info(
        f"Report built for {len(ranked)} sellers from "
        f"{len(dataset.purchase_records)} purchase records."
    )
    return [project_report_row(seller) for seller in ranked]


def validate_dataset(data: SalesDataset | Mapping[str, Any] | None) -> SalesDataset:
    """Checks the input shape and parses it into a SalesDataset."""
    if isinstance(data, SalesDataset):
        raw = {key: getattr(data, key) for key in COLLECTIONS}
    elif isinstance(data, Mapping):
        raw = data
    else:
        raise InvalidInputError("Input data is missing or is not a mapping.")

    for key in COLLECTIONS:
        collection = raw.get(key)
        if not isinstance(collection, list):
            raise InvalidInputError(f"'{key}' must be a list.")
        if not collection:
            raise InvalidInputError(f"'{key}' must not be empty.")

    if isinstance(data, SalesDataset):
        return data
    try:
        return SalesDataset.model_validate(
            {key: raw[key] for key in COLLECTIONS}
        )
    except ValidationError as e:
        logger.error("Input data failed schema validation.")
        raise InvalidInputError(str(e)) from e


# --- 1. Indexer ---


def build_indexes(
    sellers: list[Seller], products: list[Product]
) -> tuple[dict[str, SellerStats], dict[str, Product]]:
    """Keys fresh seller working records by id and catalog entries by SKU."""
    seller_index = {seller.id: SellerStats.from_seller(seller) for seller in sellers}
    product_index = {product.sku: product for product in products}
    logger.debug(
        f"Indexed {len(seller_index)} sellers and {len(product_index)} products."
    )
    return seller_index, product_index


# --- 2. Accumulator ---


def accumulate_purchases(
    records: list[PurchaseRecord],
    seller_index: dict[str, SellerStats],
    product_index: dict[str, Product],
    calculate_revenue: RevenueFn,
):
    """
    Adds every receipt to its seller's running totals.

    Receipt revenue comes from the recorded total_amount; profit comes from
    the revenue strategy minus purchase cost, line by line. No rounding here.
    """
    for record in records:
        try:
            seller = seller_index[record.seller_id]
        except KeyError as e:
            logger.error(f"Receipt {record.receipt_id} has unknown seller {record.seller_id!r}.")
            raise UnknownSellerError(record.seller_id) from e

        seller.sales_count += 1
        seller.add_revenue(record.total_amount)

        for item in record.items:
            try:
                product = product_index[item.sku]
            except KeyError as e:
                logger.error(f"Receipt {record.receipt_id} has unknown SKU {item.sku!r}.")
                raise UnknownProductError(item.sku) from e

            cost = product.purchase_price * item.quantity
            line_revenue = calculate_revenue(item, product)
            seller.add_profit(line_revenue - cost)
            seller.add_quantity(item.sku, item.quantity)


# --- 3. Ranker ---


def rank_sellers(
    sellers: list[SellerStats],
    calculate_bonus: BonusFn,
    limit: int | None = None,
) -> list[SellerStats]:
    """
    Sorts sellers by profit (stable, highest first) and fills in each one's
    bonus and top products.
    """
    limit = settings.TOP_PRODUCTS_LIMIT if limit is None else limit
    ranked = sorted(sellers, key=lambda seller: seller.profit, reverse=True)
    total = len(ranked)

    for index, seller in enumerate(ranked):
        seller.bonus = calculate_bonus(index, total, seller)
        seller.top_products = top_products(seller.products_sold, limit)

    return ranked


def top_products(
    products_sold: dict[str, int | float], limit: int
) -> list[TopProduct]:
    """Highest-quantity SKUs first; equal quantities keep their first-sold order."""
    entries = [
        TopProduct(sku=sku, quantity=quantity)
        for sku, quantity in products_sold.items()
    ]
    entries.sort(key=lambda entry: entry.quantity, reverse=True)
    return entries[:limit]


def project_report_row(seller: SellerStats) -> ReportRow:
    """Rounds the money fields and drops the working state."""
    return ReportRow(
        seller_id=seller.id,
        name=seller.name,
        revenue=utils.round_money(seller.revenue),
        profit=utils.round_money(seller.profit),
        sales_count=seller.sales_count,
        top_products=seller.top_products,
        bonus=utils.round_money(seller.bonus or 0),
    )
