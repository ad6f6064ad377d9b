import logging
from pathlib import Path
from typing import Any

import pandas as pd

from .utils import load_csv, load_json

logger = logging.getLogger(__name__)

# Identifier columns must stay strings even when they look numeric (e.g. SKU "1001").
ID_DTYPES = {"id": str, "sku": str, "seller_id": str, "receipt_id": str, "customer_id": str}

ITEM_COLUMNS = ["sku", "quantity", "discount", "sale_price"]
RECEIPT_COLUMNS = ["seller_id", "total_amount", "date", "customer_id", "total_discount"]


def _records(df: pd.DataFrame) -> list[dict[str, Any]]:
    """DataFrame rows as plain dicts, with NaN turned into None."""
    cleaned = df.astype(object).where(df.notna(), None)
    return [{str(k): v for k, v in row.items()} for row in cleaned.to_dict("records")]


def parse_dataset_json(file_path: Path) -> dict[str, Any] | None:
    """
    Loads a dataset document with top-level 'sellers', 'products' and
    'purchase_records' lists. Shape checks are left to the analyzer.
    """
    data = load_json(file_path)
    if data is None:
        return None

    if isinstance(data, dict):
        counts = ", ".join(
            f"{key}={len(value)}" for key, value in data.items() if isinstance(value, list)
        )
        logger.info(f"✅ Parsed {file_path.name} successfully ({counts}).")
    return data


def parse_dataset_csv(file_paths: dict[str, Path]) -> dict[str, Any] | None:
    """
    Loads sellers, products and purchase line items from three CSV files.
    Expects a dict with 'sellers', 'products' and 'purchase_items' file paths.

    The purchase items file has one row per line item; rows sharing a
    receipt_id are folded back into a single purchase record, keeping the
    file order of both receipts and items.
    """
    sellers_df = load_csv(file_paths["sellers"], dtype=ID_DTYPES)
    products_df = load_csv(file_paths["products"], dtype=ID_DTYPES)
    items_df = load_csv(file_paths["purchase_items"], dtype=ID_DTYPES)

    if sellers_df is None or products_df is None or items_df is None:
        return None

    required = ("receipt_id", "seller_id", "total_amount", "sku", "quantity")
    missing = [col for col in required if col not in items_df.columns]
    if missing:
        logger.error(
            f"{file_paths['purchase_items'].name} is missing columns: {', '.join(missing)}"
        )
        return None

    # Every line needs its receipt, seller, total, SKU and quantity.
    blank_rows = items_df[items_df[list(required)].isna().any(axis=1)]
    if not blank_rows.empty:
        # +2: header line plus 1-based numbering
        line_numbers = ", ".join(str(i + 2) for i in blank_rows.index)
        logger.error(
            f"{file_paths['purchase_items'].name} has blank required cells on lines: {line_numbers}"
        )
        return None

    item_cols = [col for col in ITEM_COLUMNS if col in items_df.columns]
    receipt_cols = [col for col in RECEIPT_COLUMNS if col in items_df.columns]

    purchase_records = []
    for receipt_id, group in items_df.groupby("receipt_id", sort=False):
        # Receipt-level fields repeat on every line; the first row is authoritative.
        header = _records(group[receipt_cols].head(1))[0]
        items = [
            {k: v for k, v in item.items() if v is not None}
            for item in _records(group[item_cols])
        ]
        purchase_records.append(
            {
                "receipt_id": receipt_id,
                **{k: v for k, v in header.items() if v is not None},
                "items": items,
            }
        )

    logger.info(
        f"✅ Parsed CSV dataset successfully (sellers={len(sellers_df)}, "
        f"products={len(products_df)}, purchase_records={len(purchase_records)})."
    )
    return {
        "sellers": _records(sellers_df),
        "products": _records(products_df),
        "purchase_records": purchase_records,
    }
