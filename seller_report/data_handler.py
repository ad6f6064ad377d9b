import json
import logging
from pathlib import Path
from typing import Any

import pandas as pd
import requests

from . import settings, utils
from .schemas import ReportRow

logger = logging.getLogger(__name__)


def _flatten_top_products(row: ReportRow) -> str:
    """'SKU_001:10|SKU_007:4' keeps the nested list readable in a single CSV cell."""
    return "|".join(f"{entry.sku}:{entry.quantity}" for entry in row.top_products)


def save_outputs(report_rows: list[ReportRow], base_name: str) -> list[Path]:
    """Saves the report to CSV and conditionally to JSON, with dated filenames."""
    settings.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    date_suffix = utils.get_date_suffix_for_filename()

    csv_path = settings.OUTPUT_DIR / f"{base_name}_{date_suffix}.csv"
    json_path = settings.OUTPUT_DIR / f"{base_name}_{date_suffix}.json"
    saved = []

    records = []
    for row in report_rows:
        record = row.model_dump(exclude={"top_products"})
        record["top_products"] = _flatten_top_products(row)
        records.append(record)

    # The schema's field order is the column order
    df = pd.DataFrame(records, columns=list(ReportRow.model_fields.keys()))
    df.insert(0, "rank", range(1, len(df) + 1))
    df.to_csv(csv_path, index=False)
    saved.append(csv_path)
    logger.info(f"✅ Report saved to: {csv_path}")

    if settings.SAVE_JSON_OUTPUT:
        with open(json_path, "w", encoding="utf-8") as f:
            json.dump([row.model_dump(mode="json") for row in report_rows], f, indent=2)
        saved.append(json_path)
        logger.info(f"✅ JSON output saved to: {json_path}")
    else:
        logger.info("Skipping JSON file save as per configuration.")

    return saved


def post_to_webhook(
    report_rows: list[ReportRow], metadata: dict[str, Any], report_type: str
) -> bool:
    """
    Posts the report rows and run metadata to the webhook.
    Returns True only when the webhook accepted the payload.
    """
    if not settings.WEBHOOK_URL:
        logger.warning("⚠️ WEBHOOK_URL not set. Skipping webhook post.")
        return False

    logger.info(f"🚀 Posting {report_type} report to webhook: {settings.WEBHOOK_URL}")

    payload = {
        "reportType": report_type,
        "metadata": metadata,
        "reportData": [row.model_dump(mode="json") for row in report_rows],
    }

    try:
        response = requests.post(settings.WEBHOOK_URL, json=payload, timeout=15)
        response.raise_for_status()
        logger.info("✅ Report successfully posted to webhook.")
        return True
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error posting to webhook: {e}")
        return False
