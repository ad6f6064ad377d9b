import logging
from datetime import date
from pathlib import Path
from typing import Any, Optional

from seller_report import parsers, settings
from seller_report.analyzer import analyze_sales_data
from seller_report.errors import ReportError
from seller_report.pipeline import DataPipeline
from seller_report.schemas import ReportRow
from seller_report.strategies import (
    BonusFn,
    RevenueFn,
    calculate_bonus_by_profit,
    calculate_simple_revenue,
)

logger = logging.getLogger(__name__)


class SellerReportPipeline(DataPipeline):
    def __init__(
        self,
        test_mode: bool = False,
        dataset_path: Optional[Path] = None,
        calculate_revenue: RevenueFn = calculate_simple_revenue,
        calculate_bonus: BonusFn = calculate_bonus_by_profit,
    ):
        super().__init__(
            "seller", output_name=settings.REPORT_FILENAME_BASE, test_mode=test_mode
        )
        self.system_date = date.today()
        # An explicit dataset path is the only source tried; no CSV fallback.
        self.explicit_input = dataset_path is not None
        self.dataset_path = dataset_path or settings.INPUT_DIR / settings.DATASET_FILENAME
        self.calculate_revenue = calculate_revenue
        self.calculate_bonus = calculate_bonus

        # Tried in order; the first source that yields data wins.
        self.PARSER_REGISTRY = [
            {
                "source": "JSON dataset",
                "func": parsers.parse_dataset_json,
                "required_files": self.dataset_path,
            },
            {
                "source": "CSV dataset",
                "func": parsers.parse_dataset_csv,
                "required_files": {
                    "sellers": settings.INPUT_DIR / settings.SELLERS_FILENAME,
                    "products": settings.INPUT_DIR / settings.PRODUCTS_FILENAME,
                    "purchase_items": settings.INPUT_DIR / settings.PURCHASE_ITEMS_FILENAME,
                },
            },
        ]
        if self.explicit_input:
            self.PARSER_REGISTRY = self.PARSER_REGISTRY[:1]

    def extract(self) -> dict[str, Any] | None:
        logger.info("--- Loading Sales Dataset ---")

        for parser in self.PARSER_REGISTRY:
            logger.info(f"\n-- Trying Source: {parser['source']} --")

            data = parser["func"](parser["required_files"])
            if data is None:
                if self.explicit_input:
                    logger.error(f"❌ Could not load dataset from {self.dataset_path}.")
                    return None
                logger.warning(f"  > ⚠️  No data from {parser['source']}. Skipping.")
                continue

            self.metadata["source"] = parser["source"]
            self.metadata["report_date"] = self.system_date.isoformat()
            return data

        logger.error("❌ No dataset found in any source.")
        return None

    def transform(self, raw_data: dict[str, Any]) -> list[ReportRow] | None:
        logger.info("\n--- Building Seller Report ---")
        try:
            report = analyze_sales_data(
                raw_data,
                calculate_revenue=self.calculate_revenue,
                calculate_bonus=self.calculate_bonus,
            )
        except ReportError as e:
            logger.error("❌ Report generation failed!")
            logger.error(e)
            return None

        self.metadata["sellers"] = len(report)
        self.metadata["purchase_records"] = sum(row.sales_count for row in report)

        logger.info("\n--- Ranking ---")
        for rank, row in enumerate(report, start=1):
            logger.info(
                f"{rank:>3}. {row.name:<30} profit={row.profit:>12.2f}  bonus={row.bonus:>10.2f}"
            )
        return report
