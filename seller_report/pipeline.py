import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from seller_report import data_handler

logger = logging.getLogger(__name__)


class DataPipeline(ABC):
    """
    Abstract base class for report pipelines.
    Follows an Extract -> Transform -> Load (ETL) pattern.
    """

    def __init__(
        self, report_type: str, output_name: Optional[str] = None, test_mode: bool = False
    ):
        self.report_type = report_type
        self.output_name = output_name or f"{report_type}_report"
        self.test_mode = test_mode
        # Free-form run details, sent along with the report
        self.metadata: dict[str, Any] = {}

    def run(self) -> Optional[list[Any]]:
        """
        Orchestrates the pipeline execution.
        Returns the loaded report, or None when there was nothing to report.
        """
        logger.info(f"🚀 STEP: {self.report_type.upper()} REPORT")
        logger.info("-" * 30)

        # --- 1. EXTRACT ---
        raw_data = self.extract()
        if raw_data is None:
            logger.warning(f"⚠️ No data extracted for {self.report_type}.")
            return None

        # --- 2. TRANSFORM ---
        report = self.transform(raw_data)
        if report is None:
            logger.error(f"❌ Transformation failed for {self.report_type}.")
            return None

        # --- 3. LOAD ---
        self.load(report)

        logger.info(f"✅ {self.report_type.capitalize()} Pipeline Finished.\n")
        logger.info("=" * 60)
        return report

    @abstractmethod
    def extract(self) -> Any | None:
        """
        Responsible for finding input files, running parsers, and returning the raw data.
        Should also populate self.metadata as it processes sources.
        """
        pass

    @abstractmethod
    def transform(self, raw_data: Any) -> list[Any] | None:
        """
        Responsible for validation and the report computation.
        Returns a list of Pydantic models, or None on failure.
        """
        pass

    def load(self, report: list[Any]):
        """
        Saves the report to disk and posts it to the webhook.
        """
        if self.metadata:
            logger.info("\n--- Run Summary ---")
            for key, value in self.metadata.items():
                logger.info(f"{key}: {value}")

        if report:
            data_handler.save_outputs(report, self.output_name)
        else:
            logger.warning("No data to save to disk.")

        if not self.test_mode:
            data_handler.post_to_webhook(
                report_rows=report,
                metadata=self.metadata,
                report_type=self.report_type,
            )
        else:
            logger.info("🧪 Test Mode: Skipping webhook post.")
