import argparse
from pathlib import Path

from seller_report.logger import setup_logger
from seller_report.pipelines.report import SellerReportPipeline


def run_report(test_mode: bool = False, dataset_path: Path | None = None):
    """Main orchestration function to run the entire seller report process."""
    logger = setup_logger()
    logger.info("--- Starting Seller Performance Report ---")

    report = SellerReportPipeline(test_mode=test_mode, dataset_path=dataset_path).run()
    if report is None:
        logger.error("--- Process Finished With Errors ---")
        return None

    logger.info("\n--- Process Finished Successfully ---")
    return report


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Build the seller performance report.")
    parser.add_argument("--test", action="store_true", help="Skip the webhook post.")
    parser.add_argument("--input", type=Path, help="Path to a JSON dataset file.")
    args = parser.parse_args()

    if run_report(test_mode=args.test, dataset_path=args.input) is None:
        raise SystemExit(1)
