import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
INPUT_DIR = BASE_DIR / os.getenv("INPUT_DIR", "input")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")

# --- Filename Configuration ---
# A single JSON document holding sellers, products and purchase_records.
DATASET_FILENAME = os.getenv("DATASET_FILENAME", "dataset.json")
# CSV fallback: one file per collection, receipts flattened to one row per line item.
SELLERS_FILENAME = os.getenv("SELLERS_FILENAME", "sellers.csv")
PRODUCTS_FILENAME = os.getenv("PRODUCTS_FILENAME", "products.csv")
PURCHASE_ITEMS_FILENAME = os.getenv("PURCHASE_ITEMS_FILENAME", "purchase_items.csv")
REPORT_FILENAME_BASE = os.getenv("REPORT_FILENAME_BASE", "seller_report")

# --- Outputs ---
WEBHOOK_URL = os.getenv("WEBHOOK_URL")
SAVE_JSON_OUTPUT = os.getenv("SAVE_JSON_OUTPUT", "true").strip().lower() in (
    "1",
    "true",
    "yes",
)

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Shared Business Logic ---
TOP_PRODUCTS_LIMIT = int(os.getenv("TOP_PRODUCTS_LIMIT", "10"))

# Bonus tiers by profit rank: the leader, the next two places, everyone else.
# The last place always gets nothing.
BONUS_RATE_TOP = float(os.getenv("BONUS_RATE_TOP", "0.15"))
BONUS_RATE_RUNNER_UP = float(os.getenv("BONUS_RATE_RUNNER_UP", "0.10"))
BONUS_RATE_STANDARD = float(os.getenv("BONUS_RATE_STANDARD", "0.05"))
