"""Shared fixtures for the seller report tests."""

import copy

import pytest

from seller_report import settings


# ---------------------------------------------------------------------------
# Sample dataset
#
# Expected results with the default strategies:
#   seller_1: profit 130 (80 + 50), revenue 280, 2 receipts  -> rank 0, bonus 19.50
#   seller_4: profit  60 (50 + 10), revenue 140, 1 receipt   -> rank 1, bonus  6.00
#   seller_2: profit  30,           revenue 120, 1 receipt   -> rank 2, bonus  3.00
#   seller_3: profit   0,           revenue  10, 1 receipt   -> rank 3 (last), bonus 0
# ---------------------------------------------------------------------------
SAMPLE_DATASET = {
    "sellers": [
        {"id": "seller_1", "first_name": "Alexey", "last_name": "Petrov", "position": "Senior Seller"},
        {"id": "seller_2", "first_name": "Ekaterina", "last_name": "Smirnova"},
        {"id": "seller_3", "first_name": "Ivan", "last_name": "Volkov"},
        {"id": "seller_4", "first_name": "Maria", "last_name": "Sokolova"},
    ],
    "products": [
        {"sku": "SKU_001", "name": "Tea", "category": "Drinks", "purchase_price": 50, "sale_price": 100},
        {"sku": "SKU_002", "name": "Mug", "category": "Dishes", "purchase_price": 10, "sale_price": 20},
        {"sku": "SKU_003", "name": "Spoon", "category": "Dishes", "purchase_price": 30, "sale_price": 40},
    ],
    "purchase_records": [
        {
            "receipt_id": "receipt_1",
            "date": "2023-12-04",
            "seller_id": "seller_1",
            "customer_id": "customer_1",
            "items": [{"sku": "SKU_001", "quantity": 2, "discount": 10, "sale_price": 100}],
            "total_amount": 180,
        },
        {
            "receipt_id": "receipt_2",
            "seller_id": "seller_1",
            "items": [{"sku": "SKU_002", "quantity": 5, "discount": 0, "sale_price": 20}],
            "total_amount": 100,
        },
        {
            "receipt_id": "receipt_3",
            "seller_id": "seller_2",
            "items": [{"sku": "SKU_003", "quantity": 3, "discount": 0, "sale_price": 40}],
            "total_amount": 120,
        },
        {
            "receipt_id": "receipt_4",
            "seller_id": "seller_3",
            "items": [{"sku": "SKU_002", "quantity": 1, "discount": 50, "sale_price": 20}],
            "total_amount": 10,
        },
        {
            "receipt_id": "receipt_5",
            "seller_id": "seller_4",
            "items": [
                {"sku": "SKU_001", "quantity": 1, "discount": 0, "sale_price": 100},
                {"sku": "SKU_003", "quantity": 1, "discount": 0, "sale_price": 40},
            ],
            "total_amount": 140,
        },
    ],
}


@pytest.fixture
def sample_dataset():
    """A fresh deep copy so tests can mutate it freely."""
    return copy.deepcopy(SAMPLE_DATASET)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point every file location at a temp dir and disable the webhook."""
    monkeypatch.setattr(settings, "INPUT_DIR", tmp_path / "input")
    monkeypatch.setattr(settings, "OUTPUT_DIR", tmp_path / "output")
    monkeypatch.setattr(settings, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(settings, "WEBHOOK_URL", None)
    monkeypatch.setattr(settings, "SAVE_JSON_OUTPUT", True)
    monkeypatch.setattr(settings, "TOP_PRODUCTS_LIMIT", 10)
    (tmp_path / "input").mkdir()
    return tmp_path
