import json

import pytest

from seller_report import parsers
from seller_report.analyzer import analyze_sales_data

REQUIRED_ITEM_COLUMNS = ["receipt_id", "seller_id", "total_amount", "sku", "quantity"]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def csv_files(tmp_path):
    """Writes a small CSV dataset and returns the file path mapping."""
    sellers = tmp_path / "sellers.csv"
    sellers.write_text(
        "id,first_name,last_name\n"
        "seller_1,Alexey,Petrov\n"
        "seller_2,Ekaterina,Smirnova\n",
        encoding="utf-8",
    )
    products = tmp_path / "products.csv"
    products.write_text(
        "sku,name,purchase_price,sale_price\n"
        "1001,Tea,50,100\n"
        "SKU_002,Mug,10,20\n",
        encoding="utf-8",
    )
    items = tmp_path / "purchase_items.csv"
    items.write_text(
        "receipt_id,date,seller_id,total_amount,sku,quantity,discount,sale_price\n"
        "r1,2023-12-04,seller_1,280,1001,2,10,100\n"
        "r1,2023-12-04,seller_1,280,SKU_002,5,0,\n"
        "r2,2023-12-05,seller_2,20,SKU_002,1,0,20\n",
        encoding="utf-8",
    )
    return {"sellers": sellers, "products": products, "purchase_items": items}


# ---------------------------------------------------------------------------
# JSON dataset
# ---------------------------------------------------------------------------
class TestParseDatasetJson:
    def test_returns_document(self, tmp_path, sample_dataset):
        path = tmp_path / "dataset.json"
        path.write_text(json.dumps(sample_dataset), encoding="utf-8")

        assert parsers.parse_dataset_json(path) == sample_dataset

    def test_missing_file(self, tmp_path):
        assert parsers.parse_dataset_json(tmp_path / "dataset.json") is None


# ---------------------------------------------------------------------------
# CSV dataset
# ---------------------------------------------------------------------------
class TestParseDatasetCsv:
    def test_groups_line_items_into_receipts(self, csv_files):
        data = parsers.parse_dataset_csv(csv_files)

        records = data["purchase_records"]
        assert [r["receipt_id"] for r in records] == ["r1", "r2"]
        assert records[0]["seller_id"] == "seller_1"
        assert records[0]["total_amount"] == 280
        assert [item["sku"] for item in records[0]["items"]] == ["1001", "SKU_002"]

    def test_numeric_looking_ids_stay_strings(self, csv_files):
        data = parsers.parse_dataset_csv(csv_files)

        assert data["products"][0]["sku"] == "1001"
        assert data["purchase_records"][0]["items"][0]["sku"] == "1001"

    def test_blank_cells_are_dropped_from_items(self, csv_files):
        data = parsers.parse_dataset_csv(csv_files)

        assert "sale_price" not in data["purchase_records"][0]["items"][1]

    def test_missing_file(self, csv_files, tmp_path):
        csv_files["products"] = tmp_path / "absent.csv"

        assert parsers.parse_dataset_csv(csv_files) is None

    def test_missing_required_column(self, csv_files):
        csv_files["purchase_items"].write_text(
            "receipt_id,seller_id,sku,quantity\nr1,seller_1,1001,2\n", encoding="utf-8"
        )

        assert parsers.parse_dataset_csv(csv_files) is None

    @pytest.mark.parametrize("blank_column", REQUIRED_ITEM_COLUMNS)
    def test_blank_required_cell_rejects_file(self, csv_files, blank_column):
        second_line = {
            "receipt_id": "r2",
            "seller_id": "seller_1",
            "total_amount": "4",
            "sku": "SKU_002",
            "quantity": "2",
        }
        second_line[blank_column] = ""
        csv_files["purchase_items"].write_text(
            ",".join(REQUIRED_ITEM_COLUMNS) + "\n"
            "r1,seller_1,2,SKU_002,1\n"
            + ",".join(second_line[col] for col in REQUIRED_ITEM_COLUMNS) + "\n",
            encoding="utf-8",
        )

        # Dropping the incomplete line would undercount the seller's receipts
        assert parsers.parse_dataset_csv(csv_files) is None

    def test_fractional_quantities(self, csv_files):
        csv_files["purchase_items"].write_text(
            "receipt_id,seller_id,total_amount,sku,quantity,discount\n"
            "r1,seller_1,30,SKU_002,1.5,0\n",
            encoding="utf-8",
        )

        report = analyze_sales_data(parsers.parse_dataset_csv(csv_files))

        assert report[0].top_products[0].quantity == 1.5
        assert report[0].profit == 15.0

    def test_feeds_the_analyzer(self, csv_files):
        report = analyze_sales_data(parsers.parse_dataset_csv(csv_files))

        top = report[0]
        assert top.seller_id == "seller_1"
        # 180 - 100 on the tea, plus 5 mugs at the catalog price: 100 - 50
        assert top.profit == 130.0
        assert top.revenue == 280.0
        assert [(p.sku, p.quantity) for p in top.top_products] == [("SKU_002", 5), ("1001", 2)]
        assert report[1].profit == 10.0
