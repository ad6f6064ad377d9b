import math
from dataclasses import dataclass, field
import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Identifiers may arrive as numbers (e.g. from CSV), so inputs coerce them to str.
# NaN and inf never make it into a money total.
_INPUT_CONFIG = ConfigDict(
    coerce_numbers_to_str=True, allow_inf_nan=False, extra="ignore"
)


# --- Input Contracts ---


class Seller(BaseModel):
    model_config = _INPUT_CONFIG

    id: str
    first_name: str
    last_name: str


class Product(BaseModel):
    """
    A catalog entry. Only `sku` and `purchase_price` are needed for the profit
    calculation; the rest is available to revenue strategies.
    """

    model_config = _INPUT_CONFIG

    sku: str
    purchase_price: float
    sale_price: Optional[float] = None
    name: Optional[str] = None
    category: Optional[str] = None
    vendor: Optional[str] = None


class LineItem(BaseModel):
    model_config = _INPUT_CONFIG

    sku: str
    quantity: int | float
    discount: float = 0  # percent
    sale_price: Optional[float] = None


class PurchaseRecord(BaseModel):
    """A single receipt: belongs to one seller and lists its line items in order."""

    model_config = _INPUT_CONFIG

    seller_id: str
    total_amount: float
    items: list[LineItem]
    receipt_id: Optional[str] = None
    date: Optional[datetime.date] = None
    customer_id: Optional[str] = None
    total_discount: Optional[float] = None


class SalesDataset(BaseModel):
    sellers: list[Seller]
    products: list[Product]
    purchase_records: list[PurchaseRecord]


# --- Working Record ---


@dataclass
class SellerStats:
    """
    Mutable accumulator for one seller while the report is being built.

    Revenue and profit keep every contribution and are summed with math.fsum,
    so the totals are exact to float precision regardless of receipt order.
    """

    id: str
    name: str
    sales_count: int = 0
    products_sold: dict[str, int | float] = field(default_factory=dict)
    bonus: Optional[float] = None
    top_products: list["TopProduct"] = field(default_factory=list)
    _revenue_parts: list[float] = field(default_factory=list, repr=False)
    _profit_parts: list[float] = field(default_factory=list, repr=False)

    @classmethod
    def from_seller(cls, seller: Seller) -> "SellerStats":
        return cls(id=seller.id, name=f"{seller.first_name} {seller.last_name}")

    @property
    def revenue(self) -> float:
        return math.fsum(self._revenue_parts)

    @property
    def profit(self) -> float:
        return math.fsum(self._profit_parts)

    def add_revenue(self, amount: float):
        self._revenue_parts.append(amount)

    def add_profit(self, amount: float):
        self._profit_parts.append(amount)

    def add_quantity(self, sku: str, quantity: int | float):
        self.products_sold[sku] = self.products_sold.get(sku, 0) + quantity


# --- Output Contracts ---


class TopProduct(BaseModel):
    sku: str
    quantity: int | float


class ReportRow(BaseModel):
    """
    Defines the data contract for one seller's line in the final report.
    Monetary fields are already rounded to 2 decimals.
    """

    seller_id: str
    name: str
    revenue: float
    profit: float
    sales_count: int = Field(..., ge=0)
    top_products: list[TopProduct]
    bonus: float
