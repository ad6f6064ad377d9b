"""Errors raised while building the seller report.

Every error is fatal for the report: the core never returns partial output.
"""


class ReportError(Exception):
    """Base class for all report-generation failures."""


class InvalidInputError(ReportError):
    """Raised when the dataset is missing, malformed, or has an empty collection."""


class InvalidStrategyError(ReportError):
    """Raised when a revenue or bonus strategy is not callable."""


class LookupFailure(ReportError):
    """Raised when a purchase record references an unknown seller or product."""

    def __init__(self, kind: str, key):
        self.kind = kind
        self.key = key
        super().__init__(f"Unknown {kind}: {key!r}")


class UnknownSellerError(LookupFailure):
    def __init__(self, seller_id):
        super().__init__("seller", seller_id)


class UnknownProductError(LookupFailure):
    def __init__(self, sku):
        super().__init__("product", sku)
