# marketplace/errors.py
from typing import Any, Dict, List, Optional


class ProductValidationError(Exception):
    """Raised before any write when a product record lacks or mistypes fields."""

    def __init__(self, missing: Optional[List[str]] = None, invalid: Optional[List[str]] = None):
        self.missing = sorted(missing or [])
        self.invalid = sorted(invalid or [])
        parts = []
        if self.missing:
            parts.append("missing: " + ", ".join(self.missing))
        if self.invalid:
            parts.append("invalid: " + ", ".join(self.invalid))
        super().__init__("; ".join(parts) or "invalid product")

    def to_response(self) -> Dict[str, Any]:
        return {"message": "Bad Request", "missing": self.missing, "invalid": self.invalid}


class StoreError(Exception):
    """Wraps any failure raised by the document store driver."""

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"store {operation} failed: {cause!r}")
