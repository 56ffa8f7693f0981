# marketplace/core.py
from typing import Any, Dict, Iterable, List, Tuple, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import ProductValidationError

# This file holds the product schema and the checks run before any write.

Number = Union[int, float]

# BSON integers are signed 64-bit
_INT64_MIN, _INT64_MAX = -(2 ** 63), 2 ** 63 - 1


class ProductIn(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    name: str
    description: str
    price: Number
    quantity: Number
    category: str

    @field_validator("price", "quantity")
    @classmethod
    def fit_storable_number(cls, v: Number) -> Number:
        if isinstance(v, int) and not _INT64_MIN <= v <= _INT64_MAX:
            try:
                return float(v)
            except OverflowError:
                raise ValueError("number out of range")
        return v


PRODUCT_FIELDS: Tuple[str, ...] = tuple(ProductIn.model_fields)

_LOCATION_PREFIXES = ("body", "query", "path")


def _field_name(loc: Iterable[Any]) -> str:
    loc = list(loc)
    if loc and loc[0] in _LOCATION_PREFIXES and len(loc) > 1:
        loc = loc[1:]
    for part in loc:
        if isinstance(part, str):
            return part
    return "body"


def split_errors(errors: Iterable[Dict[str, Any]]) -> Tuple[List[str], List[str]]:
    """Sort pydantic error entries into (missing, invalid) field names."""
    missing, invalid = set(), set()
    for err in errors:
        name = _field_name(err.get("loc", ()))
        if err.get("type") == "missing" or err.get("input", ...) is None:
            missing.add(name)
        else:
            invalid.add(name)
    # a union field reports one error per member type
    return sorted(missing), sorted(invalid - missing)


def pick_fields(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only schema fields; unknown keys and identifiers are dropped."""
    return {k: payload[k] for k in PRODUCT_FIELDS if k in payload}


def validate_product(data: Any) -> ProductIn:
    if not isinstance(data, dict):
        raise ProductValidationError(invalid=["body"])
    try:
        return ProductIn.model_validate(pick_fields(data))
    except ValidationError as e:
        missing, invalid = split_errors(e.errors())
        raise ProductValidationError(missing=missing, invalid=invalid) from e


def _make_product_dict(product_id: str, p: ProductIn) -> Dict[str, Any]:
    return {"id": product_id, **p.model_dump()}
