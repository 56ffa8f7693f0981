# tests/test_core.py
import pytest

from marketplace.core import pick_fields, split_errors, validate_product
from marketplace.errors import ProductValidationError


def test_validate_product_accepts_complete_record(widget):
    p = validate_product(widget)
    assert p.model_dump() == widget


def test_validate_product_coerces_numeric_strings(widget):
    p = validate_product({**widget, "price": "9.99", "quantity": "10"})
    assert p.price == 9.99
    assert p.quantity == 10


def test_validate_product_lists_missing_fields():
    with pytest.raises(ProductValidationError) as exc:
        validate_product({"name": "Bad", "price": None})
    assert exc.value.missing == ["category", "description", "price", "quantity"]
    assert exc.value.invalid == []
    assert "missing: category" in str(exc.value)


def test_validate_product_lists_invalid_fields(widget):
    with pytest.raises(ProductValidationError) as exc:
        validate_product({**widget, "price": "free", "category": ["a"]})
    assert exc.value.missing == []
    assert exc.value.invalid == ["category", "price"]


def test_validate_product_rejects_non_objects():
    with pytest.raises(ProductValidationError) as exc:
        validate_product("Widget")
    assert exc.value.invalid == ["body"]


def test_pick_fields_drops_identifiers_and_unknown_keys(widget):
    assert pick_fields({**widget, "id": "x", "_id": "y", "__v": 0}) == widget


def test_split_errors_strips_request_location():
    errors = [
        {"type": "missing", "loc": ("body", "price"), "input": {}},
        {"type": "float_parsing", "loc": ("body", "quantity", "float"), "input": "x"},
        {"type": "json_invalid", "loc": ("body", 3), "input": {}},
    ]
    assert split_errors(errors) == (["price"], ["body", "quantity"])
