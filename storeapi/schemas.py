"""Request payloads and response envelopes passed between views and services.

The payload models are the document schema: their validators trim strings and
enforce bounds, raising ``ValueError`` with the message the client sees.
``storeapi.services.validation`` turns the first failure into a
:class:`~storeapi.errors.ValidationError`.
"""
import math
from typing import List, Optional

from flask import request
from pydantic import BaseModel, Field, field_validator, model_validator

# field: (required message, label, min length, max length)
PRODUCT_TEXT_RULES = {
    "name": ("Product name is required", "Product name", 3, 100),
    "category": ("Product category is required", "Category", 2, 50),
}
VARIANT_TEXT_RULES = {
    "color": ("Variant color is required", "Color", 2, 50),
    "size": ("Variant size is required", "Size", 1, 20),
}
STUDENT_TEXT_RULES = {
    "name": ("Student name is required", "Name", 2, 100),
    "course": ("Course is required", "Course", 2, 100),
}

# Upper bound of a 32-bit INTEGER column
MAX_STOCK = 2**31 - 1
MIN_AGE = 1
MAX_AGE = 150


def json_body():
    """The request's JSON object, or ``{}`` when missing or not an object."""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def clean_text(value, rule):
    required_msg, label, min_len, max_len = rule
    if value is None:
        raise ValueError(required_msg)
    if not isinstance(value, str):
        raise ValueError(f"{label} must be a string")
    value = value.strip()
    if len(value) < min_len:
        unit = "character" if min_len == 1 else "characters"
        raise ValueError(f"{label} must be at least {min_len} {unit} long")
    if len(value) > max_len:
        raise ValueError(f"{label} cannot exceed {max_len} characters")
    return value


def clean_number(value, required_msg, label, integer=False):
    if value is None:
        raise ValueError(required_msg)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{label} must be a number")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"{label} must be a finite number")
        if integer:
            if not value.is_integer():
                raise ValueError(f"{label} must be a whole number")
            value = int(value)
    return value


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------

class VariantPayload(BaseModel):
    color: str = Field(default=None, validate_default=True)
    size: str = Field(default=None, validate_default=True)
    stock: int = Field(default=None, validate_default=True)

    @field_validator("color", "size", mode="before")
    @classmethod
    def _text(cls, v, info):
        return clean_text(v, VARIANT_TEXT_RULES[info.field_name])

    @field_validator("stock", mode="before")
    @classmethod
    def _stock(cls, v):
        if v is None:
            return 0
        v = clean_number(v, "Stock quantity is required", "Stock", integer=True)
        if v < 0:
            raise ValueError("Stock cannot be negative")
        if v > MAX_STOCK:
            raise ValueError(f"Stock cannot exceed {MAX_STOCK}")
        return v


class ProductPayload(BaseModel):
    """Full product document as accepted on create."""

    name: str = Field(default=None, validate_default=True)
    price: float = Field(default=None, validate_default=True)
    category: str = Field(default=None, validate_default=True)
    variants: List[VariantPayload] = Field(default=None, validate_default=True)

    @field_validator("name", "category", mode="before")
    @classmethod
    def _text(cls, v, info):
        return clean_text(v, PRODUCT_TEXT_RULES[info.field_name])

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, v):
        v = clean_number(v, "Product price is required", "Price")
        if v < 0:
            raise ValueError("Price cannot be negative")
        try:
            return float(v)
        except OverflowError:
            raise ValueError("Price must be a finite number") from None

    @field_validator("variants", mode="before")
    @classmethod
    def _variants(cls, v):
        if v is None:
            return []
        if not isinstance(v, list):
            raise ValueError("Variants must be a list")
        if not all(isinstance(item, dict) for item in v):
            raise ValueError("Each variant must be an object")
        return v


class ProductUpdatePayload(ProductPayload):
    """Partial update: only fields the client really set are validated.

    ``name`` and ``category`` count only when non-empty and ``variants`` only
    when it is a list; ``price`` counts whenever the key is sent, so an
    explicit null is rejected.
    """

    name: Optional[str] = None
    price: Optional[float] = None
    category: Optional[str] = None
    variants: Optional[List[VariantPayload]] = None

    @model_validator(mode="before")
    @classmethod
    def _drop_unset(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in ("name", "category"):
            if not data.get(key):
                data.pop(key, None)
        if not isinstance(data.get("variants"), list):
            data.pop("variants", None)
        return data


# ---------------------------------------------------------------------------
# Students
# ---------------------------------------------------------------------------

class StudentPayload(BaseModel):
    name: str = Field(default=None, validate_default=True)
    age: int = Field(default=None, validate_default=True)
    course: str = Field(default=None, validate_default=True)

    @field_validator("name", "course", mode="before")
    @classmethod
    def _text(cls, v, info):
        return clean_text(v, STUDENT_TEXT_RULES[info.field_name])

    @field_validator("age", mode="before")
    @classmethod
    def _age(cls, v):
        v = clean_number(v, "Age is required", "Age", integer=True)
        if v < MIN_AGE:
            raise ValueError(f"Age must be at least {MIN_AGE}")
        if v > MAX_AGE:
            raise ValueError(f"Age cannot exceed {MAX_AGE}")
        return v


class StudentUpdatePayload(StudentPayload):
    """Partial update: empty or zero values leave the field as it is."""

    name: Optional[str] = None
    age: Optional[int] = None
    course: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _drop_unset(cls, data):
        if not isinstance(data, dict):
            return data
        return {k: v for k, v in data.items() if v}


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class Envelope(BaseModel):
    """``{message, ...}`` response body plus its status code."""

    message: str
    status: int = 200
    data: dict = Field(default_factory=dict)

    def as_response(self):
        return {"message": self.message, **self.data}, self.status


def listing(key, items, **extra):
    """``{count, <key>: [...]}`` body for collection reads."""
    return {"count": len(items), **extra, key: items}
