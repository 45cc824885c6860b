"""Field validation for product, variant and student documents.

Two passes exist. The ``require_*`` helpers are the coarse presence checks the
request handlers run first; the ``clean_*`` helpers run the payload models in
:mod:`storeapi.schemas` (trimming, length bounds, numeric bounds) and are
called by the repositories right before anything is written. Both raise
:class:`~storeapi.errors.ValidationError` on the first violated rule and never
touch the database.
"""
import re

from pydantic import ValidationError as PayloadError

from storeapi.errors import ValidationError
from storeapi.schemas import (
    ProductPayload,
    ProductUpdatePayload,
    StudentPayload,
    StudentUpdatePayload,
    VariantPayload,
)

OBJECT_ID_RE = re.compile(r"[0-9a-fA-F]{24}")


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------

def is_valid_object_id(value):
    return isinstance(value, str) and OBJECT_ID_RE.fullmatch(value) is not None


def ensure_object_id(value, message):
    if not is_valid_object_id(value):
        raise ValidationError(message)
    return value


# ---------------------------------------------------------------------------
# Presence checks
# ---------------------------------------------------------------------------

def _absent(value):
    return value is None or value == ""


def require_product_fields(payload):
    """Reject a create payload missing name, price or category.

    Inline variants are checked too, all of them before anything is written.
    """
    if any(_absent(payload.get(f)) for f in ("name", "price", "category")):
        raise ValidationError(
            "Please provide all required fields: name, price, category"
        )
    variants = payload.get("variants")
    if isinstance(variants, list):
        for variant in variants:
            require_variant_fields(
                variant, "Each variant must have color, size, and stock fields"
            )


def require_variant_fields(
    variant, message="Please provide color, size, and stock for the variant"
):
    # stock=0 is a real value; only its absence counts
    if (
        not isinstance(variant, dict)
        or not variant.get("color")
        or not variant.get("size")
        or variant.get("stock") is None
    ):
        raise ValidationError(message)


def require_student_fields(payload):
    if not payload.get("name") or not payload.get("age") or not payload.get("course"):
        raise ValidationError(
            "Please provide all required fields: name, age, course"
        )


# ---------------------------------------------------------------------------
# Schema checks
# ---------------------------------------------------------------------------

def _first_error(exc):
    error = exc.errors()[0]
    cause = error.get("ctx", {}).get("error")
    if cause is not None:
        return str(cause)
    field = ".".join(str(part) for part in error["loc"])
    return f"{field}: {error['msg']}"


def _validate(model, fields):
    try:
        return model.model_validate(fields)
    except PayloadError as e:
        raise ValidationError(_first_error(e)) from e


def clean_variant(fields):
    """Validate one variant sub-document. Missing stock defaults to 0."""
    if not isinstance(fields, dict):
        raise ValidationError("Each variant must be an object")
    return _validate(VariantPayload, fields).model_dump()


def clean_product(fields, partial=False):
    """Validate a product document and return the normalised fields.

    With ``partial=True`` only the fields an update actually sets are checked
    and returned. ``variants``, when present, is a list of variant dicts.
    """
    if not partial:
        return _validate(ProductPayload, fields).model_dump()

    update = _validate(ProductUpdatePayload, fields)
    cleaned = update.model_dump(exclude_unset=True)
    if "variants" in cleaned:
        cleaned["variants"] = [v.model_dump() for v in update.variants]
    return cleaned


def clean_student(fields, partial=False):
    if partial:
        return _validate(StudentUpdatePayload, fields).model_dump(exclude_unset=True)
    return _validate(StudentPayload, fields).model_dump()
