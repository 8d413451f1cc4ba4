"""Partial-update policy for product columns.

An update only considers the fields present in the request. Each known column
has a kind; a value that does not fit its column's kind is dropped from the
patch without an error, and unknown fields are dropped the same way. The
database is never asked to coerce a rejected value.
"""

import math
from collections.abc import Mapping
from enum import Enum
from typing import Any


class FieldKind(str, Enum):
    SLUG = "slug"  # non-empty string, stored trimmed
    REQUIRED_TEXT = "required_text"  # non-empty string; "" is ignored
    TEXT = "text"  # any string, or null
    NUMBER = "number"  # int/float only; numeric strings are ignored
    BOOLEAN = "boolean"
    TEXT_LIST = "text_list"
    MAPPING = "mapping"


PRODUCT_FIELD_KINDS: dict[str, FieldKind] = {
    "slug": FieldKind.SLUG,
    "title": FieldKind.REQUIRED_TEXT,
    "description": FieldKind.TEXT,
    "condition": FieldKind.TEXT,
    "category": FieldKind.TEXT,
    "brand": FieldKind.TEXT,
    "payee_email": FieldKind.TEXT,
    "checkout_link": FieldKind.TEXT,
    "currency": FieldKind.TEXT,
    "price": FieldKind.NUMBER,
    "review_count": FieldKind.NUMBER,
    "in_stock": FieldKind.BOOLEAN,
    "is_featured": FieldKind.BOOLEAN,
    "images": FieldKind.TEXT_LIST,
    "meta": FieldKind.MAPPING,
}


def accepts(kind: FieldKind, value: Any) -> bool:
    """Whether ``value`` may be written to a column of ``kind``."""
    if kind in (FieldKind.SLUG, FieldKind.REQUIRED_TEXT):
        return isinstance(value, str) and bool(value.strip())
    if kind is FieldKind.TEXT:
        return value is None or isinstance(value, str)
    if kind is FieldKind.NUMBER:
        # bool is an int subclass but never a price
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        try:
            return math.isfinite(value)
        except OverflowError:
            return False
    if kind is FieldKind.BOOLEAN:
        return isinstance(value, bool)
    if kind is FieldKind.TEXT_LIST:
        return isinstance(value, list) and all(isinstance(item, str) for item in value)
    if kind is FieldKind.MAPPING:
        return isinstance(value, Mapping)
    return False


def build_update_patch(
    updates: Mapping[str, Any],
    field_kinds: Mapping[str, FieldKind] = PRODUCT_FIELD_KINDS,
) -> dict[str, Any]:
    """Keep only the fields of ``updates`` that the policy accepts."""
    patch: dict[str, Any] = {}
    for field, value in updates.items():
        kind = field_kinds.get(field)
        if kind is None or not accepts(kind, value):
            continue
        if kind is FieldKind.SLUG:
            value = value.strip()
        elif kind is FieldKind.MAPPING:
            value = dict(value)
        patch[field] = value
    return patch
