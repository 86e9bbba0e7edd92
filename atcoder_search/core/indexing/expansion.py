"""
Field expansion.

Search documents index one logical field under several physical names,
one per analyzer: ``problem_title`` is also indexed as
``problem_title__text_ja`` and ``problem_title__text_en``. Document models
declare the extra names next to the field and ``expand`` produces the flat
engine document.

Dependencies: pydantic
System role: Record to engine document conversion
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

SUFFIXES_KEY = "suffixes"
SOLR_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

Document = dict[str, Any]


def suffix(*names: str, **kwargs: Any) -> Any:
    """
    Declare the analyzer suffixes a field is duplicated under.

    Args:
        *names: Suffixes; each produces a ``<field>__<suffix>`` entry
        **kwargs: Forwarded to ``pydantic.Field``

    Returns:
        FieldInfo carrying the suffix list

    Usage:
        class ProblemDocument(BaseModel):
            problem_title: str = suffix("text_ja", "text_en")
    """
    return Field(json_schema_extra={SUFFIXES_KEY: list(names)}, **kwargs)


def field_suffixes(model: type[BaseModel], name: str) -> list[str]:
    """Return the suffixes declared on a model field (empty when none)."""
    extra = model.model_fields[name].json_schema_extra
    if isinstance(extra, dict):
        return list(extra.get(SUFFIXES_KEY) or [])
    return []


def to_solr_datetime(value: datetime) -> str:
    """Format a datetime as UTC with second precision. Naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(SOLR_DATETIME_FORMAT)


def _json_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return to_solr_datetime(value)
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (list, tuple)):
        return [_json_value(v) for v in value]
    return value


def expand(record: BaseModel) -> Document:
    """
    Build the engine document for a record.

    Fields are emitted in declaration order. A suffixed field is emitted
    under its own name first, then once per suffix with an identical value.

    Args:
        record: Document model instance

    Returns:
        dict: Flat field name to JSON-compatible value mapping
    """
    model = type(record)
    document: Document = {}
    for name in model.model_fields:
        value = _json_value(getattr(record, name))
        document[name] = value
        for suffix_name in field_suffixes(model, name):
            document[f"{name}__{suffix_name}"] = (
                list(value) if isinstance(value, list) else value
            )
    return document
