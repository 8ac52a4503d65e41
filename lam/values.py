"""
Answer value model.

An answer is one of a closed set of variants: absent, boolean, number,
text, date, or an ordered list of rows (each row being its own answer map
for a repeating group). Every consumer below matches over all variants.
"""

from __future__ import annotations

import datetime as _dt
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Union

from .errors import LAMUserError

logger = logging.getLogger(__name__)


class AnswerError(LAMUserError):
    """An answer cannot be represented as an AnswerValue."""

    def __init__(self, message: str, name: str = ""):
        prefix = f"{name}: " if name else ""
        super().__init__(prefix + message)
        self.name = name


@dataclass(frozen=True)
class AnswerValue:
    """Base class for all answer variants."""
    pass


@dataclass(frozen=True)
class Absent(AnswerValue):
    """No answer supplied."""
    pass


@dataclass(frozen=True)
class BoolValue(AnswerValue):
    value: bool


@dataclass(frozen=True)
class NumberValue(AnswerValue):
    value: Union[int, float]


@dataclass(frozen=True)
class TextValue(AnswerValue):
    value: str


@dataclass(frozen=True)
class DateValue(AnswerValue):
    value: Union[_dt.date, _dt.datetime]


@dataclass(frozen=True)
class RowListValue(AnswerValue):
    """Rows of a repeating group, in document order."""
    rows: List[AnswerMap] = field(default_factory=list)


# Answers for one rendering scope (root answers or one repeating row)
AnswerMap = Dict[str, AnswerValue]

ABSENT = Absent()


def to_value(obj: Any, name: str = "") -> AnswerValue:
    """
    Coerce a plain Python object into an AnswerValue.

    Accepts what YAML/JSON loaders and callers usually hand over:
    None, bool, int, float, str, date/datetime, a list of mappings
    (rows) or a single mapping (one row). A list holding anything but
    mappings is kept as a present value without rows, so it is truthy
    and repeats over it render nothing.

    Raises:
        AnswerError: if the object has no answer representation
    """
    if isinstance(obj, AnswerValue):
        return obj
    if obj is None:
        return ABSENT
    # bool is a subclass of int, check it first
    if isinstance(obj, bool):
        return BoolValue(obj)
    if isinstance(obj, (int, float)):
        return NumberValue(obj)
    if isinstance(obj, str):
        return TextValue(obj)
    if isinstance(obj, (_dt.date, _dt.datetime)):
        return DateValue(obj)
    if isinstance(obj, Mapping):
        return RowListValue([to_answer_map(obj, scope=name)])
    if isinstance(obj, (list, tuple)):
        if not all(isinstance(item, Mapping) for item in obj):
            logger.debug(f"{name or 'answer'}: list without rows, repeats over it are empty")
            return RowListValue([])
        return RowListValue([
            to_answer_map(item, scope=f"{name}[{idx}]") for idx, item in enumerate(obj)
        ])
    raise AnswerError(f"unsupported answer type {type(obj).__name__}", name)


def to_answer_map(mapping: Mapping[Any, Any], scope: str = "") -> AnswerMap:
    """Coerce every entry of a plain mapping into an AnswerMap."""
    result: AnswerMap = {}
    for key, raw in mapping.items():
        if not isinstance(key, str):
            raise AnswerError(f"answer names must be strings, got {key!r}", scope)
        path = f"{scope}.{key}" if scope else key
        result[key] = to_value(raw, path)
    return result


def is_truthy(value: AnswerValue) -> bool:
    """Truthiness used by conditional sections."""
    if isinstance(value, Absent):
        return False
    if isinstance(value, BoolValue):
        return value.value
    if isinstance(value, TextValue):
        return value.value != ""
    if isinstance(value, NumberValue):
        return value.value != 0
    if isinstance(value, (DateValue, RowListValue)):
        return True
    raise TypeError(f"Not an answer value: {value!r}")


def to_text(value: AnswerValue) -> str:
    """Canonical text form used for variable substitution."""
    if isinstance(value, Absent):
        return ""
    if isinstance(value, BoolValue):
        return "true" if value.value else "false"
    if isinstance(value, NumberValue):
        return str(value.value)
    if isinstance(value, TextValue):
        return value.value
    if isinstance(value, DateValue):
        # YYYY-MM-DD for dates, full ISO 8601 for datetimes
        return value.value.isoformat()
    if isinstance(value, RowListValue):
        # rows have no scalar form
        return ""
    raise TypeError(f"Not an answer value: {value!r}")


def as_rows(value: AnswerValue) -> List[AnswerMap]:
    """Rows for a repeating group; anything but a row list yields none."""
    if isinstance(value, RowListValue):
        return list(value.rows)
    if isinstance(value, (Absent, BoolValue, NumberValue, TextValue, DateValue)):
        return []
    raise TypeError(f"Not an answer value: {value!r}")


def lookup(answers: Mapping[str, AnswerValue], name: str) -> AnswerValue:
    """Answer for a name, or ABSENT."""
    return answers.get(name, ABSENT)


__all__ = [
    "AnswerError",
    "AnswerValue",
    "Absent",
    "BoolValue",
    "NumberValue",
    "TextValue",
    "DateValue",
    "RowListValue",
    "AnswerMap",
    "ABSENT",
    "to_value",
    "to_answer_map",
    "is_truthy",
    "to_text",
    "as_rows",
    "lookup",
]
