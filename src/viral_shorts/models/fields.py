"""Lenient field types for agent-produced JSON.

Every type here maps a wrong-shape value to its zero value instead of raising,
so any model composed from them validates every JSON value without error.
"""

from __future__ import annotations

import math
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, model_validator


def is_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float))


def as_mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _integer(value: Any) -> int:
    return int(value) if is_integer(value) else 0


def _count(value: Any) -> int:
    # Counts are never negative
    return max(_integer(value), 0)


def _number(value: Any) -> float:
    if not is_number(value):
        return 0.0
    try:
        number = float(value)
    except OverflowError:
        # JSON integers are unbounded
        return 0.0
    return number if math.isfinite(number) else 0.0


def _flag(value: Any) -> bool:
    return value is True


def _optional_text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _optional_flag(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def _optional_integer(value: Any) -> Optional[int]:
    return int(value) if is_integer(value) else None


def _strings(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def sequence_or_empty(value: Any) -> list:
    return value if isinstance(value, list) else []


Text = Annotated[str, BeforeValidator(_text)]
Integer = Annotated[int, BeforeValidator(_integer)]
Count = Annotated[int, BeforeValidator(_count)]
Number = Annotated[float, BeforeValidator(_number)]
StringList = Annotated[list[str], BeforeValidator(_strings)]
Flag = Annotated[bool, BeforeValidator(_flag)]
OptionalText = Annotated[Optional[str], BeforeValidator(_optional_text)]
OptionalFlag = Annotated[Optional[bool], BeforeValidator(_optional_flag)]
OptionalInteger = Annotated[Optional[int], BeforeValidator(_optional_integer)]


class LenientModel(BaseModel):
    """Base for agent-facing records: any non-object input validates as ``{}``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _coerce_mapping(cls, data: Any) -> Any:
        if isinstance(data, cls):
            return data
        return as_mapping(data)
