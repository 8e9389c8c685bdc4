"""Value coercion for leaf elements.

Turns the raw values of one element node into their interchange form:

- IS values become integers, DS values become floats. Parsing is
  all-or-nothing: if any value in the element fails to parse, the raw
  strings are returned unchanged.
- OB/OW values are dropped when binary output is suppressed.
- Everything else passes through as a list.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from typing import Any, Callable

from dicom_projector.utils.logger import get_logger

from .constants import (
    BULK_BINARY_VRS,
    INT64_MAX,
    INT64_MIN,
    VR_DECIMAL_STRING,
    VR_INTEGER_STRING,
)
from .nodes import Node
from .types import OMITTED

logger = get_logger(__name__)

# DICOM pads string values with spaces; nothing else is tolerated
_PADDING = " \x00"
_INTEGER = re.compile(r"^[+-]?[0-9]+$")
_DECIMAL = re.compile(r"^[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")


def parse_int_strings(values: Iterable[Any]) -> list[int]:
    """Parse every value as a signed 64-bit base-10 integer.

    Raises:
        ValueError: On the first value that is not a valid integer

    """
    parsed: list[int] = []
    for value in values:
        if isinstance(value, int) and not isinstance(value, bool):
            number = value
        elif isinstance(value, str) and _INTEGER.match(value.strip(_PADDING)):
            number = int(value.strip(_PADDING))
        else:
            raise ValueError(f"invalid integer string: {value!r}")

        if not INT64_MIN <= number <= INT64_MAX:
            raise ValueError(f"integer out of range: {value!r}")
        parsed.append(number)
    return parsed


def parse_float_strings(values: Iterable[Any]) -> list[float]:
    """Parse every value as a finite decimal number.

    Raises:
        ValueError: On the first value that is not a valid decimal

    """
    parsed: list[float] = []
    for value in values:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            number = float(value)
        elif isinstance(value, str) and _DECIMAL.match(value.strip(_PADDING)):
            number = float(value.strip(_PADDING))
        else:
            raise ValueError(f"invalid decimal string: {value!r}")

        if not math.isfinite(number):
            raise ValueError(f"decimal not finite: {value!r}")
        parsed.append(number)
    return parsed


def coerce_value(node: Node, omit_binary_values: bool = False) -> Any:
    """Project the raw values of an element node.

    Args:
        node: Element node to convert
        omit_binary_values: Suppress OB/OW values

    Returns:
        List of values, or OMITTED when the value is suppressed

    """
    if node.vr == VR_INTEGER_STRING:
        return _parse_or_fallback(node, parse_int_strings)

    if node.vr == VR_DECIMAL_STRING:
        return _parse_or_fallback(node, parse_float_strings)

    if node.vr in BULK_BINARY_VRS and omit_binary_values:
        return OMITTED

    return list(node.value)


def _parse_or_fallback(
    node: Node, parse: Callable[[Iterable[Any]], list[Any]]
) -> list[Any]:
    try:
        return parse(node.value)
    except ValueError as e:
        logger.debug("numeric_fallback", tag=node.key, vr=node.vr, reason=str(e))
        return list(node.value)
