import logging
from datetime import date, datetime, time
from decimal import Decimal
from enum import StrEnum, unique
from fractions import Fraction
from types import MappingProxyType
from typing import Any, Final

from treemap.config import settings
from treemap.exceptions import UnresolvableOrderingError
from treemap.typings import AnyComparator

__author__ = "xbhel"
__email__ = "xbhel@outlook.com"


logger = logging.getLogger(__name__)
logger.setLevel(settings.log_level)


@unique
class KeyKind(StrEnum):
    """
    The closed set of key kinds that can be ordered without an explicit comparator.
    """

    NUMBER = "number"
    STRING = "string"
    INTEGER = "integer"
    DATETIME = "datetime"


def _natural(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def compare_none(a: Any, b: Any) -> int:
    """Placeholder used until the first key fixes the real ordering."""
    return 0


def compare_numbers(a: float | Decimal | Fraction, b: float | Decimal | Fraction) -> int:
    return _natural(a, b)


def compare_strings(a: str, b: str) -> int:
    return _natural(a, b)


def compare_integers(a: int, b: int) -> int:
    return _natural(a, b)


def compare_datetimes(a: date | time, b: date | time) -> int:
    return _natural(a, b)


COMPARATORS: Final[MappingProxyType[KeyKind, AnyComparator]] = MappingProxyType(
    {
        KeyKind.NUMBER: compare_numbers,
        KeyKind.STRING: compare_strings,
        KeyKind.INTEGER: compare_integers,
        KeyKind.DATETIME: compare_datetimes,
    }
)


def key_kind_of(value: object) -> KeyKind:
    """
    Classify a key into one of the supported kinds.

    Raises:
        UnresolvableOrderingError: If the key is none of the supported kinds.
    """
    match value:
        # bool is an int subclass but is not an orderable key kind
        case bool():
            pass
        case int():
            return KeyKind.INTEGER
        case float() | Decimal() | Fraction():
            return KeyKind.NUMBER
        case str():
            return KeyKind.STRING
        case datetime() | date() | time():
            return KeyKind.DATETIME

    logger.debug("No built-in ordering for key of type %s", type(value).__qualname__)
    raise UnresolvableOrderingError(type(value))


def comparator_for(kind: KeyKind) -> AnyComparator:
    return COMPARATORS[kind]


def resolve_comparator(value: object) -> AnyComparator:
    """
    Pick the built-in ascending comparator for the runtime type of ``value``.

    Example::

        cmp = resolve_comparator("b")
        cmp("a", "b")  # -1
        resolve_comparator(object())
            # UnresolvableOrderingError: Cannot sort keys of type 'object'. ...
    """
    kind = key_kind_of(value)
    logger.debug("Resolved %s comparator from key %r", kind, value)
    return comparator_for(kind)
