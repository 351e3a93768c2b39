"""JSON document values.

A :class:`Document` wraps one parsed JSON value and tags it with its
:class:`DocumentType`. Construction validates and copies the value, so a
document is always representable as UTF-8 JSON text and never shares
mutable containers with the caller.
"""
import copy
import enum
import json
import math
from typing import Any, Dict, Iterator, List, Tuple, Union

from ..status import status

JsonValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]

INDENT = 2

# Deeper values are rejected; keeps copying and serialising well inside the recursion limit
MAX_DEPTH = 128


class DocumentType(enum.Enum):
    """The JSON kinds a :class:`Document` can hold."""
    Null = enum.auto()
    Boolean = enum.auto()
    Number = enum.auto()
    String = enum.auto()
    Array = enum.auto()
    Object = enum.auto()


class _ShapeError(ValueError):
    """A value JSON cannot represent. Converted to a status exception by the caller."""


def _check_string(value: str) -> str:
    try:
        value.encode('utf-8')
    except UnicodeEncodeError:
        raise _ShapeError(f'{value!r} contains a lone surrogate and cannot be written as UTF-8.') from None
    return value


def _normalize(value: Any, depth: int = 0) -> JsonValue:
    """Return a validated copy of value.

    Raises:
        _ShapeError: If value contains anything JSON cannot represent.
    """
    if depth > MAX_DEPTH:
        raise _ShapeError(f'Values nested deeper than {MAX_DEPTH} levels are not supported.')

    match value:
        case None | bool():
            return value
        case str():
            return _check_string(value)
        case int():
            return int(value)
        case float():
            if not math.isfinite(value):
                raise _ShapeError(f'{value!r} is not a JSON number.')
            return float(value)
        case list() | tuple():
            result = []
            for v in value:
                result.append(_normalize(v, depth + 1))
            return result
        case dict():
            result = {}
            for k, v in value.items():
                if not isinstance(k, str):
                    raise _ShapeError(f'Object key {k!r} is not a string.')
                result[_check_string(k)] = _normalize(v, depth + 1)
            return result
        case _:
            raise _ShapeError(f'{type(value).__name__} is not a JSON value.')


def _type_of(value: JsonValue) -> DocumentType:
    match value:
        case None:
            return DocumentType.Null
        case bool():
            return DocumentType.Boolean
        case int() | float():
            return DocumentType.Number
        case str():
            return DocumentType.String
        case list():
            return DocumentType.Array
        case dict():
            return DocumentType.Object


def _reject_constant(name: str) -> None:
    raise ValueError(f'{name} is not valid JSON')


def _parse(text: str) -> JsonValue:
    """Parse and validate JSON text.

    Raises:
        ValueError, TypeError, RecursionError: If the text is not a supported JSON document.
    """
    return _normalize(json.loads(text, parse_constant=_reject_constant))


def check_text(text: str) -> str:
    """Return '' when text would parse as a :class:`Document`, otherwise the reason it would not.

    Unlike :meth:`Document.from_text` nothing is logged or reported.
    """
    try:
        _parse(text)
    except (ValueError, TypeError, RecursionError) as ex:
        return str(ex) or type(ex).__name__
    return ''


class Document:
    """An immutable-by-convention JSON value."""

    __slots__ = ('_value', '_type')

    def __init__(self, value: Any = None) -> None:
        if isinstance(value, Document):
            value = value._value
        try:
            self._value: JsonValue = _normalize(value)
        except _ShapeError as ex:
            raise status.InvalidShapeException(str(ex)) from None
        self._type: DocumentType = _type_of(self._value)

    @classmethod
    def empty_object(cls) -> 'Document':
        return cls({})

    @classmethod
    def from_text(cls, text: str) -> 'Document':
        """Parse JSON text.

        ``NaN`` and ``Infinity`` are rejected, as they are not part of JSON. So are
        strings with lone surrogates and values nested deeper than :data:`MAX_DEPTH`.

        Raises:
            status.InvalidJsonException: If the text is not valid JSON.
        """
        try:
            value = _parse(text)
        except (ValueError, TypeError, RecursionError) as ex:
            raise status.InvalidJsonException(str(ex) or type(ex).__name__) from ex
        return cls(value)

    def to_text(self, indent: int = INDENT) -> str:
        """Return pretty-printed JSON text, keeping object key order."""
        return json.dumps(self._value, indent=indent, ensure_ascii=False, allow_nan=False)

    @property
    def type(self) -> DocumentType:
        return self._type

    @property
    def is_object(self) -> bool:
        return self._type is DocumentType.Object

    @property
    def data(self) -> JsonValue:
        """A deep copy of the plain Python value."""
        return copy.deepcopy(self._value)

    def items(self) -> Iterator[Tuple[str, 'Document']]:
        """Iterate over the entries of an object document, in order.

        Raises:
            status.InvalidShapeException: If the document is not an object.
        """
        if not self.is_object:
            raise status.InvalidShapeException(f'Got a {self._type.name.lower()}.')
        for k, v in self._value.items():
            yield k, Document(v)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Document):
            return self._type is other._type and self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.to_text(indent=None))

    def __repr__(self) -> str:
        text = self.to_text(indent=None)
        if len(text) > 60:
            text = text[:57] + '...'
        return f'<Document type={self._type.name}, {text}>'
