"""Query expression tree and its wire encoding.

An expression is a tree of immutable nodes. Each node serializes to one JSON
array whose first element is the term name, e.g.

    >>> expr = allof_expression(
    ...     type_expression("f"),
    ...     anyof_expression(suffix_expression("py"), suffix_expression("pyi")),
    ... )
    >>> expr.to_json()
    ['allof', ['type', 'f'], ['anyof', ['suffix', 'py'], ['suffix', 'pyi']]]

The payload-free terms (true, false, empty, exists) are module constants;
their constructors always return the same object. Every other constructor
builds a new node and checks its arguments up front, raising ValueError or
TypeError on misuse.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Iterator, List, Sequence, Tuple, Union


class ExpressionType(Enum):
    """Expression terms; each value is the term name on the wire."""

    ALLOF = "allof"
    ANYOF = "anyof"
    NOT = "not"
    TRUE = "true"
    FALSE = "false"
    SINCE = "since"
    SUFFIX = "suffix"
    MATCH = "match"
    IMATCH = "imatch"
    PCRE = "pcre"
    IPCRE = "ipcre"
    NAME = "name"
    INAME = "iname"
    TYPE = "type"
    EMPTY = "empty"
    EXISTS = "exists"


class ClockSpec(Enum):
    """Which clock or timestamp a since term compares against."""

    NONE = None
    OCLOCK = "oclock"
    MTIME = "mtime"
    CTIME = "ctime"


class Basename(Enum):
    """Whether a name or match term applies to the basename or whole path."""

    NONE = None
    BASENAME = "basename"
    WHOLENAME = "wholename"


UNION_TYPES = frozenset({ExpressionType.ALLOF, ExpressionType.ANYOF})
MATCH_TYPES = frozenset({
    ExpressionType.MATCH,
    ExpressionType.IMATCH,
    ExpressionType.PCRE,
    ExpressionType.IPCRE,
})
NAME_TYPES = frozenset({ExpressionType.NAME, ExpressionType.INAME})
CONSTANT_TYPES = frozenset({
    ExpressionType.TRUE,
    ExpressionType.FALSE,
    ExpressionType.EMPTY,
    ExpressionType.EXISTS,
})


def _require_string(value: Any, what: str) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{what} must be a string, got {type(value).__name__}")
    if not value:
        raise ValueError(f"{what} must not be empty")


def _require_expression(value: Any) -> None:
    if not isinstance(value, Expression):
        raise TypeError(f"expected an Expression, got {type(value).__name__}")


class Expression(ABC):
    """Base class for all expression nodes."""

    type: ExpressionType

    @abstractmethod
    def arguments(self) -> List[Any]:
        """JSON values following the term name in the wire array."""

    def children(self) -> Tuple["Expression", ...]:
        return ()

    def to_json(self) -> List[Any]:
        return [self.type.value, *self.arguments()]

    def walk(self) -> Iterator["Expression"]:
        """Yield every node of the tree, children before their parent."""
        for child in self.children():
            yield from child.walk()
        yield self


@dataclass(frozen=True)
class ConstantExpression(Expression):
    type: ExpressionType

    def __post_init__(self):
        if self.type not in CONSTANT_TYPES:
            raise ValueError(f"{self.type.value} is not a constant term")

    def arguments(self) -> List[Any]:
        return []


@dataclass(frozen=True)
class UnionExpression(Expression):
    """allof / anyof over one or more clauses."""

    type: ExpressionType
    clauses: Tuple[Expression, ...]

    def __post_init__(self):
        if self.type not in UNION_TYPES:
            raise ValueError(f"{self.type.value} is not allof or anyof")
        clauses = tuple(self.clauses)
        if not clauses:
            raise ValueError(f"{self.type.value} requires at least one clause")
        for clause in clauses:
            _require_expression(clause)
        object.__setattr__(self, "clauses", clauses)

    def children(self) -> Tuple[Expression, ...]:
        return self.clauses

    def arguments(self) -> List[Any]:
        return [clause.to_json() for clause in self.clauses]


@dataclass(frozen=True)
class NotExpression(Expression):
    type: ClassVar[ExpressionType] = ExpressionType.NOT

    clause: Expression

    def __post_init__(self):
        _require_expression(self.clause)

    def children(self) -> Tuple[Expression, ...]:
        return (self.clause,)

    def arguments(self) -> List[Any]:
        return [self.clause.to_json()]


@dataclass(frozen=True)
class SinceExpression(Expression):
    """Changed since a clock string or an integer unix timestamp."""

    type: ClassVar[ExpressionType] = ExpressionType.SINCE

    value: Union[str, int]
    clockspec: ClockSpec = ClockSpec.NONE

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, (str, int)):
            raise TypeError(
                f"since value must be a clock string or an int timestamp, "
                f"got {type(self.value).__name__}"
            )
        if isinstance(self.value, str):
            _require_string(self.value, "since clock")
        if not isinstance(self.clockspec, ClockSpec):
            raise TypeError("clockspec must be a ClockSpec")

    def arguments(self) -> List[Any]:
        args: List[Any] = [self.value]
        if self.clockspec is not ClockSpec.NONE:
            args.append(self.clockspec.value)
        return args


@dataclass(frozen=True)
class SuffixExpression(Expression):
    type: ClassVar[ExpressionType] = ExpressionType.SUFFIX

    suffix: str

    def __post_init__(self):
        _require_string(self.suffix, "suffix")

    def arguments(self) -> List[Any]:
        return [self.suffix]


@dataclass(frozen=True)
class MatchExpression(Expression):
    """match / imatch (glob) and pcre / ipcre (regex) terms."""

    type: ExpressionType
    pattern: str
    basename: Basename = Basename.NONE

    def __post_init__(self):
        if self.type not in MATCH_TYPES:
            raise ValueError(f"{self.type.value} is not a match term")
        _require_string(self.pattern, f"{self.type.value} pattern")
        if not isinstance(self.basename, Basename):
            raise TypeError("basename must be a Basename")

    def arguments(self) -> List[Any]:
        args: List[Any] = [self.pattern]
        if self.basename is not Basename.NONE:
            args.append(self.basename.value)
        return args


@dataclass(frozen=True)
class NameExpression(Expression):
    """name / iname: exact match against one or more candidates."""

    type: ExpressionType
    names: Tuple[str, ...]
    basename: Basename = Basename.NONE

    def __post_init__(self):
        if self.type not in NAME_TYPES:
            raise ValueError(f"{self.type.value} is not name or iname")
        if isinstance(self.names, str):
            raise TypeError("names must be a sequence of strings")
        names = tuple(self.names)
        if not names:
            raise ValueError(f"{self.type.value} requires at least one name")
        for name in names:
            _require_string(name, f"{self.type.value} candidate")
        if not isinstance(self.basename, Basename):
            raise TypeError("basename must be a Basename")
        object.__setattr__(self, "names", names)

    def arguments(self) -> List[Any]:
        # a single candidate goes out as a bare string
        args: List[Any] = [self.names[0] if len(self.names) == 1 else list(self.names)]
        if self.basename is not Basename.NONE:
            args.append(self.basename.value)
        return args


@dataclass(frozen=True)
class TypeExpression(Expression):
    """File type by single character: b c d f p l s D."""

    type: ClassVar[ExpressionType] = ExpressionType.TYPE

    type_char: str

    def __post_init__(self):
        if not isinstance(self.type_char, str) or len(self.type_char) != 1:
            raise ValueError(f"type expects a single character, got {self.type_char!r}")

    def arguments(self) -> List[Any]:
        return [self.type_char]


TRUE = ConstantExpression(ExpressionType.TRUE)
FALSE = ConstantExpression(ExpressionType.FALSE)
EMPTY = ConstantExpression(ExpressionType.EMPTY)
EXISTS = ConstantExpression(ExpressionType.EXISTS)


def serialize_expression(expr: Expression) -> List[Any]:
    """Encode an expression tree as its JSON wire form."""
    _require_expression(expr)
    return expr.to_json()


def allof_expression(*clauses: Expression) -> UnionExpression:
    return UnionExpression(ExpressionType.ALLOF, clauses)


def anyof_expression(*clauses: Expression) -> UnionExpression:
    return UnionExpression(ExpressionType.ANYOF, clauses)


def not_expression(clause: Expression) -> NotExpression:
    return NotExpression(clause)


def true_expression() -> ConstantExpression:
    return TRUE


def false_expression() -> ConstantExpression:
    return FALSE


def empty_expression() -> ConstantExpression:
    return EMPTY


def exists_expression() -> ConstantExpression:
    return EXISTS


def since_expression(clock: str, clockspec: ClockSpec = ClockSpec.NONE) -> SinceExpression:
    """Files changed since a clock string such as "c:1234:5"."""
    _require_string(clock, "since clock")
    return SinceExpression(clock, clockspec)


def since_time_expression(
    time: Union[int, datetime],
    clockspec: ClockSpec = ClockSpec.NONE,
) -> SinceExpression:
    """Files changed since a unix timestamp (int seconds or datetime)."""
    if isinstance(time, datetime):
        time = int(time.timestamp())
    if isinstance(time, bool) or not isinstance(time, int):
        raise TypeError(f"since time must be an int or datetime, got {type(time).__name__}")
    return SinceExpression(time, clockspec)


def suffix_expression(suffix: str) -> SuffixExpression:
    return SuffixExpression(suffix)


def match_expression(pattern: str, basename: Basename = Basename.NONE) -> MatchExpression:
    return MatchExpression(ExpressionType.MATCH, pattern, basename)


def imatch_expression(pattern: str, basename: Basename = Basename.NONE) -> MatchExpression:
    return MatchExpression(ExpressionType.IMATCH, pattern, basename)


def pcre_expression(pattern: str, basename: Basename = Basename.NONE) -> MatchExpression:
    return MatchExpression(ExpressionType.PCRE, pattern, basename)


def ipcre_expression(pattern: str, basename: Basename = Basename.NONE) -> MatchExpression:
    return MatchExpression(ExpressionType.IPCRE, pattern, basename)


def _as_names(names: Union[str, Sequence[str]]) -> Tuple[str, ...]:
    if isinstance(names, str):
        return (names,)
    return tuple(names)


def name_expression(
    names: Union[str, Sequence[str]],
    basename: Basename = Basename.NONE,
) -> NameExpression:
    return NameExpression(ExpressionType.NAME, _as_names(names), basename)


def iname_expression(
    names: Union[str, Sequence[str]],
    basename: Basename = Basename.NONE,
) -> NameExpression:
    return NameExpression(ExpressionType.INAME, _as_names(names), basename)


def type_expression(type_char: str) -> TypeExpression:
    return TypeExpression(type_char)
