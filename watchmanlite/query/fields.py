"""Per-file attributes a query can ask the daemon to return."""

from enum import IntFlag
from functools import reduce
from operator import or_
from typing import Iterable, List, Union


class Field(IntFlag):
    """
    Result fields, low bit to high.

    The wire name of each member is its lowercased name.
    """

    NAME = 1 << 0
    EXISTS = 1 << 1
    CCLOCK = 1 << 2
    OCLOCK = 1 << 3
    CTIME = 1 << 4
    CTIME_MS = 1 << 5
    CTIME_US = 1 << 6
    CTIME_NS = 1 << 7
    CTIME_F = 1 << 8
    MTIME = 1 << 9
    MTIME_MS = 1 << 10
    MTIME_US = 1 << 11
    MTIME_NS = 1 << 12
    MTIME_F = 1 << 13
    SIZE = 1 << 14
    UID = 1 << 15
    GID = 1 << 16
    INO = 1 << 17
    DEV = 1 << 18
    NLINK = 1 << 19
    NEW = 1 << 20

    @property
    def wire_name(self) -> str:
        return self.name.lower()


# Single-bit members in ascending bit order
FIELD_ORDER = tuple(sorted(Field.__members__.values(), key=int))

ALL_FIELDS = reduce(or_, FIELD_ORDER)


def fields_to_json(fields: Union[Field, int]) -> List[str]:
    """
    List the wire names of the fields set in a mask.

    Args:
        fields: Field flags or a plain int bitmask

    Returns:
        Field names in ascending bit order; bits above NEW are ignored
    """
    mask = int(fields)
    return [field.wire_name for field in FIELD_ORDER if mask & field]


def parse_fields(names: Iterable[str]) -> Field:
    """
    Build a mask from wire names, e.g. ["name", "size"].

    Raises:
        ValueError: If a name is not a known field
    """
    mask = Field(0)
    for name in names:
        member = Field.__members__.get(name.strip().upper())
        if member is None:
            known = ", ".join(field.wire_name for field in FIELD_ORDER)
            raise ValueError(f"Unknown field: {name!r}. Available fields: {known}")
        mask |= member
    return mask
