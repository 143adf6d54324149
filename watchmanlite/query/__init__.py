"""Query expressions, result fields and decoded results."""

from watchmanlite.query.expression import (
    EMPTY,
    EXISTS,
    FALSE,
    TRUE,
    Basename,
    ClockSpec,
    Expression,
    ExpressionType,
    allof_expression,
    anyof_expression,
    empty_expression,
    exists_expression,
    false_expression,
    iname_expression,
    imatch_expression,
    ipcre_expression,
    match_expression,
    name_expression,
    not_expression,
    pcre_expression,
    serialize_expression,
    since_expression,
    since_time_expression,
    suffix_expression,
    true_expression,
    type_expression,
)
from watchmanlite.query.fields import ALL_FIELDS, Field, fields_to_json, parse_fields
from watchmanlite.query.results import FileStat, QueryResult, WatchList

__all__ = [
    "EMPTY",
    "EXISTS",
    "FALSE",
    "TRUE",
    "Basename",
    "ClockSpec",
    "Expression",
    "ExpressionType",
    "allof_expression",
    "anyof_expression",
    "empty_expression",
    "exists_expression",
    "false_expression",
    "iname_expression",
    "imatch_expression",
    "ipcre_expression",
    "match_expression",
    "name_expression",
    "not_expression",
    "pcre_expression",
    "serialize_expression",
    "since_expression",
    "since_time_expression",
    "suffix_expression",
    "true_expression",
    "type_expression",
    "ALL_FIELDS",
    "Field",
    "fields_to_json",
    "parse_fields",
    "FileStat",
    "QueryResult",
    "WatchList",
]
