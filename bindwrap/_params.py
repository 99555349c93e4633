"""
Placeholder parsing and query rewriting.

`parse_params` turns a query and its parameters into a rewritten query and a list of
bind instructions. Named parameter keys may carry a type suffix:
- `<i>`, `<s>`, `<b>` - bind a single value as int, string, or bool
- `[i]`, `[s]`, `[b]` - bind every element of a collection as int, string, or bool.
  The placeholder is replaced with a comma-separated list of indexed placeholders:
  `:id` with `[5, 15]` becomes `:id0,:id1`.

`to_paramstyle` converts a parsed query (`?` or `:name` placeholders) to the
placeholder style of a DB-API driver.
"""

from typing import Any, Callable, Collection, Mapping
from functools import partial
import re

from ._common import BindInstruction, BindType, MalformedParameterName
from ._common import UnsupportedParamstyle

_PARAM_NAME = re.compile(r":?(\w+)(<\w?>|\[\w?\])?", re.ASCII)
_NAMED_PLACEHOLDER = re.compile(r"(?<![:\w]):(\w+)", re.ASCII)
_SQL_SPLITTER = re.compile(
    r"'(?:[^']|'')*'|\"(?:[^\"]|\"\")*\"|--[^\n]*|/\*.*?\*/", re.DOTALL
)
_TYPE_BY_LETTER = {"i": BindType.INT, "b": BindType.BOOL}

PARAMSTYLES = ("qmark", "numeric", "named", "format", "pyformat")


def _adjust_sql(sql: str, propagate_func: Callable[[str], str]) -> str:
    # String literals, quoted identifiers and comments are kept as is
    res_sqls = []
    last_pos = 0
    for mtch in _SQL_SPLITTER.finditer(sql):
        span = mtch.span()
        res_sqls.append(propagate_func(sql[last_pos : span[0]]))
        res_sqls.append(sql[span[0] : span[1]])
        last_pos = span[1]
    if last_pos < len(sql):
        res_sqls.append(propagate_func(sql[last_pos:]))
    return "".join(res_sqls)


def _replace_names(make_placeholder: Callable[[str], str | None], code: str) -> str:
    def _sub(mtch: re.Match) -> str:
        res = make_placeholder(mtch.group(1))
        return mtch.group(0) if res is None else res

    return _NAMED_PLACEHOLDER.sub(_sub, code)


def _replace_qmarks(
    make_placeholder: Callable[[int], str], next_idx_var: list[int], code: str
) -> str:
    split_code = code.split("?")
    code_parts = [split_code[0]]
    for part in split_code[1:]:
        next_idx_var[0] += 1
        code_parts.append(make_placeholder(next_idx_var[0]))
        code_parts.append(part)
    return "".join(code_parts)


def _is_positional(params: Any) -> bool:
    if isinstance(params, Mapping):
        return isinstance(next(iter(params)), int)
    if isinstance(params, str | bytes | bytearray):
        raise TypeError(
            f"Query parameters must be a sequence or a mapping, "
            f"not {type(params).__name__}"
        )
    return True


def _is_flattenable(value: Any) -> bool:
    return (
        isinstance(value, Collection)
        and not isinstance(value, str | bytes | bytearray | Mapping)
        and len(value) > 0
    )


def parse_params(
    query: str, params: Collection | Mapping | None = None
) -> tuple[str, list[BindInstruction]]:
    """
    Parse query parameters and flatten collection values.

    Positional parameters (a list, a tuple, or a mapping with an integer first key)
    are bound by 1-based position as strings, the query is not changed.

    Named parameter keys are `[:]name[<t>|[t]]`, where `t` is `i` (int), `b` (bool),
    or anything else/nothing (string). A non-empty collection under a `[t]` suffix
    is bound element by element and every `:name` placeholder in the query is
    replaced with `:name0,:name1,...`.

    :param query: SQL query with `?` or `:name` placeholders
    :param params: parameters, positional or named
    :return: rewritten query and the list of bind instructions
    :raises MalformedParameterName: a named parameter key does not match the grammar
    """
    if not params:
        return query, []

    if _is_positional(params):
        values = params.values() if isinstance(params, Mapping) else params
        return query, [
            BindInstruction(pos, value, BindType.STR)
            for pos, value in enumerate(values, 1)
        ]

    binds: list[BindInstruction] = []
    expansions: dict[str, str] = {}
    for key, value in params.items():
        mtch = _PARAM_NAME.fullmatch(str(key))
        if mtch is None:
            raise MalformedParameterName(key)
        name, suffix = mtch.groups()
        type_ = BindType.STR
        if suffix:
            type_ = _TYPE_BY_LETTER.get(suffix[1:-1], BindType.STR)
        if suffix and suffix[0] == "[" and _is_flattenable(value):
            tokens = []
            for idx, item in enumerate(value):
                tokens.append(f":{name}{idx}")
                binds.append(BindInstruction(tokens[-1], item, type_))
            # the first parameter with a given name owns its placeholder
            expansions.setdefault(name, ",".join(tokens))
        else:
            binds.append(BindInstruction(f":{name}", value, type_))

    if expansions:
        # One pass, so generated placeholders are never rewritten again
        query = _adjust_sql(
            query, partial(_replace_names, lambda n: expansions.get(n))
        )
    return query, binds


def check_paramstyle(paramstyle: str) -> str:
    if paramstyle not in PARAMSTYLES:
        raise UnsupportedParamstyle(paramstyle)
    return paramstyle


def to_paramstyle(
    query: str, values: Mapping[int | str, Any], paramstyle: str
) -> tuple[str, tuple | dict | None]:
    """
    Convert a parsed query and its bound values to a DB-API paramstyle.

    `values` maps bind tokens (1-based positions or `:name`) to values. Without
    values the query is returned untouched and parameters are None.
    """
    check_paramstyle(paramstyle)
    if not values:
        return query, None
    if paramstyle in ("format", "pyformat"):
        query = query.replace("%", "%%")

    if isinstance(next(iter(values)), int):
        ordered = tuple(values[pos] for pos in sorted(values))
        if paramstyle == "qmark":
            return query, ordered
        if paramstyle == "named":
            return (
                _adjust_sql(query, partial(_replace_qmarks, lambda n: f":_{n}", [0])),
                {f"_{idx}": val for idx, val in enumerate(ordered, 1)},
            )
        if paramstyle == "numeric":
            make_placeholder: Callable[[int], str] = lambda n: f":{n}"  # noqa: E731
        else:
            make_placeholder = lambda n: "%s"  # noqa: E731
        return (
            _adjust_sql(query, partial(_replace_qmarks, make_placeholder, [0])),
            ordered,
        )

    named = {str(token).lstrip(":"): val for token, val in values.items()}
    if paramstyle == "named":
        return query, named
    if paramstyle == "pyformat":
        return (
            _adjust_sql(
                query,
                partial(_replace_names, lambda n: f"%({n})s" if n in named else None),
            ),
            named,
        )

    # Named to positional: one value per placeholder occurrence
    res_params: list[Any] = []
    marker = "?" if paramstyle == "qmark" else "%s"

    def _next_positional(name: str) -> str | None:
        if name not in named:
            return None
        res_params.append(named[name])
        if paramstyle == "numeric":
            return f":{len(res_params)}"
        return marker

    res_sql = _adjust_sql(query, partial(_replace_names, _next_positional))
    return res_sql, tuple(res_params)
