from typing import Type, Any, Callable, Sequence
from dataclasses import is_dataclass, fields
from functools import partial

from ._common import FetchMode


def _decode_bool(val: Any) -> bool | None:
    if val is None:
        return None
    if isinstance(val, str):
        return val not in ("", "0")
    return bool(val)


def _as_is(val: Any) -> Any:
    return val


def _as_is_val(type_: Type, val: Any) -> Any:
    if val is None:
        return None
    if isinstance(val, type_):
        return val
    return type_(val)


def make_scalar_decoder(type_: Type) -> Callable[[Any], Any]:
    if type_ is Any:
        return _as_is
    for ttype in (int, float, str):
        if issubclass(ttype, type_):
            return partial(_as_is_val, ttype)
    if issubclass(bool, type_):
        return _decode_bool
    return _as_is


def make_decoder(row_type: type) -> Callable[[dict], dict]:
    if is_dataclass(row_type):
        fields_mapper: dict[str, Callable] = {
            fld.name: make_scalar_decoder(fld.type) for fld in fields(row_type)
        }

        def _dataclass_decoder(inp: dict) -> dict:
            return {k: fields_mapper.get(k, _as_is)(v) for k, v in inp.items()}

        return _dataclass_decoder

    return _as_is


def make_row_shaper(
    columns: Sequence[str], mode: FetchMode, arg: Any = None
) -> Callable[[Sequence], Any]:
    """
    Make a function that turns a raw driver row into the shape `mode` requires.

    :param columns: column names of the result set
    :param mode: fetch mode
    :param arg: column index for `FetchMode.COLUMN` (0 if None), row type for
    `FetchMode.CLASS`
    """
    if mode is FetchMode.TUPLE:
        return tuple
    if mode is FetchMode.DICT:
        return lambda row: dict(zip(columns, row))
    if mode is FetchMode.COLUMN:
        col_idx = 0 if arg is None else arg
        return lambda row: row[col_idx]
    if mode is FetchMode.CLASS:
        if not isinstance(arg, type):
            raise TypeError(
                "FetchMode.CLASS requires a row type as the fetch argument, "
                f"got {type(arg).__name__}"
            )
        decoder = make_decoder(arg)
        return lambda row: arg(**decoder(dict(zip(columns, row))))
    raise ValueError(f"Unknown fetch mode: {mode!r}")
