#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Resolve one command-line argument into a typed ``Value``.

Parsed arguments are weakly typed: a repeatable option used once looks
exactly like a single-valued option. The resolver settles that ambiguity per
key from three inputs only, the declared type, the raw occurrences and an
optional shape hint:

=============  ==========  ===========  =============================
declared type  hint        occurrences  result
=============  ==========  ===========  =============================
boolean        (ignored)   -            BOOLEAN
string         none        1            STRING
string         none        > 1          ARRAY of STRING, supply order
string         ARRAY       >= 1         ARRAY of STRING
string         STRING      >= 1         STRING of the first occurrence
string         other kind  -            UnsupportedShapeError
other          (ignored)   >= 1         STRING of the first occurrence
=============  ==========  ===========  =============================

A STRING hint on an argument used several times keeps only the first value
and drops the rest without warning. That is intended: the hint asserts the
argument is scalar.
"""

from __future__ import annotations

import logging
from typing import Optional

from argconfig.exceptions import MissingValueError, UnsupportedShapeError
from argconfig.store import ArgumentStore, DeclaredType
from argconfig.value import Value, ValueKind

logger = logging.getLogger(__name__)


def _resolve_strings_default(key: str, values: list[str], origin: Optional[str]) -> Value:
    if len(values) == 1:
        return Value.string(values[0], origin)
    return Value.array([Value.string(v, origin) for v in values], origin)


def _resolve_strings_with_hint(key: str, values: list[str], hint: ValueKind, origin: Optional[str]) -> Value:
    if hint is ValueKind.ARRAY:
        return Value.array([Value.string(v, origin) for v in values], origin)
    if hint is ValueKind.STRING:
        if len(values) > 1:
            logger.debug("Argument '%s' hinted as string; keeping first of %d values", key, len(values))
        return Value.string(values[0], origin)
    raise UnsupportedShapeError(key, hint)


def resolve(
    key: str,
    declared_type: DeclaredType,
    store: ArgumentStore,
    hint: Optional[ValueKind] = None,
    origin: Optional[str] = None,
) -> Value:
    """Resolve the raw values of ``key`` into a single typed value.

    Parameters
    ----------
    key : str
        Argument key to resolve
    declared_type : DeclaredType
        Primitive type the store declares for ``key``
    store : ArgumentStore
        Store to read raw values from
    hint : ValueKind, optional
        Shape hint from the metadata table; None applies count-based inference
    origin : str, optional
        Origin label attached to the produced value and its items

    Returns
    -------
    Value
        A BOOLEAN, STRING or ARRAY-of-STRING value

    Raises
    ------
    MissingValueError
        If the store has no raw value for ``key`` under its declared type
    UnsupportedShapeError
        If ``hint`` is neither STRING nor ARRAY for a string argument

    """
    if declared_type is DeclaredType.BOOLEAN:
        flag = store.get_boolean(key)
        if flag is None:
            raise MissingValueError(key, declared_type)
        return Value.boolean(flag, origin)

    if declared_type is DeclaredType.STRING:
        values = store.get_many_strings(key)
        if not values:
            raise MissingValueError(key, declared_type)
        if hint is None:
            result = _resolve_strings_default(key, values, origin)
        else:
            result = _resolve_strings_with_hint(key, values, hint, origin)
        logger.debug("Resolved argument '%s' (%d occurrence(s), hint=%s) as %s", key, len(values), hint, result.kind)
        return result

    if declared_type is DeclaredType.OTHER:
        first = store.get_one_string(key)
        if first is None:
            raise MissingValueError(key, declared_type)
        return Value.string(first, origin)

    raise ValueError(f"Unknown declared type: {declared_type!r}")
