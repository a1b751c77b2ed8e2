#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Argument store adapters.

The resolver never talks to a command-line parser directly. It reads parsed
arguments through the small ``ArgumentStore`` capability surface defined
here: which keys exist, what primitive type each was declared with, and the
raw values supplied for it. ``ArgparseStore`` implements that surface over
an ``argparse.ArgumentParser`` and the ``argparse.Namespace`` it produced.
"""

from __future__ import annotations

import argparse
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional, Sequence

from argconfig.actions import (
    TrackingAppendAction,
    TrackingStoreAction,
    TrackingStoreFalseAction,
    TrackingStoreTrueAction,
    provided_args,
)

logger = logging.getLogger(__name__)


class DeclaredType(Enum):
    """Primitive type an argument was declared with, independent of its values."""

    BOOLEAN = "boolean"
    STRING = "string"
    OTHER = "other"


class ArgumentStore(ABC):
    """Read-only view over parsed command-line arguments, keyed by name.

    Implementations must not change after construction; every method is a
    pure read so that a single store can be collected from concurrently.
    """

    @abstractmethod
    def list_recognized_keys(self) -> list[str]:
        """Return every recognized key, in declaration order."""

    @abstractmethod
    def has_key(self, key: str) -> bool:
        """Return whether ``key`` can be retrieved from this store."""

    @abstractmethod
    def declared_type(self, key: str) -> Optional[DeclaredType]:
        """Return the declared type of ``key``, or None when unknown."""

    @abstractmethod
    def get_many_strings(self, key: str) -> list[str]:
        """Return all raw string occurrences of ``key`` in supply order."""

    @abstractmethod
    def get_boolean(self, key: str) -> Optional[bool]:
        """Return the boolean value of ``key``, or None if it holds none."""

    def occurrence_count(self, key: str) -> int:
        return len(self.get_many_strings(key))

    def get_one_string(self, key: str) -> Optional[str]:
        values = self.get_many_strings(key)
        return values[0] if values else None


_BOOLEAN_ACTIONS: tuple[type, ...] = (
    argparse._StoreTrueAction,
    argparse._StoreFalseAction,
    argparse.BooleanOptionalAction,
    TrackingStoreTrueAction,
    TrackingStoreFalseAction,
)

_VALUE_ACTIONS: tuple[type, ...] = (
    argparse._StoreAction,
    argparse._AppendAction,
    argparse._ExtendAction,
    TrackingStoreAction,
    TrackingAppendAction,
)

_IGNORED_ACTIONS: tuple[type, ...] = (
    argparse._HelpAction,
    argparse._VersionAction,
    argparse._SubParsersAction,
)

_TRACKING_ACTIONS: tuple[type, ...] = (
    TrackingStoreAction,
    TrackingStoreTrueAction,
    TrackingStoreFalseAction,
    TrackingAppendAction,
)

_MULTI_VALUE_ACTIONS: tuple[type, ...] = (
    argparse._AppendAction,
    argparse._ExtendAction,
    TrackingAppendAction,
)


def declared_type_of(action: argparse.Action) -> DeclaredType:
    """Classify an argparse action by the primitive type its values carry.

    Parameters
    ----------
    action : argparse.Action
        Action registered on a parser

    Returns
    -------
    DeclaredType
        BOOLEAN for flag-style actions, STRING for store/append/extend
        actions that keep raw strings, OTHER for everything else (counters,
        ``type=int``, custom converters)

    """
    if isinstance(action, _BOOLEAN_ACTIONS):
        return DeclaredType.BOOLEAN
    if isinstance(action, argparse._StoreConstAction) and isinstance(action.const, bool):
        return DeclaredType.BOOLEAN
    if isinstance(action, _VALUE_ACTIONS) and action.type in (None, str):
        return DeclaredType.STRING
    return DeclaredType.OTHER


def is_multi_value_action(action: argparse.Action) -> bool:
    """Return whether an action structurally holds a list of values."""
    if isinstance(action, _MULTI_VALUE_ACTIONS):
        return True
    nargs = action.nargs
    if nargs in ("*", "+", argparse.REMAINDER):
        return True
    return isinstance(nargs, int) and nargs > 1


def iter_value_actions(parser: argparse.ArgumentParser) -> list[argparse.Action]:
    """Return the parser actions that write a configuration value, in declaration order."""
    return [
        action
        for action in parser._actions
        if not isinstance(action, _IGNORED_ACTIONS) and action.dest not in (None, argparse.SUPPRESS)
    ]


def _flatten(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        flat: list[Any] = []
        for item in value:
            # append + nargs yields one nested list per use
            if isinstance(item, (list, tuple)):
                flat.extend(item)
            else:
                flat.append(item)
        return flat
    return [value]


class ArgparseStore(ArgumentStore):
    """Argument store over an argparse parser and its parsed namespace.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        Parser that declared the arguments; consulted for declared types
    namespace : argparse.Namespace
        Result of ``parser.parse_args``
    provided_only : bool, default False
        When true, only destinations recorded as explicitly provided by the
        tracking actions are recognized. Arguments filled from parser
        defaults are then left to lower-priority configuration layers.
        A warning is logged when the parser declares no tracking actions.

    Notes
    -----
    A destination whose value is None or an empty list (an unused
    ``append`` option with ``default=[]``, a bare ``nargs="*"`` option or
    positional) holds no value and is not recognized.

    Only the parser's own actions are walked. The destination of an
    ``add_subparsers`` action and every argument declared on a sub-parser
    are not recognized; wrap the chosen sub-parser in its own store.

    Examples
    --------
    >>> parser = argparse.ArgumentParser()
    >>> _ = parser.add_argument("-i", "--input")
    >>> store = ArgparseStore.from_args(parser, ["-i", "filename.txt"])
    >>> store.list_recognized_keys()
    ['input']
    >>> store.get_many_strings("input")
    ['filename.txt']

    """

    def __init__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        provided_only: bool = False,
    ) -> None:
        self.parser = parser
        self.namespace = namespace
        self.provided_only = provided_only
        self._actions: dict[str, argparse.Action] = {}
        for action in iter_value_actions(parser):
            # first declaration wins for destinations shared by several options
            self._actions.setdefault(action.dest, action)
        if provided_only and not any(isinstance(a, _TRACKING_ACTIONS) for a in self._actions.values()):
            logger.warning(
                "provided_only is set but the parser declares no tracking actions; "
                "no command-line value will be collected"
            )

    @classmethod
    def from_args(
        cls,
        parser: argparse.ArgumentParser,
        args: Optional[Sequence[str]] = None,
        provided_only: bool = False,
    ) -> "ArgparseStore":
        """Parse ``args`` with ``parser`` and wrap the result."""
        return cls(parser, parser.parse_args(args), provided_only=provided_only)

    def list_recognized_keys(self) -> list[str]:
        provided = provided_args(self.namespace) if self.provided_only else None
        keys = []
        for dest in self._actions:
            # None and empty lists (append with default=[], bare nargs="*") hold no value
            if not _flatten(getattr(self.namespace, dest, None)):
                continue
            if provided is not None and dest not in provided:
                continue
            keys.append(dest)
        return keys

    def has_key(self, key: str) -> bool:
        return key in self._actions and hasattr(self.namespace, key)

    def declared_type(self, key: str) -> Optional[DeclaredType]:
        action = self._actions.get(key)
        if action is None:
            return None
        return declared_type_of(action)

    def get_many_strings(self, key: str) -> list[str]:
        return [str(item) for item in _flatten(getattr(self.namespace, key, None))]

    def get_boolean(self, key: str) -> Optional[bool]:
        value = getattr(self.namespace, key, None)
        return value if isinstance(value, bool) else None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.namespace!r}, provided_only={self.provided_only})"
