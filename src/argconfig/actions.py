"""Custom argparse actions that record how arguments were supplied.

Plain argparse cannot tell a value the user typed apart from a parser default
that happens to be equal to it. The actions in this module store their value
exactly like the stock ``store``, ``store_true``, ``store_false`` and
``append`` actions, and in addition add the destination to the namespace's
``_provided_args`` set.

``ArgparseStore`` reads that set to support ``provided_only`` collection, where
parser defaults must not shadow values from lower configuration layers.
"""

from __future__ import annotations

#  Copyright (c) 2025 Tom Villani, Ph.D.
import argparse
from typing import Any, Callable, Optional, Sequence, Union

PROVIDED_ATTR = "_provided_args"


def _mark_provided(namespace: argparse.Namespace, dest: str) -> None:
    if not hasattr(namespace, PROVIDED_ATTR):
        setattr(namespace, PROVIDED_ATTR, set())
    getattr(namespace, PROVIDED_ATTR).add(dest)


def provided_args(namespace: argparse.Namespace) -> set[str]:
    """Return the destinations explicitly provided on the command line.

    Parameters
    ----------
    namespace : argparse.Namespace
        Namespace produced by a parser built with the tracking actions

    Returns
    -------
    set[str]
        Copy of the recorded destinations; empty if nothing was tracked

    """
    return set(getattr(namespace, PROVIDED_ATTR, set()))


class TrackingStoreAction(argparse.Action):
    """Store action that marks its destination as explicitly provided.

    Behaves like ``action="store"``, so a user-provided value that happens to
    match the default can still be told apart from the default.
    """

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        """Store the value and mark it as explicitly provided."""
        setattr(namespace, self.dest, values)
        _mark_provided(namespace, self.dest)


class TrackingStoreTrueAction(argparse.Action):
    """Custom store_true action that tracks whether the flag was explicitly provided."""

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        default: bool = False,
        required: bool = False,
        help: Optional[str] = None,
    ) -> None:
        super().__init__(
            option_strings=option_strings, dest=dest, nargs=0, const=True, default=default, required=required, help=help
        )

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        """Store True and mark as explicitly provided."""
        setattr(namespace, self.dest, True)
        _mark_provided(namespace, self.dest)


class TrackingStoreFalseAction(argparse.Action):
    """Custom store_false action that tracks whether the flag was explicitly provided."""

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        default: bool = True,
        required: bool = False,
        help: Optional[str] = None,
    ) -> None:
        super().__init__(
            option_strings=option_strings,
            dest=dest,
            nargs=0,
            const=False,
            default=default,
            required=required,
            help=help,
        )

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        """Store False and mark as explicitly provided."""
        setattr(namespace, self.dest, False)
        _mark_provided(namespace, self.dest)


class TrackingAppendAction(argparse.Action):
    """Custom append action that tracks explicitly provided arguments.

    Parser defaults are never appended to: the first explicit use replaces the
    default list, matching what a user expects from a repeatable option.
    """

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        nargs: Optional[Union[int, str]] = None,
        const: Optional[Any] = None,
        default: Optional[list] = None,
        type: Optional[Callable[[str], Any]] = None,
        choices: Optional[Sequence[Any]] = None,
        required: bool = False,
        help: Optional[str] = None,
        metavar: Optional[Union[str, tuple[str, ...]]] = None,
    ) -> None:
        super().__init__(
            option_strings=option_strings,
            dest=dest,
            nargs=nargs,
            const=const,
            default=default,
            type=type,
            choices=choices,
            required=required,
            help=help,
            metavar=metavar,
        )

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        """Append the value and mark as explicitly provided.

        Handles both single values and lists (from nargs) correctly.
        For nargs='+', extends the list instead of appending a nested list.

        Parameters
        ----------
        parser : argparse.ArgumentParser
            The parser instance
        namespace : argparse.Namespace
            The namespace to store values in
        values : Union[str, Sequence[Any], None]
            The parsed values, already converted by ``type``
        option_string : Optional[str]
            The option string that was used

        """
        if self.dest in provided_args(namespace):
            items = list(getattr(namespace, self.dest, None) or [])
        else:
            items = []

        if isinstance(values, (list, tuple)):
            items.extend(values)
        else:
            items.append(values)

        setattr(namespace, self.dest, items)
        _mark_provided(namespace, self.dest)
