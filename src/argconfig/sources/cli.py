#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line arguments as a configuration source.

``ArgparseSource`` lets parsed ``argparse`` arguments take part in a layered
configuration exactly like files and environment variables do, instead of
being read through ``args.some_option`` accessors.

Examples
--------
>>> import argparse
>>> from argconfig import ConfigBuilder
>>> parser = argparse.ArgumentParser(prog="myapp")
>>> _ = parser.add_argument("-i", "--input")
>>> source = ArgparseSource.from_parser(parser, ["-i", "filename.txt"])
>>> config = ConfigBuilder().add_source(source).build()
>>> config.get_string("input")
'filename.txt'

"""

from __future__ import annotations

import argparse
import logging
from typing import Mapping, Optional, Sequence, Union

from argconfig.exceptions import KeyNotFoundError, MissingTypeInfoError
from argconfig.metadata import MetadataTable, ShapeHint
from argconfig.resolver import resolve
from argconfig.sources.base import Source
from argconfig.store import ArgparseStore, ArgumentStore
from argconfig.value import Value

logger = logging.getLogger(__name__)

ORIGIN = "argparse"

MetadataLike = Union[MetadataTable, Mapping[str, ShapeHint]]


def _as_table(metadata: Optional[MetadataLike]) -> Optional[MetadataTable]:
    if metadata is None or isinstance(metadata, MetadataTable):
        return metadata
    return MetadataTable(metadata)


class ArgparseSource(Source):
    """Configuration source over parsed command-line arguments.

    Each recognized argument becomes one value tagged with the ``"argparse"``
    origin: flags become booleans, string options become a string when
    supplied once and an array of strings when supplied several times.
    A metadata table overrides that count-based inference per key.

    Parameters
    ----------
    store : ArgumentStore
        Parsed arguments to read from
    metadata : MetadataTable or mapping, optional
        Shape hints per key. Without metadata every string argument uses
        count-based inference.

    """

    def __init__(self, store: ArgumentStore, metadata: Optional[MetadataLike] = None) -> None:
        self.store = store
        self.metadata = _as_table(metadata)

    @classmethod
    def with_metadata(cls, store: ArgumentStore, metadata: MetadataLike) -> "ArgparseSource":
        """Create a source whose string arguments follow the given shape hints."""
        return cls(store, metadata)

    @classmethod
    def from_parser(
        cls,
        parser: argparse.ArgumentParser,
        args: Optional[Sequence[str]] = None,
        metadata: Optional[MetadataLike] = None,
        infer_metadata: bool = False,
        provided_only: bool = False,
    ) -> "ArgparseSource":
        """Parse ``args`` and build a source from the result.

        Parameters
        ----------
        parser : argparse.ArgumentParser
            Parser declaring the arguments
        args : Sequence[str], optional
            Arguments to parse; ``sys.argv[1:]`` when omitted
        metadata : MetadataTable or mapping, optional
            Explicit shape hints
        infer_metadata : bool, default False
            Derive ARRAY hints for repeatable options from the parser.
            Explicit ``metadata`` entries take precedence over inferred ones.
        provided_only : bool, default False
            Only contribute arguments explicitly given on the command line
            (requires the tracking actions)

        Returns
        -------
        ArgparseSource
            The configured source

        """
        store = ArgparseStore.from_args(parser, args, provided_only=provided_only)
        table = _as_table(metadata)
        if infer_metadata:
            inferred = MetadataTable.from_parser(parser)
            table = inferred.merged(table) if table is not None else inferred
        return cls(store, table)

    def get_keys(self) -> list[str]:
        return self.store.list_recognized_keys()

    def get_item(self, key: str) -> Value:
        """Resolve the value of a single argument.

        Raises
        ------
        KeyNotFoundError
            If the store cannot retrieve ``key``
        MissingTypeInfoError
            If the store has no declared type for ``key``
        MissingValueError, UnsupportedShapeError
            Propagated from the resolver

        """
        if not self.store.has_key(key):
            raise KeyNotFoundError(key)

        declared_type = self.store.declared_type(key)
        if declared_type is None:
            raise MissingTypeInfoError(key)

        hint = self.metadata.lookup(key) if self.metadata is not None else None
        return resolve(key, declared_type, self.store, hint=hint, origin=ORIGIN)

    def collect(self) -> dict[str, Value]:
        values: dict[str, Value] = {}
        for key in self.get_keys():
            values[key] = self.get_item(key)
        logger.debug("Collected %d value(s) from command-line arguments", len(values))
        return values

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.store!r}, metadata={self.metadata!r})"
