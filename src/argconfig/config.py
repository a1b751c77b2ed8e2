#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Layered configuration built from several sources.

Layers are merged from lowest to highest priority:

1. Defaults registered with ``ConfigBuilder.set_default``
2. Sources, in the order they were added (later sources win)
3. Overrides registered with ``ConfigBuilder.set_override``

Tables are merged recursively; every other value replaces what a lower layer
put at the same key. Keys collected from sources are dotted paths, so
``"pdf.pages"`` from one layer and ``{"pdf": {"password": ...}}`` from another
end up in the same ``pdf`` table.

Examples
--------
>>> config = (
...     Config.builder()
...     .set_default("verbose", False)
...     .add_source(MappingSource({"output": {"dir": "out"}}))
...     .set_override("verbose", True)
...     .build()
... )
>>> config.get_bool("verbose")
True
>>> config.get_string("output.dir")
'out'

"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Iterator

from argconfig.exceptions import NotFoundError
from argconfig.sources.base import Source
from argconfig.sources.mapping import MappingSource
from argconfig.value import Value, ValueKind

logger = logging.getLogger(__name__)

_Tree = dict  # str -> Union[_Tree, Value]


def _split_key(key: str) -> list[str]:
    return [part for part in key.split(".") if part] or [key]


def _child_tree(node: Any) -> _Tree:
    if isinstance(node, dict):
        return node
    if isinstance(node, Value) and node.kind is ValueKind.TABLE:
        return dict(node.payload)
    return {}


def _insert(tree: _Tree, path: list[str], value: Value) -> None:
    node = tree
    for part in path[:-1]:
        child = _child_tree(node.get(part))
        node[part] = child
        node = child

    last = path[-1]
    if value.kind is ValueKind.TABLE:
        merged = _child_tree(node.get(last))
        for key, item in value.payload.items():
            # table keys are literal, never split on dots
            _insert(merged, [key], item)
        node[last] = merged
    else:
        node[last] = value


def _freeze(tree: _Tree) -> Value:
    entries = {key: _freeze(node) if isinstance(node, dict) else node for key, node in tree.items()}
    return Value(ValueKind.TABLE, MappingProxyType(entries), None)


class Config:
    """Merged, read-only configuration.

    Instances are produced by ``ConfigBuilder.build``. Lookups take dotted
    keys and raise ``NotFoundError`` for absent keys and ``ConfigTypeError``
    (naming the key and the value's origin) when the value cannot be read as
    the requested kind.
    """

    def __init__(self, root: Value) -> None:
        self._root = root

    @staticmethod
    def builder() -> "ConfigBuilder":
        return ConfigBuilder()

    def get(self, key: str) -> Value:
        node = self._root
        for part in _split_key(key):
            if node.kind is not ValueKind.TABLE or part not in node.payload:
                raise NotFoundError(key)
            node = node.payload[part]
        return node

    def get_string(self, key: str) -> str:
        return self.get(key).into_string(key)

    def get_bool(self, key: str) -> bool:
        return self.get(key).into_bool(key)

    def get_int(self, key: str) -> int:
        return self.get(key).into_int(key)

    def get_float(self, key: str) -> float:
        return self.get(key).into_float(key)

    def get_array(self, key: str) -> list[Value]:
        return self.get(key).into_array(key)

    def get_table(self, key: str) -> dict[str, Value]:
        return self.get(key).into_table(key)

    def keys(self) -> list[str]:
        return list(self._root.payload)

    def to_dict(self) -> dict[str, Any]:
        return self._root.to_python()

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        try:
            self.get(key)
        except NotFoundError:
            return False
        return True

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_dict()!r})"


class ConfigBuilder:
    """Collects layers and merges them into a ``Config``.

    All mutating methods return the builder so calls can be chained.
    """

    def __init__(self) -> None:
        self._defaults: dict[str, Any] = {}
        self._sources: list[Source] = []
        self._overrides: dict[str, Any] = {}

    def set_default(self, key: str, value: Any) -> "ConfigBuilder":
        self._defaults[key] = value
        return self

    def add_source(self, source: Source) -> "ConfigBuilder":
        self._sources.append(source)
        return self

    def set_override(self, key: str, value: Any) -> "ConfigBuilder":
        self._overrides[key] = value
        return self

    def _layers(self) -> list[Source]:
        layers: list[Source] = []
        if self._defaults:
            layers.append(MappingSource(self._defaults, origin="default"))
        layers.extend(self._sources)
        if self._overrides:
            layers.append(MappingSource(self._overrides, origin="override"))
        return layers

    def build(self) -> Config:
        """Collect every layer and merge them.

        Returns
        -------
        Config
            The merged configuration

        Raises
        ------
        SourceError
            Propagated unchanged from the first layer that fails to collect

        """
        tree: _Tree = {}
        for source in self._layers():
            collected = source.collect()
            logger.debug("Merging %d value(s) from %r", len(collected), source)
            for key, value in collected.items():
                _insert(tree, _split_key(key), value)
        return Config(_freeze(tree))
