# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Hashable, Iterator, Mapping, MutableMapping
from typing import Any, Generic, TypeVar

from pydiverse.map2d._internal.util.frozen_mapping import FrozenMapping

R = TypeVar("R", bound=Hashable)
C = TypeVar("C", bound=Hashable)
V = TypeVar("V")
R2 = TypeVar("R2", bound=Hashable)
C2 = TypeVar("C2", bound=Hashable)
V2 = TypeVar("V2")


def split_key(key: Any) -> tuple[Any, Any]:
    if isinstance(key, tuple) and len(key) == 2:
        return key
    raise KeyError(f"two-dimensional key must be a (row, column) tuple, found {key!r}")


class Map2D(ABC, Generic[R, C, V]):
    """
    A mapping from (row key, column key) pairs to values.

    `None` is never a valid key but is a valid value. Since `get` also returns
    `None` for missing pairs, use `contains_key` to tell the two cases apart.

    Views (`row_view`, `column_view`, `row_map_view`, `column_map_view`) are
    immutable snapshots that are not affected by later changes to the map.
    Operations that only exist for chaining return the map itself.

    Implementations are not thread-safe.
    """

    @abstractmethod
    def put(self, row_key: R, column_key: C, value: V) -> V | None:
        """Stores `value` at the given pair and returns what was stored before.

        :raises InvalidKeyError: if `row_key` or `column_key` is `None`.
        """

    @abstractmethod
    def get(self, row_key: R, column_key: C) -> V | None: ...

    def get_or_default(self, row_key: R, column_key: C, default_value: V) -> V:
        """Like `get`, but also returns `default_value` for a stored `None`."""
        value = self.get(row_key, column_key)
        return default_value if value is None else value

    @abstractmethod
    def remove(self, row_key: R, column_key: C) -> V | None: ...

    def is_empty(self) -> bool:
        return self.size() == 0

    def non_empty(self) -> bool:
        return not self.is_empty()

    @abstractmethod
    def size(self) -> int:
        """Number of stored (row, column, value) triples."""

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def row_view(self, row_key: R) -> FrozenMapping[C, V]: ...

    @abstractmethod
    def column_view(self, column_key: C) -> FrozenMapping[R, V]: ...

    @abstractmethod
    def contains_value(self, value: V) -> bool: ...

    @abstractmethod
    def contains_key(self, row_key: R, column_key: C) -> bool: ...

    @abstractmethod
    def contains_row(self, row_key: R) -> bool: ...

    @abstractmethod
    def contains_column(self, column_key: C) -> bool: ...

    @abstractmethod
    def row_map_view(self) -> FrozenMapping[R, FrozenMapping[C, V]]: ...

    @abstractmethod
    def column_map_view(self) -> FrozenMapping[C, FrozenMapping[R, V]]: ...

    @abstractmethod
    def fill_map_from_row(self, target: MutableMapping[C, V], row_key: R) -> Map2D[R, C, V]: ...

    @abstractmethod
    def fill_map_from_column(self, target: MutableMapping[R, V], column_key: C) -> Map2D[R, C, V]: ...

    @abstractmethod
    def put_all(self, source: Map2D[R, C, V]) -> Map2D[R, C, V]: ...

    @abstractmethod
    def put_all_to_row(self, source: Mapping[C, V], row_key: R) -> Map2D[R, C, V]: ...

    @abstractmethod
    def put_all_to_column(self, source: Mapping[R, V], column_key: C) -> Map2D[R, C, V]: ...

    @abstractmethod
    def copy_with_conversion(
        self,
        row_function: Callable[[R], R2],
        column_function: Callable[[C], C2],
        value_function: Callable[[V], V2],
    ) -> Map2D[R2, C2, V2]:
        """Returns a new map with every key and value converted.

        If two pairs are converted to the same pair, the one visited last wins.
        The traversal order is an implementation detail.
        """

    @abstractmethod
    def items(self) -> Iterator[tuple[R, C, V]]:
        """Iterates over the stored (row, column, value) triples."""

    def rows(self) -> frozenset[R]:
        return frozenset(self.row_map_view().keys())

    def columns(self) -> frozenset[C]:
        return frozenset(self.column_map_view().keys())

    # python container protocol, keyed by (row, column) tuples

    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        return self.non_empty()

    def __contains__(self, key) -> bool:
        if not (isinstance(key, tuple) and len(key) == 2):
            return False
        return self.contains_key(*key)

    def __iter__(self) -> Iterator[tuple[R, C]]:
        for row_key, column_key, _ in self.items():
            yield row_key, column_key

    def __getitem__(self, key: tuple[R, C]) -> V:
        row_key, column_key = split_key(key)
        if not self.contains_key(row_key, column_key):
            raise KeyError(key)
        return self.get(row_key, column_key)

    def __setitem__(self, key: tuple[R, C], value: V):
        self.put(*split_key(key), value)

    def __delitem__(self, key: tuple[R, C]):
        row_key, column_key = split_key(key)
        if not self.contains_key(row_key, column_key):
            raise KeyError(key)
        self.remove(row_key, column_key)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Map2D):
            return NotImplemented
        return self.row_map_view() == other.row_map_view()

    __hash__ = None
