# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping, MutableMapping
from typing import TYPE_CHECKING

import structlog

from pydiverse.map2d._internal.errors import check_arg_type, check_callable, check_key
from pydiverse.map2d._internal.map2d import C, C2, R, R2, V, V2, Map2D
from pydiverse.map2d._internal.util.frozen_mapping import FrozenMapping

if TYPE_CHECKING:
    import polars as pl

# routed to the stdlib logger, so nothing is emitted unless the application
# configures logging for this module
logger = structlog.wrap_logger(
    logging.getLogger(__name__),
    wrapper_class=structlog.stdlib.BoundLogger,
    processors=[structlog.stdlib.render_to_log_kwargs],
)


class TwoKeyMap(Map2D[R, C, V]):
    """
    `Map2D` backed by a dict of dicts (row key -> column key -> value).

    Rows are created on the first `put` and dropped as soon as their last entry
    is removed, so every stored row is non-empty. Lookups by row are O(1);
    anything keyed by column has to scan all rows.

    >>> m = TwoKeyMap()
    >>> m.put("r1", "c1", 10)
    >>> m.put("r1", "c2", 20)
    >>> m.row_view("r1")
    FrozenMapping({'c1': 10, 'c2': 20})
    >>> m.column_view("c1")
    FrozenMapping({'r1': 10})
    """

    def __init__(self, mapping: Mapping[R, Mapping[C, V]] | None = None):
        self._rows: dict[R, dict[C, V]] = dict()
        if mapping is not None:
            check_arg_type(Mapping, "TwoKeyMap", "mapping", mapping)
            for row_key, row in mapping.items():
                self.put_all_to_row(row, row_key)

    @classmethod
    def from_items(cls, items: Iterable[tuple[R, C, V]]) -> TwoKeyMap[R, C, V]:
        """Builds a map from (row, column, value) triples, later triples win."""
        result = cls()
        for row_key, column_key, value in items:
            result.put(row_key, column_key, value)
        return result

    def put(self, row_key: R, column_key: C, value: V) -> V | None:
        check_key("put", row_key, column_key)
        row = self._rows.get(row_key)
        if row is None:
            # hash the column key before a new row is stored
            row = {column_key: value}
            self._rows[row_key] = row
            return None
        previous = row.get(column_key)
        row[column_key] = value
        return previous

    def get(self, row_key: R, column_key: C) -> V | None:
        row = self._rows.get(row_key)
        if row is None:
            return None
        return row.get(column_key)

    def remove(self, row_key: R, column_key: C) -> V | None:
        row = self._rows.get(row_key)
        if row is None:
            return None
        value = row.pop(column_key, None)
        if not row:
            del self._rows[row_key]
        return value

    def is_empty(self) -> bool:
        # empty rows are never stored
        return not self._rows

    def size(self) -> int:
        return sum(len(row) for row in self._rows.values())

    def clear(self) -> None:
        if self._rows:
            logger.debug("clearing map", entries=self.size(), rows=len(self._rows))
        self._rows.clear()

    def row_view(self, row_key: R) -> FrozenMapping[C, V]:
        return FrozenMapping(self._rows.get(row_key, {}))

    def column_view(self, column_key: C) -> FrozenMapping[R, V]:
        return FrozenMapping(
            (row_key, row[column_key])
            for row_key, row in self._rows.items()
            if column_key in row
        )

    def contains_value(self, value: V) -> bool:
        return any(value in row.values() for row in self._rows.values())

    def contains_key(self, row_key: R, column_key: C) -> bool:
        row = self._rows.get(row_key)
        return row is not None and column_key in row

    def contains_row(self, row_key: R) -> bool:
        return row_key in self._rows

    def contains_column(self, column_key: C) -> bool:
        return any(column_key in row for row in self._rows.values())

    def row_map_view(self) -> FrozenMapping[R, FrozenMapping[C, V]]:
        return FrozenMapping(
            (row_key, FrozenMapping(row)) for row_key, row in self._rows.items()
        )

    def column_map_view(self) -> FrozenMapping[C, FrozenMapping[R, V]]:
        columns: dict[C, dict[R, V]] = dict()
        for row_key, row in self._rows.items():
            for column_key, value in row.items():
                columns.setdefault(column_key, dict())[row_key] = value
        return FrozenMapping(
            (column_key, FrozenMapping(column)) for column_key, column in columns.items()
        )

    def fill_map_from_row(self, target: MutableMapping[C, V], row_key: R) -> TwoKeyMap[R, C, V]:
        check_arg_type(MutableMapping, "fill_map_from_row", "target", target)
        row = self._rows.get(row_key)
        if row is not None:
            target.update(row)
        return self

    def fill_map_from_column(self, target: MutableMapping[R, V], column_key: C) -> TwoKeyMap[R, C, V]:
        check_arg_type(MutableMapping, "fill_map_from_column", "target", target)
        for row_key, row in self._rows.items():
            if column_key in row:
                target[row_key] = row[column_key]
        return self

    def put_all(self, source: Map2D[R, C, V]) -> TwoKeyMap[R, C, V]:
        check_arg_type(Map2D, "put_all", "source", source)
        # materialize first: `source` may be `self`
        entries = list(source.items())
        for row_key, column_key, _ in entries:
            check_key("put_all", row_key, column_key)
        for row_key, column_key, value in entries:
            self.put(row_key, column_key, value)
        return self

    def put_all_to_row(self, source: Mapping[C, V], row_key: R) -> TwoKeyMap[R, C, V]:
        check_arg_type(Mapping, "put_all_to_row", "source", source)
        if not source:
            return self
        for column_key in source:
            check_key("put_all_to_row", row_key, column_key)
        self._rows.setdefault(row_key, dict()).update(source)
        return self

    def put_all_to_column(self, source: Mapping[R, V], column_key: C) -> TwoKeyMap[R, C, V]:
        check_arg_type(Mapping, "put_all_to_column", "source", source)
        entries = list(source.items())
        for row_key, _ in entries:
            check_key("put_all_to_column", row_key, column_key)
        for row_key, value in entries:
            self.put(row_key, column_key, value)
        return self

    def copy_with_conversion(
        self,
        row_function: Callable[[R], R2],
        column_function: Callable[[C], C2],
        value_function: Callable[[V], V2],
    ) -> TwoKeyMap[R2, C2, V2]:
        """Returns a new `TwoKeyMap` with every key and value converted.

        Rows are visited in insertion order and columns in insertion order
        within each row. When several pairs are converted to the same pair, the
        last one visited wins.

        :raises InvalidKeyError: if a conversion function returns `None` for a
            key. `self` is left untouched in that case.
        """
        check_callable("copy_with_conversion", "row_function", row_function)
        check_callable("copy_with_conversion", "column_function", column_function)
        check_callable("copy_with_conversion", "value_function", value_function)

        result: TwoKeyMap[R2, C2, V2] = TwoKeyMap()
        collisions = 0
        for row_key, row in self._rows.items():
            new_row_key = row_function(row_key)
            for column_key, value in row.items():
                new_column_key = column_function(column_key)
                if result.contains_key(new_row_key, new_column_key):
                    collisions += 1
                    logger.debug(
                        "key collision during conversion",
                        row=new_row_key,
                        column=new_column_key,
                    )
                result.put(new_row_key, new_column_key, value_function(value))

        logger.debug(
            "converted map",
            entries=self.size(),
            result_entries=result.size(),
            collisions=collisions,
        )
        return result

    def copy(self) -> TwoKeyMap[R, C, V]:
        result = type(self)()
        result._rows = {row_key: dict(row) for row_key, row in self._rows.items()}
        return result

    __copy__ = copy

    def items(self) -> Iterator[tuple[R, C, V]]:
        for row_key, row in self._rows.items():
            for column_key, value in row.items():
                yield row_key, column_key, value

    def rows(self) -> frozenset[R]:
        return frozenset(self._rows)

    def columns(self) -> frozenset[C]:
        return frozenset(column_key for row in self._rows.values() for column_key in row)

    def to_polars(
        self,
        row_name: str = "row",
        column_name: str = "column",
        value_name: str = "value",
    ) -> pl.DataFrame:
        """Long-format data frame with one line per stored triple."""
        from pydiverse.map2d._internal.polars import to_polars

        return to_polars(self, row_name=row_name, column_name=column_name, value_name=value_name)

    def __repr__(self):
        return f"{self.__class__.__name__}({self._rows!r})"
