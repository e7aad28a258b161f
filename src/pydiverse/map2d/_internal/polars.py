# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

import polars as pl

from pydiverse.map2d._internal.errors import ColumnNotFoundError, check_arg_type, check_key
from pydiverse.map2d._internal.map2d import Map2D
from pydiverse.map2d._internal.two_key_map import TwoKeyMap


def to_polars(
    map2d: Map2D,
    row_name: str = "row",
    column_name: str = "column",
    value_name: str = "value",
) -> pl.DataFrame:
    """
    Converts a `Map2D` to a long-format data frame.

    The frame has one line per stored (row, column, value) triple. Each of the
    three columns has to be representable as a single polars dtype.
    """
    check_arg_type(Map2D, "to_polars", "map2d", map2d)
    names = [row_name, column_name, value_name]
    if len(set(names)) != 3:
        raise ValueError(
            f"column names passed to `to_polars` must be distinct, found {names}"
        )

    row_keys, column_keys, values = [], [], []
    for row_key, column_key, value in map2d.items():
        row_keys.append(row_key)
        column_keys.append(column_key)
        values.append(value)

    return pl.DataFrame(
        {row_name: row_keys, column_name: column_keys, value_name: values},
        strict=False,
    )


def from_polars(
    df: pl.DataFrame,
    row_name: str = "row",
    column_name: str = "column",
    value_name: str = "value",
) -> TwoKeyMap:
    """
    Builds a `TwoKeyMap` from a long-format data frame.

    If the frame contains the same (row, column) pair more than once, the value
    further down wins. Null values are stored as `None`; null keys are rejected.
    """
    check_arg_type(pl.DataFrame, "from_polars", "df", df)
    for name in (row_name, column_name, value_name):
        if name not in df.columns:
            raise ColumnNotFoundError(
                f"column `{name}` not found in data frame\n"
                f"available columns: {', '.join(df.columns)}"
            )

    result = TwoKeyMap()
    triples = list(
        zip(
            df.get_column(row_name).to_list(),
            df.get_column(column_name).to_list(),
            df.get_column(value_name).to_list(),
            strict=True,
        )
    )
    for row_key, column_key, _ in triples:
        check_key("from_polars", row_key, column_key)
    for row_key, column_key, value in triples:
        result.put(row_key, column_key, value)
    return result
