# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

import typing
from typing import Any


class InvalidKeyError(ValueError):
    """
    Raised when `None` is used as a row or column key.
    """


class ColumnNotFoundError(Exception):
    """
    Raised when a data frame does not have a column that was asked for.
    """


# Our error message format: The first line is in lowercase letters, without a dot at
# the end. More detail is given in the following lines in normal english sentences.
# To give advice to to the user, we write `hint: ...`.


def check_key(fn: str, row_key: Any, column_key: Any):
    if row_key is None or column_key is None:
        which = "row" if row_key is None else "column"
        raise InvalidKeyError(
            f"{which} key passed to `{fn}` must not be `None`\n"
            "hint: `None` is reserved for values, use a hashable object as key"
        )


def check_arg_type(
    expected_type: type,
    fn: str,
    param_name: str,
    arg: Any,
):
    if not isinstance(arg, expected_type):
        type_args = typing.get_args(expected_type)
        expected_type_str = (
            expected_type.__name__
            if not type_args
            else " | ".join(t.__name__ for t in type_args)
        )
        raise TypeError(
            f"argument for parameter `{param_name}` of `{fn}` must have type "
            f"`{expected_type_str}`, found `{type(arg).__name__}` instead"
        )


def check_callable(fn: str, param_name: str, arg: Any):
    if not callable(arg):
        raise TypeError(
            f"argument for parameter `{param_name}` of `{fn}` must be callable, "
            f"found `{type(arg).__name__}` instead"
        )
