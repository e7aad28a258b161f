# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from ._internal.errors import ColumnNotFoundError, InvalidKeyError

__all__ = [
    "InvalidKeyError",
    "ColumnNotFoundError",
]
