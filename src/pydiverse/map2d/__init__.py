# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from ._internal.map2d import Map2D
from ._internal.polars import from_polars, to_polars
from ._internal.two_key_map import TwoKeyMap
from ._internal.util.frozen_mapping import FrozenMapping
from .errors import *
from .errors import __all__ as __errors
from .version import __version__

__all__ = [
    "__version__",
    "Map2D",
    "TwoKeyMap",
    "FrozenMapping",
    "to_polars",
    "from_polars",
] + __errors
