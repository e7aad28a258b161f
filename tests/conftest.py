# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause
import logging

import pytest

from pydiverse.common.util.structlog import setup_logging
from pydiverse.map2d import TwoKeyMap

# Setup


@pytest.fixture
def empty_map():
    return TwoKeyMap()


@pytest.fixture
def grid():
    """
    r1: c1=1  c2=2
    r2: c1=3        c3=None
    r3:       c2=4
    """
    m = TwoKeyMap()
    m.put("r1", "c1", 1)
    m.put("r1", "c2", 2)
    m.put("r2", "c1", 3)
    m.put("r2", "c3", None)
    m.put("r3", "c2", 4)
    return m


setup_logging(log_level=logging.INFO)
