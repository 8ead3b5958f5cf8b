# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ItemTree - Ordered trees with structural transforms and tri-state checks.

A lightweight, zero-dependency library providing a generic tree node with
automatic parent links, copy/map/filter/prune/update transforms, forest
helpers, and a checked/indeterminate overlay for checkbox-style tree UIs.
"""

__version__ = "0.1.0"

from .check import CheckItem, CheckState, ItemCheck
from .children import ItemChildren
from .exceptions import (
    CyclicItemError,
    ItemSourceError,
    ItemTreeError,
)
from .item import Item
from .items import Items

__all__ = [
    # Core classes
    "Item",
    "ItemChildren",
    "Items",
    # Check overlay
    "CheckItem",
    "CheckState",
    "ItemCheck",
    # Exceptions
    "ItemTreeError",
    "ItemSourceError",
    "CyclicItemError",
]
