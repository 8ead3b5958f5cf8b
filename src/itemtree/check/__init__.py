# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Check package - tri-state checkbox overlay for Item trees.

This package provides CheckItem, an Item subclass owning an ItemCheck
state object. Checked and indeterminate readings are derived from the
subtree on read; setting checked cascades down unless the node is
unlinked.

The package is organized into:
- core: CheckItem, ItemCheck and the CheckState enum

Example:
    >>> from itemtree import CheckItem, Item
    >>> tree = CheckItem.from_item(Item('$', None, [Item('a'), Item('b')]))
    >>> tree.children[0].check.checked = True
    >>> tree.check.indeterminate
    True
"""

from .core import CheckItem, CheckState, ItemCheck

__all__ = ["CheckItem", "CheckState", "ItemCheck"]
