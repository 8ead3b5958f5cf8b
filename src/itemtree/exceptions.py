# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ItemTree exceptions."""

from __future__ import annotations


class ItemTreeError(Exception):
    """Base exception for ItemTree errors."""

    pass


class ItemSourceError(ItemTreeError, TypeError):
    """Raised when a plain source cannot be lifted into an Item."""

    pass


class CyclicItemError(ItemTreeError, ValueError):
    """Raised when a node is placed inside its own subtree."""

    pass
