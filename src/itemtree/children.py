# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ItemChildren - the ordered child sequence owned by an Item.

Every mutating operation goes through ``_adopt`` / ``_release`` so that the
``parent`` back-reference of each child always points to the node owning
the sequence, whether the children were assigned wholesale or changed in
place afterwards. A node inserted here leaves the sequence of its former
parent, and nothing is re-linked until every new element is validated.

Example:
    >>> root = Item('root')
    >>> root.children.append(Item('a'))
    >>> root.children[0].parent is root
    True
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import MutableSequence
from typing import Any, Iterable, Iterator, TYPE_CHECKING, overload

from .exceptions import CyclicItemError

if TYPE_CHECKING:
    from .item import Item

logger = logging.getLogger(__name__)


class ItemChildren(MutableSequence):
    """Ordered, parent-linked list of child items.

    The owner is held through a weak reference: the owning Item keeps the
    sequence alive, never the other way around.
    """

    __slots__ = ('_owner', '_items')

    def __init__(self, owner: Item, items: Iterable[Item] = ()) -> None:
        self._owner = weakref.ref(owner)
        items = list(items)
        for item in items:
            self._validate(item)
        self._items: list[Item] = items
        for item in items:
            self._adopt(item)

    # ==================== Parent Links ====================

    @property
    def owner(self) -> Item | None:
        """The Item owning this sequence, or None once it is gone."""
        return self._owner()

    def _validate(self, item: Item) -> None:
        """Raise unless item may become a child of the owner.

        Raises:
            TypeError: If item is not an Item.
            CyclicItemError: If item is the owner or one of its ancestors.
        """
        from .item import Item

        if not isinstance(item, Item):
            raise TypeError(
                f"children must be Item instances, not {type(item).__name__}"
            )
        owner = self._owner()
        current: Item | None = owner
        while current is not None:
            if current is item:
                raise CyclicItemError(
                    f"Cannot add {item.name!r} under {owner.name!r}: "
                    "it is the node itself or one of its ancestors"
                )
            current = current.parent

    def _adopt(self, item: Item) -> None:
        """Point item.parent to the owner, detaching it from a former parent.

        The item must already be validated and stored in this sequence.
        """
        owner = self._owner()
        if owner is None:
            return
        previous = item.parent
        if previous is not None and previous is not owner:
            siblings = previous.__dict__.get('_children')
            if siblings is not None and item in siblings:
                logger.debug(
                    "move %r from %r to %r", item.name, previous.name, owner.name
                )
                siblings._items = [a for a in siblings._items if a is not item]
        item._parent = weakref.ref(owner)

    def _release(self, item: Item) -> None:
        """Clear item.parent if it left the sequence for good."""
        if any(a is item for a in self._items):
            return
        if item.parent is self._owner():
            item._parent = None

    # ==================== Sequence Protocol ====================

    def __repr__(self) -> str:
        return f"ItemChildren({[a.name for a in self._items]})"

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __contains__(self, item: Any) -> bool:
        return any(a is item for a in self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ItemChildren):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    @overload
    def __getitem__(self, index: int) -> Item: ...

    @overload
    def __getitem__(self, index: slice) -> list[Item]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __setitem__(self, index, value) -> None:
        if isinstance(index, slice):
            new_items = list(value)
            for item in new_items:
                self._validate(item)
            old_items = self._items[index]
            self._items[index] = new_items
            for item in new_items:
                self._adopt(item)
            for item in old_items:
                self._release(item)
        else:
            old = self._items[index]
            self._validate(value)
            self._items[index] = value
            self._adopt(value)
            self._release(old)

    def __delitem__(self, index) -> None:
        old = self._items[index]
        del self._items[index]
        for item in (old if isinstance(index, slice) else [old]):
            self._release(item)

    def insert(self, index: int, value: Item) -> None:
        """Insert value before index, making the owner its parent."""
        self._validate(value)
        self._items.insert(index, value)
        self._adopt(value)

    def clear(self) -> None:
        """Remove every child, detaching them from the owner."""
        old = self._items
        self._items = []
        for item in old:
            self._release(item)

    def index(self, value: Any, start: int = 0, stop: int | None = None) -> int:
        """Position of value, matched by identity."""
        for i in range(len(self._items))[start:stop]:
            if self._items[i] is value:
                return i
        raise ValueError(f"{value!r} is not in children")

    def count(self, value: Any) -> int:
        return sum(1 for a in self._items if a is value)
