# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""CheckItem - tri-state checkbox semantics on top of Item.

Each CheckItem owns one ItemCheck. The stored ``checked`` bit of a node is
only authoritative on leaves and on unlinked nodes; everywhere else
``checked`` and ``indeterminate`` are derived from the children on read:

    - checked: every child is checked
    - indeterminate: a child is indeterminate, or some but not all
      children are checked

Setting ``checked`` stores the bit and cascades the same value to every
child, so checking a parent checks its whole subtree. ``unlink`` cuts a
node loose: its setter stops cascading and its getters stop aggregating.

Example:
    >>> root = CheckItem('$', None, [CheckItem('a'), CheckItem('b')])
    >>> root.children[0].check.checked = True
    >>> root.check.state
    <CheckState.INDETERMINATE: 1>
    >>> root.check.checked = True
    >>> root.check.state
    <CheckState.CHECKED: 2>
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Mapping
from enum import IntEnum
from typing import Any, Callable, Iterable, TYPE_CHECKING

from ..item import Item

if TYPE_CHECKING:
    from typing import Self

logger = logging.getLogger(__name__)


class CheckState(IntEnum):
    """Three-valued reading of an ItemCheck."""

    UNCHECKED = 0
    INDETERMINATE = 1
    CHECKED = 2


def _check_of(item: Item) -> ItemCheck | None:
    return getattr(item, 'check', None)


class ItemCheck:
    """Check state of one CheckItem.

    Attributes:
        unlink: When True, the parent and the children of the host do not
            affect each other through this node.
    """

    __slots__ = ('_checked', 'unlink', '_item')

    def __init__(
        self,
        item: Item | None = None,
        checked: bool = False,
        unlink: bool = False,
    ) -> None:
        """Initialize an ItemCheck.

        Args:
            item: Host item. Bound last, so the initial checked assignment
                never reaches the children.
            checked: Initial stored bit.
            unlink: Initial unlink flag.
        """
        self._item: weakref.ref[Item] | None = None
        self.unlink = unlink
        self.checked = checked
        self.item = item

    def __repr__(self) -> str:
        return (
            f"ItemCheck(state={self.state.name}, stored={self._checked}, "
            f"unlink={self.unlink})"
        )

    @property
    def item(self) -> Item | None:
        """The host item, or None when unbound."""
        if self._item is None:
            return None
        return self._item()

    @item.setter
    def item(self, value: Item | None) -> None:
        self._item = None if value is None else weakref.ref(value)

    def _children(self) -> Iterable[Item]:
        item = self.item
        if item is None:
            return ()
        return getattr(item, 'children', None) or ()

    @property
    def checked(self) -> bool:
        """Stored bit on leaves and unlinked nodes, else all children checked."""
        children = self._children()
        if self.unlink or not len(children):
            return self._checked
        for a in children:
            check = _check_of(a)
            if check is None or not check.checked:
                return False
        return True

    @checked.setter
    def checked(self, value: bool) -> None:
        self._checked = bool(value)
        if self.unlink:
            return
        for a in self._children():
            check = _check_of(a)
            if check is not None:
                check.checked = value

    @property
    def indeterminate(self) -> bool:
        """True when the subtree below mixes checked and unchecked nodes."""
        children = self._children()
        if self.unlink or not len(children):
            return False
        count = 0
        for a in children:
            check = _check_of(a)
            if check is None:
                continue
            if check.indeterminate:
                return True
            if check.checked:
                count += 1
        return 0 < count < len(children)

    @property
    def state(self) -> CheckState:
        if self.indeterminate:
            return CheckState.INDETERMINATE
        if self.checked:
            return CheckState.CHECKED
        return CheckState.UNCHECKED

    def as_dict(self) -> dict[str, bool]:
        """Raw stored fields, as accepted by merge()."""
        return {'checked': self._checked, 'unlink': self.unlink}

    def merge(self, fields: ItemCheck | Mapping[str, Any]) -> None:
        """Overwrite the raw stored fields, without cascading.

        Args:
            fields: Another ItemCheck, or a mapping with optional
                'checked' and 'unlink' keys.
        """
        if isinstance(fields, ItemCheck):
            fields = fields.as_dict()
        if 'checked' in fields:
            self._checked = bool(fields['checked'])
        if 'unlink' in fields:
            self.unlink = bool(fields['unlink'])

    def copy(self) -> ItemCheck:
        """Unbound copy carrying the stored bit and the unlink flag."""
        return ItemCheck(None, self._checked, self.unlink)


class CheckItem(Item):
    """An Item carrying an ItemCheck.

    Attributes:
        check: The node's check state, bound to this node.

    Example:
        >>> item = CheckItem('$', None, [CheckItem('0', 0), CheckItem('1', 1)])
        >>> item.check.checked = True
        >>> [a.check.checked for a in item.children]
        [True, True]
    """

    _reserved_fields = Item._reserved_fields | {'check'}

    def __init__(
        self,
        name: str,
        value: Any = None,
        children: Iterable[Item] | None = None,
        meta: dict[str, Any] | None = None,
        check: ItemCheck | None = None,
    ) -> None:
        """Initialize a CheckItem.

        Args:
            name: The node's name, unique among its siblings.
            value: The node's payload.
            children: Optional initial children.
            meta: Optional annotations dict.
            check: Optional ItemCheck; it is bound to this node. A fresh
                unchecked one is created by default.
        """
        super().__init__(name, value, children, meta)
        self.check = self._bind_check(check)

    def _bind_check(self, check: ItemCheck | None) -> ItemCheck:
        if check is None:
            return ItemCheck(self)
        check.item = self
        return check

    def _clone_args(self) -> tuple:
        return (self.check.copy(),)

    @classmethod
    def from_dict(cls, source: Mapping[str, Any]) -> Self:
        """Lift a plain mapping, seeding state from an optional 'check' key."""
        item = super().from_dict(source)
        fields = source.get('check')
        if isinstance(fields, Mapping):
            item.check.merge(fields)
        return item

    @classmethod
    def from_item(
        cls,
        source: Item,
        assign: Callable[[CheckItem, Item], ItemCheck | Mapping[str, Any] | None] | None = None,
    ) -> Self:
        """Build a new CheckItem tree paralleling source.

        Args:
            source: Root of the tree to mirror. It is not modified.
            assign: Optional ``assign(new_node, source_node)`` called once
                per node, children first. It may set ``new_node.check``
                fields directly, return an ItemCheck to use, or return a
                mapping of fields.

        Returns:
            The new root. A check already carried by a source node wins,
            field by field, over what assign provided.
        """
        item = cls(
            source.name,
            source.value,
            [cls.from_item(a, assign) for a in getattr(source, 'children', None) or []],
            dict(source.meta),
        )
        item._assign_extra(source)

        if assign is not None:
            item.check = item._resolve_assigned(assign(item, source), item.check)
        origin = getattr(source, 'check', None)
        if isinstance(origin, (ItemCheck, Mapping)):
            item.check.merge(origin)
        return item

    @classmethod
    def decorate_item(
        cls,
        source: Item,
        assign: Callable[[Item], ItemCheck | Mapping[str, Any] | None] | None = None,
    ) -> CheckItem:
        """Turn an existing Item tree into CheckItems, in place.

        Children are decorated first. Node identities and the tree shape
        are kept; only the class of each node changes.

        Args:
            source: Root of the tree to decorate.
            assign: Optional ``assign(node)`` with the same return
                conventions as in from_item. The node already carries a
                fresh ItemCheck when it is called.

        Returns:
            source itself.
        """
        for a in source.children:
            cls.decorate_item(a, assign)

        origin = getattr(source, 'check', None)
        if not isinstance(source, cls):
            logger.debug("decorate %r as %s", source.name, cls.__name__)
            source.__class__ = cls
        item: CheckItem = source  # type: ignore[assignment]
        item.check = ItemCheck(item)

        if assign is not None:
            item.check = item._resolve_assigned(assign(item), item.check)
        if isinstance(origin, (ItemCheck, Mapping)):
            item.check.merge(origin)
        return item

    def _resolve_assigned(self, result: Any, default: ItemCheck) -> ItemCheck:
        """Pick the ItemCheck an assign callback asked for.

        A check already bound to another live node is copied, so that node
        keeps its own state.
        """
        if isinstance(result, ItemCheck):
            owner = result.item
            if owner is not None and owner is not self:
                result = result.copy()
            return self._bind_check(result)
        check = self._bind_check(default)
        if isinstance(result, Mapping):
            check.merge(result)
        return check

    def as_dict(self) -> dict[str, Any]:
        result = super().as_dict()
        result['check'] = self.check.as_dict()
        return result
