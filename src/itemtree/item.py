# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Item - an ordered tree node with structural transforms.

This module provides the Item class, the node of the itemtree library.
An Item carries a name (unique among its siblings), an opaque value, an
ordered list of children kept parent-linked, and a free-form meta dict.

Key Features:
    - **Parent links**: ``parent`` is derived from ``children`` on every
      assignment or in-place mutation, held as a weak reference
    - **Traversal**: interruptible pre-order and post-order walks
    - **Transforms**: copy, map, filter and prune return new trees of the
      same concrete class, carrying extension fields along
    - **Merge**: update() merges another tree in place, matched by name
    - **Queries**: all, extract, find, trace, chain, level

Extension fields:
    Any attribute set on an instance besides the reserved ones (see
    ``_reserved_fields``) is an extension field. It is copied by every
    operation that builds a new node out of an existing one.

Example:
    Basic usage::

        root = Item.from_dict({
            'name': '$',
            'value': None,
            'children': [
                {'name': 'a', 'value': 1},
                {'name': 'b', 'value': 2, 'color': 'red'},
            ],
        })
        root.children[1].color           # 'red'
        root.find(lambda a: a.value == 2).chain  # [root, b]
        doubled = root.map(lambda a: (a.value or 0) * 2)
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Mapping
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar, TYPE_CHECKING

from .children import ItemChildren
from .exceptions import ItemSourceError

if TYPE_CHECKING:
    from typing import Self

logger = logging.getLogger(__name__)

V = TypeVar('V')


class Item(Generic[V]):
    """A node of an ordered tree.

    Attributes:
        name: Identifier, unique among siblings. Used by update() and
            child() to match nodes.
        value: Arbitrary payload, never inspected by the tree machinery.
        meta: Free-form annotations. Shallow-copied by transforms.

    Example:
        >>> root = Item('$', None, [Item('0', 0), Item('1', 1)])
        >>> [a.name for a in root.children]
        ['0', '1']
        >>> root.children[0].parent is root
        True
    """

    # Names handled by the constructor, never copied as extension fields.
    _reserved_fields: frozenset[str] = frozenset(
        {'children', '_children', 'name', 'value', 'parent', '_parent', 'meta'}
    )
    path_separator: str = '.'

    def __init__(
        self,
        name: str,
        value: V | None = None,
        children: Iterable[Item] | None = None,
        meta: dict[str, Any] | None = None,
    ) -> None:
        """Initialize an Item.

        Args:
            name: The node's name, unique among its siblings.
            value: The node's payload.
            children: Optional initial children. Their parent is set to
                this node immediately.
            meta: Optional annotations dict. Defaults to a new empty dict.
        """
        self._parent: weakref.ref[Item] | None = None
        self.name = name
        self.value = value
        self.children = children if children is not None else []
        self.meta = {} if meta is None else meta

    @classmethod
    def from_dict(cls, source: Mapping[str, Any]) -> Self:
        """Lift a plain tree-shaped mapping into a tree of ``cls``.

        Keys ``name``, ``value``, ``children`` and ``meta`` feed the
        constructor; ``children`` is lifted recursively. Every other key
        is kept as an extension field.

        Args:
            source: Mapping with a required ``name`` and optional
                ``value``, ``children`` and ``meta``.

        Returns:
            The new root item.

        Raises:
            ItemSourceError: If source is not a mapping or has no name.

        Example:
            >>> item = Item.from_dict({'name': 'a', 'value': 1, 'tag': 'x'})
            >>> item.tag
            'x'
        """
        if not isinstance(source, Mapping):
            raise ItemSourceError(
                f"source must be a mapping, not {type(source).__name__}"
            )
        if 'name' not in source:
            raise ItemSourceError("source has no 'name'")
        item = cls(
            source['name'],
            source.get('value'),
            [cls.from_dict(a) for a in source.get('children') or []],
            source.get('meta'),
        )
        item._assign_extra(source)
        return item

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.name!r}, value={self.value!r}, "
            f"children={len(self.children)})"
        )

    # ==================== Children & Links ====================

    @property
    def children(self) -> ItemChildren:
        """The live, parent-linked child sequence."""
        return self._children

    @children.setter
    def children(self, value: Iterable[Item]) -> None:
        new_items = list(value)
        old = self.__dict__.get('_children')
        self._children = ItemChildren(self, new_items)
        if old is not None:
            for item in old:
                if not any(a is item for a in new_items) and item.parent is self:
                    item._parent = None

    @property
    def parent(self) -> Item | None:
        """The node whose children contain this one, None at the root."""
        if self._parent is None:
            return None
        return self._parent()

    @property
    def chain(self) -> list[Self]:
        """Ancestors from the true root down to this node, inclusive."""
        result = []
        current: Item | None = self
        while current is not None:
            result.append(current)
            current = current.parent
        result.reverse()
        return result

    @property
    def level(self) -> int:
        """Depth of this node from the true root (root=0)."""
        depth = 0
        current = self.parent
        while current is not None:
            depth += 1
            current = current.parent
        return depth

    def child(self, name: str, default: Any = None) -> Self | None:
        """Direct child with the given name, or default."""
        for a in self.children:
            if a.name == name:
                return a
        return default

    # ==================== Extension Fields ====================

    def _extra_fields(self) -> dict[str, Any]:
        """Extension fields of this node (non-reserved instance attributes)."""
        reserved = self._reserved_fields
        return {k: v for k, v in vars(self).items() if k not in reserved}

    def _assign_extra(self, source: Item | Mapping[str, Any]) -> None:
        """Copy the extension fields of source onto this node.

        Reserved names are taken from this node's class, so a subclass
        can protect the fields its own constructor manages. Names of
        properties (chain, level, ...) and methods (filter, copy, ...)
        are skipped too.
        """
        if isinstance(source, Item):
            extra = vars(source)
        else:
            extra = source
        cls = type(self)
        for key, value in extra.items():
            if key in self._reserved_fields:
                continue
            attr = getattr(cls, key, None)
            if isinstance(attr, property) or callable(attr):
                continue
            setattr(self, key, value)

    def _clone_args(self) -> tuple:
        """Extra constructor arguments for a same-kind copy of this node."""
        return ()

    def _create(
        self,
        name: str,
        value: Any,
        children: Iterable[Item] | None = None,
        meta: dict[str, Any] | None = None,
        *args: Any,
    ) -> Self:
        """Build a node of the same concrete class carrying our extras."""
        item = type(self)(name, value, children, meta, *args)
        item._assign_extra(self)
        return item

    # ==================== Traversal ====================

    def traverse_pre_order(self, process: Callable[[Self], Any]) -> bool:
        """Visit this node, then each child subtree in order.

        Args:
            process: Called on each node. A truthy return stops the whole
                traversal.

        Returns:
            True if the traversal was interrupted.
        """
        if process(self):
            return True
        for a in getattr(self, 'children', None) or []:
            if a.traverse_pre_order(process):
                return True
        return False

    def traverse_post_order(self, process: Callable[[Self], Any]) -> bool:
        """Visit each child subtree in order, then this node.

        Args:
            process: Called on each node. A truthy return stops the whole
                traversal.

        Returns:
            True if the traversal was interrupted.
        """
        for a in getattr(self, 'children', None) or []:
            if a.traverse_post_order(process):
                return True
        return bool(process(self))

    def walk(self, _prefix: str = '') -> Iterator[tuple[str, Self]]:
        """Yield (path, node) pairs in pre-order.

        Paths join names from this node down with ``path_separator``.

        Example:
            >>> for path, item in root.walk():
            ...     print(path, item.value)
            $ None
            $.a 1
        """
        path = f"{_prefix}{self.path_separator}{self.name}" if _prefix else self.name
        yield path, self
        for a in self.children:
            yield from a.walk(path)

    # ==================== Transforms ====================

    def update(self, other: Item) -> None:
        """Merge other into this node, matching children by name.

        The value is replaced by other's value. Each child of other either
        updates the same-named child of this node (which keeps its
        identity) or is adopted as it is, which moves it out of
        ``other.children``. Children of this node with no counterpart in
        other are dropped. The resulting order is other's.

        Args:
            other: The item to merge from.

        Example:
            >>> item.update(Item('$', '', [Item('0', 0), Item('1', 10)]))
        """
        self.value = other.value

        merged = []
        for a in other.children:
            target = self.child(a.name)
            if target is not None:
                target.update(a)
                merged.append(target)
            else:
                merged.append(a)

        if logger.isEnabledFor(logging.DEBUG):
            dropped = [a.name for a in self.children if not any(a is b for b in merged)]
            adopted = [a.name for a in merged if any(a is b for b in other.children)]
            if dropped or adopted:
                logger.debug(
                    "update %r: dropped %s, adopted %s", self.name, dropped, adopted
                )
        self.children = merged

    def copy(self) -> Self:
        """Return a deep structural copy. Values are shared, meta is shallow-copied."""
        return self._create(
            self.name,
            self.value,
            [a.copy() for a in self.children],
            dict(self.meta),
            *self._clone_args(),
        )

    def map(self, transform: Callable[[Self], Any]) -> Self:
        """Return a copy whose values are ``transform(original_node)``.

        Args:
            transform: Called on each node of this tree; its result becomes
                the value of the corresponding new node.
        """
        return self._create(
            self.name,
            transform(self),
            [a.map(transform) for a in self.children],
            dict(self.meta),
            *self._clone_args(),
        )

    def filter(self, identify: Callable[[Self], Any], reserve: bool = True) -> Self:
        """Return a copy keeping only the identified subtrees.

        Filtering on members of the value is not supported: only whole
        nodes are kept or dropped. The root itself is always returned.

        Args:
            identify: Predicate called on the original children.
            reserve: Keep a child that is not identified when some of its
                descendants are.

        Returns:
            The filtered copy.
        """
        children = []
        for a in self.children:
            filtered = a.filter(identify, reserve)
            if identify(a) or (reserve and len(filtered.children)):
                children.append(filtered)
        return self._create(
            self.name,
            self.value,
            children,
            dict(self.meta),
            *self._clone_args(),
        )

    def prune(self, level: int = 1) -> Self:
        """Return a copy without the nodes at ``level`` and deeper.

        Args:
            level: Depth of the first removed level, relative to the true
                root. Must be 1 or larger.
        """
        result = self.copy()

        def _clear(item: Item) -> None:
            if item.level == level - 1:
                item.children = []

        result.traverse_post_order(_clear)
        return result

    # ==================== Queries ====================

    def all(self) -> list[Self]:
        """Every node of the subtree, depth first, root first."""
        result: list[Item] = []
        self.traverse_pre_order(result.append)
        return result

    def extract(self, level: int = 1) -> list[Self]:
        """Nodes exactly ``level`` levels below this one."""
        current = [self]
        for _ in range(level):
            current = [b for a in current for b in (getattr(a, 'children', None) or [])]
        return current

    def find(self, identify: Callable[[Self], Any]) -> Self | None:
        """First node in pre-order satisfying identify, or None."""
        found: list[Item] = []

        def _match(item: Item) -> bool:
            if identify(item):
                found.append(item)
                return True
            return False

        self.traverse_pre_order(_match)
        return found[0] if found else None

    def trace(self, target: Item) -> list[Self] | None:
        """Path from this node down to target, inclusive.

        Returns:
            The nodes from this one to target, or None if target is not
            in this subtree. Nodes are matched by identity.
        """
        if self is target:
            return [self]
        for a in getattr(self, 'children', None) or []:
            path = a.trace(target)
            if path is not None:
                return [self, *path]
        return None

    # ==================== Conversion ====================

    def as_dict(self) -> dict[str, Any]:
        """Convert to the plain shape accepted by from_dict (recursive)."""
        result: dict[str, Any] = {
            'name': self.name,
            'value': self.value,
            'children': [a.as_dict() for a in self.children],
            'meta': dict(self.meta),
        }
        result.update(self._extra_fields())
        return result
