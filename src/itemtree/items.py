# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Items - Item operations lifted to forests.

A forest is a plain ordered list of root items. Each static method of
Items applies the matching Item operation to every root in order and
collects the results in root order.

Example:
    >>> roots = Items.from_list([
    ...     {'name': 'a', 'value': 1},
    ...     {'name': 'b', 'value': 2, 'children': [{'name': 'c', 'value': 3}]},
    ... ])
    >>> [a.name for a in Items.all(roots)]
    ['a', 'b', 'c']
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping, Sequence, TypeVar

from .item import Item

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=Item)


def _identity(origin: Any) -> Any:
    return origin


class Items:
    """Stateless batch operations over ordered lists of root items."""

    # ==================== Construction ====================

    @staticmethod
    def from_list(array: Iterable[Mapping[str, Any]]) -> list[Item]:
        """Lift a list of plain tree-shaped mappings (see Item.from_dict)."""
        return [Item.from_dict(a) for a in array]

    @staticmethod
    def from_with(
        array: Iterable[Any],
        identify_name: Callable[[Any], str],
        identify_value: Callable[[Any], Any] = _identity,
    ) -> list[Item]:
        """Map arbitrary objects to flat, childless items.

        Args:
            array: Source objects.
            identify_name: Computes the item name of an object.
            identify_value: Computes the item value. Defaults to the
                object itself.
        """
        return [Item(identify_name(a), identify_value(a)) for a in array]

    @staticmethod
    def from_tree(
        array: Iterable[Any],
        identify_name: Callable[[Any], str],
        identify_value: Callable[[Any], Any],
        identify_children: Callable[[Any], Sequence[Any] | None],
    ) -> list[Item]:
        """Map an arbitrary object tree to item trees.

        Args:
            array: Source root objects.
            identify_name: Computes the item name of an object.
            identify_value: Computes the item value of an object.
            identify_children: Returns the child objects of an object.
                None or an empty result makes a leaf.
        """
        result = []
        for a in array:
            children = list(identify_children(a) or [])
            result.append(Item(
                identify_name(a),
                identify_value(a),
                Items.from_tree(children, identify_name, identify_value, identify_children)
                if children else [],
            ))
        return result

    # ==================== Traversal ====================

    @staticmethod
    def traverse_pre_order(array: Iterable[T], process: Callable[[T], Any]) -> bool:
        """Pre-order traversal of every root in turn.

        Returns:
            True if process stopped the traversal. Later roots are then
            not visited.
        """
        for a in array:
            if a.traverse_pre_order(process):
                return True
        return False

    @staticmethod
    def traverse_post_order(array: Iterable[T], process: Callable[[T], Any]) -> bool:
        """Post-order traversal of every root in turn.

        Returns:
            True if process stopped the traversal.
        """
        for a in array:
            if a.traverse_post_order(process):
                return True
        return False

    # ==================== Transforms ====================

    @staticmethod
    def update(array: Sequence[T], others: Iterable[T]) -> None:
        """Update the roots of array from the same-named roots of others.

        Roots of others without a counterpart are ignored and array is
        not reordered.
        """
        for a in others:
            target = next((b for b in array if b.name == a.name), None)
            if target is not None:
                target.update(a)
            else:
                logger.debug("update: no root named %r, skipped", a.name)

    @staticmethod
    def copy(array: Iterable[T]) -> list[T]:
        return [a.copy() for a in array]

    @staticmethod
    def map(array: Iterable[T], transform: Callable[[T], Any]) -> list[T]:
        return [a.map(transform) for a in array]

    @staticmethod
    def filter(
        array: Iterable[T], identify: Callable[[T], Any], reserve: bool = True
    ) -> list[T]:
        """Filter every root, then drop roots that are neither identified
        nor (with reserve) left with children."""
        result = []
        for a in array:
            filtered = a.filter(identify, reserve)
            if identify(a) or (reserve and len(filtered.children)):
                result.append(filtered)
        return result

    @staticmethod
    def prune(array: Iterable[T], level: int = 1) -> list[T]:
        return [a.prune(level) for a in array]

    # ==================== Queries ====================

    @staticmethod
    def all(array: Iterable[T]) -> list[T]:
        """Every node of every root, root order then pre-order."""
        return [b for a in array for b in a.all()]

    @staticmethod
    def extract(array: Iterable[T], level: int = 1) -> list[T]:
        return [b for a in array for b in a.extract(level)]

    @staticmethod
    def find(array: Iterable[T], identify: Callable[[T], Any]) -> T | None:
        for a in array:
            target = a.find(identify)
            if target is not None:
                return target
        return None

    @staticmethod
    def trace(array: Iterable[T], target: Item) -> list[T] | None:
        for a in array:
            path = a.trace(target)
            if path is not None:
                return path
        return None

    # ==================== Conversion ====================

    @staticmethod
    def as_dicts(array: Iterable[Item]) -> list[dict[str, Any]]:
        return [a.as_dict() for a in array]
