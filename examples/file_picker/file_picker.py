# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FilePicker - Example checkbox tree over a nested folder listing.

A didactic example showing how to lift arbitrary nested data into Items,
decorate it with check state, and read back the selection.
"""

from __future__ import annotations

from typing import Any

from itemtree import CheckItem, CheckState, Item, Items


class FilePicker:
    """A checkbox tree over a folder listing.

    Example:
        >>> picker = FilePicker({
        ...     'name': 'project', 'entries': [
        ...         {'name': 'src', 'entries': [{'name': 'main.py'}, {'name': 'util.py'}]},
        ...         {'name': 'README.md'},
        ...     ],
        ... })
        >>> picker.toggle('project.src.main.py')
        >>> picker.state('project.src')
        <CheckState.INDETERMINATE: 1>
        >>> picker.selected()
        ['project.src.main.py']
    """

    def __init__(self, listing: dict[str, Any]) -> None:
        roots = Items.from_tree(
            [listing],
            lambda entry: entry['name'],
            lambda entry: entry,
            lambda entry: entry.get('entries'),
        )
        self.root: CheckItem = CheckItem.decorate_item(roots[0])

    def _node(self, path: str) -> Item:
        for node_path, node in self.root.walk():
            if node_path == path:
                return node
        raise KeyError(f"Path '{path}' not found")

    def toggle(self, path: str) -> None:
        """Flip a file or a whole folder."""
        check = self._node(path).check
        check.checked = not check.checked

    def state(self, path: str) -> CheckState:
        return self._node(path).check.state

    def selected(self) -> list[str]:
        """Paths of the checked files (leaves only)."""
        return [
            path for path, node in self.root.walk()
            if not len(node.children) and node.check.checked
        ]


if __name__ == '__main__':
    picker = FilePicker({
        'name': 'project', 'entries': [
            {'name': 'src', 'entries': [{'name': 'main.py'}, {'name': 'util.py'}]},
            {'name': 'docs', 'entries': [{'name': 'index.md'}]},
            {'name': 'README.md'},
        ],
    })
    picker.toggle('project.src.main.py')
    picker.toggle('project.docs')
    for path, node in picker.root.walk():
        print(f"{'  ' * node.level}{node.name}: {node.check.state.name}")
    print('selected:', picker.selected())
