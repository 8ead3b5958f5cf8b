# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for Items forest operations."""

import pytest

from itemtree import Item, Items


def create_forest():
    """Two roots: 'a' with children a0, a1 and leaf 'b'."""
    return [
        Item('a', 1, [Item('a0', 0), Item('a1', 2)]),
        Item('b', 0),
    ]


class TestItemsConstruction:
    """Tests for from_list, from_with and from_tree."""

    def test_from_list(self):
        """Test every mapping is lifted in order."""
        roots = Items.from_list([
            {'name': 'a', 'value': 1},
            {'name': 'b', 'value': 2, 'children': [{'name': 'c', 'value': 3}], 'kind': 'x'},
        ])
        assert [a.name for a in roots] == ['a', 'b']
        assert roots[1].children[0].parent is roots[1]
        assert roots[1].kind == 'x'

    def test_from_with(self):
        """Test flat items from arbitrary objects."""
        users = [{'id': 'u1', 'age': 30}, {'id': 'u2', 'age': 40}]
        roots = Items.from_with(users, lambda u: u['id'], lambda u: u['age'])
        assert [(a.name, a.value) for a in roots] == [('u1', 30), ('u2', 40)]
        assert all(len(a.children) == 0 for a in roots)

    def test_from_with_default_value(self):
        """Test the value defaults to the source object itself."""
        users = [{'id': 'u1'}]
        roots = Items.from_with(users, lambda u: u['id'])
        assert roots[0].value is users[0]

    def test_from_tree(self):
        """Test nested objects become nested items."""
        source = [
            {'key': 'root', 'data': 0, 'sub': [
                {'key': 'x', 'data': 1, 'sub': None},
                {'key': 'y', 'data': 2, 'sub': [{'key': 'z', 'data': 3}]},
            ]},
        ]
        roots = Items.from_tree(
            source,
            lambda o: o['key'],
            lambda o: o['data'],
            lambda o: o.get('sub'),
        )
        assert len(roots) == 1
        root = roots[0]
        assert [a.name for a in root.all()] == ['root', 'x', 'y', 'z']
        assert root.find(lambda a: a.name == 'z').chain[0] is root
        assert len(root.children[0].children) == 0

    def test_from_tree_calls_children_extractor_once_per_node(self):
        """Test the children extractor is consulted for every node."""
        seen = []

        def children(o):
            seen.append(o['key'])
            return o.get('sub', [])

        Items.from_tree(
            [{'key': 'a', 'sub': [{'key': 'b'}]}, {'key': 'c'}],
            lambda o: o['key'],
            lambda o: None,
            children,
        )
        assert seen == ['a', 'b', 'c']


class TestItemsTraversal:
    """Tests for forest-level traversals."""

    def test_traverse_pre_order(self):
        """Test roots are visited one whole subtree at a time."""
        roots = create_forest()
        names = []
        assert Items.traverse_pre_order(roots, lambda a: names.append(a.name)) is False
        assert names == ['a', 'a0', 'a1', 'b']

    def test_traverse_post_order(self):
        """Test post-order over each root in turn."""
        roots = create_forest()
        names = []
        assert Items.traverse_post_order(roots, lambda a: names.append(a.name)) is False
        assert names == ['a0', 'a1', 'a', 'b']

    def test_stop_in_first_root_skips_later_roots(self):
        """Test a stop inside root 0 prevents visiting root 1."""
        roots = create_forest()
        names = []

        def process(a):
            names.append(a.name)
            return a.name == 'a0'

        assert Items.traverse_pre_order(roots, process) is True
        assert names == ['a', 'a0']

        names.clear()
        assert Items.traverse_post_order(roots, process) is True
        assert names == ['a0']


class TestItemsTransforms:
    """Tests for forest-level update, copy, map, filter and prune."""

    def test_update_matches_roots_by_name(self):
        """Test same-named roots are merged in place."""
        roots = create_forest()
        a = roots[0]
        Items.update(roots, [Item('a', 'A', [Item('a1', 'A1')]), Item('zzz', 0)])
        assert roots[0] is a
        assert a.value == 'A'
        assert [b.name for b in a.children] == ['a1']
        assert a.children[0].value == 'A1'
        assert [b.name for b in roots] == ['a', 'b']

    def test_copy(self):
        """Test every root is copied."""
        roots = create_forest()
        copied = Items.copy(roots)
        assert Items.as_dicts(copied) == Items.as_dicts(roots)
        assert all(a is not b for a, b in zip(copied, roots))

    def test_map(self):
        """Test every root is mapped."""
        roots = create_forest()
        mapped = Items.map(roots, lambda a: a.name.upper())
        assert [a.value for a in Items.all(mapped)] == ['A', 'A0', 'A1', 'B']

    @pytest.mark.parametrize('reserve, expected', [
        (True, ['a', 'a1']),
        (False, []),
    ])
    def test_filter(self, reserve, expected):
        """Test roots are dropped like children are."""
        roots = [
            Item('a', 0, [Item('a0', 0), Item('a1', 2)]),
            Item('b', 0),
        ]
        filtered = Items.filter(roots, lambda a: a.value > 0, reserve)
        names = [a.name for a in Items.all(filtered)]
        assert names == expected

    def test_filter_keeps_identified_roots(self):
        """Test an identified root survives without children."""
        roots = create_forest()
        filtered = Items.filter(roots, lambda a: a.name == 'a', reserve=False)
        assert [a.name for a in filtered] == ['a']
        assert len(filtered[0].children) == 0

    def test_prune(self):
        """Test every root is pruned."""
        roots = create_forest()
        pruned = Items.prune(roots, 1)
        assert [len(a.children) for a in pruned] == [0, 0]
        assert len(roots[0].children) == 2


class TestItemsQueries:
    """Tests for forest-level all, extract, find and trace."""

    def test_all(self):
        """Test all concatenates every root's nodes."""
        roots = create_forest()
        assert [a.name for a in Items.all(roots)] == ['a', 'a0', 'a1', 'b']

    def test_extract(self):
        """Test extract concatenates one level of every root."""
        roots = create_forest()
        assert [a.name for a in Items.extract(roots, 1)] == ['a0', 'a1']
        assert Items.extract(roots, 0) == roots

    def test_find(self):
        """Test find returns the first match across roots."""
        roots = create_forest()
        assert Items.find(roots, lambda a: a.value == 0) is roots[0].children[0]
        assert Items.find(roots, lambda a: a.name == 'b') is roots[1]
        assert Items.find(roots, lambda a: a.name == 'none') is None

    def test_trace(self):
        """Test trace searches every root."""
        roots = create_forest()
        target = roots[0].children[1]
        assert Items.trace(roots, target) == [roots[0], target]
        assert Items.trace(roots, roots[1]) == [roots[1]]
        assert Items.trace(roots, Item('x')) is None
