import pytest


@pytest.fixture
def tree(parser):
    return parser.parse(b"def foo():\n    pass\n")


class TestTreeCursor:
    def test_starts_at_root(self, tree):
        cursor = tree.walk()
        assert cursor.node.type == "module"
        assert cursor.tree is tree

    def test_goto_first_child(self, tree):
        cursor = tree.walk()
        assert cursor.goto_first_child()
        assert cursor.node.type == "function_definition"
        assert cursor.goto_first_child()
        assert cursor.node.type == "def"

    def test_goto_next_sibling(self, tree):
        cursor = tree.walk()
        cursor.goto_first_child()
        cursor.goto_first_child()
        types = [cursor.node.type]
        while cursor.goto_next_sibling():
            types.append(cursor.node.type)
        assert types == ["def", "identifier", "parameters", ":", "block"]

    def test_next_sibling_at_last_child(self, tree):
        cursor = tree.walk()
        cursor.goto_first_child()
        cursor.goto_first_child()
        while cursor.goto_next_sibling():
            pass
        last = cursor.node
        assert cursor.goto_next_sibling() is False
        assert cursor.node == last
        assert cursor.node.type == "block"

    def test_goto_parent_at_root(self, tree):
        cursor = tree.walk()
        assert cursor.goto_parent() is False
        assert cursor.node == tree.root_node

    def test_descend_then_climb(self, tree):
        cursor = tree.walk()
        depth = 0
        while cursor.goto_first_child():
            depth += 1
        assert depth > 1
        assert cursor.goto_first_child() is False

        climbed = 0
        while cursor.goto_parent():
            climbed += 1
        assert climbed == depth
        assert cursor.node == tree.root_node

    def test_whole_tree_walk_matches_children(self, tree):
        visited = []
        cursor = tree.walk()
        while True:
            visited.append(cursor.node)
            if cursor.goto_first_child():
                continue
            while not cursor.goto_next_sibling():
                if not cursor.goto_parent():
                    break
            else:
                continue
            break

        def recurse(node):
            yield node
            for child in node.children:
                yield from recurse(child)

        assert visited == list(recurse(tree.root_node))

    def test_walk_from_node(self, tree):
        func = tree.root_node.children[0]
        cursor = func.walk()
        assert cursor.node == func
        assert cursor.goto_first_child()
        assert cursor.node.parent == func


class TestCachedNode:
    def test_node_is_cached(self, tree):
        cursor = tree.walk()
        assert cursor.node is cursor.node

    def test_read_only_access_keeps_cache(self, tree):
        cursor = tree.walk()
        cursor.goto_first_child()
        node = cursor.node
        cursor.current_field_name()
        repr(cursor)
        assert cursor.node is node

    @pytest.mark.parametrize(
        "moves",
        [
            pytest.param(("goto_first_child",), id="first_child"),
            pytest.param(("goto_first_child", "goto_next_sibling"), id="next_sibling"),
            pytest.param(("goto_first_child", "goto_parent"), id="parent"),
        ],
    )
    def test_moves_invalidate(self, tree, moves):
        cursor = tree.walk()
        cursor.goto_first_child()
        for move in moves:
            before = cursor.node
            assert getattr(cursor, move)()
            assert cursor.node is not before
            assert cursor.node != before

    def test_failed_move_keeps_cache(self, tree):
        cursor = tree.walk()
        node = cursor.node
        assert cursor.goto_parent() is False
        assert cursor.goto_next_sibling() is False
        assert cursor.node is node


class TestFieldName:
    def test_field_names(self, tree):
        cursor = tree.walk()
        cursor.goto_first_child()
        assert cursor.current_field_name() is None
        cursor.goto_first_child()
        names = [(cursor.node.type, cursor.current_field_name())]
        while cursor.goto_next_sibling():
            names.append((cursor.node.type, cursor.current_field_name()))
        assert names == [
            ("def", None),
            ("identifier", "name"),
            ("parameters", "parameters"),
            (":", None),
            ("block", "body"),
        ]

    def test_root_has_no_field(self, tree):
        assert tree.walk().current_field_name() is None
