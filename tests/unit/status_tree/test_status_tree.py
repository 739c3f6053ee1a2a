"""Selection, collapse, and visibility tests for ``StatusTree``.

Covers rebuild reconciliation by path, cursor movement across hidden rows,
and the non-recursive expand behavior.
"""

from __future__ import annotations

import unittest

from lazystage.status_tree import MoveSelection, StatusItem, StatusTree


def _status(*paths: str) -> list[StatusItem]:
    return [StatusItem(path) for path in paths]


def _visibles(tree: StatusTree) -> list[bool]:
    return [item.visible for item in tree.tree]


def _paths(tree: StatusTree) -> list[str]:
    return [item.full_path for item in tree.tree]


def _tree(*paths: str) -> StatusTree:
    tree = StatusTree()
    tree.update(_status(*paths))
    return tree


class StatusTreeSelectionTests(unittest.TestCase):
    def test_down_then_left_returns_to_parent_directory(self) -> None:
        tree = _tree("a/b")
        self.assertEqual(_paths(tree), ["a", "a/b"])

        self.assertTrue(tree.move_selection(MoveSelection.DOWN))
        self.assertEqual(tree.selection, 1)

        self.assertTrue(tree.move_selection(MoveSelection.LEFT))
        self.assertEqual(tree.selection, 0)

    def test_update_keeps_selected_path_when_it_moves(self) -> None:
        tree = _tree("b")
        self.assertEqual(tree.selection, 0)

        tree.update(_status("a", "b"))

        self.assertEqual(tree.selection, 1)
        self.assertEqual(tree.selected_item().full_path, "b")

    def test_update_falls_back_to_previous_index_when_path_disappears(self) -> None:
        tree = _tree("a", "b")
        tree.selection = 1

        tree.update(_status("d", "c", "a"))

        self.assertEqual(_paths(tree), ["a", "c", "d"])
        self.assertEqual(tree.selection, 1)

    def test_update_clamps_fallback_index_to_last_entry(self) -> None:
        tree = _tree("a", "b", "c")
        tree.selection = 2

        tree.update(_status("x"))

        self.assertEqual(tree.selection, 0)

    def test_update_with_empty_list_clears_selection(self) -> None:
        tree = _tree("a/b")
        tree.update([])

        self.assertTrue(tree.is_empty())
        self.assertIsNone(tree.selection)
        self.assertIsNone(tree.selected_item())
        self.assertFalse(tree.move_selection(MoveSelection.DOWN))

        tree.update(_status("c"))
        self.assertEqual(tree.selection, 0)

    def test_empty_tree_has_no_selection_and_ignores_moves(self) -> None:
        tree = StatusTree()
        self.assertTrue(tree.is_empty())
        for direction in MoveSelection:
            self.assertFalse(tree.move_selection(direction))
        self.assertIsNone(tree.selection)

    def test_selected_item_is_a_copy(self) -> None:
        tree = _tree("a/b")
        item = tree.selected_item()
        item.visible = False
        item.collapsed = True
        self.assertTrue(tree.tree[0].visible)
        self.assertFalse(tree.tree[0].collapsed)

    def test_down_skips_collapsed_subtree(self) -> None:
        tree = _tree("a/b/c", "a/d")
        self.assertEqual(_paths(tree), ["a", "a/b", "a/b/c", "a/d"])
        tree.collapse("a/b", 1)
        tree.selection = 1

        self.assertTrue(tree.move_selection(MoveSelection.DOWN))
        self.assertEqual(tree.selection, 3)

    def test_up_skips_collapsed_subtree(self) -> None:
        tree = _tree("a/b/c", "a/d")
        tree.collapse("a/b", 1)
        tree.selection = 3

        self.assertTrue(tree.move_selection(MoveSelection.UP))
        self.assertEqual(tree.selection, 1)

    def test_down_at_hidden_tail_is_noop(self) -> None:
        tree = _tree("a", "b/c")
        self.assertEqual(_paths(tree), ["a", "b", "b/c"])
        tree.collapse("b", 1)
        tree.selection = 1

        self.assertFalse(tree.move_selection(MoveSelection.DOWN))
        self.assertEqual(tree.selection, 1)

    def test_up_at_first_row_is_noop(self) -> None:
        tree = _tree("a", "b")
        self.assertFalse(tree.move_selection(MoveSelection.UP))
        self.assertEqual(tree.selection, 0)

    def test_down_at_last_row_is_noop(self) -> None:
        tree = _tree("a", "b")
        tree.selection = 1
        self.assertFalse(tree.move_selection(MoveSelection.DOWN))
        self.assertEqual(tree.selection, 1)

    def test_moves_never_land_on_hidden_rows(self) -> None:
        tree = _tree("a/b/c", "a/b/d", "a/e", "f/g", "h")
        tree.collapse("a/b", 1)
        tree.collapse("f", 5)

        seen: list[int] = [tree.selection]
        while tree.move_selection(MoveSelection.DOWN):
            seen.append(tree.selection)
        while tree.move_selection(MoveSelection.UP):
            seen.append(tree.selection)

        for idx in seen:
            self.assertTrue(tree.tree[idx].visible, tree.tree[idx].full_path)
        self.assertEqual(seen[-1], 0)


class StatusTreeLeftRightTests(unittest.TestCase):
    def test_left_on_expanded_directory_collapses_in_place(self) -> None:
        tree = _tree("a/b", "c")

        self.assertTrue(tree.move_selection(MoveSelection.LEFT))

        self.assertEqual(tree.selection, 0)
        self.assertTrue(tree.tree[0].collapsed)
        self.assertEqual(_visibles(tree), [True, False, True])

    def test_left_on_collapsed_directory_moves_to_parent(self) -> None:
        tree = _tree("a/b/c")
        tree.collapse("a/b", 1)
        tree.selection = 1

        self.assertTrue(tree.move_selection(MoveSelection.LEFT))
        self.assertEqual(tree.selection, 0)
        self.assertTrue(tree.tree[1].collapsed)
        self.assertFalse(tree.tree[0].collapsed)

    def test_left_on_top_level_collapsed_directory_stays_put(self) -> None:
        tree = _tree("a/b")
        tree.collapse("a", 0)

        self.assertFalse(tree.move_selection(MoveSelection.LEFT))
        self.assertEqual(tree.selection, 0)

    def test_right_expands_collapsed_directory(self) -> None:
        tree = _tree("a/b", "c")
        tree.collapse("a", 0)

        self.assertTrue(tree.move_selection(MoveSelection.RIGHT))

        self.assertEqual(tree.selection, 0)
        self.assertFalse(tree.tree[0].collapsed)
        self.assertEqual(_visibles(tree), [True, True, True])

    def test_right_on_file_or_expanded_directory_is_noop(self) -> None:
        tree = _tree("a/b")
        self.assertFalse(tree.move_selection(MoveSelection.RIGHT))
        tree.selection = 1
        self.assertFalse(tree.move_selection(MoveSelection.RIGHT))
        self.assertEqual(tree.selection, 1)


class StatusTreeCollapseTests(unittest.TestCase):
    def test_collapsed_states_survive_update(self) -> None:
        tree = _tree("a/b", "c")
        tree.collapse("a", 0)

        self.assertEqual(tree.all_collapsed(), {"a"})
        self.assertEqual(_visibles(tree), [True, False, True])

        tree.update(_status("a/b", "c", "d"))

        self.assertEqual(tree.all_collapsed(), {"a"})
        self.assertEqual(_visibles(tree), [True, False, True, True])

    def test_collapsed_directory_that_disappears_is_forgotten(self) -> None:
        tree = _tree("a/b", "c")
        tree.collapse("a", 0)

        tree.update(_status("c"))
        tree.update(_status("a/b", "c"))

        self.assertEqual(tree.all_collapsed(), set())
        self.assertEqual(_visibles(tree), [True, True, True])

    def test_expand_restores_collapsed_subtree(self) -> None:
        tree = _tree("a/b/c", "a/d")
        tree.collapse("a/b", 1)
        self.assertEqual(_visibles(tree), [True, True, False, True])

        tree.expand("a/b", 1)
        self.assertEqual(_visibles(tree), [True, True, True, True])

    def test_expand_keeps_independently_collapsed_nested_directory(self) -> None:
        tree = _tree("a/b/c", "a/b2/d")
        self.assertEqual(_paths(tree), ["a", "a/b", "a/b/c", "a/b2", "a/b2/d"])

        tree.collapse("a/b", 1)
        tree.collapse("a", 0)
        self.assertEqual(_visibles(tree), [True, False, False, False, False])

        tree.expand("a", 0)
        self.assertEqual(_visibles(tree), [True, True, False, True, True])
        self.assertTrue(tree.tree[1].collapsed)

    def test_expand_with_collapsed_sub_parts(self) -> None:
        tree = _tree("a/b/c", "a/d")
        tree.collapse("a/b", 1)
        tree.collapse("a", 0)
        self.assertEqual(_visibles(tree), [True, False, False, False])

        tree.expand("a", 0)
        self.assertEqual(_visibles(tree), [True, True, False, True])

    def test_collapse_does_not_hide_sibling_sharing_name_prefix(self) -> None:
        tree = _tree("a/b", "a2/c")
        self.assertEqual(_paths(tree), ["a", "a/b", "a2", "a2/c"])

        tree.collapse("a", 0)
        self.assertEqual(_visibles(tree), [True, False, True, True])

    def test_expand_stops_at_end_of_subtree(self) -> None:
        tree = _tree("a/b", "c/d")
        tree.collapse("c", 2)
        tree.collapse("a", 0)
        self.assertEqual(_visibles(tree), [True, False, True, False])

        tree.expand("a", 0)
        self.assertEqual(_visibles(tree), [True, True, True, False])

    def test_collapse_with_name_containing_dash_hides_only_its_subtree(self) -> None:
        tree = _tree("a/x", "a-b/y")
        self.assertEqual(_paths(tree), ["a", "a/x", "a-b", "a-b/y"])

        tree.collapse("a", 0)
        self.assertEqual(_visibles(tree), [True, False, True, True])

    def test_update_recomputes_visibility_of_nested_collapsed_dirs(self) -> None:
        tree = _tree("a/b/c", "a/b2/d")
        tree.collapse("a/b", 1)
        tree.collapse("a", 0)

        tree.update(_status("a/b/c", "a/b2/d", "e"))

        self.assertEqual(tree.all_collapsed(), {"a", "a/b"})
        self.assertEqual(_visibles(tree), [True, False, False, False, False, True])

    def test_collapse_out_of_range_raises(self) -> None:
        tree = _tree("a/b")
        with self.assertRaises(IndexError):
            tree.collapse("zzz", 5)

    def test_visible_items_lists_rows_in_order(self) -> None:
        tree = _tree("a/b", "c")
        tree.collapse("a", 0)
        self.assertEqual([(idx, item.full_path) for idx, item in tree.visible_items()], [(0, "a"), (2, "c")])


if __name__ == "__main__":
    unittest.main()
