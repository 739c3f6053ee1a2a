"""Flattened tree construction tests for ``FileTreeItems``."""

from __future__ import annotations

import unittest

from lazystage.status_tree import FileTreeItems, StatusItem, StatusItemType, path_sort_key


class FileTreeItemsBuildTests(unittest.TestCase):
    def test_build_adds_one_entry_per_directory_and_file_in_path_order(self) -> None:
        items = FileTreeItems.build(
            [
                StatusItem("src/b.py", StatusItemType.MODIFIED),
                StatusItem("README.md", StatusItemType.NEW),
                StatusItem("src/pkg/a.py", StatusItemType.DELETED),
            ]
        )

        self.assertEqual(
            [(item.full_path, item.name, item.indent, item.is_dir) for item in items],
            [
                ("README.md", "README.md", 0, False),
                ("src", "src", 0, True),
                ("src/b.py", "b.py", 1, False),
                ("src/pkg", "pkg", 1, True),
                ("src/pkg/a.py", "a.py", 2, False),
            ],
        )
        self.assertEqual(items[2].status, StatusItemType.MODIFIED)
        self.assertIsNone(items[1].status)

    def test_build_keeps_subtrees_contiguous_for_names_sorting_before_separator(self) -> None:
        items = FileTreeItems.build([StatusItem("a-b/y"), StatusItem("a/x"), StatusItem("a.txt")])
        self.assertEqual([item.full_path for item in items], ["a", "a/x", "a-b", "a-b/y", "a.txt"])

    def test_build_merges_duplicate_paths_and_ignores_empty_components(self) -> None:
        items = FileTreeItems.build(
            [
                StatusItem("a//b", StatusItemType.NEW),
                StatusItem("a/b", StatusItemType.MODIFIED),
                StatusItem("/"),
            ]
        )
        self.assertEqual([item.full_path for item in items], ["a", "a/b"])
        self.assertEqual(items[1].status, StatusItemType.MODIFIED)

    def test_build_applies_collapsed_paths_to_directories_only(self) -> None:
        items = FileTreeItems.build(
            [StatusItem("a/b/c"), StatusItem("a/d"), StatusItem("e")],
            collapsed={"a/b", "e", "missing"},
        )
        flags = {item.full_path: (item.collapsed, item.visible) for item in items}
        self.assertEqual(
            flags,
            {
                "a": (False, True),
                "a/b": (True, True),
                "a/b/c": (False, False),
                "a/d": (False, True),
                "e": (False, True),
            },
        )

    def test_index_of_finds_exact_paths_only(self) -> None:
        items = FileTreeItems.build([StatusItem("a/b"), StatusItem("a2/c")])
        self.assertEqual(items.index_of("a2"), 2)
        self.assertEqual(items.index_of("a/b"), 1)
        self.assertIsNone(items.index_of("a/"))
        self.assertIsNone(items.index_of("zzz"))
        self.assertIsNone(FileTreeItems().index_of("a"))

    def test_find_parent_index(self) -> None:
        items = FileTreeItems.build([StatusItem("a/b/c"), StatusItem("a/d"), StatusItem("e")])
        self.assertEqual(items.find_parent_index("a/b/c", 2), 1)
        self.assertEqual(items.find_parent_index("a/d", 3), 0)
        self.assertEqual(items.find_parent_index("a/b", 1), 0)
        self.assertEqual(items.find_parent_index("e", 4), 0)

    def test_path_sort_key_orders_parent_before_children(self) -> None:
        self.assertLess(path_sort_key("a"), path_sort_key("a/b"))
        self.assertLess(path_sort_key("a/b"), path_sort_key("a-b"))
        self.assertLess(path_sort_key("a/z"), path_sort_key("a2"))


if __name__ == "__main__":
    unittest.main()
