"""Entry construction, header insertion, and identity lookup."""

from __future__ import annotations

import unittest

from gitsi.entries import Category, EntryCollection, build_entries

from tests.helpers import I, U, W, labels, records


class BuildEntriesTests(unittest.TestCase):
    def test_inserts_one_header_before_each_non_empty_category(self) -> None:
        entries = build_entries(records(("a", "new file", I), ("b", "modified", W), ("c", "modified", W)))

        self.assertEqual(labels(entries), ["Index", "a", "Workspace", "b", "c"])
        self.assertTrue(entries[0].is_header)
        self.assertTrue(entries[2].is_header)
        self.assertFalse(entries[1].is_header)

    def test_empty_categories_get_no_header(self) -> None:
        entries = build_entries(records(("x", "untracked", U)))

        self.assertEqual(labels(entries), ["Untracked", "x"])

    def test_records_are_grouped_in_category_order(self) -> None:
        entries = build_entries(records(("u", "untracked", U), ("i", "modified", I), ("w", "deleted", W)))

        self.assertEqual(labels(entries), ["Index", "i", "Workspace", "w", "Untracked", "u"])

    def test_same_path_can_appear_in_two_categories(self) -> None:
        entries = build_entries(records(("f", "modified", I), ("f", "modified", W)))

        self.assertEqual(labels(entries), ["Index", "f", "Workspace", "f"])
        self.assertNotEqual(entries[1].identity, entries[3].identity)

    def test_empty_records_give_empty_collection(self) -> None:
        self.assertEqual(len(EntryCollection.from_records([])), 0)


class EntryCollectionTests(unittest.TestCase):
    def test_identities_are_unique_across_rebuilds(self) -> None:
        rows = records(("a", "modified", W))
        first = EntryCollection.from_records(rows)
        second = EntryCollection.from_records(rows)

        first_ids = {entry.identity for entry in first}
        second_ids = {entry.identity for entry in second}
        self.assertFalse(first_ids & second_ids)

    def test_lookup_resolves_identity_and_rejects_stale_ones(self) -> None:
        old = EntryCollection.from_records(records(("a", "modified", W)))
        new = EntryCollection.from_records(records(("a", "modified", W)))
        target = new[1]

        self.assertIs(new.lookup(target.identity), target)
        self.assertIsNone(new.lookup(old[1].identity))
        self.assertIsNone(new.lookup(None))

    def test_marked_ignores_headers_and_keeps_order(self) -> None:
        collection = EntryCollection.from_records(records(("a", "new file", I), ("b", "modified", W), ("c", "modified", W)))
        collection[0].marked = True
        collection[4].marked = True
        collection[1].marked = True

        self.assertEqual(labels(collection.marked()), ["a", "c"])

        collection.clear_marks()
        self.assertEqual(collection.marked(), [])

    def test_in_category_excludes_headers(self) -> None:
        collection = EntryCollection.from_records(records(("a", "new file", I), ("b", "modified", W)))

        self.assertEqual(labels(collection.in_category(Category.WORKSPACE)), ["b"])


if __name__ == "__main__":
    unittest.main()
