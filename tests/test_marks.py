"""Mark toggling, visual-mode continuity, and batch application."""

from __future__ import annotations

import unittest
from unittest import mock

from gitsi.actions import ActionKind, apply_to_marked
from gitsi.marks import (
    cancel_visual_mode,
    enter_visual_mode,
    fallback_cursor_index,
    toggle_mark,
    toggle_section,
)

from tests.helpers import I, U, W, labels, make_status, records, selected_label


class ToggleTests(unittest.TestCase):
    def test_toggle_mark_twice_restores_flag(self) -> None:
        status = make_status(("a", "modified", W))
        entry = status.selected()

        toggle_mark(entry)
        self.assertTrue(entry.marked)
        toggle_mark(entry)
        self.assertFalse(entry.marked)

    def test_toggle_mark_ignores_headers_and_absent_entries(self) -> None:
        status = make_status(("a", "modified", W))
        header = status.view[0]

        toggle_mark(header)
        toggle_mark(None)

        self.assertFalse(header.marked)

    def test_toggle_section_unifies_to_negation_of_given_entry(self) -> None:
        status = make_status(("e1", "modified", W), ("e2", "modified", W), ("x", "untracked", U))
        e1, e2, x = status.entries[1], status.entries[2], status.entries[4]
        e2.marked = True

        toggle_section(status, e1)

        self.assertTrue(e1.marked)
        self.assertTrue(e2.marked)
        self.assertFalse(x.marked)

        toggle_section(status, e2)
        self.assertFalse(e1.marked)
        self.assertFalse(e2.marked)


class VisualModeTests(unittest.TestCase):
    def test_forward_moves_mark_every_traversed_entry(self) -> None:
        status = make_status(*[(name, "modified", W) for name in "abcdef"])
        outside = status.entries[6]
        outside.marked = True

        enter_visual_mode(status)
        status.move(1, mark_visited=True)
        status.move(2, mark_visited=True)

        self.assertEqual(labels(status.entries.marked()), ["a", "b", "c", "d", "f"])

    def test_cancel_unmarks_whole_collection(self) -> None:
        status = make_status(("a", "modified", W), ("b", "modified", W), term="a")
        status.entries[2].marked = True
        enter_visual_mode(status)

        cancel_visual_mode(status)

        self.assertEqual(status.entries.marked(), [])


class FallbackIndexTests(unittest.TestCase):
    def test_first_unmarked_at_or_after_cursor(self) -> None:
        status = make_status(("A", "modified", W), ("B", "modified", W), ("C", "modified", W))
        status.entries[1].marked = True
        status.entries[3].marked = True

        self.assertEqual(fallback_cursor_index(status), 2)

    def test_none_when_everything_after_cursor_is_marked(self) -> None:
        status = make_status(("A", "modified", W), ("B", "modified", W))
        status.move(1)
        status.entries[2].marked = True

        self.assertIsNone(fallback_cursor_index(status))


class ApplyToMarkedTests(unittest.TestCase):
    def test_acts_on_marked_entries_across_full_collection(self) -> None:
        status = make_status(("A", "new file", I), ("B", "modified", W), ("C", "modified", W))
        status.entries[1].marked = True
        status.entries[4].marked = True
        status.apply_filter("A")
        seen: list[str] = []

        def perform(kind: ActionKind, entry) -> bool:
            seen.append(entry.label)
            self.assertTrue(entry.marked)
            return True

        refresh = mock.Mock()
        processed = apply_to_marked(status, ActionKind.STAGE, perform, refresh)

        self.assertEqual(processed, 2)
        self.assertEqual(seen, ["A", "C"])
        self.assertEqual(status.entries.marked(), [])
        refresh.assert_called_once_with(None)

    def test_cursor_reresolves_to_fallback_index_after_refresh(self) -> None:
        status = make_status(("A", "modified", W), ("B", "modified", W), ("C", "modified", W))
        status.entries[1].marked = True
        status.entries[3].marked = True

        def refresh(index: int | None) -> None:
            # A and C move to the index section; view index 2 now holds C.
            status.replace_entries(
                records(("A", "modified", I), ("C", "modified", I), ("B", "modified", W)),
                index,
            )

        apply_to_marked(status, ActionKind.STAGE, lambda _kind, _entry: True, refresh)

        self.assertEqual(selected_label(status), "C")

    def test_exception_stops_batch_with_earlier_entries_unmarked(self) -> None:
        status = make_status(("A", "modified", W), ("B", "modified", W), ("C", "modified", W))
        for idx in (1, 2, 3):
            status.entries[idx].marked = True

        def perform(_kind: ActionKind, entry) -> bool:
            if entry.label == "B":
                raise RuntimeError("boom")
            return True

        refresh = mock.Mock()
        with self.assertRaises(RuntimeError):
            apply_to_marked(status, ActionKind.STAGE, perform, refresh)

        self.assertEqual(labels(status.entries.marked()), ["B", "C"])
        refresh.assert_not_called()


if __name__ == "__main__":
    unittest.main()
