"""Action specialization per category and dispatch to the git backend."""

from __future__ import annotations

import unittest
from unittest import mock

from gitsi.actions import CHECKOUT_PROMPT, ActionDispatcher, ActionKind, action_names, resolve_action

from tests.helpers import I, U, W, make_status


def _entry(label: str, note: str, category):
    return make_status((label, note, category)).entries[1]


class ResolveActionTests(unittest.TestCase):
    def test_unstage_on_untracked_becomes_delete(self) -> None:
        self.assertIs(resolve_action(ActionKind.UNSTAGE, _entry("x", "untracked", U)), ActionKind.DELETE)

    def test_stage_on_index_is_noop(self) -> None:
        self.assertIsNone(resolve_action(ActionKind.STAGE, _entry("x", "modified", I)))

    def test_checkout_on_untracked_is_noop(self) -> None:
        self.assertIsNone(resolve_action(ActionKind.CHECKOUT, _entry("x", "untracked", U)))

    def test_delete_only_applies_to_untracked(self) -> None:
        self.assertIsNone(resolve_action(ActionKind.DELETE, _entry("x", "modified", W)))

    def test_headers_are_never_acted_on(self) -> None:
        header = make_status(("x", "modified", W)).entries[0]
        for kind in ActionKind:
            self.assertIsNone(resolve_action(kind, header))

    def test_action_names_follow_category(self) -> None:
        self.assertEqual(action_names(_entry("a", "new file", I)), ("", "unstage"))
        self.assertEqual(action_names(_entry("a", "modified", W)), ("stage", "stage delete"))
        self.assertEqual(action_names(_entry("a", "untracked", U)), ("stage", "delete file"))
        self.assertEqual(action_names(None), ("", ""))


class ActionDispatcherTests(unittest.TestCase):
    def setUp(self) -> None:
        self.backend = mock.Mock()
        self.confirm = mock.Mock(return_value=True)
        self.dispatcher = ActionDispatcher(self.backend, self.confirm)

    def test_stage_calls_backend(self) -> None:
        self.assertTrue(self.dispatcher.perform(ActionKind.STAGE, _entry("a", "modified", W)))
        self.backend.stage.assert_called_once_with("a")

    def test_unstage_routes_by_category(self) -> None:
        self.dispatcher.perform(ActionKind.UNSTAGE, _entry("a", "new file", I))
        self.dispatcher.perform(ActionKind.UNSTAGE, _entry("b", "modified", W))

        self.backend.unstage_from_index.assert_called_once_with("a")
        self.backend.unstage_from_workspace.assert_called_once_with("b")

    def test_delete_asks_for_confirmation(self) -> None:
        self.dispatcher.perform(ActionKind.UNSTAGE, _entry("junk", "untracked", U))

        self.confirm.assert_called_once_with("Delete File 'junk'?")
        self.backend.delete_untracked.assert_called_once_with("junk")

    def test_declined_delete_leaves_file(self) -> None:
        self.confirm.return_value = False

        self.assertFalse(self.dispatcher.perform(ActionKind.UNSTAGE, _entry("junk", "untracked", U)))
        self.backend.delete_untracked.assert_not_called()

    def test_checkout_variants(self) -> None:
        self.dispatcher.perform(ActionKind.CHECKOUT, _entry("gone", "deleted", W))
        self.dispatcher.perform(ActionKind.CHECKOUT, _entry("fresh", "new file", I))
        self.dispatcher.perform(ActionKind.CHECKOUT, _entry("edit", "modified", W))

        self.confirm.assert_called_with(CHECKOUT_PROMPT)
        self.assertEqual(self.confirm.call_count, 3)
        self.backend.discard_workspace_deletion.assert_called_once_with("gone")
        self.backend.unstage_from_index.assert_called_once_with("fresh")
        self.backend.checkout.assert_called_once_with("edit")

    def test_checkout_of_renamed_or_copied_index_entry_unstages(self) -> None:
        self.dispatcher.perform(ActionKind.CHECKOUT, _entry("moved", "renamed", I))
        self.dispatcher.perform(ActionKind.CHECKOUT, _entry("twin", "copied", I))

        self.assertEqual(
            self.backend.unstage_from_index.call_args_list,
            [mock.call("moved"), mock.call("twin")],
        )
        self.backend.checkout.assert_not_called()

    def test_backend_errors_propagate(self) -> None:
        self.backend.stage.side_effect = RuntimeError("index locked")

        with self.assertRaises(RuntimeError):
            self.dispatcher.perform(ActionKind.STAGE, _entry("a", "modified", W))


if __name__ == "__main__":
    unittest.main()
