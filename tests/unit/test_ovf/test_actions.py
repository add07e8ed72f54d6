# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import pytest

from ovf2vmware.ovf.actions import ActionKind, Delete, EditAction, Keep, Replace, evaluate
from ovf2vmware.ovf.model import HardwareItem


class _Counting:
    def __init__(self, action):
        self.action = action
        self.calls = 0
        self.__name__ = f"counting({action!r})"

    def __call__(self, record):
        self.calls += 1
        return self.action


@pytest.mark.unit
class TestEditAction:
    def test_constants(self):
        assert Keep.is_keep and not Keep.is_delete
        assert Delete.is_delete
        assert repr(Keep) == "Keep"
        assert repr(Delete) == "Delete"

    def test_replace_carries_record(self):
        item = HardwareItem(element_name="disk1")
        action = Replace(item)

        assert action.is_replace
        assert action.kind is ActionKind.REPLACE
        assert action.record is item
        assert "disk1" in repr(action)

    def test_replace_without_record(self):
        with pytest.raises(ValueError):
            Replace(None)

    def test_delete_with_record(self):
        with pytest.raises(ValueError):
            EditAction(ActionKind.DELETE, HardwareItem())


@pytest.mark.unit
class TestEvaluate:
    def test_no_proposals_keeps(self):
        assert evaluate(HardwareItem(), ()) is Keep

    def test_all_keep(self):
        a, b = _Counting(Keep), _Counting(Keep)

        assert evaluate(HardwareItem(), [a, b]).is_keep
        assert (a.calls, b.calls) == (1, 1)

    def test_first_non_keep_wins_and_short_circuits(self):
        replacement = HardwareItem(caption="new")
        a = _Counting(Keep)
        b = _Counting(Replace(replacement))
        c = _Counting(Delete)

        action = evaluate(HardwareItem(), [a, b, c])

        assert action.is_replace and action.record is replacement
        assert (a.calls, b.calls, c.calls) == (1, 1, 0)

    def test_delete_before_replace(self):
        b = _Counting(Replace(HardwareItem()))

        assert evaluate(HardwareItem(), [lambda r: Delete, b]) is Delete
        assert b.calls == 0

    def test_proposal_must_return_action(self):
        def bad(record):
            return None

        with pytest.raises(TypeError, match="bad"):
            evaluate(HardwareItem(), [bad])
