# SPDX-License-Identifier: LGPL-3.0-or-later
# ovf2vmware/ovf/actions.py
"""
Edit actions and their evaluation.

A proposal is any callable taking a decoded record and returning an EditAction.
Proposals registered for a kind run in registration order; the first one that
does not answer Keep decides, and the rest are never called.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Optional


class ActionKind(str, Enum):
    KEEP = "keep"
    DELETE = "delete"
    REPLACE = "replace"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class EditAction:
    kind: ActionKind
    record: Optional[Any] = None

    def __post_init__(self) -> None:
        if self.kind is ActionKind.REPLACE and self.record is None:
            raise ValueError("a replace action needs a record")
        if self.kind is not ActionKind.REPLACE and self.record is not None:
            raise ValueError(f"a {self.kind} action carries no record")

    @property
    def is_keep(self) -> bool:
        return self.kind is ActionKind.KEEP

    @property
    def is_delete(self) -> bool:
        return self.kind is ActionKind.DELETE

    @property
    def is_replace(self) -> bool:
        return self.kind is ActionKind.REPLACE

    @classmethod
    def replace(cls, record: Any) -> "EditAction":
        return cls(ActionKind.REPLACE, record)

    def __repr__(self) -> str:
        if self.is_replace:
            return f"Replace({self.record!r})"
        return self.kind.value.capitalize()


Keep = EditAction(ActionKind.KEEP)
Delete = EditAction(ActionKind.DELETE)
Replace = EditAction.replace

EditProposal = Callable[[Any], EditAction]


def evaluate(record: Any, proposals: Iterable[EditProposal]) -> EditAction:
    """
    Decide what happens to one decoded element.

    Returns Keep when there are no proposals or every proposal keeps the element.

    Raises:
        TypeError: a proposal returned something other than an EditAction.
    """
    for proposal in proposals:
        action = proposal(record)
        if not isinstance(action, EditAction):
            name = getattr(proposal, "__name__", repr(proposal))
            raise TypeError(f"edit proposal {name} returned {type(action).__name__}, expected EditAction")
        if not action.is_keep:
            return action
    return Keep
