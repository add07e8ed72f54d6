# SPDX-License-Identifier: LGPL-3.0-or-later
# ovf2vmware/ovf/registry.py
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from .actions import EditProposal
from .codec import codec_for
from .model import ElementKind


class EditRegistry:
    """
    Ordered association ElementKind -> edit proposals.

    Built once by the caller, e.g.::

        registry = (
            EditRegistry()
            .propose(SYSTEM_DESCRIPTOR, set_virtual_system_type("vmx-10"))
            .propose(HARDWARE_ITEM, delete_hardware_items_matching("ideController"))
        )

    The editor works on `snapshot()`, so changes made while a pass is running
    do not affect that pass.
    """

    def __init__(self) -> None:
        self._proposals: Dict[ElementKind, List[EditProposal]] = {}

    def propose(self, kind: ElementKind, *proposals: EditProposal) -> "EditRegistry":
        for p in proposals:
            if not callable(p):
                raise TypeError(f"edit proposal for {kind.name} must be callable, got {type(p).__name__}")
        self._proposals.setdefault(kind, []).extend(proposals)
        return self

    def proposals_for(self, kind: ElementKind) -> Tuple[EditProposal, ...]:
        return tuple(self._proposals.get(kind, ()))

    def kinds(self) -> Tuple[ElementKind, ...]:
        """Kinds with at least one proposal, in first-registration order."""
        return tuple(k for k, ps in self._proposals.items() if ps)

    def snapshot(self) -> Mapping[str, Tuple[ElementKind, Tuple[EditProposal, ...]]]:
        """
        Read-only view keyed by the tag the scanner matches on.

        Raises:
            UnsupportedElementKind: a kind with proposals has no codec.
            ValueError: two registered kinds share one tag.
        """
        by_tag: Dict[str, Tuple[ElementKind, Tuple[EditProposal, ...]]] = {}
        for kind in self.kinds():
            codec_for(kind)
            if kind.tag in by_tag:
                other = by_tag[kind.tag][0]
                raise ValueError(f"element kinds {other.name} and {kind.name} both match <{kind.tag}>")
            by_tag[kind.tag] = (kind, self.proposals_for(kind))
        return MappingProxyType(by_tag)

    def __len__(self) -> int:
        return sum(len(ps) for ps in self._proposals.values())

    def __repr__(self) -> str:
        inner = ", ".join(f"{k.name}={len(ps)}" for k, ps in self._proposals.items())
        return f"EditRegistry({inner})"
