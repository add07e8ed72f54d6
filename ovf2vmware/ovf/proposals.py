# SPDX-License-Identifier: LGPL-3.0-or-later
# ovf2vmware/ovf/proposals.py
"""
Ready-made edit proposals.

Each factory returns a callable suitable for EditRegistry.propose(). A
proposal handed a record of the wrong type keeps it, so a proposal can be
registered under any kind without breaking the pass.
"""
from __future__ import annotations

import dataclasses
from typing import Callable

from .actions import Delete, EditAction, EditProposal, Keep, Replace
from .model import HardwareItem, SystemDescriptor


def set_virtual_system_type(virtual_system_type: str) -> EditProposal:
    """Replace the System descriptor with one whose VirtualSystemType is `virtual_system_type`."""

    def proposal(record: object) -> EditAction:
        if not isinstance(record, SystemDescriptor):
            return Keep
        return Replace(dataclasses.replace(record, virtual_system_type=virtual_system_type))

    proposal.__name__ = f"set_virtual_system_type({virtual_system_type!r})"
    return proposal


def delete_hardware_items_matching(element_name_prefix: str, limit: int = -1) -> EditProposal:
    """
    Delete Items whose ElementName starts with `element_name_prefix`.

    At most `limit` Items are deleted by this proposal; a negative limit means
    no limit. The count is kept per returned proposal, so build a new one per pass.
    """
    remaining = limit

    def proposal(record: object) -> EditAction:
        nonlocal remaining
        if not isinstance(record, HardwareItem) or remaining == 0:
            return Keep
        if not record.element_name.startswith(element_name_prefix):
            return Keep
        if remaining > 0:
            remaining -= 1
        return Delete

    proposal.__name__ = f"delete_hardware_items_matching({element_name_prefix!r}, limit={limit})"
    return proposal


def replace_hardware_item(element_name: str, replacement: HardwareItem) -> EditProposal:
    """Replace the Item whose ElementName equals `element_name` with `replacement`."""

    def proposal(record: object) -> EditAction:
        if isinstance(record, HardwareItem) and record.element_name == element_name:
            return Replace(replacement)
        return Keep

    proposal.__name__ = f"replace_hardware_item({element_name!r})"
    return proposal


def modify_hardware_items_of_resource_type(
    resource_type: str,
    modify: Callable[[HardwareItem], HardwareItem],
) -> EditProposal:
    """Replace every Item of `resource_type` with `modify(item)`."""

    def proposal(record: object) -> EditAction:
        if isinstance(record, HardwareItem) and record.resource_type == resource_type:
            return Replace(modify(record))
        return Keep

    proposal.__name__ = f"modify_hardware_items_of_resource_type({resource_type!r}, {getattr(modify, '__name__', 'fn')})"
    return proposal


__all__ = [
    "set_virtual_system_type",
    "delete_hardware_items_matching",
    "replace_hardware_item",
    "modify_hardware_items_of_resource_type",
]
