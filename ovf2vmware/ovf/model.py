# SPDX-License-Identifier: LGPL-3.0-or-later
# ovf2vmware/ovf/model.py
"""
Semantic records for the OVF sub-elements the editor understands.

Records are frozen; proposals derive new ones with `dataclasses.replace()`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Schema namespaces (DMTF CIM) and the prefixes OVF exporters conventionally bind to them.
OVF_NS = "http://schemas.dmtf.org/ovf/envelope/1"
RASD_NS = "http://schemas.dmtf.org/wbem/wscim/1/cim-schema/2/CIM_ResourceAllocationSettingData"
VSSD_NS = "http://schemas.dmtf.org/wbem/wscim/1/cim-schema/2/CIM_VirtualSystemSettingData"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
VBOX_NS = "http://www.virtualbox.org/ovf/machine"
VMW_NS = "http://www.vmware.com/schema/ovf"

DEFAULT_PREFIXES = {
    "ovf": OVF_NS,
    "rasd": RASD_NS,
    "vssd": VSSD_NS,
    "xsi": XSI_NS,
    "vbox": VBOX_NS,
    "vmw": VMW_NS,
}


class ResourceType:
    """CIM ResourceType codes (rasd:ResourceType) that matter for conversions."""
    OTHER = "1"
    PROCESSOR = "3"
    MEMORY = "4"
    IDE_CONTROLLER = "5"
    PARALLEL_SCSI_HBA = "6"
    ETHERNET_ADAPTER = "10"
    FLOPPY_DRIVE = "14"
    CD_DRIVE = "15"
    DVD_DRIVE = "16"
    DISK_DRIVE = "17"
    OTHER_STORAGE_DEVICE = "20"
    USB_CONTROLLER = "23"
    SOUND_CARD = "35"

    # VirtualBox exports its AHCI controller as "other storage device"
    SATA_CONTROLLER = OTHER_STORAGE_DEVICE


@dataclass(frozen=True)
class ElementKind:
    """
    A kind of sub-element the editor can locate, decode and re-serialize.

    `tag` is the unqualified tag name matched during the scan; `name` is the
    identifier used in logs and errors. Callers add kinds by creating new
    instances and registering a codec for them.
    """
    name: str
    tag: str

    def __str__(self) -> str:
        return self.name


SYSTEM_DESCRIPTOR = ElementKind("SystemDescriptor", "System")
HARDWARE_ITEM = ElementKind("HardwareItem", "Item")


@dataclass(frozen=True)
class SystemDescriptor:
    element_name: str = ""
    instance_id: str = ""
    virtual_system_identifier: str = ""
    virtual_system_type: str = ""


@dataclass(frozen=True)
class HardwareItem:
    address: str = ""
    address_on_parent: str = ""
    allocation_units: str = ""
    automatic_allocation: Optional[bool] = None
    caption: str = ""
    connection: str = ""
    description: str = ""
    element_name: str = ""
    host_resource: str = ""
    instance_id: str = ""
    parent: str = ""
    resource_sub_type: str = ""
    resource_type: str = ""
    virtual_quantity: str = ""


__all__ = [
    "OVF_NS",
    "RASD_NS",
    "VSSD_NS",
    "DEFAULT_PREFIXES",
    "ResourceType",
    "ElementKind",
    "SYSTEM_DESCRIPTOR",
    "HARDWARE_ITEM",
    "SystemDescriptor",
    "HardwareItem",
]
