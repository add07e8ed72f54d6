# SPDX-License-Identifier: LGPL-3.0-or-later
# ovf2vmware/converters/vmware.py
"""
VirtualBox -> VMware OVF conversion.

VMware's importer rejects a few things VirtualBox writes into its OVF exports.
The basic conversion:

  - sets the compatibility level (vssd:VirtualSystemType) to vmx-10
  - removes IDE controllers
  - turns the AHCI controller into a VMware SATA controller
  - disables automatic allocation of CD/DVD drives
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from ..core.exceptions import Fatal, wrap_io
from ..core.file_ops import atomic_write, permission_bits, same_file
from ..core.logger import Log
from ..core.logging_utils import get_logger, log_step
from ..core.utils import U
from ..ovf.editor import EditStats, edit
from ..ovf.model import HARDWARE_ITEM, SYSTEM_DESCRIPTOR, HardwareItem, ResourceType
from ..ovf.proposals import (
    delete_hardware_items_matching,
    modify_hardware_items_of_resource_type,
    set_virtual_system_type,
)
from ..ovf.registry import EditRegistry

DEFAULT_SYSTEM_TYPE = "vmx-10"
IDE_CONTROLLER_PREFIX = "ideController"


@dataclass(frozen=True)
class VmwareOptions:
    system_type: Optional[str] = DEFAULT_SYSTEM_TYPE
    remove_ide: bool = True
    ide_limit: int = -1  # negative: remove all
    convert_sata: bool = True
    fix_cdrom: bool = True
    validate_output: bool = True


def convert_sata_controller(item: HardwareItem) -> HardwareItem:
    digits = "".join(ch for ch in item.element_name if ch.isdigit())
    return dataclasses.replace(
        item,
        caption="SATA Controller",
        description="SATAController",
        element_name=f"SATAController{digits}",
        resource_sub_type="vmware.sata.ahci",
    )


def disable_automatic_allocation(item: HardwareItem) -> HardwareItem:
    return dataclasses.replace(item, automatic_allocation=False)


def build_vmware_registry(options: Optional[VmwareOptions] = None) -> EditRegistry:
    """Registry for the basic conversion; proposal order is significant."""
    options = options or VmwareOptions()
    registry = EditRegistry()

    if options.system_type:
        registry.propose(SYSTEM_DESCRIPTOR, set_virtual_system_type(options.system_type))
    if options.remove_ide:
        registry.propose(HARDWARE_ITEM, delete_hardware_items_matching(IDE_CONTROLLER_PREFIX, options.ide_limit))
    if options.convert_sata:
        registry.propose(
            HARDWARE_ITEM,
            modify_hardware_items_of_resource_type(ResourceType.SATA_CONTROLLER, convert_sata_controller),
        )
    if options.fix_cdrom:
        registry.propose(
            HARDWARE_ITEM,
            modify_hardware_items_of_resource_type(ResourceType.CD_DRIVE, disable_automatic_allocation),
        )
    return registry


def basic_convert(
    data: bytes,
    options: Optional[VmwareOptions] = None,
    *,
    logger: Optional[Any] = None,
    stats: Optional[EditStats] = None,
) -> bytes:
    """Convert an OVF document (bytes) into its VMware-friendly form."""
    options = options or VmwareOptions()
    return edit(
        data,
        build_vmware_registry(options),
        logger=logger,
        validate_output=options.validate_output,
        stats=stats,
    )


def default_output_path(src: Union[str, Path]) -> Path:
    """`dir/name.ovf` -> `dir/name-vmware.ovf` (suffix defaults to .ovf)."""
    src = Path(src)
    suffix = src.suffix or ".ovf"
    return src.with_name(f"{src.stem}-vmware{suffix}")


def convert_file(
    src: Union[str, Path],
    dst: Optional[Union[str, Path]] = None,
    options: Optional[VmwareOptions] = None,
    *,
    logger: Optional[logging.Logger] = None,
    dry_run: bool = False,
    force: bool = False,
    stats: Optional[EditStats] = None,
) -> Path:
    """
    Convert the OVF at `src` and write it to `dst` with the same permission bits.

    Raises:
        Fatal: src and dst are the same file, or dst exists and force is False.
        IoError: src cannot be read or dst cannot be written.
        MalformedDocument / DecodeError: see ovf2vmware.ovf.edit().
    """
    logger = get_logger(logger)
    src = Path(src)
    dst = Path(dst) if dst is not None else default_output_path(src)

    if same_file(src, dst):
        raise Fatal(2, f"Output path must differ from input path: {src}")
    if dst.exists() and not force and not dry_run:
        raise Fatal(2, f"Output file already exists (use --force to overwrite): {dst}")

    log = Log.bind(logger, src=str(src), dst=str(dst))

    Log.step(logger, f"Reading {src}")
    try:
        data = src.read_bytes()
        mode = permission_bits(src)
    except OSError as e:
        raise wrap_io(f"Cannot read OVF {src}", e, path=str(src)) from e

    stats = stats if stats is not None else EditStats()
    with log_step(logger, f"Converting {src.name}"):
        out = basic_convert(data, options, logger=logger, stats=stats)

    log.info(
        "Converted OVF: %s replaced, %s deleted",
        U.plural(stats.replaced, "element"),
        U.plural(stats.deleted, "element"),
    )

    if dry_run:
        Log.warn(logger, "Dry run: not writing output", dst=str(dst))
        return dst

    try:
        with atomic_write(dst, mode=mode) as tmp:
            tmp.write_bytes(out)
    except OSError as e:
        raise wrap_io(f"Cannot write OVF {dst}", e, path=str(dst)) from e

    Log.ok(logger, f"Saved converted file to {dst}")
    return dst
