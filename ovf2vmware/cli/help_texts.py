# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# ovf2vmware/cli/help_texts.py
from __future__ import annotations

# NOTE:
# This module is pure help/documentation text used by argparse epilog rendering.
# Keep it "copy/paste runnable" and avoid importing heavy dependencies here.

YAML_EXAMPLE = r"""# ovf2vmware configuration example (YAML)
#
# Run:
# ovf2vmware --config vmware.yaml -f centos7.ovf
#
# Merge multiple configs (later overrides earlier):
# ovf2vmware --config base.yaml --config overrides.yaml -f centos7.ovf
#
# CLI flags always override config values.
#
# input: ./centos7.ovf
# output: ./centos7-vmware.ovf   # default: <input stem>-vmware<suffix>
# force: false                   # overwrite an existing output file
# dry_run: false                 # convert, but do not write
#
# Conversion policy:
# system_type: vmx-10            # vssd:VirtualSystemType written to System
# remove_ide: true               # drop Items named ideController*
# ide_limit: -1                  # at most N IDE controllers (-1 = all)
# convert_sata: true             # AHCI controller -> vmware.sata.ahci
# fix_cdrom: true                # rasd:AutomaticAllocation=false on CD drives
# validate_output: true          # re-parse the converted OVF before writing
#
# Logging:
# verbose: 0                     # or CLI: -v/-vv/-vvv
# log_file: ./ovf2vmware.log
# json_logs: false
"""

FEATURE_SUMMARY = """ • Edits OVF descriptors in place: untouched lines stay byte-identical\n
 • Keeps indentation, namespace prefixes, attribute order and line endings\n
 • System: sets the VMware compatibility level (vmx-N)\n
 • Hardware: removes IDE controllers, converts the SATA controller, disables CD-ROM auto allocation\n
 • Safety: validates input and output XML, atomic writes, keeps file permissions, dry-run\n
"""
