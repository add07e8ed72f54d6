# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# ovf2vmware/core/file_ops.py
"""
Atomic file operation utilities.

Converted descriptors are written to a temporary file beside the target and
renamed into place, so a failed conversion never leaves a half-written OVF.
"""

from __future__ import annotations

import os
import stat
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional


@contextmanager
def atomic_write(
    target_path: Path,
    *,
    suffix: str = ".part",
    mode: Optional[int] = None,
    delete_on_error: bool = True,
) -> Generator[Path, None, None]:
    """
    Context manager for atomic file writes using temporary file + rename.

    Creates a temporary file, yields its path for writing, then atomically
    renames it to the target path on success. Cleans up temp file on failure.

    Args:
        target_path: Final destination path
        suffix: Suffix for temporary file (default: ".part")
        mode: Permission bits applied to the file before the rename
        delete_on_error: Delete temp file if exception occurs (default: True)

    Example:
        with atomic_write(Path("/out/vm-vmware.ovf"), mode=0o644) as tmp:
            tmp.write_bytes(data)
    """
    target_path = Path(target_path)
    target_path.parent.mkdir(parents=True, exist_ok=True)

    # Same directory as the target so os.replace() stays atomic
    fd, temp_name = tempfile.mkstemp(
        suffix=suffix,
        prefix=f".{target_path.name}.",
        dir=str(target_path.parent),
    )
    temp_path = Path(temp_name)

    try:
        os.close(fd)
        yield temp_path

        if mode is not None:
            os.chmod(temp_path, mode)
        os.replace(temp_path, target_path)

    except BaseException:
        if delete_on_error:
            temp_path.unlink(missing_ok=True)
        raise


def permission_bits(path: Path) -> int:
    """Return the permission bits (rwx/setuid/sticky) of `path`."""
    return stat.S_IMODE(os.stat(path).st_mode)


def same_file(a: Path, b: Path) -> bool:
    """True if both paths name the same file (resolved, or same inode when both exist)."""
    a, b = Path(a), Path(b)
    if a.exists() and b.exists():
        return os.path.samefile(a, b)
    return a.resolve() == b.resolve()
