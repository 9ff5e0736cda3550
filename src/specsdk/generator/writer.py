"""Write rendered files to the output directory.

Each file is written atomically: the content goes to a temporary file in
the destination directory which is then renamed over the target, so an
interrupted run never leaves a half-written source file behind.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from specsdk.exceptions import OutputError
from specsdk.generator.renderer import RenderedFile

logger = logging.getLogger(__name__)


def write_files(files: list[RenderedFile], output_dir: Union[str, Path]) -> list[Path]:
    """Write *files* under *output_dir*, creating it (with parents) if needed.

    Args:
        files: Rendered files, written in order.
        output_dir: Destination directory.

    Returns:
        The written paths, in the same order as *files*.

    Raises:
        OutputError: If the directory cannot be created or a file cannot be
            written. Files written before the failure are left in place.
    """
    root = Path(output_dir)
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputError(f"Cannot create output directory {root}: {exc}") from exc

    written: list[Path] = []
    for rendered in files:
        target = root / rendered.path
        try:
            _atomic_write(target, rendered.content)
        except OSError as exc:
            raise OutputError(f"Cannot write {target}: {exc}") from exc
        logger.debug("Wrote %s", target)
        written.append(target)
    return written


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is cleaned up.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
            newline="\n",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise
