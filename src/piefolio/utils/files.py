"""File helpers shared by the snapshot builder and the snapshot cache."""

import os
import tempfile
from pathlib import Path
from typing import Union


def _default_file_mode() -> int:
    # os.umask can only be read by setting it
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_text_atomic(path: Union[str, Path], text: str) -> Path:
    """
    Write text to ``path`` so readers only ever see the old or the new file.

    The content goes to a temp file in the same directory, which is then
    moved over the destination. The result gets the permissions a plain
    ``open(path, "w")`` would give it.

    Raises:
        OSError: If the directory cannot be created or the file written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, temp_path = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.chmod(temp_path, _default_file_mode())
        os.replace(temp_path, path)
    except BaseException:
        Path(temp_path).unlink(missing_ok=True)
        raise

    return path
