from typing import Callable
import os
import stat
from pathlib import Path
import shutil


def _remove_readonly(func: Callable[[str], None], path: str, excinfo) -> None:
    """Clear the read-only bit and retry; git object files are read-only."""
    try:
        os.chmod(path, stat.S_IWUSR)
    except OSError:
        pass
    func(path)


def rmtree_force(path: Path, *, ignore_errors: bool = False) -> None:
    """Remove a directory tree, including read-only files.

    With ``ignore_errors`` any failure left after the read-only retry is
    swallowed, so cleanup on an error path never masks the original error.
    """
    if not path.exists() and not path.is_symlink():
        return
    if path.is_symlink() or path.is_file():
        path.unlink(missing_ok=True)
        return
    try:
        shutil.rmtree(path, onexc=_remove_readonly)
    except OSError:
        if not ignore_errors:
            raise
        shutil.rmtree(path, ignore_errors=True)
