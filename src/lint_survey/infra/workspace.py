from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from git import Repo

from ..core.domain.models import RepositoryRef, SubprojectLayout
from ..shared.rmtree_force import rmtree_force


def is_subproject(path: Path, layout: SubprojectLayout) -> bool:
    """True when ``path`` holds the marker file and a source dir with a manifest."""
    source = path / layout.source_dir
    return (
        (path / layout.marker_file).is_file()
        and source.is_dir()
        and (source / layout.manifest_file).is_file()
    )


def find_subprojects(root: Path, layout: SubprojectLayout) -> list[Path]:
    """Return every qualifying directory under ``root``, including ``root``.

    A directory that qualifies is not searched further, so sub-projects
    nested inside another sub-project are not reported. Symlinked
    directories are not followed; children are visited in name order.
    """
    found: list[Path] = []
    stack = [root]
    while stack:
        current = stack.pop()
        if is_subproject(current, layout):
            found.append(current)
            continue
        try:
            with os.scandir(current) as it:
                children = sorted(
                    (Path(e.path) for e in it if e.is_dir(follow_symlinks=False)),
                    key=lambda p: p.name,
                )
        except OSError:
            continue
        # reversed so the stack pops children in name order
        stack.extend(reversed(children))
    return found


class Workspace:
    """Ephemeral clones, one private directory per repository id."""

    def __init__(
        self,
        *,
        root_dir: Path,
        layout: SubprojectLayout,
        clone_depth: int | None = None,
    ) -> None:
        self._root_dir = Path(root_dir)
        self._layout = layout
        self._clone_depth = clone_depth

    def path_for(self, repo: RepositoryRef) -> Path:
        return self._root_dir / f"project-{repo.id}"

    @contextmanager
    def checkout(self, repo: RepositoryRef) -> Iterator[Path]:
        """Clone ``repo`` and yield the working tree; always removed on exit."""
        dest = self.path_for(repo)
        try:
            # leftovers from an interrupted run would make the clone fail
            rmtree_force(dest, ignore_errors=True)
            dest.parent.mkdir(parents=True, exist_ok=True)
            self._clone(repo.clone_url, dest)
            yield dest
        finally:
            rmtree_force(dest, ignore_errors=True)

    def find_subprojects(self, root: Path) -> list[Path]:
        return find_subprojects(root, self._layout)

    def _clone(self, url: str, dest: Path) -> None:
        kwargs = {}
        if self._clone_depth:
            kwargs["depth"] = self._clone_depth
        repo = Repo.clone_from(url, dest, **kwargs)
        repo.close()
