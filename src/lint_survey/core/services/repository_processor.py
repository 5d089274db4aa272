from __future__ import annotations

from ..domain.models import RepositoryRef, RepositoryResult, SubprojectResult
from ..ports import LinterPort, LoggerPort, WorkspacePort


class RepositoryProcessor:
    """Runs clone, sub-project discovery and linting for one repository.

    Steps are strictly sequential. Clone failures propagate to the caller;
    a sub-project whose lint run yields nothing is logged and left out.
    """

    def __init__(
        self,
        *,
        workspace: WorkspacePort,
        linter: LinterPort,
        logger: LoggerPort,
    ) -> None:
        self._workspace = workspace
        self._linter = linter
        self._logger = logger

    def process(self, repo: RepositoryRef) -> RepositoryResult:
        self._logger.info("repo_started", repo=repo.full_name, repo_id=repo.id, url=repo.clone_url)

        subprojects: list[SubprojectResult] = []
        with self._workspace.checkout(repo) as root:
            paths = self._workspace.find_subprojects(root)
            self._logger.info("subprojects_found", repo=repo.full_name, count=len(paths))

            for path in paths:
                rel = path.relative_to(root).as_posix()
                lint_results = self._linter.run(path)
                if lint_results is None:
                    self._logger.warning("lint_skipped", repo=repo.full_name, subproject=rel)
                    continue

                self._logger.info(
                    "lint_done",
                    repo=repo.full_name,
                    subproject=rel,
                    results=len(lint_results),
                )
                subprojects.append(SubprojectResult(path=rel, lint_results=tuple(lint_results)))

        return RepositoryResult(repository=repo, subprojects=tuple(subprojects))
