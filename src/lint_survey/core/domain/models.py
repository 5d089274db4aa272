from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping


def _full_name_from_url(url: str) -> str:
    """Derive ``owner/name`` from a GitHub HTML URL."""
    parts = url.rstrip("/").split("/")
    if len(parts) < 2:
        return url
    name = parts[-1][:-4] if parts[-1].endswith(".git") else parts[-1]
    return f"{parts[-2]}/{name}"


_REF_KEYS = ("id", "full_name", "html_url", "clone_url")


@dataclass(frozen=True)
class RepositoryRef:
    """Repository identity as referenced by a code-search hit.

    Code-search hits carry a reduced repository record without ``clone_url``,
    so the HTML URL doubles as the clone URL when nothing better is known.
    Any other attributes of the record ride along in ``extra`` and are
    written back unchanged.
    """
    id: int
    full_name: str
    html_url: str
    clone_url: str
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def key(self) -> str:
        """Checkpoint key; identifiers are persisted as strings."""
        return str(self.id)

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> RepositoryRef:
        html_url = data.get("html_url")
        full_name = data.get("full_name")
        if not full_name:
            if not html_url:
                raise ValueError(f"repository record has neither full_name nor html_url (id={data.get('id')})")
            full_name = _full_name_from_url(html_url)
        html_url = html_url or f"https://github.com/{full_name}"
        return cls(
            id=int(data["id"]),
            full_name=full_name,
            html_url=html_url,
            clone_url=data.get("clone_url") or html_url,
            extra={k: v for k, v in data.items() if k not in _REF_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "full_name": self.full_name,
            "html_url": self.html_url,
            "clone_url": self.clone_url,
        }
        d.update(self.extra)
        return d


@dataclass(frozen=True)
class RepositoryMetadata:
    """Full repository record kept in the catalog.

    ``raw`` holds the untouched API record so the catalog file keeps every
    attribute GitHub returned, not just the ones modelled here.
    """
    ref: RepositoryRef
    stars: int | None = None
    description: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    pushed_at: str | None = None
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def id(self) -> int:
        return self.ref.id

    @property
    def full_name(self) -> str:
        return self.ref.full_name

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> RepositoryMetadata:
        return cls(
            ref=RepositoryRef.from_api(data),
            stars=data.get("stargazers_count"),
            description=data.get("description"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            pushed_at=data.get("pushed_at"),
            raw=dict(data),
        )

    def to_dict(self) -> dict[str, Any]:
        d = dict(self.raw)
        d.update(self.ref.to_dict())
        d["stargazers_count"] = self.stars
        d["description"] = self.description
        d["created_at"] = self.created_at
        d["updated_at"] = self.updated_at
        d["pushed_at"] = self.pushed_at
        return d


_MESSAGE_KEYS = ("ruleId", "severity", "line", "column", "message")
_RESULT_KEYS = ("filePath", "messages", "errorCount", "warningCount", "fatalErrorCount")


@dataclass(frozen=True)
class LintMessage:
    """One diagnostic reported by the lint tool."""
    rule_id: str | None
    message: str
    severity: int | None = None
    line: int | None = None
    column: int | None = None
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LintMessage:
        return cls(
            rule_id=data.get("ruleId"),
            message=str(data.get("message", "")),
            severity=data.get("severity"),
            line=data.get("line"),
            column=data.get("column"),
            extra={k: v for k, v in data.items() if k not in _MESSAGE_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "ruleId": self.rule_id,
            "severity": self.severity,
            "line": self.line,
            "column": self.column,
            "message": self.message,
        }
        d.update(self.extra)
        return d


@dataclass(frozen=True)
class LintFileResult:
    """One result object of the tool's JSON report (usually one per file)."""
    file_path: str | None
    messages: tuple[LintMessage, ...] = ()
    error_count: int = 0
    warning_count: int = 0
    fatal_error_count: int = 0
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LintFileResult:
        messages = data.get("messages") or []
        return cls(
            file_path=data.get("filePath"),
            messages=tuple(LintMessage.from_dict(m) for m in messages if isinstance(m, Mapping)),
            error_count=int(data.get("errorCount") or 0),
            warning_count=int(data.get("warningCount") or 0),
            fatal_error_count=int(data.get("fatalErrorCount") or 0),
            extra={k: v for k, v in data.items() if k not in _RESULT_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "filePath": self.file_path,
            "messages": [m.to_dict() for m in self.messages],
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
            "fatalErrorCount": self.fatal_error_count,
        }
        d.update(self.extra)
        return d


@dataclass(frozen=True)
class SubprojectResult:
    """Lint output for one sub-project, keyed by its path inside the clone."""
    path: str
    lint_results: tuple[LintFileResult, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SubprojectResult:
        results = data.get("linterResult") or []
        return cls(
            path=str(data.get("appPath", "")),
            lint_results=tuple(LintFileResult.from_dict(r) for r in results if isinstance(r, Mapping)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "appPath": self.path,
            "linterResult": [r.to_dict() for r in self.lint_results],
        }


@dataclass(frozen=True)
class RepositoryResult:
    """Everything one lint run learned about one repository.

    ``repository`` is optional because older result files may carry a null
    ``repoMetadata`` entry; ``subprojects`` is empty when nothing qualified.
    """
    repository: RepositoryRef | None
    subprojects: tuple[SubprojectResult, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RepositoryResult:
        meta = data.get("repoMetadata")
        apps = data.get("apps") or []
        return cls(
            repository=RepositoryRef.from_api(meta) if isinstance(meta, Mapping) else None,
            subprojects=tuple(SubprojectResult.from_dict(a) for a in apps if isinstance(a, Mapping)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "repoMetadata": self.repository.to_dict() if self.repository else None,
            "apps": [s.to_dict() for s in self.subprojects],
        }


@dataclass(frozen=True)
class AggregateReport:
    total_repositories: int
    repositories_with_apps: int
    total_apps: int
    total_linter_errors: int
    repositories_with_errors: int
    top_rule_violations: dict[str, int]
    all_rule_violations: dict[str, int]
    deprecated_api_messages: dict[str, int]

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalRepositories": self.total_repositories,
            "repositoriesWithApps": self.repositories_with_apps,
            "totalApps": self.total_apps,
            "totalLinterErrors": self.total_linter_errors,
            "repositoriesWithErrors": self.repositories_with_errors,
            "topRuleViolations": dict(self.top_rule_violations),
            "allRuleViolations": dict(self.all_rule_violations),
            "deprecatedApiMessages": dict(self.deprecated_api_messages),
        }


@dataclass(frozen=True)
class SubprojectLayout:
    """Structural test that makes a directory a lintable sub-project."""
    marker_file: str = "ui5.yaml"
    source_dir: str = "webapp"
    manifest_file: str = "manifest.json"


@dataclass(frozen=True)
class ArtifactPaths:
    """Locations of the durable artifacts for one tool version."""
    catalog: Path
    checkpoint: Path
    results: Path
    report: Path

    @classmethod
    def for_version(cls, data_dir: Path, version: str | None) -> ArtifactPaths:
        suffix = f"_{version.replace('.', '_')}" if version else ""
        data_dir = Path(data_dir)
        return cls(
            catalog=data_dir / "ui5-repos.json",
            checkpoint=data_dir / f"processed-repos{suffix}.json",
            results=data_dir / f"ui5-project-analysis{suffix}.json",
            report=data_dir / "linter-analysis-report.json",
        )


@dataclass(frozen=True)
class DiscoveryOutcome:
    found: int
    new: int
    enriched: int
    failed: int
    catalog_size: int


@dataclass(frozen=True)
class BatchOutcome:
    pending: int
    processed: int
    failed: int
    super_batches: int


@dataclass(frozen=True)
class SurveyStatus:
    catalog_size: int
    checkpointed: int
    pending: int
    results: int
    linter_version: str | None = None
