import json

import pytest

from lint_survey.core.domain.exceptions import StateFileError
from lint_survey.core.domain.models import AggregateReport
from lint_survey.infra.catalog_store import CatalogStore
from lint_survey.infra.checkpoint_store import CheckpointStore
from lint_survey.infra.json_file import read_json, write_json
from lint_survey.infra.result_store import ReportStore, ResultStore

from lint_survey.core.services import BatchScheduler

from fakes import (
    FakeCheckpointStore,
    FakeLogger,
    FakeProcessor,
    make_file_result,
    make_metadata,
    make_result,
)


def test_read_json_missing_file_returns_default(tmp_path):
    assert read_json(tmp_path / "absent.json", list) == []


def test_read_json_invalid_json_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[1, 2", encoding="utf-8")

    with pytest.raises(StateFileError) as exc_info:
        read_json(path, list)

    assert exc_info.value.path == path


def test_read_json_unreadable_path_raises(tmp_path):
    path = tmp_path / "a_directory.json"
    path.mkdir()

    with pytest.raises(StateFileError):
        read_json(path, list)


def test_write_json_replaces_atomically(tmp_path):
    path = tmp_path / "nested" / "out.json"

    write_json(path, {"a": 1})
    write_json(path, {"a": 2})

    assert json.loads(path.read_text(encoding="utf-8")) == {"a": 2}
    assert [p.name for p in path.parent.iterdir()] == ["out.json"]


def test_write_json_failure_leaves_previous_file_and_no_temp(tmp_path, monkeypatch):
    path = tmp_path / "out.json"
    write_json(path, {"a": 1})

    def fail_replace(src, dst):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr("lint_survey.infra.json_file.os.replace", fail_replace)

    with pytest.raises(OSError):
        write_json(path, {"a": 2})

    assert json.loads(path.read_text(encoding="utf-8")) == {"a": 1}
    assert [p.name for p in tmp_path.iterdir()] == ["out.json"]


def test_write_json_unserializable_data_leaves_no_temp(tmp_path):
    with pytest.raises(TypeError):
        write_json(tmp_path / "out.json", {"a": object()})

    assert list(tmp_path.iterdir()) == []


class TestCheckpointStore:
    def test_missing_file_means_empty(self, tmp_path):
        assert CheckpointStore(path=tmp_path / "processed-repos_1_0_0.json").load() == set()

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "processed-repos_1_0_0.json"
        store = CheckpointStore(path=path)

        store.save({"20", "3"})

        assert store.load() == {"3", "20"}
        assert json.loads(path.read_text(encoding="utf-8")) == ["20", "3"]

    def test_numeric_ids_are_read_as_strings(self, tmp_path):
        path = tmp_path / "processed.json"
        path.write_text("[1, 2]", encoding="utf-8")

        assert CheckpointStore(path=path).load() == {"1", "2"}

    def test_non_array_is_corrupt(self, tmp_path):
        path = tmp_path / "processed.json"
        path.write_text('{"ids": []}', encoding="utf-8")

        with pytest.raises(StateFileError):
            CheckpointStore(path=path).load()


class TestCatalogStore:
    def test_append_grows_catalog(self, tmp_path):
        store = CatalogStore(path=tmp_path / "ui5-repos.json")

        assert store.append([make_metadata(1)]) == 1
        assert store.append([make_metadata(2), make_metadata(3)]) == 3
        assert [m.id for m in store.load()] == [1, 2, 3]

    def test_append_keeps_existing_raw_records(self, tmp_path):
        path = tmp_path / "ui5-repos.json"
        path.write_text(json.dumps([{
            "id": 1,
            "full_name": "acme/legacy",
            "html_url": "https://github.com/acme/legacy",
            "topics": ["ui5"],
        }]), encoding="utf-8")

        CatalogStore(path=path).append([make_metadata(2)])

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data[0]["topics"] == ["ui5"]
        assert data[1]["id"] == 2

    def test_corrupt_catalog_raises(self, tmp_path):
        path = tmp_path / "ui5-repos.json"
        path.write_text("not json", encoding="utf-8")

        with pytest.raises(StateFileError):
            CatalogStore(path=path).load()

    @pytest.mark.parametrize("record", [
        {"full_name": "acme/no-id", "html_url": "https://github.com/acme/no-id"},
        {"id": "not-a-number", "full_name": "acme/shop"},
        {"id": 3},
    ])
    def test_malformed_record_raises_state_file_error(self, tmp_path, record):
        path = tmp_path / "ui5-repos.json"
        path.write_text(json.dumps([make_metadata(1).to_dict(), record]), encoding="utf-8")

        with pytest.raises(StateFileError, match="index 1") as exc_info:
            CatalogStore(path=path).load()

        assert exc_info.value.path == path


class TestResultStore:
    def test_missing_file_means_empty(self, tmp_path):
        assert ResultStore(path=tmp_path / "results.json").load() == []

    def test_save_and_load(self, tmp_path):
        store = ResultStore(path=tmp_path / "results.json")
        results = [
            make_result(1, (make_file_result(("no-globals", "Access of global variable 'jQuery'")),)),
            make_result(2),
        ]

        store.save(results)

        assert store.load() == results

    def test_file_uses_original_keys(self, tmp_path):
        path = tmp_path / "results.json"

        ResultStore(path=path).save([make_result(1, (make_file_result(("r", "m")),))])

        entry = json.loads(path.read_text(encoding="utf-8"))[0]
        assert set(entry) == {"repoMetadata", "apps"}
        assert entry["apps"][0]["appPath"] == "."
        assert entry["apps"][0]["linterResult"][0]["messages"][0]["ruleId"] == "r"

    def test_malformed_entry_raises_state_file_error(self, tmp_path):
        path = tmp_path / "results.json"
        path.write_text(json.dumps([
            {"repoMetadata": None, "apps": []},
            {"repoMetadata": {"id": 4}, "apps": []},
        ]), encoding="utf-8")

        with pytest.raises(StateFileError, match="index 1"):
            ResultStore(path=path).load()

    def test_scheduler_save_keeps_full_metadata_of_earlier_entries(self, tmp_path):
        path = tmp_path / "ui5-project-analysis_1_0_0.json"
        legacy = {
            "id": 7,
            "full_name": "acme/old",
            "html_url": "https://github.com/acme/old",
            "clone_url": "https://github.com/acme/old.git",
            "stargazers_count": 42,
            "description": "legacy app",
            "owner": {"login": "acme"},
        }
        path.write_text(json.dumps([{"repoMetadata": legacy, "apps": []}]), encoding="utf-8")
        scheduler = BatchScheduler(
            processor=FakeProcessor(),
            checkpoint_store=FakeCheckpointStore(),
            result_store=ResultStore(path=path),
            logger=FakeLogger(),
        )

        scheduler.run([make_metadata(1, stars=3).ref])

        data = json.loads(path.read_text(encoding="utf-8"))
        assert [e["repoMetadata"]["id"] for e in data] == [7, 1]
        assert data[0]["repoMetadata"] == legacy
        assert data[1]["repoMetadata"]["stargazers_count"] == 3


def test_report_store_is_byte_identical_for_equal_reports(tmp_path):
    path = tmp_path / "linter-analysis-report.json"
    report = AggregateReport(
        total_repositories=2,
        repositories_with_apps=1,
        total_apps=1,
        total_linter_errors=2,
        repositories_with_errors=1,
        top_rule_violations={"no-deprecated-api": 2},
        all_rule_violations={"no-deprecated-api": 2},
        deprecated_api_messages={"Use of deprecated API 'sap.ui.getCore'": 2},
    )
    store = ReportStore(path=path)

    store.save(report)
    first = path.read_bytes()
    store.save(report)

    assert path.read_bytes() == first
    assert json.loads(first)["deprecatedApiMessages"] == {"Use of deprecated API 'sap.ui.getCore'": 2}
