"""Unit tests for CLI commands."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from typer.testing import CliRunner

import adbcli.cli.client as cli_client
from adbcli.cli.main import app
from adbcli.client.service import DatabricksClient
from adbcli.schemas.jobs import RunLifeCycleState, RunResultState, RunState

runner = CliRunner()


@pytest.fixture
def fake_client(monkeypatch, databricks_env, fake_databricks):
    """Route the CLI's client singleton to fake_databricks."""

    def _factory(*args, **kwargs):
        return DatabricksClient(*args, transport=httpx.MockTransport(fake_databricks), **kwargs)

    monkeypatch.setattr(cli_client, "DatabricksClient", _factory)
    return fake_databricks


def _mock_service(state: RunState | None = None) -> MagicMock:
    service = MagicMock()
    service.create_job = AsyncMock(return_value=42)
    service.run_now = AsyncMock(return_value=state)
    return service


class TestJobCreateValidation:
    """Invalid flag combinations fail before any request is made."""

    def test_requires_a_task(self) -> None:
        result = runner.invoke(app, ["job", "create", "-n", "x", "-nw", "2"])
        assert result.exit_code == -1
        assert "Must specify one of --jar-main-class and --notebook-path." in result.output

    def test_requires_cluster_sizing(self) -> None:
        result = runner.invoke(app, ["job", "create", "-n", "x", "-npath", "/Shared/nb"])
        assert result.exit_code == -1
        assert "Must specify one of --auto-scale and --num-workers" in result.output

    def test_malformed_autoscale(self) -> None:
        result = runner.invoke(app, ["job", "create", "-npath", "/nb", "-as", "lots"])
        assert result.exit_code == -1
        assert "Invalid --auto-scale value" in result.output

    def test_missing_credentials(self) -> None:
        result = runner.invoke(app, ["job", "create", "-npath", "/nb", "-nw", "1"])
        assert result.exit_code == -1
        assert "host not configured" in result.output


class TestJobCreate:

    def test_submits_without_waiting(self) -> None:
        service = _mock_service()
        with patch("adbcli.cli.commands.jobs.get_api_service", return_value=service):
            result = runner.invoke(
                app,
                ["job", "create", "-n", "nightly", "-npath", "/Shared/nb", "-nw", "2", "date=2018-07-01"],
            )

        assert result.exit_code == 0
        assert "Submitting job nightly" in result.output
        assert "Job submitted with Id 42" in result.output
        service.run_now.assert_not_called()

        settings = service.create_job.call_args.args[0]
        assert settings.notebook_task.base_parameters == {"date": "2018-07-01"}
        assert settings.new_cluster.num_workers == 2

    def test_wait_success(self) -> None:
        state = RunState(life_cycle_state=RunLifeCycleState.TERMINATED, result_state=RunResultState.SUCCESS)
        service = _mock_service(state)
        with patch("adbcli.cli.commands.jobs.get_api_service", return_value=service):
            result = runner.invoke(
                app, ["job", "create", "-jmc", "com.acme.Main", "-ecid", "0701-abc", "-w"],
            )

        assert result.exit_code == 0
        assert "Run finished with life cycle state TERMINATED" in result.output
        assert "Job run succeeded." in result.output
        service.run_now.assert_awaited_once_with(42)

    @pytest.mark.parametrize("life_cycle_state", [RunLifeCycleState.SKIPPED, RunLifeCycleState.INTERNAL_ERROR])
    def test_wait_skipped_or_internal_error(self, life_cycle_state) -> None:
        state = RunState(life_cycle_state=life_cycle_state, state_message="Cluster start failed")
        with patch("adbcli.cli.commands.jobs.get_api_service", return_value=_mock_service(state)):
            result = runner.invoke(app, ["job", "create", "-jmc", "Main", "-ecid", "c", "--wait"])

        assert result.exit_code == -1
        assert "State message: Cluster start failed" in result.output

    def test_wait_failed_result(self) -> None:
        state = RunState(
            life_cycle_state=RunLifeCycleState.TERMINATED,
            result_state=RunResultState.FAILED,
            state_message="Notebook raised",
        )
        with patch("adbcli.cli.commands.jobs.get_api_service", return_value=_mock_service(state)):
            result = runner.invoke(app, ["job", "create", "-npath", "/nb", "-ecid", "c", "-w"])

        assert result.exit_code == -1
        assert "Result of job run does not indicate success." in result.output

    def test_request_body_end_to_end(self, fake_client) -> None:
        fake_client.respond("POST", "jobs/create", {"job_id": 5})

        result = runner.invoke(app, [
            "job", "create", "-n", "spark",
            "-jmc", "com.acme.Main",
            "-jpath", "dbfs:/a.jar;dbfs:/b.jar",
            "-as", "2~6", "-p3", "-tac",
            "--", "--input", "/mnt/in",
        ])

        assert result.exit_code == 0, result.output
        body = json.loads(fake_client.calls("jobs/create")[0].content)
        assert body["spark_jar_task"] == {"main_class_name": "com.acme.Main", "parameters": ["--input", "/mnt/in"]}
        assert body["libraries"] == [{"jar": "dbfs:/a.jar"}, {"jar": "dbfs:/b.jar"}]
        cluster = body["new_cluster"]
        assert cluster["autoscale"] == {"min_workers": 2, "max_workers": 6}
        assert cluster["node_type_id"] == "Standard_D3_v2"
        assert cluster["spark_version"] == "4.2.x-scala2.11"
        assert cluster["spark_env_vars"]["PYSPARK_PYTHON"] == "/databricks/python3/bin/python3"
        assert cluster["spark_conf"]["spark.databricks.acl.dfAclsEnabled"] == "true"

    def test_api_error_exits_with_failure(self, fake_client) -> None:
        fake_client.respond(
            "POST", "jobs/create",
            {"error_code": "INVALID_PARAMETER_VALUE", "message": "Invalid spark version"},
            status_code=400,
        )

        result = runner.invoke(app, ["job", "create", "-npath", "/nb", "-nw", "1", "-rv", "bogus"])

        assert result.exit_code == -1
        assert "Invalid spark version" in result.output
        assert "400" in result.output


class TestJobCommands:

    def test_run_without_wait(self, fake_client) -> None:
        fake_client.respond("POST", "jobs/run-now", {"run_id": 77, "number_in_job": 1})

        result = runner.invoke(app, ["job", "run", "5"])

        assert result.exit_code == 0
        assert "Run started with Id 77" in result.output

    def test_list(self, fake_client) -> None:
        fake_client.respond("GET", "jobs/list", {"jobs": [{"job_id": 3, "settings": {"name": "etl"}}]})

        result = runner.invoke(app, ["job", "list"])

        assert result.exit_code == 0
        assert "etl" in result.output

    def test_delete_missing_job(self, fake_client) -> None:
        fake_client.respond(
            "POST", "jobs/delete",
            {"error_code": "RESOURCE_DOES_NOT_EXIST", "message": "Job 9 does not exist."},
            status_code=400,
        )

        result = runner.invoke(app, ["job", "delete", "9"])

        assert result.exit_code == -1
        assert "Job 9 does not exist." in result.output


class TestDbfsCommands:

    def test_upload_and_download(self, fake_client, tmp_path) -> None:
        source = tmp_path / "in.bin"
        source.write_bytes(b"x" * 2000)
        target = tmp_path / "out.bin"

        upload = runner.invoke(app, ["dbfs", "upload", str(source), "dbfs:/tmp/in.bin", "--overwrite"])
        download = runner.invoke(app, ["dbfs", "download", "dbfs:/tmp/in.bin", str(target)])

        assert upload.exit_code == 0, upload.output
        assert download.exit_code == 0, download.output
        assert fake_client.files["/tmp/in.bin"] == b"x" * 2000
        assert target.read_bytes() == b"x" * 2000

    def test_download_refuses_to_overwrite(self, fake_client, tmp_path) -> None:
        target = tmp_path / "exists.bin"
        target.write_bytes(b"keep")

        result = runner.invoke(app, ["dbfs", "download", "/tmp/a", str(target)])

        assert result.exit_code == -1
        assert target.read_bytes() == b"keep"
        assert fake_client.requests == []

    def test_failed_download_leaves_no_file(self, fake_client, tmp_path) -> None:
        target = tmp_path / "out.bin"

        failed = runner.invoke(app, ["dbfs", "download", "/tmp/late.bin", str(target)])

        assert failed.exit_code == -1
        assert "RESOURCE_DOES_NOT_EXIST" in failed.output
        assert list(tmp_path.iterdir()) == []

        fake_client.files["/tmp/late.bin"] = b"arrived"
        retried = runner.invoke(app, ["dbfs", "download", "/tmp/late.bin", str(target)])

        assert retried.exit_code == 0, retried.output
        assert target.read_bytes() == b"arrived"

    def test_interrupted_download_keeps_existing_file(self, fake_client, tmp_path) -> None:
        target = tmp_path / "out.bin"
        target.write_bytes(b"previous")

        def first_block_only(request: httpx.Request) -> httpx.Response:
            if request.url.params["offset"] == "0":
                return httpx.Response(200, json={"bytes_read": 3, "data": "YWJj"})
            return httpx.Response(500, json={"error_code": "INTERNAL_ERROR", "message": "boom"})

        fake_client.route("GET", "dbfs/read", first_block_only)

        result = runner.invoke(app, ["dbfs", "download", "/tmp/a.bin", str(target), "--overwrite"])

        assert result.exit_code == -1
        assert "500 INTERNAL_ERROR: boom" in result.output
        assert target.read_bytes() == b"previous"
        assert [p.name for p in tmp_path.iterdir()] == ["out.bin"]

    @pytest.mark.parametrize("args", [
        ["dbfs", "ls", "tmp/relative"],
        ["dbfs", "mv", "/tmp/a", "dbfs:tmp/b"],
        ["dbfs", "download", "relative.bin", "out.bin"],
    ])
    def test_relative_dbfs_path_exits_with_failure(self, fake_client, args) -> None:
        result = runner.invoke(app, args)

        assert result.exit_code == -1
        assert "DBFS path must be absolute" in result.output
        assert fake_client.requests == []

    def test_ls(self, fake_client) -> None:
        fake_client.respond("GET", "dbfs/list",{"files": [{"path": "/tmp/a.csv", "is_dir": False, "file_size": 10}]})

        result = runner.invoke(app, ["dbfs", "ls", "dbfs:/tmp"])

        assert result.exit_code == 0
        assert "/tmp/a.csv" in result.output
        assert fake_client.requests[0].url.params["path"] == "/tmp"

    def test_stat_missing_path(self, fake_client) -> None:
        fake_client.respond(
            "GET", "dbfs/get-status",
            {"error_code": "RESOURCE_DOES_NOT_EXIST", "message": "No file or directory exists on path /nope."},
            status_code=404,
        )

        result = runner.invoke(app, ["dbfs", "stat", "/nope"])

        assert result.exit_code == -1
        assert "RESOURCE_DOES_NOT_EXIST" in result.output


class TestWorkspaceCommands:

    def test_ls(self, fake_client) -> None:
        fake_client.respond("GET", "workspace/list", {"objects": [
            {"object_type": "NOTEBOOK", "path": "/Users/me/etl", "language": "PYTHON"},
        ]})

        result = runner.invoke(app, ["workspace", "ls", "/Users/me"])

        assert result.exit_code == 0
        assert "/Users/me/etl" in result.output
        assert "NOTEBOOK" in result.output

    def test_ls_shows_files_and_repos(self, fake_client) -> None:
        fake_client.respond("GET", "workspace/list", {"objects": [
            {"object_type": "FILE", "path": "/Users/me/readme.md"},
            {"object_type": "REPO", "path": "/Users/me/repo"},
        ]})

        result = runner.invoke(app, ["workspace", "ls", "/Users/me"])

        assert result.exit_code == 0, result.output
        assert "/Users/me/readme.md" in result.output
        assert "REPO" in result.output

    def test_malformed_response_exits_with_failure(self, fake_client) -> None:
        fake_client.respond("GET", "workspace/list", {"objects": [{"object_type": "NOTEBOOK"}]})

        result = runner.invoke(app, ["workspace", "ls", "/Users/me"])

        assert result.exit_code == -1
        assert "Unexpected API response" in result.output


class TestMainApp:

    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"], env={"COLUMNS": "200"})
        assert result.exit_code == 0
        assert "Azure Databricks CLI" in result.output

    def test_job_create_help_lists_short_flags(self) -> None:
        result = runner.invoke(app, ["job", "create", "--help"], env={"COLUMNS": "200"})
        assert result.exit_code == 0
        assert "--existing-cluster-id" in result.output
        assert "--notebook-path" in result.output

    def test_host_and_token_options_override_environment(self, fake_client) -> None:
        fake_client.respond("GET", "workspace/list", {})

        result = runner.invoke(app, [
            "--host", "https://other.azuredatabricks.net", "--token", "cli-token",
            "workspace", "ls", "/",
        ])

        assert result.exit_code == 0, result.output
        request = fake_client.requests[0]
        assert request.url.host == "other.azuredatabricks.net"
        assert request.headers["Authorization"] == "Bearer cli-token"

    def test_system_version(self) -> None:
        result = runner.invoke(app, ["system", "version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_system_config_masks_token(self, databricks_env) -> None:
        result = runner.invoke(app, ["system", "config", "secrets"])
        assert result.exit_code == 0
        assert "dapi-test-token-1234" not in result.output
        assert "****1234" in result.output
