"""
DeploymentOrchestrator end-to-end tests with in-memory doubles.

Ordering, blocking waits and failure handling are asserted through the
recorded control plane calls and the recorded sleeps.
"""

import csv
import logging

import pytest

from config import AppConfig, DatasetConfig, ProvisioningConfig, SiteConfig
from core.models import ProvisioningState
from exceptions import ProvisioningTimeoutError, TerminalProvisioningError
from services import DeploymentOptions, DeploymentOrchestrator, ResourceProvisioner
from tests.factories.fakes import FakeControlPlane, FakeDocuments, FakeDownloader, FakeWebsite
from tests.factories.model_factories import make_movie_row

PENDING = ProvisioningState.PENDING
IN_PROGRESS = ProvisioningState.IN_PROGRESS
SUCCEEDED = ProvisioningState.SUCCEEDED
FAILED = ProvisioningState.FAILED


def _write_csv(path, rows):
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=list(rows[0].keys()))
        writer.writeheader()
        writer.writerows(rows)
    return path


@pytest.fixture
def dataset(tmp_path):
    rows = [make_movie_row(rank=str(i)) for i in range(1, 4)]
    rows.append(make_movie_row(rank="4", Year=""))
    return _write_csv(tmp_path / "movies.csv", rows)


@pytest.fixture
def app_config(tmp_path):
    return AppConfig(
        location="westeurope",
        provisioning=ProvisioningConfig(
            poll_interval_seconds=30,
            poll_max_wait_seconds=3600,
            settle_delay_seconds=180,
            retry_max_attempts=5,
            retry_initial_delay_seconds=30,
            retry_backoff_multiplier=2.0,
        ),
        dataset=DatasetConfig(local_path=str(tmp_path / "download.csv")),
        site=SiteConfig(output_dir=str(tmp_path / "site")),
    )


class Harness:
    """Wires an orchestrator to fakes and exposes them for assertions."""

    def __init__(self, app_config, dataset, fake_time, **control_plane_kwargs):
        self.control_plane = FakeControlPlane(**control_plane_kwargs)
        self.website = FakeWebsite()
        self.documents = FakeDocuments()
        self.downloader = FakeDownloader(dataset)
        self.document_args = []
        self.time = fake_time

        def document_factory(endpoint, key):
            self.document_args.append((endpoint, key))
            return self.documents

        provisioner = ResourceProvisioner(
            self.control_plane,
            config=app_config,
            website_factory=lambda name, key: self.website,
        )
        self.orchestrator = DeploymentOrchestrator(
            provisioner,
            config=app_config,
            document_factory=document_factory,
            dataset_downloader=self.downloader,
            sleep=fake_time.sleep,
            clock=fake_time.clock,
        )

    def deploy(self, **options):
        return self.orchestrator.deploy("movie-rg", DeploymentOptions(name_suffix="abc123", **options))


class TestDeploySuccess:
    def test_full_deployment(self, app_config, dataset, fake_time):
        harness = Harness(app_config, dataset, fake_time, cosmos_states=[PENDING, IN_PROGRESS, SUCCEEDED])
        result = harness.deploy()

        assert result.storage_account == "moviedatabasesaabc123"
        assert result.cosmos_account == "moviedatabaseabc123"
        assert result.location == "westeurope"
        assert result.website_url == "https://moviedatabasesaabc123.z13.web.core.windows.net/"
        assert result.cosmos_endpoint == "https://moviedatabaseabc123.documents.azure.com:443/"
        assert result.import_summary.total == 4
        assert result.import_summary.imported == 3
        assert result.import_summary.skipped == 1
        assert result.uploaded_files == 2
        assert sorted(harness.website.files) == ["404.html", "index.html"]
        assert harness.document_args == [
            (result.cosmos_endpoint, "cosmos-key-moviedatabaseabc123")
        ]

    def test_steps_run_in_order(self, app_config, dataset, fake_time):
        harness = Harness(app_config, dataset, fake_time)
        harness.deploy()

        assert harness.control_plane.call_names() == [
            "create_storage_account",
            "get_storage_account_key",
            "create_cosmos_account",
            "create_sql_database",
            "create_sql_container",
            "get_primary_key",
        ]

    def test_container_uses_configured_partition_key(self, app_config, dataset, fake_time):
        harness = Harness(app_config, dataset, fake_time)
        harness.deploy()
        container_call = [c for c in harness.control_plane.calls if c[0] == "create_sql_container"][0]
        assert container_call[2:] == ("moviedb", "movies", "/genre")

    def test_waits_poll_interval_then_settle_delay(self, app_config, dataset, fake_time):
        harness = Harness(app_config, dataset, fake_time, cosmos_states=[PENDING, IN_PROGRESS, SUCCEEDED])
        harness.deploy()
        assert fake_time.sleeps == [30, 30, 180]

    def test_sub_resource_creates_are_retried(self, app_config, dataset, fake_time):
        harness = Harness(app_config, dataset, fake_time, sql_failures=3)
        harness.deploy()

        names = harness.control_plane.call_names()
        assert names.count("create_sql_database") == 4
        assert names.count("create_sql_container") == 1
        assert fake_time.sleeps == [180, 30, 60, 120]

    def test_zero_settle_delay_skips_wait(self, app_config, dataset, fake_time):
        app_config.provisioning.settle_delay_seconds = 0
        harness = Harness(app_config, dataset, fake_time)
        harness.deploy()
        assert fake_time.sleeps == []

    def test_optional_steps_can_be_skipped(self, app_config, dataset, fake_time):
        harness = Harness(app_config, dataset, fake_time)
        result = harness.deploy(import_data=False, publish_site=False)

        assert result.import_summary is None
        assert result.uploaded_files == 0
        assert harness.website.files == {}
        assert harness.downloader.destinations == []
        assert "get_primary_key" not in harness.control_plane.call_names()

    def test_logs_carry_deployment_context(self, app_config, dataset, fake_time, caplog):
        harness = Harness(app_config, dataset, fake_time)
        with caplog.at_level(logging.INFO):
            harness.deploy(import_data=False, publish_site=False)

        records = [r for r in caplog.records if r.name.startswith("service.DeploymentOrchestrator.")]
        assert records
        dims = records[0].custom_dimensions
        assert dims["operation"] == "deploy"
        assert dims["resource_group"] == "movie-rg"
        assert len(dims["deployment_id"]) == 12

    def test_rerun_reuses_existing_accounts(self, app_config, dataset, fake_time):
        harness = Harness(
            app_config, dataset, fake_time,
            existing=["moviedatabasesaabc123", "moviedatabaseabc123"],
        )
        harness.deploy()
        names = harness.control_plane.call_names()
        assert "create_storage_account" not in names
        assert "create_cosmos_account" not in names


class TestDeployFailure:
    def test_failed_account_stops_deployment(self, app_config, dataset, fake_time):
        harness = Harness(app_config, dataset, fake_time, cosmos_states=[IN_PROGRESS, FAILED])

        with pytest.raises(TerminalProvisioningError) as exc_info:
            harness.deploy()

        assert exc_info.value.resource_name == "moviedatabaseabc123"
        assert exc_info.value.state == "failed"
        names = harness.control_plane.call_names()
        assert "create_sql_database" not in names
        assert "create_sql_container" not in names
        assert harness.website.files == {}
        assert fake_time.sleeps == [30]

    def test_readiness_deadline(self, app_config, dataset, fake_time):
        app_config.provisioning.poll_max_wait_seconds = 90
        harness = Harness(app_config, dataset, fake_time, cosmos_states=[IN_PROGRESS])

        with pytest.raises(ProvisioningTimeoutError) as exc_info:
            harness.deploy()

        assert exc_info.value.last_state == "in_progress"
        assert "create_sql_database" not in harness.control_plane.call_names()

    def test_exhausted_retries_propagate_last_error(self, app_config, dataset, fake_time):
        app_config.provisioning.retry_max_attempts = 3
        harness = Harness(app_config, dataset, fake_time, sql_failures=100)

        with pytest.raises(RuntimeError, match="create_sql_database"):
            harness.deploy()

        names = harness.control_plane.call_names()
        assert names.count("create_sql_database") == 3
        assert "create_sql_container" not in names
        assert fake_time.sleeps == [180, 30, 60]


class TestExistingStorageAccount:
    def test_failed_storage_account_stops_deployment(self, app_config, dataset, fake_time):
        harness = Harness(
            app_config, dataset, fake_time,
            existing=["moviedatabasesaabc123"], storage_states=[FAILED],
        )

        with pytest.raises(TerminalProvisioningError) as exc_info:
            harness.deploy()

        assert exc_info.value.resource_name == "moviedatabasesaabc123"
        assert exc_info.value.state == "failed"
        assert harness.control_plane.calls == []
        assert harness.website.enabled_with is None
        assert fake_time.sleeps == []

    def test_creating_storage_account_is_polled_before_use(self, app_config, dataset, fake_time):
        harness = Harness(
            app_config, dataset, fake_time,
            existing=["moviedatabasesaabc123"], storage_states=[IN_PROGRESS, IN_PROGRESS, SUCCEEDED],
        )
        result = harness.deploy(import_data=False, publish_site=False)

        assert harness.control_plane.storage_state_reads == 3
        assert harness.control_plane.call_names()[0] == "get_storage_account_key"
        assert harness.website.enabled_with is not None
        assert fake_time.sleeps == [30, 180]
        assert result.website_url == "https://moviedatabasesaabc123.z13.web.core.windows.net/"

    def test_existing_succeeded_storage_is_not_polled(self, app_config, dataset, fake_time):
        harness = Harness(app_config, dataset, fake_time, existing=["moviedatabasesaabc123"])
        harness.deploy(import_data=False, publish_site=False)

        assert harness.control_plane.storage_state_reads == 1
        assert fake_time.sleeps == [180]


class TestBuildDescriptors:
    def test_names_and_region(self, app_config, dataset, fake_time):
        storage, database = Harness(app_config, dataset, fake_time).orchestrator.build_descriptors(
            "movie-rg", "x1y2z3"
        )
        assert storage.name == "moviedatabasesax1y2z3"
        assert database.name == "moviedatabasex1y2z3"
        assert storage.region == database.region == "westeurope"
        assert storage.resource_group == database.resource_group == "movie-rg"
