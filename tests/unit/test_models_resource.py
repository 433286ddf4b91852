"""
Resource model validation tests.
"""

import pytest
from pydantic import ValidationError

from core.models import (
    DeploymentResult,
    ImportSummary,
    ProvisioningState,
    ProvisionResult,
    ResourceDescriptor,
    ResourceKind,
)
from tests.factories.model_factories import make_descriptor


class TestResourceDescriptor:
    @pytest.mark.parametrize("name", ["abc", "moviedatabasesa1a2b3c", "a" * 24])
    def test_valid_storage_names(self, name):
        assert make_descriptor(ResourceKind.STORAGE, name=name).name == name

    @pytest.mark.parametrize("name", ["ab", "a" * 25, "Movies", "movie-db", "movie_db"])
    def test_invalid_storage_names(self, name):
        with pytest.raises(ValidationError):
            make_descriptor(ResourceKind.STORAGE, name=name)

    @pytest.mark.parametrize("name", ["abc", "moviedatabase1a2b3c", "movie-db-1", "a" * 44])
    def test_valid_cosmos_names(self, name):
        assert make_descriptor(ResourceKind.DATABASE, name=name).name == name

    @pytest.mark.parametrize("name", ["ab", "-movies", "movies-", "Movies", "a" * 45])
    def test_invalid_cosmos_names(self, name):
        with pytest.raises(ValidationError):
            make_descriptor(ResourceKind.DATABASE, name=name)

    def test_empty_region_rejected(self):
        with pytest.raises(ValidationError):
            make_descriptor(region="")

    def test_is_frozen(self):
        descriptor = make_descriptor()
        with pytest.raises(ValidationError):
            descriptor.name = "other"

    def test_resource_id(self):
        descriptor = ResourceDescriptor(
            name="moviedatabaseabc123", kind=ResourceKind.DATABASE,
            region="eastus", resource_group="movie-rg",
        )
        assert descriptor.resource_id == "movie-rg/database/moviedatabaseabc123"


class TestProvisionResult:
    def test_default_state_is_pending(self):
        result = ProvisionResult(descriptor=make_descriptor(), created=True)
        assert result.state is ProvisioningState.PENDING


class TestDeploymentResult:
    def test_to_dict_is_json_ready(self):
        result = DeploymentResult(
            resource_group="movie-rg",
            location="eastus",
            storage_account="moviedatabasesaabc123",
            cosmos_account="moviedatabaseabc123",
            database_name="moviedb",
            container_name="movies",
            website_url="https://moviedatabasesaabc123.z13.web.core.windows.net/",
            import_summary=ImportSummary(total=3, imported=2, skipped=1, failures=["Row 3: bad"]),
            uploaded_files=2,
        )
        data = result.to_dict()
        assert data["import_summary"] == {"total": 3, "imported": 2, "skipped": 1, "failures": ["Row 3: bad"]}
        assert data["uploaded_files"] == 2
        assert "key" not in " ".join(data)
