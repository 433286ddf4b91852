"""
Unit test fixtures - factory-built models and in-memory Azure doubles.
"""

import pytest

from tests.factories.fakes import FakeControlPlane, FakeDocuments, FakeWebsite
from tests.factories.model_factories import make_descriptor, make_movie_row


@pytest.fixture
def movie_row():
    """Return a randomized valid CSV row."""
    return make_movie_row()


@pytest.fixture
def storage_descriptor():
    from core.models import ResourceKind

    return make_descriptor(ResourceKind.STORAGE)


@pytest.fixture
def database_descriptor():
    from core.models import ResourceKind

    return make_descriptor(ResourceKind.DATABASE)


@pytest.fixture
def control_plane():
    return FakeControlPlane()


@pytest.fixture
def website():
    return FakeWebsite()


@pytest.fixture
def documents():
    return FakeDocuments()
