"""
Test configuration and fixtures for nutriscan.

- Mock AI service client with queued responses
- Interaction controller wired to the mock
- Small in-memory PNG/JPEG images
"""

import pytest

from nutriscan.models.language import Language
from nutriscan.services.interaction_controller import InteractionController
from tests.fixtures.images import make_image_bytes


# =============================================================================
# Image Fixtures
# =============================================================================


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes("PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image_bytes("JPEG")


@pytest.fixture
def sample_image_file(tmp_path, jpeg_bytes):
    """A JPEG written to a temporary file."""
    path = tmp_path / "meal.jpg"
    path.write_bytes(jpeg_bytes)
    return path


# =============================================================================
# Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_oracle():
    """
    Mock AI service client.

    Returns a mock that can be configured per test.
    """
    from tests.fixtures.mocks import MockOracleClient

    return MockOracleClient()


@pytest.fixture
def controller(mock_oracle):
    """English-language controller backed by the mock AI service."""
    return InteractionController(oracle_client=mock_oracle, language=Language.ENGLISH)


# =============================================================================
# pytest markers
# =============================================================================


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m not slow')"
    )
