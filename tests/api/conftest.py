"""
Pytest configuration for API integration tests
"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(scope="function")
def client():
    """
    Create a test client with properly initialized app state.
    Each test gets a fresh service to avoid state contamination.
    """
    from config import Settings
    from main import app
    from services.image_service import ImageService

    settings = Settings()

    # Set in app state (lifespan is not run without the context manager)
    app.state.image_service = ImageService.from_settings(settings.image)
    app.state.config = settings.to_dict()

    test_client = TestClient(app, raise_server_exceptions=False)

    yield test_client
