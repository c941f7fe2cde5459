"""
Global pytest configuration and fixtures.

This module provides shared resource trees, fake service ports and a
ready-to-use ``ModelService`` for all tests.
"""

import pytest
import logging

from tuning_client import client as default_clients
from tuning_client.config import ClientConfig
from tuning_client.services import ModelService
from tests.mocks import FakeModelServiceClient, FakeOperationsClient


# Configure logging for tests
logging.getLogger().setLevel(logging.CRITICAL)


@pytest.fixture
def base_model_tree():
    """A base model as returned by the service."""
    return {
        "name": "models/base-1",
        "base_model_id": "base-1",
        "version": "001",
        "display_name": "Base One",
        "description": "A tunable foundation model",
        "input_token_limit": 8192,
        "output_token_limit": 2048,
        "supported_generation_methods": ["generateContent", "createTunedModel"],
        "temperature": 0.9,
        "top_p": 1.0,
        "top_k": 40,
    }


@pytest.fixture
def tuned_model_tree():
    """A tuned model created directly from a base model."""
    return {
        "name": "tunedModels/first",
        "display_name": "Old",
        "description": "tuned from base",
        "temperature": 0.5,
        "top_p": 0.9,
        "top_k": 3,
        "base_model": "models/base-1",
        "state": "ACTIVE",
        "create_time": "2026-01-01T00:00:00Z",
        "update_time": "2026-01-02T00:00:00Z",
        "tuning_task": {
            "hyperparameters": {"epoch_count": 5, "batch_size": 4, "learning_rate": 0.001},
            "snapshots": [
                {"step": 1, "epoch": 1, "mean_loss": 1.5},
                {"step": 2, "epoch": 1, "mean_loss": 0.9},
            ],
        },
    }


@pytest.fixture
def derived_tuned_model_tree():
    """A tuned model tuned from another tuned model."""
    return {
        "name": "tunedModels/second",
        "display_name": "Second",
        "tuned_model_source": {
            "tuned_model": "tunedModels/first",
            "base_model": "models/base-1",
        },
        "state": "ACTIVE",
    }


@pytest.fixture
def fake_client(base_model_tree, tuned_model_tree, derived_tuned_model_tree):
    """Fake model service port preloaded with one base and two tuned models."""
    return FakeModelServiceClient(
        models=[base_model_tree],
        tuned_models=[tuned_model_tree, derived_tuned_model_tree],
    )


@pytest.fixture
def fake_operations():
    """Fake operations port; tests script its responses."""
    return FakeOperationsClient()


@pytest.fixture
def client_config():
    """Configuration without polling delays."""
    return ClientConfig(project="test-project", page_size=10, poll_interval=0.0)


@pytest.fixture
def model_service(fake_client, fake_operations, client_config):
    """Model service wired to the fakes."""
    return ModelService(fake_client, fake_operations, client_config)


@pytest.fixture
def training_pairs():
    """Sample training records."""
    return [
        {"text_input": "1", "output": "2"},
        {"text_input": "3", "output": "4"},
        {"text_input": "-3", "output": "-2"},
    ]


@pytest.fixture(autouse=True)
def reset_default_clients():
    """Keep process-wide defaults from leaking between tests."""
    default_clients.reset()
    yield
    default_clients.reset()
