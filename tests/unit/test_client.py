"""
Unit tests for the process-wide default clients.
"""

from tuning_client import client
from tuning_client.adapters import RestModelServiceClient, RestOperationsClient
from tuning_client.config import ClientConfig
from tuning_client.resources import TunedModel


class TestDefaults:
    """Test configure/reset and the module-level shortcuts."""

    def test_configure_with_fakes(self, fake_client, fake_operations, client_config):
        client.configure(client_config, model_client=fake_client, operations_client=fake_operations)

        tuned = client.get_tuned_model("tunedModels/first")

        assert isinstance(tuned, TunedModel)
        assert client.get_base_model_name("tunedModels/second") == "models/base-1"
        assert client.get_default_service().poller.project == "test-project"

    def test_shortcuts_share_one_service(self, fake_client, fake_operations, client_config):
        client.configure(client_config, model_client=fake_client, operations_client=fake_operations)
        assert client.get_default_service() is client.get_default_service()

    def test_name_resolution_uses_default_client(self, fake_client, fake_operations, client_config):
        from tuning_client.naming import resolve_base_model_name

        client.configure(client_config, model_client=fake_client, operations_client=fake_operations)

        assert resolve_base_model_name("tunedModels/first") == "models/base-1"
        assert ("get_tuned_model", "tunedModels/first") in fake_client.calls

    def test_rest_clients_built_from_config(self):
        client.configure(ClientConfig(base_url="https://tuning.example", api_key="k", api_version="v1"))

        model_client = client.get_default_model_client()
        operations_client = client.get_default_operations_client()

        assert isinstance(model_client, RestModelServiceClient)
        assert isinstance(operations_client, RestOperationsClient)
        assert model_client.api_version == "v1"
        assert model_client.api.base_url == "https://tuning.example"

    def test_configure_with_overrides(self, monkeypatch):
        monkeypatch.delenv("TUNING_CLIENT_CONFIG", raising=False)
        config = client.configure(project="p", page_size=5)
        assert config.project == "p"
        assert client.get_config().page_size == 5

    def test_reset(self, client_config):
        client.configure(client_config)
        client.reset()
        assert client._config is None
        assert client._service is None
