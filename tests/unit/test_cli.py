"""
Unit tests for the command-line interface.

Commands run against the fake-backed ``ModelService`` from conftest.
"""

import argparse
import json

import pytest
from unittest.mock import patch

from tuning_client.cli import _parse_assignments, create_parser, main


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep a developer's configuration out of the tests."""
    monkeypatch.delenv("TUNING_CLIENT_CONFIG", raising=False)
    monkeypatch.delenv("TUNING_CLIENT_LOG_LEVEL", raising=False)


class TestParser:
    """Test argument parsing."""

    def test_create_arguments(self):
        args = create_parser().parse_args(
            ["create", "models/base-1", "train.jsonl", "--epochs", "3", "--wait"]
        )
        assert args.command == "create"
        assert args.epochs == 3
        assert args.wait
        assert args.input_key == "text_input"

    def test_parse_assignments(self):
        updates = _parse_assignments(["top_k=5", 'display_name="New"', "description=plain text"])
        assert updates == {"top_k": 5, "display_name": "New", "description": "plain text"}

    def test_parse_assignments_requires_equals(self):
        with pytest.raises(argparse.ArgumentTypeError):
            _parse_assignments(["top_k"])


class TestCommands:
    """Test command execution."""

    def test_no_command(self, model_service, capsys):
        assert main([], service=model_service) == 1

    def test_get(self, model_service, capsys):
        assert main(["get", "tunedModels/first"], service=model_service) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["name"] == "tunedModels/first"
        assert output["base_model"] == "models/base-1"

    def test_list_with_limit(self, model_service, capsys):
        assert main(["list", "--tuned", "--limit", "1"], service=model_service) == 0

        output = capsys.readouterr().out
        assert output.count('"name"') == 1

    def test_update(self, model_service, fake_client, capsys):
        exit_code = main(["update", "tunedModels/first", "top_k=7", 'display_name="Renamed"'],
                         service=model_service)

        assert exit_code == 0
        assert set(fake_client.updates[0]["mask"]) == {"top_k", "display_name"}
        assert json.loads(capsys.readouterr().out)["top_k"] == 7

    def test_delete(self, model_service, fake_client):
        assert main(["delete", "tunedModels/second"], service=model_service) == 0
        assert fake_client.deleted == ["tunedModels/second"]

    def test_create_from_file(self, model_service, fake_client, tmp_path, capsys):
        path = tmp_path / "train.jsonl"
        path.write_text('{"text_input": "1", "output": "2"}\n')

        exit_code = main(["create", "models/base-1", str(path), "--id", "cli-model", "--epochs", "2"],
                         service=model_service)

        assert exit_code == 0
        payload = fake_client.created[0]["payload"]
        assert payload["tuning_task"]["hyperparameters"] == {"epoch_count": 2}
        assert json.loads(capsys.readouterr().out)["status"] == "RUNNING"

    def test_create_and_wait(self, model_service, fake_operations, tmp_path, capsys):
        path = tmp_path / "train.jsonl"
        path.write_text('{"text_input": "1", "output": "2"}\n')
        fake_operations.responses = [
            {"status": "DONE", "metadata": {"tuned_model": "tunedModels/cli-model"}},
        ]

        exit_code = main(["create", "models/base-1", str(path), "--id", "cli-model", "--wait"],
                         service=model_service)

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out)["name"] == "tunedModels/cli-model"

    def test_wait(self, model_service, fake_operations, capsys):
        fake_operations.responses = [{"status": "DONE"}]

        assert main(["wait", "operations/op-9"], service=model_service) == 0
        assert json.loads(capsys.readouterr().out)["name"] == "operations/op-9"

    def test_client_error_exit_code(self, model_service, fake_client):
        assert main(["get", "base-1"], service=model_service) == 1
        assert fake_client.calls == []

    def test_remote_error_exit_code(self, model_service):
        assert main(["delete", "tunedModels/missing"], service=model_service) == 1

    def test_built_clients_are_closed(self, fake_client, fake_operations):
        fake_client.close = lambda: fake_client.calls.append(("close",))
        fake_operations.close = lambda: fake_operations.calls.append(("close",))

        with patch("tuning_client.adapters.RestModelServiceClient.from_config", return_value=fake_client), \
                patch("tuning_client.adapters.RestOperationsClient.from_config", return_value=fake_operations):
            exit_code = main(["delete", "tunedModels/missing"])

        assert exit_code == 1
        assert fake_client.calls[-1] == ("close",)
        assert fake_operations.calls == [("close",)]
