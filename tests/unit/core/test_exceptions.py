"""
Unit tests for the exception hierarchy.
"""

import pytest

from tuning_client.core.exceptions import (
    AmbiguousUpdateError,
    APIError,
    ConfigurationError,
    IntegrationError,
    InvalidNameError,
    OperationError,
    TrainingDataError,
    TransportError,
    TuningClientError,
    TypeMismatchError,
    create_error_context,
    wrap_exception,
)


class TestTuningClientError:
    """Test the root exception."""

    def test_message_and_context(self):
        error = TuningClientError("boom", context={"operation": "get"})

        assert error.message == "boom"
        assert "boom" in str(error)
        assert "operation" in str(error)

    def test_cause_is_kept(self):
        cause = ConnectionError("reset")
        error = TuningClientError("failed", cause=cause)

        assert error.cause is cause
        assert "Caused by: reset" in str(error)

    def test_to_dict(self):
        data = TuningClientError("boom", context={"a": 1}).to_dict()

        assert data["type"] == "TuningClientError"
        assert data["message"] == "boom"
        assert data["context"] == {"a": 1}
        assert data["cause"] is None


class TestHierarchy:
    """Test that callers can catch errors by builtin category too."""

    @pytest.mark.parametrize("error_class, builtin", [
        (InvalidNameError, ValueError),
        (AmbiguousUpdateError, ValueError),
        (TypeMismatchError, TypeError),
    ])
    def test_builtin_bases(self, error_class, builtin):
        with pytest.raises(builtin):
            raise error_class("bad")

    def test_transport_family(self):
        assert issubclass(APIError, TransportError)
        assert issubclass(TransportError, IntegrationError)
        assert issubclass(OperationError, TuningClientError)
        assert issubclass(ConfigurationError, TuningClientError)

    def test_invalid_name_carries_name(self):
        error = InvalidNameError("bad prefix", name="base-1")
        assert error.name == "base-1"
        assert error.to_dict()["name"] == "'base-1'"

    def test_training_data_error_fields(self):
        error = TrainingDataError("missing key", record={"text_input": "a"}, index=4)
        data = error.to_dict()
        assert data["index"] == 4
        assert "text_input" in data["record"]

    def test_api_error_fields(self):
        error = APIError("not found", status_code=404, response_data={"error": {}})
        assert error.to_dict()["status_code"] == 404

    def test_operation_error_fields(self):
        error = OperationError("failed", operation_name="op-1", error={"code": 3})
        assert error.error == {"code": 3}
        assert error.to_dict()["operation_name"] == "op-1"


class TestHelpers:
    """Test exception utility functions."""

    def test_create_error_context(self):
        context = create_error_context("fetcher", "get_model", parameters={"name": "models/x"},
                                       additional_info={"attempt": 1})
        assert context["component"] == "fetcher"
        assert context["operation"] == "get_model"
        assert context["parameters"] == {"name": "models/x"}
        assert context["attempt"] == 1

    def test_wrap_exception(self):
        original = KeyError("name")
        wrapped = wrap_exception(original, ConfigurationError, "missing setting")

        assert isinstance(wrapped, ConfigurationError)
        assert wrapped.cause is original
