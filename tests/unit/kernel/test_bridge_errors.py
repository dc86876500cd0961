"""Unit tests for the todo_bridge error hierarchy."""

from __future__ import annotations

import json

import pytest

from todo_bridge.kernel.errors import (
    ApplicationError,
    BackendError,
    BaseError,
    BridgeError,
    ConflictError,
    DomainError,
    InfrastructureError,
    InvalidActionError,
    InvalidCredentialError,
    MalformedPayloadError,
    NotFoundError,
    ReplyTimeoutError,
    SerializationError,
    TopologyError,
    TransportError,
    ValidationError,
)


class TestBaseError:
    def test_message_is_stored(self) -> None:
        err = BaseError("something went wrong")
        assert err.message == "something went wrong"
        assert str(err) == "something went wrong"

    def test_default_code(self) -> None:
        assert BaseError("m").code == "base_error"

    def test_custom_code(self) -> None:
        assert BaseError("m", code="custom").code == "custom"

    def test_to_dict_basic(self) -> None:
        err = BaseError("m", code="my_code", detail={"key": "val"})
        assert err.to_dict() == {"code": "my_code", "message": "m", "detail": {"key": "val"}}

    def test_to_dict_includes_cause_repr(self) -> None:
        err = BaseError("wrapper", cause=ValueError("original"))
        assert "original" in err.to_dict()["cause"]

    def test_cause_sets_dunder_cause(self) -> None:
        cause = RuntimeError("root")
        assert BaseError("wrap", cause=cause).__cause__ is cause

    def test_to_dict_without_cause(self) -> None:
        err = BaseError("wrapper", cause=ValueError("original"))
        assert "cause" not in err.to_dict(include_cause=False)

    def test_log_fields(self) -> None:
        err = BaseError("oops", code="oops", detail={"x": 1}, cause=KeyError("k"))
        fields = err.log_fields()
        assert fields["error_code"] == "oops"
        assert fields["error"] == "oops"
        assert fields["error_detail"] == {"x": 1}
        assert "KeyError" in fields["error_cause"]
        json.dumps(fields)

    def test_log_fields_omit_empty_detail(self) -> None:
        assert BaseError("m").log_fields() == {"error_code": "base_error", "error": "m"}

    def test_repr_shows_detail(self) -> None:
        assert "detail={'a': 1}" in repr(BaseError("m", detail={"a": 1}))

    def test_detail_is_copied(self) -> None:
        detail = {"a": 1}
        BaseError("m", detail=detail).detail["b"] = 2
        assert detail == {"a": 1}


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls,parent",
        [
            (ValidationError, DomainError),
            (NotFoundError, DomainError),
            (ConflictError, DomainError),
            (BridgeError, ApplicationError),
            (MalformedPayloadError, BridgeError),
            (InvalidCredentialError, BridgeError),
            (InvalidActionError, BridgeError),
            (BackendError, BridgeError),
            (ReplyTimeoutError, ApplicationError),
            (TransportError, InfrastructureError),
            (TopologyError, TransportError),
            (SerializationError, InfrastructureError),
        ],
    )
    def test_subclass(self, cls: type, parent: type) -> None:
        assert issubclass(cls, parent)
        assert issubclass(cls, BaseError)

    def test_transport_error_is_not_a_bridge_error(self) -> None:
        assert not issubclass(TransportError, BridgeError)


class TestBridgeErrors:
    def test_malformed_default_message(self) -> None:
        err = MalformedPayloadError()
        assert err.message == "invalid message format"
        assert err.code == "malformed_payload"
        assert err.errors == []

    def test_malformed_keeps_field_errors(self) -> None:
        err = MalformedPayloadError("invalid payload", errors=[{"loc": ["title"], "msg": "missing"}])
        assert err.errors[0]["loc"] == ["title"]

    def test_invalid_credential_message(self) -> None:
        assert InvalidCredentialError().message == "invalid api key"

    def test_invalid_action_carries_action(self) -> None:
        err = InvalidActionError("explode")
        assert err.message == "invalid action"
        assert err.action == "explode"
        assert err.detail == {"action": "explode"}

    def test_retryable_flags(self) -> None:
        assert BackendError("x").retryable is True
        assert MalformedPayloadError().retryable is False
        assert InvalidActionError("x").retryable is False
        assert TransportError("x").retryable is True
        assert SerializationError("x").retryable is False

    def test_reply_timeout_message(self) -> None:
        err = ReplyTimeoutError("c-1", 10.0)
        assert err.correlation_id == "c-1"
        assert err.timeout == 10.0
        assert "c-1" in err.message and "10s" in err.message


class TestDomainErrors:
    def test_not_found_message(self) -> None:
        err = NotFoundError("list", 7)
        assert err.message == "list '7' not found"
        assert err.resource == "list"
        assert err.resource_id == 7

    def test_not_found_without_id(self) -> None:
        assert NotFoundError("user").message == "user not found"

    def test_validation_to_dict_has_errors(self) -> None:
        err = ValidationError("bad", errors=[{"field": "title"}])
        assert err.to_dict()["errors"] == [{"field": "title"}]

    def test_transport_destination(self) -> None:
        err = TransportError("publish failed", destination="api.responses")
        assert err.destination == "api.responses"
        assert err.code == "transport_error"
        assert TopologyError("x").code == "topology_error"
