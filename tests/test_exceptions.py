"""Tests for the AgroNDVI exception hierarchy."""

from __future__ import annotations

import pytest

from agrondvi.exceptions import (
    AgroNdviError,
    ComputationError,
    ConfigurationError,
    InputShapeError,
    InvalidCoordinatesError,
    NoValidPixelsError,
    ProviderError,
)

ALL_EXCEPTION_CLASSES = [
    AgroNdviError,
    ConfigurationError,
    InvalidCoordinatesError,
    ProviderError,
    ComputationError,
    InputShapeError,
    NoValidPixelsError,
]

SUBCLASS_EXCEPTION_CLASSES = ALL_EXCEPTION_CLASSES[1:]


@pytest.mark.unit
class TestExceptionInheritance:
    """Verify the exception inheritance chain."""

    def test_base_inherits_from_exception(self) -> None:
        assert issubclass(AgroNdviError, Exception)

    @pytest.mark.parametrize(
        "exc_cls",
        SUBCLASS_EXCEPTION_CLASSES,
        ids=lambda c: c.__name__,
    )
    def test_subclass_inherits_from_base(self, exc_cls: type[AgroNdviError]) -> None:
        assert issubclass(exc_cls, AgroNdviError)

    def test_reduction_errors_are_computation_errors(self) -> None:
        assert issubclass(InputShapeError, ComputationError)
        assert issubclass(NoValidPixelsError, ComputationError)

    def test_coordinates_error_is_configuration_error(self) -> None:
        assert issubclass(InvalidCoordinatesError, ConfigurationError)


@pytest.mark.unit
class TestThreePartMessage:
    """Verify the three-part message pattern (what, cause, fix)."""

    @pytest.mark.parametrize(
        "exc_cls",
        ALL_EXCEPTION_CLASSES,
        ids=lambda c: c.__name__,
    )
    def test_full_message(self, exc_cls: type[AgroNdviError]) -> None:
        exc = exc_cls(what="Operation failed", cause="Bad input", fix="Check your data")
        lines = str(exc).split("\n")
        assert lines == ["Operation failed", "Cause: Bad input", "Fix: Check your data"]

    def test_what_only_message(self) -> None:
        exc = AgroNdviError(what="Something broke")
        assert str(exc) == "Something broke"

    def test_message_omits_empty_cause(self) -> None:
        msg = str(AgroNdviError(what="Failed", fix="Retry"))
        assert "Cause:" not in msg
        assert "Fix: Retry" in msg

    def test_attributes_stored(self) -> None:
        exc = ProviderError(what="W", cause="C", fix="F")
        assert (exc.what, exc.cause, exc.fix) == ("W", "C", "F")


@pytest.mark.unit
class TestErrorCodes:
    """Verify machine-readable codes and HTTP statuses."""

    @pytest.mark.parametrize(
        ("exc_cls", "code", "status"),
        [
            (AgroNdviError, "agrondvi_error", 500),
            (ConfigurationError, "configuration_error", 500),
            (InvalidCoordinatesError, "invalid_coordinates", 400),
            (ProviderError, "provider_error", 502),
            (ComputationError, "computation_failed", 500),
            (InputShapeError, "input_shape", 500),
            (NoValidPixelsError, "no_valid_pixels", 500),
        ],
        ids=lambda v: getattr(v, "__name__", str(v)),
    )
    def test_code_and_status(
        self,
        exc_cls: type[AgroNdviError],
        code: str,
        status: int,
    ) -> None:
        assert exc_cls.code == code
        assert exc_cls.http_status == status

    def test_error_body(self) -> None:
        exc = NoValidPixelsError(what="No valid pixels", cause="All zero")
        body = exc.error_body()
        assert body == {
            "error": "No valid pixels",
            "code": "no_valid_pixels",
            "details": "No valid pixels\nCause: All zero",
        }

    def test_catch_by_base_class(self) -> None:
        with pytest.raises(AgroNdviError):
            raise InputShapeError(what="Empty red band")
