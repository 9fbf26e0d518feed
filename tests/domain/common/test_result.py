"""Tests for Result and DomainError."""

import pytest

from fpl_squad_advisor.domain.common.result import (
    DomainError,
    ErrorType,
    FetchFailure,
    Result,
)


class TestResult:
    def test_empty_success(self):
        result = Result.success([])
        assert result.is_success
        assert result.value == []

    def test_failure(self):
        error = DomainError.data_not_found("nothing here")
        result = Result.failure(error)

        assert result.is_failure
        assert result.error is error
        with pytest.raises(ValueError, match="nothing here"):
            _ = result.value

    def test_value_or(self):
        assert Result.success({1: 3}).value_or({}) == {1: 3}
        assert Result.failure(DomainError.data_not_found("x")).value_or({}) == {}

    def test_error_on_success(self):
        with pytest.raises(ValueError):
            _ = Result.success(1).error

    def test_both_rejected(self):
        with pytest.raises(ValueError):
            Result(value=1, error=DomainError.data_not_found("x"))


class TestExternalApiError:
    def test_source_and_failure(self):
        error = DomainError.external_api_error(
            "picks request failed",
            source="picks",
            failure=FetchFailure.NETWORK,
            details={"manager_id": 42},
        )

        assert error.error_type == ErrorType.EXTERNAL_API_ERROR
        assert error.source == "picks"
        assert error.details == {"source": "picks", "failure": "network", "manager_id": 42}
        assert error.is_retryable

    @pytest.mark.parametrize(
        "failure, retryable",
        [
            (FetchFailure.TIMEOUT, True),
            (FetchFailure.STATUS, False),
            (FetchFailure.INVALID_PAYLOAD, False),
        ],
    )
    def test_retryable_failures(self, failure, retryable):
        error = DomainError.external_api_error("failed", source="fixtures", failure=failure)
        assert error.is_retryable is retryable

    def test_other_errors_have_no_source(self):
        error = DomainError.validation_error("bad squad")
        assert error.source is None
        assert not error.is_retryable
