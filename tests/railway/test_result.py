"""
Tests for the Result monad as used by the certificate service.

Tests cover:
  - Success/Failure creation and introspection
  - map, flat_map, map_failure, ensure
  - Side effects (peek, peek_failure)
  - Static factories (from_computation, from_optional, all_of)
  - Equality and repr
"""

from __future__ import annotations

import pytest

from railway import ErrorCode, Failure, FailureDescription, Result, Success


class TestCreation:
    def test_success_wraps_value(self):
        result = Result.success(42)
        assert result.is_success()
        assert not result.is_failure()
        assert result.value() == 42

    def test_success_allows_falsy_values(self):
        assert Result.success([]).value() == []
        assert Result.success("").value() == ""

    def test_success_rejects_none(self):
        with pytest.raises(TypeError, match="must not be None"):
            Success(None)

    def test_failure_with_code_message_and_exception(self):
        ex = OSError("disk")
        result = Result.failure(ErrorCode.TECHNICAL_ERROR, "Failed to save file", ex)
        assert result.is_failure()
        assert result.error().code == ErrorCode.TECHNICAL_ERROR
        assert result.error().message == "Failed to save file"
        assert result.error().exception is ex

    def test_failure_rejects_none(self):
        with pytest.raises(TypeError, match="must not be None"):
            Failure(None)

    def test_failure_is_falsy(self):
        assert not Result.failure(ErrorCode.NOT_FOUND, "missing")

    def test_value_on_failure_raises(self):
        with pytest.raises(ValueError, match="Cannot get value"):
            Result.failure(ErrorCode.NOT_FOUND, "missing").value()

    def test_error_on_success_raises(self):
        with pytest.raises(ValueError, match="Cannot get error"):
            Result.success(1).error()


class TestTransformations:
    def test_map_transforms_success(self):
        assert Result.success(5).map(lambda x: x * 2).value() == 10

    def test_map_skips_failure(self):
        calls = []
        result = Result.failure(ErrorCode.NOT_FOUND, "missing").map(calls.append)
        assert result.is_failure()
        assert calls == []

    def test_flat_map_chains(self):
        result = Result.success(2).flat_map(lambda x: Result.success(x + 1))
        assert result.value() == 3

    def test_flat_map_short_circuits(self):
        result = (
            Result.success(2)
            .flat_map(lambda _: Result.failure(ErrorCode.VALIDATION_ERROR, "bad"))
            .flat_map(lambda _: Result.success("never"))
        )
        assert result.error().message == "bad"

    def test_map_failure_rewrites_message_and_keeps_exception(self):
        cause = KeyError("course")
        result = Result.failure(ErrorCode.TECHNICAL_ERROR, "inner", cause).map_failure(
            lambda err: err.with_message("Failed to process template")
        )
        assert result.error().message == "Failed to process template"
        assert result.error().code == ErrorCode.TECHNICAL_ERROR
        assert result.error().exception is cause

    def test_map_failure_passes_success_through(self):
        result = Result.success(1).map_failure(lambda err: err.with_message("x"))
        assert result.value() == 1

    def test_ensure_passes_and_fails(self):
        ok = Result.success([1, 2]).ensure(lambda v: len(v) >= 2, ErrorCode.TECHNICAL_ERROR, "short")
        bad = Result.success([1]).ensure(lambda v: len(v) >= 2, ErrorCode.TECHNICAL_ERROR, "short")
        assert ok.value() == [1, 2]
        assert bad.error().message == "short"

    def test_either(self):
        assert Result.success(1).either(lambda v: f"ok {v}", lambda e: e.message) == "ok 1"
        failure = Result.failure(ErrorCode.NOT_FOUND, "missing")
        assert failure.either(lambda v: v, lambda e: e.message) == "missing"


class TestSideEffects:
    def test_peek_runs_on_success_only(self):
        seen = []
        Result.success(1).peek(seen.append)
        Result.failure(ErrorCode.NOT_FOUND, "missing").peek(seen.append)
        assert seen == [1]

    def test_peek_failure_runs_on_failure_only(self):
        seen = []
        Result.success(1).peek_failure(seen.append)
        Result.failure(ErrorCode.NOT_FOUND, "missing").peek_failure(lambda e: seen.append(e.code))
        assert seen == [ErrorCode.NOT_FOUND]


class TestFactories:
    def test_from_computation_success(self):
        assert Result.from_computation(lambda: 7, ErrorCode.TECHNICAL_ERROR, "x").value() == 7

    def test_from_computation_captures_exception(self):
        def _boom():
            raise FileNotFoundError("template.txt")

        result = Result.from_computation(_boom, ErrorCode.TECHNICAL_ERROR, "Failed to load")
        assert result.error().message == "Failed to load"
        assert isinstance(result.error().exception, FileNotFoundError)

    def test_from_optional(self):
        assert Result.from_optional(1, "missing").value() == 1
        missing = Result.from_optional(None, "missing", ErrorCode.NOT_FOUND)
        assert missing.error().code == ErrorCode.NOT_FOUND

    def test_all_of_collects_values(self):
        assert Result.all_of([Result.success(1), Result.success(2)]).value() == [1, 2]

    def test_all_of_returns_first_failure(self):
        result = Result.all_of(
            [
                Result.success(1),
                Result.failure(ErrorCode.TECHNICAL_ERROR, "first"),
                Result.failure(ErrorCode.TECHNICAL_ERROR, "second"),
            ]
        )
        assert result.error().message == "first"

    def test_all_of_empty(self):
        assert Result.all_of([]).value() == []


class TestEqualityAndRepr:
    def test_success_equality(self):
        assert Result.success(1) == Result.success(1)
        assert Result.success(1) != Result.success(2)

    def test_failure_equality_ignores_timestamp(self):
        a = Result.failure(ErrorCode.NOT_FOUND, "missing")
        b = Result.failure(ErrorCode.NOT_FOUND, "missing")
        assert a == b

    def test_repr(self):
        assert repr(Result.success(1)) == "Success(1)"
        assert repr(Result.failure(ErrorCode.NOT_FOUND, "missing")) == "Failure(NOT_FOUND: 'missing')"

    def test_full_stack_trace_without_exception_is_message(self):
        assert FailureDescription(ErrorCode.NOT_FOUND, "missing").full_stack_trace() == "missing"
