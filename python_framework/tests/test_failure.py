"""Tests for FailureDescription and ErrorCode."""

import pytest

from railway import ErrorCode, FailureDescription


class TestErrorCode:
    def test_one_code_per_pipeline_stage(self):
        assert {code.name for code in ErrorCode} == {
            "READ_ERROR",
            "INVALID_INPUT_KIND",
            "CERTIFICATE_PARSE_ERROR",
            "FINGERPRINT_TOO_SHORT",
            "STATE_WRITE_ERROR",
            "CONFIGURATION_ERROR",
        }

    def test_error_code_values_match_names(self):
        for code in ErrorCode:
            assert code.value == code.name


class TestFailureDescription:
    def test_creation_with_code_and_message(self):
        desc = FailureDescription(ErrorCode.READ_ERROR, "no such file")
        assert desc.code == ErrorCode.READ_ERROR
        assert desc.message == "no such file"
        assert desc.exception is None
        assert desc.timestamp is not None

    def test_creation_with_exception(self):
        ex = PermissionError("denied")
        desc = FailureDescription(ErrorCode.STATE_WRITE_ERROR, "mkdir failed", ex)
        assert desc.exception is ex

    def test_factory_method(self):
        desc = FailureDescription.create(ErrorCode.INVALID_INPUT_KIND, "wrong label")
        assert desc.code == ErrorCode.INVALID_INPUT_KIND
        assert desc.message == "wrong label"

    def test_immutability(self):
        desc = FailureDescription(ErrorCode.READ_ERROR, "test")
        with pytest.raises(AttributeError):
            desc.message = "changed"  # type: ignore

    def test_timestamp_is_utc(self):
        desc = FailureDescription(ErrorCode.READ_ERROR, "test")
        assert desc.timestamp.tzinfo is not None

    def test_full_stack_trace_without_exception(self):
        desc = FailureDescription(ErrorCode.CERTIFICATE_PARSE_ERROR, "just a message")
        assert desc.full_stack_trace() == "just a message"

    def test_full_stack_trace_with_exception(self):
        try:
            raise OSError("disk full")
        except OSError as e:
            desc = FailureDescription(ErrorCode.STATE_WRITE_ERROR, "write failed", e)
            trace = desc.full_stack_trace()
            assert "write failed" in trace
            assert "OSError" in trace
            assert "disk full" in trace
