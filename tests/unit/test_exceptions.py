"""Tests for the exception hierarchy."""

import pytest

from board_triage.exceptions import BoardTriageError, ConfigurationError, StoreError


class TestBoardTriageError:
    def test_message_attribute(self):
        error = BoardTriageError("something broke")

        assert error.message == "something broke"
        assert str(error) == "something broke"

    @pytest.mark.parametrize("error_cls", [ConfigurationError, StoreError])
    def test_subclasses_caught_by_base(self, error_cls):
        with pytest.raises(BoardTriageError):
            raise error_cls("failure")


class TestStoreError:
    def test_full_message(self):
        error = StoreError("permission denied", operation="insert_comment", status_code=403, response_text="{}")

        assert str(error) == "insert_comment: permission denied (HTTP 403)"
        assert error.message == "permission denied"
        assert error.operation == "insert_comment"
        assert error.status_code == 403
        assert error.response_text == "{}"

    def test_without_details(self):
        error = StoreError("timed out")

        assert str(error) == "timed out"
        assert error.operation is None
        assert error.status_code is None
