"""Tests for the outgoing-data validator."""

from __future__ import annotations

import logging

from standard_response.services.validator import ResponseValidator


def test_without_predicate_everything_passes() -> None:
    validator = ResponseValidator()
    assert not validator.enabled
    assert validator.is_valid([1, 2])
    assert validator.is_valid(None)


def test_predicate_applies_to_every_item() -> None:
    validator = ResponseValidator(lambda item: item > 0)
    assert validator.is_valid([1, 2, 3])
    assert validator.is_valid((1,))
    assert not validator.is_valid([1, -2, 3])


def test_predicate_applies_once_to_scalars() -> None:
    validator = ResponseValidator(lambda item: isinstance(item, dict))
    assert validator.is_valid({"a": 1})
    assert not validator.is_valid("abc")


def test_empty_sequence_is_valid() -> None:
    assert ResponseValidator(lambda item: False).is_valid([])


def test_failure_logs_message(caplog) -> None:
    validator = ResponseValidator(lambda item: False, message="leaky payload")
    with caplog.at_level(logging.ERROR, logger="standard_response.services.validator"):
        assert not validator.is_valid({"password": "x"})
    assert "leaky payload" in caplog.text


def test_non_callable_predicate_always_fails(caplog) -> None:
    validator = ResponseValidator(predicate="not a function")
    with caplog.at_level(logging.ERROR, logger="standard_response.services.validator"):
        assert not validator.is_valid([1])
    assert "not callable" in caplog.text


def test_raising_predicate_fails(caplog) -> None:
    validator = ResponseValidator(lambda item: item["x"] > 0, message="unexpected shape")
    with caplog.at_level(logging.ERROR, logger="standard_response.services.validator"):
        assert not validator.is_valid([{"x": 1}, {"y": 2}])
    assert "unexpected shape" in caplog.text
    assert "KeyError" in caplog.text
