"""Tests for the error model."""

import pickle

import pytest

from structval.errors import ErrorKind, ValidationError, ValidationErrors


class TestValidationError:
    """Test ValidationError class."""

    def test_default_message(self):
        error = ValidationError(ErrorKind.NOT_STRUCT)
        assert error.message == "wrong argument given, should be a struct"
        assert str(error) == error.message
        assert error.path == ""

    def test_custom_message_and_path(self):
        error = ValidationError(ErrorKind.INVALID_LENGTH, "invalid length", path="user.id", rule="len")
        assert error.message == "invalid length"
        assert error.path == "user.id"
        assert error.rule == "len"

    def test_matches(self):
        error = ValidationError(ErrorKind.INVALID_SYNTAX)
        assert error.matches(ErrorKind.INVALID_SYNTAX)
        assert not error.matches(ErrorKind.NOT_STRUCT)

    def test_immutable(self):
        error = ValidationError(ErrorKind.NOT_IN)
        with pytest.raises(AttributeError):
            error.kind = ErrorKind.NOT_STRUCT

    def test_at_returns_relocated_copy(self):
        error = ValidationError(ErrorKind.INVALID_SYNTAX, rule="min")
        moved = error.at("order.items[0]")
        assert moved.path == "order.items[0]"
        assert moved.kind is ErrorKind.INVALID_SYNTAX
        assert moved.rule == "min"
        assert error.path == ""

    def test_to_dict(self):
        error = ValidationError(ErrorKind.NOT_IN, path="role", rule="in")
        assert error.to_dict() == {
            "kind": "not_in",
            "message": "field value is not in array from tag",
            "path": "role",
            "rule": "in",
        }


class TestValidationErrors:
    """Test ValidationErrors aggregate."""

    def test_empty_is_falsy(self):
        errors = ValidationErrors()
        assert not errors
        assert len(errors) == 0
        assert str(errors) == ""

    def test_order_is_preserved(self):
        errors = ValidationErrors()
        errors.append(ValidationError(ErrorKind.INVALID_LENGTH, path="a"))
        errors.append(ValidationError(ErrorKind.NOT_IN, path="b"))
        errors.extend([ValidationError(ErrorKind.LESS_THAN_MIN, path="c")])

        assert [e.path for e in errors] == ["a", "b", "c"]
        assert errors[1].kind is ErrorKind.NOT_IN

    def test_str_joins_without_trailing_separator(self):
        errors = ValidationErrors([
            ValidationError(ErrorKind.INVALID_LENGTH),
            ValidationError(ErrorKind.NOT_IN),
        ])
        assert str(errors) == "invalid length: field value is not in array from tag"

    def test_custom_separator(self):
        errors = ValidationErrors(
            [ValidationError(ErrorKind.NOT_STRUCT), ValidationError(ErrorKind.NOT_STRUCT)],
            separator="; ",
        )
        assert str(errors).count("; ") == 1

    def test_matches_any(self):
        errors = ValidationErrors([
            ValidationError(ErrorKind.INVALID_LENGTH),
            ValidationError(ErrorKind.UNEXPORTED_FIELD),
        ])
        assert errors.matches(ErrorKind.UNEXPORTED_FIELD)
        assert not errors.matches(ErrorKind.INVALID_SYNTAX)

    def test_by_kind(self):
        errors = ValidationErrors([
            ValidationError(ErrorKind.NOT_IN, path="x"),
            ValidationError(ErrorKind.INVALID_LENGTH, path="y"),
            ValidationError(ErrorKind.NOT_IN, path="z"),
        ])
        assert [e.path for e in errors.by_kind(ErrorKind.NOT_IN)] == ["x", "z"]

    def test_to_dict(self):
        errors = ValidationErrors([ValidationError(ErrorKind.NOT_STRUCT)])
        result = errors.to_dict()
        assert result["valid"] is False
        assert result["count"] == 1
        assert result["errors"][0]["kind"] == "not_struct"

    def test_can_be_raised(self):
        errors = ValidationErrors([ValidationError(ErrorKind.NOT_STRUCT)])
        with pytest.raises(ValidationErrors) as exc_info:
            raise errors
        assert exc_info.value.matches(ErrorKind.NOT_STRUCT)


class TestPickling:
    """Errors cross process boundaries intact."""

    def test_single_error_round_trip(self):
        error = ValidationError(ErrorKind.INVALID_LENGTH, path="x", rule="len")
        restored = pickle.loads(pickle.dumps(error))

        assert restored.kind is ErrorKind.INVALID_LENGTH
        assert restored.message == "invalid length"
        assert restored.path == "x"
        assert restored.rule == "len"
        assert str(restored) == "invalid length"

    def test_aggregate_round_trip(self):
        errors = ValidationErrors(
            [ValidationError(ErrorKind.NOT_IN, path="role"), ValidationError(ErrorKind.NOT_STRUCT)],
            separator=" | ",
        )
        restored = pickle.loads(pickle.dumps(errors))

        assert [e.path for e in restored] == ["role", ""]
        assert restored.matches(ErrorKind.NOT_STRUCT)
        assert str(restored) == str(errors)
