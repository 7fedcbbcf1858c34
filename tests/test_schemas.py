"""Tests for the user Pydantic models and field rules."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from user_store.schemas.user import (
    UserInput,
    UserPatch,
    UserRecord,
    is_valid_email,
    normalize_gender,
)


class TestEmailShape:
    @pytest.mark.parametrize("email", ["ana@x.co", "a.b@c.d", "x@sub.domain.org"])
    def test_valid(self, email):
        assert is_valid_email(email)

    @pytest.mark.parametrize(
        "email",
        ["", "   ", "@x.co", "ana@.co", "ana@x.", "ana@x", "ana x@y.co", "ana.x.co",
         "a\t@b.co", "a@b\n.co"],
    )
    def test_invalid(self, email):
        assert not is_valid_email(email)


class TestGender:
    def test_normalizes_case_and_whitespace(self):
        assert normalize_gender(" f ") == "F"
        assert normalize_gender("m") == "M"

    @pytest.mark.parametrize("value", ["", "X", "male"])
    def test_rejects_unknown(self, value):
        with pytest.raises(ValueError, match="gender"):
            normalize_gender(value)


class TestUserInput:
    def test_valid_input_is_normalized(self):
        data = UserInput(name="  Ana\tMaria ", email=" ana@x.co ", age=30, salary=10.5, gender="f")
        assert data.name == "Ana Maria"
        assert data.email == "ana@x.co"
        assert data.gender == "F"

    def test_line_breaks_in_name_become_spaces(self):
        data = UserInput(name="Ana\nMaria\r", email="a@x.co", age=1, gender="F")
        assert data.name == "Ana Maria"

    def test_salary_defaults_to_zero(self):
        assert UserInput(name="A", email="a@x.co", age=1, gender="M").salary == 0.0

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name must not be empty"):
            UserInput(name="  ", email="a@x.co", age=1, gender="M")

    def test_bad_email_rejected(self):
        with pytest.raises(ValidationError, match="invalid email"):
            UserInput(name="A", email="not-an-email", age=1, gender="M")

    @pytest.mark.parametrize("age", [-1, 121])
    def test_age_out_of_range(self, age):
        with pytest.raises(ValidationError):
            UserInput(name="A", email="a@x.co", age=age, gender="M")

    def test_age_bounds_accepted(self):
        assert UserInput(name="A", email="a@x.co", age=0, gender="M").age == 0
        assert UserInput(name="A", email="a@x.co", age=120, gender="M").age == 120

    def test_negative_salary_rejected(self):
        with pytest.raises(ValidationError, match="greater than or equal to 0"):
            UserInput(name="A", email="a@x.co", age=1, salary=-0.01, gender="M")

    def test_nan_salary_rejected(self):
        with pytest.raises(ValidationError):
            UserInput(name="A", email="a@x.co", age=1, salary=float("nan"), gender="M")

    def test_email_with_tab_rejected(self):
        with pytest.raises(ValidationError, match="invalid email"):
            UserInput(name="A", email="a\t@b.co", age=1, gender="M")

    def test_unknown_gender_rejected(self):
        with pytest.raises(ValidationError, match="gender"):
            UserInput(name="A", email="a@x.co", age=1, gender="X")


class TestUserRecord:
    def test_salary_rounded_to_cents(self):
        assert UserRecord(id=1, salary=10.126).salary == 10.13

    def test_id_must_be_positive(self):
        with pytest.raises(ValidationError, match="greater than or equal to 1"):
            UserRecord(id=0)

    def test_legacy_values_allowed(self):
        record = UserRecord(id=1, name="", email="junk", age=500, gender="")
        assert record.email == "junk"


class TestUserPatch:
    def test_only_supplied_fields_are_set(self):
        patch = UserPatch.model_validate({"age": 46})
        assert patch.model_dump(exclude_unset=True) == {"age": 46}

    def test_empty_patch(self):
        assert UserPatch().model_dump(exclude_unset=True) == {}

    def test_supplied_fields_follow_input_rules(self):
        patch = UserPatch(name=" Luis ", gender="m")
        assert patch.model_dump(exclude_unset=True) == {"name": "Luis", "gender": "M"}

    @pytest.mark.parametrize(
        "fields",
        [{"email": "bad"}, {"age": 121}, {"salary": -1}, {"gender": "X"}, {"name": " "}],
    )
    def test_invalid_supplied_field_rejected(self, fields):
        with pytest.raises(ValidationError):
            UserPatch.model_validate(fields)
