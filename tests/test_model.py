"""Tests for model naming, registration and field enumeration."""

from datetime import date, datetime
from enum import Enum
from typing import Annotated

import pytest
from pydantic import BaseModel, Field, PastDate

from displayform.forms.constraints import Exclude, Hidden, Required
from displayform.forms.decorators import display_model
from displayform.forms.model import (
    DisplayModel,
    _model_registry,
    derive_model_name,
    describe_fields,
    get_display_model,
    get_model_name,
    model_schema,
    parse_ignore,
)
from displayform.lib.exceptions import MissingModelError


class Profile(BaseModel):
    first_name: str = ""
    last_name: str = ""
    token: Annotated[str, Hidden()] = ""
    notes: Annotated[str, Exclude()] = ""
    age: int = 0


class TestModelName:
    def test_lower_cased_class_name(self):
        assert derive_model_name(Profile) == "profile"

    def test_camel_case_is_not_split(self):
        class UserAccount:
            pass

        assert derive_model_name(UserAccount) == "useraccount"

    def test_from_instance(self):
        assert get_model_name(Profile()) == "profile"

    def test_display_model_override(self):
        class Account(DisplayModel, model_name="acct"):
            owner: str = ""

        assert get_model_name(Account) == "acct"
        assert get_model_name(Account()) == "acct"


class TestRegistry:
    def test_subclass_registers_under_derived_name(self):
        class Customer(DisplayModel):
            name: str = ""

        assert _model_registry["customer"] is Customer
        assert get_display_model("customer") is Customer

    def test_model_name_not_in_model_fields(self):
        class Customer(DisplayModel):
            name: str = ""

        assert "_model_name" not in Customer.model_fields

    def test_decorator_registers_plain_model(self):
        @display_model("acct")
        class Account(BaseModel):
            owner: str = ""

        assert get_display_model("acct") is Account
        assert get_model_name(Account) == "acct"

    def test_decorator_derives_name(self):
        @display_model()
        class Invoice(BaseModel):
            total: int = 0

        assert get_display_model("invoice") is Invoice

    def test_unknown_name_raises_lookup_error(self):
        with pytest.raises(LookupError, match=r"No model named 'missing'. Registered: \(none\)"):
            get_display_model("missing")

    def test_error_lists_registered_names(self):
        class Alpha(DisplayModel):
            a: str = ""

        class Beta(DisplayModel):
            b: str = ""

        with pytest.raises(LookupError, match="alpha, beta"):
            get_display_model("gamma")


class TestParseIgnore:
    def test_none_stays_none(self):
        assert parse_ignore(None) is None

    def test_comma_separated_with_spaces(self):
        assert parse_ignore("field1, field2") == ["field1", "field2"]

    def test_all_whitespace_is_stripped(self):
        assert parse_ignore(" a ,\tb , c d") == ["a", "b", "cd"]

    def test_single_name(self):
        assert parse_ignore("token") == ["token"]

    def test_iterable_is_listed(self):
        assert parse_ignore(("a", "b")) == ["a", "b"]


class TestModelSchema:
    def test_declaration_order(self):
        names = [schema.name for schema in model_schema(Profile)]
        assert names == ["first_name", "last_name", "token", "notes", "age"]

    def test_schema_is_cached_per_class(self):
        assert model_schema(Profile) is model_schema(Profile)

    def test_schema_cache_is_bounded(self):
        assert model_schema.cache_info().maxsize is not None

    def test_markers(self):
        schemas = {schema.name: schema for schema in model_schema(Profile)}
        assert schemas["token"].hidden
        assert schemas["notes"].excluded
        assert not schemas["age"].hidden and not schemas["age"].excluded

    def test_label_from_extra_or_title(self):
        class M(BaseModel):
            a: str = Field(default="", json_schema_extra={"label": "Alpha"})
            b: str = Field(default="", title="Bravo")
            first_name: str = ""

        schemas = {schema.name: schema for schema in model_schema(M)}
        assert schemas["a"].default_label == "Alpha"
        assert schemas["b"].default_label == "Bravo"
        assert schemas["first_name"].default_label == "First Name"


class TestKind:
    def test_text_by_default(self):
        class M(BaseModel):
            f: str = ""

        assert model_schema(M)[0].kind == "text"

    def test_date_and_datetime(self):
        class M(BaseModel):
            born: date | None = None
            updated: datetime | None = None

        assert [schema.kind for schema in model_schema(M)] == ["date", "date"]

    def test_type_names_containing_date_are_text(self):
        class Update(str, Enum):
            NOW = "now"

        class Candidate(BaseModel):
            name: str = ""

        class M(BaseModel):
            mode: Update = Update.NOW
            person: Candidate | None = None

        assert [schema.kind for schema in model_schema(M)] == ["text", "text"]

    def test_date_suffixed_type_name(self):
        class M(BaseModel):
            when: PastDate | None = None

        assert model_schema(M)[0].kind == "date"


class TestDescribeFields:
    def test_missing_model_raises(self):
        with pytest.raises(MissingModelError, match="You must specify a model"):
            describe_fields(None)

    def test_exclude_marker_applies_without_ignore_list(self):
        names = [d.name for d in describe_fields(Profile())]
        assert names == ["first_name", "last_name", "token", "age"]

    def test_ignore_list_replaces_exclude_marker(self):
        """With an explicit ignore list the exclude marker is not consulted."""
        names = [d.name for d in describe_fields(Profile(), ["first_name", "age"])]
        assert names == ["last_name", "token", "notes"]

    def test_empty_ignore_list_shows_excluded_fields(self):
        names = [d.name for d in describe_fields(Profile(), [])]
        assert "notes" in names

    def test_hidden_and_excluded_field_is_ignored(self):
        class M(BaseModel):
            secret: Annotated[str, Hidden(), Exclude()] = ""
            name: str = ""

        assert [d.name for d in describe_fields(M())] == ["name"]

    def test_values_and_names(self):
        descriptor = describe_fields(Profile(first_name="Ada"))[0]
        assert descriptor.value == "Ada"
        assert descriptor.qualified_name == "profile.first_name"
        assert descriptor.id == "profilefirst_name"

    def test_values_are_read_on_every_call(self):
        profile = Profile(first_name="Ada")
        describe_fields(profile)
        profile.first_name = "Grace"
        assert describe_fields(profile)[0].value == "Grace"

    def test_missing_attribute_propagates(self):
        class M(BaseModel):
            name: Annotated[str, Required()]

        instance = M.model_construct()
        with pytest.raises(AttributeError):
            describe_fields(instance)
