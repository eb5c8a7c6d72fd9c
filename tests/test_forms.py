"""Tests for fieldcheck.forms — the multi-valued input store."""

import pytest

from fieldcheck.forms import FormData
from fieldcheck.validation import Validator


class TestFormData:
    def test_from_pairs_keeps_repeats(self) -> None:
        form = FormData.from_pairs([("tag", "a"), ("name", "x"), ("tag", "b")])
        assert form["tag"] == "a"
        assert form.get_list("tag") == ["a", "b"]
        assert list(form) == ["tag", "name"]

    def test_blank_value_is_present(self) -> None:
        form = FormData.from_pairs([("name", "")])
        assert "name" in form
        assert form["name"] == ""

    def test_empty_list_is_absent(self) -> None:
        form = FormData({"gone": [], "kept": ["1"]})
        assert "gone" not in form
        assert len(form) == 1

    def test_missing_key(self) -> None:
        form = FormData()
        assert form.get("missing") is None
        assert form.get_list("missing") == []
        with pytest.raises(KeyError):
            form["missing"]

    def test_source_list_copied(self) -> None:
        source = {"a": ["1"]}
        form = FormData(source)
        source["a"].append("2")
        assert form.get_list("a") == ["1"]

    def test_read_only(self) -> None:
        form = FormData({"a": ["1"]})
        with pytest.raises(TypeError):
            form.lists["b"] = ("2",)  # type: ignore[index]


class TestValidatorWithFormData:
    def test_rules_see_first_value(self) -> None:
        form = FormData.from_pairs([("age", "21"), ("age", "abc")])
        assert Validator(form).integer().min(18).validate("age", "Age") is True

    def test_blank_start_skips_mindate(self) -> None:
        form = FormData.from_pairs([("start", ""), ("end", "05/05/2024")])
        assert Validator(form).mindate("start").validate("end") is True
