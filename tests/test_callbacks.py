"""Tests for fieldcheck.validation.callbacks — three-mode callback dispatch."""

import re

import pytest

from fieldcheck.errors import ConfigurationError
from fieldcheck.validation.callbacks import (
    EqualityPredicate,
    InvocablePredicate,
    PatternPredicate,
    classify_callback,
    compile_delimited,
    literal,
    pattern,
)


class TestClassify:
    def test_callable(self) -> None:
        pred = classify_callback(str.isupper)
        assert isinstance(pred, InvocablePredicate)
        assert pred("ABC") is True
        assert pred("abc") is False

    def test_truthiness(self) -> None:
        pred = classify_callback(lambda value: value.count("x"))
        assert pred("xx") is True
        assert pred("y") is False

    def test_delimited_pattern(self) -> None:
        pred = classify_callback(r"/^\d{3}$/")
        assert isinstance(pred, PatternPredicate)
        assert pred("123") is True
        assert pred("12") is False

    def test_pattern_is_searched(self) -> None:
        pred = classify_callback("/bc/")
        assert pred("abcd") is True

    def test_pattern_flags(self) -> None:
        pred = classify_callback("/^[a-z]+$/i")
        assert pred("HeLLo") is True

    def test_bracket_delimiters(self) -> None:
        pred = classify_callback("{^a+$}")
        assert isinstance(pred, PatternPredicate)
        assert pred("aaa") is True

    def test_compiled_pattern(self) -> None:
        pred = classify_callback(re.compile(r"^\w+$"))
        assert isinstance(pred, PatternPredicate)

    def test_plain_string_is_equality(self) -> None:
        pred = classify_callback("yes")
        assert isinstance(pred, EqualityPredicate)
        assert pred("yes") is True
        assert pred("yes ") is False

    def test_literal_that_looks_like_pattern(self) -> None:
        # Delimited text is treated as a pattern, not a literal.
        pred = classify_callback("/home/")
        assert isinstance(pred, PatternPredicate)
        assert pred("/home/") is True
        assert pred("my home") is True

    def test_unknown_flag_is_equality(self) -> None:
        assert isinstance(classify_callback("/abc/q"), EqualityPredicate)

    def test_uncompilable_body_is_equality(self) -> None:
        assert isinstance(classify_callback("/(/"), EqualityPredicate)

    def test_already_classified(self) -> None:
        pred = literal("/home/")
        assert classify_callback(pred) is pred

    @pytest.mark.parametrize(("fn", "text"), [(None, ""), (42, "42"), (3.5, "3.5")])
    def test_other_values_compare_as_text(self, fn: object, text: str) -> None:
        pred = classify_callback(fn)
        assert isinstance(pred, EqualityPredicate)
        assert pred.literal == text


class TestExplicitTags:
    def test_literal(self) -> None:
        pred = literal("/home/")
        assert pred("/home/") is True
        assert pred("my home") is False

    def test_pattern(self) -> None:
        pred = pattern(r"^\d+$")
        assert pred("123") is True

    def test_bad_pattern(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid pattern"):
            pattern("(")


class TestCompileDelimited:
    def test_not_delimited(self) -> None:
        assert compile_delimited("abc") is None
        assert compile_delimited("/") is None
        assert compile_delimited(" a ") is None

    def test_body(self) -> None:
        compiled = compile_delimited("#a/b#")
        assert compiled is not None
        assert compiled.pattern == "a/b"
