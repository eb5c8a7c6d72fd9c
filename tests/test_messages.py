"""Tests for fieldcheck.validation.messages — default table and formatting."""

from datetime import date

from fieldcheck.validation.messages import (
    DEFAULT_MESSAGES,
    FALLBACK_MESSAGE,
    default_message,
    format_message,
    normalize_message,
    render_value,
)


class TestDefaultMessage:
    def test_every_template_has_label(self) -> None:
        assert all("{label}" in t for t in DEFAULT_MESSAGES.values())

    def test_plain_rule(self) -> None:
        assert default_message("required") == "{label} is required."

    def test_params_bound_at_build_time(self) -> None:
        template = default_message("minlength", {"length": 3})
        assert template == "{label} must be at least 3 characters or longer."

    def test_between(self) -> None:
        template = default_message("between", {"min": 1, "max": 5})
        assert template == "{label} must be between 1 and 5."

    def test_unknown_rule_falls_back(self) -> None:
        assert default_message("custom") == FALLBACK_MESSAGE

    def test_override_wins(self) -> None:
        template = default_message("required", overrides={"required": "{label}?"})
        assert template == "{label}?"

    def test_override_for_other_rule_ignored(self) -> None:
        template = default_message("email", overrides={"required": "x"})
        assert template == DEFAULT_MESSAGES["email"]

    def test_braces_in_params_kept(self) -> None:
        template = default_message("oneof", {"choices": ("{a}", "b")})
        assert format_message(template, "X") == "X must be one of {a}, b."

    def test_percent_in_params_kept(self) -> None:
        template = default_message("oneof", {"choices": ("10%s", "b")})
        assert format_message(template, "Rate") == "Rate must be one of 10%s, b."

    def test_override_percent_alias(self) -> None:
        template = default_message(
            "minlength", {"length": 3}, {"minlength": "%s needs {length}+ chars."}
        )
        assert template == "{label} needs 3+ chars."


class TestRenderValue:
    def test_integral_float(self) -> None:
        assert render_value(10.0) == "10"

    def test_float(self) -> None:
        assert render_value(2.5) == "2.5"

    def test_sequence(self) -> None:
        assert render_value(("a", "b", "c")) == "a, b, c"

    def test_date(self) -> None:
        assert render_value(date(2024, 1, 2)) == "2024-01-02"


class TestFormatMessage:
    def test_label(self) -> None:
        assert format_message("{label} is required.", "Name") == "Name is required."

    def test_percent_alias(self) -> None:
        assert normalize_message("%s is required.") == "{label} is required."

    def test_percent_left_alone(self) -> None:
        assert format_message("%s is required.", "Name") == "%s is required."

    def test_no_placeholder(self) -> None:
        assert format_message("Bad input.", "Name") == "Bad input."
