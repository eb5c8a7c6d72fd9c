"""Tests for fieldcheck.validation.rules — registry and pending chain."""

import pytest

from fieldcheck.errors import ConfigurationError
from fieldcheck.validation.rules import RegisteredRule, RuleChain, RuleRegistry


def always(value: str) -> bool:
    return True


def never(value: str) -> bool:
    return False


class TestRuleChain:
    def test_stage_preserves_order(self) -> None:
        chain = RuleChain()
        chain.stage("b")
        chain.stage("a")
        assert list(chain) == ["b", "a"]

    def test_stage_is_idempotent(self) -> None:
        chain = RuleChain()
        assert chain.stage("a") is True
        assert chain.stage("a") is False
        assert len(chain) == 1

    def test_clear(self) -> None:
        chain = RuleChain()
        chain.stage("a")
        chain.clear()
        assert not chain
        assert "a" not in chain


class TestRegisteredRule:
    def test_check_passes_args(self) -> None:
        rule = RegisteredRule("gt", lambda value, n: int(value) > n, (3,), "{label}")
        assert rule.check("4") is True
        assert rule.check("3") is False

    def test_frozen(self) -> None:
        rule = RegisteredRule("a", always)
        with pytest.raises(AttributeError):
            rule.name = "b"  # type: ignore[misc]


class TestRuleRegistry:
    def test_register_stages(self) -> None:
        registry = RuleRegistry()
        assert registry.register("a", always, (), "A") is True
        assert list(registry.chain) == ["a"]
        assert registry["a"].template == "A"

    def test_non_callable_raises(self) -> None:
        registry = RuleRegistry()
        with pytest.raises(ConfigurationError, match="Invalid function for rule: bad"):
            registry.register("bad", "not callable")  # type: ignore[arg-type]
        assert "bad" not in registry
        assert not registry.chain

    def test_pending_duplicate_is_noop(self) -> None:
        registry = RuleRegistry()
        registry.register("a", always, (1,), "first")
        assert registry.register("a", never, (2,), "second") is False
        rule = registry["a"]
        assert rule.predicate is always
        assert rule.args == (1,)
        assert rule.template == "first"

    def test_rebinds_args_in_new_chain(self) -> None:
        registry = RuleRegistry()
        registry.register("a", always, (1,), "first")
        registry.chain.clear()
        registry.register("a", always, (2,), "second")
        assert registry["a"].args == (2,)
        assert registry["a"].template == "second"
        assert len(registry) == 1

    def test_keeps_first_predicate(self, caplog) -> None:
        registry = RuleRegistry()
        registry.register("a", always)
        registry.chain.clear()
        with caplog.at_level("WARNING", logger="fieldcheck.validation"):
            registry.register("a", never)
        assert registry["a"].predicate is always
        assert any("keeping its first predicate" in r.message for r in caplog.records)

    def test_pending_in_order(self) -> None:
        registry = RuleRegistry()
        registry.register("b", always)
        registry.register("a", never)
        assert [r.name for r in registry.pending()] == ["b", "a"]

    def test_get_missing(self) -> None:
        assert RuleRegistry().get("nope") is None
