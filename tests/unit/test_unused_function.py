"""
Tests for the unused-function lint rule and the rule registry.
"""

import pytest

from noirlint.analysis import Analyzer, lint_source, parse_source
from noirlint.diagnostics import Lint, Severity
from noirlint.lints import ALL_RULES, UnusedFunction, default_rules, get_rule_by_name
from noirlint.utils.errors import ParsingError, Span, UnknownRuleError


class TestUnusedFunctionScenarios:
    """Reference scenarios for the rule."""

    def test_public_function_is_exempt(self, analyze_source):
        assert analyze_source("pub fn foo() {}") == []

    def test_private_uncalled_function(self, analyze_source):
        source = "fn foo() {}"
        lints = analyze_source(source)
        start = source.index("foo")
        assert lints == [
            Lint(
                "unused-function",
                Severity.WARNING,
                "Function 'foo' is unused",
                Span(start, start + 3),
            )
        ]

    def test_call_suppresses_warning(self, analyze_source):
        assert analyze_source("fn foo() {}\npub fn bar() { foo() }") == []

    def test_crate_visibility_is_not_exempt(self, analyze_source):
        source = """
fn private_fn_1() {}
fn private_fn_2() {}
pub(crate) fn crate_fn_1() {}
pub(crate) fn crate_fn_2() {}

pub fn public_fn_1() {
    private_fn_1();
}

pub fn public_fn_2() {
    crate_fn_1();
}

pub fn public_fn_3() {}
"""
        lints = sorted(analyze_source(source), key=lambda lint: lint.span.start)
        assert [lint.description for lint in lints] == [
            "Function 'private_fn_2' is unused",
            "Function 'crate_fn_2' is unused",
        ]
        assert lints[0].span.start == source.index("private_fn_2")
        assert lints[1].span.start == source.index("crate_fn_2")

    def test_parse_error_stops_analysis(self):
        with pytest.raises(ParsingError) as exc_info:
            lint_source("fn foo( {")
        assert len(exc_info.value.errors) >= 1

    def test_parse_error_builds_no_context(self):
        analyzer = Analyzer()
        with pytest.raises(ParsingError):
            analyzer.analyze(parse_source("fn broken("))
        assert analyzer.context is None


class TestUnusedFunctionMatching:
    """Name-based call matching."""

    def test_recursive_call_counts_as_use(self, analyze_source):
        assert analyze_source("fn r(n: u8) { r(n) }") == []

    def test_qualified_call_does_not_match_bare_name(self, analyze_source):
        """`other::foo()` is keyed `otherfoo`, so `foo` stays unused."""
        lints = analyze_source("fn foo() {}\npub fn main() { other::foo(); }")
        assert [lint.description for lint in lints] == ["Function 'foo' is unused"]

    def test_call_from_impl_method_counts(self, analyze_source):
        source = "fn helper() {}\nimpl Foo { pub fn run(self) { helper(); } }"
        assert analyze_source(source) == []

    def test_call_in_match_arm_counts(self, analyze_source):
        source = "fn h() -> u32 { 1 }\npub fn main(x: u32) -> pub u32 { match x { 1 => h(), _ => 2 } }"
        assert analyze_source(source) == []

    def test_call_in_argument_of_computed_callee_counts(self, analyze_source):
        source = (
            "fn get() -> u32 { 0 }\n"
            "fn h() -> u32 { 1 }\n"
            "pub fn main() { let _ = (get())(h()); }"
        )
        assert analyze_source(source) == []

    def test_call_from_trait_default_method_counts(self, analyze_source):
        source = "trait T { fn f(self) -> u32 { h() } }\nfn h() -> u32 { 1 }"
        assert analyze_source(source) == []

    def test_enum_does_not_stop_analysis(self, analyze_source):
        lints = analyze_source("enum Op { Add, Push(Field) }\nfn unused() {}")
        assert [lint.description for lint in lints] == ["Function 'unused' is unused"]

    def test_call_from_unused_function_counts(self, analyze_source):
        """Only the outermost unused function is reported."""
        lints = analyze_source("fn a() { b() }\nfn b() {}")
        assert [lint.description for lint in lints] == ["Function 'a' is unused"]

    def test_lint_order_follows_definitions(self, analyze_source):
        lints = analyze_source("fn z() {}\nfn a() {}")
        assert [lint.description for lint in lints] == [
            "Function 'z' is unused",
            "Function 'a' is unused",
        ]

    def test_overwritten_definition_reports_latest_span(self, analyze_source):
        source = "fn dup() {}\nfn dup() {}"
        lints = analyze_source(source)
        assert len(lints) == 1
        assert lints[0].span.start == source.rindex("dup")

    def test_methods_are_not_reported(self, analyze_source):
        assert analyze_source("impl Foo { fn unused_method(self) {} }") == []


class TestRegistry:
    """The lint rule registry."""

    def test_all_rules(self):
        assert list(ALL_RULES) == ["unused-function"]

    def test_default_rules_are_fresh(self):
        first, second = default_rules(), default_rules()
        assert first[0] is not second[0]
        assert isinstance(first[0], UnusedFunction)

    def test_get_rule_by_name(self):
        assert isinstance(get_rule_by_name("unused-function"), UnusedFunction)

    def test_unknown_rule(self):
        with pytest.raises(UnknownRuleError, match="no-such-rule"):
            get_rule_by_name("no-such-rule")

    def test_clone_is_independent(self):
        rule = UnusedFunction()
        clone = rule.clone()
        assert clone is not rule
        assert clone.name == rule.name
