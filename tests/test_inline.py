"""End-to-end tests for inlining :root variables."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from cssvars import InlineResult, inline_css, inline_css_vars, parse_css
from cssvars.inline.transform import write_report


def process(css: str) -> str:
    return inline_css(css.strip()).strip()


class TestInlineCss(unittest.TestCase):
    def test_removes_root_rule_after_processing(self) -> None:
        source = """
:root { --primary-color: #ff0000; }
h1 { color: red; }
"""
        self.assertEqual(process(source), "h1 { color: red; }")

    def test_replaces_variable_with_its_value(self) -> None:
        source = """
:root { --primary-color: #ff0000; }
h1 { color: var(--primary-color); }
"""
        self.assertEqual(process(source), "h1 { color: #ff0000; }")

    def test_multiple_variables(self) -> None:
        source = """
:root {
  --primary-color: #ff0000;
  --secondary-color: #00ff00;
}
h1 { color: var(--primary-color); }
p { color: var(--secondary-color); }
"""
        self.assertEqual(process(source), "h1 { color: #ff0000; }\np { color: #00ff00; }")

    def test_removes_declarations_with_undefined_variables(self) -> None:
        source = """
:root {
  --defined-color: #ff0000;
}
.button {
  color: var(--undefined-color);
  background: var(--defined-color);
}
"""
        self.assertEqual(process(source), ".button {\n  background: #ff0000;\n}")

    def test_any_undefined_variable_removes_declaration(self) -> None:
        source = """
:root {
  --spacing-x: 10px;
}
.box {
  margin: var(--spacing-y) var(--spacing-x);
  padding: var(--spacing-x) var(--spacing-x);
}
"""
        self.assertEqual(process(source), ".box {\n  padding: 10px 10px;\n}")

    def test_nested_variables(self) -> None:
        source = """
:root {
  --primary: #ff0000;
  --button-color: var(--primary);
}
button { color: var(--button-color); }
"""
        result = process(source)
        self.assertNotIn(":root", result)
        self.assertIn("color: #ff0000", result)

    def test_multiple_references_in_one_declaration(self) -> None:
        source = """
:root {
  --spacing-x: 10px;
  --spacing-y: 20px;
}
.box { margin: var(--spacing-y) var(--spacing-x); }
"""
        self.assertEqual(process(source), ".box { margin: 20px 10px; }")

    def test_no_root_rule_returns_input_unchanged(self) -> None:
        source = """
.button {
  color: blue;
  padding: 10px;
}
.header {
  font-size: 16px;
}
"""
        self.assertEqual(inline_css(source), source)

    def test_root_as_part_of_larger_selector_is_ignored(self) -> None:
        source = """:root.dark {
  --primary-color: #000000;
}
:root.light {
  --primary-color: #ffffff;
}
.button { color: var(--primary-color); }"""
        self.assertEqual(inline_css(source), source)

    def test_complex_root_preserves_plain_root_too(self) -> None:
        source = """:root {
  --primary-color: #ffffff;
}
:root.dark {
  --primary-color: #000000;
}
:root[data-theme="custom"] {
  --primary-color: #ff0000;
}
.button { color: var(--primary-color); }"""
        self.assertEqual(inline_css(source), source)

    def test_circular_references(self) -> None:
        source = """
:root {
  --color-a: var(--color-b);
  --color-b: var(--color-a);
}
.button { color: var(--color-a); }
"""
        self.assertEqual(process(source), ".button { color: var(--color-a); }")

    def test_deeply_nested_references(self) -> None:
        source = """
:root {
  --color-base: #ff0000;
  --color-primary: var(--color-base);
  --color-button: var(--color-primary);
  --color-special: var(--color-button);
}
.button { color: var(--color-special); }
"""
        self.assertEqual(process(source), ".button { color: #ff0000; }")

    def test_variables_within_complex_values(self) -> None:
        source = """
:root {
  --spacing: 20px;
  --color: blue;
}
.box {
  margin: calc(var(--spacing) * 2) 10px;
  border: 1px solid var(--color);
}
"""
        self.assertEqual(
            process(source),
            ".box {\n  margin: calc(20px * 2) 10px;\n  border: 1px solid blue;\n}",
        )

    def test_multiple_root_rules_processed_in_order(self) -> None:
        source = """
:root {
  --color: blue;
}
:root {
  --spacing: 20px;
}
.box {
  color: var(--color);
  margin: var(--spacing);
}
"""
        self.assertEqual(process(source), ".box {\n  color: blue;\n  margin: 20px;\n}")

    def test_empty_root_rule(self) -> None:
        source = """
:root {}
:root {
  --color: blue;
}
.box { color: var(--color); }
"""
        self.assertEqual(process(source), ".box { color: blue; }")

    def test_variables_with_multiple_values(self) -> None:
        source = """
:root {
  --font-config: bold 16px/1.5 arial;
  --transform: translate(10px) scale(1.2);
}
.text {
  font: var(--font-config);
  transform: var(--transform);
}
"""
        self.assertEqual(
            process(source),
            ".text {\n  font: bold 16px/1.5 arial;\n  transform: translate(10px) scale(1.2);\n}",
        )

    def test_same_variable_used_multiple_times(self) -> None:
        source = """
:root {
  --size: 10px;
}
.box {
  box-shadow: var(--size) var(--size) black, calc(var(--size) * 2) calc(var(--size) * 2) gray;
}
"""
        self.assertEqual(
            process(source),
            ".box {\n  box-shadow: 10px 10px black, calc(10px * 2) calc(10px * 2) gray;\n}",
        )

    def test_variables_inside_media_queries(self) -> None:
        source = """
:root { --gap: 1rem; }
@media (max-width: 700px) {
  nav a { margin-right: var(--gap); }
}
"""
        self.assertEqual(
            process(source),
            "@media (max-width: 700px) {\n  nav a { margin-right: 1rem; }\n}",
        )

    def test_self_amplifying_cycle_terminates(self) -> None:
        source = ":root { --a: var(--a) var(--a); } .x { width: var(--a); }"
        self.assertEqual(process(source), ".x { width: var(--a) var(--a); }")


class TestScenarios(unittest.TestCase):
    def test_single_variable(self) -> None:
        self.assertEqual(
            process(":root { --c: #ff0000; } h1 { color: var(--c); }"),
            "h1 { color: #ff0000; }",
        )

    def test_cycle_across_root_rules(self) -> None:
        self.assertEqual(
            process(":root { --a: var(--b); } :root { --b: var(--a); } .x { color: var(--a); }"),
            ".x { color: var(--a); }",
        )

    def test_undefined_reference_drops_declaration(self) -> None:
        result = process(":root { --x: 10px; } .y { margin: var(--z) var(--x); }")
        self.assertNotIn("margin", result)
        self.assertEqual(result, ".y { }")

    def test_transitive_chain(self) -> None:
        self.assertEqual(
            process(":root { --a: 1px; --b: var(--a); --c: var(--b); } .z { width: var(--c); }"),
            ".z { width: 1px; }",
        )

    def test_complex_root_is_byte_for_byte_noop(self) -> None:
        source = ":root.dark { --a: #000; } .w { color: var(--a); }"
        self.assertEqual(inline_css(source), source)


class TestNestedRules(unittest.TestCase):
    def test_ampersand_rule(self) -> None:
        self.assertEqual(
            inline_css(":root { --c: red; } .a { color: var(--c); &:hover { color: var(--c); } }"),
            ".a { color: red; &:hover { color: red; } }",
        )

    def test_class_rule(self) -> None:
        self.assertEqual(
            inline_css(":root { --c: red; } .a { .b { color: var(--c); } }"),
            ".a { .b { color: red; } }",
        )

    def test_rule_starting_with_tag_and_pseudo_class(self) -> None:
        self.assertEqual(
            inline_css(":root { --c: red; } .a { a:hover { color: var(--c); } }"),
            ".a { a:hover { color: red; } }",
        )

    def test_undefined_reference_in_nested_rule_drops_only_the_declaration(self) -> None:
        self.assertEqual(
            inline_css(":root { --c: red; } .a { a:hover { color: var(--zz); } }"),
            ".a { a:hover { } }",
        )

    def test_media_inside_rule(self) -> None:
        self.assertEqual(
            inline_css(":root { --gap: 1rem; } nav { @media (min-width: 40em) { margin: var(--gap); } }"),
            "nav { @media (min-width: 40em) { margin: 1rem; } }",
        )

    def test_complex_root_inside_rule_aborts(self) -> None:
        source = ":root { --c: red; } .theme { :root.dark & { --c: black; } color: var(--c); }"
        self.assertEqual(inline_css(source), source)


class TestSourceFidelity(unittest.TestCase):
    def test_single_quotes_survive(self) -> None:
        self.assertEqual(
            inline_css(":root { --c: red; } a[href='x'] { content: 'q'; color: var(--c); }"),
            "a[href='x'] { content: 'q'; color: red; }",
        )

    def test_spelling_of_untouched_text_survives(self) -> None:
        self.assertEqual(
            inline_css(":root { --c: red; } A { Color: var(--c); background: URL(x.png); }"),
            "A { Color: red; background: URL(x.png); }",
        )

    def test_no_leading_whitespace_after_root_removal(self) -> None:
        self.assertEqual(inline_css(":root{--a:1px}\n\n:root{--b:2px}\nh1{x:var(--a)}"), "h1{x:1px}")

    def test_whitespace_between_remaining_rules_is_kept(self) -> None:
        self.assertEqual(
            inline_css("a { color: var(--c); }\n\n:root { --c: red; }\n\nb { color: blue; }\n"),
            "a { color: red; }\n\nb { color: blue; }\n",
        )


class TestInlineResult(unittest.TestCase):
    def test_inlined_result(self) -> None:
        sheet = parse_css(":root { --x: 10px; --y: var(--x); } .y { margin: var(--z) var(--x); padding: var(--y); }")
        result = inline_css_vars(sheet)
        self.assertIsInstance(result, InlineResult)
        self.assertEqual(result.status, "inlined")
        self.assertTrue(result.changed)
        self.assertEqual(result.variables, {"--x": "10px", "--y": "10px"})
        self.assertEqual(result.removed, ["margin: var(--z) var(--x)"])
        self.assertEqual(result.unresolved, [])
        self.assertEqual(len(result.warnings), 1)
        self.assertIn("--z", result.warnings[0])
        self.assertEqual(sheet.to_css(), ".y { padding: 10px; }")

    def test_complex_root_result_leaves_tree(self) -> None:
        css = ":root { --a: 1; } :root.dark { --a: 2; } a { b: var(--a); }"
        sheet = parse_css(css)
        result = inline_css_vars(sheet)
        self.assertEqual(result.status, "skipped_complex_root")
        self.assertFalse(result.changed)
        self.assertEqual(result.variables, {})
        self.assertIn(":root.dark", result.warnings[0])
        self.assertEqual(sheet.to_css(), css)

    def test_no_root_result(self) -> None:
        css = "a { color: var(--a); }"
        sheet = parse_css(css)
        result = inline_css_vars(sheet)
        self.assertEqual(result.status, "skipped_no_root")
        self.assertEqual(result.warnings, [])
        self.assertEqual(sheet.to_css(), css)

    def test_cycle_reported_as_unresolved(self) -> None:
        sheet = parse_css(":root { --a: var(--b); --b: var(--a); } .x { color: var(--a); }")
        result = inline_css_vars(sheet)
        self.assertEqual(result.unresolved, ["--a", "--b"])
        self.assertEqual(result.removed, [])
        self.assertEqual(result.passes, 2)
        self.assertTrue(any("--a" in w for w in result.warnings))

    def test_write_report(self) -> None:
        result = inline_css_vars(parse_css(":root { --c: red; } a { color: var(--c); }"))
        with tempfile.TemporaryDirectory() as td:
            path = write_report(result, Path(td) / "report.json")
            payload = json.loads(path.read_text(encoding="utf-8"))
        self.assertEqual(payload["status"], "inlined")
        self.assertEqual(payload["variables"], {"--c": "red"})
        self.assertNotIn("changed", payload)


if __name__ == "__main__":
    unittest.main()
