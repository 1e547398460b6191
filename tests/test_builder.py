from __future__ import annotations

import unittest
from pathlib import Path

from aliesce.core.errors import MalformedTag
from aliesce.core.models import Settings
from aliesce.parsing.builder import ScriptModelBuilder, ScriptRegistry
from aliesce.parsing.tag_lexer import TagLineLexer

SOURCE = (
    "#!/usr/bin/env aliesce\n"
    "--dest out\n"
    "\n"
    "### py python\n"
    "print(1)\n"
    "\n"
    "print(2)\n"
    "### Shell # sh sh\n"
)


def _builder() -> ScriptModelBuilder:
    return ScriptModelBuilder(TagLineLexer(Settings()))


class SegmentTests(unittest.TestCase):
    def test_preface_skips_shebang(self) -> None:
        sections = _builder().segment(SOURCE)
        self.assertEqual(sections.preface, ("--dest out", ""))

    def test_bodies_are_verbatim(self) -> None:
        sections = _builder().segment(SOURCE)
        self.assertEqual(len(sections.sections), 2)
        first, second = sections.sections
        self.assertEqual(first.line, "### py python")
        self.assertEqual(first.body, "print(1)\n\nprint(2)\n")
        self.assertEqual(first.line_no, 4)
        self.assertEqual(second.body, "")
        self.assertEqual(second.line_no, 8)

    def test_lines_keep_original_text(self) -> None:
        sections = _builder().segment(SOURCE)
        self.assertEqual("".join(sections.lines), SOURCE)

    def test_section_lookup(self) -> None:
        sections = _builder().segment(SOURCE)
        self.assertEqual(sections.section(2).line, "### Shell # sh sh")
        self.assertIsNone(sections.section(0))
        self.assertIsNone(sections.section(3))

    def test_indented_head_is_body_text(self) -> None:
        sections = _builder().segment("### txt\n  ### not a tag\n")
        self.assertEqual(len(sections.sections), 1)
        self.assertEqual(sections.sections[0].body, "  ### not a tag\n")

    def test_crlf_and_missing_final_newline(self) -> None:
        sections = _builder().segment("### py python\r\nprint(1)")
        self.assertEqual(sections.sections[0].line, "### py python")
        self.assertEqual(sections.sections[0].body, "print(1)")


class BuildTests(unittest.TestCase):
    def test_numbers_are_dense_in_file_order(self) -> None:
        registry = _builder().build_text(SOURCE)
        self.assertEqual([s.number for s in registry], [1, 2])
        self.assertEqual(registry.get(2).label, "Shell")
        self.assertEqual(registry.get(1).body, "print(1)\n\nprint(2)\n")
        self.assertEqual(registry.get(1).line_no, 4)

    def test_malformed_tag_aborts_with_line(self) -> None:
        text = "### py python\nprint(1)\n###\nbody\n"
        with self.assertRaises(MalformedTag) as cm:
            _builder().build_text(text, path=Path("src.txt"))
        self.assertIn("src.txt:line 3", str(cm.exception))

    def test_empty_source(self) -> None:
        registry = _builder().build_text("just notes\n")
        self.assertEqual(len(registry), 0)


class RegistryTests(unittest.TestCase):
    def setUp(self) -> None:
        text = "".join(f"### t{n}\nbody {n}\n" for n in range(1, 6))
        self.registry = _builder().build_text(text)

    def test_get_and_contains(self) -> None:
        self.assertEqual(self.registry.get(3).output_spec, "t3")
        self.assertIsNone(self.registry.get(0))
        self.assertIsNone(self.registry.get(6))
        self.assertIn(5, self.registry)
        self.assertNotIn(6, self.registry)

    def test_select_keeps_file_order(self) -> None:
        picked = self.registry.select({5, 1, 3})
        self.assertEqual([s.number for s in picked], [1, 3, 5])
        self.assertEqual(len(self.registry.select()), 5)

    def test_numbers_must_be_dense(self) -> None:
        scripts = list(self.registry)
        with self.assertRaises(ValueError):
            ScriptRegistry([scripts[0], scripts[2]])

    def test_package_level_parse_source(self) -> None:
        from aliesce import parse_source

        registry = parse_source("### ! sh\n::: py python\n", Settings(tag_head=":::"))
        self.assertEqual(len(registry), 1)
        self.assertEqual(registry.get(1).tag.command.program, "python")
        self.assertEqual(registry.get(1).body, "")


if __name__ == "__main__":
    unittest.main()
