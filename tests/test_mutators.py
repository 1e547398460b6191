from __future__ import annotations

import unittest

from doubles import MemoryFileSystem

from aliesce.core.errors import MalformedTag, SourceError, UnknownScriptNumber
from aliesce.core.models import Settings
from aliesce.parsing.builder import ScriptModelBuilder
from aliesce.parsing.tag_lexer import TagLineLexer
from aliesce.runtime.mutators import SourceMutator


SETTINGS = Settings(path_src="src.txt")

SOURCE = (
    "--dest out\n"
    "\n"
    "### exs elixir\n"
    "IO.puts 1\n"
    "### py python\r\n"
    "print(1)\n"
)


class _MutatorCase(unittest.TestCase):
    def setUp(self) -> None:
        self.fs = MemoryFileSystem({"src.txt": SOURCE})
        self.mutator = SourceMutator(settings=SETTINGS, fs=self.fs)

    @property
    def source(self) -> str:
        return self.fs.files["src.txt"]


# --------------------------------------------------------------------------- #
#  Edit                                                                       #
# --------------------------------------------------------------------------- #
class EditTests(_MutatorCase):
    def test_only_the_tag_line_changes(self) -> None:
        written = self.mutator.edit(1, "rb ruby")
        self.assertEqual(written, "### rb ruby")
        self.assertEqual(self.source, SOURCE.replace("### exs elixir", "### rb ruby"))

    def test_line_ending_is_kept(self) -> None:
        self.mutator.edit(2, "### ! py python")
        self.assertIn("### ! py python\r\nprint(1)\n", self.source)
        self.assertTrue(self.source.startswith("--dest out\n\n### exs elixir\n"))

    def test_unknown_number_leaves_source_untouched(self) -> None:
        for number in (0, 3):
            with self.subTest(number=number):
                with self.assertRaises(UnknownScriptNumber):
                    self.mutator.edit(number, "py python")
        self.assertEqual(self.source, SOURCE)
        self.assertEqual(self.fs.writes, [])

    def test_malformed_replacement_is_rejected(self) -> None:
        with self.assertRaises(MalformedTag):
            self.mutator.edit(1, "### ")
        self.assertEqual(self.source, SOURCE)

    def test_edit_can_repair_a_malformed_tag(self) -> None:
        self.fs.files["src.txt"] = "### exs elixir\n\n###\nbroken\n"
        with self.assertRaises(MalformedTag):
            ScriptModelBuilder(TagLineLexer(SETTINGS)).build_text(self.source)
        self.mutator.edit(2, "txt")
        registry = ScriptModelBuilder(TagLineLexer(SETTINGS)).build_text(self.source)
        self.assertEqual(len(registry), 2)
        self.assertEqual(registry.get(2).body, "broken\n")

    def test_numbers_of_other_scripts_are_stable(self) -> None:
        before = ScriptModelBuilder(TagLineLexer(SETTINGS)).build_text(self.source)
        self.mutator.edit(1, "x.sh sh")
        after = ScriptModelBuilder(TagLineLexer(SETTINGS)).build_text(self.source)
        self.assertEqual(after.get(2).tag, before.get(2).tag)
        self.assertEqual(after.get(2).body, before.get(2).body)

    def test_missing_source(self) -> None:
        fs = MemoryFileSystem()
        with self.assertRaises(SourceError):
            SourceMutator(settings=SETTINGS, fs=fs).edit(1, "py")


# --------------------------------------------------------------------------- #
#  Push                                                                       #
# --------------------------------------------------------------------------- #
class PushTests(_MutatorCase):
    def test_appends_tag_and_content(self) -> None:
        self.fs.files["hello.sh"] = "echo hi\n"
        written = self.mutator.push("sh bash", "hello.sh")
        self.assertEqual(written, "### sh bash")
        self.assertEqual(self.source, SOURCE + "\n### sh bash\n\necho hi\n")

        registry = ScriptModelBuilder(TagLineLexer(SETTINGS)).build_text(self.source)
        self.assertEqual(len(registry), 3)
        self.assertEqual(registry.get(3).body, "\necho hi\n")

    def test_existing_head_is_not_doubled(self) -> None:
        self.fs.files["a.py"] = "pass\n"
        self.assertEqual(self.mutator.push("### py python", "a.py"), "### py python")

    def test_unreadable_content_leaves_source_untouched(self) -> None:
        with self.assertRaises(SourceError):
            self.mutator.push("sh bash", "missing.sh")
        self.assertEqual(self.source, SOURCE)

    def test_piped_paths_are_neither_saved_nor_run(self) -> None:
        self.fs.files["one.txt"] = "1\n"
        self.fs.files["two.txt"] = "2\n"
        self.mutator.push_piped(["one.txt", "two.txt"])
        self.assertTrue(self.source.endswith("\n### ! !\n\n1\n\n### ! !\n\n2\n"))

        registry = ScriptModelBuilder(TagLineLexer(SETTINGS)).build_text(self.source)
        for number in (3, 4):
            script = registry.get(number)
            self.assertFalse(script.saves)
            self.assertFalse(script.runs)

    def test_piped_paths_are_all_read_before_writing(self) -> None:
        self.fs.files["one.txt"] = "1\n"
        with self.assertRaises(SourceError):
            self.mutator.push_piped(["one.txt", "missing.txt"])
        self.assertEqual(self.source, SOURCE)
        self.assertEqual(self.fs.writes, [])

    def test_piped_paths_are_written_once(self) -> None:
        self.fs.files["one.txt"] = "1\n"
        self.fs.files["two.txt"] = "2\n"
        self.assertEqual(self.mutator.push_piped(["one.txt", "two.txt"]), ["### ! !", "### ! !"])
        self.assertEqual(self.fs.writes, ["src.txt"])


# --------------------------------------------------------------------------- #
#  Init                                                                       #
# --------------------------------------------------------------------------- #
class InitTests(unittest.TestCase):
    def test_creates_template_with_no_scripts(self) -> None:
        fs = MemoryFileSystem()
        SourceMutator(settings=SETTINGS, fs=fs).init()
        text = fs.files["src.txt"]
        self.assertIn("aliesce --help", text)
        registry = ScriptModelBuilder(TagLineLexer(SETTINGS)).build_text(text)
        self.assertEqual(len(registry), 0)

    def test_refuses_to_overwrite(self) -> None:
        fs = MemoryFileSystem({"src.txt": "keep me"})
        with self.assertRaises(SourceError):
            SourceMutator(settings=SETTINGS, fs=fs).init()
        self.assertEqual(fs.files["src.txt"], "keep me")


if __name__ == "__main__":
    unittest.main()
