from __future__ import annotations

import shlex
import unittest

from aliesce.core.errors import UnresolvedReference
from aliesce.core.models import Settings
from aliesce.parsing.builder import ScriptModelBuilder
from aliesce.parsing.tag_lexer import TagLineLexer
from aliesce.runtime.resolver import OutputPathResolver, PlaceholderResolver


def _registry(text: str, settings: Settings):
    return ScriptModelBuilder(TagLineLexer(settings)).build_text(text)


class OutputPathTests(unittest.TestCase):
    def test_field_forms(self) -> None:
        res = OutputPathResolver(Settings(path_src="src.txt"))
        cases = {
            "py": "scripts/src.py",
            "main.py": "scripts/main.py",
            "out/py": "out/src.py",
            "out/main.py": "out/main.py",
            ">/elixir/script.exs": "scripts/elixir/script.exs",
            "/tmp/x.sh": "/tmp/x.sh",
            "archive.tar.gz": "scripts/archive.tar.gz",
        }
        for spec, expected in cases.items():
            with self.subTest(spec=spec):
                self.assertEqual(res.resolve(spec).get(), expected)

    def test_uses_source_stem_and_dest(self) -> None:
        res = OutputPathResolver(Settings(path_src="work/notes.txt", path_dir="build"))
        self.assertEqual(res.resolve("rb").get(), "build/notes.rb")
        self.assertEqual(res.resolve(">/a.py").get(), "build/a.py")
        out = res.resolve("archive.tar.gz")
        self.assertEqual((out.dir, out.stem, out.ext), ("build", "archive.tar", "gz"))


class CommandResolutionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.settings = Settings()

    def _resolver(self, text: str) -> PlaceholderResolver:
        self.registry = _registry(text, self.settings)
        return PlaceholderResolver(self.registry, self.settings)

    def test_path_appended_without_placeholder(self) -> None:
        res = self._resolver("### py python -u\nprint(1)\n")
        rs = res.resolve(self.registry.get(1))
        self.assertEqual(rs.output.get(), "scripts/src.py")
        self.assertEqual(rs.program, "python")
        self.assertEqual(rs.args, ("-u", "scripts/src.py"))

    def test_current_placeholder_uses_shell(self) -> None:
        res = self._resolver("### py python >< && echo done\n")
        rs = res.resolve(self.registry.get(1))
        self.assertEqual(rs.program, "bash")
        self.assertEqual(rs.args, ("-c", "python scripts/src.py && echo done"))

    def test_backward_and_forward_references(self) -> None:
        text = (
            "### exs elixir\n"
            "### txt cat >3<\n"
            "### py python >1<\n"
        )
        res = self._resolver(text)
        third = res.resolve(self.registry.get(3))
        self.assertEqual(third.args, ("-c", "python scripts/src.exs"))
        second = res.resolve(self.registry.get(2))
        self.assertEqual(second.args, ("-c", "cat scripts/src.py"))

    def test_resolution_is_idempotent(self) -> None:
        res = self._resolver("### a.sh sh >2< ><\n### b.sh sh\n")
        script = self.registry.get(1)
        self.assertEqual(res.resolve(script), res.resolve(script))
        self.assertEqual(res.resolve(script).args, ("-c", "sh scripts/b.sh scripts/a.sh"))

    def test_unknown_reference(self) -> None:
        res = self._resolver("### py python >7<\n")
        with self.assertRaises(UnresolvedReference) as cm:
            res.resolve(self.registry.get(1))
        self.assertEqual(cm.exception.target, 7)

    def test_reference_to_script_without_path(self) -> None:
        res = self._resolver("### !\n### py python >1<\n")
        with self.assertRaises(UnresolvedReference):
            res.resolve(self.registry.get(2))

    def test_skipped_scripts_have_no_command(self) -> None:
        res = self._resolver("### py ! python >9<\n### ! py python\n")
        skip_run = res.resolve(self.registry.get(1))
        self.assertEqual(skip_run.output.get(), "scripts/src.py")
        self.assertIsNone(skip_run.program)
        skip_save = res.resolve(self.registry.get(2))
        self.assertIsNone(skip_save.program)

    def test_custom_shell(self) -> None:
        self.settings = Settings(cmd_prog="sh", cmd_flag="-c")
        res = self._resolver("### sh sh ><\n")
        rs = res.resolve(self.registry.get(1))
        self.assertEqual((rs.program, rs.args), ("sh", ("-c", "sh scripts/src.sh")))

    def test_substituted_paths_are_shell_quoted(self) -> None:
        self.settings = Settings(path_dir="out dir")
        res = self._resolver("### a.sh cat >2< ><\n### it's.sh sh\n")
        rs = res.resolve(self.registry.get(1))
        self.assertEqual(
            rs.args,
            ("-c", "cat 'out dir/it'\"'\"'s.sh' 'out dir/a.sh'"),
        )
        self.assertEqual(shlex.split(rs.args[1]), ["cat", "out dir/it's.sh", "out dir/a.sh"])


if __name__ == "__main__":
    unittest.main()
