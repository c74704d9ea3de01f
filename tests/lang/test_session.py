import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from tinylang.frontend.ast import BinaryExpr, NumericLiteral, Program
from tinylang.lang.error import ErrorHandler, LangError, ParseError, UnboundNameError
from tinylang.lang.session import Session
from tinylang.runtime.values import mk_bool, mk_null, mk_number


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def write(self, name, source):
        path = os.path.join(self.tmpdir.name, name)
        with open(path, "w") as file:
            file.write(source)
        return path

    def test_run_file(self):
        path = self.write("prog.tl", "let width = 4;\nconst height = 2.5;\nwidth * height\n")
        sess = Session(ErrorHandler(), path)

        self.assertEqual(mk_number(10), sess.run())
        self.assertEqual([mk_number(10)], sess.results)
        self.assertEqual(mk_number(10), sess.pop())
        self.assertEqual([], sess.results)

    def test_missing_file(self):
        with self.assertRaises(LangError):
            Session(ErrorHandler(), os.path.join(self.tmpdir.name, "missing.tl"))

    def test_reserved_filename(self):
        self.assertRaises(LangError, Session, ErrorHandler(), Session.SH_FILE, cmd_line=False)

    def test_cmd_line_is_not_fatal(self):
        handler = ErrorHandler(fatal=True)
        Session(handler, cmd_line=True)
        self.assertFalse(handler.fatal)

    def test_cmd_line_needs_source(self):
        self.assertRaises(LangError, Session(ErrorHandler(), cmd_line=True).run)

    def test_env_persists_between_runs(self):
        sess = Session(ErrorHandler(), cmd_line=True)
        self.assertEqual(mk_number(5), sess.run("let x = 5;"))
        self.assertEqual(mk_number(6), sess.run("x = x + 1"))
        self.assertEqual(mk_number(12), sess.run("x * 2"))

    def test_fresh_env_per_session(self):
        first = Session(ErrorHandler(), cmd_line=True)
        first.run("let x = 1;")

        second = Session(ErrorHandler(), cmd_line=True)
        self.assertRaises(UnboundNameError, second.run, "x")

    def test_failed_line_keeps_env(self):
        sess = Session(ErrorHandler(), cmd_line=True)
        sess.run("let x = 1;")
        self.assertRaises(ParseError, sess.run, "let = 2;")
        self.assertEqual(mk_number(1), sess.run("x"))

    def test_errors_are_located(self):
        handler = ErrorHandler(fatal=False)
        path = self.write("bad.tl", "let a = 1;\nlet = 2;\n")
        sess = Session(handler, path)

        output = io.StringIO()
        with redirect_stdout(output):
            with handler:
                sess.run()

        self.assertIn("bad.tl:2:5", output.getvalue())
        self.assertIn("ParseError", output.getvalue())

    def test_parse(self):
        sess = Session(ErrorHandler(), cmd_line=True)
        expected = Program((BinaryExpr(NumericLiteral(1.0), NumericLiteral(2.0), "+"),))
        self.assertEqual(expected, sess.parse("1 + 2"))
        self.assertEqual([], sess.results)

    def test_bindings(self):
        sess = Session(ErrorHandler(), cmd_line=True)
        sess.run("let x = 1; const y = 2;")

        expected = [
            ("true", mk_bool(True), True),
            ("false", mk_bool(False), True),
            ("null", mk_null(), True),
            ("x", mk_number(1), False),
            ("y", mk_number(2), True),
        ]
        self.assertEqual(expected, sess.bindings())


if __name__ == '__main__':
    unittest.main()
