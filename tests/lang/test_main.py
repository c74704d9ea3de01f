import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from tinylang import main


class MainTestCase(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def write(self, source):
        path = os.path.join(self.tmpdir.name, "prog.tl")
        with open(path, "w") as file:
            file.write(source)
        return path

    def run_main(self, *argv):
        output = io.StringIO()
        with redirect_stdout(output):
            main.main(list(argv))
        return output.getvalue()

    def test_batch(self):
        path = self.write("let x = 2;\nx + 3 * 4\n")
        self.assertEqual("14\n", self.run_main(path))

    def test_batch_empty_program(self):
        self.assertEqual("null\n", self.run_main(self.write("")))

    def test_batch_errors_exit_nonzero(self):
        should_exit = ["let = 5;", "1 $ 2", "const y;", "x + 1", "let a = 1; let a = 2;", "true + 1"]
        for case in should_exit:
            path = self.write(case)
            with self.assertRaises(SystemExit, msg=case) as ctx:
                self.run_main(path)
            self.assertEqual(1, ctx.exception.code, case)

    def test_batch_missing_file(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_main(os.path.join(self.tmpdir.name, "nope.tl"))
        self.assertEqual(1, ctx.exception.code)

    def test_interactive(self):
        with patch.object(main.Shell, "cmdloop") as cmdloop:
            self.run_main()
        cmdloop.assert_called_once_with()

    def test_arg_parser(self):
        args = main.build_arg_parser().parse_args(["-v", "prog.tl"])
        self.assertTrue(args.verbose)
        self.assertEqual("prog.tl", args.file)

        args = main.build_arg_parser().parse_args([])
        self.assertFalse(args.verbose)
        self.assertIsNone(args.file)


if __name__ == '__main__':
    unittest.main()
