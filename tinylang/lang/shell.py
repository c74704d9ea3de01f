"""Handles interactive/command-line mode for the tinylang interpreter. Uses cmd as backend.

Only a line that is exactly a command word (`exit`, `env`, `help`, `?`) or starts with `:ast` runs a command. Every
other line is tinylang source, so `env + 1` or `exit = 1` are evaluated like any other expression.
"""

import cmd


class Shell(cmd.Cmd):
    """tinylang interpreter shell. Every line is run against the same Session, so bindings persist between lines."""
    intro = "tinylang interpreter :: Python backend\nType '?' or 'help' for more information, 'exit' to quit."
    prompt = "> "

    COMMANDS = ("exit", "EOF", "env", "help")  # whole-line commands
    AST_PREFIX = ":ast"

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

    def parseline(self, line):
        """Returns (command, arg, line). command is None for any line that should be run as source."""
        stripped = line.strip()

        if stripped in Shell.COMMANDS:
            return stripped, "", stripped
        elif stripped == "?":
            return "help", "", stripped
        elif stripped == Shell.AST_PREFIX or stripped.startswith(Shell.AST_PREFIX + " "):
            return "ast", stripped[len(Shell.AST_PREFIX):].strip(), stripped

        return None, None, stripped

    def default(self, line):
        """Executes arbitrary tinylang source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            print(self.sess.run(line), file=self.stdout)
            self.sess.pop()

    def do_ast(self, arg):
        """:ast SOURCE: prints the syntax tree of SOURCE without evaluating it."""
        with self.sess.error_handler:
            print(self.sess.parse(arg).display(), file=self.stdout)

    def do_env(self, arg):
        """env: lists the variables declared in this session."""
        for name, value, constant in self.sess.bindings():
            print(f"{'const' if constant else 'let'} {name} = {value}", file=self.stdout)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the tinylang interpreter!\n\n"
              "tinylang evaluates arithmetic over numbers, with variables and object literals.\n"
              "Try it out by typing 'let x = 5;'. This will declare a variable 'x'. Next, try\n"
              "typing 'x * (2 + 1)', giving 15 as the result. 'const' declares a variable that\n"
              "cannot be reassigned, and '{ x, y: 2 }' builds an object.\n\n"
              "Commands: ':ast SOURCE' shows a syntax tree, 'env' lists variables, 'exit' quits.\n"
              "A command must be the whole line: anything else is run as source.",
              file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
