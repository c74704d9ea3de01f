"""Error handling for tinylang. Only LangErrors should be encountered during running: if another type of error is
raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every layer of the pipeline (lexer, parser, evaluator, environment) raises a LangError subclass and never catches
one. Whether an error ends the run or just the current line is decided by the ErrorHandler wrapping the call.
"""

import sys

from termcolor import colored


class LangError(Exception):
    """Templates an error message so that it can be used to throw a tinylang error. exprs are formatted into msg, and
    line/col (both 1-based) locate the offending text in the registered source, if known.
    """

    def __init__(self, msg, exprs=None, line=None, col=None, length=1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*exprs)
        self.line = line
        self.col = col
        self.length = max(length, 1)  # needed for error display

        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)

    @property
    def kind(self):
        return type(self).__name__


class LexError(LangError):
    """Raised by the lexer on a character that starts no token."""

    def __init__(self, char, line, col):
        super().__init__("unrecognized character '{}'", char, line=line, col=col)
        self.char = char


class ParseError(LangError):
    """Raised by the parser when the token found is not the one the grammar expects. expected is the TokenType that
    was required (None for a plain "unexpected token"), found is the offending Token.
    """

    def __init__(self, msg, expected=None, found=None):
        self.expected = expected
        self.found = found

        exprs = []
        if found is not None:
            found_desc = f"{found.type.name} '{found.value}'" if found.value else found.type.name
            if expected is not None:
                msg += " (expected {}, found {})"
                exprs = [expected.name, found_desc]
            else:
                msg += " (found {})"
                exprs = [found_desc]

        line = found.line if found is not None else None
        col = found.col if found is not None else None
        length = len(found.value) if found is not None else 1
        super().__init__(msg, exprs, line=line, col=col, length=length)


class EvaluationError(LangError):
    """Raised by the evaluator for operations it refuses to perform, e.g. arithmetic on non-numbers."""

    def __init__(self, msg, exprs=None, node=None):
        super().__init__(msg, exprs)
        self.node = node


class UnsupportedNodeError(LangError):
    """Raised when an AST node reaches the evaluator with no evaluation arm."""

    def __init__(self, node):
        super().__init__("AST node '{}' has not been set up for interpretation", type(node).__name__)
        self.node = node


class BindingError(LangError):
    """Superclass of every error raised by an Environment."""

    def __init__(self, msg, name):
        super().__init__(msg, name)
        self.name = name


class RedeclarationError(BindingError):

    def __init__(self, name):
        super().__init__("cannot declare '{}': it is already defined in this scope", name)


class ConstantAssignmentError(BindingError):

    def __init__(self, name):
        super().__init__("cannot reassign '{}': it was declared constant", name)


class UnboundNameError(BindingError):

    def __init__(self, name):
        super().__init__("'{}' is not defined", name)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and print tinylang errors instead. If fatal, a
    reported error also exits the process with status 1.
    """
    ERROR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.path = None
        self.source = None

    def register_source(self, path, source):
        """Registers the source text errors will be located in. Should be called before running source."""
        self.path = path
        self.source = source

    def source_line(self, line_num):
        """Returns line line_num (1-based) of the registered source, or None if unavailable."""
        if self.source is None or line_num is None:
            return None

        lines = self.source.split("\n")  # the lexer only counts "\n" as a line break
        if 0 < line_num <= len(lines):
            return lines[line_num - 1].rstrip("\r")
        return None

    @staticmethod
    def diagnose(error, line):
        """Returns line with the offending part of it highlighted, underlined by a caret."""
        start = error.col - 1
        end = min(start + error.length, max(len(line), start + 1))

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Prints error, with its location in the registered source if it has one. Exits if self.fatal."""
        error_msg = ""
        if self.path is not None and error.line is not None:
            error_msg += colored(f"{self.path}:{error.line}:{error.col}: ", attrs=["bold"])

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored(f"{error.kind}: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        line = self.source_line(error.line)
        if not error.internal and error.diagnosis and line is not None and error.col is not None:
            print(ErrorHandler.diagnose(error, line))

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(LangError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(LangError("maximum recursion depth exceeded while evaluating expression"))
        elif exc_type is not None and issubclass(exc_type, LangError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(LangError("unknown error: '{}: {}'", [exc_type.__name__, exc_val], internal=True))
            do_exit = True

        return not do_exit
