"""Session control for tinylang. A Session owns the Environment that source is evaluated against and runs source text
through the whole pipeline: tokenize, parse, evaluate.

The Environment's lifetime is the Session's: a file run gets a fresh Session, while the command-line shell keeps a
single Session (and therefore its bindings) across every line it reads.
"""

import logging

from tinylang.frontend.parser import Parser
from tinylang.lang.error import LangError
from tinylang.runtime.environment import create_global_env
from tinylang.runtime.interpreter import evaluate

logger = logging.getLogger(__name__)


class Session:
    """Governs a tinylang session, with control over the scope of declared variables."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path=SH_FILE, cmd_line=False):
        self.error_handler = error_handler

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.parser = Parser()
        self.env = create_global_env()
        self.source = None   # contents of path, if path is a file
        self.results = []    # RuntimeVals of each run, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    self.source = file.read()
            except OSError:
                raise LangError("'{}' could not be opened", path, diagnosis=False)

        elif not cmd_line:
            raise LangError("'<in>' is a reserved filename")

    def parse(self, source):
        """Returns the Program for source without evaluating it."""
        self.error_handler.register_source(self.path, source)  # in case error is raised
        return self.parser.produce_ast(source)

    def run(self, source=None):
        """Tokenizes, parses and evaluates source (by default, the contents of this session's file) against this
        session's Environment. Returns the value of the last statement. Any LangError is raised to the caller.
        """
        if source is None:
            if self.source is None:
                raise LangError("no source to run in command-line mode")
            source = self.source

        program = self.parse(source)
        logger.debug("running %d statement(s) from %s", len(program.body), self.path)

        result = evaluate(program, self.env)
        self.results.append(result)
        return result

    def pop(self):
        """Pops the oldest result."""
        return self.results.pop(0)

    def bindings(self):
        """Returns (name, value, constant) for every binding in this session's global scope, in declaration order."""
        return [(name, value, name in self.env.constants) for name, value in self.env.variables.items()]
