"""Variable bindings for tinylang. An Environment maps names to runtime values within one scope and resolves
anything it doesn't know through its parent scope.
"""

import logging

from tinylang.lang.error import ConstantAssignmentError, RedeclarationError, UnboundNameError
from tinylang.runtime.values import mk_bool, mk_null

logger = logging.getLogger(__name__)


class Environment:
    """A lexical scope: name -> runtime value, with names declared constant recorded separately."""

    def __init__(self, parent=None):
        self.parent = parent
        self.variables = {}
        self.constants = set()

    def declare(self, name, value, constant=False):
        """Binds name to value in this scope. Raises RedeclarationError if this scope already binds name; shadowing a
        name bound in a parent scope is allowed.
        """
        if name in self.variables:
            raise RedeclarationError(name)

        self.variables[name] = value
        if constant:
            self.constants.add(name)

        logger.debug("declared %s'%s' = %s", "constant " if constant else "", name, value)
        return value

    def assign(self, name, value):
        """Rebinds name in the nearest scope that binds it. Raises UnboundNameError if no scope does, or
        ConstantAssignmentError if name was declared constant there.
        """
        env = self.resolve(name)
        if name in env.constants:
            raise ConstantAssignmentError(name)

        env.variables[name] = value
        return value

    def lookup(self, name):
        """Returns the value bound to name in the nearest scope that binds it."""
        return self.resolve(name).variables[name]

    def resolve(self, name):
        """Returns the nearest Environment (self or an ancestor) that binds name."""
        env = self
        while env is not None:
            if name in env.variables:
                return env
            env = env.parent
        raise UnboundNameError(name)

    def is_constant(self, name):
        return name in self.resolve(name).constants

    def __contains__(self, name):
        try:
            self.resolve(name)
        except UnboundNameError:
            return False
        return True

    def __repr__(self):
        return f"Environment({self.variables}, parent={self.parent!r})"


def create_global_env():
    """Returns a root Environment with the builtin constants true, false and null declared."""
    env = Environment()
    env.declare("true", mk_bool(True), constant=True)
    env.declare("false", mk_bool(False), constant=True)
    env.declare("null", mk_null(), constant=True)
    return env
