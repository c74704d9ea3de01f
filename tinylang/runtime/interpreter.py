"""Tree-walking evaluator for tinylang: evaluates AST nodes directly against an Environment, depth first and left to
right. There is no intermediate compiled form.

Arithmetic follows IEEE-754 float semantics, including division by zero (which gives inf, -inf or nan) and modulo by
zero (nan). Arithmetic on anything but two numbers raises an EvaluationError.
"""

import logging
import math
import operator

from tinylang.frontend.ast import (
    AssignmentExpr,
    BinaryExpr,
    Identifier,
    Node,
    NumericLiteral,
    ObjectLiteral,
    Program,
    Property,
    VarDeclaration,
)
from tinylang.lang.error import EvaluationError, UnsupportedNodeError
from tinylang.runtime.values import NumberVal, ObjectVal, mk_null

logger = logging.getLogger(__name__)


def divide(lhs, rhs):
    if rhs == 0:
        if lhs == 0 or math.isnan(lhs):
            return math.nan
        return math.copysign(math.inf, lhs) * math.copysign(1, rhs)
    return lhs / rhs


def modulo(lhs, rhs):
    """Remainder taking the sign of the dividend, as fmod does."""
    if rhs == 0 or math.isinf(lhs):
        return math.nan
    return math.fmod(lhs, rhs)


OPERATORS = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": divide,
    "%": modulo,
}


def eval_program(program, env):
    last_evaluated = mk_null()

    for statement in program.body:
        last_evaluated = evaluate(statement, env)

    return last_evaluated


def eval_numeric_literal(literal, env):
    return NumberVal(literal.value)


def eval_identifier(ident, env):
    return env.lookup(ident.symbol)


def eval_var_declaration(declaration, env):
    value = evaluate(declaration.value, env) if declaration.value is not None else mk_null()
    return env.declare(declaration.identifier, value, declaration.constant)


def eval_assignment(node, env):
    if not isinstance(node.assignee, Identifier):
        raise EvaluationError("invalid assignment target '{}'", node.assignee.kind, node=node)

    return env.assign(node.assignee.symbol, evaluate(node.value, env))


def eval_object_expr(obj, env):
    properties = {}

    for prop in obj.properties:
        # shorthand { key } looks up the binding named key
        properties[prop.key] = env.lookup(prop.key) if prop.value is None else evaluate(prop.value, env)

    return ObjectVal(properties)


def eval_binary_expr(binop, env):
    lhs = evaluate(binop.left, env)
    rhs = evaluate(binop.right, env)

    if not (isinstance(lhs, NumberVal) and isinstance(rhs, NumberVal)):
        msg = "unsupported operand types for '{}': '{}' and '{}'"
        raise EvaluationError(msg, [binop.operator, lhs.type, rhs.type], node=binop)

    if binop.operator not in OPERATORS:
        raise EvaluationError("unknown binary operator '{}'", binop.operator, node=binop)

    return NumberVal(OPERATORS[binop.operator](lhs.value, rhs.value))


EVALUATORS = {
    Program: eval_program,
    VarDeclaration: eval_var_declaration,
    AssignmentExpr: eval_assignment,
    BinaryExpr: eval_binary_expr,
    Identifier: eval_identifier,
    NumericLiteral: eval_numeric_literal,
    ObjectLiteral: eval_object_expr,
}

# evaluated only as part of an ObjectLiteral
NOT_EVALUATED = {Property}


def node_types(cls=Node):
    """Returns every concrete (leaf) subclass of cls in the AST class hierarchy."""
    subclasses = cls.__subclasses__()
    if not subclasses:
        return [cls]
    return [leaf for subclass in subclasses for leaf in node_types(subclass)]


def check_exhaustive():
    """Raises TypeError if an AST node type has no evaluator. Run on import, so a missing arm fails immediately."""
    missing = [cls.__name__ for cls in node_types() if cls not in EVALUATORS and cls not in NOT_EVALUATED]
    if missing:
        raise TypeError(f"no evaluator defined for AST node type(s): {', '.join(missing)}")


check_exhaustive()


def evaluate(node, env):
    """Evaluates node against env and returns the resulting RuntimeVal. env is passed on to every recursive call."""
    evaluator = EVALUATORS.get(type(node))
    if evaluator is None:
        raise UnsupportedNodeError(node)

    result = evaluator(node, env)
    logger.debug("evaluated %s -> %r", type(node).__name__, result)
    return result
