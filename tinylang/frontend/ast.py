"""Abstract syntax tree for tinylang. Nodes are produced bottom-up by the parser and consumed by the evaluator; they
are frozen, so a node is never mutated or shared once built.

Statements do not produce values in a useful sense, but every expression is also a statement:

```
Stmt
 ├── Program            body: tuple of Stmt
 ├── VarDeclaration     identifier, value (Expr or None), constant
 └── Expr
      ├── AssignmentExpr    assignee, value
      ├── BinaryExpr        left, right, operator
      ├── Identifier        symbol
      ├── NumericLiteral    value (float)
      ├── ObjectLiteral     properties: tuple of Property
      └── Property          key, value (Expr or None: shorthand)
```
"""

from dataclasses import dataclass, fields
from typing import Optional, Tuple


class Node:
    """Superclass representing any node of the syntax tree."""

    @property
    def kind(self):
        return type(self).__name__

    def children(self):
        """Returns (field name, value) pairs of this node's fields, in declaration order."""
        return [(field.name, getattr(self, field.name)) for field in fields(self)]

    def display(self, indents=0):
        """Recursively displays the tree rooted at this node in a readable format.

        Format:
        <Node>(
            <field>=<value>,
            <field>=<Node>(
                ...
            ),
        )
        """
        pad = "    " * indents
        result = f"{self.kind}("

        for name, value in self.children():
            if isinstance(value, Node):
                value = value.display(indents + 1).lstrip()
            elif isinstance(value, tuple):
                items = "".join(f"\n{item.display(indents + 2)}," for item in value)
                value = f"[{items}\n{pad}    ]" if value else "[]"
            else:
                value = repr(value)
            result += f"\n{pad}    {name}={value},"

        return f"{pad}{result}\n{pad})"

    def __str__(self):
        return self.display()


class Stmt(Node):
    """Superclass of statements."""


class Expr(Stmt):
    """Superclass of expressions. Expressions produce a value when evaluated."""


@dataclass(frozen=True)
class Program(Stmt):
    body: Tuple[Stmt, ...] = ()


@dataclass(frozen=True)
class VarDeclaration(Stmt):
    identifier: str
    value: Optional[Expr] = None
    constant: bool = False


@dataclass(frozen=True)
class AssignmentExpr(Expr):
    # not necessarily an Identifier: the parser doesn't validate assignment targets
    assignee: Expr
    value: Expr


@dataclass(frozen=True)
class BinaryExpr(Expr):
    left: Expr
    right: Expr
    operator: str


@dataclass(frozen=True)
class Identifier(Expr):
    symbol: str


@dataclass(frozen=True)
class NumericLiteral(Expr):
    value: float


@dataclass(frozen=True)
class Property(Expr):
    """Object literal entry. If value is None, it's shorthand for looking up a binding named key."""
    key: str
    value: Optional[Expr] = None


@dataclass(frozen=True)
class ObjectLiteral(Expr):
    properties: Tuple[Property, ...] = ()
