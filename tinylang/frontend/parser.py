"""Recursive descent parser for tinylang: produces a Program AST from source text or from a token sequence.

Grammar, lowest precedence first:

```
<program>        ::= <stmt>* EOF
<stmt>           ::= <var_decl> | <expr> [";"]
<var_decl>       ::= ("let" | "const") IDENTIFIER ["=" <expr>] ";"  ; a const must be initialized
<expr>           ::= <assignment>
<assignment>     ::= <additive> ["=" <assignment>]                  ; right-associative
<additive>       ::= <multiplicative> (("+" | "-") <multiplicative>)*
<multiplicative> ::= <primary> (("*" | "/" | "%") <primary>)*
<primary>        ::= IDENTIFIER | NUMBER | "(" <expr> ")" | <object>
<object>         ::= "{" [<property> ("," <property>)* [","]] "}"
<property>       ::= IDENTIFIER [":" <expr>]                        ; bare IDENTIFIER is shorthand
```

Each rule is one method; binding strength comes from which method calls which. Tokens are never removed from the
token sequence: the parser walks it with an index cursor and never backtracks.
"""

import logging

from tinylang.frontend.ast import (
    AssignmentExpr,
    BinaryExpr,
    Identifier,
    NumericLiteral,
    ObjectLiteral,
    Program,
    Property,
    VarDeclaration,
)
from tinylang.frontend.lexer import TokenType, tokenize
from tinylang.lang.error import ParseError

logger = logging.getLogger(__name__)

ADDITIVE = (TokenType.PLUS, TokenType.MINUS)
MULTIPLICATIVE = (TokenType.STAR, TokenType.SLASH, TokenType.PERCENT)


class Parser:
    """Frontend for producing a valid AST from source code. One Parser may be reused for several sources."""

    def __init__(self):
        self.tokens = ()
        self.pos = 0

    def produce_ast(self, source):
        """Tokenizes and parses source."""
        return self.parse(tokenize(source))

    def parse(self, tokens):
        """Parses tokens (ending with an EOF token) into a Program."""
        self.tokens = tuple(tokens)
        self.pos = 0

        if not self.tokens or self.tokens[-1].type is not TokenType.EOF:
            raise ParseError("token sequence is not terminated by EOF")

        body = []
        while self.not_eof():
            body.append(self.parse_stmt())

        logger.debug("parsed %d token(s) into %d statement(s)", len(self.tokens), len(body))
        return Program(tuple(body))

    # cursor

    def not_eof(self):
        return self.at().type is not TokenType.EOF

    def at(self):
        """Returns the current token."""
        return self.tokens[self.pos]

    def eat(self):
        """Returns the current token and advances past it. The cursor never moves past EOF."""
        token = self.tokens[self.pos]
        if token.type is not TokenType.EOF:
            self.pos += 1
        return token

    def expect(self, token_type, msg):
        """Like eat, but raises a ParseError with msg if the current token is not of type token_type."""
        token = self.at()
        if token.type is not token_type:
            raise ParseError(msg, expected=token_type, found=token)
        return self.eat()

    # statements

    def parse_stmt(self):
        if self.at().type in (TokenType.LET, TokenType.CONST):
            return self.parse_var_declaration()

        expr = self.parse_expr()
        if self.at().type is TokenType.SEMICOLON:
            self.eat()
        return expr

    def parse_var_declaration(self):
        """LET IDENT ; or (LET | CONST) IDENT = EXPR ;"""
        constant = self.eat().type is TokenType.CONST
        identifier = self.expect(TokenType.IDENTIFIER, "expected identifier name following let | const").value

        if self.at().type is TokenType.SEMICOLON:
            if constant:
                raise ParseError("constant declaration must be initialized", TokenType.EQUALS, self.at())
            self.eat()
            return VarDeclaration(identifier, None, constant=False)

        self.expect(TokenType.EQUALS, "expected equals token following identifier in variable declaration")
        declaration = VarDeclaration(identifier, self.parse_expr(), constant)
        self.expect(TokenType.SEMICOLON, "variable declaration must end with a semicolon")

        return declaration

    # expressions

    def parse_expr(self):
        return self.parse_assignment_expr()

    def parse_assignment_expr(self):
        left = self.parse_additive_expr()

        if self.at().type is TokenType.EQUALS:
            self.eat()
            return AssignmentExpr(left, self.parse_assignment_expr())

        return left

    def parse_additive_expr(self):
        left = self.parse_multiplicative_expr()

        while self.at().type in ADDITIVE:
            operator = self.eat().value
            left = BinaryExpr(left, self.parse_multiplicative_expr(), operator)

        return left

    def parse_multiplicative_expr(self):
        left = self.parse_primary_expr()

        while self.at().type in MULTIPLICATIVE:
            operator = self.eat().value
            left = BinaryExpr(left, self.parse_primary_expr(), operator)

        return left

    def parse_primary_expr(self):
        token_type = self.at().type

        if token_type is TokenType.IDENTIFIER:
            return Identifier(self.eat().value)

        elif token_type is TokenType.NUMBER:
            return NumericLiteral(float(self.eat().value))

        elif token_type is TokenType.OPEN_PAREN:
            self.eat()
            value = self.parse_expr()
            self.expect(TokenType.CLOSE_PAREN, "expected closing parenthesis after parenthesized expression")
            return value

        elif token_type is TokenType.OPEN_BRACE:
            return self.parse_object_expr()

        raise ParseError("unexpected token found during parsing", found=self.at())

    def parse_object_expr(self):
        """{ Prop[] } where a trailing comma after the last property is allowed."""
        self.expect(TokenType.OPEN_BRACE, "expected opening brace of object literal")
        properties = []

        while self.not_eof() and self.at().type is not TokenType.CLOSE_BRACE:
            key = self.expect(TokenType.IDENTIFIER, "object literal key expected").value

            if self.at().type in (TokenType.COMMA, TokenType.CLOSE_BRACE):
                properties.append(Property(key))  # shorthand: { key } means { key: key }
            else:
                self.expect(TokenType.COLON, "missing colon following identifier in object literal")
                properties.append(Property(key, self.parse_expr()))

            if self.at().type is not TokenType.CLOSE_BRACE:
                self.expect(TokenType.COMMA, "expected comma or closing brace following property")

        self.expect(TokenType.CLOSE_BRACE, "object literal missing closing brace")
        return ObjectLiteral(tuple(properties))
