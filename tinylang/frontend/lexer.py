"""Lexical analysis for tinylang. Converts source text into a flat sequence of Tokens, terminated by a single EOF
token.

Token grammar can be loosely defined as follows:

```
<number>     ::= <digit>+ ["." <digit>*]          ; at most one decimal point
<identifier> ::= (<letter> | "_") (<letter> | <digit> | "_")*
<reserved>   ::= "let" | "const"                  ; identifiers that exactly match a reserved word
<symbol>     ::= "=" | "+" | "-" | "*" | "/" | "%" | "(" | ")" | "{" | "}" | "," | ":" | ";"
```

Whitespace separates tokens and is otherwise ignored.
"""

from dataclasses import dataclass
from enum import Enum, auto

from tinylang.lang.error import LexError


class TokenType(Enum):
    # literals
    NUMBER = auto()
    IDENTIFIER = auto()

    # reserved words
    LET = auto()
    CONST = auto()

    # grouping and operators
    EQUALS = auto()
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    PERCENT = auto()
    OPEN_PAREN = auto()
    CLOSE_PAREN = auto()
    OPEN_BRACE = auto()
    CLOSE_BRACE = auto()
    COMMA = auto()
    COLON = auto()
    SEMICOLON = auto()

    EOF = auto()


KEYWORDS = {
    "let": TokenType.LET,
    "const": TokenType.CONST,
}

SYMBOLS = {
    "=": TokenType.EQUALS,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
    "(": TokenType.OPEN_PAREN,
    ")": TokenType.CLOSE_PAREN,
    "{": TokenType.OPEN_BRACE,
    "}": TokenType.CLOSE_BRACE,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
}

WHITESPACE = " \t\r\n"
DIGITS = "0123456789"


@dataclass(frozen=True)
class Token:
    """A lexical unit: its kind, the text it matched, and where that text starts (1-based)."""
    type: TokenType
    value: str
    line: int = 1
    col: int = 1

    def __repr__(self):
        return f"Token({self.type.name}, '{self.value}')"


def is_identifier_start(char):
    return char.isalpha() or char == "_"


def is_identifier_part(char):
    return char.isalnum() or char == "_"


def tokenize(source):
    """Returns list of Tokens in source, in order. Raises LexError on any character that starts no token."""
    tokens = []
    pos = 0
    line, line_start = 1, 0

    while pos < len(source):
        char = source[pos]
        col = pos - line_start + 1

        if char in WHITESPACE:
            pos += 1
            if char == "\n":
                line, line_start = line + 1, pos

        elif char in SYMBOLS:
            tokens.append(Token(SYMBOLS[char], char, line, col))
            pos += 1

        elif char in DIGITS:
            end = pos
            seen_point = False
            while end < len(source) and (source[end] in DIGITS or (source[end] == "." and not seen_point)):
                seen_point = seen_point or source[end] == "."
                end += 1

            tokens.append(Token(TokenType.NUMBER, source[pos:end], line, col))
            pos = end

        elif is_identifier_start(char):
            end = pos
            while end < len(source) and is_identifier_part(source[end]):
                end += 1

            text = source[pos:end]
            tokens.append(Token(KEYWORDS.get(text, TokenType.IDENTIFIER), text, line, col))
            pos = end

        else:
            raise LexError(char, line, col)

    tokens.append(Token(TokenType.EOF, "", line, len(source) - line_start + 1))
    return tokens
