"""Tokenizer for the ``{{ }}`` template directive language."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Union

from .constants import (
    DIRECTIVE_CLOSE,
    DIRECTIVE_COMPONENT,
    DIRECTIVE_OPEN,
    DIRECTIVE_RANGE_END,
    DIRECTIVE_RANGE_PREFIX,
    DIRECTIVE_SCRIPT,
    DIRECTIVE_STYLES,
    DIRECTIVE_VAR_PREFIX,
)


class TokenType(Enum):
    """Kinds of template tokens."""

    TEXT = auto()
    VAR = auto()
    RANGE_START = auto()
    RANGE_END = auto()
    COMPONENT = auto()
    STYLES = auto()
    SCRIPT = auto()


@dataclass(frozen=True)
class Token:
    """A template token. ``content`` is literal text or a variable name."""

    type: TokenType
    content: str = ""


class Tokenizer:
    """Splits a template into text runs and directives."""

    def __init__(self, template: Union[bytes, str]):
        if isinstance(template, bytes):
            template = template.decode("utf-8", errors="replace")
        self.template = template

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        text = self.template
        pos = 0

        while pos < len(text):
            start = text.find(DIRECTIVE_OPEN, pos)
            if start == -1:
                break

            end = text.find(DIRECTIVE_CLOSE, start + len(DIRECTIVE_OPEN))
            if end == -1:
                # Unterminated directive, the rest is literal text
                break

            if start > pos:
                tokens.append(Token(TokenType.TEXT, text[pos:start]))

            token = self.directive_token(text[start + len(DIRECTIVE_OPEN):end])
            if token is not None:
                tokens.append(token)
            pos = end + len(DIRECTIVE_CLOSE)

        if pos < len(text):
            tokens.append(Token(TokenType.TEXT, text[pos:]))

        return tokens

    @staticmethod
    def directive_token(body: str):
        """Token for a directive body, or None when it is not recognised."""
        directive = body.strip()

        if directive == DIRECTIVE_COMPONENT:
            return Token(TokenType.COMPONENT)
        if directive == DIRECTIVE_RANGE_END:
            return Token(TokenType.RANGE_END)
        if directive.startswith(DIRECTIVE_RANGE_PREFIX):
            return Token(TokenType.RANGE_START, directive[len(DIRECTIVE_RANGE_PREFIX):])
        if directive == DIRECTIVE_STYLES:
            return Token(TokenType.STYLES)
        if directive == DIRECTIVE_SCRIPT:
            return Token(TokenType.SCRIPT)
        if directive.startswith(DIRECTIVE_VAR_PREFIX):
            return Token(TokenType.VAR, directive[len(DIRECTIVE_VAR_PREFIX):])
        return None


def tokenize(template: Union[bytes, str]) -> List[Token]:
    """Tokenize a template."""
    return Tokenizer(template).tokenize()
