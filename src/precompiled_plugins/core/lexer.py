"""Shallow tokenizer for DSL build scripts.

The tokenizer recognizes just enough of the script language to tell
trivia (whitespace and comments) apart from keywords, identifiers and
dots. Everything else is emitted one character at a time as `OTHER`.

Tokens are produced lazily: a consumer that stops early never pays for
tokenizing the rest of the file.
"""

from enum import StrEnum
from re import compile as regexp
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Iterator


class TokenType(StrEnum):
    """Kinds of tokens produced by the tokenizer."""

    WHITESPACE = 'whitespace'
    SHEBANG = 'shebang'
    LINE_COMMENT = 'line-comment'
    BLOCK_COMMENT = 'block-comment'
    DOC_COMMENT = 'doc-comment'
    KEYWORD = 'keyword'
    IDENTIFIER = 'identifier'
    DOT = 'dot'
    OTHER = 'other'


#: Token types that carry no meaning for the scanner.
TRIVIA = frozenset({
    TokenType.WHITESPACE,
    TokenType.SHEBANG,
    TokenType.LINE_COMMENT,
    TokenType.BLOCK_COMMENT,
    TokenType.DOC_COMMENT,
})

#: Hard keywords of the script language. They are never identifiers.
KEYWORDS = frozenset({
    'as', 'break', 'class', 'continue', 'do', 'else', 'false', 'for',
    'fun', 'if', 'in', 'interface', 'is', 'null', 'object', 'package',
    'return', 'super', 'this', 'throw', 'true', 'try', 'typealias',
    'typeof', 'val', 'var', 'when', 'while',
})

PACKAGE_KEYWORD = 'package'

_WHITESPACE = regexp(r'\s+')
_SHEBANG = regexp(r'#![^\r\n]*')
_LINE_COMMENT = regexp(r'//[^\r\n]*')
_COMMENT_DELIMITER = regexp(r'/\*|\*/')
_IDENTIFIER = regexp(r'[^\W\d]\w*|`[^`\r\n]+`')


class Token(NamedTuple):
    """Single token with its position in the source text."""

    #: Kind of the token.
    type: TokenType
    #: Exact source text of the token.
    text: str
    #: Character offset of the token start.
    offset: int


def _block_comment_end(code: str, start: int) -> int:
    """Find the end of a (possibly nested) block comment.

    Args:
        code: Source text.
        start: Offset of the opening `/*`.

    Returns:
        Offset right after the matching `*/`, or the end of the text
        for an unterminated comment.
    """
    depth = 0
    position = start

    while match := _COMMENT_DELIMITER.search(code, position):
        depth += 1 if match.group() == '/*' else -1
        position = match.end()
        if depth == 0:
            return position

    return len(code)


def tokenize(code: str) -> 'Iterator[Token]':
    """Lazily split source text into tokens.

    Args:
        code: Source text of a script.

    Yields:
        Tokens in source order. Concatenating their texts restores
        the original input.
    """
    position = 0
    length = len(code)

    if match := _SHEBANG.match(code):
        yield Token(TokenType.SHEBANG, match.group(), 0)
        position = match.end()

    while position < length:
        start = position

        if match := _WHITESPACE.match(code, position):
            token_type = TokenType.WHITESPACE
            position = match.end()

        elif code.startswith('//', position):
            token_type = TokenType.LINE_COMMENT
            position = _LINE_COMMENT.match(code, position).end()  # type: ignore[union-attr]

        elif code.startswith('/*', position):
            token_type = TokenType.BLOCK_COMMENT
            if code.startswith('/**', position) and not code.startswith('/**/', position):
                token_type = TokenType.DOC_COMMENT
            position = _block_comment_end(code, position)

        elif match := _IDENTIFIER.match(code, position):
            token_type = TokenType.IDENTIFIER
            if match.group() in KEYWORDS:
                token_type = TokenType.KEYWORD
            position = match.end()

        elif code[position] == '.':
            token_type = TokenType.DOT
            position += 1

        else:
            token_type = TokenType.OTHER
            position += 1

        yield Token(token_type, code[start:position], start)
