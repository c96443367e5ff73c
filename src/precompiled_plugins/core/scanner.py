"""Package declaration scanner.

Detects the package a script declares without parsing the script. The
scan is a fixed state machine over the lazy token stream:

    skip trivia -> expect `package` -> skip trivia -> accumulate name

Only the prefix of the file up to the end of the declaration is ever
tokenized. The accumulated name is not validated: whatever contiguous
run of identifiers and dots follows the keyword is returned as is.
"""

from itertools import dropwhile, takewhile
from typing import TYPE_CHECKING

from .lexer import PACKAGE_KEYWORD, TRIVIA, TokenType, tokenize

if TYPE_CHECKING:
    from pathlib import Path

    from .lexer import Token

#: Token types that may form a package name.
NAME_TOKENS = frozenset({TokenType.IDENTIFIER, TokenType.DOT})


def _is_trivia(token: 'Token') -> bool:
    return token.type in TRIVIA


def _is_name_part(token: 'Token') -> bool:
    return token.type in NAME_TOKENS


def package_name_of(code: str) -> str | None:
    """Extract the declared package of a script.

    Args:
        code: Source text of a script.

    Returns:
        The dotted package name following the leading `package`
        keyword, or `None` when the first meaningful token is not
        that keyword. A keyword followed by no name yields `''`.
    """
    tokens = dropwhile(_is_trivia, tokenize(code))

    keyword = next(tokens, None)
    if keyword is None or keyword.type != TokenType.KEYWORD or keyword.text != PACKAGE_KEYWORD:
        return None

    tokens = dropwhile(_is_trivia, tokens)

    return ''.join(token.text for token in takewhile(_is_name_part, tokens))


def package_name_of_file(path: 'Path') -> str | None:
    """Extract the declared package of a script file.

    Args:
        path: Path to a UTF-8 encoded script file. Undecodable bytes
            are replaced, they never prevent the scan.

    Returns:
        The declared package name or `None`.

    Raises:
        OSError: If the file cannot be read.
    """
    return package_name_of(path.read_text(encoding='utf-8', errors='replace'))
