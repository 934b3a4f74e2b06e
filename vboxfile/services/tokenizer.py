"""
Line tokenizer for VBOX files.

Splits a file into section headers ("[data]" -> "data") and content lines.
Blank lines are dropped. Nothing here builds a VboxDocument from the tokens.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Union


class TokenKind(Enum):
    SECTION_HEADER = "section_header"
    LINE = "line"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str

    @classmethod
    def section(cls, name: str) -> "Token":
        return cls(TokenKind.SECTION_HEADER, name)

    @classmethod
    def line(cls, text: str) -> "Token":
        return cls(TokenKind.LINE, text)


def _lines(source: Union[str, Iterable[str]]) -> Iterator[str]:
    if isinstance(source, str):
        source = source.split("\n")
    for line in source:
        yield line.rstrip("\r\n")


def tokenize(source: Union[str, Iterable[str]]) -> Iterator[Token]:
    """
    Tokenize VBOX text.

    Args:
        source: Whole file contents, or an iterable of lines such as an
            open text file

    Yields:
        A SECTION_HEADER token for every line starting with "[" (brackets
        stripped), a LINE token with the verbatim text otherwise
    """
    for line in _lines(source):
        if not line.strip():
            continue
        if line.startswith("["):
            yield Token.section(line.lstrip("[").rstrip("]"))
        else:
            yield Token.line(line)
