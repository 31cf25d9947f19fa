"""scanner

scan(src: str) -> tokens: list, lines: list, errors: list
    Scans src string, returns a list of tokens, a list of code lines,
    and a list of errors encountered while scanning.
"""

import logging
from typing import Any
from typing import List, Tuple

from . import builtin, lang

logger = logging.getLogger(__name__)



# Helper functions

def atEnd(code: "Code") -> bool:
    """Returns True if at end of code."""
    return code.cursor >= code.length

def check(code: "Code") -> str:
    """Returns char at cursor, or an empty string at end of code."""
    if atEnd(code):
        return ''
    return code.src[code.cursor]

def checkNext(code: "Code") -> str:
    """Returns char after cursor, or an empty string past end of code."""
    if code.cursor + 1 >= code.length:
        return ''
    return code.src[code.cursor + 1]

def consume(code: "Code") -> str:
    """Returns char at cursor, advances cursor."""
    char = check(code)
    code.cursor += 1
    if char == '\n':
        code.nextLine()
    return char

def makeToken(
    code: "Code",
    type: lang.Type,
    word: str,
    value: Any,
    line: int,
    column: int,
) -> lang.Token:
    """Factory function for a Token."""
    return lang.Token(line, column, type, word, value)

def isalpha(char: str) -> bool:
    """Identifiers are ASCII letters, digits, and underscores."""
    return char.isascii() and (char.isalpha() or char == '_')

def isdigit(char: str) -> bool:
    return char.isascii() and char.isdigit()



# Scanning functions

def word(code: "Code") -> str:
    """A word is a sequence of chars starting with a letter or
    underscore, and continuing with letters, digits, or underscores.
    """
    token = consume(code)
    while isalpha(check(code)) or isdigit(check(code)):
        token += consume(code)
    return token

def number(code: "Code") -> str:
    """A number is a sequence of digits, optionally followed by a
    period and more digits.
    A trailing period is not part of the number.
    """
    token = consume(code)
    while isdigit(check(code)):
        token += consume(code)
    if not (check(code) == '.' and isdigit(checkNext(code))):
        return token
    token += consume(code)  # '.'
    while isdigit(check(code)):
        token += consume(code)
    return token

def string(code: "Code") -> str:
    """A string is a sequence of chars that are enclosed in
    double-quotes ("). Strings may span lines.
    Returns the string without its closing quote if unterminated.
    """
    token = consume(code)
    while not atEnd(code) and check(code) != '"':
        token += consume(code)
    if not atEnd(code):
        token += consume(code)
    return token

def symbol(code: "Code") -> str:
    """A symbol is one char, or two chars when followed by '='.
    A '//' symbol starts a comment, which continues until the end of
    the line.
    """
    token = consume(code)
    if token in builtin.SYM_SINGLE:
        return token
    if token == '/':
        if check(code) != '/':
            return token
        while not atEnd(code) and check(code) != '\n':
            token += consume(code)
        return token
    if check(code) == '=':
        token += consume(code)
    return token



class Code:
    """
    Encapsulates the source code and its properties.

    Used by the scanner.
    """
    def __init__(
        self,
        src: str,
    ):
        self.src = src
        self.cursor: int = 0
        self.line: int = 1
        self.lineStart: int = 0
        self.lines: List[str] = []
        self.errors: List[builtin.ParseError] = []

    @property
    def length(self):
        return len(self.src)

    @property
    def column(self) -> int:
        """Column of the char at cursor. First char is column 1."""
        return self.cursor - self.lineStart + 1

    def nextLine(self):
        start, end = self.lineStart, self.cursor - 1
        self.lines += [self.src[start:end]]
        self.line += 1
        self.lineStart = self.cursor

    def error(self, msg: str, line: int) -> None:
        self.errors += [builtin.ParseError(msg, None, line=line)]



# Main scanning loop

def scan(src: str) -> Tuple[
    List[lang.Token], List[str], List[builtin.ParseError]
]:
    """Select a scanning function to use, from the next char in the code
    string, and use it.
    Unrecognised chars are reported and skipped, so that scanning
    always completes.
    """
    code = Code(src)
    tokens = []
    while not atEnd(code):
        char = check(code)
        line, column = code.line, code.column
        if char in [' ', '\r', '\t', '\n']:
            consume(code)
            continue
        elif isalpha(char):
            text = word(code)
            if text in builtin.KEYWORDS:
                token = makeToken(code, 'keyword', text, None, line, column)
            elif text in builtin.VALUES:
                value = builtin.VALUES[text]
                token = makeToken(code, 'keyword', text, value, line, column)
            else:
                token = makeToken(code, 'name', text, None, line, column)
        elif isdigit(char):
            text = number(code)
            token = makeToken(code, 'NUMBER', text, float(text), line, column)
        elif char == '"':
            text = string(code)
            if len(text) < 2 or not text.endswith('"'):
                code.error("Unterminated string.", code.line)
                continue
            token = makeToken(code, 'STRING', text, text[1:-1], line, column)
        elif char in builtin.SYMBOLS:
            text = symbol(code)
            # Ignore comment (//)
            if text.startswith("//"):
                continue
            token = makeToken(code, 'symbol', text, None, line, column)
        else:
            consume(code)
            code.error("Unexpected character.", line)
            continue
        tokens += [token]

    # Last line has no terminating line break
    code.lines += [code.src[code.lineStart:]]
    tokens += [makeToken(code, 'EOF', "", None, code.line, code.column)]
    logger.debug("Scanned %d tokens, %d errors", len(tokens), len(code.errors))
    return tokens, code.lines, code.errors
