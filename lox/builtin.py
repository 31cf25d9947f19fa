"""Keywords, operators, and errors supported in lox.
"""

import math

# Errors

class LoxError(Exception):
    """Base exception class for all Lox errors."""

    def __init__(self, msg, token, line=None) -> None:
        super().__init__(msg)
        self.token = token
        self.line = line
        self.column = None
        if token:
            self.line = token.line
            self.column = token.column

    def msg(self) -> str:
        return self.args[0]

    @property
    def where(self) -> str:
        """Location context of the offending token."""
        if not self.token:
            return ''
        if self.token.type == 'EOF':
            return ' at end'
        return f" at '{self.token.word}'"

    def report(self) -> str:
        """Returns the location and message as a formatted string"""
        return f"[line {self.line}] Error{self.where}: {self.msg()}"

class ParseError(LoxError):
    """Custom error raised by scanner and parser."""

class LogicError(LoxError):
    """Custom error raised by resolver."""

class RuntimeError(LoxError):
    """Custom error raised by interpreter."""

    def report(self) -> str:
        return f"{self.msg()}\n[line {self.line}]"

class InternalError(LoxError):
    """Stands in for an unexpected Python exception in the pipeline,
    so that the failed run is still reported.
    """

    def report(self) -> str:
        return (
            f"Lox ERROR: {self.msg()}\n"
            "The details of this error have been logged in lox.log."
        )



# Operators
# These operators are used internally by the interpreter.
def add(x, y):
    return x + y

def sub(x, y):
    return x - y

def neg(x):
    return -x

def mul(x, y):
    return x * y

def div(x, y):
    """Follows IEEE semantics for a zero divisor."""
    try:
        return x / y
    except ZeroDivisionError:
        if x == 0 or x != x:
            return NAN
        return math.copysign(INF, x) * math.copysign(1.0, y)

def lt(x, y):
    return x < y

def lte(x, y):
    return x <= y

def gt(x, y):
    return x > y

def gte(x, y):
    return x >= y

def isTruthy(x) -> bool:
    """nil and false are falsy, everything else is truthy."""
    if x is None:
        return False
    if type(x) is bool:
        return x
    return True

def isEqual(x, y) -> bool:
    """Values of different kinds are never equal."""
    if type(x) is not type(y):
        return False
    return x == y

def eq(x, y):
    return isEqual(x, y)

def ne(x, y):
    return not isEqual(x, y)

def NOT(x):
    return not isTruthy(x)



# Token types

KEYWORDS = [
    'and', 'or',
    'class', 'super', 'this',
    'fun', 'return',
    'var', 'print',
    'if', 'else',
    'while', 'for',
]

VALUES = {
    'true': True,
    'false': False,
    'nil': None,
}

# Statement keywords the parser synchronises on after an error
STATEMENTS = ['class', 'fun', 'var', 'for', 'if', 'while', 'print', 'return']

INF = float('inf')

NAN = float('nan')

MAX_ARGS = 255

OPERATORS = {
    '+': add,
    '-': sub,
    '*': mul,
    '/': div,
    '<': lt,
    '<=': lte,
    '>': gt,
    '>=': gte,
    '!=': ne,
    '==': eq,
}

UNARY = {
    '-': neg,
    '!': NOT,
}

# Operators requiring number operands
NUMERIC = (sub, mul, div, lt, lte, gt, gte)

SYM_SINGLE = '(){},.-+;*'

SYM_MULTI = '!=<>/'

SYMBOLS = SYM_SINGLE + SYM_MULTI
