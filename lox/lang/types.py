"""types.py

Attribute types used in Lox objects.
"""

from typing import Literal as LiteralType

__all__ = [
    'Type',
    'NameKey',
    'FunctionType',
    'ClassType',
]

# Token type tag
Type = LiteralType['symbol', 'keyword', 'name', 'NUMBER', 'STRING', 'EOF']

NameKey = str  # for Environment/Instance

# Enclosing function and class kinds tracked by the resolver
FunctionType = LiteralType['NONE', 'FUNCTION', 'METHOD', 'INITIALIZER']
ClassType = LiteralType['NONE', 'CLASS', 'SUBCLASS']
