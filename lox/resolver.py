###############################################################################
"""resolver

Resolver(locals, statements).inspect() -> errors: list
    Resolves variable references in statements, recording in locals
    the number of scopes between each reference and its declaration.
"""

import logging
from typing import Dict, List
from functools import singledispatch
from dataclasses import dataclass

from . import builtin, lang

logger = logging.getLogger(__name__)

# **********************************************************************

# Resolver helper functions


class Scopes:
    """The resolver's state while walking the syntax tree.

    Attributes
    ----------
    - stack
        A stack of scopes, innermost last. Each maps a declared name to
        True once its initializer has been resolved. The global scope
        is not tracked.
    - locals
        The side table being populated
    - errors
        LogicErrors reported so far
    - function
        Kind of function enclosing the code being resolved
    - klass
        Kind of class enclosing the code being resolved
    """
    __slots__ = ("stack", "locals", "errors", "function", "klass")

    def __init__(self, locals: lang.Locals) -> None:
        self.stack: List[Dict[lang.NameKey, bool]] = []
        self.locals = locals
        self.errors: List[builtin.LogicError] = []
        self.function: lang.FunctionType = 'NONE'
        self.klass: lang.ClassType = 'NONE'

    def error(self, msg: str, token: lang.Token) -> None:
        """Reports an error; resolving continues."""
        self.errors += [builtin.LogicError(msg, token)]

    def begin(self) -> None:
        self.stack += [{}]

    def end(self) -> None:
        self.stack.pop()


def declare(scopes: Scopes, name: lang.Token) -> None:
    """Adds name to the innermost scope, not yet ready for use."""
    if not scopes.stack:
        return
    scope = scopes.stack[-1]
    if name.word in scope:
        scopes.error("Already a variable with this name in this scope.", name)
    scope[name.word] = False


def define(scopes: Scopes, name: lang.Token) -> None:
    """Marks name in the innermost scope as ready for use."""
    if not scopes.stack:
        return
    scopes.stack[-1][name.word] = True


def resolveLocal(scopes: Scopes, expr: lang.Expr, name: lang.Token) -> None:
    """Records the depth of the innermost scope declaring name.
    Names not found are assumed to be global, and are not recorded.
    """
    for depth, scope in enumerate(reversed(scopes.stack)):
        if name.word in scope:
            scopes.locals[expr] = depth
            return


def resolveFunction(scopes: Scopes, stmt: lang.FunctionStmt,
                    kind: lang.FunctionType) -> None:
    """Resolves params and body of a function in a new scope."""
    enclosing = scopes.function
    scopes.function = kind
    scopes.begin()
    for param in stmt.params:
        declare(scopes, param)
        define(scopes, param)
    verifyStmts(stmt.stmts, scopes)
    scopes.end()
    scopes.function = enclosing


@dataclass
class Resolver:
    """Resolves a list of statements into the given side table."""
    __slots__ = ('locals', 'statements')
    locals: lang.Locals
    statements: lang.Stmts

    def inspect(self) -> List[builtin.LogicError]:
        scopes = Scopes(self.locals)
        verifyStmts(self.statements, scopes)
        logger.debug(
            "Resolved %d locals, %d errors",
            len(self.locals), len(scopes.errors),
        )
        return scopes.errors


@singledispatch
def resolve(expr, scopes):
    """Dispatcher for Expr resolvers."""
    raise TypeError(f"No resolver found for {expr}")


@resolve.register
def _(expr: lang.Literal, scopes: Scopes) -> None:
    pass


@resolve.register
def _(expr: lang.Grouping, scopes: Scopes) -> None:
    resolve(expr.expr, scopes)


@resolve.register
def _(expr: lang.Unary, scopes: Scopes) -> None:
    resolve(expr.right, scopes)


@resolve.register
def _(expr: lang.Binary, scopes: Scopes) -> None:
    resolve(expr.left, scopes)
    resolve(expr.right, scopes)


@resolve.register
def _(expr: lang.Logical, scopes: Scopes) -> None:
    resolve(expr.left, scopes)
    resolve(expr.right, scopes)


@resolve.register
def _(expr: lang.Variable, scopes: Scopes) -> None:
    if scopes.stack and scopes.stack[-1].get(expr.name.word) is False:
        scopes.error(
            "Can't read local variable in its own initializer.", expr.name
        )
    resolveLocal(scopes, expr, expr.name)


@resolve.register
def _(expr: lang.Assign, scopes: Scopes) -> None:
    resolve(expr.expr, scopes)
    resolveLocal(scopes, expr, expr.name)


@resolve.register
def _(expr: lang.Call, scopes: Scopes) -> None:
    resolve(expr.callee, scopes)
    for arg in expr.args:
        resolve(arg, scopes)


@resolve.register
def _(expr: lang.Get, scopes: Scopes) -> None:
    # Properties are looked up dynamically
    resolve(expr.object, scopes)


@resolve.register
def _(expr: lang.Set, scopes: Scopes) -> None:
    resolve(expr.expr, scopes)
    resolve(expr.object, scopes)


@resolve.register
def _(expr: lang.This, scopes: Scopes) -> None:
    if scopes.klass == 'NONE':
        scopes.error("Can't use 'this' outside of a class.", expr.keyword)
        return
    resolveLocal(scopes, expr, expr.keyword)


@resolve.register
def _(expr: lang.Super, scopes: Scopes) -> None:
    if scopes.klass == 'NONE':
        scopes.error("Can't use 'super' outside of a class.", expr.keyword)
    elif scopes.klass != 'SUBCLASS':
        scopes.error(
            "Can't use 'super' in a class with no superclass.", expr.keyword
        )
    resolveLocal(scopes, expr, expr.keyword)


# Verifiers


def verifyStmts(stmts: lang.Stmts, scopes: Scopes) -> None:
    """Verify a list of statements."""
    for stmt in stmts:
        verify(stmt, scopes)


@singledispatch
def verify(stmt, scopes):
    """Dispatcher for Stmt verifiers."""
    raise TypeError(f"No verifier found for {stmt}")


@verify.register
def _(stmt: lang.Expression, scopes: Scopes) -> None:
    resolve(stmt.expr, scopes)


@verify.register
def _(stmt: lang.Print, scopes: Scopes) -> None:
    resolve(stmt.expr, scopes)


@verify.register
def _(stmt: lang.Var, scopes: Scopes) -> None:
    """Declare the name before resolving the initializer, so that a
    reference to the name in its own initializer is detected.
    """
    declare(scopes, stmt.name)
    if stmt.initializer is not None:
        resolve(stmt.initializer, scopes)
    define(scopes, stmt.name)


@verify.register
def _(stmt: lang.Block, scopes: Scopes) -> None:
    scopes.begin()
    verifyStmts(stmt.stmts, scopes)
    scopes.end()


@verify.register
def _(stmt: lang.If, scopes: Scopes) -> None:
    resolve(stmt.cond, scopes)
    verify(stmt.then, scopes)
    if stmt.fallback is not None:
        verify(stmt.fallback, scopes)


@verify.register
def _(stmt: lang.While, scopes: Scopes) -> None:
    resolve(stmt.cond, scopes)
    verify(stmt.body, scopes)


@verify.register
def _(stmt: lang.FunctionStmt, scopes: Scopes) -> None:
    """Declare a function in the enclosing scope."""
    # Define name first, to make recursive calls work
    declare(scopes, stmt.name)
    define(scopes, stmt.name)
    resolveFunction(scopes, stmt, 'FUNCTION')


@verify.register
def _(stmt: lang.Return, scopes: Scopes) -> None:
    if scopes.function == 'NONE':
        scopes.error("Can't return from top-level code.", stmt.keyword)
    if stmt.expr is None:
        return
    if scopes.function == 'INITIALIZER':
        scopes.error(
            "Can't return a value from an initializer.", stmt.keyword
        )
    resolve(stmt.expr, scopes)


@verify.register
def _(stmt: lang.ClassStmt, scopes: Scopes) -> None:
    """Declare a class, and resolve its methods in a scope binding
    this, nested in a scope binding super if it has a superclass.
    """
    enclosing = scopes.klass
    scopes.klass = 'CLASS'
    declare(scopes, stmt.name)
    define(scopes, stmt.name)

    if stmt.superclass is not None:
        if stmt.superclass.name.word == stmt.name.word:
            scopes.error(
                "A class can't inherit from itself.", stmt.superclass.name
            )
        scopes.klass = 'SUBCLASS'
        resolve(stmt.superclass, scopes)
        scopes.begin()
        scopes.stack[-1]['super'] = True

    scopes.begin()
    scopes.stack[-1]['this'] = True
    for method in stmt.methods:
        kind: lang.FunctionType = 'METHOD'
        if method.name.word == 'init':
            kind = 'INITIALIZER'
        resolveFunction(scopes, method, kind)
    scopes.end()

    if stmt.superclass is not None:
        scopes.end()
    scopes.klass = enclosing
