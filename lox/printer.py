"""printer

printExpr(expr: Expr) -> str
    Returns the expression in parenthesised prefix form,
    e.g. (* (- 123) (group 45.67))
printStmt(stmt: Stmt) -> str
    Returns the statement in the same form.
"""

from functools import singledispatch
from typing import Iterable

from . import lang



def parenthesize(name: str, *parts: str) -> str:
    return f"({' '.join((name,) + parts)})"


def printLiteral(value: lang.Value) -> str:
    """Literals are shown as they would be written in code."""
    if value is None:
        return 'nil'
    if type(value) is bool:
        return str(value).lower()
    if type(value) is str:
        return f'"{value}"'
    return repr(value)


def printStmts(stmts: Iterable[lang.Stmt]) -> str:
    return '\n'.join(printStmt(stmt) for stmt in stmts)


@singledispatch
def printExpr(expr) -> str:
    """Dispatcher for Expr printers."""
    raise TypeError(f"No printer found for {expr}")


@printExpr.register
def _(expr: lang.Literal) -> str:
    return printLiteral(expr.value)


@printExpr.register
def _(expr: lang.Grouping) -> str:
    return parenthesize('group', printExpr(expr.expr))


@printExpr.register
def _(expr: lang.Unary) -> str:
    return parenthesize(expr.token.word, printExpr(expr.right))


@printExpr.register
def _(expr: lang.Binary) -> str:
    return parenthesize(
        expr.token.word, printExpr(expr.left), printExpr(expr.right)
    )


@printExpr.register
def _(expr: lang.Logical) -> str:
    return parenthesize(
        expr.token.word, printExpr(expr.left), printExpr(expr.right)
    )


@printExpr.register
def _(expr: lang.Variable) -> str:
    return expr.name.word


@printExpr.register
def _(expr: lang.Assign) -> str:
    return parenthesize('=', expr.name.word, printExpr(expr.expr))


@printExpr.register
def _(expr: lang.Call) -> str:
    args = [printExpr(arg) for arg in expr.args]
    return parenthesize('call', printExpr(expr.callee), *args)


@printExpr.register
def _(expr: lang.Get) -> str:
    return parenthesize('.', printExpr(expr.object), expr.name.word)


@printExpr.register
def _(expr: lang.Set) -> str:
    return parenthesize(
        '=', printExpr(expr.object), expr.name.word, printExpr(expr.expr)
    )


@printExpr.register
def _(expr: lang.This) -> str:
    return 'this'


@printExpr.register
def _(expr: lang.Super) -> str:
    return parenthesize('super', expr.method.word)


@singledispatch
def printStmt(stmt) -> str:
    """Dispatcher for Stmt printers."""
    raise TypeError(f"No printer found for {stmt}")


@printStmt.register
def _(stmt: lang.Expression) -> str:
    return parenthesize(';', printExpr(stmt.expr))


@printStmt.register
def _(stmt: lang.Print) -> str:
    return parenthesize('print', printExpr(stmt.expr))


@printStmt.register
def _(stmt: lang.Var) -> str:
    if stmt.initializer is None:
        return parenthesize('var', stmt.name.word)
    return parenthesize('var', stmt.name.word, printExpr(stmt.initializer))


@printStmt.register
def _(stmt: lang.Block) -> str:
    return parenthesize('block', *(printStmt(s) for s in stmt.stmts))


@printStmt.register
def _(stmt: lang.If) -> str:
    parts = [printExpr(stmt.cond), printStmt(stmt.then)]
    if stmt.fallback is not None:
        parts += [printStmt(stmt.fallback)]
    return parenthesize('if', *parts)


@printStmt.register
def _(stmt: lang.While) -> str:
    return parenthesize('while', printExpr(stmt.cond), printStmt(stmt.body))


@printStmt.register
def _(stmt: lang.FunctionStmt) -> str:
    params = parenthesize(*(param.word for param in stmt.params)) \
        if stmt.params else '()'
    body = (printStmt(s) for s in stmt.stmts)
    return parenthesize('fun', stmt.name.word, params, *body)


@printStmt.register
def _(stmt: lang.Return) -> str:
    if stmt.expr is None:
        return '(return)'
    return parenthesize('return', printExpr(stmt.expr))


@printStmt.register
def _(stmt: lang.ClassStmt) -> str:
    parts = [stmt.name.word]
    if stmt.superclass is not None:
        parts += ['<', stmt.superclass.name.word]
    parts += [printStmt(method) for method in stmt.methods]
    return parenthesize('class', *parts)
