"""interpreter

Interpreter(context, statements).interpret() -> error: Optional[RuntimeError]
    Interprets and executes a list of statements
"""

import logging
from typing import (
    Optional,
    Sequence,
)
from functools import singledispatch
from dataclasses import dataclass

from . import (builtin, lang)

logger = logging.getLogger(__name__)

# ----------------------------------------------------------------------

# Helper functions


def expectNumbersElseError(*operands: lang.Value,
                           token: lang.Token) -> None:
    """Raises an error if any operand is not a number."""
    for operand in operands:
        if type(operand) is not float:
            msg = ("Operand must be a number." if len(operands) == 1
                   else "Operands must be numbers.")
            raise builtin.RuntimeError(msg, token)


def stringify(value: lang.Value) -> str:
    """Returns the text form of a value, as printed by a Print."""
    if value is None:
        return 'nil'
    if type(value) is bool:
        return str(value).lower()
    if type(value) is float:
        if value != value:
            return 'NaN'
        if value in (builtin.INF, -builtin.INF):
            return 'Infinity' if value > 0 else '-Infinity'
        text = repr(value)
        if text.endswith('.0'):
            text = text[:-2]
        return text
    return str(value)


def lookUpVariable(name: lang.Token, expr: lang.Expr,
                   ctx: lang.Context) -> lang.Value:
    """Reads name from the resolved scope, or from globals if the
    resolver did not record one.
    """
    depth = ctx.locals.get(expr)
    if depth is None:
        return ctx.globals.get(name)
    return ctx.frame.getAt(depth, name.word)


@dataclass
class Unwind:
    """Execution outcome of a Return, passed back up to the
    enclosing function call.
    """
    __slots__ = ("value", )
    value: lang.Value


Outcome = Optional[Unwind]  # None for normal completion


@dataclass
class Interpreter:
    """Interprets a list of statements with a given context."""
    context: lang.Context
    statements: lang.Stmts

    def registerOutputHandler(self, handler) -> None:
        """Register handler as the function to use to handle any output
        from the executed statements.
        The default handler is Python's print().
        """
        self.context.output = handler

    def interpret(self) -> Optional[builtin.RuntimeError]:
        """Executes the statements in order.
        The first runtime error aborts execution, and is returned.
        """
        try:
            executeStmts(self.statements, self.context)
        except builtin.RuntimeError as err:
            logger.debug("Runtime error at line %s: %s", err.line, err.msg())
            return err
        return None


# Evaluators
# Evaluation functions return the evaluated value of Exprs.


@singledispatch
def evalCallable(callable, args, ctx):
    """Returns the value of invoking a Builtin/Function/Class."""
    raise TypeError(f"{type(callable)} passed in evalCallable")


@evalCallable.register
def _(callable: lang.Builtin, args: Sequence,
      ctx: lang.Context) -> lang.Value:
    return callable.func(*args)


@evalCallable.register
def _(callable: lang.Function, args: Sequence,
      ctx: lang.Context) -> lang.Value:
    # Bind args to params in a new frame
    local = lang.Environment(callable.closure)
    for param, arg in zip(callable.declaration.params, args):
        local.define(param.word, arg)
    outcome = executeStmts(callable.declaration.stmts,
                           ctx.with_frame(local))
    if callable.isInitializer:
        return callable.closure.getAt(0, 'this')
    if outcome is not None:
        return outcome.value
    return None


@evalCallable.register
def _(callable: lang.Class, args: Sequence,
      ctx: lang.Context) -> lang.Instance:
    instance = lang.Instance(callable)
    initializer = callable.findMethod('init')
    if initializer is not None:
        evalCallable(initializer.bind(instance), args, ctx)
    return instance


@singledispatch
def evaluate(expr, ctx):
    """Dispatcher for Expr evaluators."""
    raise TypeError(f"Unexpected expr {expr}")


@evaluate.register
def _(expr: lang.Literal, ctx: lang.Context) -> lang.Value:
    return expr.value


@evaluate.register
def _(expr: lang.Grouping, ctx: lang.Context) -> lang.Value:
    return evaluate(expr.expr, ctx)


@evaluate.register
def _(expr: lang.Unary, ctx: lang.Context) -> lang.Value:
    rightval = evaluate(expr.right, ctx)
    if expr.oper is builtin.neg:
        expectNumbersElseError(rightval, token=expr.token)
    return expr.oper(rightval)


@evaluate.register
def _(expr: lang.Binary, ctx: lang.Context) -> lang.Value:
    leftval = evaluate(expr.left, ctx)
    rightval = evaluate(expr.right, ctx)
    if expr.oper in builtin.NUMERIC:
        expectNumbersElseError(leftval, rightval, token=expr.token)
    elif expr.oper is builtin.add:
        if not (
            (type(leftval) is float and type(rightval) is float)
            or (type(leftval) is str and type(rightval) is str)
        ):
            raise builtin.RuntimeError(
                "Operands must be two numbers or two strings.",
                expr.token,
            )
    return expr.oper(leftval, rightval)


@evaluate.register
def _(expr: lang.Logical, ctx: lang.Context) -> lang.Value:
    leftval = evaluate(expr.left, ctx)
    if expr.token.word == 'or':
        if builtin.isTruthy(leftval):
            return leftval
    elif not builtin.isTruthy(leftval):
        return leftval
    return evaluate(expr.right, ctx)


@evaluate.register
def _(expr: lang.Variable, ctx: lang.Context) -> lang.Value:
    return lookUpVariable(expr.name, expr, ctx)


@evaluate.register
def _(expr: lang.Assign, ctx: lang.Context) -> lang.Value:
    value = evaluate(expr.expr, ctx)
    depth = ctx.locals.get(expr)
    if depth is None:
        ctx.globals.assign(expr.name, value)
    else:
        ctx.frame.assignAt(depth, expr.name, value)
    return value


@evaluate.register
def _(expr: lang.Call, ctx: lang.Context) -> lang.Value:
    callee = evaluate(expr.callee, ctx)
    args = [evaluate(arg, ctx) for arg in expr.args]
    if not isinstance(callee, lang.Callable):
        raise builtin.RuntimeError(
            "Can only call functions and classes.", expr.paren
        )
    if len(args) != callee.arity():
        raise builtin.RuntimeError(
            f"Expected {callee.arity()} arguments but got {len(args)}.",
            expr.paren,
        )
    try:
        return evalCallable(callee, args, ctx)
    except RecursionError:
        # Innermost call with room to spare reports; outer calls only
        # pass the RuntimeError up
        raise builtin.RuntimeError("Stack overflow.", expr.paren) from None


@evaluate.register
def _(expr: lang.Get, ctx: lang.Context) -> lang.Value:
    obj = evaluate(expr.object, ctx)
    if not isinstance(obj, lang.Instance):
        raise builtin.RuntimeError(
            "Only instances have properties.", expr.name
        )
    return obj.get(expr.name)


@evaluate.register
def _(expr: lang.Set, ctx: lang.Context) -> lang.Value:
    obj = evaluate(expr.object, ctx)
    if not isinstance(obj, lang.Instance):
        raise builtin.RuntimeError("Only instances have fields.", expr.name)
    value = evaluate(expr.expr, ctx)
    obj.set(expr.name, value)
    return value


@evaluate.register
def _(expr: lang.This, ctx: lang.Context) -> lang.Value:
    return lookUpVariable(expr.keyword, expr, ctx)


@evaluate.register
def _(expr: lang.Super, ctx: lang.Context) -> lang.Function:
    depth = ctx.locals[expr]
    superclass = ctx.frame.getAt(depth, 'super')
    # this is always bound one frame inside super
    instance = ctx.frame.getAt(depth - 1, 'this')
    method = superclass.findMethod(expr.method.word)
    if method is None:
        raise builtin.RuntimeError(
            f"Undefined property '{expr.method.word}'.", expr.method
        )
    return method.bind(instance)


# Executors


def executeStmts(stmts: lang.Stmts, ctx: lang.Context) -> Outcome:
    """Execute a list of statements.
    Stops at the first statement that unwinds, and passes its outcome
    back.
    """
    for stmt in stmts:
        outcome = execute(stmt, ctx)
        if outcome is not None:
            return outcome
    return None


@singledispatch
def execute(stmt: lang.Stmt, ctx: lang.Context) -> Outcome:
    """Dispatcher for statement executors."""
    raise TypeError(f"Invalid Stmt {stmt}")


@execute.register
def _(stmt: lang.Expression, ctx: lang.Context) -> Outcome:
    evaluate(stmt.expr, ctx)
    return None


@execute.register
def _(stmt: lang.Print, ctx: lang.Context) -> Outcome:
    value = evaluate(stmt.expr, ctx)
    ctx.output(stringify(value))
    return None


@execute.register
def _(stmt: lang.Var, ctx: lang.Context) -> Outcome:
    value = None
    if stmt.initializer is not None:
        value = evaluate(stmt.initializer, ctx)
    ctx.frame.define(stmt.name.word, value)
    return None


@execute.register
def _(stmt: lang.Block, ctx: lang.Context) -> Outcome:
    # The enclosing frame is left untouched in ctx for the caller
    local = lang.Environment(ctx.frame)
    return executeStmts(stmt.stmts, ctx.with_frame(local))


@execute.register
def _(stmt: lang.If, ctx: lang.Context) -> Outcome:
    if builtin.isTruthy(evaluate(stmt.cond, ctx)):
        return execute(stmt.then, ctx)
    if stmt.fallback is not None:
        return execute(stmt.fallback, ctx)
    return None


@execute.register
def _(stmt: lang.While, ctx: lang.Context) -> Outcome:
    while builtin.isTruthy(evaluate(stmt.cond, ctx)):
        outcome = execute(stmt.body, ctx)
        if outcome is not None:
            return outcome
    return None


@execute.register
def _(stmt: lang.FunctionStmt, ctx: lang.Context) -> Outcome:
    func = lang.Function(stmt, ctx.frame, False)
    ctx.frame.define(stmt.name.word, func)
    return None


@execute.register
def _(stmt: lang.Return, ctx: lang.Context) -> Outcome:
    value = None
    if stmt.expr is not None:
        value = evaluate(stmt.expr, ctx)
    return Unwind(value)


@execute.register
def _(stmt: lang.ClassStmt, ctx: lang.Context) -> Outcome:
    superclass = None
    if stmt.superclass is not None:
        superclass = evaluate(stmt.superclass, ctx)
        if not isinstance(superclass, lang.Class):
            raise builtin.RuntimeError(
                "Superclass must be a class.", stmt.superclass.name
            )
    ctx.frame.define(stmt.name.word, None)

    closure = ctx.frame
    if superclass is not None:
        closure = lang.Environment(ctx.frame)
        closure.define('super', superclass)

    methods = {
        method.name.word: lang.Function(
            method, closure, method.name.word == 'init'
        )
        for method in stmt.methods
    }
    klass = lang.Class(stmt.name.word, superclass, methods)
    ctx.frame.assign(stmt.name, klass)
    return None
