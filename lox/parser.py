"""parser

parse(tokens: list) -> statements: list, errors: list
    Parses tokens and returns a list of statements, and a list of
    errors encountered while parsing.
"""

from collections import deque
import logging
from typing import Optional, Iterable, Mapping, Tuple, List
from typing import TypeVar, Callable as function

from . import builtin, lang

logger = logging.getLogger(__name__)

E = TypeVar('E')  # Expression type
R = TypeVar('R')  # Return type



class Tokens(deque):
    """A queue of tokens ending with an EOF token.
    Errors which do not need the parser to synchronise are collected
    in errors.
    """
    def __init__(self, tokens: Iterable[lang.Token]) -> None:
        super().__init__(tokens)
        self.errors: List[builtin.ParseError] = []

    def error(self, msg: str, token: lang.Token) -> None:
        """Reports an error without unwinding the parser."""
        self.errors += [builtin.ParseError(msg, token)]



# Helper functions

def atEnd(tokens: Tokens) -> bool:
    """Returns True if at last token."""
    return check(tokens).type == 'EOF'

def check(tokens: Tokens) -> lang.Token:
    """Returns token at cursor."""
    return tokens[0]

def consume(tokens: Tokens) -> lang.Token:
    """Returns token at cursor, advances cursor.
    The EOF token is never consumed.
    """
    if atEnd(tokens):
        return check(tokens)
    return tokens.popleft()

def expectWord(tokens: Tokens, *words: str) -> Optional[lang.Token]:
    """Returns token at cursor if its word matches given sequence of
    words, otherwise returns None.
    """
    token = check(tokens)
    if token.type in ('symbol', 'keyword') and token.word in words:
        return token
    return None

def expectType(
    tokens: Tokens,
    *types: lang.Type,
) -> Optional[lang.Token]:
    """Returns token at cursor if its type matches given sequence of
    types, otherwise returns None.
    """
    if check(tokens).type in types:
        return check(tokens)
    return None

def matchWord(tokens: Tokens, *words: str) -> Optional[lang.Token]:
    """Returns token at cursor if its word matches given sequence of
    words, otherwise returns None.

    matchWord differs from expectWord by advancing the cursor upon a
    match.
    """
    if expectWord(tokens, *words):
        return consume(tokens)
    return None

def matchType(
    tokens: Tokens,
    *types: lang.Type,
) -> Optional[lang.Token]:
    """Returns token at cursor if its type matches given sequence of
    types, otherwise returns None.

    matchType differs from expectType by advancing the cursor upon a
    match.
    """
    if expectType(tokens, *types):
        return consume(tokens)
    return None

def matchWordElseError(
    tokens: Tokens,
    *words: str,
    msg: str,
) -> lang.Token:
    """Returns token at cursor if its word matches given sequence of
    words.

    matchWordElseError differs from matchWord by raising an error
    instead of returning None if there is no match.
    """
    token = matchWord(tokens, *words)
    if token:
        return token
    raise builtin.ParseError(msg, check(tokens))

def matchTypeElseError(
    tokens: Tokens,
    *types: lang.Type,
    msg: str,
) -> lang.Token:
    """Returns token at cursor if its type matches given sequence of
    types.

    matchTypeElseError differs from matchType by raising an error
    instead of returning None if there is no match.
    """
    token = matchType(tokens, *types)
    if token:
        return token
    raise builtin.ParseError(msg, check(tokens))

def buildExprWhileWord(
    tokens: Tokens,
    parserMap: Mapping[str, function[[Tokens, E], R]],
    rootExpr,  # type: ignore
    advance: bool = False,
) -> R:
    """
    Builds an expression tree from a starting expr, using the parser
    provided for each matching word.

    Used mainly for binary expressions
    """
    while expectWord(tokens, *parserMap.keys()):
        parser = parserMap[check(tokens).word]
        if advance: consume(tokens)
        # Leave rootExpr untyped because its type keeps changing
        rootExpr = parser(tokens, rootExpr)
    return rootExpr

def collectWhileWord(
    tokens: Tokens,
    goWords: Iterable[str],
    parse: function[[Tokens], R],
    msg: str,
) -> List[R]:
    """
    Parses an item, then continues parsing for more items if a
    matching word is found.
    Reports lists longer than MAX_ARGS items with msg.
    """
    parsed = [parse(tokens)]
    while matchWord(tokens, *goWords):
        if len(parsed) >= builtin.MAX_ARGS:
            tokens.error(msg, check(tokens))
        parsed += [parse(tokens)]
    return parsed

def makeBinary(
    expr: lang.Expr, operToken: lang.Token, right: lang.Expr
) -> lang.Binary:
    oper = builtin.OPERATORS[operToken.word]
    return lang.Binary(expr, oper, right, token=operToken)

def makeLogical(
    expr: lang.Expr, operToken: lang.Token, right: lang.Expr
) -> lang.Logical:
    return lang.Logical(expr, operToken, right)

def synchronize(tokens: Tokens) -> None:
    """Discards tokens until the start of the next statement: after a
    ';', or before a statement keyword.
    """
    while not atEnd(tokens):
        if consume(tokens).word == ';':
            return
        if expectWord(tokens, *builtin.STATEMENTS):
            return



# Precedence parsers
# The expression parsers use the recursive descent parsing technique
# to handle expression precedence.
#
# Expressions are parsed with this precedence (highest to lowest):
# 1. <name> | <literal> | <grouping> | this | super.<name>
# 2. calls | <attr>
# 3. !, - (unary)
# 4. *, /
# 5. +, -
# 6. < | <= | > | >=
# 7. == | !=
# 8. and
# 9. or
# 10. = (assignment, right-associative)

def identifier(tokens: Tokens, msg: str) -> lang.Token:
    return matchTypeElseError(tokens, 'name', msg=msg)

def grouping(tokens: Tokens) -> lang.Grouping:
    expr = expression(tokens)
    matchWordElseError(tokens, ')', msg="Expect ')' after expression.")
    return lang.Grouping(expr)

def superExpr(tokens: Tokens, keyword: lang.Token) -> lang.Super:
    matchWordElseError(tokens, '.', msg="Expect '.' after 'super'.")
    method = identifier(tokens, msg="Expect superclass method name.")
    return lang.Super(keyword, method)

def primary(tokens: Tokens) -> lang.Expr:
    """Dispatcher for highest-precedence parsing functions.
    """
    # A single value
    token = matchWord(tokens, 'true', 'false', 'nil')
    if token:
        return lang.Literal(token.value, token=token)
    token = matchType(tokens, 'NUMBER', 'STRING')
    if token:
        return lang.Literal(token.value, token=token)
    token = matchWord(tokens, 'this')
    if token:
        return lang.This(token)
    token = matchWord(tokens, 'super')
    if token:
        return superExpr(tokens, token)
    # A name
    token = matchType(tokens, 'name')
    if token:
        return lang.Variable(token)
    #  A grouping
    if matchWord(tokens, '('):
        return grouping(tokens)
    raise builtin.ParseError("Expect expression.", check(tokens))

def callExpr(tokens: Tokens, callee: lang.Expr) -> lang.Call:
    args: List[lang.Expr] = []
    if not expectWord(tokens, ')'):
        args = collectWhileWord(
            tokens, [','], expression,
            msg="Can't have more than 255 arguments.",
        )
    paren = matchWordElseError(tokens, ')', msg="Expect ')' after arguments.")
    return lang.Call(callee, paren, args)

def attrExpr(tokens: Tokens, objExpr: lang.Expr) -> lang.Get:
    name = identifier(tokens, msg="Expect property name after '.'.")
    return lang.Get(objExpr, name)

def call(tokens: Tokens) -> lang.Expr:
    expr = primary(tokens)
    return buildExprWhileWord(
        tokens,
        parserMap={'(': callExpr, '.': attrExpr},
        rootExpr=expr,
        advance=True,
    )

def unary(tokens: Tokens) -> lang.Expr:
    if expectWord(tokens, '!', '-'):
        oper = consume(tokens)
        right = unary(tokens)
        return lang.Unary(builtin.UNARY[oper.word], right, token=oper)
    return call(tokens)

def factor(tokens: Tokens) -> lang.Expr:
    # *, /
    expr = unary(tokens)
    parser = lambda tokens, expr: makeBinary(expr, consume(tokens), unary(tokens))
    expr = buildExprWhileWord(
        tokens,
        parserMap={'*': parser, '/': parser},
        rootExpr=expr,
    )
    return expr

def term(tokens: Tokens) -> lang.Expr:
    # +, -
    expr = factor(tokens)
    parser = lambda tokens, expr: makeBinary(expr, consume(tokens), factor(tokens))
    expr = buildExprWhileWord(
        tokens,
        parserMap={'+': parser, '-': parser},
        rootExpr=expr,
    )
    return expr

def comparison(tokens: Tokens) -> lang.Expr:
    # <, <=, >, >=
    expr = term(tokens)
    parser = lambda tokens, expr: makeBinary(expr, consume(tokens), term(tokens))
    expr = buildExprWhileWord(
        tokens,
        parserMap={
            '<': parser,
            '<=': parser,
            '>': parser,
            '>=': parser
        },
        rootExpr=expr,
    )
    return expr

def equality(tokens: Tokens) -> lang.Expr:
    # ==, !=
    expr = comparison(tokens)
    parser = lambda tokens, expr: makeBinary(
        expr, consume(tokens), comparison(tokens)
    )
    expr = buildExprWhileWord(
        tokens,
        parserMap={'==': parser, '!=': parser},
        rootExpr=expr,
    )
    return expr

def logicAnd(tokens: Tokens) -> lang.Expr:
    expr = equality(tokens)
    parser = lambda tokens, expr: makeLogical(
        expr, consume(tokens), equality(tokens)
    )
    return buildExprWhileWord(tokens, {'and': parser}, rootExpr=expr)

def logicOr(tokens: Tokens) -> lang.Expr:
    expr = logicAnd(tokens)
    parser = lambda tokens, expr: makeLogical(
        expr, consume(tokens), logicAnd(tokens)
    )
    return buildExprWhileWord(tokens, {'or': parser}, rootExpr=expr)

def assignment(tokens: Tokens) -> lang.Expr:
    """Parses the assignee as an ordinary expression, then rewrites it
    into an Assign or Set if '=' follows.
    """
    expr = logicOr(tokens)
    equals = matchWord(tokens, '=')
    if not equals:
        return expr
    value = assignment(tokens)
    if isinstance(expr, lang.Variable):
        return lang.Assign(expr.name, value)
    if isinstance(expr, lang.Get):
        return lang.Set(expr.object, expr.name, value)
    tokens.error("Invalid assignment target.", equals)
    return expr

def expression(tokens: Tokens) -> lang.Expr:
    return assignment(tokens)

# Statement parsers
# Statements are detected based on their first keyword.
# Statements beginning with anything else are assumed to be
# Expression statements.

def exprStmt(tokens: Tokens) -> lang.Expression:
    expr = expression(tokens)
    matchWordElseError(tokens, ';', msg="Expect ';' after expression.")
    return lang.Expression(expr)

def printStmt(tokens: Tokens) -> lang.Print:
    expr = expression(tokens)
    matchWordElseError(tokens, ';', msg="Expect ';' after value.")
    return lang.Print(expr)

def returnStmt(tokens: Tokens, keyword: lang.Token) -> lang.Return:
    expr = None
    if not expectWord(tokens, ';'):
        expr = expression(tokens)
    matchWordElseError(tokens, ';', msg="Expect ';' after return value.")
    return lang.Return(keyword, expr)

def block(tokens: Tokens) -> List[lang.Stmt]:
    """Parses declarations until the closing brace."""
    stmts = []
    while not expectWord(tokens, '}') and not atEnd(tokens):
        stmt = declaration(tokens)
        if stmt is not None:
            stmts += [stmt]
    matchWordElseError(tokens, '}', msg="Expect '}' after block.")
    return stmts

def ifStmt(tokens: Tokens) -> lang.If:
    matchWordElseError(tokens, '(', msg="Expect '(' after 'if'.")
    cond = expression(tokens)
    matchWordElseError(tokens, ')', msg="Expect ')' after if condition.")
    then = statement(tokens)
    fallback = None
    if matchWord(tokens, 'else'):
        fallback = statement(tokens)
    return lang.If(cond, then, fallback)

def whileStmt(tokens: Tokens) -> lang.While:
    matchWordElseError(tokens, '(', msg="Expect '(' after 'while'.")
    cond = expression(tokens)
    matchWordElseError(tokens, ')', msg="Expect ')' after condition.")
    body = statement(tokens)
    return lang.While(cond, body)

def forStmt(tokens: Tokens, keyword: lang.Token) -> lang.Stmt:
    """Desugars a for loop into a While, in a Block with the
    initializer.
    """
    matchWordElseError(tokens, '(', msg="Expect '(' after 'for'.")
    init: Optional[lang.Stmt]
    if matchWord(tokens, ';'):
        init = None
    elif matchWord(tokens, 'var'):
        init = varDecl(tokens)
    else:
        init = exprStmt(tokens)
    cond: lang.Expr = lang.Literal(True, token=keyword)
    if not expectWord(tokens, ';'):
        cond = expression(tokens)
    matchWordElseError(tokens, ';', msg="Expect ';' after loop condition.")
    incr = None
    if not expectWord(tokens, ')'):
        incr = expression(tokens)
    matchWordElseError(tokens, ')', msg="Expect ')' after for clauses.")
    body = statement(tokens)
    # Add increment statement
    if incr is not None:
        body = lang.Block([body, lang.Expression(incr)])
    loop: lang.Stmt = lang.While(cond, body)
    if init is not None:
        loop = lang.Block([init, loop])
    return loop

def varDecl(tokens: Tokens) -> lang.Var:
    name = identifier(tokens, msg="Expect variable name.")
    initializer = None
    if matchWord(tokens, '='):
        initializer = expression(tokens)
    matchWordElseError(
        tokens, ';', msg="Expect ';' after variable declaration."
    )
    return lang.Var(name, initializer)

def function(tokens: Tokens, kind: str) -> lang.FunctionStmt:
    """Parses a function or method; kind is used in error messages."""
    name = identifier(tokens, msg=f"Expect {kind} name.")
    matchWordElseError(tokens, '(', msg=f"Expect '(' after {kind} name.")
    params: List[lang.Token] = []
    if not expectWord(tokens, ')'):
        params = collectWhileWord(
            tokens, [','],
            lambda tokens: identifier(tokens, msg="Expect parameter name."),
            msg="Can't have more than 255 parameters.",
        )
    matchWordElseError(tokens, ')', msg="Expect ')' after parameters.")
    matchWordElseError(tokens, '{', msg=f"Expect '{{' before {kind} body.")
    stmts = block(tokens)
    return lang.FunctionStmt(name, params, stmts)

def classDecl(tokens: Tokens) -> lang.ClassStmt:
    name = identifier(tokens, msg="Expect class name.")
    superclass = None
    if matchWord(tokens, '<'):
        supername = identifier(tokens, msg="Expect superclass name.")
        superclass = lang.Variable(supername)
    matchWordElseError(tokens, '{', msg="Expect '{' before class body.")
    methods = []
    while not expectWord(tokens, '}') and not atEnd(tokens):
        methods += [function(tokens, 'method')]
    matchWordElseError(tokens, '}', msg="Expect '}' after class body.")
    return lang.ClassStmt(name, superclass, methods)

# Statement hierarchy
# Statements are parsed in this order (most to least restrictive):
# 1. CLASS | FUN | VAR -> (2)
#    declarations, may appear at top level or in blocks
# 2. FOR | IF | PRINT | RETURN | WHILE | block -> (3)
#    may be used anywhere a statement is expected
# 3. Expression statements

def declaration(tokens: Tokens) -> Optional[lang.Stmt]:
    """Parses a declaration.
    On a syntax error, reports it and synchronises; the failed
    declaration contributes no statement.
    """
    try:
        if matchWord(tokens, 'class'):
            return classDecl(tokens)
        if matchWord(tokens, 'fun'):
            return function(tokens, 'function')
        if matchWord(tokens, 'var'):
            return varDecl(tokens)
        return statement(tokens)
    except builtin.ParseError as err:
        tokens.errors += [err]
        synchronize(tokens)
        return None

def statement(tokens: Tokens) -> lang.Stmt:
    keyword = matchWord(tokens, 'for')
    if keyword:
        return forStmt(tokens, keyword)
    if matchWord(tokens, 'if'):
        return ifStmt(tokens)
    if matchWord(tokens, 'print'):
        return printStmt(tokens)
    keyword = matchWord(tokens, 'return')
    if keyword:
        return returnStmt(tokens, keyword)
    if matchWord(tokens, 'while'):
        return whileStmt(tokens)
    if matchWord(tokens, '{'):
        return lang.Block(block(tokens))
    return exprStmt(tokens)

# Main parsing loop

def parse(tokens: Iterable[lang.Token]) -> Tuple[
    List[lang.Stmt], List[builtin.ParseError]
]:
    """Select a parsing function to use, from the next token, and use it.
    """
    queue = Tokens(tokens)
    statements = []
    while not atEnd(queue):
        stmt = declaration(queue)
        if stmt is not None:
            statements += [stmt]
    logger.debug(
        "Parsed %d statements, %d errors", len(statements), len(queue.errors)
    )
    return statements, queue.errors
