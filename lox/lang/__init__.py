"""lang
This module defines the entities and types used by lox.

types.py contains definitions for attribute types used in object.py.
object.py contains the Environment used for name storage.

Token
    A token in the source code

Context
    The state threaded through evaluation

Expr, Stmt
    Nodes of the syntax tree

Builtin, Function, Class
    Callables invoked with arguments

Instance
    An object created by calling a Class
"""
from dataclasses import dataclass, field, replace
from typing import (
    Any,
    Callable as function,
    Iterable,
    List,
    MutableMapping,
    Optional,
    Sequence,
)

# Merge namespace
from .object import *
from .types import *

from .. import builtin
from . import (
    object as o,
    types as t,
)

# Plurals
Exprs = Iterable["Expr"]
Stmts = List["Stmt"]
Args = Sequence["Expr"]  # Callable args
Params = Sequence["Token"]

# Resolver side table: Expr -> number of scopes between use and
# definition. Keyed by node identity.
Locals = MutableMapping["Expr", int]


@dataclass(eq=False, frozen=True)
class Token:
    """Tokens encapsulate data needed by the parser to construct Exprs
    and Stmts.
    It also encapsulates code information for error reporting.
    """
    __slots__ = ("line", "column", "type", "word", "value")
    line: int
    column: int
    type: t.Type
    word: str
    value: Any

    def __str__(self) -> str:
        lineinfo = f"[Line {self.line} column {self.column}]"
        return f"{lineinfo} {self.type} {self.word!r}"


@dataclass
class Context:
    """Encapsulates the context in which interpreting lox is carried
    out.

    Arguments/Attributes
    --------------------
    - frame: Environment
        The innermost Environment of the code being executed
    - globals: Environment
        The outermost Environment, used for unresolved names
    - locals: Locals
        Resolver side table
    - output: function
        Receives each printed line
    """
    frame: o.Environment
    globals: o.Environment
    locals: Locals = field(default_factory=dict)
    output: function = print

    def with_frame(self, frame: o.Environment) -> "Context":
        """Returns a new Context with the new frame."""
        return replace(self, frame=frame)


class Expr:
    """Represents an expression in lox.
    An expression can be evaluated to a Value.
    An Expr must return an associated token for error-reporting
    purposes.

    Exprs are compared and hashed by identity, so that each node may
    key the resolver's side table.

    Attributes
    ----------
    token: Token
        Returns the token asociated with the expr
    """
    __slots__: Iterable[str] = tuple()

    @property
    def token(self) -> Token:
        raise NotImplementedError


@dataclass(eq=False)
class Literal(Expr):
    """A Literal represents any value coming directly from the source
    code.
    """
    __slots__ = ("value", "token")
    value: o.Value
    token: Token


@dataclass(eq=False)
class Grouping(Expr):
    """A parenthesised Expr."""
    __slots__ = ("expr", )
    expr: "Expr"

    @property
    def token(self):
        return self.expr.token


@dataclass(eq=False)
class Unary(Expr):
    """A Unary Expr represents the invocation of a unary operator with a
    single operand.
    """
    __slots__ = ("oper", "right", "token")
    oper: function
    right: "Expr"
    token: Token


@dataclass(eq=False)
class Binary(Expr):
    """A Binary Expr represents the invocation of a binary operator
    with two operands.
    """
    __slots__ = ("left", "oper", "right", "token")
    left: "Expr"
    oper: function
    right: "Expr"
    token: Token


@dataclass(eq=False)
class Logical(Expr):
    """A Logical Expr short-circuits: the right operand is only
    evaluated if the left operand does not decide the result.
    """
    __slots__ = ("left", "token", "right")
    left: "Expr"
    token: Token  # 'and' or 'or'
    right: "Expr"


@dataclass(eq=False)
class Variable(Expr):
    """A Variable Expr reads the value bound to a name."""
    __slots__ = ("name", )
    name: Token

    @property
    def token(self):
        return self.name


@dataclass(eq=False)
class Assign(Expr):
    """An Assign Expr represents an assignment operation.
    The Expr's evaluated value is bound to the name.
    """
    __slots__ = ("name", "expr")
    name: Token
    expr: "Expr"

    @property
    def token(self):
        return self.name


@dataclass(eq=False)
class Call(Expr):
    """A Call Expr represents the invocation of a Callable with
    arguments.
    The closing parenthesis is kept for error reporting.
    """
    __slots__ = ("callee", "paren", "args")
    callee: "Expr"
    paren: Token
    args: Args

    @property
    def token(self):
        return self.paren


@dataclass(eq=False)
class Get(Expr):
    """A Get Expr reads a property from an Instance."""
    __slots__ = ("object", "name")
    object: "Expr"
    name: Token

    @property
    def token(self):
        return self.name


@dataclass(eq=False)
class Set(Expr):
    """A Set Expr writes a field of an Instance."""
    __slots__ = ("object", "name", "expr")
    object: "Expr"
    name: Token
    expr: "Expr"

    @property
    def token(self):
        return self.name


@dataclass(eq=False)
class This(Expr):
    __slots__ = ("keyword", )
    keyword: Token

    @property
    def token(self):
        return self.keyword


@dataclass(eq=False)
class Super(Expr):
    """A Super Expr looks up a method on the enclosing class's
    superclass.
    """
    __slots__ = ("keyword", "method")
    keyword: Token
    method: Token

    @property
    def token(self):
        return self.keyword


class Stmt:
    """Represents a statement in lox.
    A statement usually has one or more expressions, and represents an
    effect: console output, or environment mutation.
    """
    __slots__: Iterable[str] = tuple()


@dataclass(eq=False)
class Expression(Stmt):
    """Expression evaluates an Expr for its side effects."""
    __slots__ = ("expr", )
    expr: "Expr"


@dataclass(eq=False)
class Print(Stmt):
    """Print encapsulates a value to be displayed in a
    terminal/console.
    """
    __slots__ = ("expr", )
    expr: "Expr"


@dataclass(eq=False)
class Var(Stmt):
    """Var declares a name, with an optional initializer."""
    __slots__ = ("name", "initializer")
    name: Token
    initializer: Optional["Expr"]


@dataclass(eq=False)
class Block(Stmt):
    """Block executes its statements in a new scope."""
    __slots__ = ("stmts", )
    stmts: Stmts


@dataclass(eq=False)
class If(Stmt):
    __slots__ = ("cond", "then", "fallback")
    cond: "Expr"
    then: "Stmt"
    fallback: Optional["Stmt"]


@dataclass(eq=False)
class While(Stmt):
    """While represents a pre-condition loop, executed only while the
    cond evaluates to a truthy value.
    """
    __slots__ = ("cond", "body")
    cond: "Expr"
    body: "Stmt"


@dataclass(eq=False)
class FunctionStmt(Stmt):
    """FunctionStmt encapsulates a declared function or method."""
    __slots__ = ("name", "params", "stmts")
    name: Token
    params: Params
    stmts: Stmts


@dataclass(eq=False)
class Return(Stmt):
    """Return encapsulates the value to be returned from a Function."""
    __slots__ = ("keyword", "expr")
    keyword: Token
    expr: Optional["Expr"]


@dataclass(eq=False)
class ClassStmt(Stmt):
    """ClassStmt encapsulates a declared class and its methods."""
    __slots__ = ("name", "superclass", "methods")
    name: Token
    superclass: Optional[Variable]
    methods: Sequence[FunctionStmt]


class Callable:
    """Base class for Builtin, Function and Class.
    Represents a Callable in lox.

    Methods
    -------
    - arity()
        The number of arguments the callable expects
    """
    __slots__: Iterable[str] = tuple()

    def arity(self) -> int:
        raise NotImplementedError


@dataclass(eq=False)
class Builtin(Callable):
    """Represents a native function in lox.

    Attributes
    ----------
    - name
        the name the function is installed under
    - params
        the number of arguments the function takes
    - func
        the Python function to call when invoked
    """
    __slots__ = ("name", "params", "func")
    name: t.NameKey
    params: int
    func: function

    def arity(self) -> int:
        return self.params

    def __str__(self) -> str:
        return "<native fn>"


@dataclass(eq=False)
class Function(Callable):
    """Functions execute their statements in a new Environment chained
    to the closure they were declared in.

    Attributes
    ----------
    - declaration
        The FunctionStmt the function was created from
    - closure
        The Environment active when the function was declared
    - isInitializer
        True for a class's init() method, which always returns this
    """
    __slots__ = ("declaration", "closure", "isInitializer")
    declaration: FunctionStmt
    closure: o.Environment
    isInitializer: bool

    def arity(self) -> int:
        return len(self.declaration.params)

    def bind(self, instance: "Instance") -> "Function":
        """Returns a new Function whose closure has this bound to
        instance.
        """
        env = o.Environment(self.closure)
        env.define('this', instance)
        return Function(self.declaration, env, self.isInitializer)

    def __str__(self) -> str:
        return f"<fn {self.declaration.name.word}>"


@dataclass(eq=False)
class Class(Callable):
    """Calling a Class creates an Instance of it.

    Attributes
    ----------
    - name
        Name of the class
    - superclass
        The Class this class inherits methods from, if any
    - methods
        A mapping of method names to Functions
    """
    __slots__ = ("name", "superclass", "methods")
    name: t.NameKey
    superclass: Optional["Class"]
    methods: MutableMapping[t.NameKey, Function]

    def findMethod(self, name: t.NameKey) -> Optional[Function]:
        """Looks up name in this class, then up the superclass chain.
        Returns None if no class has the method.
        """
        if name in self.methods:
            return self.methods[name]
        if self.superclass:
            return self.superclass.findMethod(name)
        return None

    def arity(self) -> int:
        initializer = self.findMethod('init')
        if initializer is None:
            return 0
        return initializer.arity()

    def __str__(self) -> str:
        return self.name


class Instance:
    """An object created by calling a Class.
    Fields are created on first assignment.

    Methods
    -------
    get(token)
        retrieves a field, or a method bound to this instance
    set(token, value)
        assigns value to a field
    """
    __slots__ = ("klass", "fields")

    def __init__(self, klass: Class) -> None:
        self.klass = klass
        self.fields: o.NameMap = {}

    def __repr__(self) -> str:
        return f"<{self.klass.name} instance: {self.fields!r}>"

    def __str__(self) -> str:
        return f"{self.klass.name} instance"

    def get(self, token: Token) -> o.Value:
        if token.word in self.fields:
            return self.fields[token.word]
        method = self.klass.findMethod(token.word)
        if method is not None:
            return method.bind(self)
        raise builtin.RuntimeError(
            f"Undefined property '{token.word}'.", token
        )

    def set(self, token: Token, value: o.Value) -> None:
        self.fields[token.word] = value
