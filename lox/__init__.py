"""The main entry point to the lox package.

Lox
    Interprets code from a file or string
"""
import os
import sys
from typing import Iterable, List, MutableMapping
from typing import TypedDict, Callable as function

import logging

from lox import builtin, lang
import lox.system as system

from lox import scanner, parser, printer
from lox.resolver import Resolver
from lox.interpreter import Interpreter

logger = logging.getLogger(__name__)



class Result(TypedDict):
    """The metadata dict returned from a run"""
    lines: List[str]  # list of code lines as strings
    env: lang.Environment  # The global environment used by the interpreter
    errors: List[builtin.LoxError]  # Errors reported while running


__version__ = '0.1.0'
VERSION = f"Lox {__version__}"
HELP = """usage: lox [option] ... [file]
Options and arguments:
-h     : print this help message and exit (also --help)
--version : print the version and exit
--ast  : print the syntax tree of file instead of running it
file   : program read from script file
         (starts an interactive prompt if omitted)
""".strip()

# Exit codes
# https://gist.github.com/bojanrajkovic/831993
EX_USAGE = 64  # command line usage error
EX_DATAERR = 65  # data format error
EX_NOINPUT = 66  # cannot open input
EX_SOFTWARE = 70  # internal software error

# Each Lox call nests about ten Python frames
RECURSION_LIMIT = 10000


def logException(msg="Unexpected error has occurred") -> builtin.InternalError:
    """Helper function that logs unexpected (Python) exceptions.
    If logException is invoked, it means Lox has encountered an error
    it should not have. If Lox is bug-free, logException should never
    be invoked at all.

    Returns an InternalError to be reported in place of the exception.
    """
    # https://docs.python.org/3.8/library/logging.html#logging.Logger.exception
    logger.exception(msg)
    return builtin.InternalError(msg, None)

def report(err: builtin.LoxError) -> None:
    """The default error handler; writes the error report to stderr."""
    print(err.report(), file=sys.stderr)


class Lox:
    """A Lox interpreter.

    Lox encapsulates the pipelines of the code interpreting process:
    1. Scanning
       The code string is tokenised into a sequence of tokens.
    2. Parsing
       Tokens are parsed into a sequence of Statements, which can in turn
       contain Expressions.
    3. Resolving
       Name references in Expressions are resolved to the number of
       scopes between them and their declarations.
    4. Interpreting
       Expressions are evaluated to retrieve values, and statements are
       executed to invoke their effects.

    Errors in a stage stop the stages after it. The global environment
    and resolved names persist across runs, so that a Lox instance can
    back an interactive session.
    """

    def __init__(self) -> None:
        if sys.getrecursionlimit() < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)
        self.env = system.initGlobals(lang.Environment())
        self.context = lang.Context(frame=self.env, globals=self.env)
        self.handlers: MutableMapping[str, function] = {
            'output': print,
            'error': report,
        }

    def registerHandlers(self, **kwargs: function) -> None:
        """Lox may register custom handlers e.g. for testing purposes.
        Handlers are registered using a str key.

        The following handlers are currently supported:
        - output(line)
        - error(err)
        """
        for key, handler in kwargs.items():
            if key not in self.handlers:
                raise KeyError(f"Invalid handler key {repr(key)}")
            self.handlers[key] = handler

    def reportErrors(self, result: Result,
                     errors: Iterable[builtin.LoxError]) -> None:
        for err in errors:
            result['errors'] += [err]
            self.handlers['error'](err)

    def runFile(self, srcfile: str) -> Result:
        """Executes code from the file with the provided srcfile path.
        """
        with open(srcfile, 'r') as f:
            src = f.read()
        return self.run(src)

    def run(self, src: str) -> Result:
        """Executes code represented by the src string."""
        result: Result = {
            'lines': [],
            'env': self.env,
            'errors': [],
        }

        # Parsing
        try:
            tokens, lines, scanErrors = scanner.scan(src)
            result['lines'] += lines
            statements, parseErrors = parser.parse(tokens)
        except Exception:
            self.reportErrors(result, [logException()])
            return result
        self.reportErrors(result, scanErrors + parseErrors)
        if result['errors']:
            return result

        # Resolving
        resolver = Resolver(self.context.locals, statements)
        try:
            logicErrors = resolver.inspect()
        except Exception:
            self.reportErrors(result, [logException()])
            return result
        self.reportErrors(result, logicErrors)
        if result['errors']:
            return result

        # Interpreting
        interpreter = Interpreter(self.context, statements)
        interpreter.registerOutputHandler(self.handlers['output'])
        try:
            runtimeError = interpreter.interpret()
        except Exception:
            self.reportErrors(result, [logException()])
            return result
        if runtimeError:
            self.reportErrors(result, [runtimeError])
        return result

    def parseOnly(self, src: str) -> Result:
        """Scans and parses src, and outputs the syntax tree of each
        statement instead of executing it.
        """
        result: Result = {'lines': [], 'env': self.env, 'errors': []}
        tokens, lines, scanErrors = scanner.scan(src)
        result['lines'] += lines
        statements, parseErrors = parser.parse(tokens)
        self.reportErrors(result, scanErrors + parseErrors)
        if not result['errors'] and statements:
            self.handlers['output'](printer.printStmts(statements))
        return result



def exitCode(result: Result) -> int:
    """Maps the errors of a run to a process exit code."""
    for err in result['errors']:
        if type(err) in (builtin.ParseError, builtin.LogicError):
            return EX_DATAERR
    if result['errors']:
        return EX_SOFTWARE
    return 0


def repl(lox: Lox) -> None:
    """Runs lines from stdin until EOF. Errors in a line are reported
    and do not end the session.
    """
    print(VERSION)
    while True:
        try:
            line = input('> ')
        except EOFError:
            print()
            break
        lox.run(line)


def main():
    """This is the entry point which shell scripts should invoke.

    It encapsulates the following invocation modes:
    1. REPL mode
    2. Script mode
    3. Syntax tree mode (--ast)
    """
    logging.basicConfig(
        filename='lox.log',
        filemode='w',
        format='%(name)s - %(levelname)s - %(message)s',
    )
    args = sys.argv[1:]

    # REPL mode
    if not args:
        repl(Lox())
        sys.exit(0)

    # Argument handling
    showAst = False
    if args[0] in ('-h', '--help'):
        print(HELP)
        sys.exit(0)
    elif args[0] == '--version':
        print(VERSION)
        sys.exit(0)
    elif args[0] == '--ast':
        showAst = True
        args = args[1:]
    if len(args) != 1 or args[0].startswith('-'):
        if args and args[0].startswith('-'):
            print(f"Unknown option: {args[0]}")
        print("Try `lox -h' for more information.")
        sys.exit(EX_USAGE)

    # File checks
    srcfile = args[0]
    if not os.path.isfile(srcfile):
        print(f"lox: can't open file {srcfile!r}")
        sys.exit(EX_NOINPUT)
    try:
        with open(srcfile, 'r') as f:
            src = f.read()
    except OSError as error:
        print(f"lox: can't open file {srcfile!r}:")
        print(error)
        sys.exit(EX_NOINPUT)

    # Script mode
    lox = Lox()
    if showAst:
        result = lox.parseOnly(src)
    else:
        result = lox.run(src)
    sys.exit(exitCode(result))
