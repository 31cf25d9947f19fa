"""system
Sets up built-in functions for lox.

initGlobals(env)
    Defines native functions in the global Environment.
"""

import time
from typing import (
    Callable as function,
    List,
    Tuple,
)

from . import lang



def clock() -> float:
    """Returns the seconds elapsed since the epoch, as a number."""
    return time.time()



# (function, number of params)
funcParams: List[Tuple[function, int]] = [
    (clock, 0),
]

def initGlobals(env: lang.Environment) -> lang.Environment:
    """
    Define all native functions in env, which should be the global
    Environment, before any user code runs.
    """
    for func, params in funcParams:
        name = func.__name__
        env.define(name, lang.Builtin(name, params, func))
    return env
