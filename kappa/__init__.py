# Core type aliases for Kappa's data model.
# Code and data share one representation: cons cells (Pair), interned Symbols,
# Python ints, the Nil singleton and the callable values (Builtin, Closure, Macro).
#
# Naming guidance:
# - SExpression: Use in reader/special-form code to denote syntactic forms (code-as-data).
# - LispValue:  Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any` and are interchangeable.

from typing import Any

# Runtime value alias
LispValue = Any
# Forms alias (often used interchangeably in this codebase)
SExpression = LispValue

__version__ = "0.3.0"
