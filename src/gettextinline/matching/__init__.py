"""Call pattern matching and validation.

Submodules:
    shapes   - Argument layouts per CallShape
    matcher  - CallMatcher (validate + extract) and plural factory validation
    dispatch - FunctionNames and the collapsed DispatchTable

Python 3.13+.
"""

from gettextinline.matching.dispatch import DispatchTable, FunctionNames, build_dispatch_table
from gettextinline.matching.matcher import CallMatcher, StaticValue, validate_plural_factory
from gettextinline.matching.shapes import LAYOUTS, describe_arity

__all__ = [
    "LAYOUTS",
    "CallMatcher",
    "DispatchTable",
    "FunctionNames",
    "StaticValue",
    "build_dispatch_table",
    "describe_arity",
    "validate_plural_factory",
]
