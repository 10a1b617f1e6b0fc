"""SQL Functions — dialect-specific spellings of portable expressions.

Invariants:
    - substring_position(haystack, needle) is 1-based, 0 when absent
    - Comparison is the store's exact byte/char match; no case folding,
      no wildcard characters
"""

from sqlalchemy import Integer
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement


class substring_position(FunctionElement):
    """Position of needle inside haystack."""
    type = Integer()
    name = "substring_position"
    inherit_cache = True


@compiles(substring_position)
def _compile_instr(element, compiler, **kw):
    return f"instr({compiler.process(element.clauses, **kw)})"


@compiles(substring_position, "postgresql")
def _compile_strpos(element, compiler, **kw):
    return f"strpos({compiler.process(element.clauses, **kw)})"
