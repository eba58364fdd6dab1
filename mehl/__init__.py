# Core type aliases for Mehl's data model.
# Values are plain Python objects wherever one fits: int for numbers, str for
# strings, tuple for tuples. Symbols, maps and closures have their own types
# under mehl.types.
#
# Naming guidance:
# - Form:  a node produced by the reader (code-as-data, not yet evaluated).
# - Body:  a sequence of forms, run left to right against the current value.
# - Value: anything an operation can produce as the next current value.

from typing import Any, Sequence

Value = Any
Form = Any
Body = Sequence[Form]

__version__ = "0.1.0"
