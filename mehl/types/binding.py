from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from mehl import Value
from mehl.errors import ExportLevelError


class BindingKind(Enum):
    VALUE = "value"          # let: referencing the name yields the value
    FUNCTION = "function"    # fun: referencing the name invokes the closure
    PRIMITIVE = "primitive"  # runs a primitive in the caller's scope


@dataclass(frozen=True)
class Binding:
    """A named entry of a scope.

    `export_level` counts how many enclosing `use` (or invocation) boundaries
    the binding still survives; 0 means it never leaves its scope.
    """
    name: str
    value: Value
    export_level: int = 0
    kind: BindingKind = BindingKind.VALUE
    docs: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.export_level, int) or self.export_level < 0:
            raise ExportLevelError(
                f"Export level of {self.name} must be a non-negative integer, got {self.export_level!r}"
            )

    def exported(self) -> Binding:
        """The copy that crosses one boundary."""
        return replace(self, export_level=self.export_level - 1)

    def with_level(self, export_level: int) -> Binding:
        return replace(self, export_level=export_level)
