from mehl.types.symbol import Symbol, UNIT, TRUE, FALSE, truth
from mehl.types.map import MehlMap
from mehl.types.binding import Binding, BindingKind
from mehl.types.scope import Scope
from mehl.types.closure import Closure

__all__ = [
    "Symbol", "UNIT", "TRUE", "FALSE", "truth",
    "MehlMap", "Binding", "BindingKind", "Scope", "Closure",
]
