"""Export propagation across scope boundaries.

Whenever a scope created for a block (closure invocation, `use`, a `match`
arm) is finished, the bindings it declared with an export level of at least
one are copied into the scope the block was run from, one level lower.
Level-0 bindings stay behind.
"""

from __future__ import annotations

import logging
from typing import Iterable

from mehl.types.binding import Binding
from mehl.types.scope import Scope

logger = logging.getLogger(__name__)


def exported_bindings(bindings: Iterable[Binding]) -> list[Binding]:
    """The bindings that cross one boundary, already decremented, in order."""
    exported = []
    for binding in bindings:
        if binding.export_level >= 1:
            exported.append(binding.exported())
        else:
            logger.debug("Not exporting %s.", binding.name)
    return exported


def propagate_exports(source: Scope, destination: Scope) -> list[Binding]:
    """Copy the exports of `source` into `destination`; later bindings win."""
    exported = exported_bindings(source)
    for binding in exported:
        destination.bind(binding)
    if exported:
        logger.debug(
            "Exported %s.",
            ", ".join(f"{b.name}@{b.export_level}" for b in exported),
        )
    return exported
