"""Turn drag-and-drop gestures into section reorders.

A drop is resolved to a :class:`DragEvent` naming the dragged section and the
section it was released on. :func:`plan_drag` computes the resulting page
order with single-item move semantics. :func:`apply_drag` applies it in one
step through :func:`~pagecraft.mutations.reorder_sections`, or, when only
directional moves are available, as ``|new - old|`` single-step moves. Both
paths yield the same ``order`` numbers.

:class:`DragController` is the stateful piece the editor shell talks to: it
remembers which section is being dragged (for preview only), refuses drags of
sections that are expanded for editing, and forwards drops to the wired
handlers.

Examples
--------
>>> from pagecraft.document import ContentDocument, SectionEntry, sorted_keys
>>> doc = ContentDocument({
...     "hero": SectionEntry(type="hero", order=1),
...     "cta": SectionEntry(type="cta", order=2),
...     "richText": SectionEntry(type="richText", order=3),
... })
>>> sorted_keys(apply_drag(doc, DragEvent("richText", "hero")))
['richText', 'hero', 'cta']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ

from . import mutations
from .document.queries import sorted_keys, sorted_sections

if typ.TYPE_CHECKING:
    from .document import ContentDocument, SectionEntry
    from .mutations import Direction

logger = logging.getLogger(__name__)

T = typ.TypeVar("T")

ReorderHandler = cabc.Callable[[list[str]], typ.Any]
MoveHandler = cabc.Callable[[str, str], typ.Any]


@dc.dataclass(slots=True, frozen=True)
class DragEvent:
    """A completed drop: ``source_key`` released over ``destination_key``."""

    source_key: str
    destination_key: str | None


@dc.dataclass(slots=True, frozen=True)
class DragPlan:
    """The order a drop produces and how far the dragged section travels."""

    source_key: str
    old_index: int
    new_index: int
    order: list[str]

    @property
    def direction(self) -> Direction:
        return "down" if self.new_index > self.old_index else "up"

    @property
    def steps(self) -> int:
        return abs(self.new_index - self.old_index)


def array_move(items: cabc.Sequence[T], old_index: int, new_index: int) -> list[T]:
    """Return ``items`` with the element at ``old_index`` moved to ``new_index``.

    >>> array_move(["a", "b", "c", "d"], 3, 1)
    ['a', 'd', 'b', 'c']
    """
    result = list(items)
    result.insert(new_index, result.pop(old_index))
    return result


def plan_drag(doc: ContentDocument, event: DragEvent) -> DragPlan | None:
    """Return the reorder a drop would cause, or ``None`` for a no-op drop."""
    if event.destination_key is None or event.source_key == event.destination_key:
        return None
    keys = sorted_keys(doc)
    if event.source_key not in keys or event.destination_key not in keys:
        logger.warning(
            "Ignoring drop of %r onto %r: section not on the page",
            event.source_key,
            event.destination_key,
        )
        return None
    old_index = keys.index(event.source_key)
    new_index = keys.index(event.destination_key)
    return DragPlan(
        source_key=event.source_key,
        old_index=old_index,
        new_index=new_index,
        order=array_move(keys, old_index, new_index),
    )


def apply_drag(
    doc: ContentDocument, event: DragEvent, *, bulk: bool = True
) -> ContentDocument:
    """Apply a drop to ``doc`` and return the reordered document.

    With ``bulk`` the new order is applied in one permutation; otherwise the
    dragged section is moved one position at a time.
    """
    plan = plan_drag(doc, event)
    if plan is None:
        return doc
    if bulk:
        return mutations.reorder_sections(doc, plan.order)
    for _ in range(plan.steps):
        doc = mutations.move_section(doc, plan.source_key, plan.direction)
    return doc


class DragController:
    """Route drag gestures from the editor shell to reorder handlers.

    Parameters
    ----------
    document : Callable[[], ContentDocument]
        Returns the latest document; read at drop time so a drop always sees
        the effects of earlier edits.
    on_reorder : Callable[[list[str]], Any] or None
        Bulk permutation handler. Preferred when wired.
    on_move : Callable[[str, Direction], Any] or None
        Single-step handler used when ``on_reorder`` is not wired.
    """

    def __init__(
        self,
        document: cabc.Callable[[], ContentDocument],
        *,
        on_reorder: ReorderHandler | None = None,
        on_move: MoveHandler | None = None,
    ) -> None:
        if on_reorder is None and on_move is None:
            msg = "DragController needs an on_reorder or on_move handler."
            raise ValueError(msg)
        self._document = document
        self._on_reorder = on_reorder
        self._on_move = on_move
        self._expanded: str | None = None
        self._active: tuple[str, SectionEntry] | None = None

    @property
    def expanded_key(self) -> str | None:
        return self._expanded

    @property
    def active(self) -> tuple[str, SectionEntry] | None:
        """The section currently being dragged, for overlay previews."""
        return self._active

    def toggle_expanded(self, key: str) -> str | None:
        """Expand ``key`` for editing, or collapse it when already expanded."""
        self._expanded = None if self._expanded == key else key
        return self._expanded

    def collapse(self) -> None:
        self._expanded = None

    def can_drag(self, key: str) -> bool:
        return key != self._expanded

    def start(self, key: str) -> bool:
        """Record the start of a drag; returns False when the section is locked."""
        if not self.can_drag(key):
            logger.debug("Drag of %r refused: section is expanded", key)
            return False
        for entry_key, entry in sorted_sections(self._document()):
            if entry_key == key:
                self._active = (entry_key, entry)
                return True
        return False

    def cancel(self) -> None:
        self._active = None

    def drop(self, event: DragEvent) -> DragPlan | None:
        """Forward a completed drop to the wired handler; returns the applied plan."""
        self._active = None
        if not self.can_drag(event.source_key):
            logger.debug("Drop of %r ignored: section is expanded", event.source_key)
            return None
        plan = plan_drag(self._document(), event)
        if plan is None:
            return None
        if self._on_reorder is not None:
            self._on_reorder(plan.order)
        else:
            move = typ.cast("MoveHandler", self._on_move)
            for _ in range(plan.steps):
                move(plan.source_key, plan.direction)
        return plan


__all__ = [
    "DragController",
    "DragEvent",
    "DragPlan",
    "apply_drag",
    "array_move",
    "plan_drag",
]
