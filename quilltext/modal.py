"""Holds at most one modal view at a time."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol


class ModalView(Protocol):
    def subscribe_dismiss(self, callback: Callable[[], None]) -> Callable[[], None]:
        ...


@dataclass
class _ActiveModal:
    view: Any
    builder: Callable[[], Any]
    previous_focus: Any
    unsubscribe: Callable[[], None]


def _view_type(builder: Callable[[], Any]) -> Optional[type]:
    while isinstance(builder, functools.partial):
        builder = builder.func
    return builder if isinstance(builder, type) else None


class ModalManager:
    """Shows, replaces and dismisses a single modal view.

    ``current_focus`` reports what has focus when a modal opens, and
    ``restore_focus`` gives it back when the modal closes.
    """

    def __init__(
        self,
        current_focus: Optional[Callable[[], Any]] = None,
        restore_focus: Optional[Callable[[Any], None]] = None,
    ) -> None:
        self._current_focus = current_focus
        self._restore_focus = restore_focus
        self._active: Optional[_ActiveModal] = None

    @property
    def active_view(self) -> Any:
        return self._active.view if self._active is not None else None

    def toggle_modal(self, build_view: Callable[[], ModalView]) -> Optional[ModalView]:
        """Close the modal if it is the same kind, otherwise open a new one.

        Returns the newly opened view, or None when the call closed a modal.
        """
        active = self._active
        if active is not None:
            view_type = _view_type(build_view)
            is_close = active.builder is build_view or (
                view_type is not None and isinstance(active.view, view_type)
            )
            did_close = self.hide_modal()
            if is_close or not did_close:
                return None

        view = build_view()
        self._show_modal(view, build_view)
        return view

    def _show_modal(self, view: ModalView, builder: Callable[[], ModalView]) -> None:
        previous_focus = self._current_focus() if self._current_focus is not None else None
        unsubscribe = view.subscribe_dismiss(self.hide_modal)
        self._active = _ActiveModal(view, builder, previous_focus, unsubscribe)

    def hide_modal(self) -> bool:
        """Close the active modal; False when there was none."""
        active = self._active
        if active is None:
            return False
        self._active = None
        active.unsubscribe()
        if active.previous_focus is not None and self._restore_focus is not None:
            self._restore_focus(active.previous_focus)
        return True