# src/tasklog/tasks/task_editing.py

from __future__ import annotations

EDIT_CANCELLED = None


def resolve_edit(current: str, entered: str | None) -> str | None:
    """
    Decide the outcome of an in-place edit of ``current``.

    Returns the confirmed new description, or EDIT_CANCELLED (None) when the
    user backed out (entered is None) or tried to confirm blank text.
    The confirmed text is kept as typed, minus a trailing newline.
    """
    if entered is None:
        return EDIT_CANCELLED
    text = entered.rstrip("\r\n")
    if not text.strip():
        return EDIT_CANCELLED
    return text
