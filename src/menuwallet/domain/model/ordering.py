"""Drag-to-reorder index handling shared by ordered lists."""

from __future__ import annotations

from menuwallet.domain.exceptions import ValidationError


def move_item(items: list, old_index: int, new_index: int) -> None:
    """Move ``items[old_index]`` so it ends up at the drop position *new_index*.

    *new_index* is the drop slot reported by a reorderable list, counted
    before the dragged item is removed. Moving an item downwards therefore
    lands one slot early unless the index is shifted back by one.
    """
    if not 0 <= old_index < len(items):
        raise ValidationError(
            f"Cannot move item at position {old_index}: list has {len(items)} items"
        )
    if not 0 <= new_index <= len(items):
        raise ValidationError(
            f"Cannot move item to position {new_index}: list has {len(items)} items"
        )
    if new_index > old_index:
        new_index -= 1
    item = items.pop(old_index)
    items.insert(new_index, item)
