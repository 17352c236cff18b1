"""Redundancy removal for lists of free rectangles."""

from typing import Iterable, List

from tilepack.core.rect import Rect


def merge_rects(rects: Iterable[Rect]) -> List[Rect]:
    """
    Remove every rect that is contained in another rect of the list.

    Each rect is compared with the rects after it.  When one contains the
    other, the contained one is dropped and the scan carries on from the
    same position.  The same object appearing twice is never treated as
    redundant with itself; two distinct but identical rects collapse into a
    single entry.

    Args:
        rects: Free rectangles, in any order.

    Returns:
        A new list in which no rect is contained in another.  The input is
        left untouched.
    """
    rects = list(rects)

    i = 0
    while i < len(rects):
        rect = rects[i]
        j = i
        rect_removed = False
        while j < len(rects):
            compare = rects[j]
            if compare is rect:
                j += 1
            elif compare.contains(rect):
                del rects[i]
                rect_removed = True
                break
            elif rect.contains(compare):
                del rects[j]
            else:
                j += 1
        if not rect_removed:
            i += 1

    return rects
