"""
Two-pointer walks over a pair of sorted lists.

Both lists must already be sorted consistently with `comparator` and should not
contain repeated keys. `comparator(item1, item2)` returns a negative number, zero
or a positive number, like the `cmp` functions of old.
"""
from typing import Any, Callable, Optional, Sequence

Comparator = Callable[[Any, Any], int]


def compare_keys(key1, key2) -> int:
    """Three-way comparison of two keys."""
    return (key1 > key2) - (key1 < key2)


def by_name(item1, item2) -> int:
    """Comparator ordering any two items that expose a `name` attribute."""
    return compare_keys(item1.name, item2.name)


def traverse(
    list1: Sequence,
    list2: Sequence,
    comparator: Comparator,
    on_equal: Optional[Callable[[Any, Any], None]] = None,
    on_extra_in_list1: Optional[Callable[[Any], None]] = None,
    on_extra_in_list2: Optional[Callable[[Any], None]] = None,
    stop_when_exhausted: bool = False,
) -> None:
    """
    Walk both lists in step and report every item to the matching handler.

    Args:
        list1: First sorted list.
        list2: Second sorted list.
        comparator: Three-way comparison between an item of list1 and one of list2.
        on_equal: Called with both items when the comparator says they are equal.
        on_extra_in_list1: Called with every item of list1 that has no match in list2.
        on_extra_in_list2: Called with every item of list2 that has no match in list1.
        stop_when_exhausted: Stop as soon as either list runs out instead of
            reporting the leftovers of the other one.
    """
    index1 = 0
    index2 = 0
    # Worst case (no common items) visits every item once
    for _ in range(len(list1) + len(list2)):
        has_item1 = index1 < len(list1)
        has_item2 = index2 < len(list2)
        if not has_item1 and not has_item2:
            break
        if stop_when_exhausted and not (has_item1 and has_item2):
            break

        if has_item1 and not has_item2:
            ordering = -1
        elif has_item2 and not has_item1:
            ordering = 1
        else:
            ordering = comparator(list1[index1], list2[index2])

        if ordering < 0:
            if on_extra_in_list1 is not None:
                on_extra_in_list1(list1[index1])
            index1 += 1
        elif ordering > 0:
            if on_extra_in_list2 is not None:
                on_extra_in_list2(list2[index2])
            index2 += 1
        else:
            if on_equal is not None:
                on_equal(list1[index1], list2[index2])
            index1 += 1
            index2 += 1


def compare(
    list1: Sequence,
    list2: Sequence,
    comparator: Comparator,
    on_equal: Callable[[Any, Any], None],
) -> None:
    """Call `on_equal` for every pair of items judged equal. Stops once either list is used up."""
    traverse(list1, list2, comparator, on_equal=on_equal, stop_when_exhausted=True)


def diff(
    list1: Sequence,
    list2: Sequence,
    comparator: Comparator,
    on_extra_in_list1: Callable[[Any], None],
    on_extra_in_list2: Callable[[Any], None],
) -> None:
    """Report the items found in only one of the lists. Equal items are skipped."""
    traverse(
        list1,
        list2,
        comparator,
        on_extra_in_list1=on_extra_in_list1,
        on_extra_in_list2=on_extra_in_list2,
    )
