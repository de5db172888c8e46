"""Reusable test data: Cartesian products and edge-case value sets.

The Cartesian product expands a handful of value axes into an exhaustive
case matrix, which plugs straight into ``pytest.mark.parametrize``:

Example:
    >>> from testtoolkit.data import cartesian, non_string_values
    >>>
    >>> cartesian([1, 2, 3], ["a", "b"])
    [[1, 'a'], [1, 'b'], [2, 'a'], [2, 'b'], [3, 'a'], [3, 'b']]
    >>>
    >>> @pytest.mark.parametrize("value, strict", cartesian(non_string_values(), [True, False]))
    ... def test_rejects_non_strings(value, strict):
    ...     ...

The value sets are functions rather than constants: every call returns a new
list, so a test that mutates one of the containers inside a set cannot leak
into another test.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Sized
from typing import Any

from testtoolkit.errors import ToolkitError

logger = logging.getLogger(__name__)


def product_size(*axes: Iterable[Any]) -> int:
    """Number of combinations ``cartesian`` returns for the same axes.

    The empty product is 1, and any empty axis makes the result 0. Axes
    without a length, such as iterators, are consumed to count them.
    """
    result = 1
    for axis in axes:
        result *= len(axis) if isinstance(axis, Sized) else sum(1 for _ in axis)
    return result


def cartesian(*axes: Iterable[Any]) -> list[list[Any]]:
    """Generate the Cartesian product of the given axes.

    Each combination holds one element from every axis, in the order the
    axes were supplied. The last axis varies fastest, so ``cartesian([1, 2],
    ["x", "y"])`` returns ``[[1, "x"], [1, "y"], [2, "x"], [2, "y"]]``.

    With no axes the result is a single empty combination. With any empty
    axis the result is empty. Duplicate values in an axis produce duplicate
    combinations.

    Args:
        *axes: Finite iterables of candidate values. Each is read once.

    Returns:
        A new list of new lists. Elements are shared with the input, not
        copied.
    """
    pools = [tuple(axis) for axis in axes]

    size = product_size(*pools)
    logger.debug(f"Building Cartesian product of {len(pools)} axes ({size} combinations)")
    _warn_if_large(size)

    return [list(combination) for combination in itertools.product(*pools)]


def _warn_if_large(size: int) -> None:
    from testtoolkit.config import get_config

    try:
        threshold = get_config().product_warning_threshold
    except ToolkitError as e:
        logger.debug(f"Skipping size check, configuration is invalid: {e}")
        return
    if threshold and size > threshold:
        logger.warning(
            f"Cartesian product has {size} combinations "
            f"(product_warning_threshold={threshold}); "
            f"consider fewer axes or smaller value sets"
        )


# ============================================================
# Edge-case value sets
# ============================================================


def non_string_values() -> list[Any]:
    """Values that are not ``str``."""
    return [None, True, False, 0, 42, -1, 3.14, b"bytes", [], ["a"], {}, {"a": 1}, (), object()]


def non_integer_values() -> list[Any]:
    """Values that are not ``int``.

    ``True`` and ``False`` are included: although ``bool`` subclasses
    ``int``, strict integer validation is expected to reject them.
    """
    return [None, True, False, 3.14, float("nan"), "42", "", b"42", [], [1], {}, (), object()]


def non_float_values() -> list[Any]:
    """Values that are not ``float``."""
    return [None, True, False, 42, "3.14", "", [], [1.0], {}, (), object()]


def non_boolean_values() -> list[Any]:
    """Values that are not ``bool``, including common look-alikes."""
    return [None, 0, 1, 0.0, 1.0, "true", "false", "", "0", "1", [], {}, object()]


def non_list_values() -> list[Any]:
    """Values that are not ``list``."""
    return [None, True, 42, 3.14, "abc", "", b"abc", (), (1, 2), {}, {1, 2}, object()]


def non_dict_values() -> list[Any]:
    """Values that are not ``dict``."""
    return [None, True, 42, 3.14, "abc", "", [], [("a", 1)], (), object()]


def boolean_values() -> list[bool]:
    return [True, False]


def boolean_like_values() -> list[Any]:
    """Strings and numbers that are commonly parsed as booleans."""
    return ["true", "false", "True", "False", "1", "0", "yes", "no", "on", "off", 1, 0]
