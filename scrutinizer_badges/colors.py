"""
Color scales mapping metric values onto badge colors.
"""

from typing import Callable, Sequence

ColorScale = Callable[[float], str]

DEFAULT_COLORS = {
    1: ("red", "brightgreen"),
    2: ("red", "yellow", "brightgreen"),
    3: ("red", "yellow", "green", "brightgreen"),
    4: ("red", "yellow", "yellowgreen", "green", "brightgreen"),
    5: ("red", "orange", "yellow", "yellowgreen", "green", "brightgreen"),
}


def color_scale(
    steps: Sequence[float],
    colors: Sequence[str] | None = None,
    reversed: bool = False,
) -> ColorScale:
    """
    Build a function mapping a value to one of n + 1 colors for n steps.

    A value below ``steps[0]`` gets the first color, a value at or above
    ``steps[-1]`` gets the last one.

    Args:
        steps: Ascending thresholds.
        colors: Color names, one more than there are steps. Defaults to a
            red-to-brightgreen palette sized to the number of steps.
        reversed: Read the colors from last to first.

    Raises:
        ValueError: If no default palette exists for the step count, or the
            number of colors does not match the number of steps.
    """
    steps = tuple(steps)
    if colors is None:
        if len(steps) not in DEFAULT_COLORS:
            raise ValueError(f"No default colors for {len(steps)} steps.")
        colors = DEFAULT_COLORS[len(steps)]
    colors = tuple(colors)
    if len(steps) != len(colors) - 1:
        raise ValueError("There should be n + 1 colors for n steps.")
    if reversed:
        colors = colors[::-1]

    def scale(value: float) -> str:
        for index, step in enumerate(steps):
            if value < step:
                return colors[index]
        return colors[-1]

    return scale


QUALITY_SCALE = color_scale(
    [4, 5, 7, 9],
    ["red", "orange", "yellow", "green", "brightgreen"],
)

# < 40% red, 40-60% (inclusive) yellow, > 60% brightgreen
COVERAGE_SCALE = color_scale([40, 61], ["red", "yellow", "brightgreen"])
