"""Procedural series generators.

Both builders return a stateful Thunk meant to be invoked repeatedly, once
per point of a series (e.g. once per x-axis tick). State lives in the
closure and is private to each series.
"""

from typing import TYPE_CHECKING, Any
import math

from lazy_random.generators.base import Thunk, unwrap

if TYPE_CHECKING:
    from lazy_random.generators.random_gen import Random

# Largest absolute slope a mountain range may have between two points
STEP_MAX = 5


def mountains(rand: "Random", max_height: Any = 50, step_change: Any = 10) -> Thunk:
    """Build a series that looks like a mountain range.

    A bounded random walk: the height moves by the current slope, the slope
    drifts by up to ``step_change`` each step and is clipped to
    ``[-STEP_MAX, STEP_MAX]``. When the height leaves ``[0, max_height]`` it
    is clamped to the edge and the slope is reversed, so it bounces.

    Args:
        rand: Random instance supplying the random source
        max_height: The maximum height of the range (may be a generator,
            drawn once for the whole series)
        step_change: The amount of allowed slope change between steps (may
            be a generator, drawn once)

    Returns:
        A Thunk producing the next height on each call
    """
    max_height = unwrap(max_height)
    step_change = unwrap(step_change)

    current_height = rand.rng.random() * max_height
    slope = rand.rng.random() * STEP_MAX * 2 - STEP_MAX

    def next_height() -> float:
        nonlocal current_height, slope

        current_height += slope
        slope += rand.rng.random() * step_change * 2 - step_change

        if slope > STEP_MAX:
            slope = STEP_MAX
        if slope < -STEP_MAX:
            slope = -STEP_MAX

        if current_height > max_height:
            current_height = max_height
            slope *= -1
        if current_height < 0:
            current_height = 0
            slope *= -1

        return current_height

    return Thunk(next_height, name="mountains")


def wave(
    rand: "Random",
    count: Any,
    size: Any,
    repeat: Any = 1,
    shift: Any = 0,
    noise: Any = 0,
) -> Thunk:
    """Build a sine wave series.

    Every argument may be a generator; each is resolved once, when the
    series is built. The noise offset is also drawn once and shifts every
    point of the series by the same amount.

    Args:
        rand: Random instance supplying the random source
        count: How many data points make up ``repeat`` full periods
        size: The peak-to-trough height of the waveform
        repeat: How many times the waveform repeats over ``count`` points
        shift: Phase shift along the x-axis, in radians
        noise: Width of the vertical offset drawn for the series

    Returns:
        A Thunk producing the next point on each call
    """
    count = unwrap(count)
    size = unwrap(size)
    repeat = unwrap(repeat)
    shift = unwrap(shift)
    noise = unwrap(noise)

    amplitude = size / 2
    frequency = 2 * math.pi * repeat / count if count else math.nan
    phase = shift + math.pi / 2
    noise_offset = rand.number(-noise / 2, noise / 2)()
    step = 0

    def next_point() -> float:
        nonlocal step
        i = step
        step += 1
        return amplitude * math.sin(frequency * i - phase) + amplitude + noise_offset

    return Thunk(next_point, name="wave")
