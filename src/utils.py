"""Common helpers for the stall selection engine."""
import math


class InvalidConfigurationError(ValueError):
    """Raised when a row configuration cannot be scored."""


def min_distance(position, occupied):
    """Distance from position to the nearest occupied station, None if none are occupied."""
    if not occupied:
        return None
    return min(abs(position - occ) for occ in occupied)


def has_both_neighbours(position, occupied):
    return (position - 1) in occupied and (position + 1) in occupied


def half_up_round(value):
    """Round half away from zero for non-negative scores (2.5 -> 3, not 2)."""
    return int(math.floor(value + 0.5))


def validate_configuration(station_count, occupied):
    """
    Reject configurations the engine cannot score.

    Returns the occupied positions as a frozenset. Duplicates and
    out-of-range positions are errors, never silently dropped.
    """
    if isinstance(station_count, bool) or not isinstance(station_count, int):
        raise InvalidConfigurationError(
            f"station count must be an integer, got {station_count!r}"
        )
    if station_count < 1:
        raise InvalidConfigurationError(
            f"station count must be at least 1, got {station_count}"
        )

    positions = list(occupied)
    for pos in positions:
        if isinstance(pos, bool) or not isinstance(pos, int):
            raise InvalidConfigurationError(f"occupied position must be an integer, got {pos!r}")
        if not 1 <= pos <= station_count:
            raise InvalidConfigurationError(
                f"occupied position {pos} is outside 1..{station_count}"
            )

    unique = frozenset(positions)
    if len(unique) != len(positions):
        dupes = sorted({p for p in positions if positions.count(p) > 1})
        raise InvalidConfigurationError(f"duplicate occupied positions: {dupes}")
    return unique


def prune_occupied(occupied, station_count):
    """Drop positions beyond a (shrunk) station count; sorted, de-duplicated."""
    return tuple(sorted({p for p in occupied if 1 <= p <= station_count}))


def toggle_occupied(occupied, position):
    """Occupy a free position or free an occupied one."""
    current = set(occupied)
    if position in current:
        current.remove(position)
    else:
        current.add(position)
    return tuple(sorted(current))
