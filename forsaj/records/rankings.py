"""Driver ranking: the one derived-data rule among the record collections."""

from __future__ import annotations

from forsaj.records.models import Driver, DriverCategory


def rank_drivers(drivers: list[Driver]) -> list[Driver]:
    """
    Sort by points descending and assign 1-based ranks.

    Ties keep their submitted order.
    """
    ordered = sorted(drivers, key=lambda driver: driver.points, reverse=True)
    for index, driver in enumerate(ordered, start=1):
        driver.rank = index
    return ordered


def rank_categories(categories: list[DriverCategory]) -> list[DriverCategory]:
    for category in categories:
        category.drivers = rank_drivers(category.drivers)
    return categories
