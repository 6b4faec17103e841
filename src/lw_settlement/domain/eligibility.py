"""Which open wagers a settlement pass may look at."""

from src.lw_common.enums import WagerStatus
from src.lw_wallet.domain.models import Wager


def group_eligible_by_week(wagers: list[Wager], current_week: int | None) -> dict[int, list[Wager]]:
    """Open wagers for weeks strictly before ``current_week``, grouped by week.

    A missing or non-positive current week (offseason) makes nothing eligible.
    """
    if current_week is None or current_week <= 0:
        return {}
    by_week: dict[int, list[Wager]] = {}
    for wager in wagers:
        if wager.status != WagerStatus.OPEN or wager.week >= current_week:
            continue
        by_week.setdefault(wager.week, []).append(wager)
    return by_week
