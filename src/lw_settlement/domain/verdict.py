"""Three-valued leg and wager outcomes.

UNKNOWN is a deferral signal: the data needed to decide is not there yet and
the wager must stay open for a later pass.
"""

from collections.abc import Iterable
from enum import Enum


class Verdict(str, Enum):
    WIN = "WIN"
    LOSE = "LOSE"
    UNKNOWN = "UNKNOWN"


def fold_verdicts(verdicts: Iterable[Verdict]) -> Verdict:
    """Combine leg verdicts into a wager verdict.

    Consumes the iterable lazily and stops at the first verdict that is not
    WIN, so legs after a LOSE or UNKNOWN are never evaluated. An empty
    iterable folds to WIN.
    """
    for verdict in verdicts:
        if verdict is not Verdict.WIN:
            return verdict
    return Verdict.WIN
