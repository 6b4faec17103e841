"""SettlementService — resolve open wagers of completed weeks.

A pass reads league state, loads the league's open wagers, keeps those of
weeks strictly before the current one, fetches each such week's final
matchups once, and evaluates every wager. All transitions of a pass are then
written in ONE transaction; any storage failure rolls back the whole batch
and the next pass retries it.

Passes may overlap across processes. Each transition is a compare-and-swap
on the wager status (see WalletRepository.settle_wager), so a wager that a
concurrent pass already settled is skipped and its wallet is not touched.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.lw_common.enums import WagerStatus
from src.lw_common.errors import DataUnavailableError
from src.lw_league.domain.provider import LeagueDataProvider
from src.lw_league.infrastructure.sleeper_client import get_provider
from src.lw_settlement.application.schemas import SettlementReport
from src.lw_settlement.domain.eligibility import group_eligible_by_week
from src.lw_settlement.domain.evaluator import WeekOutcome, evaluate_legs
from src.lw_settlement.domain.verdict import Verdict
from src.lw_wallet.domain.ledger_rules import SettlementDelta, settle_lost, settle_won
from src.lw_wallet.domain.models import Wager
from src.lw_wallet.domain.repository import WalletRepositoryProtocol
from src.lw_wallet.infrastructure.persistence import WalletRepository

logger = logging.getLogger("lw.settlement")


class SettlementService:
    def __init__(
        self,
        repo: WalletRepositoryProtocol | None = None,
        provider: LeagueDataProvider | None = None,
        league_id: str | None = None,
    ) -> None:
        self._repo: WalletRepositoryProtocol = repo or WalletRepository()
        self._provider = provider
        self._league_id = league_id or settings.LEAGUE_ID

    def _get_provider(self) -> LeagueDataProvider:
        return self._provider if self._provider is not None else get_provider()

    async def run_settlement_pass(self, db: AsyncSession) -> SettlementReport:
        provider = self._get_provider()
        try:
            state = await provider.get_state()
        except DataUnavailableError as exc:
            logger.warning("Settlement pass skipped: %s", exc.message)
            return SettlementReport(skipped_reason="league state unavailable")

        report = SettlementReport(current_week=state.week)
        if not state.has_week:
            report.skipped_reason = "no current week"
            return report

        open_wagers = await self._repo.list_open_wagers(db, self._league_id)
        by_week = group_eligible_by_week(open_wagers, state.week)
        report.considered = sum(len(ws) for ws in by_week.values())
        if not by_week:
            return report

        transitions: list[tuple[Wager, str, SettlementDelta]] = []
        for week in sorted(by_week):
            try:
                result = await provider.get_matchups(week)
            except DataUnavailableError as exc:
                logger.warning("Week %d skipped this pass: %s", week, exc.message)
                report.skipped_weeks.append(week)
                continue

            outcome = WeekOutcome.from_result(result)
            for wager in by_week[week]:
                verdict = evaluate_legs(wager.legs, outcome)
                if verdict is Verdict.UNKNOWN:
                    report.deferred += 1
                elif verdict is Verdict.WIN:
                    transitions.append(
                        (wager, WagerStatus.WON.value, settle_won(wager.stake, wager.combined_odds))
                    )
                else:
                    transitions.append((wager, WagerStatus.LOST.value, settle_lost(wager.stake)))

        if transitions:
            await self._apply(db, transitions, report)

        logger.info(
            "Settlement pass: week=%s considered=%d won=%d lost=%d deferred=%d "
            "lost_races=%d skipped_weeks=%s",
            report.current_week,
            report.considered,
            report.won,
            report.lost,
            report.deferred,
            report.lost_races,
            report.skipped_weeks,
        )
        return report

    async def _apply(
        self,
        db: AsyncSession,
        transitions: list[tuple[Wager, str, SettlementDelta]],
        report: SettlementReport,
    ) -> None:
        won = lost = races = 0
        try:
            for wager, status, delta in transitions:
                applied = await self._repo.settle_wager(db, wager, status, delta)
                if not applied:
                    races += 1
                    logger.info("Wager %s already settled by another pass", wager.id)
                elif status == WagerStatus.WON:
                    won += 1
                else:
                    lost += 1
            await db.commit()
        except Exception:
            await db.rollback()
            logger.exception("Settlement batch rolled back (%d transitions)", len(transitions))
            raise
        # counters only after commit: a rolled back batch settled nothing
        report.won, report.lost, report.lost_races = won, lost, races
