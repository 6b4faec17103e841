"""003: create wagers table

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE wagers (
            id              UUID          PRIMARY KEY DEFAULT gen_random_uuid(),
            league_id       VARCHAR(64)   NOT NULL,
            participant_id  VARCHAR(64)   NOT NULL,
            wallet_id       UUID          NOT NULL REFERENCES wallets (id) ON DELETE CASCADE,
            week            INTEGER       NOT NULL,
            stake           BIGINT        NOT NULL,
            combined_odds   NUMERIC       NOT NULL,
            type            VARCHAR(30)   NOT NULL,
            status          VARCHAR(10)   NOT NULL DEFAULT 'open',
            legs            JSONB         NOT NULL DEFAULT '[]'::jsonb,
            payout          BIGINT,
            created_at      TIMESTAMPTZ   NOT NULL DEFAULT NOW(),
            settled_at      TIMESTAMPTZ,
            CONSTRAINT ck_wagers_stake_gt_0   CHECK (stake > 0),
            CONSTRAINT ck_wagers_week_gt_0    CHECK (week > 0),
            CONSTRAINT ck_wagers_odds_gte_1   CHECK (combined_odds >= 1),
            CONSTRAINT ck_wagers_status       CHECK (status IN ('open', 'won', 'lost')),
            CONSTRAINT ck_wagers_type CHECK (
                type IN ('match_winner', 'team_top_points', 'player_top_points', 'parlay')
            ),
            CONSTRAINT ck_wagers_settled CHECK (
                (status = 'open' AND settled_at IS NULL AND payout IS NULL)
                OR (status <> 'open' AND settled_at IS NOT NULL AND payout IS NOT NULL)
            )
        );
    """)
    op.execute("CREATE INDEX idx_wagers_league_status ON wagers (league_id, status, week);")
    op.execute(
        "CREATE INDEX idx_wagers_participant_time "
        "ON wagers (league_id, participant_id, created_at DESC);"
    )
    op.execute("COMMENT ON TABLE wagers IS 'Placed wagers; legs snapshot odds at placement time';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS wagers CASCADE;")
