"""002: create wallets table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE wallets (
            id                  UUID         PRIMARY KEY DEFAULT gen_random_uuid(),
            league_id           VARCHAR(64)  NOT NULL,
            participant_id      VARCHAR(64)  NOT NULL,
            display_name        VARCHAR(128) NOT NULL,
            balance             BIGINT       NOT NULL,
            starting_bankroll   BIGINT       NOT NULL,
            pnl                 BIGINT       NOT NULL DEFAULT 0,
            version             BIGINT       NOT NULL DEFAULT 0,
            created_at          TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_wallets_league_participant UNIQUE (league_id, participant_id),
            CONSTRAINT ck_wallets_balance_gte_0      CHECK (balance >= 0),
            CONSTRAINT ck_wallets_bankroll_gte_0     CHECK (starting_bankroll >= 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_wallets_updated_at
            BEFORE UPDATE ON wallets
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)
    op.execute("CREATE INDEX idx_wallets_league_balance ON wallets (league_id, balance DESC);")
    op.execute("COMMENT ON TABLE wallets IS 'Play-money wallet per league participant. All amounts in cents';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS wallets CASCADE;")
