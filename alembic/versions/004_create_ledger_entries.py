"""004: create ledger_entries table

Revision ID: 004
Revises: 003
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE ledger_entries (
            id              BIGSERIAL       PRIMARY KEY,
            wallet_id       UUID            NOT NULL REFERENCES wallets (id) ON DELETE CASCADE,
            entry_type      VARCHAR(30)     NOT NULL,
            amount          BIGINT          NOT NULL,
            balance_after   BIGINT          NOT NULL,
            wager_id        UUID,
            description     VARCHAR(500),
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_ledger_entry_type CHECK (
                entry_type IN ('WALLET_GRANT', 'WAGER_STAKE', 'WAGER_PAYOUT')
            ),
            CONSTRAINT ck_ledger_balance_gte_0 CHECK (balance_after >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_ledger_wallet_id ON ledger_entries (wallet_id, id DESC);")
    op.execute("""
        CREATE INDEX idx_ledger_wager
        ON ledger_entries (wager_id)
        WHERE wager_id IS NOT NULL;
    """)
    op.execute("COMMENT ON TABLE ledger_entries IS 'Wallet ledger, append-only. All amounts in cents';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS ledger_entries CASCADE;")
