"""001: extensions and shared trigger functions

Revision ID: 001
Revises:
Create Date: 2026-10-19

gen_random_uuid() (pgcrypto) backs every UUID primary key; fn_touch_updated_at
keeps wallets.updated_at current on each balance change.
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TOUCH_UPDATED_AT = """
CREATE OR REPLACE FUNCTION fn_touch_updated_at()
RETURNS TRIGGER LANGUAGE plpgsql AS $$
BEGIN
    NEW.updated_at := NOW();
    RETURN NEW;
END;
$$;
"""


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto")
    op.execute(TOUCH_UPDATED_AT)


def downgrade() -> None:
    op.execute("DROP FUNCTION IF EXISTS fn_touch_updated_at()")
