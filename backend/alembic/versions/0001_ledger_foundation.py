"""ledger foundation: bets and bankroll transactions

Revision ID: 0001_ledger
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_ledger"
down_revision = None
branch_labels = None
depends_on = None


def _has_table(bind, name: str) -> bool:
    inspector = sa.inspect(bind)
    return inspector.has_table(name)


def upgrade() -> None:
    bind = op.get_bind()

    if not _has_table(bind, "bets"):
        op.create_table(
            "bets",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("sport", sa.String(length=50), nullable=False),
            sa.Column("event_name", sa.String(length=200), nullable=False),
            sa.Column("bet_type", sa.String(length=50), nullable=False),
            sa.Column("selection", sa.String(length=100), nullable=False),
            sa.Column("stake", sa.Numeric(10, 2), nullable=False),
            sa.Column("odds", sa.Integer(), nullable=False),
            sa.Column("potential_payout", sa.Numeric(10, 2), nullable=True),
            sa.Column("actual_payout", sa.Numeric(10, 2), nullable=True),
            sa.Column("sportsbook_name", sa.String(length=50), nullable=False),
            sa.Column("status", sa.String(length=20), nullable=False, server_default="PENDING"),
            sa.Column("profit_loss", sa.Numeric(10, 2), nullable=True),
            sa.Column("placed_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
            sa.Column("settled_at", sa.DateTime(timezone=True), nullable=True),
            sa.Column("event_start_time", sa.DateTime(timezone=True), nullable=True),
            sa.Column("closing_odds", sa.Integer(), nullable=True),
            sa.Column("beat_closing_line", sa.Boolean(), nullable=True),
            sa.Column("notes", sa.String(length=500), nullable=True),
        )
        for col in ("sport", "bet_type", "sportsbook_name", "status", "placed_at"):
            op.create_index(f"ix_bets_{col}", "bets", [col])

    if not _has_table(bind, "bankroll_transactions"):
        op.create_table(
            "bankroll_transactions",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("amount", sa.Numeric(12, 2), nullable=False),
            sa.Column("transaction_type", sa.String(length=32), nullable=False),
            sa.Column("notes", sa.String(length=500), nullable=True),
            sa.Column("related_bet_id", sa.Integer(), sa.ForeignKey("bets.id", ondelete="SET NULL"), nullable=True),
            sa.Column("recorded_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        )
        for col in ("transaction_type", "related_bet_id", "recorded_at"):
            op.create_index(f"ix_bankroll_transactions_{col}", "bankroll_transactions", [col])


def downgrade() -> None:
    op.drop_table("bankroll_transactions")
    op.drop_table("bets")
