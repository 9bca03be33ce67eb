"""
Create user and transaction tables

Revision ID: 0001_initial_ledger
Revises:
Create Date: 2026-10-19 09:00:00
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial_ledger'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('name', sa.String(length=40), nullable=False),
        sa.Column('email', sa.String(length=100), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('image_path', sa.String(length=100), nullable=True),
        sa.Column('accounts', sa.JSON(), nullable=False),
        sa.Column('income_categories', sa.JSON(), nullable=False),
        sa.Column('expense_categories', sa.JSON(), nullable=False),
        sa.Column('password_changed_at', sa.DateTime(), nullable=True),
        sa.Column('reset_token', sa.String(length=64), nullable=True),
        sa.Column('reset_token_expires_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
    )

    op.create_table(
        'transaction',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('debit', sa.JSON(), nullable=False),
        sa.Column('credit', sa.JSON(), nullable=False),
        sa.Column('amount', sa.Numeric(14, 1), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
    )
    op.create_index('ix_transaction_user_id', 'transaction', ['user_id'])


def downgrade() -> None:
    op.drop_index('ix_transaction_user_id', table_name='transaction')
    op.drop_table('transaction')
    op.drop_table('user')
