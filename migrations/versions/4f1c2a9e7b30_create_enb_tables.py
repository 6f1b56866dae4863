"""create enb tables

Revision ID: 4f1c2a9e7b30
Revises:
Create Date: 2025-09-02 10:41:12.381204

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4f1c2a9e7b30'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'accounts',
        sa.Column('wallet_address', sa.String(length=66), nullable=False),
        sa.Column('transaction_hash', sa.String(length=100), nullable=True),
        sa.Column('membership_level', sa.String(length=20), nullable=False),
        sa.Column('invitation_code', sa.String(length=32), nullable=False),
        sa.Column('max_invitation_uses', sa.Integer(), nullable=False),
        sa.Column('current_invitation_uses', sa.Integer(), nullable=False),
        sa.Column('enb_balance', sa.Numeric(precision=36, scale=18), nullable=False),
        sa.Column('total_earned', sa.Numeric(precision=36, scale=18), nullable=False),
        sa.Column('consecutive_days', sa.Integer(), nullable=False),
        sa.Column('last_daily_claim_time', sa.DateTime(), nullable=True),
        sa.Column('last_transaction_hash', sa.String(length=100), nullable=True),
        sa.Column('is_activated', sa.Boolean(), nullable=False),
        sa.Column('activated_at', sa.DateTime(), nullable=True),
        sa.Column('activated_by', sa.String(length=32), nullable=True),
        sa.Column('inviter_wallet', sa.String(length=66), nullable=True),
        sa.Column('last_upgrade_at', sa.DateTime(), nullable=True),
        sa.Column('upgrade_transaction_hash', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('wallet_address')
    )
    with op.batch_alter_table('accounts', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_accounts_invitation_code'), ['invitation_code'], unique=True)
        batch_op.create_index(batch_op.f('ix_accounts_is_activated'), ['is_activated'], unique=False)

    op.create_table(
        'invitation_usage',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('invitation_code', sa.String(length=32), nullable=False),
        sa.Column('used_by', sa.String(length=66), nullable=False),
        sa.Column('used_at', sa.DateTime(), nullable=False),
        sa.Column('inviter_wallet', sa.String(length=66), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('invitation_code', 'used_by', name='uix_invitation_code_used_by')
    )
    with op.batch_alter_table('invitation_usage', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_invitation_usage_invitation_code'), ['invitation_code'], unique=False)
        batch_op.create_index(batch_op.f('ix_invitation_usage_used_by'), ['used_by'], unique=False)

    op.create_table(
        'transactions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('wallet_address', sa.String(length=66), nullable=False),
        sa.Column('amount', sa.Numeric(precision=36, scale=18), nullable=False),
        sa.Column('type', sa.String(length=10), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=False),
        sa.Column('balance_before', sa.Numeric(precision=36, scale=18), nullable=False),
        sa.Column('balance_after', sa.Numeric(precision=36, scale=18), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('transactions', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_transactions_wallet_address'), ['wallet_address'], unique=False)
        batch_op.create_index(batch_op.f('ix_transactions_timestamp'), ['timestamp'], unique=False)

    op.create_table(
        'claims',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('wallet_address', sa.String(length=66), nullable=False),
        sa.Column('claimed_at', sa.DateTime(), nullable=False),
        sa.Column('reward', sa.Integer(), nullable=False),
        sa.Column('consecutive_days', sa.Integer(), nullable=True),
        sa.Column('tx_hash', sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('claims', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_claims_wallet_address'), ['wallet_address'], unique=False)

    op.create_table(
        'upgrades',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('wallet_address', sa.String(length=66), nullable=False),
        sa.Column('level', sa.Integer(), nullable=False),
        sa.Column('tx_hash', sa.String(length=100), nullable=True),
        sa.Column('upgraded_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('upgrades', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_upgrades_wallet_address'), ['wallet_address'], unique=False)


def downgrade():
    with op.batch_alter_table('upgrades', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_upgrades_wallet_address'))
    op.drop_table('upgrades')

    with op.batch_alter_table('claims', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_claims_wallet_address'))
    op.drop_table('claims')

    with op.batch_alter_table('transactions', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_transactions_timestamp'))
        batch_op.drop_index(batch_op.f('ix_transactions_wallet_address'))
    op.drop_table('transactions')

    with op.batch_alter_table('invitation_usage', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_invitation_usage_used_by'))
        batch_op.drop_index(batch_op.f('ix_invitation_usage_invitation_code'))
    op.drop_table('invitation_usage')

    with op.batch_alter_table('accounts', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_accounts_is_activated'))
        batch_op.drop_index(batch_op.f('ix_accounts_invitation_code'))
    op.drop_table('accounts')
