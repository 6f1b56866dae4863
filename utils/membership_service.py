from flask import current_app
from extensions import db
from models import MembershipUpgrade, MEMBERSHIP_LEVELS
from utils.account_service import get_account
from utils.errors import ConflictError, RelayerUnavailable, ValidationError
from utils.reward_service import local_now

# 合约里的等级编号
LEVEL_MAPPING = {name: index for index, name in enumerate(MEMBERSHIP_LEVELS)}
RELAY_UPGRADE_LEVELS = (1, 2)


def level_index(membership_level):
    if not isinstance(membership_level, str) or membership_level not in LEVEL_MAPPING:
        raise ValidationError('Invalid membership level')
    return LEVEL_MAPPING[membership_level]


def upgrade_membership(wallet_address, membership_level, relayer, now=None):
    """
    会员升级：链上 upgradeMembership 确认后再写库。
    不检查等级顺序，三个等级都可以直接设置（包括降级）。
    """
    target_level = level_index(membership_level)

    account = get_account(wallet_address)
    if not account.is_activated:
        raise ConflictError('Account is not activated')

    if relayer is None:
        raise RelayerUnavailable()

    tx_hash = relayer.submit_membership_upgrade(wallet_address, target_level)

    now = now or local_now()
    account.membership_level = membership_level
    account.last_upgrade_at = now
    account.upgrade_transaction_hash = tx_hash
    db.session.add(MembershipUpgrade(
        wallet_address=wallet_address,
        level=target_level,
        tx_hash=tx_hash,
        upgraded_at=now
    ))
    db.session.commit()

    current_app.logger.info(f"Membership of {wallet_address} set to {membership_level} (tx {tx_hash})")

    return {
        'message': 'Membership level upgraded via relayer',
        'newLevel': membership_level,
        'txHash': tx_hash,
    }


def relay_membership_upgrade(user_address, target_level, relayer, now=None):
    if isinstance(target_level, bool) or target_level not in RELAY_UPGRADE_LEVELS:
        raise ValidationError('Invalid membership level (must be 1 or 2)')

    if relayer is None:
        raise RelayerUnavailable()

    tx_hash = relayer.submit_membership_upgrade(user_address, target_level)

    db.session.add(MembershipUpgrade(
        wallet_address=user_address,
        level=target_level,
        tx_hash=tx_hash,
        upgraded_at=now or local_now()
    ))
    db.session.commit()
    return tx_hash
