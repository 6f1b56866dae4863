from flask import current_app
from extensions import db
from models import Account, ClaimHistory
from models.account_models import to_number
from utils.account_service import get_account
from utils.errors import AlreadyClaimed, ConflictError, RelayerUnavailable
from utils.reward_service import calculate_daily_reward, has_claimed_on, local_now


def daily_claim(wallet_address, relayer, now=None):
    """
    每日领取：先等链上 dailyClaim 确认，再写数据库。
    写入按上次领取时间做条件更新，两个并发请求只有一个能记账。
    """
    account = get_account(wallet_address)

    if not account.is_activated:
        raise ConflictError('Account is not activated')

    now = now or local_now()
    previous_claim_time = account.last_daily_claim_time

    if has_claimed_on(previous_claim_time, now):
        raise AlreadyClaimed()

    reward, consecutive_days = calculate_daily_reward(
        previous_claim_time,
        account.consecutive_days,
        account.membership_level,
        now=now
    )

    if relayer is None:
        raise RelayerUnavailable()

    # === Trusted Relayer executes smart contract call ===
    tx_hash = relayer.submit_daily_claim(wallet_address)

    if previous_claim_time is None:
        claim_guard = Account.last_daily_claim_time.is_(None)
    else:
        claim_guard = Account.last_daily_claim_time == previous_claim_time

    updated = Account.query.filter(
        Account.wallet_address == wallet_address,
        claim_guard
    ).update({
        Account.last_daily_claim_time: now,
        Account.consecutive_days: consecutive_days,
        Account.enb_balance: Account.enb_balance + reward,
        Account.total_earned: Account.total_earned + reward,
        Account.last_transaction_hash: tx_hash,
    }, synchronize_session=False)

    if updated != 1:
        db.session.rollback()
        current_app.logger.warning(f"Concurrent daily claim for {wallet_address}, tx {tx_hash} not credited")
        # 链上已确认但未记账，留一条 0 奖励记录方便对账
        db.session.add(ClaimHistory(
            wallet_address=wallet_address,
            claimed_at=now,
            reward=0,
            tx_hash=tx_hash
        ))
        db.session.commit()
        raise AlreadyClaimed()

    db.session.add(ClaimHistory(
        wallet_address=wallet_address,
        claimed_at=now,
        reward=reward,
        consecutive_days=consecutive_days,
        tx_hash=tx_hash
    ))
    db.session.commit()

    # commit 之后对象已过期，重新读取最新余额
    db.session.refresh(account)
    current_app.logger.info(f"Daily claim {wallet_address}: reward={reward} streak={consecutive_days} tx={tx_hash}")

    return {
        'message': 'Daily claim successful via relayer',
        'reward': reward,
        'txHash': tx_hash,
        'newBalance': to_number(account.enb_balance),
        'consecutiveDays': consecutive_days,
    }


def relay_daily_claim(user_address, relayer, now=None):
    """只提交链上 dailyClaim，不改账户余额"""
    if relayer is None:
        raise RelayerUnavailable()

    tx_hash = relayer.submit_daily_claim(user_address)

    db.session.add(ClaimHistory(
        wallet_address=user_address,
        claimed_at=now or local_now(),
        reward=0,
        tx_hash=tx_hash
    ))
    db.session.commit()
    return tx_hash
