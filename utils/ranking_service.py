from models import Account
from models.account_models import to_number
from utils.account_service import get_account
from utils.errors import ConflictError, NotFound

# 排行榜类型 -> 排序字段
LEADERBOARD_COLUMNS = {
    'balance': Account.enb_balance,
    'earnings': Account.total_earned,
    'streaks': Account.consecutive_days,
}


def _leaderboard_entry(metric, rank, account):
    entry = {
        'rank': rank,
        'walletAddress': account.wallet_address,
    }
    if metric == 'balance':
        entry['enbBalance'] = to_number(account.enb_balance)
        entry['membershipLevel'] = account.membership_level or 'Based'
        entry['consecutiveDays'] = account.consecutive_days or 0
    elif metric == 'earnings':
        entry['totalEarned'] = to_number(account.total_earned)
        entry['membershipLevel'] = account.membership_level or 'Based'
        entry['consecutiveDays'] = account.consecutive_days or 0
    else:
        entry['consecutiveDays'] = account.consecutive_days or 0
        entry['membershipLevel'] = account.membership_level or 'Based'
        entry['enbBalance'] = to_number(account.enb_balance)
    return entry


def get_leaderboard(metric, limit=50):
    column = LEADERBOARD_COLUMNS.get(metric)
    if column is None:
        raise NotFound('Unknown leaderboard')

    accounts = Account.query.filter(
        Account.is_activated.is_(True)
    ).order_by(
        column.desc(),
        Account.created_at.asc()
    ).limit(limit).all()

    return [_leaderboard_entry(metric, index + 1, a) for index, a in enumerate(accounts)]


def _rank_for(column, value):
    # O(n) 计数，账户量小时可以接受
    higher = Account.query.filter(
        Account.is_activated.is_(True),
        column > value
    ).count()
    return higher + 1


def get_user_rankings(wallet_address):
    account = get_account(wallet_address)
    if not account.is_activated:
        raise ConflictError('Account is not activated')

    balance = account.enb_balance or 0
    earned = account.total_earned or 0
    streak = account.consecutive_days or 0

    return {
        'walletAddress': wallet_address,
        'rankings': {
            'balance': {
                'rank': _rank_for(Account.enb_balance, balance),
                'value': to_number(balance),
            },
            'earnings': {
                'rank': _rank_for(Account.total_earned, earned),
                'value': to_number(earned),
            },
            'streak': {
                'rank': _rank_for(Account.consecutive_days, streak),
                'value': streak,
            },
        },
    }
