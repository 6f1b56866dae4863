import math
from datetime import datetime, timedelta

BASE_DAILY_REWARD = 10
MAX_STREAK_MULTIPLIER = 5

MEMBERSHIP_MULTIPLIERS = {
    'Based': 1,
    'Super Based': 1.5,
    'Legendary': 2,
}


def local_now():
    # 以服务器本地日期为准，不是滚动24小时
    return datetime.now()


def has_claimed_on(last_claim_time, now):
    if not last_claim_time:
        return False
    return last_claim_time.date() == now.date()


def next_streak(last_claim_time, consecutive_days, now):
    if last_claim_time and last_claim_time.date() == now.date() - timedelta(days=1):
        return (consecutive_days or 0) + 1
    return 1


def calculate_daily_reward(last_claim_time, consecutive_days, membership_level, now=None):
    """
    计算当日签到奖励
    :param last_claim_time: 上次领取时间（可为 None）
    :param consecutive_days: 当前连续天数
    :param membership_level: Based / Super Based / Legendary
    :return: (奖励, 新的连续天数)
    """
    now = now or local_now()
    streak = next_streak(last_claim_time, consecutive_days, now)
    base_reward = BASE_DAILY_REWARD * min(streak, MAX_STREAK_MULTIPLIER)
    multiplier = MEMBERSHIP_MULTIPLIERS.get(membership_level, 1)
    return int(math.floor(base_reward * multiplier)), streak
