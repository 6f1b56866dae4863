import logging
from datetime import timedelta
from apscheduler.schedulers.background import BackgroundScheduler
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from models import Account
from utils.reward_service import local_now

logger = logging.getLogger("scheduler")
logger.setLevel(logging.INFO)

if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter('[%(asctime)s] %(levelname)s: %(message)s'))
    logger.addHandler(console_handler)

scheduler = BackgroundScheduler()


def reset_stale_streaks(now=None):
    """
    把上次领取早于昨天的账户连续天数清零，排行榜显示的是仍然有效的连续天数。
    这里的 0 表示“当前没有有效连续签到”，不是领取时的连续天数；
    断签后下一次领取照常从 1 开始（见 reward_service.next_streak）。
    :return: 被清零的账户数
    """
    now = now or local_now()
    yesterday_start = (now - timedelta(days=1)).replace(hour=0, minute=0, second=0, microsecond=0)

    count = Account.query.filter(
        Account.consecutive_days > 0,
        Account.last_daily_claim_time < yesterday_start
    ).update({Account.consecutive_days: 0}, synchronize_session=False)
    db.session.commit()
    return count


def expire_stale_streaks(app):
    with app.app_context():
        try:
            start_time = local_now()
            logger.info("Starting stale streak reset task...")
            count = reset_stale_streaks(start_time)
            duration = (local_now() - start_time).total_seconds()
            logger.info(f"Reset {count} stale streaks in {duration:.2f}s")
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.exception(f"Stale streak reset failed: {e}")


def start_scheduler(app):
    # 每天 00:05 清理断签的连续天数
    scheduler.add_job(lambda: expire_stale_streaks(app), 'cron', hour=0, minute=5)

    scheduler.start()
    logger.info("Scheduler started: stale streak reset daily at 00:05")
