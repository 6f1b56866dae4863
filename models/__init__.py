# 1. 显式导入所有模型类（供__all__和直接引用使用）
from extensions import db

from .account_models import Account, MEMBERSHIP_LEVELS, DEFAULT_MAX_INVITATION_USES
from .invite_models import InvitationUsage
from .ledger_models import BalanceTransaction, ClaimHistory, MembershipUpgrade

# 2. 定义__all__（控制from models import *的行为）
__all__ = [
    'Account',
    'MEMBERSHIP_LEVELS',
    'DEFAULT_MAX_INVITATION_USES',
    'InvitationUsage',
    'BalanceTransaction',
    'ClaimHistory',
    'MembershipUpgrade',
]


# 3. 显式注册函数（确保Flask-Migrate能发现模型）
def register_models():
    """强制导入所有模型模块（触发SQLAlchemy注册）"""
    from . import account_models
    from . import invite_models
    from . import ledger_models
