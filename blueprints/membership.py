from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from blueprints.account import is_text
from blueprints.claim import is_wallet_address
from utils.membership_service import upgrade_membership
from utils.relayer import current_relayer

membership_bp = Blueprint('membership', __name__, url_prefix='/api')


# Membership upgrade via smart contract relayer
@membership_bp.route('/update-membership', methods=['POST'])
def update_membership():
    data = request.get_json(silent=True) or {}
    wallet_address = data.get('walletAddress')
    membership_level = data.get('membershipLevel')

    if not wallet_address or not is_wallet_address(wallet_address) or not is_text(membership_level):
        return jsonify({'error': 'Missing or invalid input fields'}), 400

    try:
        result = upgrade_membership(wallet_address, membership_level, current_relayer())
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error upgrading membership level for {wallet_address}: {e}")
        return jsonify({'error': 'Failed to upgrade membership level'}), 500

    return jsonify(result)
