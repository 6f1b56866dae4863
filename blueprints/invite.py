from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from blueprints.account import is_text
from utils.invitation_service import activate_account, get_invitation_usage

invite_bp = Blueprint('invite', __name__, url_prefix='/api')


@invite_bp.route('/activate-account', methods=['POST'])
def activate_account_route():
    data = request.get_json(silent=True) or {}
    wallet_address = data.get('walletAddress')
    invitation_code = data.get('invitationCode')

    if not is_text(wallet_address, invitation_code):
        return jsonify({'error': 'Missing required fields'}), 400

    try:
        result = activate_account(wallet_address, invitation_code)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error activating account {wallet_address}: {e}")
        return jsonify({'error': 'Failed to activate account'}), 500

    return jsonify(result)


@invite_bp.route('/invitation-usage/<invitation_code>', methods=['GET'])
def invitation_usage(invitation_code):
    try:
        usage = get_invitation_usage(invitation_code)
    except SQLAlchemyError as e:
        current_app.logger.error(f"Error fetching invitation usage for {invitation_code}: {e}")
        return jsonify({'error': 'Failed to fetch invitation usage'}), 500

    return jsonify(usage)
