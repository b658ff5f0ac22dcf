from flask import Blueprint, request, jsonify, current_app
import logging
from typing import Optional

from models import ProfileContext
from utils.consultation import load_or_create, send, get_consultation_stats
from utils.errors import InvalidInput, NoActiveProfile

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__)


def get_store():
    return current_app.extensions['consultation_store']


def get_profile_context() -> Optional[ProfileContext]:
    """Build the caller's identity from the headers set by the identity provider"""
    profile_id = (request.headers.get('X-Profile-Id') or '').strip()
    if not profile_id:
        return None
    return ProfileContext(
        id=profile_id,
        email=request.headers.get('X-Profile-Email'),
        full_name=request.headers.get('X-Profile-Name'),
    )


def require_profile() -> ProfileContext:
    profile = get_profile_context()
    if profile is None:
        raise NoActiveProfile()
    return profile


@api_bp.route('/consultation', methods=['GET'])
def get_active_consultation():
    """Load the caller's active consultation, creating it on first visit"""
    profile = require_profile()
    consultation = load_or_create(get_store(), profile.id)

    return jsonify({
        'status': 'success',
        'consultation': {
            'id': consultation.id,
            'topic': consultation.topic,
            'status': consultation.status,
            'messages': [m.to_dict() for m in consultation.messages],
        }
    })


@api_bp.route('/consultation/messages', methods=['POST'])
def send_consultation_message():
    """Send one message to the coach and persist the updated log"""
    profile = require_profile()

    data = request.get_json(silent=True)
    message = data.get('message') if isinstance(data, dict) else None
    if not isinstance(message, str) or not message.strip():
        raise InvalidInput('Message cannot be empty.')

    store = get_store()
    consultation = load_or_create(store, profile.id)
    messages = send(store, profile.id, consultation.id, consultation.messages, message)
    logger.info(f"Consultation {consultation.id} now has {len(messages)} messages")

    return jsonify({
        'status': 'success',
        'consultation_id': consultation.id,
        'reply': messages[-1].content,
        'messages': [m.to_dict() for m in messages],
    })


@api_bp.route('/stats', methods=['GET'])
def get_stats():
    """Dashboard counters for the caller"""
    stats = get_consultation_stats(get_store(), get_profile_context())
    return jsonify({
        'status': 'success',
        'stats': stats
    })
