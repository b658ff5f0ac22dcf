from flask import Blueprint, jsonify
import logging

logger = logging.getLogger(__name__)

main_bp = Blueprint('main', __name__)

@main_bp.route('/')
def index():
    """Describe the service"""
    logger.info('Serving index')
    return jsonify({
        'status': 'success',
        'service': 'career-coach',
        'endpoints': ['/api/consultation', '/api/consultation/messages', '/api/stats']
    })

@main_bp.route('/test', methods=['GET'])
def test_route():
    """Simple test route to verify Flask is working"""
    logger.info('Test route accessed')
    return jsonify({
        'status': 'success',
        'message': 'Flask server is running correctly'
    })
