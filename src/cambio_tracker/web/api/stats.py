"""Session and statistics endpoints."""
from flask import Blueprint, jsonify

from . import get_tracker

bp = Blueprint('stats', __name__)


@bp.get('/api/stats')
def get_stats():
    return jsonify(get_tracker().get_stats())


@bp.post('/api/sessions')
def start_session():
    session = get_tracker().start_new_session()
    return jsonify({'currentSession': session}), 201
