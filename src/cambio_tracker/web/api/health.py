"""Health check endpoint."""
from flask import Blueprint, jsonify

from ... import __version__

bp = Blueprint('health', __name__)


@bp.get('/api/health')
def health():
    return jsonify({'status': 'ok', 'version': __version__})
