"""Rounds REST API."""
import logging
from flask import Blueprint, jsonify, request

from ...exceptions import InvalidRoundIndexError, InvalidScoreError
from . import error_response, get_tracker, round_to_dict

logger = logging.getLogger(__name__)
bp = Blueprint('rounds', __name__)


def _read_scores():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return None
    return payload.get('mikeScore'), payload.get('preetaScore')


@bp.get('/')
def list_rounds():
    """
    GET /api/rounds/?order=newest

    Rounds oldest first unless order=newest.
    """
    tracker = get_tracker()
    if request.args.get('order') == 'newest':
        rounds = tracker.get_rounds_reversed()
    else:
        rounds = tracker.rounds
    return jsonify({
        'rounds': [round_to_dict(r) for r in rounds],
        'currentSession': tracker.current_session,
    })


@bp.post('/')
def add_round():
    """
    POST /api/rounds/
    JSON: {"mikeScore": int, "preetaScore": int}
    """
    scores = _read_scores()
    if scores is None:
        return error_response('Expected a JSON object', 400)

    tracker = get_tracker()
    try:
        new_round = tracker.add_round(*scores)
    except InvalidScoreError as e:
        return error_response(str(e), 400)

    return jsonify(round_to_dict(new_round)), 201


@bp.put('/<int:index>')
def edit_round(index):
    """
    PUT /api/rounds/<index>
    JSON: {"mikeScore": int, "preetaScore": int}
    """
    scores = _read_scores()
    if scores is None:
        return error_response('Expected a JSON object', 400)

    tracker = get_tracker()
    try:
        updated = tracker.edit_round(index, *scores)
    except InvalidRoundIndexError as e:
        return error_response(str(e), 404)
    except InvalidScoreError as e:
        return error_response(str(e), 400)

    return jsonify(round_to_dict(updated))


@bp.delete('/<int:index>')
def delete_round(index):
    tracker = get_tracker()
    try:
        tracker.delete_round(index)
    except InvalidRoundIndexError as e:
        return error_response(str(e), 404)

    logger.info("Deleted round %d via API", index)
    return '', 204
