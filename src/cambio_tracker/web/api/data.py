"""CSV import/export and data reset endpoints."""
import logging
from flask import Blueprint, Response, jsonify, request

from ...csv_codec import generate_csv_filename
from ...exceptions import CSVParseError
from . import error_response, get_tracker

logger = logging.getLogger(__name__)
bp = Blueprint('data', __name__)


@bp.get('/export')
def export_csv():
    """
    GET /api/data/export

    Returns the score history as a CSV attachment.
    """
    content = get_tracker().export_csv_text()
    if content is None:
        return error_response('No data to export', 404)

    filename = generate_csv_filename()
    return Response(
        content,
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename={filename}'},
    )


@bp.post('/import')
def import_csv():
    """
    POST /api/data/import
    Multipart: file=<csv>, or the CSV as the raw request body.

    Replaces all current data.
    """
    if request.mimetype == 'multipart/form-data':
        if 'file' not in request.files:
            return error_response('No file provided', 400)
        raw = request.files['file'].read()
    else:
        raw = request.get_data()

    try:
        content = raw.decode('utf-8')
    except UnicodeDecodeError:
        return error_response('CSV must be UTF-8 text', 400)

    try:
        count = get_tracker().import_csv_text(content)
    except CSVParseError as e:
        body = {'error': str(e)}
        if e.line_number is not None:
            body['line'] = e.line_number
        return jsonify(body), 400

    logger.info("Imported %d rounds via API", count)
    return jsonify({'imported': count})


@bp.delete('/')
def clear_data():
    get_tracker().clear_all_data()
    return '', 204
