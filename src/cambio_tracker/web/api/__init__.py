"""
JSON API blueprints and the helpers they share.
"""
from pathlib import Path

from flask import current_app, jsonify

from ...config_manager import ConfigManager
from ...models import Round
from ...tracker import CambioTracker


def get_tracker() -> CambioTracker:
    """Build a tracker from the app config, pointed at its data file."""
    cfg = current_app.config
    manager = ConfigManager(cfg.get('CAMBIO_CONFIG_PATH'))

    try:
        tracker_config = manager.load()
    except FileNotFoundError:
        tracker_config = manager.create_default()

    if cfg.get('CAMBIO_DATA_FILE'):
        tracker_config.data_file = Path(cfg['CAMBIO_DATA_FILE'])

    return CambioTracker(manager.config_path, config=tracker_config)


def round_to_dict(r: Round) -> dict:
    return r.model_dump(by_alias=True)


def error_response(message: str, status: int):
    return jsonify({'error': message}), status
