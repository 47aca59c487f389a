#!/usr/bin/env python3
"""
Legacy Sheet - Flask development server for the sheet editor
"""

import os
from pathlib import Path

from flask import Flask

import legacy_sheet
from legacy_sheet.blueprints.api_extraction import api_extraction
from legacy_sheet.blueprints.api_state import api_state
from legacy_sheet.blueprints.main import main
from legacy_sheet.error_handlers import register_error_handlers


PROJECT_ROOT = Path(__file__).parent
PACKAGE_ROOT = Path(legacy_sheet.__file__).parent

MAX_UPLOAD_BYTES = 16 * 1024 * 1024


class Config:
    """Configuration class for Flask app, read from environment variables"""

    def __init__(self):
        self.secret_key = self._env('SECRET_KEY', 'dev')
        self.data_dir = Path(self._env('LEGACY_SHEET_DATA_DIR', str(PROJECT_ROOT / 'data')))

        # OCR configuration (one language only)
        self.ocr_language = self._env('OCR_LANGUAGE', 'eng')
        self.tesseract_config = self._env('TESSERACT_CONFIG', '--oem 3 --psm 6')

        self.escape_prose = self._env_flag('ESCAPE_PROSE', True)

    @staticmethod
    def _env(var_name: str, default: str) -> str:
        """Environment variable, or the default when unset or empty"""
        return os.environ.get(var_name) or default

    @classmethod
    def _env_flag(cls, var_name: str, default: bool) -> bool:
        value = os.environ.get(var_name)
        if value is None or value == '':
            return default
        if value.lower() in ('1', 'true', 'yes', 'on'):
            return True
        if value.lower() in ('0', 'false', 'no', 'off'):
            return False
        raise RuntimeError(f"Environment variable {var_name} must be a boolean, got {value!r}")


def create_app(config=None):
    """Application factory"""
    app = Flask(__name__, template_folder=str(PACKAGE_ROOT / 'templates'))

    if config is None:
        config = Config()

    app.config['SECRET_KEY'] = config.secret_key
    app.config['DATA_DIR'] = Path(config.data_dir)
    app.config['OCR_LANGUAGE'] = config.ocr_language
    app.config['TESSERACT_CONFIG'] = config.tesseract_config
    app.config['ESCAPE_PROSE'] = config.escape_prose
    app.config['MAX_CONTENT_LENGTH'] = MAX_UPLOAD_BYTES

    app.register_blueprint(main)
    app.register_blueprint(api_state)
    app.register_blueprint(api_extraction)

    register_error_handlers(app)

    return app


def main_cli(host: str = '127.0.0.1', port: int = 3000, debug: bool = True):
    """Development server entry point"""
    app = create_app()

    print("Legacy Sheet - development server")
    print("=" * 50)
    print(f"State file directory: {app.config['DATA_DIR']}")
    print(f"Access the editor at: http://{host}:{port}")
    print()

    app.run(debug=debug, host=host, port=port)


if __name__ == '__main__':
    main_cli()
