"""
Pytest configuration and fixtures for legacy sheet project
"""

import shutil
import sys
import tempfile
from pathlib import Path

import pytest


# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from app import create_app  # noqa: E402


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def sample_sheet_text():
    """OCR output of a typical legacy sheet page"""
    return """Fourth Generation

119. Anna Svensson was born 12 May 1861 in Ösmo.
She lived at Stora Gården.

Anna married Erik Lund in 1885 in [Ösmo](https://example.org/osmo).
They had three children.

120. Erik Åberg was born 3 March 1863.
He married Maria Nilsson in 1888.
Maria died in 1920.

121. unknown child, died young.
"""


class BaseTestConfig:
    """Test configuration writing state into a temporary directory"""
    def __init__(self, data_dir):
        self.secret_key = 'test-secret-key'
        self.data_dir = Path(data_dir)
        self.ocr_language = 'eng'
        self.tesseract_config = '--oem 3 --psm 6'
        self.escape_prose = True


@pytest.fixture
def test_config(temp_dir):
    return BaseTestConfig(temp_dir / 'data')


@pytest.fixture
def app(test_config):
    """Create Flask app for testing"""
    app = create_app(test_config)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    """Create test client"""
    return app.test_client()
