"""
Tests for the JSON API blueprints
"""
import io
from unittest.mock import patch

from legacy_sheet.services.exceptions import ExternalServiceError


OCR_TEXT = 'Second Generation\n1. Anna Berg was born 1900.\n\nAnna married Per.'


class TestStateAPI:
    """Test /api/save-state and /api/load-state"""

    def test_load_without_state(self, client):
        response = client.get('/api/load-state')
        assert response.status_code == 404
        data = response.get_json()
        assert data['success'] is False
        assert 'No application state found' in data['error']

    def test_save_then_load(self, client, app):
        state = {'pages': [{'html': '<p>x</p>'}], 'savedAt': '2024-05-01T12:00:00Z', 'extra': {'a': 1}}

        response = client.post('/api/save-state', json=state)
        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert data['pages'] == 1

        assert (app.config['DATA_DIR'] / 'appState.json').exists()

        response = client.get('/api/load-state')
        assert response.status_code == 200
        assert response.get_json() == state

    def test_save_rejects_non_object(self, client):
        response = client.post('/api/save-state', json=[1, 2, 3])
        assert response.status_code == 400
        assert response.get_json()['success'] is False

    def test_save_rejects_non_json(self, client):
        response = client.post('/api/save-state', data='hello', content_type='text/plain')
        assert response.status_code == 400

    def test_load_state_wrong_method(self, client):
        response = client.post('/api/load-state')
        assert response.status_code == 405
        assert response.get_json()['error'] == 'Method not allowed'


class TestParseAPI:
    """Test /api/parse"""

    def test_parse_json(self, client, sample_sheet_text):
        response = client.post('/api/parse', json={'text': sample_sheet_text})
        assert response.status_code == 200

        data = response.get_json()
        assert data['success'] is True
        assert data['person_count'] == 3
        document = data['document']
        assert document['generationTitle'] == 'Fourth Generation'
        assert [p['number'] for p in document['persons']] == ['119', '120', '121']
        assert document['persons'][0]['mainParagraphMarkup'].startswith('<strong>Anna Svensson</strong>')

    def test_parse_form(self, client):
        response = client.post('/api/parse', data={'text': '1. Anna Berg was born 1900.'})
        assert response.status_code == 200
        assert response.get_json()['document']['persons'][0]['name'] == 'Anna Berg'

    def test_parse_nothing_found(self, client):
        response = client.post('/api/parse', json={'text': 'no numbered entries'})
        assert response.status_code == 200
        data = response.get_json()
        assert data['person_count'] == 0
        assert data['message'] == 'No numbered entries found'

    def test_parse_missing_text(self, client):
        response = client.post('/api/parse', json={})
        assert response.status_code == 400
        assert 'text' in response.get_json()['error']

    def test_parse_non_string_text(self, client):
        response = client.post('/api/parse', json={'text': 42})
        assert response.status_code == 400


class TestOCRAPI:
    """Test /api/ocr"""

    def _upload(self, client, filename='page.png', content=b'png-bytes'):
        return client.post(
            '/api/ocr',
            data={'image': (io.BytesIO(content), filename)},
            content_type='multipart/form-data',
        )

    @patch('legacy_sheet.services.ocr_service.OCRService.recognize')
    def test_ocr_then_parse(self, mock_recognize, client):
        def fake_recognize(image, progress_callback=None):
            progress_callback({'status': 'recognizing text', 'progress': 0.2})
            return OCR_TEXT
        mock_recognize.side_effect = fake_recognize

        response = self._upload(client)

        assert response.status_code == 200
        data = response.get_json()
        assert data['text'] == OCR_TEXT
        assert data['phases'] == ['recognizing text']
        assert data['document']['generationTitle'] == 'Second Generation'
        assert data['document']['persons'][0]['subParagraphs'] == ['Anna married Per.']
        assert mock_recognize.call_args.args[0] == b'png-bytes'

    def test_no_file(self, client):
        response = client.post('/api/ocr', data={}, content_type='multipart/form-data')
        assert response.status_code == 400
        assert response.get_json()['error'] == 'No image uploaded'

    def test_unsupported_extension(self, client):
        response = self._upload(client, filename='notes.txt')
        assert response.status_code == 400
        assert 'not a supported image' in response.get_json()['error']

    @patch('legacy_sheet.services.ocr_service.OCRService.recognize')
    def test_ocr_failure(self, mock_recognize, client):
        mock_recognize.side_effect = ExternalServiceError('OCR processing failed: crashed')

        response = self._upload(client)

        assert response.status_code == 502
        assert response.get_json()['success'] is False

    @patch('legacy_sheet.services.ocr_service.pytesseract.get_languages', return_value=['eng'])
    @patch('legacy_sheet.services.ocr_service.pytesseract.image_to_string')
    def test_corrupt_upload(self, mock_image_to_string, mock_languages, client):
        """Test an undecodable upload surfaces as an OCR failure"""
        response = self._upload(client, content=b'not really a png')

        assert response.status_code == 502
        mock_image_to_string.assert_not_called()
