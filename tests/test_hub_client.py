"""Unit tests for HubClient."""

import pytest
import httpx
from cli.hub_client import HubClient


STORED_FILE = {
    'id': '1714566600123-test.txt',
    'name': 'test.txt',
    'filename': '1714566600123-test.txt',
    'size': 26,
    'type': 'text/plain',
    'uploadDate': '2024-05-01T12:30:00.123Z',
    'path': '/api/download/1714566600123-test.txt',
}


@pytest.fixture
def mock_transport_success():
    """Mock transport that returns successful responses."""
    def handler(request):
        if request.url.path == '/api/upload' and request.method == 'POST':
            return httpx.Response(200, json={'success': True, 'files': [STORED_FILE]})
        elif request.url.path == '/api/files' and request.method == 'GET':
            return httpx.Response(200, json=[STORED_FILE])
        elif request.url.path.startswith('/api/files/') and request.method == 'DELETE':
            return httpx.Response(200, json={'success': True})
        elif request.url.path == '/api/download/1714566600123-test.txt':
            return httpx.Response(200, content=b'Sample content for testing')
        elif request.url.path == '/api/system-info':
            return httpx.Response(200, json={
                'ipAddress': '192.168.1.20',
                'cpuUsage': 12.5,
                'memoryUsage': 40.2,
                'diskUsage': 51.0,
                'temperature': 48.3,
                'uptime': '2d 3h 15m',
                'timestamp': 1714566600123,
            })
        elif request.url.path == '/api/health':
            return httpx.Response(200, json={'status': 'ok', 'timestamp': '2024-05-01T12:30:00.123Z'})

        return httpx.Response(404, json={'success': False, 'error': 'File not found', 'code': 'FILE_NOT_FOUND'})

    return httpx.MockTransport(handler)


@pytest.fixture
def client_with_mock(temp_config, mock_transport_success):
    """Create HubClient with mocked HTTP transport."""
    client = HubClient(temp_config)
    client.session = httpx.Client(transport=mock_transport_success, base_url='http://test')
    return client


@pytest.fixture
def no_sleep(monkeypatch):
    monkeypatch.setattr('cli.hub_client.time.sleep', lambda seconds: None)


def make_client(temp_config, handler):
    client = HubClient(temp_config)
    client.session = httpx.Client(transport=httpx.MockTransport(handler), base_url='http://test')
    return client


def test_upload_files_success(client_with_mock, sample_file):
    """Test successful upload reports the hub name."""
    result = client_with_mock.upload_files([str(sample_file)])

    assert 'Uploaded: test.txt' in result
    assert 'Hub name: 1714566600123-test.txt' in result


def test_upload_sends_multipart_files_field(temp_config, sample_file):
    """The file content is sent in the "files" multipart field."""
    captured = {}

    def handler(request):
        captured['body'] = request.read()
        captured['content_type'] = request.headers['content-type']
        return httpx.Response(200, json={'success': True, 'files': [STORED_FILE]})

    client = make_client(temp_config, handler)
    client.upload_files([str(sample_file)])

    assert captured['content_type'].startswith('multipart/form-data')
    assert b'name="files"; filename="test.txt"' in captured['body']
    assert b'Sample content for testing' in captured['body']


def test_upload_missing_file(client_with_mock, tmp_path):
    result = client_with_mock.upload_files([str(tmp_path / 'nope.txt')])
    assert result.startswith('Error: File not found')


def test_upload_directory_rejected(client_with_mock, tmp_path):
    result = client_with_mock.upload_files([str(tmp_path)])
    assert result.startswith('Error: Not a file')


def test_upload_too_large(temp_config, sample_file):
    def handler(request):
        return httpx.Response(413, json={'success': False, 'error': 'too big', 'code': 'FILE_TOO_LARGE'})

    client = make_client(temp_config, handler)
    result = client.upload_files([str(sample_file)])

    assert 'File too large' in result


def test_list_files_success(client_with_mock):
    """Test listing shows display and hub names."""
    result = client_with_mock.list_files()

    assert 'Found 1 file(s)' in result
    assert 'test.txt' in result
    assert 'Hub name: 1714566600123-test.txt' in result
    assert '26 B' in result


def test_list_files_empty(temp_config):
    client = make_client(temp_config, lambda request: httpx.Response(200, json=[]))
    assert client.list_files() == "No files stored on the hub."


def test_delete_files_success(client_with_mock):
    result = client_with_mock.delete_files(['1714566600123-test.txt', '1-other.txt'])

    assert result == "Deleted: 1714566600123-test.txt\nDeleted: 1-other.txt"


def test_delete_quotes_filename(temp_config):
    """Filenames are percent-encoded into the path."""
    paths = []

    def handler(request):
        paths.append(request.url.raw_path)
        return httpx.Response(200, json={'success': True})

    client = make_client(temp_config, handler)
    client.delete_files(['1-my file.txt'])

    assert paths == [b'/api/files/1-my%20file.txt']


def test_download_default_name(client_with_mock, tmp_path, monkeypatch):
    """Downloads default to the display name in the current directory."""
    monkeypatch.chdir(tmp_path)

    result = client_with_mock.download('1714566600123-test.txt')

    saved = tmp_path / 'test.txt'
    assert saved.read_bytes() == b'Sample content for testing'
    assert 'Downloaded: test.txt' in result
    assert 'Saved to:' in result


def test_download_into_directory(client_with_mock, tmp_path):
    target = tmp_path / 'downloads'
    target.mkdir()

    client_with_mock.download('1714566600123-test.txt', str(target))

    assert (target / 'test.txt').exists()


def test_download_missing_file(client_with_mock, tmp_path):
    result = client_with_mock.download('1-missing.txt', str(tmp_path / 'out.txt'))

    assert result == "Error: File not found on hub."
    assert not (tmp_path / 'out.txt').exists()


def test_system_status(client_with_mock):
    result = client_with_mock.system_status()

    assert 'IP address:  192.168.1.20' in result
    assert 'CPU:         12.5%' in result
    assert 'Uptime:      2d 3h 15m' in result
    assert 'Warning' not in result


def test_system_status_simulated(temp_config):
    """A fallback payload is flagged to the user."""
    payload = {
        'ipAddress': '127.0.0.1', 'cpuUsage': 50.0, 'memoryUsage': 40.0,
        'diskUsage': 45.0, 'temperature': 50.0, 'uptime': '0d 0h 0m',
        'timestamp': 1, 'error': 'Could not fetch real system data',
    }
    client = make_client(temp_config, lambda request: httpx.Response(200, json=payload))

    assert 'Warning: Could not fetch real system data' in client.system_status()


def test_health(client_with_mock):
    assert client_with_mock.health() == "Hub is ok (server time 2024-05-01T12:30:00.123Z)"


def test_retry_on_server_error(temp_config, no_sleep):
    """Test retry logic on 500 errors."""
    call_count = 0

    def failing_handler(request):
        nonlocal call_count
        call_count += 1
        if call_count < 3:
            return httpx.Response(500, json={'error': 'Server error'})
        return httpx.Response(200, json=[])

    temp_config.data['max_retries'] = 3
    client = make_client(temp_config, failing_handler)

    result = client.list_files()

    assert call_count == 3
    assert result == "No files stored on the hub."


def test_no_retry_on_client_error(temp_config, no_sleep):
    """Test no retry on 4xx errors."""
    call_count = 0

    def error_handler(request):
        nonlocal call_count
        call_count += 1
        return httpx.Response(400, json={'success': False, 'error': 'bad', 'code': 'INVALID_FILENAME'})

    client = make_client(temp_config, error_handler)
    result = client.delete_files(['1-bad.txt'])

    assert call_count == 1
    assert 'Invalid filename' in result


def test_connection_error_handling(temp_config, no_sleep):
    """Test connection error handling."""
    def failing_handler(request):
        raise httpx.ConnectError("Connection refused")

    temp_config.data['max_retries'] = 1
    client = make_client(temp_config, failing_handler)

    result = client.list_files()

    assert result == "Error: Cannot connect to hub server. Is it running?"


def test_request_id_header_sent(temp_config):
    headers = []

    def handler(request):
        headers.append(request.headers.get('X-Request-ID'))
        return httpx.Response(200, json={'status': 'ok', 'timestamp': 'now'})

    client = make_client(temp_config, handler)
    client.health()

    assert headers == [client.request_id]


def test_close_session(client_with_mock):
    """Test closing HTTP session."""
    client_with_mock.close()
    assert client_with_mock.session.is_closed
