"""Tests for hub HTTP endpoints."""

import inspect
import re

import pytest

from hub import service_locator
from hub.routes import file_routes
from hub.services.file_service import FileService


def upload(client, *files):
    return client.post(
        '/api/upload',
        files=[('files', (name, content, 'text/plain')) for name, content in files]
    )


def test_upload_returns_descriptors(client, uploads_dir):
    """Upload stores each file under a timestamp-prefixed name."""
    response = upload(client, ('notes.txt', b'hello hub'))

    assert response.status_code == 200
    data = response.json()
    assert data['success'] is True
    assert len(data['files']) == 1

    descriptor = data['files'][0]
    assert descriptor['name'] == 'notes.txt'
    assert descriptor['size'] == 9
    assert descriptor['type'] == 'text/plain'
    assert re.fullmatch(r'\d+-notes\.txt', descriptor['filename'])
    assert descriptor['id'] == descriptor['filename']
    assert descriptor['path'] == f"/api/download/{descriptor['filename']}"
    assert descriptor['uploadDate'].endswith('Z')

    assert (uploads_dir / descriptor['filename']).read_bytes() == b'hello hub'


def test_upload_then_download_roundtrip(client):
    """Downloading an upload returns identical bytes and the original name."""
    content = bytes(range(256)) * 64
    response = client.post(
        '/api/upload',
        files=[('files', ('report.bin', content, 'application/octet-stream'))]
    )
    filename = response.json()['files'][0]['filename']

    download = client.get(f'/api/download/{filename}')

    assert download.status_code == 200
    assert download.content == content
    disposition = download.headers['content-disposition']
    assert disposition.startswith('attachment')
    assert 'filename="report.bin"' in disposition


def test_upload_same_name_twice_keeps_both(client, uploads_dir):
    """Two uploads with the same name never overwrite each other."""
    response = upload(client, ('same.txt', b'first'), ('same.txt', b'second'))

    filenames = [f['filename'] for f in response.json()['files']]
    assert len(set(filenames)) == 2
    assert sorted((uploads_dir / name).read_bytes() for name in filenames) == [b'first', b'second']


def test_upload_strips_client_directories(client, uploads_dir):
    """Only the last path component of the client filename is used."""
    response = upload(client, ('../../etc/passwd', b'nope'))

    descriptor = response.json()['files'][0]
    assert descriptor['name'] == 'passwd'
    assert (uploads_dir / descriptor['filename']).exists()


def test_upload_over_limit_is_rejected(client, uploads_dir):
    """A file over the per-file cap yields 413 and leaves nothing behind."""
    service_locator.set_file_service(FileService(uploads_dir, max_upload_bytes=4))

    response = upload(client, ('big.txt', b'0123456789'))

    assert response.status_code == 413
    data = response.json()
    assert data['success'] is False
    assert data['code'] == 'FILE_TOO_LARGE'
    assert list(uploads_dir.iterdir()) == []


def test_upload_without_files_field(client):
    """The files field is required."""
    response = client.post('/api/upload', data={'other': 'x'})
    assert response.status_code == 422


def test_download_missing_file(client):
    """Downloading an unknown filename returns 404 JSON."""
    response = client.get('/api/download/123-missing.txt')

    assert response.status_code == 404
    data = response.json()
    assert data['code'] == 'FILE_NOT_FOUND'
    assert data['error'] == 'File not found'


def test_delete_nonexistent_file_succeeds(client):
    """Deleting a filename that does not exist still reports success."""
    response = client.delete('/api/files/123-never-uploaded.txt')

    assert response.status_code == 200
    assert response.json() == {'success': True}


def test_delete_removes_file(client, uploads_dir):
    """Delete unlinks the stored file."""
    filename = upload(client, ('gone.txt', b'bye')).json()['files'][0]['filename']

    response = client.delete(f'/api/files/{filename}')

    assert response.status_code == 200
    assert not (uploads_dir / filename).exists()
    assert client.get(f'/api/download/{filename}').status_code == 404


def test_list_files_newest_first(client, uploads_dir):
    """Listing re-reads the directory, strips prefixes and skips hidden entries."""
    (uploads_dir / '1000-old.txt').write_bytes(b'a')
    (uploads_dir / '3000-new.pdf').write_bytes(b'abc')
    (uploads_dir / '2000-middle.txt').write_bytes(b'ab')
    (uploads_dir / '.partial').write_bytes(b'x')
    (uploads_dir / 'subdir').mkdir()

    response = client.get('/api/files')

    assert response.status_code == 200
    files = response.json()
    assert [f['filename'] for f in files] == ['3000-new.pdf', '2000-middle.txt', '1000-old.txt']
    assert [f['name'] for f in files] == ['new.pdf', 'middle.txt', 'old.txt']
    assert files[0]['size'] == 3
    assert files[0]['type'] == 'application/pdf'
    assert files[0]['path'] == '/api/download/3000-new.pdf'


def test_list_files_empty(client):
    response = client.get('/api/files')
    assert response.status_code == 200
    assert response.json() == []


def test_health_endpoint(client):
    """Health check reports ok with a timestamp."""
    response = client.get('/api/health')

    assert response.status_code == 200
    data = response.json()
    assert data['status'] == 'ok'
    assert data['timestamp'].endswith('Z')


def test_request_id_header(client):
    response = client.get('/api/health')
    assert response.headers['X-Request-ID']


def test_system_info_failure_returns_500(client):
    """An unexpected failure in the metrics service is reported as 500."""
    response = client.get('/api/system-info')

    assert response.status_code == 500
    assert response.json() == {'error': 'Failed to get system information'}


def test_unknown_api_path_returns_json_404(client):
    response = client.get('/api/does-not-exist')

    assert response.status_code == 404
    assert response.json()['code'] == 'NOT_FOUND'


def test_frontend_missing_bundle_returns_404(client):
    response = client.get('/')
    assert response.status_code == 404


def test_frontend_serves_index_and_assets(client, tmp_path):
    """Static files are served by path; other routes fall back to index.html."""
    dist = tmp_path / 'dist'
    (dist / 'assets').mkdir(parents=True)
    (dist / 'index.html').write_text('<html>hub</html>')
    (dist / 'assets' / 'app.js').write_text('console.log(1)')

    index = client.get('/')
    asset = client.get('/assets/app.js')
    spa_route = client.get('/messages')

    assert index.status_code == 200
    assert index.text == '<html>hub</html>'
    assert asset.text == 'console.log(1)'
    assert spa_route.text == '<html>hub</html>'


def test_delete_directory_name_is_noop(client, uploads_dir):
    """A name that points at a directory is treated like a missing file."""
    (uploads_dir / '123-dir').mkdir()

    response = client.delete('/api/files/123-dir')

    assert response.status_code == 200
    assert response.json() == {'success': True}
    assert (uploads_dir / '123-dir').is_dir()


@pytest.mark.parametrize('endpoint', [file_routes.download_file, file_routes.delete_file, file_routes.list_files])
def test_disk_bound_routes_run_in_threadpool(endpoint):
    """Routes doing blocking disk calls are plain functions, so FastAPI runs them off the loop."""
    assert not inspect.iscoroutinefunction(endpoint)
