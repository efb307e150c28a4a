"""HTTP client for communicating with the hub server."""

import os
import time
import uuid
from pathlib import Path
from typing import Optional
from urllib.parse import quote

import httpx

from common.logging_config import get_logger
from cli.config import Config
from cli.utils import ProgressFileWrapper, ProgressLine, display_name, format_file_size

logger = get_logger(__name__)


class HubClient:
    """HTTP client for the hub REST API with retry logic and error handling."""

    def __init__(self, config: Config):
        """
        Initialize hub client.

        Args:
            config: Configuration instance
        """
        self.config = config
        self.session = httpx.Client(
            base_url=config.get_base_url(),
            timeout=config.get_timeout()
        )
        self.request_id = None
        logger.info(f"Initialized HubClient [base_url={config.get_base_url()}]")

    def _calculate_upload_timeout(self, file_size: int) -> float:
        """
        Calculate timeout for upload based on file size.

        Args:
            file_size: File size in bytes

        Returns:
            Timeout in seconds (30s base + 0.1s per MB)
        """
        base_timeout = 30.0
        size_mb = file_size / (1024 * 1024)
        size_factor = size_mb * 0.1
        return base_timeout + size_factor

    def _resolve_download_path(self, output_path: Optional[str], filename: str) -> Path:
        """
        Work out where a download is written.

        Args:
            output_path: User-supplied path, an existing directory, or None
            filename: Hub filename (timestamp prefix is stripped for the default name)

        Returns:
            Output file path with its parent directory created
        """
        default_name = display_name(filename)

        if output_path:
            output_file = Path(output_path).expanduser()
            if output_file.exists() and output_file.is_dir():
                output_file = output_file / default_name
        else:
            output_file = Path.cwd() / default_name

        output_file.parent.mkdir(parents=True, exist_ok=True)
        return output_file

    def _request_with_retry(
        self,
        method: str,
        endpoint: str,
        max_retries: Optional[int] = None,
        **kwargs
    ) -> httpx.Response:
        """
        Make HTTP request with retry logic on 5xx errors and network failures.

        Args:
            method: HTTP method (GET, POST, DELETE, etc.)
            endpoint: API endpoint path
            max_retries: Max retry attempts (uses config default if None)
            **kwargs: Additional arguments to pass to httpx request

        Returns:
            HTTP response object

        Raises:
            ConnectionError: If max retries exceeded or connection fails
        """
        retry_config = self.config.get_retry_config()
        max_retries = max_retries if max_retries is not None else retry_config['max_retries']
        backoff = retry_config['retry_backoff_multiplier']

        last_exception = None

        self.request_id = str(uuid.uuid4())
        if 'headers' not in kwargs:
            kwargs['headers'] = {}
        kwargs['headers']['X-Request-ID'] = self.request_id

        logger.debug(
            f"Making request: {method} {endpoint} [request_id={self.request_id}]"
        )

        for attempt in range(max_retries + 1):
            try:
                response = self.session.request(method, endpoint, **kwargs)

                logger.debug(
                    f"Response received: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                )

                if 400 <= response.status_code < 500:
                    logger.warning(
                        f"Client error: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                    )
                    return response

                if response.status_code >= 500 and attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Server error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} status={response.status_code}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue

                return response

            except (httpx.ConnectError, httpx.TimeoutException) as e:
                last_exception = e
                if attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Network error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} error={type(e).__name__}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue
                else:
                    logger.error(
                        f"Network error (max retries exceeded): {method} {endpoint} error={e} [request_id={self.request_id}]"
                    )

        if isinstance(last_exception, httpx.TimeoutException):
            raise ConnectionError("Request timed out. Hub may be overloaded.")
        if last_exception is not None:
            raise ConnectionError("Cannot connect to hub server. Is it running?")
        raise ConnectionError("Max retries exceeded")

    def _format_error(self, response: httpx.Response) -> str:
        """
        Map HTTP errors to user-friendly messages.

        Args:
            response: HTTP response object

        Returns:
            User-friendly error message
        """
        try:
            error_data = response.json()
            detail = error_data.get('error') or error_data.get('detail') or 'Unknown error'
            code = error_data.get('code', 'UNKNOWN')
        except ValueError:
            detail = response.text if response.text else 'Unknown error'
            code = 'UNKNOWN'

        error_messages = {
            'FILE_NOT_FOUND': 'File not found on hub.',
            'INVALID_FILENAME': 'Invalid filename.',
            'FILE_TOO_LARGE': 'File too large (limit is 25 GiB per file).',
            'STORAGE_ERROR': 'Hub could not read or write its storage.',
        }

        if code in error_messages:
            return error_messages[code]

        status_messages = {
            400: 'Bad request',
            404: 'Not found',
            413: 'File too large',
            422: 'Invalid request',
            500: 'Server error',
            503: 'Service unavailable',
        }

        message = status_messages.get(response.status_code, str(detail))
        return f"{message} (Code: {code})" if code != 'UNKNOWN' else message

    def upload_files(self, file_paths: list[str]) -> str:
        """
        Upload local files to the hub, one request per file.

        Args:
            file_paths: Local paths (relative, absolute, or ~-prefixed)

        Returns:
            Formatted result message with upload status for each file
        """
        results = []

        for file_path in file_paths:
            local_path = os.path.expanduser(file_path)

            if not os.path.exists(local_path):
                results.append(f"Error: File not found: {file_path}")
                continue

            if not os.path.isfile(local_path):
                results.append(f"Error: Not a file: {file_path}")
                continue

            file_size = os.path.getsize(local_path)
            filename = os.path.basename(local_path)
            upload_timeout = self._calculate_upload_timeout(file_size)

            try:
                with ProgressFileWrapper(local_path, file_size, filename) as stream:
                    files = {'files': (filename, stream)}
                    response = self.session.post(
                        '/api/upload',
                        files=files,
                        timeout=upload_timeout
                    )

                if response.status_code == 200:
                    result = response.json()
                    for stored in result.get('files', []):
                        results.append(
                            f"Uploaded: {stored['name']} "
                            f"(Hub name: {stored['filename']}, "
                            f"Size: {format_file_size(stored['size'])})"
                        )
                else:
                    results.append(f"Error uploading {file_path}: {self._format_error(response)}")

            except httpx.ConnectError:
                ProgressLine.clear()
                results.append(f"Error uploading {file_path}: Cannot connect to hub server")
            except httpx.TimeoutException:
                ProgressLine.clear()
                results.append(
                    f"Error uploading {file_path}: Upload timed out "
                    f"(file size: {format_file_size(file_size)}, timeout: {upload_timeout:.1f}s)"
                )
            except (httpx.HTTPError, OSError) as e:
                ProgressLine.clear()
                results.append(f"Error uploading {file_path}: {e}")

        return '\n'.join(results) if results else "No files uploaded."

    def list_files(self) -> str:
        """
        List files stored on the hub.

        Returns:
            Formatted list of files
        """
        try:
            response = self._request_with_retry('GET', '/api/files')

            if response.status_code == 200:
                files = response.json()

                if not files:
                    return "No files stored on the hub."

                output = [f"Found {len(files)} file(s):\n"]
                for file_meta in files:
                    output.append(
                        f"  - {file_meta['name']}\n"
                        f"    Hub name: {file_meta['filename']}\n"
                        f"    Size: {format_file_size(file_meta['size'])}\n"
                        f"    Uploaded: {file_meta['uploadDate']}"
                    )

                return '\n'.join(output)
            else:
                return f"Error: {self._format_error(response)}"

        except ConnectionError as e:
            return f"Error: {e}"
        except (httpx.HTTPError, ValueError, KeyError) as e:
            return f"Unexpected error listing files: {e}"

    def delete_files(self, filenames: list[str]) -> str:
        """
        Delete stored files by hub filename.

        Args:
            filenames: Hub filenames (with timestamp prefix)

        Returns:
            Formatted result per file
        """
        results = []

        for filename in filenames:
            try:
                response = self._request_with_retry('DELETE', f"/api/files/{quote(filename, safe='')}")

                if response.status_code == 200:
                    results.append(f"Deleted: {filename}")
                else:
                    results.append(f"Error deleting {filename}: {self._format_error(response)}")

            except ConnectionError as e:
                results.append(f"Error: {e}")
                break

        return '\n'.join(results)

    def download(self, filename: str, output_path: str | None = None) -> str:
        """
        Download a stored file with progress feedback.

        Args:
            filename: Hub filename (with timestamp prefix)
            output_path: Optional output file or directory (defaults to ./<original name>)

        Returns:
            Success message with download details
        """
        try:
            url = f"/api/download/{quote(filename, safe='')}"

            with self.session.stream('GET', url) as response:
                if response.status_code == 200:
                    output_file = self._resolve_download_path(output_path, filename)

                    total_size = int(response.headers.get('Content-Length', 0))
                    progress = ProgressLine("Downloading", filename, total_size)

                    with open(output_file, 'wb') as f:
                        for chunk in response.iter_bytes(chunk_size=64 * 1024):
                            f.write(chunk)
                            progress.advance(len(chunk))
                    progress.finish()
                    downloaded = progress.done

                    return f"Downloaded: {display_name(filename)} ({format_file_size(downloaded)})\nSaved to: {output_file.absolute()}"
                else:
                    response.read()
                    return f"Error: {self._format_error(response)}"

        except httpx.ConnectError:
            return "Error: Cannot connect to hub server. Is it running?"
        except httpx.TimeoutException:
            return "Error: Request timed out. Hub may be overloaded."
        except IOError as e:
            return f"Error writing file: {e}"

    def system_status(self) -> str:
        """
        Fetch host vitals.

        Returns:
            Formatted status block
        """
        try:
            response = self._request_with_retry('GET', '/api/system-info')

            if response.status_code != 200:
                return f"Error: {self._format_error(response)}"

            info = response.json()
            lines = [
                f"IP address:  {info['ipAddress']}",
                f"CPU:         {info['cpuUsage']:.1f}%",
                f"Memory:      {info['memoryUsage']:.1f}%",
                f"Disk:        {info['diskUsage']:.1f}%",
                f"Temperature: {info['temperature']:.1f} C",
                f"Uptime:      {info['uptime']}",
            ]
            if info.get('error'):
                lines.append(f"Warning: {info['error']} (values are simulated)")
            return '\n'.join(lines)

        except ConnectionError as e:
            return f"Error: {e}"
        except (ValueError, KeyError) as e:
            return f"Unexpected status payload: {e}"

    def health(self) -> str:
        """
        Check hub health.

        Returns:
            Health summary
        """
        try:
            response = self._request_with_retry('GET', '/api/health', max_retries=0)

            if response.status_code == 200:
                data = response.json()
                return f"Hub is {data.get('status', 'unknown')} (server time {data.get('timestamp', '?')})"
            return f"Error: {self._format_error(response)}"

        except ConnectionError as e:
            return f"Error: {e}"

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
