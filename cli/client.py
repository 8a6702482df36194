"""HTTP client for communicating with the chunk service."""

import time
import uuid
from typing import Optional

import httpx

from common.logging_config import get_logger
from cli.config import Config
from cli.constants import GREEN, RESET
from cli.utils import format_file_size, resolve_path, short_id

logger = get_logger(__name__)


class ChunkServiceClient:
    """HTTP client for the chunk service API with retry logic and error handling."""

    def __init__(self, config: Config, transport: Optional[httpx.BaseTransport] = None):
        """
        Initialize chunk service client.

        Args:
            config: Configuration instance
            transport: Optional httpx transport (tests pass an httpx.MockTransport)
        """
        self.config = config
        self.session = httpx.Client(
            base_url=config.get_base_url(),
            timeout=config.get_timeout(),
            transport=transport,
        )
        self.request_id = None
        logger.info(f"Initialized ChunkServiceClient [base_url={config.get_base_url()}]")

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
        headers = dict(kwargs.pop('headers', None) or {})
        headers['X-Request-ID'] = self.request_id

        logger.debug(f"Making request: {method} {endpoint} [request_id={self.request_id}]")

        for attempt in range(max_retries + 1):
            try:
                response = self.session.request(method, endpoint, headers=headers, **kwargs)

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
                logger.error(
                    f"Network error (max retries exceeded): {method} {endpoint} error={e} [request_id={self.request_id}]"
                )

        if isinstance(last_exception, httpx.TimeoutException):
            raise ConnectionError("Request timed out. Service may be overloaded.")
        if isinstance(last_exception, httpx.ConnectError):
            raise ConnectionError("Cannot connect to chunk service. Is it running?")
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
            detail = error_data.get('detail', 'Unknown error')
            code = error_data.get('code', 'UNKNOWN')
        except ValueError:
            detail = response.text if response.text else 'Unknown error'
            code = 'UNKNOWN'

        if not isinstance(detail, str):
            # FastAPI request validation errors carry a list of problems
            detail = 'Request validation failed'
            code = 'INVALID_INPUT'

        error_messages = {
            'NOT_FOUND': f'Not found: {detail}',
            'INVALID_INPUT': f'Invalid input: {detail}',
            'PROVIDER_UNAVAILABLE': 'No storage provider is available. Please try again later.',
            'INTEGRITY_FAILURE': f'Integrity check failed: {detail}',
            'PARTIAL_DATA': f'Incomplete data: {detail}',
        }

        if code in error_messages:
            return error_messages[code]

        status_messages = {
            400: 'Bad request',
            404: 'Not found',
            409: 'Conflict',
            422: 'Invalid request',
            500: 'Server error',
            503: 'Service unavailable',
        }

        message = status_messages.get(response.status_code, detail)
        return f"{message} (Code: {code})" if code != 'UNKNOWN' else message

    def chunk_files(self, file_paths: list[str]) -> str:
        """
        Ask the service to chunk each file in turn.

        Returns:
            One result line block per file
        """
        results = []
        for file_path in file_paths:
            source_path = resolve_path(file_path)
            logger.info(f"Chunking file: {source_path}")
            try:
                response = self._request_with_retry(
                    'POST',
                    '/files',
                    json={'source_path': source_path}
                )
            except ConnectionError as e:
                results.append(f"Error chunking {file_path}: {e}")
                continue

            if response.status_code == 201:
                data = response.json()
                results.append(
                    f"{GREEN}Chunked{RESET} {data['file_name']} -> {data['file_id']}\n"
                    f"    Size: {format_file_size(data['size'])}, "
                    f"{data['total_chunks']} chunks of {format_file_size(data['chunk_size'])}\n"
                    f"    Checksum: {data['checksum']}"
                )
            else:
                results.append(f"Error chunking {file_path}: {self._format_error(response)}")

        return '\n'.join(results)

    def list_files(self) -> str:
        """
        List every chunked file.

        Returns:
            Formatted list of files
        """
        try:
            response = self._request_with_retry('GET', '/files')
        except ConnectionError as e:
            return f"Error: {e}"

        if response.status_code != 200:
            return f"Error: {self._format_error(response)}"

        data = response.json()
        files = data['files']
        if not files:
            return "No files stored"

        output = [f"Found {data['total_count']} file(s), {format_file_size(data['total_size'])} total:\n"]
        for file_meta in files:
            output.append(
                f"  - {file_meta['name']} (ID: {file_meta['file_id']})\n"
                f"    Size: {format_file_size(file_meta['size'])}, {file_meta['total_chunks']} chunks\n"
                f"    Created: {file_meta['created_at']}"
            )
        return '\n'.join(output)

    def get_file_info(self, file_id: str) -> str:
        try:
            response = self._request_with_retry('GET', f'/files/{file_id}')
        except ConnectionError as e:
            return f"Error: {e}"

        if response.status_code != 200:
            return f"Error: {self._format_error(response)}"

        data = response.json()
        lines = [
            f"{data['name']} (ID: {data['file_id']})",
            f"  Original path: {data['original_path']}",
            f"  Size: {format_file_size(data['size'])} ({data['size']} bytes)",
            f"  Checksum: {data['checksum']}",
            f"  Chunk size: {format_file_size(data['chunk_size'])}, total chunks: {data['total_chunks']}",
            f"  Created: {data['created_at']}",
            f"  Last accessed: {data['last_accessed_at'] or 'never'}",
            f"  Complete: {'yes' if data['is_complete'] else 'no'}, "
            f"integrity: {'ok' if data['integrity_valid'] else 'invalid'}",
            "  Chunks:",
        ]
        for chunk in data['chunks']:
            lines.append(
                f"    #{chunk['sequence_number']} {short_id(chunk['checksum'])} "
                f"{format_file_size(chunk['size'])} on {chunk['storage_provider']}"
            )
        return '\n'.join(lines)

    def reconstruct_file(self, file_id: str, output_path: str) -> str:
        """
        Ask the service to rebuild a file at output_path.

        Returns:
            Success message or the terminal state reported by the service
        """
        target = resolve_path(output_path)
        logger.info(f"Reconstructing file: {file_id} -> {target}")
        try:
            response = self._request_with_retry(
                'POST',
                f'/files/{file_id}/reconstruct',
                json={'output_path': target}
            )
        except ConnectionError as e:
            return f"Error: {e}"

        if response.status_code != 200:
            return f"Error: {self._format_error(response)}"

        data = response.json()
        if data['success']:
            return (
                f"{GREEN}Reconstructed{RESET} {file_id} to {data['output_path']} "
                f"({format_file_size(data['bytes_written'])})"
            )
        return f"Reconstruction failed [{data['state']}]: {data['message']}"

    def delete_file(self, file_id: str) -> str:
        try:
            response = self._request_with_retry('DELETE', f'/files/{file_id}')
        except ConnectionError as e:
            return f"Error: {e}"

        if response.status_code != 200:
            return f"Error: {self._format_error(response)}"

        data = response.json()
        if data['success']:
            return f"Deleted file {file_id}"
        return f"Error: {data['message']}"

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
