"""gRPC client for the data service."""

import asyncio
import logging
from pathlib import Path
from typing import AsyncIterator, Optional

import grpc

from client import config
from common.constants import DATA_SERVICE_NAME
from common.exceptions import (
    MidStreamFailureError,
    NotFoundError,
    ServiceUnavailableError
)
from common.protocol import (
    FileChunk,
    FileRequest,
    NumberReply,
    NumberRequest,
    StringReply,
    StringRequest
)

logger = logging.getLogger(__name__)

TRANSIENT_CODES = (grpc.StatusCode.UNAVAILABLE, grpc.StatusCode.DEADLINE_EXCEEDED)


def translate_rpc_error(error: grpc.RpcError) -> Exception:
    """
    Map a gRPC error to the matching data service exception.

    Args:
        error: Error raised by a call

    Returns:
        Exception to raise in its place (the original error for unmapped codes)
    """
    code = error.code()
    if code == grpc.StatusCode.NOT_FOUND:
        return NotFoundError(error.details())
    if code == grpc.StatusCode.DATA_LOSS:
        return MidStreamFailureError(error.details())
    if code in TRANSIENT_CODES:
        return ServiceUnavailableError(f"Data service unavailable: {error.details()}")
    return error


class DataServiceClient:
    """
    gRPC client for data service operations.
    Handles connection management and RPC calls.
    """

    def __init__(
        self,
        target: str,
        timeout: float = config.TIMEOUT_SECONDS,
        max_retries: int = config.MAX_RETRIES
    ):
        """
        Initialize client with lazy connection.

        Args:
            target: Server address as "host:port"
            timeout: Deadline in seconds for each call
            max_retries: Attempts for unary calls on transient failures
        """
        self._channel: Optional[grpc.aio.Channel] = None
        self._target = target
        self.timeout = timeout
        self.max_retries = max_retries

    def _ensure_channel(self) -> grpc.aio.Channel:
        """Ensure gRPC channel is established."""
        if self._channel is None:
            self._channel = grpc.aio.insecure_channel(self._target)
            logger.info(f"Established gRPC channel to {self._target}")
        return self._channel

    async def close(self) -> None:
        """Close gRPC channel."""
        if self._channel:
            await self._channel.close()
            self._channel = None

    async def __aenter__(self) -> 'DataServiceClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _call_unary(self, method: str, request_bytes: bytes) -> bytes:
        """
        Invoke a unary method, retrying with exponential backoff on transient failures.

        Raises:
            NotFoundError, ServiceUnavailableError or grpc.RpcError once retries are exhausted
        """
        channel = self._ensure_channel()
        multi_callable = channel.unary_unary(
            f'/{DATA_SERVICE_NAME}/{method}',
            request_serializer=lambda x: x,
            response_deserializer=lambda x: x,
        )

        for attempt in range(self.max_retries):
            try:
                return await multi_callable(request_bytes, timeout=self.timeout)
            except grpc.RpcError as e:
                if e.code() in TRANSIENT_CODES and attempt < self.max_retries - 1:
                    delay = 2 ** attempt
                    logger.warning(f"Transient failure, retrying in {delay}s (attempt {attempt + 1}/{self.max_retries}): {e.details()}")
                    await asyncio.sleep(delay)
                    continue
                error = translate_rpc_error(e)
                if error is e:
                    raise
                raise error from e

        raise ServiceUnavailableError(f"No attempts made to call {method}")

    async def get_number(self, name: str) -> int:
        """
        Obtain the number with the given name.

        Raises:
            NotFoundError: If the name is unknown
            ServiceUnavailableError: If the server is unreachable
        """
        response_bytes = await self._call_unary('GetNumber', NumberRequest(name=name).to_json())
        return NumberReply.from_json(response_bytes).number

    async def get_string(self, index: int) -> str:
        """
        Obtain the string at the given index.

        Raises:
            NotFoundError: If the index is out of range
            ServiceUnavailableError: If the server is unreachable
        """
        response_bytes = await self._call_unary('GetString', StringRequest(index=index).to_json())
        return StringReply.from_json(response_bytes).string

    async def get_file(self, filename: str) -> AsyncIterator[FileChunk]:
        """
        Stream a file from the server.

        Note: Streaming operations are never retried.
        Closing the iterator early cancels the call on the server.

        Yields:
            FileChunk messages in file order

        Raises:
            NotFoundError: If the file does not exist on the server
            MidStreamFailureError: If the transfer failed after it started
            ServiceUnavailableError: If the server is unreachable
        """
        channel = self._ensure_channel()
        call = channel.unary_stream(
            f'/{DATA_SERVICE_NAME}/GetFile',
            request_serializer=lambda x: x,
            response_deserializer=lambda x: x,
        )(FileRequest(filename=filename).to_json(), timeout=self.timeout)

        try:
            async for response_bytes in call:
                yield FileChunk.from_json(response_bytes)
        except grpc.RpcError as e:
            error = translate_rpc_error(e)
            if error is e:
                raise
            raise error from e
        finally:
            if not call.done():
                call.cancel()

    async def download_file(self, filename: str, destination: str | Path) -> int:
        """
        Download a file and write it to destination.

        Data goes to a ".part" file first, which replaces destination only
        once the whole transfer succeeded.

        Args:
            filename: File to request from the server
            destination: Local path to write

        Returns:
            Number of bytes written

        Raises:
            NotFoundError, MidStreamFailureError, ServiceUnavailableError
        """
        destination = Path(destination)
        part_path = destination.with_name(destination.name + '.part')
        written = 0

        try:
            with open(part_path, 'wb') as f:
                async for chunk in self.get_file(filename):
                    f.write(chunk.data)
                    written += chunk.size
        except BaseException:
            part_path.unlink(missing_ok=True)
            raise

        part_path.replace(destination)
        logger.info(f"Downloaded {filename} to {destination} ({written} bytes)")
        return written
