"""gRPC server implementation for the data service."""

import grpc
from grpc import aio
import logging
from contextlib import closing
from typing import AsyncIterator, Type, TypeVar

from common.protocol import (
    NumberRequest,
    NumberReply,
    StringRequest,
    StringReply,
    FileRequest,
    ProtocolError
)
from common.constants import DATA_SERVICE_NAME
from common.exceptions import MidStreamFailureError, NotFoundError
from dataserver.file_streamer import TransferState
from dataserver.service import DataService

logger = logging.getLogger(__name__)

RequestT = TypeVar('RequestT')


class DataServiceServicer:
    """
    gRPC service implementation for GetNumber, GetString and GetFile.
    """

    def __init__(self, data_service: DataService):
        """
        Initialize servicer with the service it exposes.

        Args:
            data_service: DataService instance holding the tables and file streamer
        """
        self.data_service = data_service

    async def _parse_request(
        self,
        message_cls: Type[RequestT],
        request_bytes: bytes,
        context: grpc.aio.ServicerContext
    ) -> RequestT:
        """Decode a request, aborting with INVALID_ARGUMENT if it is malformed."""
        try:
            return message_cls.from_json(request_bytes)
        except ProtocolError as e:
            logger.warning(f"Rejected malformed {message_cls.__name__}: {e}")
            await context.abort(grpc.StatusCode.INVALID_ARGUMENT, str(e))

    async def GetNumber(
        self,
        request_bytes: bytes,
        context: grpc.aio.ServicerContext
    ) -> bytes:
        """
        Handle GetNumber RPC (unary).

        Args:
            request_bytes: Serialized NumberRequest
            context: gRPC context

        Returns:
            Serialized NumberReply
        """
        request = await self._parse_request(NumberRequest, request_bytes, context)

        try:
            number = self.data_service.get_number(request.name)
        except NotFoundError as e:
            logger.warning(e.detail)
            await context.abort(grpc.StatusCode.NOT_FOUND, e.detail)

        logger.info(f"GetNumber {request.name} -> {number}")
        return NumberReply(number=number).to_json()

    async def GetString(
        self,
        request_bytes: bytes,
        context: grpc.aio.ServicerContext
    ) -> bytes:
        """
        Handle GetString RPC (unary).

        Args:
            request_bytes: Serialized StringRequest
            context: gRPC context

        Returns:
            Serialized StringReply
        """
        request = await self._parse_request(StringRequest, request_bytes, context)

        try:
            string = self.data_service.get_string(request.index)
        except NotFoundError as e:
            logger.warning(e.detail)
            await context.abort(grpc.StatusCode.NOT_FOUND, e.detail)

        logger.info(f"GetString {request.index} -> {string}")
        return StringReply(string=string).to_json()

    async def GetFile(
        self,
        request_bytes: bytes,
        context: grpc.aio.ServicerContext
    ) -> AsyncIterator[bytes]:
        """
        Handle GetFile RPC (server streaming).
        Sends the file as FileChunk messages in file order.

        Args:
            request_bytes: Serialized FileRequest
            context: gRPC context

        Yields:
            Serialized FileChunk messages
        """
        request = await self._parse_request(FileRequest, request_bytes, context)
        filename = request.filename

        try:
            transfer = self.data_service.get_file(filename)
        except NotFoundError as e:
            logger.warning(e.detail)
            await context.abort(grpc.StatusCode.NOT_FOUND, e.detail)

        logger.info(f"Streaming file {filename}")

        with closing(transfer.chunks(is_cancelled=context.cancelled)) as chunks:
            try:
                for chunk in chunks:
                    yield chunk.to_json()
            except MidStreamFailureError as e:
                logger.error(f"Transfer of {filename} failed after {transfer.chunks_sent} chunks: {e}")
                await context.abort(grpc.StatusCode.DATA_LOSS, str(e))

        if transfer.state is TransferState.CANCELLED:
            logger.info(f"Transfer of {filename} cancelled after {transfer.chunks_sent} chunks")
        else:
            logger.info(f"Successfully streamed file {filename} ({transfer.bytes_sent} bytes, {transfer.chunks_sent} chunks)")


def create_server(data_service: DataService) -> aio.Server:
    """
    Create and configure gRPC server.

    Args:
        data_service: DataService instance to expose

    Returns:
        Configured gRPC server (no port bound yet)
    """
    server = aio.server()
    servicer = DataServiceServicer(data_service)

    server.add_generic_rpc_handlers((
        grpc.method_handlers_generic_handler(
            DATA_SERVICE_NAME,
            {
                'GetNumber': grpc.unary_unary_rpc_method_handler(
                    servicer.GetNumber,
                    request_deserializer=lambda x: x,
                    response_serializer=lambda x: x,
                ),
                'GetString': grpc.unary_unary_rpc_method_handler(
                    servicer.GetString,
                    request_deserializer=lambda x: x,
                    response_serializer=lambda x: x,
                ),
                'GetFile': grpc.unary_stream_rpc_method_handler(
                    servicer.GetFile,
                    request_deserializer=lambda x: x,
                    response_serializer=lambda x: x,
                ),
            }
        ),
    ))

    return server
