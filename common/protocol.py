"""Shared RPC message definitions for the data service (JSON serialization)."""

from dataclasses import dataclass
import json
import base64
import binascii


class ProtocolError(ValueError):
    """Raised when a message cannot be decoded or has invalid fields."""
    pass


def _decode_object(data: bytes) -> dict:
    """Decode a JSON object from message bytes."""
    try:
        obj = json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ProtocolError(f"Malformed message: {e}")
    if not isinstance(obj, dict):
        raise ProtocolError("Message must be a JSON object")
    return obj


def _require(obj: dict, field: str, expected: type):
    """Fetch a required field and check its type (bool is not an int here)."""
    if field not in obj:
        raise ProtocolError(f"Missing field '{field}'")
    value = obj[field]
    if isinstance(value, bool) or not isinstance(value, expected):
        raise ProtocolError(f"Field '{field}' must be of type {expected.__name__}")
    return value


@dataclass
class NumberRequest:
    """Request message for GetNumber RPC."""
    name: str

    def to_json(self) -> bytes:
        """Serialize to JSON bytes."""
        return json.dumps({'name': self.name}).encode('utf-8')

    @classmethod
    def from_json(cls, data: bytes) -> 'NumberRequest':
        """Deserialize from JSON bytes."""
        obj = _decode_object(data)
        return cls(name=_require(obj, 'name', str))


@dataclass
class NumberReply:
    """Response message for GetNumber RPC."""
    number: int

    def to_json(self) -> bytes:
        """Serialize to JSON bytes."""
        return json.dumps({'number': self.number}).encode('utf-8')

    @classmethod
    def from_json(cls, data: bytes) -> 'NumberReply':
        """Deserialize from JSON bytes."""
        obj = _decode_object(data)
        return cls(number=_require(obj, 'number', int))


@dataclass
class StringRequest:
    """Request message for GetString RPC."""
    index: int

    def to_json(self) -> bytes:
        """Serialize to JSON bytes."""
        return json.dumps({'index': self.index}).encode('utf-8')

    @classmethod
    def from_json(cls, data: bytes) -> 'StringRequest':
        """Deserialize from JSON bytes."""
        obj = _decode_object(data)
        return cls(index=_require(obj, 'index', int))


@dataclass
class StringReply:
    """Response message for GetString RPC."""
    string: str

    def to_json(self) -> bytes:
        """Serialize to JSON bytes."""
        return json.dumps({'string': self.string}).encode('utf-8')

    @classmethod
    def from_json(cls, data: bytes) -> 'StringReply':
        """Deserialize from JSON bytes."""
        obj = _decode_object(data)
        return cls(string=_require(obj, 'string', str))


@dataclass
class FileRequest:
    """Request message for GetFile RPC."""
    filename: str

    def to_json(self) -> bytes:
        """Serialize to JSON bytes."""
        return json.dumps({'filename': self.filename}).encode('utf-8')

    @classmethod
    def from_json(cls, data: bytes) -> 'FileRequest':
        """Deserialize from JSON bytes."""
        obj = _decode_object(data)
        return cls(filename=_require(obj, 'filename', str))


@dataclass(frozen=True)
class FileChunk:
    """
    One piece of a streamed file (GetFile response message).

    Only the first `size` bytes of `content` are meaningful.
    """
    content: bytes
    size: int

    @property
    def data(self) -> bytes:
        """Valid bytes of this chunk."""
        return self.content[:self.size]

    def to_json(self) -> bytes:
        """Serialize to JSON bytes."""
        return json.dumps({
            'content': base64.b64encode(self.data).decode('ascii'),
            'size': self.size
        }).encode('utf-8')

    @classmethod
    def from_json(cls, data: bytes) -> 'FileChunk':
        """Deserialize from JSON bytes."""
        obj = _decode_object(data)
        size = _require(obj, 'size', int)
        try:
            content = base64.b64decode(_require(obj, 'content', str), validate=True)
        except binascii.Error as e:
            raise ProtocolError(f"Invalid chunk content: {e}")
        if size < 0 or size > len(content):
            raise ProtocolError(f"Chunk size {size} does not match content length {len(content)}")
        return cls(content=content, size=size)
