"""DataService: the three operations exposed by the data server."""

from typing import Iterable, Mapping, Optional

from common.constants import DEFAULT_NUMBERS, DEFAULT_STRINGS, FILE_CHUNK_SIZE_BYTES
from dataserver.file_streamer import FileStreamer, FileTransfer
from dataserver.lookups import NumberLookup, StringLookup


class DataService:
    """
    Transport-independent implementation of GetNumber, GetString and GetFile.

    Holds no mutable shared state: the tables are immutable and every file
    transfer owns its own handle.
    """

    def __init__(
        self,
        numbers: Optional[Mapping[str, int]] = None,
        strings: Optional[Iterable[str]] = None,
        chunk_size: int = FILE_CHUNK_SIZE_BYTES
    ):
        self.number_lookup = NumberLookup(DEFAULT_NUMBERS if numbers is None else numbers)
        self.string_lookup = StringLookup(DEFAULT_STRINGS if strings is None else strings)
        self.file_streamer = FileStreamer(chunk_size=chunk_size)

    def get_number(self, name: str) -> int:
        return self.number_lookup.get_number(name)

    def get_string(self, index: int) -> str:
        return self.string_lookup.get_string(index)

    def get_file(self, filename: str) -> FileTransfer:
        """Open a transfer of the file; raises NotFoundError if it cannot be opened."""
        return self.file_streamer.open(filename)
