"""Exception classes shared by the data server and its clients."""


class DataServiceError(Exception):
    """
    Base exception class for all data service errors.
    """
    pass


class NotFoundError(DataServiceError):
    """
    Raised when a requested number name, string index or file does not exist.
    """

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class MidStreamFailureError(DataServiceError):
    """
    Raised when a file transfer fails after its first chunk could be produced.

    Chunks already received for the call are not valid; the whole transfer
    has to be requested again.
    """
    pass


class ServiceUnavailableError(DataServiceError):
    """
    Raised when the data server is unreachable or the call deadline expired.
    """
    pass
