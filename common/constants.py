"""Project-wide constants (chunk size, service names, default tables)."""

FILE_CHUNK_SIZE_BYTES: int = 1 << 10  # 1 KiB per streamed file chunk

DATA_SERVICE_NAME: str = "app.DataService"
DEFAULT_HOST: str = "localhost"
DEFAULT_PORT: int = 50051

DEFAULT_GRACE_PERIOD_SECONDS: float = 5.0
CLIENT_TIMEOUT_SECONDS: float = 30.0
CLIENT_MAX_RETRIES: int = 3

DEFAULT_NUMBERS: dict[str, int] = {"one": 1, "two": 2, "three": 3, "four": 4}
DEFAULT_STRINGS: tuple[str, ...] = ("foo", "bar", "spam", "ham", "eggs")
