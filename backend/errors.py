"""Error taxonomy shared by every route.

Each error carries a stable ``category`` and the HTTP ``status_code`` it maps
to; ``main.py`` turns any ``ShareError`` into a structured JSON response.
"""


class ShareError(Exception):
    status_code = 500
    category = "internal"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(ShareError):
    status_code = 400
    category = "invalid_input"


class NotFound(ShareError):
    status_code = 404
    category = "not_found"


class NotStreamable(ShareError):
    status_code = 400
    category = "not_streamable"


class RangeError(ShareError):
    """A Range header that cannot be served for an object of ``size`` bytes."""

    status_code = 416

    def __init__(self, message: str, size: int):
        super().__init__(message)
        self.size = size


class MalformedRange(RangeError):
    category = "malformed_range"


class RangeNotSatisfiable(RangeError):
    category = "range_not_satisfiable"


class StorageUnavailable(ShareError):
    """A metadata or blob store operation failed.

    ``phase`` names the upload step that failed (``reserve``, ``store`` or
    ``finalize``), or ``lookup`` / ``read`` on the retrieval side.
    """

    status_code = 503
    category = "storage_unavailable"

    def __init__(self, message: str, phase: str):
        super().__init__(f"{message} (phase: {phase})")
        self.phase = phase
