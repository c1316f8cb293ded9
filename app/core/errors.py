from fastapi import HTTPException


class Unauthorized(HTTPException):
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(status_code=401, detail=message)


class ValidationError(HTTPException):
    def __init__(self, message: str):
        super().__init__(status_code=400, detail=message)


class InvalidTarget(ValidationError):
    pass


class InvalidStatus(ValidationError):
    pass


class NotFound(HTTPException):
    def __init__(self, message: str = "Not found"):
        super().__init__(status_code=404, detail=message)


class StorageError(HTTPException):
    """KV read/write failure. The client only ever sees a generic message."""

    def __init__(self, message: str = "Storage error"):
        super().__init__(status_code=500, detail=message)
