from fastapi import HTTPException
from typing import Any, Dict, Optional

class CadenceException(HTTPException):
    """Base exception for Cadence API"""
    def __init__(
        self,
        status_code: int,
        detail: str,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)

class NotFoundException(CadenceException):
    """Resource not found"""
    def __init__(self, resource: str, resource_id):
        super().__init__(
            status_code=404,
            detail=f"{resource} with id {resource_id} not found"
        )

class NonExistentIdError(CadenceException):
    """A referenced artist, album, user or track does not exist.

    Raised before any write happens, so the request leaves the store untouched.
    """
    def __init__(self, message: str):
        super().__init__(status_code=400, detail=message)

class UnauthorizedError(CadenceException):
    """User is not authorized"""
    def __init__(self, message: str = "Not authorized"):
        super().__init__(
            status_code=401,
            detail=message,
            headers={"WWW-Authenticate": "Bearer"}
        )
