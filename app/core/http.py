from fastapi import HTTPException, status

from app.core.result import ErrorKind, Result

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INSUFFICIENT_STOCK: status.HTTP_400_BAD_REQUEST,
    ErrorKind.IMMUTABLE_FIELD: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
}


def unwrap(result: Result):
    if result.ok:
        return result.value
    error = result.error
    raise HTTPException(
        status_code=STATUS_BY_KIND.get(error.kind, status.HTTP_400_BAD_REQUEST),
        detail={"error": error.kind.value, "message": error.message},
    )


__all__ = ["STATUS_BY_KIND", "unwrap"]
