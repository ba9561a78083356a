from fastapi import HTTPException

from app.exceptions import BlogError, ConflictError, NotFoundError, ValidationError

# Most specific first; BlogError catches any future subclass
STATUS_BY_ERROR = {
    ValidationError: 422,
    NotFoundError: 404,
    ConflictError: 409,
    BlogError: 400,
}


def to_http_exception(error: BlogError) -> HTTPException:
    status_code = next(
        code for error_type, code in STATUS_BY_ERROR.items() if isinstance(error, error_type)
    )
    return HTTPException(status_code=status_code, detail=str(error))
