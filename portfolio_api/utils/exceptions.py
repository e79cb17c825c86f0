from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """Field-level validation failure; ``errors`` is a list of {field, message}."""

    def __init__(self, errors: list[dict], detail: str = "Validation errors"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
        self.errors = errors

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}])


class Unauthorized(HTTPException):
    def __init__(self, detail: str = "Not authorized"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class Forbidden(HTTPException):
    def __init__(self, detail: str = "Admin access required"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class InvalidUpload(HTTPException):
    def __init__(self, detail: str = "Invalid upload"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def pydantic_errors(errors) -> list[dict]:
    """Flatten pydantic error dicts into the {field, message} shape."""
    flattened = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        flattened.append(
            {
                "field": ".".join(location) or "body",
                "message": error.get("msg", "Invalid value"),
            }
        )
    return flattened
