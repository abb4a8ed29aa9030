"""Request-level failures, each carrying the HTTP status it is reported with."""


class ApiError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"success": False, "message": self.message}


class ValidationError(ApiError):
    """Missing or malformed required field; nothing was written."""
    status_code = 400


class NotFoundError(ApiError):
    """Target row absent or owned by another user."""
    status_code = 404


class StoreError(ApiError):
    """Database failure. The message is generic; details stay in the server log."""
    status_code = 500
