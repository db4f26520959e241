"""Error taxonomy shared by the core components and the HTTP layer."""


class CouncilError(Exception):
    status_code = 500
    default_detail = "Internal error"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class BadRequest(CouncilError):
    status_code = 400
    default_detail = "Bad request"


class Unauthorized(CouncilError):
    status_code = 401
    default_detail = "Unauthorized"


class Forbidden(CouncilError):
    status_code = 403
    default_detail = "Forbidden"


class NotFound(CouncilError):
    status_code = 404
    default_detail = "Not found"


class Conflict(CouncilError):
    status_code = 409
    default_detail = "Conflict"


class InternalError(CouncilError):
    status_code = 500
    default_detail = "Internal error"


class StoreError(InternalError):
    """Raised by the storage layer on communication or serialization failure."""

    default_detail = "Storage failure"
