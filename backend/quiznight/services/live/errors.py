class LiveGameError(Exception):
    """Base class for failures surfaced by the live session engine."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'error': self.message}


class NotFound(LiveGameError):
    """Session, team, player or question does not exist."""

    status_code = 404


class InvalidState(LiveGameError):
    """Operation is not valid for the session's current phase."""

    status_code = 400


class Unauthorized(LiveGameError):
    """Caller is not a logged-in admin."""

    status_code = 401
