from __future__ import annotations


class RecommendationError(Exception):
    """Base class for failures that end a recommendation request."""

    status_code = 500


class BadRequestError(RecommendationError):
    status_code = 400


class NotFoundError(RecommendationError):
    status_code = 404


class RequestCancelledError(RecommendationError):
    """The request deadline passed or its token was cancelled."""

    status_code = 504

    def __init__(self, message: str = "Request cancelled") -> None:
        super().__init__(message)
