"""Domain error taxonomy.

Every failure carries a machine-stable reason plus a short human message and
is raised as an ``HTTPException`` so FastAPI renders it as
``{"detail": {"error": reason, "message": message}}``.
"""
from fastapi import HTTPException, status


class VotingError(HTTPException):
    """Base class for all business-rule failures."""

    reason = "Error"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(
            status_code=self.status_code,
            detail={"error": self.reason, "message": self.message},
        )


# --- 400: user-correctable input ---

class ValidationError(VotingError):
    reason = "ValidationError"
    default_message = "Invalid request"


class IncompleteBallot(VotingError):
    reason = "IncompleteBallot"
    default_message = "Incomplete ballot: vote once in every category"


class InvalidCategory(VotingError):
    reason = "InvalidCategory"
    default_message = "Invalid category"


class DuplicateCategoryVote(VotingError):
    reason = "DuplicateCategoryVote"
    default_message = "Duplicate category vote"


class InvalidNominee(VotingError):
    reason = "InvalidNominee"
    default_message = "Invalid nominee for category"


# --- 401 / 403 / 404: credentials and lookups ---

class Unauthorized(VotingError):
    reason = "Unauthorized"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class Forbidden(VotingError):
    reason = "Forbidden"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(VotingError):
    reason = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


# --- 403 / 409: request incompatible with current state ---

class VotingClosed(VotingError):
    reason = "VotingClosed"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Voting is closed (results have been revealed)"


class NotRevealedYet(VotingError):
    reason = "NotRevealedYet"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not revealed yet"


class AlreadyVoted(VotingError):
    reason = "AlreadyVoted"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Already voted"


class SetupLocked(VotingError):
    reason = "SetupLocked"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Cannot change setup after votes have been cast"


class CapacityExceeded(VotingError):
    reason = "CapacityExceeded"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Exceeds max members"


class RevealNotReady(VotingError):
    reason = "RevealNotReady"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Not enough votes to reveal"


class NotConfigured(VotingError):
    reason = "NotConfigured"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Voting not set up yet"


class ConcurrentModification(VotingError):
    reason = "ConcurrentModification"
    status_code = status.HTTP_409_CONFLICT
    default_message = "The group changed while this request was processed. Reload and try again."


# --- 500: backing store ---

class StoreError(VotingError):
    reason = "StoreError"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Unknown error"
