from fastapi import status


class WorkflowError(Exception):
    """Base class for rejected connection-workflow operations.

    Each subclass carries a stable ``kind`` that clients can match on and
    the HTTP status the API answers with.
    """

    kind: str = "WorkflowError"
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "The operation could not be completed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidStatus(WorkflowError):
    kind = "InvalidStatus"
    default_message = "Invalid status for this operation."


class UserNotFound(WorkflowError):
    kind = "UserNotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found."


class SelfRequestForbidden(WorkflowError):
    kind = "SelfRequestForbidden"
    default_message = "You cannot send a connection request to yourself."


class ReverseRequestExists(WorkflowError):
    kind = "ReverseRequestExists"
    status_code = status.HTTP_409_CONFLICT
    default_message = (
        "This user has already sent you a connection request. Please review it."
    )


class DuplicateRelationship(WorkflowError):
    kind = "DuplicateRelationship"
    status_code = status.HTTP_409_CONFLICT
    default_message = "A connection request already exists between you and this user."


class RequestNotFound(WorkflowError):
    kind = "RequestNotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "No connection request found from this user."


class AlreadyReviewed(WorkflowError):
    kind = "AlreadyReviewed"
    status_code = status.HTTP_409_CONFLICT
    default_message = "This connection request can no longer be reviewed."


class SelfReviewForbidden(WorkflowError):
    kind = "SelfReviewForbidden"
    default_message = "You cannot review your own connection request."


class ConnectionNotFound(WorkflowError):
    kind = "ConnectionNotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "No active connection found with this user."
