# mentor_chat/core/exceptions.py
"""Custom exceptions for the mentor chat application."""
from typing import Optional


class MentorChatException(Exception):
    """Base exception for the application"""
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(MentorChatException):
    """Bad or missing input"""
    status_code = 400


class InvalidPairError(ValidationError):
    def __init__(self):
        super().__init__("Mentor and patient must be different profiles")


class NotAParticipantError(ValidationError):
    def __init__(self, sender_id, room_id):
        super().__init__(f"Profile {sender_id} is not a participant of chat room {room_id}")


class EmptyContentError(ValidationError):
    def __init__(self):
        super().__init__("Message content must not be empty")


class NotFoundError(MentorChatException):
    """Resource not found exception"""
    status_code = 404

    def __init__(self, resource: str, id=None):
        message = f"{resource} not found"
        if id is not None:
            message += f" with id: {id}"
        super().__init__(message)


class RoomNotFoundError(NotFoundError):
    def __init__(self, room_id):
        super().__init__("Chat room", room_id)


class ParticipantNotFoundError(NotFoundError):
    def __init__(self, profile_id):
        super().__init__("Participant profile", profile_id)


class ProfileNotFoundError(NotFoundError):
    def __init__(self, profile_id=None):
        super().__init__("Profile", profile_id)


class MentorNotFoundError(NotFoundError):
    def __init__(self, profile_id=None):
        super().__init__("Mentor", profile_id)


class ConflictError(MentorChatException):
    """Unique data already exists"""
    status_code = 409


class AuthenticationError(MentorChatException):
    status_code = 401

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class StorageUnavailableError(MentorChatException):
    """Backing store failed; safe for the caller to retry"""
    status_code = 500

    def __init__(self, message: str = "Storage unavailable"):
        super().__init__(message)
