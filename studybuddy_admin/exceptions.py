"""
Moderation error taxonomy.

Every precondition failure in the service layer raises one of
these. They subclass ValueError like the rest of the service
layer's validation errors; the API layer reads kind and
status_code to build the HTTP response.
"""


class ModerationError(ValueError):
    kind = "MODERATION_ERROR"
    status_code = 400


class NotFoundError(ModerationError):
    kind = "NOT_FOUND"
    status_code = 404


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class CourseNotFoundError(NotFoundError):
    def __init__(self, course_id: int):
        super().__init__(f"Course {course_id} not found")
        self.course_id = course_id


class GroupNotFoundError(NotFoundError):
    def __init__(self, group_id: int):
        super().__init__(f"Group {group_id} not found")
        self.group_id = group_id


class SelfModificationError(ModerationError):
    kind = "SELF_MODIFICATION"


class SelfDemotionError(ModerationError):
    kind = "SELF_DEMOTION"


class LastAdminError(ModerationError):
    kind = "LAST_ADMIN"


class InvalidStateError(ModerationError):
    kind = "INVALID_STATE"


class TooSoonError(ModerationError):
    kind = "TOO_SOON"


class StillBannedError(ModerationError):
    kind = "STILL_BANNED"


class StillSuspendedError(ModerationError):
    kind = "STILL_SUSPENDED"


class MetadataSerializationError(Exception):
    """Audit metadata could not be encoded as JSON."""
