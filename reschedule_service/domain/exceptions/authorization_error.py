"""
Authorization-related domain exceptions.
"""


class PermissionDeniedError(Exception):
    """Raised when the acting party does not own the row it is changing."""

    def __init__(self, actor_id, action: str):
        self.actor_id = actor_id
        self.action = action
        super().__init__(f"Actor {actor_id} is not allowed to {action}")
