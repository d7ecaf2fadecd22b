"""
Custom exceptions for the statistics engine with dashboard-friendly messages.

"No data" situations (zero games, thresholds not met) are never raised; they are
represented as None or absent entries in the reports.
"""

class StatisticsError(Exception):
    """Base exception for statistics computation errors."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message

class DanglingReferenceError(StatisticsError):
    """Raised when a record references an id absent from the supplied snapshot."""
    def __init__(self, entity: str, entity_id: str, referenced_by: str = None):
        location = f" (referenced by {referenced_by})" if referenced_by else ""
        super().__init__(
            f"{entity} '{entity_id}' not found in snapshot{location}",
            "Statistics are unavailable because the game data is inconsistent."
        )
        self.entity = entity
        self.entity_id = entity_id
        self.referenced_by = referenced_by

class InvalidSnapshotError(StatisticsError):
    """Raised when a snapshot record violates an invariant guaranteed upstream."""
    def __init__(self, record: str, reason: str):
        super().__init__(
            f"Invalid snapshot record {record}: {reason}",
            "Statistics are unavailable because a game record is malformed."
        )
        self.record = record
        self.reason = reason

class PlaygroupNotFoundError(StatisticsError):
    """Raised when the requested playgroup does not exist."""
    def __init__(self, playgroup_id: str):
        super().__init__(
            f"Playgroup '{playgroup_id}' not found",
            "That playgroup could not be found."
        )
        self.playgroup_id = playgroup_id
