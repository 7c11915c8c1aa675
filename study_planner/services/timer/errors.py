"""Timer errors"""


class InvalidState(Exception):
    """An operation was invoked in a phase that does not permit it"""

    def __init__(self, operation: str, phase: str):
        self.operation = operation
        self.phase = phase
        super().__init__(f"Cannot {operation} while timer is {phase}")


class NotificationUnavailable(Exception):
    """A break reminder could not be delivered. Never surfaced to callers."""
