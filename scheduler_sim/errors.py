from __future__ import annotations


class InvalidInputError(ValueError):
    """
    Raised when a workload or simulation parameter is structurally invalid.

    ``field`` names the offending input (``arrival_time``, ``burst_time``,
    ``quantum``, ...), so callers can point the user at the bad value.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
