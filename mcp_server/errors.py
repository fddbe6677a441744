"""Error taxonomy shared by the server and the standup bot."""


class HarvestError(Exception):
    """Base class for failures reaching or interpreting Harvest data."""


class RemoteUnavailable(HarvestError):
    """Harvest could not be reached, or refused the request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NotFound(HarvestError):
    """The catalog holds no candidates for the requested entity type."""

    def __init__(self, entity: str, hint: str | None = None):
        self.entity = entity
        self.hint = hint
        super().__init__(f"No active {entity} available to match '{hint}'")


class EntryCreationFailed(HarvestError):
    def __init__(self, entity: str, hint: str | None = None):
        self.entity = entity
        self.hint = hint
        super().__init__(f"Could not create time entry: no {entity} found for '{hint}'")


class UnrecognizedOperation(Exception):
    """Raised at the protocol boundary for unknown tool or prompt names."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"Unknown {kind}: {name}")
