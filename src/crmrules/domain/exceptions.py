"""Domain exceptions."""


class CrmRulesError(Exception):
    """Base exception for crmrules."""

    pass


class NotFound(CrmRulesError):
    """Requested resource was not found."""

    def __init__(self, entity: str, identifier: str) -> None:
        super().__init__(f"{entity} not found: {identifier}")
        self.entity = entity
        self.identifier = identifier


class ValidationError(CrmRulesError):
    """Validation failed for input data."""

    pass


class ConfigurationError(CrmRulesError):
    """Calendar data needed for a computation is missing or malformed."""

    pass


class CycleDetectedError(CrmRulesError):
    """Role inheritance revisits a role already on the current path."""

    def __init__(self, path: list[str]) -> None:
        super().__init__("Circular inheritance detected: " + " -> ".join(path))
        self.path = path


class DeletionBlocked(CrmRulesError):
    """Role cannot be deleted in its current state."""

    pass
