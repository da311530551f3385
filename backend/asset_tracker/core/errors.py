class AssetTrackerError(Exception):
    """Base class for every expected failure the services report."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FieldValidationError(AssetTrackerError):
    """A field value failed its character, length or range check."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field

    def __str__(self):
        return f"{self.field}: {self.message}"


class RelationshipPreconditionError(AssetTrackerError):
    """A required association is absent."""


class AdminEligibilityError(RelationshipPreconditionError):
    """The account's employee is not in the administrator department."""


class DuplicateError(AssetTrackerError):
    pass


class NotFoundError(AssetTrackerError):
    def __init__(self, entity: str, key):
        super().__init__(f"{entity} {key!r} not found")
        self.entity = entity
        self.key = key


class PersistenceError(AssetTrackerError):
    """Storage failure. Never retried by the services."""


class VulnerabilityLookupError(PersistenceError):
    def __init__(self, status_code: int, reason: str | None):
        super().__init__(f"Failed to retrieve vulnerabilities: Error {status_code} {reason}.")
        self.status_code = status_code


class AuthenticationError(AssetTrackerError):
    pass


class PermissionDeniedError(AssetTrackerError):
    pass
