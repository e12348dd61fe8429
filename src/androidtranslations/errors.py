class AuditError(Exception):
    """Base class for everything the audit raises on purpose."""


class CatalogIOError(AuditError, OSError):
    """The scan root or a catalog file could not be read."""


class ParseError(AuditError):
    """A catalog is not a well-formed <resources> document."""


class NotFoundError(AuditError):
    """A string's text does not occur verbatim in its catalog."""


class ProvenanceError(AuditError):
    """Version control could not tell when a line range last changed."""


class ConfigError(AuditError):
    """The scanned tree cannot be audited as configured."""
