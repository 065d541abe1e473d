class FormBuilderError(Exception):
    """Base class for failures reported to the caller of a builder operation."""


class NotFound(FormBuilderError):
    """A referenced form, template, submission target or field does not exist."""


class InvalidField(FormBuilderError):
    """A field definition or patch cannot be shaped into a known field type."""


class PersistenceFailure(FormBuilderError):
    """The underlying store could not be read or rejected a write."""
