"""Storefront exceptions.

Validation problems stay inside the form step that produced them; only
submission and catalog loading failures cross the network boundary.
"""


class StorefrontError(Exception):
    """Base class for all storefront errors."""


class ValidationError(StorefrontError):
    """Malformed or incomplete address, payment, email or phone."""

    def __init__(self, errors: list[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__(", ".join(self.errors))


class IncompleteOrderError(ValidationError):
    """OrderDraft.submit() was called while the draft does not validate."""


class SubmissionError(StorefrontError):
    """POST /order failed on the network or on the server."""


class LoadError(StorefrontError):
    """GET /product failed; the catalog stays empty."""
