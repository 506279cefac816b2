from django.core.exceptions import BadRequest


class InvalidQueryParameters(BadRequest):
    """
    Raised by the list selectors when filter/search parameters don't validate.

    Django turns BadRequest into a 400 response, so a list page either
    renders the full filtered result or fails as a whole.
    """

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}

    def __str__(self):
        return self.message
