# carefund/core/errors.py
"""
Error taxonomy shared by the store, the services and the collaborator adapters.

Each error carries the HTTP status it maps to; `carefund.main` registers a
single exception handler that turns any `CareFundError` into
`{"message": ...}` with that status.
"""


class CareFundError(Exception):
    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or self.__class__.__name__


class InvalidArgument(CareFundError):
    status_code = 400


class Unauthenticated(CareFundError):
    status_code = 401


class NotFound(CareFundError):
    status_code = 404


class InvalidState(CareFundError):
    status_code = 409


class Internal(CareFundError):
    status_code = 500


class Unavailable(CareFundError):
    status_code = 503
