"""Validation failures raised for a route selection.

Each carries the message shown to the user. None of them is fatal: the
calculator reports the message and renders nothing else.
"""


class RouteInputError(Exception):
    message = "Invalid route selection."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)

    @property
    def user_message(self) -> str:
        return str(self)


class MissingSelection(RouteInputError):
    message = "Please select both departure and arrival airports."


class IdenticalAirports(RouteInputError):
    message = "Departure and arrival airports cannot be the same."


class UnknownAirport(RouteInputError):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Unknown airport code: {code}")
