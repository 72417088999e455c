"""
Error types shared by the store, the filter engine and the web layer
"""


class LunchMapError(Exception):
    """Base class for application errors"""


class InvalidInput(LunchMapError, ValueError):
    """A request parameter is malformed (answered with 400 Bad Request)"""


class NotFound(LunchMapError, LookupError):
    """No restaurant matches the requested identity (answered with 404)"""
