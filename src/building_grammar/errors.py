"""Custom exception hierarchy for the building grammar."""


class BuildingGrammarError(Exception):
    """Base exception for all building grammar errors."""


class InvalidParamsError(BuildingGrammarError):
    """Bad parameter values (maps to HTTP 400)."""


class MissingParameterError(InvalidParamsError):
    """A band or grid entry required by the footprint is absent."""


class UnknownStyleError(InvalidParamsError):
    """Opening style id with no registered recipe."""


class GeometryError(BuildingGrammarError):
    """CSG or geometry construction failure (maps to HTTP 500)."""


class BuildTimeoutError(GeometryError):
    """The build did not finish within the configured timeout."""


class ValidationError(BuildingGrammarError):
    """Post-generation validation check failure (maps to HTTP 500)."""
