"""
Custom exceptions for ``GreyMorph``
"""


class GreyMorphException(Exception):
    """
    Base exception for all exceptions in GreyMorph
    """
    pass


class GreyMorphValueError(GreyMorphException, ValueError):
    """
    Base exception for all exceptions related to value errors
    """
    pass


class ConfigurationError(GreyMorphValueError):
    """
    Exception raised when a filter is configured in a way its algorithm cannot handle,
    e.g. a non decomposable structure element passed to the anchor algorithm
    """
    pass


class GeometryError(GreyMorphValueError):
    """
    Exception raised when indices, regions or directions are not valid for the geometry they are used in
    """
    pass


class ConfigNotFoundError(GreyMorphException):
    """
    Exception raised when a configuration file is not found
    """
    pass
