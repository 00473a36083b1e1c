"""
Exceptions raised while building a query from a template.

Every error subclasses ``QueryBuildError`` (itself a ``ValueError``), so a
caller can treat any of them as "no usable query produced".
"""


class QueryBuildError(ValueError):
    """Base class for all template compilation and substitution errors."""

    pass


class TemplateFormatError(QueryBuildError):
    """The template's conditional blocks are malformed."""

    pass


class NestedFragmentError(TemplateFormatError):
    pass


class UnbalancedFragmentError(TemplateFormatError):
    pass


class MissingArgumentError(QueryBuildError):
    """A placeholder was reached with no argument left to consume."""

    pass


class MisplacedSkipError(QueryBuildError):
    """The skip marker was passed for a placeholder outside any conditional block."""

    pass


class UnsupportedTypeError(QueryBuildError):
    pass


class TypeMismatchError(QueryBuildError):
    pass


class NullArgumentError(QueryBuildError):
    pass


class EmptyArrayError(QueryBuildError):
    pass


class InvalidIdentifierError(QueryBuildError):
    pass
