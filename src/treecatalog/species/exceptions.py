"""Exceptions raised by the species resolution core."""


class SpeciesError(Exception):
    """Base class for species resolution failures."""


class DataAccessError(SpeciesError):
    """The row store failed or rejected an operation."""


class NotFoundError(SpeciesError):
    """A required canonical record does not exist."""


class InvalidReferenceError(SpeciesError):
    """A canonical-identifier-shaped reference does not resolve to any record."""


class TaxonSourceError(SpeciesError):
    """The top-level registry search failed outright."""
