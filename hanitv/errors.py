"""Failure kinds raised inside provider operations.

None of these escape a provider operation: each one is caught at the
operation boundary and turned into that operation's fallback value.
"""


class HanimeError(Exception):
    """Base class for hanitv failures."""


class InvalidInput(HanimeError):
    """The item URL does not contain a ``/videos/<digits>`` segment."""


class UpstreamUnavailable(HanimeError):
    """Non-success HTTP status or transport failure."""


class UpstreamShapeMismatch(HanimeError):
    """The upstream JSON is missing a field we need."""
