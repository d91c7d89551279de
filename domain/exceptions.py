"""Error taxonomy shared by repositories, services and the transport layer."""


class StatsError(Exception):
    """Base class for every error the stats core raises on purpose."""


class NotFoundError(StatsError):
    """The requested match, profile or summoner does not exist."""


class InvalidArgumentError(StatsError):
    """A required argument was missing or blank."""


class RepositoryUnavailableError(StatsError):
    """The backing store could not be reached or did not answer in time."""
