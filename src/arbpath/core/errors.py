class ArbPathError(Exception):
    pass


class DataSourceError(ArbPathError):
    pass


class RateLimitError(DataSourceError):
    pass


class InvalidQueryError(ArbPathError):
    pass


class EmptyGraphError(ArbPathError):
    """No rates could be fetched from any source."""


class SearchCancelled(ArbPathError):
    pass
