class AggregatorError(Exception):
    """Base error for the stock price aggregator."""


class QuoteFetchError(AggregatorError):
    pass


class InvalidSymbolError(AggregatorError, ValueError):
    pass
