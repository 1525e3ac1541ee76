"""Exception hierarchy for the build pipeline."""


class FeedsnapError(Exception):
    """Base class for all feedsnap errors."""


class ConfigurationError(FeedsnapError):
    """Invalid or missing configuration. Aborts the run before any fetch."""


class FetchError(FeedsnapError):
    """A source could not be fetched. Recovered per source as a warning."""


class FeedParseError(FetchError):
    """A feed document could not be parsed."""


class MissingCredentialError(FetchError):
    """An adapter needs a credential that is not configured."""


class ScrapeError(FeedsnapError):
    """A site scraper failed unexpectedly. Recovered per source as a warning."""
