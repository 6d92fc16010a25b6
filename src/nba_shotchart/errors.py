"""Exception types shared across the store, service, API and client layers."""


class ShotChartError(Exception):
    """Base class for shot chart failures."""


class NotFoundError(ShotChartError):
    """Requested player, season or resource does not exist."""


class TransportError(ShotChartError):
    """The shot record store or the remote API could not be reached."""


class ConfigError(ShotChartError):
    """Invalid binning method, cell size or color scale."""
