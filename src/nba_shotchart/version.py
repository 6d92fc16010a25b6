"""Version information for nba_shotchart."""

__version__ = "1.0.0"
