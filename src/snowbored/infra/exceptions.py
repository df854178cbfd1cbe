class SettingsError(Exception):
    """Raised when the settings file is missing, unreadable or malformed."""


class AssetLoadError(Exception):
    """Raised by a single asset candidate that could not be fetched."""


class ScoreLoadError(Exception):
    """Raised when the score book cannot be read or decoded."""


class ScoreSaveError(Exception):
    """Raised when the score book cannot be written."""
