"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """A required setting is unset, or still a placeholder in a deployed environment."""

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"{setting} must be configured")
