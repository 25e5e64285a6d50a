class GridError(Exception):
    """Base class for failures that end up as an error result."""

    message = "Grid conversion failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class ConfigParseError(GridError):
    message = "Invalid configuration"


class DecodeError(GridError):
    message = "Failed to load image data"


class DegenerateImageError(GridError):
    message = "Image 0 dim"


class SerializationError(GridError):
    message = "JSON Serialization failed"


class DimensionError(GridError):
    message = "Invalid output dimensions"
