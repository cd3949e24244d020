class ImageEditorError(Exception):
    """Base class for errors the command line reports to the user."""


class UsageError(ImageEditorError):
    """Wrong argument count, unknown filter or bad filter argument."""


class ParseError(ImageEditorError, ValueError):
    """
    Malformed PPM text: bad tag, non-numeric token, non-positive size
    or fewer pixel values than the header declares.
    """


class GridBoundsError(IndexError):
    """Grid access outside [0, width) x [0, height). Always a bug in the caller."""


class ConfigError(ImageEditorError, ValueError):
    """A setting from the environment or .env file has an unusable value."""
