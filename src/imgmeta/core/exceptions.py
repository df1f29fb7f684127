"""Custom exceptions for imgmeta."""


class ImgMetaError(Exception):
    """Base exception for all imgmeta errors."""

    pass


class ConfigError(ImgMetaError):
    """Configuration value could not be parsed."""

    pass


class SourceError(ImgMetaError):
    """Base exception for byte acquisition."""

    pass


class MalformedEncodingError(SourceError):
    """Inline data URI does not have the expected shape or payload."""

    def __init__(self, uri: str, reason: str):
        """Initialize exception with the offending URI and reason.

        Args:
            uri: The data URI (truncated in the message).
            reason: What was wrong with it.
        """
        self.uri = uri
        self.reason = reason
        preview = uri if len(uri) <= 48 else uri[:45] + "..."
        super().__init__(f"Malformed data URI {preview!r}: {reason}")


class AcquisitionError(SourceError):
    """Reading image bytes from the network or storage failed."""

    def __init__(self, locator: str, reason: str):
        self.locator = locator
        self.reason = reason
        super().__init__(f"Failed to read {locator}: {reason}")


class UnresolvableSourceError(SourceError):
    """Image handle matches none of the acquisition strategies."""

    pass


class RegistryError(ImgMetaError):
    """Byte source registration failed."""

    pass
