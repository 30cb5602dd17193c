"""Error taxonomy shared by services and the HTTP layer."""


class FoodDiaryError(Exception):
    """Base class for application errors."""


class InvalidPayloadError(FoodDiaryError):
    """Caller-supplied input failed local validation."""

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        self.message = message or f"Invalid value for {field}"
        super().__init__(self.message)


class NotFoundError(FoodDiaryError):
    """The requested food, barcode or recipe does not exist upstream."""

    def __init__(self, message: str = "Not found", code: object = 404) -> None:
        self.message = message
        self.code = code
        super().__init__(message)


class UpstreamAuthError(FoodDiaryError):
    """Client-credentials exchange with the nutrition API failed."""


class ConfigurationError(UpstreamAuthError):
    """Required API credentials are not configured."""


class UpstreamError(FoodDiaryError):
    """The nutrition API answered a well-formed request with an error."""

    def __init__(
        self,
        status_code: int,
        code: object,
        message: str,
        raw: object = None,
    ) -> None:
        self.status_code = status_code
        self.code = code
        self.message = message
        self.raw = raw
        super().__init__(f"{status_code} {code}: {message}")


class UpstreamUnavailableError(FoodDiaryError):
    """The nutrition API timed out or could not be reached."""


class StoreError(FoodDiaryError):
    """A local database operation failed."""
