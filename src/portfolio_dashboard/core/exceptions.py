"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class MissingParameterError(AppError):
    """Raised when a required query parameter is absent."""

    def __init__(self, parameter: str, message: str = ""):
        self.parameter = parameter
        super().__init__(message or f"{parameter.capitalize()} missing", code="MISSING_PARAMETER")


class UpstreamUnavailableError(AppError):
    """Raised when a market data source errors, times out or has no data."""

    def __init__(self, symbol: str, reason: str):
        self.symbol = symbol
        super().__init__(
            f"Market data unavailable for {symbol}: {reason}",
            code="UPSTREAM_UNAVAILABLE",
        )


class ExtractionMissError(AppError):
    """Raised when a scraped page lacks an expected label or value."""

    def __init__(self, label: str, reason: str = "label not found"):
        self.label = label
        super().__init__(f"Could not extract {label!r}: {reason}", code="EXTRACTION_MISS")


class HoldingsLoadError(AppError):
    """Raised when the holdings file cannot be read."""

    def __init__(self, message: str):
        super().__init__(message, code="HOLDINGS_LOAD_ERROR")
