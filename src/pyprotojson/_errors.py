"""Exception hierarchy for protobuf/JSON conversion."""


class ConversionError(Exception):
    """Base exception for protobuf/JSON conversion errors.

    Provides dual messaging: a short user-facing message and
    internal details for logging.
    """

    def __init__(
        self,
        user_message: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details or user_message
        self.wrapped = wrapped

    def internal(self) -> str:
        return self.internal_details


class UnsupportedFieldTypeError(ConversionError):
    """Raised when a message declares a field kind that cannot be mapped."""


class JSONTypeMismatchError(ConversionError):
    """Raised when a JSON value cannot be converted to the expected type."""


class InvalidJSONError(ConversionError):
    """Raised when the input text is not valid JSON."""


class MaxDepthExceededError(ConversionError):
    """Raised when the nesting depth limit is exceeded."""


class InvalidNamingPolicyError(ConversionError):
    """Raised when a naming policy name is not recognized."""


# User-facing error message constants
ERR_MSG_UNSUPPORTED_FIELD_TYPE = "unsupported field type"
ERR_MSG_INVALID_JSON = "invalid JSON"
ERR_MSG_MAX_DEPTH_EXCEEDED = "maximum nesting depth exceeded"
ERR_MSG_UNKNOWN_NAMING_POLICY = "unknown naming policy"


def type_mismatch(
    type_name: str, details: str = "", wrapped: Exception | None = None
) -> JSONTypeMismatchError:
    """Build the error raised when a JSON value does not fit ``type_name``."""
    return JSONTypeMismatchError(
        f"The JSON value could not be converted to {type_name}.",
        details,
        wrapped=wrapped,
    )
