"""
Custom exceptions for the CloudWatch Logs datasource.

Provides specialized exception classes for the failure modes of query
decoding, result shaping and pagination. Provider failures are raised
by botocore and are deliberately not wrapped here.
"""


class DatasourceError(Exception):
    """
    Base exception for all datasource errors.

    All other datasource exceptions inherit from this class, allowing the
    dispatcher to convert any of them into an inline error result.
    """

    pass


class ConfigurationError(DatasourceError):
    """Raised when settings are invalid or cannot be loaded."""

    pass


class QueryDecodeError(DatasourceError):
    """
    Raised when a query model or time range cannot be decoded.

    Attributes:
        field: The field that failed to decode (optional)
        value: The offending value (optional)
        message: Detailed error message
        ref_id: Reference id the error result is reported under (optional)
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: object | None = None,
        ref_id: str | None = None,
    ):
        self.field = field
        self.value = value
        self.message = message
        self.ref_id = ref_id
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with field and value context."""
        if self.field and self.value is not None:
            return f"{self.message} (field='{self.field}', value={self.value!r})"
        elif self.field:
            return f"{self.message} (field='{self.field}')"
        return self.message


class UnsupportedFormatError(DatasourceError):
    """
    Raised when a target asks for an output format that cannot be produced.

    Attributes:
        format_name: The requested format (e.g. 'timeserie')
        ref_id: Reference id of the offending target (optional)
    """

    def __init__(self, format_name: str, ref_id: str | None = None):
        self.format_name = format_name
        self.ref_id = ref_id
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with target context."""
        if self.ref_id:
            return f"not supported: format '{self.format_name}' (refId='{self.ref_id}')"
        return f"not supported: format '{self.format_name}'"


class RecordValidationError(DatasourceError):
    """
    Raised when a log record lacks a field required for shaping.

    Attributes:
        field: The missing or invalid field
        record_index: Position of the record in the fetched sequence
        message: Detailed error message
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        record_index: int | None = None,
    ):
        self.field = field
        self.record_index = record_index
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with record context."""
        parts = [self.message]
        if self.field:
            parts.append(f"field='{self.field}'")
        if self.record_index is not None:
            parts.append(f"record={self.record_index}")
        return " - ".join(parts)


class PaginationLimitError(DatasourceError):
    """
    Raised when a paged fetch exceeds its configured bounds.

    Only raised when the pagination limits are configured to fail rather
    than truncate.

    Attributes:
        operation: The provider operation being paginated
        pages: Pages fetched when the bound was hit
        records: Records accumulated when the bound was hit
    """

    def __init__(self, operation: str, pages: int, records: int):
        self.operation = operation
        self.pages = pages
        self.records = records
        super().__init__(
            f"Pagination limit reached for {operation} "
            f"after {pages} page(s) and {records} record(s)"
        )
