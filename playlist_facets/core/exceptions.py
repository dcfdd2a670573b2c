"""
Exception classes for playlist-facets.

This module defines all custom exceptions used throughout the application.
Each exception carries a human-readable message and an optional details
dictionary, and the hierarchy mirrors the failure modes a user can see.

Exception Hierarchy:
    PlaylistFacetsError (base)
        ConfigError - Configuration file issues
        InputError - Invalid user input (empty ID, nothing to analyze)
        ApiError - Music API transport/status/payload issues
            PlaylistFetchError - Playlist could not be fetched (user-facing)
            TrackMetadataError - One track's metadata could not be fetched
"""


class PlaylistFacetsError(Exception):
    """
    Base exception for all playlist-facets errors.

    All custom exceptions in this project inherit from this class,
    allowing callers to catch every playlist-facets error with a single
    except clause.

    Attributes:
        message: Human-readable error description.
        details: Dictionary with additional context (IDs, URLs, status codes).

    Example:
        try:
            state.fetch_playlist()
        except PlaylistFacetsError as e:
            logger.error(f"Operation failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description shown to the user.
            details: Optional dictionary containing additional context.
                     Common keys include:
                     - 'playlist_id': Playlist involved in the error
                     - 'track_id': Track involved in the error
                     - 'url': URL that caused the error
                     - 'original_error': The underlying exception text
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(PlaylistFacetsError):
    """
    Raised when there's an issue with the configuration file.

    This is a CRITICAL error that stops the CLI.

    Common causes:
        - Explicit config path does not exist
        - config.yaml has invalid YAML syntax
        - Invalid field values (e.g., negative timeout, empty base_url)
    """
    pass


class InputError(PlaylistFacetsError):
    """
    Raised when user input is rejected before any work starts.

    Input errors are surfaced immediately and never start a fetch
    or an enrichment run.

    Common causes:
        - Empty playlist identifier
        - Analyze requested before a playlist was fetched
        - Unknown device kind
    """
    pass


class ApiError(PlaylistFacetsError):
    """
    Raised when a music API request fails.

    Covers transport errors, HTTP error statuses, undecodable payloads
    and payloads whose JSON ``code`` field is not 200.

    Attributes:
        status_code: HTTP status or JSON ``code`` when known, else None.
        is_timeout: True if the request hit the configured timeout.
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        status_code: int | None = None,
        is_timeout: bool = False
    ) -> None:
        """
        Initialize the API error with transport flags.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
            status_code: HTTP status code or API ``code`` value.
            is_timeout: Set to True when the request timed out.
        """
        super().__init__(message, details)
        self.status_code = status_code
        self.is_timeout = is_timeout


class PlaylistFetchError(ApiError):
    """
    Raised when the playlist track list cannot be fetched.

    This error always carries the same generic, user-facing message.
    The underlying ApiError is chained (``raise ... from``) and its
    text is kept in ``details['original_error']`` for the log files.
    """

    USER_MESSAGE = "Failed to fetch playlist, please check that the ID is correct"

    def __init__(
        self,
        details: dict | None = None,
        status_code: int | None = None,
        is_timeout: bool = False
    ) -> None:
        super().__init__(
            self.USER_MESSAGE,
            details=details,
            status_code=status_code,
            is_timeout=is_timeout
        )


class TrackMetadataError(ApiError):
    """
    Raised when one track's metadata fetch fails.

    This is a NON-CRITICAL error: the enrichment pipeline logs it,
    skips the track and continues. It never reaches the user as an
    error message.
    """
    pass
