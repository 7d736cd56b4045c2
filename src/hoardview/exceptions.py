"""Exception hierarchy for hoardview."""


class HoardViewError(Exception):
    """Base exception for all hoardview errors."""

    pass


class RemoteError(HoardViewError):
    """Errors related to the remote font repository."""

    pass


class RemoteFetchError(RemoteError):
    """Error retrieving a listing or a file from the remote repository."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch '{url}': {reason}")


class CacheError(HoardViewError):
    """Error reading or writing the local cache store."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cache store '{path}' unusable: {reason}")


class EngineError(HoardViewError):
    """Errors raised by the font engine session."""

    pass


class EngineStateError(EngineError):
    """Engine session used outside of its ready state."""

    def __init__(self, state: str, expected: str) -> None:
        self.state = state
        self.expected = expected
        super().__init__(f"Engine session is {state}, expected {expected}")


class FontLoadError(EngineError):
    """Error loading a staged font."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class FontRenderError(EngineError):
    """Error rendering a sample with a loaded font."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to render font '{path}': {reason}")


class FontSaveError(EngineError):
    """Error saving a font in another format."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save font '{path}': {reason}")


class UnknownFormatError(HoardViewError):
    """Requested output format is not configured."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"Unknown output format '{label}'")
