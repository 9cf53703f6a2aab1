"""ecogen Exception Hierarchy."""


class EcogenError(Exception):
    """Base exception for all ecogen errors."""
    pass


class ConfigError(EcogenError):
    """Base exception for static configuration errors."""
    pass


class DuplicateServiceError(ConfigError):
    """Raised when two services in one topology share a name."""
    def __init__(self, name: str, layout: str):
        self.name = name
        self.layout = layout
        super().__init__(f"Duplicate service name '{name}' in {layout} layout")


class DuplicatePortError(ConfigError):
    """Raised when two services in one topology share a port."""
    def __init__(self, port: int, first: str, second: str, layout: str):
        self.port = port
        self.first = first
        self.second = second
        self.layout = layout
        super().__init__(
            f"Port {port} assigned to both '{first}' and '{second}' in {layout} layout"
        )


class InvalidRootError(ConfigError):
    """Raised when a layout root cannot be used as a base directory."""
    def __init__(self, root: str, reason: str):
        self.root = root
        self.reason = reason
        super().__init__(f"Invalid root directory '{root}': {reason}")


class UnknownLayoutError(EcogenError):
    """Raised when a layout name does not match any layout mode."""
    def __init__(self, layout: str):
        self.layout = layout
        super().__init__(f"Unknown layout: {layout}")


class ValidationError(EcogenError):
    """Raised when input validation fails."""
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Validation error for '{field}': {message}")
