class ResolveError(Exception):
    """Base class for failures while resolving shared library dependencies."""


class CommandFailed(ResolveError):
    """The external analyzer could not be launched at all."""

    def __init__(self, program: str, cause: Exception):
        super().__init__(f"unable to run {program}: {cause}")
        self.program = program
        self.cause = cause


class CommandError(ResolveError):
    """The external analyzer ran but exited with a non-zero status."""

    def __init__(self, program: str, path: str, stderr: bytes):
        message = stderr.decode("utf-8", errors="replace").strip()
        super().__init__(f"{program} failed for {path}: {message}")
        self.program = program
        self.path = path
        self.stderr = stderr


class DependencySpecNotFound(ResolveError):
    def __init__(self) -> None:
        super().__init__("Failed to find dependency specification.")
