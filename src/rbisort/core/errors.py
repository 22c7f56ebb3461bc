"""Exceptions raised while sorting imports."""


class RbisortError(Exception):
    """Base class for rbisort errors."""

    pass


class EncodingError(RbisortError):
    """File contents are not valid UTF-8."""

    def __init__(self, file_path, detail: str = "contains invalid UTF-8 bytes"):
        self.file_path = file_path
        super().__init__(f"Invalid encoding in {file_path}: {detail}")


class ExistingSyntaxErrors(RbisortError):
    """File already has syntax errors before sorting."""

    def __init__(self, file_path, message: str = ""):
        self.file_path = file_path
        self.syntax_message = message
        super().__init__(f"{file_path} has existing syntax errors - skipping")


class IntroducedSyntaxErrors(RbisortError):
    """Sorting would introduce syntax errors."""

    def __init__(self, file_path, message: str = ""):
        self.file_path = file_path
        self.syntax_message = message
        super().__init__(f"rbisort would introduce syntax errors in {file_path} - not saving")


class SyntaxCheckUnavailable(RbisortError):
    """The Ruby interpreter needed for syntax checks cannot be run."""

    pass
