"""Exceptions raised by the hierarchy loader."""

from pathlib import Path


class LoaderError(Exception):
    """Base class for fatal traversal failures."""

    def __init__(self, path: Path | str, message: str):
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}")


class DocumentNotFoundError(LoaderError, FileNotFoundError):
    """An index or section document could not be opened."""

    def __init__(self, path: Path | str):
        super().__init__(path, "Cannot open document")


class DocumentParseError(LoaderError):
    """A document was read but is not well-formed XML."""

    def __init__(self, path: Path | str, detail: str):
        self.detail = detail
        super().__init__(path, f"Malformed document ({detail})")


class StopTraversal(Exception):
    """Raised from a visitor to end a streaming traversal early.

    The loader unwinds every open level and returns normally; it never
    escapes a public ``for_each_*`` / ``load_*`` call.
    """
