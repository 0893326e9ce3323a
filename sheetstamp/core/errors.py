"""Custom exceptions used across SheetStamp."""


class SheetStampError(Exception):
    """Base error for the application."""


class ConfigError(SheetStampError):
    """Configuration related error."""


class SpreadsheetError(SheetStampError):
    """Raised when the spreadsheet cannot be read."""


class EmptySpreadsheetError(SpreadsheetError):
    """Raised when placement is attempted without any data rows."""


class TemplateError(SheetStampError):
    """Raised when the template PDF cannot be decoded. Aborts a run."""


class FontError(SheetStampError):
    """Raised when the font program cannot be fetched or parsed. Aborts a run."""


class FilenameSpecError(SheetStampError):
    """Raised when the filename fields do not reference known columns."""


class PlacementError(SheetStampError):
    """Raised when a placement gesture is invalid (unknown field, bad page)."""


class GenerationError(SheetStampError):
    """Raised when generated documents cannot be written out. Aborts a run."""
