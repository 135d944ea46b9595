class SpendviewError(ValueError):
    """Base class for errors surfaced to the user as recoverable messages."""


class EmptyInputError(SpendviewError):
    """The CSV has no header or no usable data rows."""

    def __init__(self, message: str = "No transactions found"):
        super().__init__(message)


class UnknownCategoryError(SpendviewError, KeyError):
    """A category was requested that the current aggregate does not contain."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Unknown category: {category!r}")

    def __str__(self) -> str:
        return self.args[0]


class NoDataLoadedError(SpendviewError):
    """Reset or selection was requested before any CSV was loaded."""

    def __init__(self, message: str = "No original data available to reset"):
        super().__init__(message)
