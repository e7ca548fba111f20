"""Problems found while resolving a release's updates.

These are collected on the result rather than raised, so one run reports
every problem at once.
"""


class ResolutionError(Exception):
    """An update request that could not be validated."""

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        super().__init__(message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResolutionError):
            return NotImplemented
        return type(self) is type(other) and (self.name, str(self)) == (other.name, str(other))

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.name, str(self)))


class UnknownDependencyError(ResolutionError):
    def __init__(self, name: str) -> None:
        super().__init__(
            name,
            f"The dependency to be updated, {name}, does not exist as a "
            f"dependency of any projects in this patch.",
        )


class UnknownSourceProjectError(ResolutionError):
    def __init__(self, name: str) -> None:
        super().__init__(
            name, f"The source project to be updated, {name}, does not exist in this patch.",
        )


class MissingBaselineError(ResolutionError):
    def __init__(self, name: str) -> None:
        super().__init__(
            name, f"The source project to be updated, {name}, has no patch baseline entry.",
        )
