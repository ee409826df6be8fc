"""Error taxonomy shared by the validation gate, the stores and the routes."""


class FeedbackError(Exception):
    pass


class ValidationError(FeedbackError):
    """A submission was rejected. Carries one message per offending field."""

    def __init__(self, errors: list[dict[str, str]]) -> None:
        self.errors = errors
        super().__init__("; ".join(e["message"] for e in errors))

    @property
    def messages(self) -> list[str]:
        return [e["message"] for e in self.errors]


class StorageError(FeedbackError):
    """The storage backend failed. Details are for logs, never for clients."""
