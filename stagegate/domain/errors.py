class StageGateError(Exception):
    """Base error carrying every rule violation that caused it."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.errors = list(errors or [])
        if self.errors:
            message = f"{message}: {', '.join(self.errors)}"
        super().__init__(message)


class ContentValidationError(StageGateError, ValueError):
    """Raised when submitted content fields or dependencies are invalid."""


class DuplicateTopicError(ContentValidationError):
    def __init__(self, topic: str) -> None:
        super().__init__(f'Content with topic "{topic}" already exists')
        self.topic = topic


class StageTransitionError(StageGateError, ValueError):
    """Raised when a stage change is rejected."""


class ContentNotFoundError(StageGateError, LookupError):
    def __init__(self, content_id: object) -> None:
        super().__init__(f"Content {content_id} not found")
        self.content_id = content_id
