class ResponseTypeError(Exception):
    """Base exception for all response type errors."""


class UnknownResponseTypeError(ResponseTypeError):
    """Raised when a question's type tag has no registered handler."""

    def __init__(self, type_tag: str) -> None:
        self.type_tag = type_tag
        super().__init__(f"Response type '{type_tag}' is not registered")


class ResponseSaveError(ResponseTypeError):
    """Raised when a handler rejects an answer and the submission is aborted."""

    def __init__(self, question_id: int, message: str = "answer was rejected") -> None:
        self.question_id = question_id
        super().__init__(f"Question {question_id}: {message}")
