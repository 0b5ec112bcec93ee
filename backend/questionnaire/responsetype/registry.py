import logging

from sqlalchemy.orm import Session

from questionnaire.core.config import Settings
from questionnaire.responsetype.base import ResponseType
from questionnaire.responsetype.exceptions import UnknownResponseTypeError

logger = logging.getLogger(__name__)


class ResponseTypeRegistry:
    """Maps question type tags to response type handlers."""

    def __init__(self) -> None:
        self._types: dict[str, type[ResponseType]] = {}

    def register(self, type_tag: str, handler_cls: type[ResponseType]) -> None:
        self._types[type_tag] = handler_cls
        logger.debug("Registered response type %s -> %s", type_tag, handler_cls.__name__)

    def get(self, type_tag: str) -> type[ResponseType]:
        """Handler class for a type tag.

        Raises:
            UnknownResponseTypeError: If nothing is registered for the tag.
        """
        handler_cls = self._types.get(type_tag)
        if handler_cls is None:
            raise UnknownResponseTypeError(type_tag)
        return handler_cls

    def handler_for(self, question, db: Session, config: Settings | None = None) -> ResponseType:
        return self.get(question.type)(question, db, config)

    @property
    def available_types(self) -> list[str]:
        return list(self._types.keys())

    def handler_classes_by_table(self) -> list[type[ResponseType]]:
        """One handler class per answer table, in registration order."""
        seen: dict[str, type[ResponseType]] = {}
        for handler_cls in self._types.values():
            seen.setdefault(handler_cls.response_table(), handler_cls)
        return list(seen.values())
