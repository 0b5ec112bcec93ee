from questionnaire.responsetype.date import DateResponseType
from questionnaire.responsetype.numericaltext import NumericalTextResponseType
from questionnaire.responsetype.registry import ResponseTypeRegistry
from questionnaire.responsetype.text import TextResponseType

__all__ = [
    "DateResponseType",
    "NumericalTextResponseType",
    "ResponseTypeRegistry",
    "TextResponseType",
    "response_types",
]


def _create_registry() -> ResponseTypeRegistry:
    """Create the default registry with every built-in response type."""
    registry = ResponseTypeRegistry()
    registry.register("date", DateResponseType)
    registry.register("text", TextResponseType)
    registry.register("numeric", NumericalTextResponseType)
    return registry


response_types = _create_registry()
