"""
Rendering of macro failures as document content

A failing placeholder is replaced by two elements, a message and a
description, laid out inline (span) or as blocks (div) depending on the
placeholder. The pair goes through result_wrap so the region still records
which macro used to be there.
"""

import traceback
from enum import Enum
from typing import List, Optional, Union

from ..config import appsettings
from ..models.nodes import ContentLeaf, Element, Node, Placeholder
from .log import LOG
from .tree import node_replace
from .wrapper import result_wrap


class MacroErrorKind(Enum):
    """Failure modes the transformation contains and renders in place"""
    UNRESOLVED = "unresolved macro"
    UNSUPPORTED_INLINE = "unsupported inline usage"
    INVALID_PARAMETERS = "invalid parameters"
    EXECUTION_FAILURE = "execution failure"


def description_fromException(error: BaseException) -> str:
    """Full traceback of an exception, chained causes included"""
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))


class ErrorReporter:
    """
    Replace placeholders with error elements

    Attributes:
        error_class: Class attribute of the message element
        description_class: Class attribute of the description element
    """

    def __init__(
        self,
        error_class: Optional[str] = None,
        description_class: Optional[str] = None,
    ) -> None:
        self.error_class = error_class or appsettings.error_class
        self.description_class = description_class or appsettings.error_description_class

    def errorNodes_build(
        self, placeholder: Placeholder, message: str, description: str
    ) -> List[Node]:
        """Message and description elements styled for the placeholder's mode"""
        tag = "span" if placeholder.inline else "div"
        return [
            Element(tag=tag, attributes={"class": self.error_class},
                    children=[ContentLeaf(message)]),
            Element(tag=tag, attributes={"class": self.description_class},
                    children=[ContentLeaf(description)]),
        ]

    def error_generate(
        self,
        placeholder: Placeholder,
        kind: MacroErrorKind,
        message: str,
        description: Union[str, BaseException],
    ) -> None:
        """
        Put an error in the tree where placeholder was

        Args:
            placeholder: Placeholder being replaced
            kind: Failure mode, for diagnostics
            message: Short, user-facing message
            description: Explanation text, or the exception whose traceback
                         explains the failure
        """
        if isinstance(description, BaseException):
            LOG(
                f"{kind.value} for macro [{placeholder.name}]. "
                f"Internal error: [{description}]",
                level=2,
            )
            description = description_fromException(description)
        else:
            LOG(f"{kind.value} for macro [{placeholder.name}]: {message}", level=2)

        nodes = self.errorNodes_build(placeholder, message, description)
        node_replace(placeholder, result_wrap(placeholder, nodes))
