"""If/then sequencing on top of group validation.

The consequence group is only evaluated when the condition group is valid;
otherwise then_response is None.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Union

from group_validator.schemas import GroupResult, IfThenResponse

logger = logging.getLogger(__name__)


async def validate_if_then(
    if_group: Any,
    then_group: Any,
    validate_group: Callable[[Any], Union[GroupResult, Awaitable[GroupResult]]],
) -> IfThenResponse:
    """
    Evaluate ``if_group`` and, only when it is valid, ``then_group``.

    Args:
        if_group: Condition group
        then_group: Consequence group
        validate_group: Evaluates one group, e.g. a wrapper around
            validate_groups or validate_comparisons

    Returns:
        IfThenResponse with then_response None when the condition is false
    """
    if_response = validate_group(if_group)
    if inspect.isawaitable(if_response):
        if_response = await if_response

    then_response = None
    if if_response.valid:
        then_response = validate_group(then_group)
        if inspect.isawaitable(then_response):
            then_response = await then_response
    else:
        logger.debug("Condition group is false, skipping consequence group")

    return IfThenResponse(if_response=if_response, then_response=then_response)


def validate_if_then_sync(
    if_group: Any,
    then_group: Any,
    validate_group: Callable[[Any], GroupResult],
) -> IfThenResponse:
    """Synchronous counterpart of validate_if_then."""
    if_response = validate_group(if_group)

    then_response = None
    if if_response.valid:
        then_response = validate_group(then_group)
    else:
        logger.debug("Condition group is false, skipping consequence group")

    return IfThenResponse(if_response=if_response, then_response=then_response)
