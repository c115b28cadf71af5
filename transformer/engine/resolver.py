"""
Parameter resolution and decoding.

Resolution replaces linked parameter values with their current values:
context-key links read the context store through ``lookup``; operation links
read the result cache. Nothing is memoized, so resolving the same call twice
reflects any change to the store in between.

Decoding checks the resolved values against the operation's schema, applies
defaults, and produces the name -> value mapping handed to implementations.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from ..config.settings import is_enabled
from ..models.program import ContextKeyLink, OperationCall, OperationLink, OperationParam
from ..registry.operation_registry import (
    InvalidCallError,
    OperationDefinition,
    UnresolvedLinkError,
    matches_type,
)
from .results import CallResultCache

logger = logging.getLogger(__name__)


def resolve_params(
    call: OperationCall,
    lookup: Callable[[str], Any],
    results: Optional[CallResultCache] = None
) -> List[OperationParam]:
    """
    Resolve a call's parameters by substituting linked values.

    Args:
        call: The call whose parameters are resolved
        lookup: Context store read; a missing key yields None
        results: Result cache used for operation links

    Returns:
        Parameters in call order, linked values filled in

    Raises:
        UnresolvedLinkError: If an operation link targets a call with no result
    """
    resolved = []
    for param in call.params:
        link = param.link

        if isinstance(link, ContextKeyLink):
            value = lookup(link.context_key)
            logger.debug(f"{call.call_id}: '{param.name}' <- context '{link.context_key}'")
            resolved.append(param.model_copy(update={"value": value}))

        elif isinstance(link, OperationLink):
            value = _resolve_operation_link(call, param, link, results)
            resolved.append(param.model_copy(update={"value": value}))

        else:
            resolved.append(param)

    return resolved


def _resolve_operation_link(
    call: OperationCall,
    param: OperationParam,
    link: OperationLink,
    results: Optional[CallResultCache]
) -> Any:
    if not is_enabled('resolve_operation_links'):
        raise UnresolvedLinkError(
            f"Operation links are disabled; cannot resolve '{param.name}' in call {call.call_id}"
        )

    if results is None or not results.has(link.target_call_id):
        raise UnresolvedLinkError(
            f"Parameter '{param.name}' links to call '{link.target_call_id}', "
            f"which has not produced a result"
        )

    logger.debug(f"{call.call_id}: '{param.name}' <- result of '{link.target_call_id}'")
    return results.get(link.target_call_id)


def decode_params(definition: OperationDefinition, params: List[OperationParam]) -> Dict[str, Any]:
    """
    Check resolved parameters against a definition's schema.

    Args:
        definition: Operation definition providing the schema
        params: Resolved parameters

    Returns:
        Mapping of parameter name to value, defaults applied. Optional
        parameters with no value and no default are left out.

    Raises:
        InvalidCallError: If a required value is missing or a value has the wrong type
    """
    supplied = {param.name: param.value for param in params}
    decoded: Dict[str, Any] = {}

    for spec in definition.parameter_schema:
        value = supplied.get(spec.name)

        if value is None:
            value = spec.default_value

        if value is None:
            if spec.required:
                raise InvalidCallError(f"Missing required parameter: {spec.name}")
            continue

        if not matches_type(value, spec.type):
            raise InvalidCallError(
                f"Parameter '{spec.name}' of operation '{definition.id}' expects "
                f"{spec.type}, got {type(value).__name__}"
            )

        decoded[spec.name] = value

    return decoded
