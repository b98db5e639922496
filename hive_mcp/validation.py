"""Boundary checks for the untyped ``tools/call`` argument bag."""
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from .errors import ErrorCode, McpError
from .schema import ChatMessage, SearchRequest

NO_ARGUMENTS = "No arguments provided"
MISSING_INPUT = "Missing required input: either 'prompt' or 'messages' must be provided"
CONFLICTING_INPUTS = "Conflicting inputs: only one of 'prompt' or 'messages' should be provided, not both"


def _invalid(message: str) -> McpError:
    return McpError(ErrorCode.INVALID_PARAMS, message)


def validate_arguments(args: Optional[Mapping[str, Any]]) -> None:
    """Raise InvalidParams unless exactly one input mode is present.

    Empty values count as absent, so ``{"prompt": ""}`` is missing input.
    """
    if args is None:
        raise _invalid(NO_ARGUMENTS)
    if not isinstance(args, Mapping):
        raise _invalid("Arguments must be an object")
    has_prompt = bool(args.get("prompt"))
    has_messages = bool(args.get("messages"))
    if not has_prompt and not has_messages:
        raise _invalid(MISSING_INPUT)
    if has_prompt and has_messages:
        raise _invalid(CONFLICTING_INPUTS)


def build_search_request(args: Mapping[str, Any]) -> SearchRequest:
    """Copy the validated arguments into a SearchRequest.

    A non-boolean ``include_data_sources`` is dropped, not rejected.
    """
    fields: Dict[str, Any] = {}

    prompt = args.get("prompt")
    if prompt:
        if not isinstance(prompt, str):
            raise _invalid("'prompt' must be a string")
        fields["prompt"] = prompt

    messages = args.get("messages")
    if messages:
        if not isinstance(messages, list):
            raise _invalid("'messages' must be an array of {role, content} objects")
        try:
            fields["messages"] = [ChatMessage.model_validate(m) for m in messages]
        except ValidationError as e:
            raise _invalid(f"Invalid 'messages': {e.errors()[0].get('msg', 'malformed message')}") from e

    flag = args.get("include_data_sources")
    if type(flag) is bool:
        fields["include_data_sources"] = flag

    return SearchRequest(**fields)
