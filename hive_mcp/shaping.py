import json
from typing import Any, Dict

from .schema import SearchResponse, ToolResult


def shape_response(resp: SearchResponse) -> Dict[str, Any]:
    # a clarification request never carries sources
    if resp.is_additional_data_required:
        return {"response": resp.is_additional_data_required}
    result: Dict[str, Any] = {}
    if resp.response is not None:
        result["response"] = resp.response
    if resp.data_sources is not None:
        result["data_sources"] = resp.data_sources
    return result


def to_tool_result(result: Dict[str, Any]) -> ToolResult:
    return ToolResult.text(json.dumps(result, indent=2, ensure_ascii=False))
