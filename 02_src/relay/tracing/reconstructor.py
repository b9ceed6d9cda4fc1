"""Re-derive one conversational turn from a message-history snapshot.

The host does not emit live per-chunk assistant or tool events, so at turn end
the full history is scanned: backward to find where the turn began, then
forward to collect tool calls, the final text and the reasoning.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from ..models import EventType, PendingEvent, TurnCompletion, TurnReconstruction

# Field names have moved between host versions; earlier candidates win.
TOOL_NAME_FIELDS = ("name", "toolName")
TOOL_CALL_ID_FIELDS = ("id", "toolCallId")
TOOL_ARGUMENT_FIELDS = ("arguments", "input", "args")


def first_present(source: Mapping[str, Any], fields: Sequence[str], default: Any = None) -> Any:
    """Value of the first candidate field that is set and non-empty."""
    for name in fields:
        value = source.get(name)
        if value:
            return value
    return default


def _blocks(message: Any) -> list:
    content = message.get("content") if isinstance(message, Mapping) else None
    return content if isinstance(content, list) else []


def _block_type(block: Any) -> str | None:
    return block.get("type") if isinstance(block, Mapping) else None


def is_real_user_message(message: Any) -> bool:
    """User-authored input: plain text, or structured content with a text block."""
    if not isinstance(message, Mapping) or message.get("role") != "user":
        return False
    content = message.get("content")
    if isinstance(content, str):
        return True
    if isinstance(content, list):
        return any(_block_type(block) == "text" for block in content)
    return False


def _text(block: Mapping[str, Any], field: str) -> str:
    value = block.get(field)
    return value if isinstance(value, str) else ""


def find_turn_start(messages: Sequence[Any]) -> int:
    """Index of the last real user message, or -1 when there is none."""
    for index in range(len(messages) - 1, -1, -1):
        if is_real_user_message(messages[index]):
            return index
    return -1


def tool_call_data(block: Mapping[str, Any], trace_id: str) -> dict:
    return {
        "trace_id": trace_id,
        "name": first_present(block, TOOL_NAME_FIELDS, ""),
        "tool_call_id": first_present(block, TOOL_CALL_ID_FIELDS, ""),
        "is_error": False,
        "arguments": first_present(block, TOOL_ARGUMENT_FIELDS, {}),
    }


def usage_data(completion: TurnCompletion, trace_id: str) -> dict:
    usage = completion.usage or {}
    cost = usage.get("cost")
    return {
        "trace_id": trace_id,
        "input_tokens": usage.get("input"),
        "output_tokens": usage.get("output"),
        "total_tokens": usage.get("totalTokens"),
        "total_cost": cost.get("total") if isinstance(cost, Mapping) else None,
        "provider": completion.provider,
        "model": completion.model,
    }


def reconstruct_turn(
    messages: Sequence[Any],
    trace_id: str,
    completion: TurnCompletion | None = None,
) -> TurnReconstruction:
    """
    Derive the events of the turn that just finished.

    Args:
        messages: Full message history for the session, oldest first. Not mutated.
        trace_id: Trace id shared by every event of this turn.
        completion: Model/provider/stop reason and usage from agent_end.

    Returns:
        TurnReconstruction whose events are ordered: tool calls as they
        appear, then at most one assistant message, then at most one usage
        event. The trace is finished once these are sent.
    """
    completion = completion or TurnCompletion()
    result = TurnReconstruction(turn_start=find_turn_start(messages))

    content = ""
    thinking = ""
    for message in messages[result.turn_start + 1:]:
        if not isinstance(message, Mapping) or message.get("role") != "assistant":
            continue

        blocks = _blocks(message)
        for block in blocks:
            if _block_type(block) == "toolCall":
                result.tool_calls.append(tool_call_data(block, trace_id))

        for block in blocks:
            block_type = _block_type(block)
            if block_type == "text":
                # Text before a tool call is intermediate; the last one is the answer.
                content = _text(block, "text")
            elif block_type == "thinking":
                thinking += _text(block, "thinking") + "\n"

    result.content = content.strip()
    result.thinking = thinking.strip()

    result.events.extend(
        PendingEvent(type=EventType.TOOL_CALL, data=data) for data in result.tool_calls
    )

    if result.content:
        result.events.append(
            PendingEvent(
                type=EventType.MESSAGE,
                data={
                    "trace_id": trace_id,
                    "role": "assistant",
                    "model": completion.model,
                    "content": result.content,
                    "provider": completion.provider,
                    "stop_reason": completion.stop_reason,
                    "thinking": result.thinking,
                },
            )
        )

    if completion.usage:
        result.events.append(
            PendingEvent(type=EventType.USAGE, data=usage_data(completion, trace_id))
        )

    return result
