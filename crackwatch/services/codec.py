"""Wire codec for the crackwatch games.page method.

The service speaks DDP over SockJS. Every application message is a JSON
object serialized to a string, and that string travels as the only element
of a JSON array. Frames coming back from the server carry an extra leading
``a`` marker in front of the array. Both layers have to be encoded and
decoded in order, or a frame will still "parse" at the wrong layer and
quietly produce garbage.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

from ..models.game import GameRecord, SearchResultSet
from ..models.query import SearchQuery
from .dates import parse_date_field
from .errors import ProtocolError

log = structlog.stdlib.get_logger()

METHOD_NAME = "games.page"
REQUEST_ID = "1"

RESULT_PREFIX = r'a["{\"msg\":\"result\"'
BAD_REQUEST_FRAME = r'a["{\"msg\":\"error\",\"reason\":\"Bad request\"}"]'

_COMPACT = (",", ":")


class FrameKind(Enum):
    """Disposition of a frame received from the server."""
    RESULT = "result"
    ERROR = "error"
    OTHER = "other"


@dataclass(frozen=True)
class ClassifiedFrame:
    """A raw frame together with what the read loop should do with it."""
    kind: FrameKind
    frame: str
    reason: str | None = None


def wrap_message(message: dict[str, Any]) -> str:
    """Serialize ``message`` and wrap it in the one-element string array."""
    inner = json.dumps(message, separators=_COMPACT, ensure_ascii=False)
    return json.dumps([inner], separators=_COMPACT, ensure_ascii=False)


def encode_query(query: SearchQuery) -> str:
    """Encode a search query as an outbound games.page method call.

    The term is trimmed and then goes through the JSON encoder at both
    layers, so quotes and backslashes in it survive the round trip intact.
    """
    params = {
        "page": query.page,
        "orderType": query.order_type.value,
        "orderDown": query.sort_descending,
        "search": query.term.strip(),
        "unset": 0,
        "released": query.release_status.value,
        "cracked": query.crack_status.value,
        "isAAA": query.studio_type.value,
    }
    return wrap_message({
        "msg": "method",
        "method": METHOD_NAME,
        "params": [params],
        "id": REQUEST_ID,
    })


def classify_frame(frame: str) -> ClassifiedFrame:
    """Decide what to do with a frame by looking only at its start."""
    if frame == BAD_REQUEST_FRAME:
        return ClassifiedFrame(FrameKind.ERROR, frame, reason="Bad request")
    if frame.startswith(RESULT_PREFIX):
        return ClassifiedFrame(FrameKind.RESULT, frame)
    return ClassifiedFrame(FrameKind.OTHER, frame)


def unwrap_message(frame: str) -> dict[str, Any]:
    """Strip both transport layers off a server frame.

    Raises:
        ValueError: If either layer is not the expected JSON shape
    """
    if not frame.startswith("a"):
        raise ValueError("Frame does not carry a message array")

    envelope = json.loads(frame[1:])
    if not isinstance(envelope, list) or not envelope or not isinstance(envelope[0], str):
        raise ValueError("Message array must hold a serialized message")

    message = json.loads(envelope[0])
    if not isinstance(message, dict):
        raise ValueError("Message must be a JSON object")
    return message


def decode_result(frame: str) -> SearchResultSet:
    """Decode a result frame into a search result set.

    Raises:
        ProtocolError: If the frame does not hold a games listing in the
            shape we know. The cause is logged, never shown to the user.
    """
    try:
        message = unwrap_message(frame)
        if "result" not in message:
            raise KeyError("result")
        return _decode_result_set(message["result"])
    # json raises RecursionError on pathologically nested payloads
    except (ValueError, TypeError, KeyError, RecursionError) as e:
        log.error(
            "Unable to decode result frame",
            error=str(e),
            error_type=type(e).__name__,
            frame=frame,
        )
        raise ProtocolError(original_error=e, frame=frame) from e


def _decode_result_set(payload: Any) -> SearchResultSet:
    if payload is None:
        return SearchResultSet(total_count=0, games=())
    if not isinstance(payload, dict):
        raise TypeError(f"result must be an object, got {type(payload).__name__}")

    raw_games = payload.get("games")
    if raw_games is None:
        raw_games = []
    if not isinstance(raw_games, list):
        raise TypeError("games must be a list")

    return SearchResultSet(
        total_count=_int_field(payload, "gameCount"),
        games=tuple(_decode_game(raw) for raw in raw_games),
    )


def _decode_game(raw: Any) -> GameRecord:
    if not isinstance(raw, dict):
        raise TypeError(f"game must be an object, got {type(raw).__name__}")

    return GameRecord(
        name=_str_field(raw, "title"),
        release_date=parse_date_field(raw.get("releaseDate")),
        drm_tags=_str_list_field(raw, "protections"),
        cracked_by=_str_list_field(raw, "groups"),
        crack_date=parse_date_field(raw.get("crackDate")),
        follower_count=_int_field(raw, "followersCount"),
    )


def _int_field(raw: dict[str, Any], key: str) -> int:
    value = raw.get(key)
    if value is None:
        return 0
    # bool is an int subclass, but never a count
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{key} must be an integer")
    return value


def _str_field(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string")
    return value


def _str_list_field(raw: dict[str, Any], key: str) -> tuple[str, ...]:
    value = raw.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise TypeError(f"{key} must be a list")

    items: list[str] = []
    for item in value:
        if item is None:
            items.append("")
        elif isinstance(item, str):
            items.append(item)
        else:
            raise TypeError(f"{key} must only hold strings")
    return tuple(items)
