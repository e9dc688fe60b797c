"""
Shared helper functions for function routes
"""

import json
from typing import Any, Dict, Optional

from fastapi import Request


async def read_json_object(request: Request) -> Optional[Dict[str, Any]]:
    """Parsed JSON body when it is an object, else None"""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return body if isinstance(body, dict) else None


def has_values(body: Optional[Dict[str, Any]], *fields: str) -> bool:
    """True when every field is present and truthy"""
    return body is not None and all(body.get(field) for field in fields)
