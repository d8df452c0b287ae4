"""Detect whether a file looks like a Postman collection export."""

import json
from pathlib import Path

import yaml

POSTMAN_SCHEMA_HOST = "getpostman.com"


def detect_format(file_path: Path) -> str:
    """Detect the format of an API collection file.

    Returns: 'postman' or 'unknown'.
    """
    try:
        text = file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        return "unknown"

    try:
        data = json.loads(text)
    except (json.JSONDecodeError, ValueError):
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError:
            return "unknown"

    if _is_postman(data):
        return "postman"
    return "unknown"


def _is_postman(data) -> bool:
    if not isinstance(data, dict):
        return False
    info = data.get("info")
    if not isinstance(info, dict):
        return False
    if "_postman_id" in info:
        return True
    return POSTMAN_SCHEMA_HOST in str(info.get("schema", ""))
