"""Postman Collection v2.x loader.

Reads an exported collection and converts it into a Collection model.
Every node is tagged here, once, as either a Folder or a RequestItem so the
renderer never has to guess from the shape of the data.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from postman_markdown.errors import MalformedDocument

from .base import (
    AuthAttribute,
    Authorization,
    Body,
    Collection,
    Folder,
    FormField,
    Header,
    Info,
    PathVariable,
    QueryParam,
    RequestItem,
    RequestSpec,
    ResponseSample,
    Url,
)

logger = logging.getLogger(__name__)


def load_collection(file_path: Path) -> Collection:
    """Load a Postman collection file (JSON, or YAML) into a Collection."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedDocument(f"cannot read {file_path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise MalformedDocument(f"cannot parse {file_path}: {e}") from e

    logger.debug("Read collection file %s", file_path)
    return parse_collection(data)


def parse_collection(data: Mapping) -> Collection:
    """Validate an already-decoded collection and build the model tree."""
    if not isinstance(data, Mapping):
        raise MalformedDocument("collection must be an object")

    info = data.get("info")
    if not isinstance(info, Mapping):
        raise MalformedDocument("missing 'info' object", "info")

    items = data.get("item")
    if not isinstance(items, list):
        raise MalformedDocument("'item' must be a list", "item")

    try:
        collection = Collection(
            info=Info(name=info.get("name"), description=_description(info.get("description"))),
            auth=_parse_auth(data.get("auth"), "auth"),
            item=_parse_items(items, "item"),
        )
    except ValidationError as e:
        raise MalformedDocument(str(e)) from e

    logger.debug("Parsed collection %r with %d top-level nodes", collection.info.name, len(collection.item))
    return collection


def _parse_items(items: list, path: str) -> list[Folder | RequestItem]:
    """Recursively tag items as folders or requests."""
    nodes: list[Folder | RequestItem] = []
    for index, item in enumerate(items):
        where = f"{path}[{index}]"
        if not isinstance(item, Mapping):
            raise MalformedDocument("node must be an object", where)

        try:
            if isinstance(item.get("item"), list):
                nodes.append(
                    Folder(
                        name=item.get("name"),
                        description=_description(item.get("description")),
                        item=_parse_items(item["item"], f"{where}.item"),
                    )
                )
            elif "item" in item:
                raise MalformedDocument("'item' must be a list", f"{where}.item")
            elif "request" in item:
                nodes.append(_parse_request(item, where))
            else:
                raise MalformedDocument("node is neither a folder nor a request", where)
        except ValidationError as e:
            raise MalformedDocument(str(e), where) from e
    return nodes


def _parse_request(item: Mapping, where: str) -> RequestItem:
    req = item["request"]
    # v2.1 allows a request to be just its URL
    if isinstance(req, str):
        req = {"method": "GET", "url": req}
    elif not isinstance(req, Mapping):
        raise MalformedDocument("'request' must be an object or a URL string", f"{where}.request")

    return RequestItem(
        name=item.get("name"),
        request=RequestSpec(
            method=req.get("method"),
            url=_parse_url(req.get("url"), f"{where}.request.url"),
            description=_description(req.get("description")),
            header=[
                Header(key=h.get("key"), value=h.get("value"))
                for h in _mappings(req.get("header"), f"{where}.request.header")
            ],
            body=_parse_body(req.get("body"), f"{where}.request.body"),
            auth=_parse_auth(req.get("auth"), f"{where}.request.auth"),
        ),
        response=[
            ResponseSample(name=r.get("name"), code=r.get("code"), body=r.get("body"))
            for r in _mappings(item.get("response"), f"{where}.response")
        ],
    )


def _parse_url(url, where: str) -> Url:
    if url is None:
        return Url()
    if isinstance(url, str):
        return Url(raw=url)
    if not isinstance(url, Mapping):
        raise MalformedDocument("'url' must be an object or a string", where)

    query = url.get("query")
    variable = url.get("variable")
    return Url(
        raw=url.get("raw"),
        query=None if query is None else [
            QueryParam(key=q.get("key"), description=_description(q.get("description")), value=q.get("value"))
            for q in _mappings(query, f"{where}.query")
        ],
        variable=None if variable is None else [
            PathVariable(key=v.get("key"), description=_description(v.get("description")), value=v.get("value"))
            for v in _mappings(variable, f"{where}.variable")
        ],
    )


def _parse_body(body, where: str) -> Body | None:
    # Postman exports an empty object for requests without a body
    if not body:
        return None
    if not isinstance(body, Mapping):
        raise MalformedDocument("'body' must be an object", where)
    mode = body.get("mode")
    if not mode:
        return None

    options = body.get("options") or {}
    language = (options.get("raw") or {}).get("language")
    return Body(
        mode=mode,
        raw=body.get("raw"),
        language=language,
        formdata=[_form_field(f) for f in _mappings(body.get("formdata"), f"{where}.formdata")],
        urlencoded=[_form_field(f) for f in _mappings(body.get("urlencoded"), f"{where}.urlencoded")],
    )


def _form_field(field: Mapping) -> FormField:
    return FormField(
        key=field.get("key"),
        type=field.get("type"),
        value=_scalar(field.get("value")),
        src=field.get("src"),
    )


def _parse_auth(auth, where: str) -> Authorization | None:
    """Normalise the per-type auth settings.

    Postman stores the settings under a key named after the auth type,
    either as a `{"token": ...}` object or as a list of key/value/type rows.
    """
    if auth is None:
        return None
    if not isinstance(auth, Mapping) or not auth.get("type"):
        raise MalformedDocument("'auth' must be an object with a 'type'", where)

    auth_type = auth["type"]
    settings = auth.get(auth_type)
    if isinstance(settings, Mapping):
        if "token" in settings:
            return Authorization(type=auth_type, token=_scalar(settings["token"]))
        return Authorization(
            type=auth_type,
            attributes=[AuthAttribute(key=k, value=_scalar(v)) for k, v in settings.items()],
        )

    return Authorization(
        type=auth_type,
        attributes=[
            AuthAttribute(key=a.get("key"), value=_scalar(a.get("value")), type=a.get("type"))
            for a in _mappings(settings, f"{where}.{auth_type}")
        ],
    )


def _mappings(values, where: str) -> list[Mapping]:
    """Return a list of objects, treating a missing list as empty."""
    if values is None:
        return []
    if not isinstance(values, list) or not all(isinstance(v, Mapping) for v in values):
        raise MalformedDocument("expected a list of objects", where)
    return values


def _description(value):
    # descriptions may be {"content": ..., "type": "text/markdown"}
    if isinstance(value, Mapping):
        return value.get("content")
    return value


def _scalar(value) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value)
