"""Markdown renderer for Postman collections.

Walks the folder/request tree and emits one Markdown document whose
headings follow the folder nesting. Every section renderer is a pure
function of its input and heading depth, and returns an empty string when
the section has nothing to show.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping

from postman_markdown.parser.base import (
    Authorization,
    Body,
    Collection,
    Folder,
    FormField,
    Header,
    RequestItem,
    ResponseSample,
    Url,
)
from postman_markdown.parser.postman import parse_collection

logger = logging.getLogger(__name__)

ROOT_DEPTH = 2

# Max number of extra '#' per heading kind. Deeper trees flatten visually.
FOLDER_HEADING_CAP = 5
REQUEST_HEADING_CAP = 5
SECTION_HEADING_CAP = 4

FOLDER_ICON = "📁"
AUTH_ICON = "🔑"
UNDEFINED = "undefined"
SEPARATOR = " ".join(["⁃"] * 47)


def render_markdown(collection: Collection | Mapping) -> str:
    """Render a whole collection as a Markdown document.

    Accepts a loaded Collection or a raw decoded mapping, which is parsed
    first (raising MalformedDocument if its structure is broken).
    """
    if not isinstance(collection, Collection):
        collection = parse_collection(collection)

    logger.debug("Rendering collection %r", collection.info.name)

    parts = [f"# {_or_undefined(collection.info.name)}\n"]
    if collection.info.description is not None:
        parts.append(f"{collection.info.description}\n")
    parts.append(render_authorization(collection.auth, 0))
    for node in collection.item:
        # requests directly under the root use the default request depth
        if node.kind == "request":
            parts.append(render_request(node))
        else:
            parts.extend(_walk([node], ROOT_DEPTH))
    return "".join(parts)


def render_items(nodes: Iterable[Folder | RequestItem], depth: int = ROOT_DEPTH) -> str:
    """Render a sequence of folders and requests starting at `depth`."""
    return "".join(_walk(nodes, depth))


def _walk(nodes: Iterable[Folder | RequestItem], depth: int) -> Iterator[str]:
    for node in nodes:
        if node.kind == "folder":
            yield f"{'#' * min(depth, FOLDER_HEADING_CAP)} {FOLDER_ICON} {_or_undefined(node.name)}\n"
            if node.description is not None:
                yield f"{node.description}\n"
            yield "\n"
            yield from _walk(node.item, depth + 1)
        else:
            yield render_request(node, depth)


def render_request(item: RequestItem, depth: int = 1) -> str:
    """Render one request: heading, URL and every section it has data for."""
    req = item.request
    parts = [
        "\n",
        f"#{'#' * min(depth, REQUEST_HEADING_CAP)} `{_or_undefined(req.method)}` {_or_undefined(item.name)}\n",
    ]
    if req.description is not None:
        parts.append(f"{req.description}\n")

    parts += [
        ">```\n",
        f">{_or_undefined(req.url.raw)}\n",
        ">```\n",
        render_headers(req.header, depth),
        render_body(req.body, depth),
        render_query_params(req.url, depth),
        render_path_variables(req.url, depth),
        render_authorization(req.auth, depth),
        render_responses(item.response, depth),
        "\n",
        f"{SEPARATOR}\n",
    ]
    return "".join(parts)


def render_authorization(auth: Authorization | None, depth: int = 1) -> str:
    if auth is None or auth.type == "noauth":
        return ""

    if auth.token is not None:
        rows = [("token", auth.token, "")]
    else:
        rows = [(a.key, a.value, a.type) for a in auth.attributes]

    return "".join([
        _section(f"{AUTH_ICON} Authorization ({auth.type})", depth),
        "\n",
        *_table(("Key", "Value", "Type"), rows),
        "\n",
        "\n",
    ])


def render_headers(headers: list[Header], depth: int = 1) -> str:
    """All headers of a request go into a single table."""
    if not headers:
        return ""

    return "".join([
        _section("Headers", depth),
        "\n",
        *_table(("Key", "Value"), [(h.key, h.value) for h in headers]),
        "\n",
        "\n",
    ])


def render_body(body: Body | None, depth: int = 1) -> str:
    """Render a raw body as a fenced block and form bodies as tables.

    Modes other than raw, formdata and urlencoded are not rendered.
    """
    if body is None:
        return ""

    if body.mode == "raw":
        return "".join([
            _section(f"Body (**{body.language or body.mode}**)", depth),
            "\n",
            f"```{body.language or ''}\n",
            f"{_or_undefined(body.raw)}\n",
            "```\n",
            "\n",
        ])

    fields = {"formdata": body.formdata, "urlencoded": body.urlencoded}.get(body.mode)
    if not fields:
        return ""

    return "".join([
        _section(f"Body {body.mode}", depth),
        "\n",
        *_table(("Param", "Value", "Type"), [(f.key, _form_value(f), f.type) for f in fields]),
        "\n",
        "\n",
    ])


def _form_value(field: FormField) -> str:
    if field.type == "file":
        if isinstance(field.src, list):
            return ", ".join(field.src)
        return field.src or ""
    if field.value is not None:
        # strip the escaped "\n" sequence, not real newlines
        return field.value.replace("\\n", "")
    return ""


def render_query_params(url: Url, depth: int = 1) -> str:
    if not url.query:
        return ""
    return _params_section("Query Params", [(q.key, q.description, q.value) for q in url.query], depth)


def render_path_variables(url: Url, depth: int = 1) -> str:
    rows = [(v.key, v.description, v.value) for v in url.variable or [] if v.key]
    if not rows:
        return ""
    return _params_section("Path Params", rows, depth)


def _params_section(title: str, rows: list[tuple], depth: int) -> str:
    return "".join([
        _section(title, depth),
        "\n",
        *_table(("Key", "Description", "Example"), rows),
        "\n",
        "\n",
    ])


def render_responses(responses: list[ResponseSample], depth: int = 1) -> str:
    """Each sample body is emitted verbatim, without re-formatting the JSON."""
    parts = []
    for response in responses:
        parts += [
            _section(f"Example Response (HTTP {_or_undefined(response.code)})", depth),
            "```json\n",
            f"{_or_undefined(response.body)}\n",
            "```\n",
            "\n",
        ]
    return "".join(parts)


def _section(title: str, depth: int) -> str:
    return f"##{'#' * min(depth, SECTION_HEADING_CAP)} {title}\n"


def _table(columns: tuple[str, ...], rows: Iterable[tuple]) -> list[str]:
    lines = [
        "|" + "|".join(columns) + "|\n",
        "|" + "---|" * len(columns) + "\n",
    ]
    for row in rows:
        lines.append("|" + "|".join(_cell(value) for value in row) + "|\n")
    return lines


def _cell(value) -> str:
    if value is None:
        return ""
    text = str(value).replace("|", "\\|")
    # a real line break would split the row
    return text.replace("\r\n", "<br>").replace("\n", "<br>")


def _or_undefined(value) -> str:
    return UNDEFINED if value is None else str(value)
