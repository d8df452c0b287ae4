"""Data models for a loaded Postman collection.

The loader normalises the raw export and validates it into these models,
which the renderer reads but never modifies.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _Model(BaseModel):
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)


class Header(_Model):
    key: str | None = None
    value: str | None = None


class QueryParam(_Model):
    key: str | None = None
    description: str | None = None
    value: str | None = None


class PathVariable(_Model):
    """A `:name` segment of the URL. Entries without a key are not rendered."""

    key: str | None = None
    description: str | None = None
    value: str | None = None


class Url(_Model):
    raw: str | None = None
    query: list[QueryParam] | None = None
    variable: list[PathVariable] | None = None


class FormField(_Model):
    """One formdata / urlencoded field."""

    key: str | None = None
    type: str | None = None  # text / file
    value: str | None = None
    src: str | list[str] | None = None


class Body(_Model):
    mode: str
    raw: str | None = None
    language: str | None = None  # from options.raw.language
    formdata: list[FormField] = []
    urlencoded: list[FormField] = []


class AuthAttribute(_Model):
    key: str | None = None
    value: str | None = None
    type: str | None = None


class Authorization(_Model):
    """Auth settings. Either a single `token` or a list of attributes."""

    type: str
    token: str | None = None
    attributes: list[AuthAttribute] = []


class RequestSpec(_Model):
    method: str | None = None
    url: Url = Url()
    description: str | None = None
    header: list[Header] = []
    body: Body | None = None
    auth: Authorization | None = None


class ResponseSample(_Model):
    name: str | None = None
    code: int | str | None = None
    body: str | None = None


class Folder(_Model):
    kind: Literal["folder"] = "folder"
    name: str | None = None
    description: str | None = None
    item: list["Node"]


class RequestItem(_Model):
    kind: Literal["request"] = "request"
    name: str | None = None
    request: RequestSpec
    response: list[ResponseSample] = []


Node = Annotated[Union[Folder, RequestItem], Field(discriminator="kind")]

Folder.model_rebuild()


class Info(_Model):
    name: str | None = None
    description: str | None = None


class Collection(_Model):
    """Root of a Postman collection."""

    info: Info
    auth: Authorization | None = None
    item: list[Node]
