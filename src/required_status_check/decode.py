# decode.py
from __future__ import annotations

import base64
import json
import re
from collections.abc import Hashable
from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

import yaml
from pydantic import TypeAdapter, ValidationError

from .errors import (
    ConfigurationError,
    EmptyDocument,
    MalformedDocument,
    MalformedYAML,
    SchemaMismatch,
)
from .model import JobOutcome, Workflow

T = TypeVar("T")


@dataclass(frozen=True)
class Decoded(Generic[T]):
    """Result of a schema decode: either `value` or a diagnostic in `error`."""
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


_NEEDS_ADAPTER = TypeAdapter(Dict[str, JobOutcome])


def decode_needs(data: Any) -> Decoded[Dict[str, JobOutcome]]:
    try:
        return Decoded(value=_NEEDS_ADAPTER.validate_python(data))
    except ValidationError as e:
        return Decoded(error=str(e))


def decode_workflow(data: Any) -> Decoded[Workflow]:
    try:
        return Decoded(value=Workflow.model_validate(data))
    except ValidationError as e:
        return Decoded(error=str(e))


class WorkflowLoader(yaml.SafeLoader):
    """
    SafeLoader with YAML 1.2 booleans and no duplicate keys.

    PyYAML follows YAML 1.1, where `on`, `yes` and `off` are booleans, which
    would turn the `on:` key of every workflow into True. It also keeps the
    last of two identical keys, which would hide a job defined twice.
    """

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            if key_node.tag == "tag:yaml.org,2002:merge":
                continue
            key = self.construct_object(key_node, deep=deep)
            if not isinstance(key, Hashable):
                continue
            if key in seen:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key {key!r}",
                    key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


WorkflowLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:bool"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
WorkflowLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool",
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def parse_needs(raw: str) -> Dict[str, JobOutcome]:
    """Parse the `needs` input (toJSON(needs) in the calling workflow)."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"needs is not a valid JSON: {e}") from e

    decoded = decode_needs(data)
    if not decoded.ok:
        raise ConfigurationError(
            "needs must be a mapping of job name to an object with a string result: "
            f"{decoded.error}"
        )
    return decoded.value


def parse_workflow_data(content: str) -> Workflow:
    """
    Decode the base64 `content` field of the contents API into a Workflow.

    Raises:
        EmptyDocument: content is ""
        MalformedDocument: content is not base64 of UTF-8 text
        MalformedYAML: the text is not YAML
        SchemaMismatch: the YAML is not shaped like a workflow
    """
    if content == "":
        raise EmptyDocument("workflow file is empty")

    try:
        # The API wraps base64 at 60 columns; b64decode drops the newlines.
        text = base64.b64decode(content).decode("utf-8")
    except ValueError as e:  # binascii.Error, UnicodeDecodeError, non-ASCII input
        raise MalformedDocument(
            f"the workflow file is not valid base64-encoded UTF-8: {e}"
        ) from e

    try:
        data = yaml.load(text, Loader=WorkflowLoader)
    except yaml.YAMLError as e:
        raise MalformedYAML(f"the workflow file is not a valid YAML: {e}") from e

    decoded = decode_workflow(data)
    if not decoded.ok:
        raise SchemaMismatch(f"the workflow file is not a valid workflow: {decoded.error}")
    return decoded.value
