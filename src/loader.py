# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

"""Turn YAML documents into validated monitoring resources.

`load_resource` raises on the first problem. `check_documents` and
`check_file` never raise for user errors; they report one result per
document, so a multi-document stream can be checked in one go.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Type

import yaml
from pydantic import ValidationError

from constants import (
    POD_MONITORS_KIND,
    PROBES_KIND,
    PROMETHEUS_RULE_KIND,
    SERVICE_MONITORS_KIND,
    STATUS_ACCEPTED,
    STATUS_REJECTED,
)
from errors import DocumentError, SpecValidationError
from resources import PodMonitor, Probe, PrometheusRule, Resource, ServiceMonitor
from utils import file_contents

logger = logging.getLogger(__name__)

KIND_TO_MODEL: Mapping[str, Type[Resource]] = {
    SERVICE_MONITORS_KIND: ServiceMonitor,
    POD_MONITORS_KIND: PodMonitor,
    PROBES_KIND: Probe,
    PROMETHEUS_RULE_KIND: PrometheusRule,
}


@dataclass(frozen=True)
class CheckResult:
    """Outcome of checking a single document.

    Attributes:
        kind (str): The document's kind, or "" if it could not be read.
        name (str): metadata.name of the document, or "".
        status (str): Either "accepted" or "rejected".
        message (str): Why the document was rejected; empty when accepted.
    """
    kind: str
    name: str
    status: str
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == STATUS_ACCEPTED

    def to_dict(self) -> Dict[str, str]:
        """Convert the result into a JSON-serializable dictionary."""
        return {
            "kind": self.kind,
            "name": self.name,
            "status": self.status,
            "message": self.message,
        }


def parse_resource(document: Any) -> Resource:
    """Build the resource model for an already-loaded document.

    Raises:
        DocumentError: if the document is not a mapping or its kind is unknown.
        pydantic.ValidationError: if the document does not match the kind's schema.
    """
    if not isinstance(document, dict):
        raise DocumentError("document is not a YAML mapping")

    kind = document.get("kind")
    model = KIND_TO_MODEL.get(kind) if isinstance(kind, str) else None
    if model is None:
        raise DocumentError(f"unsupported kind {kind!r}; expected one of {sorted(KIND_TO_MODEL)}")

    return model.model_validate(document)


def load_resource(text: str) -> Resource:
    """Parse and semantically validate a single YAML document.

    Raises:
        DocumentError: on malformed YAML, a non-mapping document or an unknown kind.
        pydantic.ValidationError: on structural errors.
        SpecValidationError: on the first violated semantic rule.
    """
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentError(f"invalid YAML: {e}") from e

    resource = parse_resource(document)
    resource.validate()
    logger.debug("Validated %s %r", resource.kind, resource.name)
    return resource


def check_documents(text: str) -> List[CheckResult]:
    """Validate every document of a YAML stream and report on each of them.

    Documents are checked as they are read. Malformed YAML ends the stream
    with one rejection; results for the documents before it are kept.
    """
    results: List[CheckResult] = []
    documents = yaml.safe_load_all(text)
    while True:
        try:
            document = next(documents)
        except StopIteration:
            break
        except yaml.YAMLError as e:
            logger.error("Failed to load the documents; invalid YAML: %s", e)
            results.append(CheckResult(kind="", name="", status=STATUS_REJECTED, message=f"invalid YAML: {e}"))
            break

        if document is None:
            continue

        kind = str(document.get("kind") or "") if isinstance(document, dict) else ""
        metadata = document.get("metadata") if isinstance(document, dict) else None
        name = str(metadata.get("name") or "") if isinstance(metadata, dict) else ""

        try:
            resource = parse_resource(document)
            resource.validate()
        except (DocumentError, ValidationError) as e:
            logger.warning("Document %s %r could not be parsed: %s", kind, name, e)
            results.append(CheckResult(kind=kind, name=name, status=STATUS_REJECTED, message=str(e)))
            continue
        except SpecValidationError as e:
            logger.error("%s %r is invalid: %s", kind, name, e)
            results.append(CheckResult(kind=kind, name=name, status=STATUS_REJECTED, message=str(e)))
            continue

        logger.info("%s %r has been validated.", kind, name)
        results.append(CheckResult(kind=kind, name=name, status=STATUS_ACCEPTED))

    return results


def check_file(path: Path) -> List[CheckResult]:
    """Validate every document in the file at `path`.

    Raises:
        DocumentError: if the file does not exist.
    """
    contents = file_contents(path)
    if contents is None:
        raise DocumentError(f"file {path} does not exist")
    return check_documents(contents)
