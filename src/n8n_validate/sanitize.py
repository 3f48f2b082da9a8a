"""Node id normalization before re-serialization.

n8n needs every node to carry a non-empty string id that is unique in the
workflow. The sanitizer assigns ids to nodes that lack one (or carry a
non-string id) and, unless told otherwise, replaces ids that repeat an
earlier node's id. Running it twice changes nothing the second time.
"""

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from n8n_validate.errors import create_error
from n8n_validate.types import Workflow

logger = logging.getLogger(__name__)

MAX_ID_ATTEMPTS = 1000


@dataclass(frozen=True)
class SanitizeOptions:
    """Sanitizer options."""

    regenerate_ids: bool = True  # Replace duplicate ids (first occurrence kept)


@dataclass
class SanitizeResult:
    """Normalized document and one warning per id change."""

    workflow: dict[str, Any]
    warnings: list[str] = field(default_factory=list)


def _uuid4() -> str:
    return str(uuid.uuid4())


def generate_node_id(existing: set[str], id_factory: Callable[[], str] | None = None) -> str:
    """Generate an id not present in ``existing``.

    Args:
        existing: Ids already used in the workflow
        id_factory: Id source (defaults to UUID4 strings)

    Returns:
        New non-empty id

    Raises:
        ValidatorError: INTERNAL_ERROR if no fresh id is found
    """
    factory = id_factory or _uuid4
    for _ in range(MAX_ID_ATTEMPTS):
        candidate = factory()
        if candidate and candidate not in existing:
            return candidate
    raise create_error(
        "INTERNAL_ERROR",
        detail=f"Could not generate a unique node id after {MAX_ID_ATTEMPTS} attempts",
        error_type="IdGenerationError",
    )


def _sanitizable(document: Any) -> bool:
    return (
        isinstance(document, dict)
        and isinstance(document.get("nodes"), list)
        and all(isinstance(node, dict) for node in document["nodes"])
    )


def sanitize_workflow(
    document: Any,
    options: SanitizeOptions | None = None,
    id_factory: Callable[[], str] | None = None,
) -> SanitizeResult:
    """Normalize node ids.

    The input document is not modified. The result is built from new
    workflow and node mappings in the original key order; values below the
    node level (parameters, connections) are shared with the input.

    Args:
        document: Structurally valid workflow document
        options: Sanitizer options
        id_factory: Id source for new ids (defaults to UUID4 strings)

    Returns:
        SanitizeResult
    """
    options = options or SanitizeOptions()
    if not _sanitizable(document):
        logger.debug("Document has no node list to sanitize; left unchanged")
        return SanitizeResult(workflow=document)

    workflow = Workflow.from_dict(document)
    warnings: list[str] = []

    existing = {node_id for node_id in workflow.node_ids() if isinstance(node_id, str)}
    seen: set[str] = set()

    for index, node in enumerate(workflow.nodes):
        label = node.name or f"#{index}"
        if not isinstance(node.id, str) or not node.id:
            node.id = generate_node_id(existing, id_factory)
            existing.add(node.id)
            warnings.append(f'Assigned new id "{node.id}" to node "{label}"')
        elif node.id in seen:
            if not options.regenerate_ids:
                logger.debug("Keeping duplicate id %r on node %r", node.id, label)
                continue
            old_id = node.id
            node.id = generate_node_id(existing, id_factory)
            existing.add(node.id)
            warnings.append(
                f'Replaced duplicate id "{old_id}" on node "{label}" with "{node.id}"'
            )
        seen.add(node.id)

    return SanitizeResult(workflow=workflow.to_dict(), warnings=warnings)
