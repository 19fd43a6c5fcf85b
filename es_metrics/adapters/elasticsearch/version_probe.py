"""Version Probe - détection de la version majeure d'Elasticsearch.

Un seul GET sur l'endpoint d'info du noeud (ex: http://localhost:9200/),
exécuté une fois à la construction du reporter. Ne lève jamais: le résultat
porte soit le NodeInfo, soit un ProbeFailure, et l'appelant choisit le repli.

Réponse attendue:
    {"name": "node-1", "version": {"number": "2.3.1", ...}, ...}
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ValidationError, field_validator

from es_metrics.core.errors import ProbeFailure

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

_MAJOR_RE = re.compile(r"^\s*(\d+)")


class VersionInfo(BaseModel):
    """Bloc "version" de la réponse."""

    number: str

    @field_validator("number", mode="before")
    @classmethod
    def validate_number(cls, v: Any) -> str:
        """Accept "2.3.1", "7.10.2-SNAPSHOT" or a bare number."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            v = str(v)
        if not isinstance(v, str) or not _MAJOR_RE.match(v):
            raise ValueError(f"unparseable version number: {v!r}")
        return v

    @property
    def major(self) -> int:
        return int(_MAJOR_RE.match(self.number).group(1))


class NodeInfo(BaseModel):
    """Réponse de l'endpoint d'info du noeud (champs inconnus ignorés)."""

    name: Optional[str] = None
    cluster_name: Optional[str] = None
    version: VersionInfo

    @field_validator("version", mode="before")
    @classmethod
    def wrap_bare_version(cls, v: Any) -> Any:
        """Accept {"version": "2.3.1"} as well as {"version": {"number": ...}}."""
        if isinstance(v, (str, int, float)) and not isinstance(v, bool):
            return {"number": v}
        return v

    @property
    def major_version(self) -> int:
        return self.version.major


@dataclass(frozen=True)
class ProbeResult:
    """Résultat du probe: node_info OU error."""

    node_info: Optional[NodeInfo] = None
    error: Optional[ProbeFailure] = None

    @property
    def ok(self) -> bool:
        return self.node_info is not None

    @property
    def major_version(self) -> Optional[int]:
        return self.node_info.major_version if self.node_info else None


def _get(url: str, client: Optional[httpx.Client], timeout: float) -> httpx.Response:
    if client is not None:
        return client.get(url)
    with httpx.Client(timeout=timeout) as owned:
        return owned.get(url)


def probe_node_info(
    url: str,
    client: Optional[httpx.Client] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> ProbeResult:
    """Interroge l'endpoint d'info et extrait la version.

    Args:
        url: URL de l'endpoint d'info du noeud
        client: Client httpx à réutiliser (sinon un client temporaire)
        timeout: Timeout du client temporaire, en secondes

    Returns:
        ProbeResult avec le NodeInfo, ou avec un ProbeFailure
    """
    try:
        response = _get(url, client, timeout)
        response.raise_for_status()
        node_info = NodeInfo.model_validate(response.json())
    except httpx.HTTPStatusError as e:
        failure = ProbeFailure(
            f"Node info request failed: {e}",
            status_code=e.response.status_code,
            url=url,
        )
        failure.__cause__ = e
        return ProbeResult(error=failure)
    except (httpx.HTTPError, httpx.InvalidURL, ValueError, ValidationError) as e:
        # ValueError covers invalid JSON bodies, InvalidURL a malformed url
        failure = ProbeFailure(f"Unable to read node info: {e}", url=url)
        failure.__cause__ = e
        return ProbeResult(error=failure)

    logger.info(f"Elasticsearch node info: version {node_info.version.number}")
    return ProbeResult(node_info=node_info)
