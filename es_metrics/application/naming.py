"""Règles de nommage: champs et index de destination.

- FieldNamer: remplace les '.' dans les noms de champs quand le store
  (Elasticsearch >= 2.0) les interprète comme des objets imbriqués.
- index_name: nom de l'index, suffixé par la date UTC en cas de rotation.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from es_metrics.domain.models import RollingIndexType


# Elasticsearch 2.x rejects field names containing dots
DOTS_FORBIDDEN_SINCE_MAJOR = 2


@dataclass(frozen=True)
class FieldNamer:
    """Ajuste les noms de champs selon la version majeure du store."""

    replace_dots: bool = False

    @classmethod
    def for_major_version(cls, major_version: int | None) -> "FieldNamer":
        """Construit le namer pour une version détectée (None = inconnue)."""
        if major_version is None:
            return cls(replace_dots=False)
        return cls(replace_dots=major_version >= DOTS_FORBIDDEN_SINCE_MAJOR)

    def adjust(self, field_name: str) -> str:
        """Retourne le nom de champ, avec '.' -> '_' si nécessaire."""
        if self.replace_dots:
            return field_name.replace(".", "_")
        return field_name


def index_name(
    base_name: str,
    rotation: RollingIndexType,
    now_utc: datetime,
) -> str:
    """Calcule le nom de l'index de destination.

    Args:
        base_name: Nom de base (ex: "metrics")
        rotation: Type de rotation (NONE, DAILY, MONTHLY)
        now_utc: Instant de référence (converti en UTC s'il est aware)

    Returns:
        "metrics", "metrics-2024-03-07" ou "metrics-2024-03"
    """
    if now_utc.tzinfo is not None:
        now_utc = now_utc.astimezone(timezone.utc)

    if rotation == RollingIndexType.DAILY:
        return f"{base_name}-{now_utc:%Y-%m-%d}"
    if rotation == RollingIndexType.MONTHLY:
        return f"{base_name}-{now_utc:%Y-%m}"
    return base_name
