"""
Metric catalog: metric key -> display name and value kind.
"""
from typing import Any, Dict, Iterator, Mapping, Optional

from quality_dashboard.data.schema import MetricDefinition, MetricKind


class MetricCatalog:
    """
    Read-only registry of metric definitions, in payload order.

    An empty catalog is valid and means "not loaded yet": lookups return
    None and callers render blanks.
    """

    def __init__(self, definitions: Optional[Mapping[str, MetricDefinition]] = None):
        self._definitions: Dict[str, MetricDefinition] = dict(definitions or {})

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "MetricCatalog":
        """Build from the catalog endpoint payload: {key: {name, type}}."""
        definitions = {}
        for key, entry in (data or {}).items():
            if isinstance(entry, Mapping):
                definitions[key] = MetricDefinition.from_dict(key, entry)
        return cls(definitions)

    def get(self, key: str) -> Optional[MetricDefinition]:
        return self._definitions.get(key)

    def name_for(self, key: str) -> str:
        """Display name, or an empty string if the key is not loaded."""
        definition = self.get(key)
        return definition.name if definition else ""

    def kind_for(self, key: str) -> Optional[MetricKind]:
        definition = self.get(key)
        return definition.kind if definition else None

    def keys(self):
        return self._definitions.keys()

    def __contains__(self, key: object) -> bool:
        return key in self._definitions

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MetricCatalog):
            return NotImplemented
        return self._definitions == other._definitions

    def __repr__(self) -> str:
        return f"MetricCatalog({list(self._definitions)!r})"
