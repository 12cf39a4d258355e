"""SpecLoader - loads and validates YAML state graphs."""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from .errors import GraphDefinitionError
from .schema import Machine


class UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects duplicate mapping keys instead of keeping the last one."""

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if key in seen:
                raise GraphDefinitionError(
                    f"Duplicate key '{key}' at line {key_node.start_mark.line + 1}"
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


class SpecLoader:
    """
    Loads state graphs from YAML files.

    Validates structure using Pydantic models.
    """

    def __init__(self, base_path: Optional[Path] = None):
        """
        Initialize loader.

        Args:
            base_path: Base directory holding ``flows/`` (default: the coreprofiler package)
        """
        if base_path is None:
            base_path = Path(__file__).parent.parent
        self.base_path = Path(base_path)

    def flow_path(self, name: str) -> Path:
        return self.base_path / "flows" / f"{name}.yaml"

    def load_machine(self, name: str) -> Machine:
        """
        Load a state graph from YAML.

        Args:
            name: Name of graph (e.g., 'core_profiler')

        Returns:
            Validated Machine instance

        Raises:
            FileNotFoundError: If graph file doesn't exist
            GraphDefinitionError: If YAML doesn't describe a valid graph
        """
        path = self.flow_path(name)

        if not path.exists():
            raise FileNotFoundError(f"Flow not found: {path}")

        with open(path, 'r') as f:
            return self.parse(f.read(), source=str(path))

    def parse(self, text: str, source: str = "<string>") -> Machine:
        """Validate a YAML document as a Machine."""
        try:
            data: Any = yaml.load(text, Loader=UniqueKeyLoader)
        except yaml.YAMLError as e:
            raise GraphDefinitionError(f"Invalid YAML in {source}: {e}") from e

        if not isinstance(data, dict):
            raise GraphDefinitionError(f"{source} does not contain a mapping")

        try:
            return Machine(**data)
        except ValidationError as e:
            raise GraphDefinitionError(f"Invalid state graph in {source}: {e}") from e
