import json
from pathlib import Path
from typing import Any, Dict, List, Union

from src.domain.exceptions import CatalogFileException


class JsonCatalogRepository:
    """
    Repository class for the checked-in catalog file.
    The file holds a JSON array of server documents, pretty-printed with a trailing newline.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> List[Dict[str, Any]]:
        """
        Reads every raw server document from the catalog file.

        Returns:
            List[Dict[str, Any]]: The decoded documents, in file order.
        """
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as e:
            raise CatalogFileException(f"Cannot read catalog file {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            raise CatalogFileException(f"Catalog file {self.path} is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise CatalogFileException(f"Catalog file {self.path} must contain a JSON array.")
        return data

    def save(self, documents: List[Dict[str, Any]]) -> None:
        """
        Writes the documents back to the catalog file, replacing its content.

        Args:
            documents (List[Dict[str, Any]]): Server documents in the order to persist.
        """
        payload = json.dumps(documents, indent=2, ensure_ascii=False) + "\n"
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(payload, encoding="utf-8")
        except OSError as e:
            raise CatalogFileException(f"Cannot write catalog file {self.path}: {e}") from e
