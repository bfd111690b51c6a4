"""JSON file storage with Result-based error handling.

Thin wrapper around file I/O for JSON data, returning Result types
instead of raising. Used by the JSON document store and the local
state file; it contains no domain logic.
"""

import json
from pathlib import Path
from typing import Any

from nexus.domain.shared.result import Err, Ok, Result


class JsonStorage:
    """Low-level JSON file I/O.

    Example:
        storage = JsonStorage()
        result = storage.load_json(Path("projects/1715.json"))
        if isinstance(result, Ok):
            data = result.value
        else:
            print(f"Error: {result.error}")
    """

    def load_json(self, path: Path) -> Result[Any, str]:
        """Load JSON data from a file.

        Args:
            path: Path to the JSON file to read.

        Returns:
            Ok(data) if successful, Err(str) with error message if failed.
        """
        try:
            if not path.exists():
                return Err(f"File not found: {path}")
            return Ok(json.loads(path.read_text(encoding="utf-8")))

        except json.JSONDecodeError as e:
            return Err(f"Invalid JSON in {path}: {e}")
        except PermissionError:
            return Err(f"Permission denied reading {path}")
        except OSError as e:
            return Err(f"Error reading {path}: {e}")

    def save_json(self, path: Path, data: Any, indent: int = 2) -> Result[None, str]:
        """Write data as JSON, creating parent directories.

        The file is written through a temporary sibling and renamed into
        place so readers never see a half-written document.

        Returns:
            Ok(None) if successful, Err(str) with error message if failed.
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            content = json.dumps(data, indent=indent, ensure_ascii=False)
            tmp = path.with_suffix(path.suffix + ".tmp")
            tmp.write_text(content, encoding="utf-8")
            tmp.replace(path)
            return Ok(None)

        except TypeError as e:
            return Err(f"Data not JSON serializable: {e}")
        except PermissionError:
            return Err(f"Permission denied writing {path}")
        except OSError as e:
            return Err(f"Error writing {path}: {e}")

    def delete_json(self, path: Path) -> Result[None, str]:
        """Delete a JSON file; a missing file is not an error."""
        try:
            path.unlink(missing_ok=True)
            return Ok(None)
        except PermissionError:
            return Err(f"Permission denied deleting {path}")
        except OSError as e:
            return Err(f"Error deleting {path}: {e}")

    def list_json(self, directory: Path) -> Result[list[Path], str]:
        """List the .json files in a directory, sorted by name.

        A missing directory is an empty listing.
        """
        try:
            if not directory.exists():
                return Ok([])
            return Ok(sorted(p for p in directory.iterdir() if p.suffix == ".json"))
        except PermissionError:
            return Err(f"Permission denied accessing {directory}")
        except OSError as e:
            return Err(f"Error listing {directory}: {e}")
