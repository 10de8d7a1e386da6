"""Write validation results to an output directory."""

import json
from pathlib import Path

from book_manifest.models.manifest import ManifestResult


class ManifestWriter:
    """Write the manifest, or the errors that prevented it, as JSON."""

    MANIFEST_FILE = "manifest.json"
    ERRORS_FILE = "errors.json"

    def __init__(self, output_dir: Path):
        """Initialize manifest writer.

        Args:
            output_dir: Directory to write output files
        """
        self.output_dir = output_dir
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def write(self, result: ManifestResult) -> Path:
        """Write manifest.json for a clean result, errors.json otherwise.

        Returns the path written. A stale file of the other kind is removed so
        the directory never holds a manifest next to newer errors.
        """
        if result.manifest is not None:
            filepath = self.output_dir / self.MANIFEST_FILE
            stale = self.output_dir / self.ERRORS_FILE
            filepath.write_text(result.manifest.model_dump_json(indent=2))
        else:
            filepath = self.output_dir / self.ERRORS_FILE
            stale = self.output_dir / self.MANIFEST_FILE
            filepath.write_text(render_errors_json(result))

        stale.unlink(missing_ok=True)
        return filepath


def render_errors_json(result: ManifestResult) -> str:
    """Errors and warnings as an indented JSON document."""
    payload = result.model_dump(mode="json", include={"errors", "warnings"})
    return json.dumps(payload, indent=2)
