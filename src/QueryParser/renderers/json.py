"""JSON output renderers.

Renders parse outcomes into JSON-serializable objects and provides
JsonFileWriter, which writes every outcome of a command to one file.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from QueryParser.parser import ParseResult
from QueryParser.renderers.base import OutputWriter
from QueryParser.utils.log import log


def render_json(result: ParseResult, canonical: str | None) -> dict[str, Any]:
    """Render one parse outcome into a JSON-serializable mapping.

    Successful parses carry `canonical` and `ast` (the `Query.to_dict()`
    shape); failures carry `error` with the error type, message and position.
    """
    d: dict[str, Any] = {"query": result.text, "ok": result.ok}
    if result.error is not None:
        d["error"] = {
            "type": type(result.error).__name__,
            "message": result.error.message,
            "position": result.error.position,
        }
    elif result.query is not None:
        d["canonical"] = canonical
        d["ast"] = result.query.to_dict()
    return d


class JsonFileWriter(OutputWriter):
    """Accumulate results and write to JSON file on finalize."""

    def __init__(self, base_dir: str) -> None:
        self.output_dir = Path(base_dir) / "json"
        self.all_results: list[dict[str, Any]] = []

    def write_result(self, result: ParseResult, canonical: str | None) -> None:
        self.all_results.append(render_json(result, canonical))

    def finalize(self, action: str) -> None:
        """Write accumulated results to JSON file.

        Args:
            action: The CLI command name (used in filename).
        """
        payload = json.dumps(self.all_results, ensure_ascii=False, indent=2)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = self.output_dir / f"{action}_{timestamp}.json"
        output_path.write_text(payload, encoding="utf-8")
        log.info("JSON saved to %s", output_path)
