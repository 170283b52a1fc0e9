"""Batch processing for multiple contact field mappings."""

import json
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from contact_card.builder import CardBuilder
from contact_card.files import write_card

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Result of building cards for many field mappings."""

    results: list[dict] = field(default_factory=list)
    errors: list[dict] = field(default_factory=list)
    total_time_ms: float = 0.0

    @property
    def total(self) -> int:
        """Total number of processed items."""
        return len(self.results) + len(self.errors)

    @property
    def succeeded(self) -> int:
        """Number of cards written."""
        return len(self.results)

    @property
    def failed(self) -> int:
        """Number of failed items."""
        return len(self.errors)


class BatchProcessor:
    """Build and write many cards, isolating errors per item."""

    def __init__(self, builder: CardBuilder):
        """
        Initialize batch processor.

        Args:
            builder: CardBuilder used for each individual card.
        """
        self._builder = builder

    def process(self, items: list[Any], output_dir: Path) -> BatchResult:
        """
        Build a card for every item and write it into ``output_dir``.

        Args:
            items: Field mappings, one per contact.
            output_dir: Directory receiving the .vcf files.

        Returns:
            BatchResult with written files and per-item errors.
        """
        start_time = time.perf_counter()
        results: list[dict] = []
        errors: list[dict] = []

        for index, item in enumerate(items):
            try:
                if not isinstance(item, Mapping):
                    raise ValueError(
                        f"Expected an object of fields, got {type(item).__name__}"
                    )
                card = self._builder.build_card(item)
                path = write_card(card, output_dir)
                results.append({
                    "index": index,
                    "name": card.filename_stem,
                    "path": str(path),
                })
            except (ValueError, OSError) as e:
                logger.warning("Item %d failed: %s", index, e)
                errors.append({
                    "index": index,
                    "error": str(e),
                })

        elapsed_ms = (time.perf_counter() - start_time) * 1000

        return BatchResult(
            results=results,
            errors=errors,
            total_time_ms=round(elapsed_ms, 2),
        )

    def load_items(self, path: Path) -> list[Any]:
        """
        Load field mappings from a JSON file.

        The file holds either a list of objects or a single object.

        Raises:
            ValueError: If the file is not valid JSON or has the wrong shape.
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

        if isinstance(data, dict):
            return [data]
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON list of objects in {path}")
        return data

    def to_json(self, result: BatchResult) -> str:
        """
        Format batch result as JSON.

        Args:
            result: BatchResult to format.

        Returns:
            JSON string with metadata, results, and errors.
        """
        output = {
            "metadata": {
                "total": result.total,
                "succeeded": result.succeeded,
                "failed": result.failed,
                "total_time_ms": result.total_time_ms,
            },
            "results": result.results,
            "errors": result.errors,
        }
        return json.dumps(output, indent=2, ensure_ascii=False)
