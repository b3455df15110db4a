"""JSON persistence for scenario results."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from blog_search_qa.verification.models import ScenarioResult


class ReportStore:
    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def write(
        self,
        results: Iterable[ScenarioResult],
        *,
        filename: str,
        subdir: str | None = None,
    ) -> Path:
        target_dir = self.root / subdir if subdir else self.root
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / filename
        generated_at = datetime.now(timezone.utc).replace(tzinfo=None)
        serialisable = {
            "generated_at": generated_at.isoformat() + "Z",
            "items": [result.to_dict() for result in results],
        }
        path.write_text(json.dumps(serialisable, indent=2, ensure_ascii=False), encoding="utf-8")
        return path
