"""
Write an owned domain's profile to <domain>_profile.json.
"""

import json
from pathlib import Path
from typing import Optional

from models import OwnedDomain


def export_profile(owned: OwnedDomain, directory: Path) -> Optional[Path]:
    """Returns the written path, or None when there is no profile yet."""
    if owned.profile is None:
        return None
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{owned.name}_profile.json"
    data = {
        "domain": owned.name,
        "purchased_at": owned.purchased_at.isoformat(),
        "score": owned.record.score.model_dump(mode="json") if owned.record.score else None,
        "profile": owned.profile.model_dump(mode="json"),
    }
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    print(f"[PROFILE] Exported {owned.name} to {path}")
    return path
