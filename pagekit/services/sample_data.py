"""Deterministic demo records for the sample lists."""

from __future__ import annotations

import random
from typing import Any, Dict, List

BREED_LOGS = "breed_logs"
DOCUMENTS = "documents"

_BREEDS = ["Angus", "Hereford", "Holstein", "Jersey", "Simmental", "Charolais"]
_BREED_STATUS = ["pending", "confirmed", "calved", "failed"]
_DOC_CATEGORIES = ["policy", "manual", "report", "contract"]
_DOC_OWNERS = ["operations", "finance", "hr", "legal"]


def breed_logs(count: int = 45, seed: int = 7) -> List[Dict[str, Any]]:
    rng = random.Random(seed)
    records = []
    for i in range(1, count + 1):
        breed = rng.choice(_BREEDS)
        records.append({
            "id": i,
            "title": f"{breed} cow #{1000 + i}",
            "breed": breed,
            "status": rng.choice(_BREED_STATUS),
            "sire": f"{rng.choice(_BREEDS)} bull #{rng.randint(1, 40)}",
        })
    return records


def documents(count: int = 120, seed: int = 11) -> List[Dict[str, Any]]:
    rng = random.Random(seed)
    records = []
    for i in range(1, count + 1):
        category = rng.choice(_DOC_CATEGORIES)
        records.append({
            "id": i,
            "title": f"{category.title()} {i:03d}",
            "category": category,
            "owner": rng.choice(_DOC_OWNERS),
            "pages": rng.randint(1, 60),
        })
    return records


# key -> (records factory, search fields, table columns)
SAMPLE_LISTS = {
    BREED_LOGS: (breed_logs, ("title", "breed", "sire"), ("id", "title", "breed", "status", "sire")),
    DOCUMENTS: (documents, ("title", "owner"), ("id", "title", "category", "owner", "pages")),
}

# key -> filter presets the demo screen cycles through
FILTER_PRESETS = {
    BREED_LOGS: [{}] + [{"status": status} for status in _BREED_STATUS],
    DOCUMENTS: [{}] + [{"category": category} for category in _DOC_CATEGORIES],
}
