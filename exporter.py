# exporter.py
"""
Exports every piece of user data as one pretty-printed JSON document.
"""
import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from categories import CATEGORIES, decode_items, storage_key
from constants import APP_VERSION, EXPORT_FILE_NAME
from storage import SettingsStore
from user_profile import load_profile

# --- Data Contracts ---
#
# build_export(settings, now=None) -> Dict[str, Any]:
#   - Outputs: {"profileData": {...}, "categoryData": {"personal": [...],
#     "health": [...], "professional": [...], "future": [...]},
#     "exportDate": ISO 8601, "appVersion": str}
#   - A category whose stored data cannot be decoded exports as [].
#
# export_data(settings, directory, now=None) -> str:
#   - Side Effects: Writes <directory>/LifePortalData.json.
#   - Raises: OSError if the directory cannot be created or written.

def _iso(moment: datetime) -> str:
    if moment.tzinfo is None:
        return moment.isoformat()
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def build_export(settings: SettingsStore, now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or datetime.now(timezone.utc)
    profile = load_profile(settings)

    category_data = {}
    for category in CATEGORIES:
        items = decode_items(settings.get(storage_key(category)), category)
        category_data[category.lower()] = [item.to_dict() for item in items]

    return {
        "profileData": {
            "fullName": profile.full_name,
            "nickname": profile.nickname,
            "birthDate": profile.birth_date.isoformat() if profile.birth_date else None,
            "profileImage": settings.get("profileImageData") if profile.image is not None else None,
        },
        "categoryData": category_data,
        "exportDate": _iso(now),
        "appVersion": APP_VERSION,
    }


def export_data(settings: SettingsStore, directory: str, now: Optional[datetime] = None) -> str:
    """Writes the export file and returns its path."""
    payload = build_export(settings, now)
    path = os.path.join(directory, EXPORT_FILE_NAME)
    try:
        os.makedirs(directory, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=2)
    except OSError as e:
        logging.error(f"Error exporting data to {path}: {e}")
        raise

    total = sum(len(items) for items in payload["categoryData"].values())
    logging.info(f"Exported profile and {total} goals to {path}.")
    return path
