# categories.py
"""
Goal lists for the four life categories.

Each category stores its items as a JSON list under its own settings key.
Items are kept in insertion order.
"""
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from constants import PRIORITY_COLORS
from storage import SettingsStore

CATEGORIES = ("Personal", "Health", "Professional", "Future")

_STORAGE_KEYS = {
    "Personal": "personalItems",
    "Health": "healthItems",
    "Professional": "professionalItems",
    "Future": "futureItems",
}

_DESCRIPTIONS = {
    "Personal": "Track your personal development goals, relationships, hobbies, and personal projects.",
    "Health": "Monitor your physical and mental health goals, fitness milestones, and wellness objectives.",
    "Professional": "Manage your career objectives, skills development, and professional achievements.",
    "Future": "Plan your long-term aspirations, life vision, and legacy goals.",
}
_DEFAULT_DESCRIPTION = "Manage your goals and track your progress."

PRIORITY_LABELS = {1: "Low", 2: "Medium", 3: "High"}


def storage_key(category: str) -> str:
    """Settings key for a category. Raises KeyError for unknown categories."""
    return _STORAGE_KEYS[category]


def category_description(category: str) -> str:
    return _DESCRIPTIONS.get(category, _DEFAULT_DESCRIPTION)


def priority_color(priority: int):
    # Out-of-range priorities are shown as Low.
    return PRIORITY_COLORS.get(priority, PRIORITY_COLORS[1])


@dataclass
class CategoryItem:
    title: str
    description: str
    date: datetime
    is_completed: bool = False
    priority: int = 1
    id: str = field(default_factory=lambda: str(uuid.uuid4()).upper())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "date": self.date.isoformat(),
            "isCompleted": self.is_completed,
            "priority": self.priority,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CategoryItem":
        return cls(
            id=str(data["id"]),
            title=data["title"],
            description=data.get("description", ""),
            date=datetime.fromisoformat(data["date"]),
            is_completed=bool(data.get("isCompleted", False)),
            priority=int(data.get("priority", 1)),
        )


def decode_items(raw: Any, category: str) -> List[CategoryItem]:
    """
    Decodes a stored item list. Corrupt data is logged and treated as an
    empty list so a single bad category never blocks the others.
    """
    if raw is None:
        return []
    try:
        return [CategoryItem.from_dict(entry) for entry in raw]
    except (KeyError, TypeError, ValueError) as e:
        logging.error(f"Error decoding {category} items: {e}. Treating the list as empty.")
        return []


class CategoryList:
    """The items of one category, loaded from and saved to a SettingsStore."""

    def __init__(self, name: str, settings: SettingsStore):
        self.key = storage_key(name)
        self.name = name
        self.settings = settings
        self.items: List[CategoryItem] = []

    def load(self) -> List[CategoryItem]:
        self.items = decode_items(self.settings.get(self.key), self.name)
        return self.items

    def save(self) -> None:
        self.settings.set(self.key, [item.to_dict() for item in self.items])

    def _save_or_revert(self, previous: List[CategoryItem]) -> None:
        try:
            self.save()
        except OSError:
            self.items = previous
            raise

    def add(self, title: str, description: str = "", date: Optional[datetime] = None,
            priority: int = 1) -> CategoryItem:
        if not title:
            raise ValueError("A goal needs a title.")
        if priority not in PRIORITY_LABELS:
            raise ValueError(f"Priority must be 1, 2 or 3, got {priority}.")
        item = CategoryItem(
            title=title,
            description=description,
            date=date or datetime.now(),
            priority=priority,
        )
        previous = list(self.items)
        self.items.append(item)
        self._save_or_revert(previous)
        logging.info(f"Added {self.name} goal '{title}'.")
        return item

    def _find(self, item_id: str) -> Optional[CategoryItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def toggle(self, item_id: str) -> bool:
        """Flips completion. Returns False if no item has this id."""
        item = self._find(item_id)
        if item is None:
            return False
        item.is_completed = not item.is_completed
        try:
            self.save()
        except OSError:
            item.is_completed = not item.is_completed
            raise
        return True

    def delete(self, item_id: str) -> bool:
        previous = self.items
        self.items = [item for item in self.items if item.id != item_id]
        if len(self.items) == len(previous):
            return False
        self._save_or_revert(previous)
        logging.info(f"Deleted {self.name} goal {item_id}.")
        return True
