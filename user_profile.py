# user_profile.py
"""
The user's profile: name, nickname, birth date and an optional picture,
plus the birth-to-death timeline shown on the profile screen.
"""
import base64
import binascii
import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from storage import SettingsStore

FULL_NAME_KEY = "fullName"
NICKNAME_KEY = "nickname"
BIRTH_DATE_KEY = "birthDate"
IMAGE_KEY = "profileImageData"
IMAGE_EXISTS_KEY = "profileImageExists"

# The timeline bar spans this many years.
TIMELINE_YEARS = 100


@dataclass
class Profile:
    full_name: str = ""
    nickname: str = ""
    birth_date: Optional[date] = None
    image: Optional[bytes] = None

    def age_years(self, today: Optional[date] = None) -> int:
        """Completed years since birth; 0 without a birth date or for future dates."""
        if self.birth_date is None:
            return 0
        today = today or date.today()
        years = today.year - self.birth_date.year
        if (today.month, today.day) < (self.birth_date.month, self.birth_date.day):
            years -= 1
        return max(years, 0)

    def life_progress(self, today: Optional[date] = None) -> float:
        """Fraction of the timeline already lived, clamped to [0, 1]."""
        return min(self.age_years(today) / TIMELINE_YEARS, 1.0)


def load_profile(settings: SettingsStore) -> Profile:
    birth_text = settings.get(BIRTH_DATE_KEY)
    birth_date = None
    if birth_text:
        try:
            birth_date = date.fromisoformat(birth_text)
        except (TypeError, ValueError):
            logging.error(f"Stored birth date {birth_text!r} is not an ISO date; ignoring it.")

    image = None
    if settings.get(IMAGE_EXISTS_KEY, False):
        encoded = settings.get(IMAGE_KEY)
        if encoded:
            try:
                image = base64.b64decode(encoded, validate=True)
            except (binascii.Error, TypeError, ValueError):
                logging.error("Stored profile image is not valid base64; treating the profile as having no picture.")

    return Profile(
        full_name=settings.get(FULL_NAME_KEY, ""),
        nickname=settings.get(NICKNAME_KEY, ""),
        birth_date=birth_date,
        image=image,
    )


def save_profile(settings: SettingsStore, profile: Profile) -> None:
    """Persists every field. Saving without an image deletes any stored one."""
    settings.set(FULL_NAME_KEY, profile.full_name)
    settings.set(NICKNAME_KEY, profile.nickname)
    if profile.birth_date is not None:
        settings.set(BIRTH_DATE_KEY, profile.birth_date.isoformat())
    else:
        settings.remove(BIRTH_DATE_KEY)

    if profile.image is not None:
        settings.set(IMAGE_KEY, base64.b64encode(profile.image).decode("ascii"))
        settings.set(IMAGE_EXISTS_KEY, True)
    elif settings.get(IMAGE_EXISTS_KEY, False):
        settings.remove(IMAGE_KEY)
        settings.set(IMAGE_EXISTS_KEY, False)
    logging.info("Profile saved.")


def set_image_from_file(profile: Profile, path: str) -> None:
    """Loads raw image bytes from disk into the profile (not yet saved)."""
    with open(path, 'rb') as f:
        profile.image = f.read()
    logging.info(f"Profile image loaded from {path} ({len(profile.image)} bytes).")
