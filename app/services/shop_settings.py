import logging
from dataclasses import dataclass, fields, asdict
from typing import Dict

from sqlalchemy.exc import SQLAlchemyError
from models import db
from models.setting import Setting
from app.utils.result import Ok, Err, Result

logger = logging.getLogger(__name__)


@dataclass
class ShopSettings:
    shop_name: str = "JP.Vegetables & Fruits"
    shop_phone: str = "+91 98765 43210"
    shop_email: str = "order@jpvegetables.com"
    shop_address: str = "123 Market Street, Chennai, Tamil Nadu"
    shop_city: str = "Chennai"
    whatsapp_number: str = "919876543210"
    delivery_timing: str = "Mon - Sat: 6:00 AM - 9:00 PM"
    sunday_timing: str = "Sunday: 7:00 AM - 2:00 PM"

    @classmethod
    def keys(cls):
        return [f.name for f in fields(cls)]

    @classmethod
    def from_rows(cls, rows: Dict[str, str]) -> "ShopSettings":
        known = {k: (v or "") for k, v in rows.items() if k in cls.keys()}
        return cls(**known)

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def read_settings() -> Result:
    try:
        rows = {s.key: s.value for s in Setting.query.all()}
    except SQLAlchemyError as e:
        logger.error("Error fetching shop settings: %s", e)
        return Err("Failed to load settings", e)
    return Ok(ShopSettings.from_rows(rows))


def load_settings() -> ShopSettings:
    """Settings for rendering; falls back to defaults if the table is unreadable."""
    result = read_settings()
    return result.value if result.ok else ShopSettings()


def save_settings(values: Dict[str, str]) -> Result:
    """Upsert known keys; unknown keys are ignored."""
    allowed = set(ShopSettings.keys())
    try:
        for key, value in values.items():
            if key not in allowed:
                continue
            row = db.session.get(Setting, key)
            if row:
                row.value = value
            else:
                db.session.add(Setting(key=key, value=value))
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Error saving settings: %s", e)
        return Err("Failed to save settings", e)
    return read_settings()
