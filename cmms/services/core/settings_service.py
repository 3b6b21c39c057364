"""
Settings Service
Reads and updates the single site settings row.
"""

from typing import Dict, List, Optional

from cmms import db
from cmms.data.core.settings import AppSettings
from cmms.logger import get_logger

logger = get_logger("cmms.services.settings")


class SettingsService:

    @staticmethod
    def get_settings() -> AppSettings:
        """The settings row, created with defaults the first time it is read."""
        settings = AppSettings.query.order_by(AppSettings.id).first()
        if settings is None:
            settings = AppSettings(role_default_pages={})
            db.session.add(settings)
            db.session.commit()
            logger.info("Created default settings")
        return settings

    @staticmethod
    def update_settings(data: Dict, user_id: Optional[int] = None) -> List[str]:
        """
        Apply a partial update.

        Returns:
            Names of the fields that changed
        """
        settings = SettingsService.get_settings()
        changed = settings.update_from_dict(data, user_id=user_id)
        db.session.commit()
        logger.info(f"Settings updated by user {user_id}: {', '.join(changed) or 'no changes'}")
        return changed
