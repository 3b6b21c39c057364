"""
Asset Service
Presentation service for asset-related data retrieval.
"""

from typing import Dict, Optional

from cmms import db
from cmms.data.core.asset_info.asset import Asset


class AssetService:
    """
    Service for asset presentation data.

    Provides methods for:
    - Building filtered asset queries
    - Looking up display names for the maintenance agenda
    """

    @staticmethod
    def build_filtered_query(
        status: Optional[str] = None,
        location: Optional[str] = None,
        name: Optional[str] = None
    ):
        """
        Build a filtered asset query.

        Args:
            status: Filter by exact status
            location: Filter by location (partial match)
            name: Filter by name (partial match)

        Returns:
            SQLAlchemy query object
        """
        query = Asset.query

        if status:
            query = query.filter(Asset.status == status.upper())

        if location:
            query = query.filter(Asset.location.ilike(f'%{location}%'))

        if name:
            query = query.filter(Asset.name.ilike(f'%{name}%'))

        return query.order_by(Asset.name)

    @staticmethod
    def get_asset_names() -> Dict[int, str]:
        """asset id -> name for every asset"""
        return {asset_id: name for asset_id, name in db.session.query(Asset.id, Asset.name).all()}

    @staticmethod
    def count_by_status() -> Dict[str, int]:
        rows = db.session.query(Asset.status, db.func.count(Asset.id)).group_by(Asset.status).all()
        return {status: count for status, count in rows}
