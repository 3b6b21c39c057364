"""
Generic data insertion mixin for SQLAlchemy models
Provides from_dict, to_dict and update_from_dict so routes and the build
script can move between JSON payloads and model rows without per-model code.
"""

from cmms import db
from datetime import date, datetime
from sqlalchemy import inspect
from cmms.logger import get_logger

logger = get_logger("cmms.business.core.data_insertion")

AUDIT_FIELDS = ('created_at', 'updated_at', 'created_by_id', 'updated_by_id')
PROTECTED_FIELDS = ('id',) + AUDIT_FIELDS


class DataInsertionMixin:
    """
    Mixin that provides generic data insertion capabilities for SQLAlchemy models

    This mixin adds:
    - from_dict(): Create model instance from dictionary
    - to_dict(): Convert model instance to dictionary
    - update_from_dict(): Apply a partial update
    - create_from_dict(): Create and save model instance from dictionary
    """

    @classmethod
    def _column_map(cls):
        return {c.key: c for c in inspect(cls).columns}

    @classmethod
    def from_dict(cls, data_dict, user_id=None, skip_fields=None):
        """
        Create a model instance from a dictionary

        Args:
            data_dict (dict): Dictionary containing model data
            user_id (int, optional): User ID for audit fields
            skip_fields (list, optional): Fields to skip during creation

        Returns:
            Model instance (not saved to database)
        """
        if skip_fields is None:
            skip_fields = []

        columns = cls._column_map()

        filtered_data = {}
        for key, value in data_dict.items():
            if key in columns and key not in skip_fields:
                if key == 'password' and hasattr(cls, 'set_password'):
                    continue
                elif key in ['created_at', 'updated_at'] and value is None:
                    continue
                else:
                    filtered_data[key] = value

        instance = cls(**filtered_data)

        if 'password' in data_dict and hasattr(instance, 'set_password'):
            instance.set_password(data_dict['password'])

        if user_id is not None:
            if hasattr(instance, 'created_by_id') and not instance.created_by_id:
                instance.created_by_id = user_id
            if hasattr(instance, 'updated_by_id'):
                instance.updated_by_id = user_id

        return instance

    def update_from_dict(self, data_dict, user_id=None, skip_fields=None):
        """
        Apply the column values present in data_dict to this instance.

        Identity and audit columns are never overwritten from input.

        Returns:
            list: Names of the columns that changed
        """
        skip = set(skip_fields or []) | set(PROTECTED_FIELDS)
        columns = self._column_map()
        changed = []

        for key, value in data_dict.items():
            if key not in columns or key in skip:
                continue
            if getattr(self, key) != value:
                setattr(self, key, value)
                changed.append(key)

        if user_id is not None and hasattr(self, 'updated_by_id'):
            self.updated_by_id = user_id

        return changed

    def to_dict(self, include_audit_fields=True, exclude=None):
        """
        Convert model instance to dictionary

        Args:
            include_audit_fields (bool): Whether to include audit fields
            exclude (iterable, optional): Column names to leave out

        Returns:
            dict: JSON-serializable representation of the row
        """
        exclude = set(exclude or [])
        result = {}

        for column in inspect(self.__class__).columns:
            if column.key in exclude:
                continue
            if not include_audit_fields and column.key in AUDIT_FIELDS:
                continue

            value = getattr(self, column.key)
            if isinstance(value, (datetime, date)):
                result[column.key] = value.isoformat()
            else:
                result[column.key] = value

        return result

    @classmethod
    def create_from_dict(cls, data_dict, user_id=None, skip_fields=None, commit=True):
        """
        Create and save a model instance from dictionary

        Args:
            data_dict (dict): Dictionary containing model data
            user_id (int, optional): User ID for audit fields
            skip_fields (list, optional): Fields to skip during creation
            commit (bool): Whether to commit the transaction

        Returns:
            Model instance (saved to database)
        """
        instance = cls.from_dict(data_dict, user_id, skip_fields)

        try:
            db.session.add(instance)
            if commit:
                db.session.commit()
                logger.info(f"Created {cls.__name__}: {instance}")
            return instance
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error creating {cls.__name__}: {e}")
            raise
