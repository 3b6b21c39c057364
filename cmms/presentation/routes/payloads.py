"""
Request payload parsing for the JSON API.

Routes read a body field by field through Payload; every problem is
collected and raised once as a ValidationError so the client sees all
field errors together.
"""

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from flask import request
from dateutil import parser as dateutil_parser

from cmms.utils.date_utils import to_date


class ValidationError(Exception):
    """Rendered as 400 {"message": ..., "errors": {field: [messages]}}"""

    def __init__(self, errors: Dict[str, List[str]], message: str = "Validation error"):
        super().__init__(message)
        self.message = message
        self.errors = errors

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls({field: [message]})


_MISSING = object()


class Payload:
    """
    Typed accessors over a JSON object.

    In partial mode (PATCH) absent fields are skipped instead of reported as
    required, and result() only contains what the client actually sent.
    """

    def __init__(self, data: Optional[Dict[str, Any]], partial: bool = False):
        self.data = data if isinstance(data, dict) else {}
        self.partial = partial
        self.errors: Dict[str, List[str]] = {}
        self.values: Dict[str, Any] = {}

    @classmethod
    def from_request(cls, partial: bool = False) -> "Payload":
        data = request.get_json(silent=True)
        if data is not None and not isinstance(data, dict):
            raise ValidationError.single('body', 'Expected a JSON object')
        return cls(data, partial=partial)

    def error(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)

    def _raw(self, field: str, required: bool, default: Any):
        if field in self.data:
            return self.data[field]
        if self.partial:
            return _MISSING
        if required:
            self.error(field, 'This field is required')
            return _MISSING
        if default is _MISSING:
            return _MISSING
        self.values[field] = default
        return _MISSING

    def string(self, field: str, required: bool = False, default: Any = _MISSING,
               max_length: Optional[int] = None, nullable: bool = False):
        raw = self._raw(field, required, default)
        if raw is _MISSING:
            return
        if raw is None and nullable:
            self.values[field] = None
            return
        if not isinstance(raw, str):
            self.error(field, 'Must be a string')
            return
        value = raw.strip()
        if required and not value:
            self.error(field, 'Must not be empty')
            return
        if max_length is not None and len(value) > max_length:
            self.error(field, f'Must be at most {max_length} characters')
            return
        self.values[field] = value

    def choice(self, field: str, choices: Iterable[str], required: bool = False, default: Any = _MISSING, normalize=None):
        """
        Args:
            normalize: Optional callable mapping the raw value to its canonical
                form, returning None when the value is not acceptable
        """
        raw = self._raw(field, required, default)
        if raw is _MISSING:
            return
        choices = list(choices)
        value = normalize(raw) if normalize else (raw.strip().upper() if isinstance(raw, str) else None)
        if value not in choices:
            self.error(field, f"Must be one of: {', '.join(choices)}")
            return
        self.values[field] = value

    def date_field(self, field: str, required: bool = False, default: Any = _MISSING, nullable: bool = False):
        raw = self._raw(field, required, default)
        if raw is _MISSING:
            return
        if raw in (None, '') and nullable:
            self.values[field] = None
            return
        try:
            self.values[field] = to_date(raw)
        except ValueError:
            self.error(field, 'Must be a date (YYYY-MM-DD)')

    def datetime_field(self, field: str, required: bool = False, default: Any = _MISSING, nullable: bool = False):
        raw = self._raw(field, required, default)
        if raw is _MISSING:
            return
        if raw in (None, '') and nullable:
            self.values[field] = None
            return
        self.values[field] = self._parse_datetime(field, raw)

    def _parse_datetime(self, field: str, raw):
        """
        Stored naive, as the wall-clock time the client sent. An offset is
        dropped without shifting so the calendar day stays the client's.
        """
        if isinstance(raw, datetime):
            return raw.replace(tzinfo=None)
        if isinstance(raw, date):
            return datetime.combine(raw, datetime.min.time())
        if isinstance(raw, str) and raw.strip():
            try:
                return dateutil_parser.isoparse(raw.strip()).replace(tzinfo=None)
            except (ValueError, OverflowError):
                pass
        self.error(field, 'Must be an ISO-8601 date or datetime')
        return None

    def integer(self, field: str, required: bool = False, default: Any = _MISSING, nullable: bool = False):
        raw = self._raw(field, required, default)
        if raw is _MISSING:
            return
        if raw is None and nullable:
            self.values[field] = None
            return
        if isinstance(raw, bool) or not isinstance(raw, int):
            self.error(field, 'Must be an integer')
            return
        self.values[field] = raw

    def boolean(self, field: str, required: bool = False, default: Any = _MISSING):
        raw = self._raw(field, required, default)
        if raw is _MISSING:
            return
        if not isinstance(raw, bool):
            self.error(field, 'Must be true or false')
            return
        self.values[field] = raw

    def result(self) -> Dict[str, Any]:
        """
        Raises:
            ValidationError: any field failed
        """
        if self.errors:
            raise ValidationError(self.errors)
        return dict(self.values)


def query_date(name: str, default: Optional[date] = None) -> Optional[date]:
    """Read an optional YYYY-MM-DD query argument."""
    raw = request.args.get(name)
    if raw in (None, ''):
        return default
    try:
        return to_date(raw)
    except ValueError:
        raise ValidationError.single(name, 'Must be a date (YYYY-MM-DD)')


def query_int(name: str, default: Optional[int] = None, minimum: Optional[int] = None) -> Optional[int]:
    raw = request.args.get(name)
    if raw in (None, ''):
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError.single(name, 'Must be an integer')
    if minimum is not None and value < minimum:
        raise ValidationError.single(name, f'Must be at least {minimum}')
    return value


def today_or(name: str = 'as_of') -> date:
    """The as_of query argument, or the server's current date."""
    return query_date(name, default=date.today())


def query_bool(name: str, default: Optional[bool] = None) -> Optional[bool]:
    raw = request.args.get(name)
    if raw in (None, ''):
        return default
    value = raw.strip().lower()
    if value in ('true', '1', 'yes'):
        return True
    if value in ('false', '0', 'no'):
        return False
    raise ValidationError.single(name, 'Must be true or false')
