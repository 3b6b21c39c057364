"""
Logging Sanitizer Utility

Redacts credentials from request payloads before they reach the log files.
JSON bodies posted to the API are nested dicts and lists, both are walked.
"""

from typing import Any, Dict, Mapping, Optional


# Fields that should never be logged
SENSITIVE_FIELDS = {
    'password',
    'password_confirm',
    'confirm_password',
    'current_password',
    'new_password',
    'old_password',
    'password_hash',
    'secret',
    'secret_key',
    'token',
    'api_key',
    'auth_token',
    'access_token',
    'refresh_token',
    'session_id',
    'csrf_token',
}

REDACTED = '[REDACTED]'


def _sanitize_value(value: Any, redact_text: str) -> Any:
    if isinstance(value, Mapping):
        return sanitize_dict(value, redact_text)
    if isinstance(value, (list, tuple)):
        return [_sanitize_value(item, redact_text) for item in value]
    return value


def sanitize_dict(data: Optional[Mapping[str, Any]], redact_text: str = REDACTED) -> Optional[Dict[str, Any]]:
    """
    Sanitize a mapping by replacing sensitive field values with redaction text.

    Args:
        data: Mapping to sanitize (a JSON body, form data, a model dict)
        redact_text: Text to use for redacted values (default: '[REDACTED]')

    Returns:
        New dictionary with sensitive values replaced. Falsy input is returned as is.

    Example:
        >>> sanitize_dict({'username': 'admin', 'password': 'secret123'})
        {'username': 'admin', 'password': '[REDACTED]'}
    """
    if not data:
        return data

    sanitized = {}
    for key, value in data.items():
        if str(key).lower() in SENSITIVE_FIELDS:
            sanitized[key] = redact_text
        else:
            sanitized[key] = _sanitize_value(value, redact_text)

    return sanitized


def sanitize_request_payload(request, redact_text: str = REDACTED) -> Dict[str, Any]:
    """
    Sanitize whatever the client sent: the JSON body if there is one, the form otherwise.

    Args:
        request: Flask request object

    Returns:
        Sanitized dictionary safe for logging
    """
    payload = request.get_json(silent=True)
    if payload is None:
        payload = request.form.to_dict()
    if not isinstance(payload, Mapping):
        return {'body': REDACTED if payload else payload}
    return sanitize_dict(payload, redact_text) or {}


def sanitize_exception_message(exception: Exception) -> str:
    """
    Hide exception messages that mention a sensitive field name.

    Args:
        exception: Exception to sanitize

    Returns:
        The message, or a placeholder naming only the exception type
    """
    message = str(exception)

    if any(field in message.lower() for field in SENSITIVE_FIELDS):
        return f"{type(exception).__name__}: [Message contains sensitive data]"

    return message
