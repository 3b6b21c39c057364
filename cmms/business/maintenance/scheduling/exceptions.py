class InvalidScheduleError(ValueError):
    """A schedule, or a completion attached to it, has a field the generator cannot use."""

    def __init__(self, schedule_id, field, value, reason=None):
        self.schedule_id = schedule_id
        self.field = field
        self.value = value
        self.reason = reason or "could not be parsed"
        super().__init__(
            f"Schedule {schedule_id}: invalid {field} {value!r} ({self.reason})"
        )
