"""
Schedule Status
Lifecycle states a maintenance schedule is stored with.
"""


class ScheduleStatus:
    ACTIVE = "ACTIVE"
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    OVERDUE = "OVERDUE"
    INACTIVE = "INACTIVE"

    ALL = (ACTIVE, SCHEDULED, IN_PROGRESS, COMPLETED, OVERDUE, INACTIVE)
