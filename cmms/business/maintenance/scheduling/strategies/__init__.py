from cmms.business.maintenance.scheduling.strategies.fixed_schedule_strategy import FixedScheduleStrategy
from cmms.business.maintenance.scheduling.strategies.rolling_from_completion_strategy import RollingFromCompletionStrategy

STRATEGIES = {
    FixedScheduleStrategy.name: FixedScheduleStrategy,
    RollingFromCompletionStrategy.name: RollingFromCompletionStrategy,
}


def get_strategy(name):
    """
    Instantiate a strategy by name ("fixed" or "rolling").

    Raises:
        ValueError: unknown name
    """
    key = (name or "").strip().lower()
    if key not in STRATEGIES:
        raise ValueError(f"Unknown occurrence strategy {name!r}; expected one of {sorted(STRATEGIES)}")
    return STRATEGIES[key]()


__all__ = [
    'FixedScheduleStrategy',
    'RollingFromCompletionStrategy',
    'STRATEGIES',
    'get_strategy',
]
