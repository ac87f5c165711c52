from dataclasses import dataclass, field


@dataclass
class AssigneeWorkloadDto:
    user_id: str
    name: str
    total: int = 0
    completed: int = 0


@dataclass
class TaskStatisticsDto:
    total: int = 0
    completed: int = 0
    pending: int = 0
    overdue: int = 0
    completion_rate: float = 0.0
    by_status: dict[str, int] = field(default_factory=dict)
    by_priority: dict[str, int] = field(default_factory=dict)
    workload: list[AssigneeWorkloadDto] = field(default_factory=list)
