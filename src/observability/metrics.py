"""Business metrics for the Task Board service.

Defines OpenTelemetry metrics for:
- Tasks: creation, updates, comments, deletion
- Users: registration, role changes, deletion
- Auth: token issuance and rejected credentials
"""

from opentelemetry import metrics

meter = metrics.get_meter(__name__)

# =============================================================================
# TASK METRICS
# =============================================================================

tasks_created = meter.create_counter(
    name="task_board.tasks.created",
    description="Total tasks created",
    unit="1",
)

tasks_updated = meter.create_counter(
    name="task_board.tasks.updated",
    description="Total task updates applied",
    unit="1",
)

tasks_deleted = meter.create_counter(
    name="task_board.tasks.deleted",
    description="Total tasks deleted",
    unit="1",
)

tasks_failed = meter.create_counter(
    name="task_board.tasks.failed",
    description="Total rejected task operations",
    unit="1",
)

task_comments_added = meter.create_counter(
    name="task_board.tasks.comments_added",
    description="Total comments appended to tasks",
    unit="1",
)

task_processing_time = meter.create_histogram(
    name="task_board.task.processing_time",
    description="Time to process task operations",
    unit="ms",
)

# =============================================================================
# USER METRICS
# =============================================================================

users_registered = meter.create_counter(
    name="task_board.users.registered",
    description="Total accounts created (self-registration and admin provisioning)",
    unit="1",
)

users_deleted = meter.create_counter(
    name="task_board.users.deleted",
    description="Total accounts deleted",
    unit="1",
)

user_role_changes = meter.create_counter(
    name="task_board.users.role_changes",
    description="Total account role changes",
    unit="1",
)

# =============================================================================
# AUTH METRICS
# =============================================================================

tokens_issued = meter.create_counter(
    name="task_board.auth.tokens_issued",
    description="Total bearer tokens issued",
    unit="1",
)

auth_failures = meter.create_counter(
    name="task_board.auth.failures",
    description="Total rejected logins and bearer tokens",
    unit="1",
)
