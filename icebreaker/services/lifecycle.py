# icebreaker/services/lifecycle.py
from icebreaker.services.errors import InvalidRoleError

TEACHER = "teacher"
STUDENT = "student"
ROLES = (TEACHER, STUDENT)

WAITING = "waiting"
TEACHER_COMPLETED = "teacher_completed"
STUDENT_COMPLETED = "student_completed"
BOTH_COMPLETED = "both_completed"
STATUSES = (WAITING, TEACHER_COMPLETED, STUDENT_COMPLETED, BOTH_COMPLETED)

# (current status, submitting role) -> new status
_TRANSITIONS = {
    (WAITING, TEACHER): TEACHER_COMPLETED,
    (WAITING, STUDENT): STUDENT_COMPLETED,
    (TEACHER_COMPLETED, TEACHER): TEACHER_COMPLETED,
    (TEACHER_COMPLETED, STUDENT): BOTH_COMPLETED,
    (STUDENT_COMPLETED, TEACHER): BOTH_COMPLETED,
    (STUDENT_COMPLETED, STUDENT): STUDENT_COMPLETED,
    (BOTH_COMPLETED, TEACHER): BOTH_COMPLETED,
    (BOTH_COMPLETED, STUDENT): BOTH_COMPLETED,
}


def validate_role(role: str) -> str:
    if role not in ROLES:
        raise InvalidRoleError(f"invalid role {role!r}, expected 'teacher' or 'student'")
    return role


def next_status(current: str, role: str) -> str:
    """
    Status after ``role`` submits its answers.

    Resubmission is always allowed and never moves a match backwards.
    """
    validate_role(role)
    return _TRANSITIONS.get((current, role), current)


def is_complete(status: str) -> bool:
    return status == BOTH_COMPLETED
