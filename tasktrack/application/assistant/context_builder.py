"""Task-history statistics handed to the assistant.

The builders are pure: they take already-fetched task records plus "now" and
return typed summary records. The records are consumed directly by the prompt
assembler (through `render()`) and by the fallback responder (through their
fields).
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import ClassVar, Literal
from uuid import UUID

from tasktrack.domain.entities import Task, TaskStatus, User

OVERDUE_LIMIT = 5
DIGEST_OVERDUE_LIMIT = 3
DIGEST_RECENT_LIMIT = 3
ATTENTION_RATE_THRESHOLD = 50


def completion_rate(completed: int, total: int) -> int:
    """Percentage rounded half-up; 0 for an empty window."""
    if total <= 0:
        return 0
    return math.floor(completed * 100 / total + 0.5)


def local_date(moment: datetime, tz: tzinfo | None) -> date:
    return moment.astimezone(tz).date() if tz is not None else moment.date()


def calculate_streak(completion_dates: Iterable[date], today: date) -> int:
    """Consecutive days with a completion, walking back from today."""
    days = set(completion_dates)
    streak = 0
    cursor = today
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def week_bounds(today: date) -> tuple[date, date]:
    """Sunday-start calendar week containing `today`."""
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


@dataclass(frozen=True)
class WindowStats:
    total: int = 0
    completed: int = 0

    @property
    def rate(self) -> int:
        return completion_rate(self.completed, self.total)

    @classmethod
    def of(cls, tasks: Sequence[Task]) -> "WindowStats":
        return cls(total=len(tasks), completed=sum(1 for t in tasks if t.is_done))


@dataclass(frozen=True)
class TaskLine:
    """A task as shown in a summary list."""

    title: str
    status: str
    due: date
    estimated_minutes: int | None = None

    def render_scheduled(self) -> str:
        estimate = f" (Est: {self.estimated_minutes}min)" if self.estimated_minutes else ""
        return f'- "{self.title}" [{self.status}]{estimate}'

    def render_due(self, indent: str = "") -> str:
        return f'{indent}- "{self.title}" (Due: {self.due.strftime("%b")} {self.due.day})'


def _line(task: Task, tz: tzinfo | None) -> TaskLine:
    return TaskLine(
        title=task.title,
        status=task.status.value,
        due=local_date(task.date, tz),
        estimated_minutes=task.estimated_minutes,
    )


@dataclass(frozen=True)
class IndividualSummary:
    """Statistics over one individual's recent tasks."""

    role: ClassVar[Literal["individual"]] = "individual"

    today: date
    today_total: int = 0
    today_completed: int = 0
    today_in_progress: int = 0
    today_pending: int = 0
    today_tasks: tuple[TaskLine, ...] = ()
    week: WindowStats = WindowStats()
    last_7_days: WindowStats = WindowStats()
    last_30_days: WindowStats = WindowStats()
    streak: int = 0
    overdue: tuple[TaskLine, ...] = ()

    @property
    def has_overdue(self) -> bool:
        return bool(self.overdue)

    def render(self) -> str:
        today_list = "\n".join(line.render_scheduled() for line in self.today_tasks)
        overdue_list = "\n".join(line.render_due() for line in self.overdue)
        heading = f"{self.today.strftime('%A, %B')} {self.today.day}, {self.today.year}"

        return f"""USER'S CURRENT DATA (Use ONLY this data for analysis):

TODAY ({heading}):
- Tasks Today: {self.today_total}
- Completed: {self.today_completed}
- In Progress: {self.today_in_progress}
- Pending: {self.today_pending}
- Today's Tasks:
{today_list or "No tasks scheduled for today"}

THIS WEEK:
- Total Tasks: {self.week.total}
- Completed: {self.week.completed}
- Completion Rate: {self.week.rate}%

LAST 7 DAYS:
- Total Tasks: {self.last_7_days.total}
- Completed: {self.last_7_days.completed}
- Completion Rate: {self.last_7_days.rate}%

LAST 30 DAYS:
- Total Tasks: {self.last_30_days.total}
- Completed: {self.last_30_days.completed}
- Completion Rate: {self.last_30_days.rate}%

STREAK:
- Current Streak: {self.streak} days

OVERDUE/INCOMPLETE TASKS:
{overdue_list or "No overdue tasks - Great job!"}
"""


@dataclass(frozen=True)
class IndividualDigest:
    """Per-individual statistics inside a counselor summary."""

    user_id: UUID
    name: str
    email: str
    total: int
    completed: int
    pending: int
    today_total: int
    today_completed: int
    last_7_days: WindowStats
    streak: int
    overdue: tuple[TaskLine, ...] = ()
    recently_completed: tuple[str, ...] = ()

    @property
    def needs_attention(self) -> bool:
        return self.last_7_days.total > 0 and self.last_7_days.rate < ATTENTION_RATE_THRESHOLD

    def render(self) -> str:
        lines = [
            f"{self.name} ({self.email}):",
            f"   - Total Tasks: {self.total}",
            f"   - Completed: {self.completed} | Pending: {self.pending}",
            f"   - Today's Tasks: {self.today_total} ({self.today_completed} done)",
            f"   - Last 7 Days Completion: {self.last_7_days.rate}%",
            f"   - Current Streak: {self.streak} days",
        ]
        if self.overdue:
            lines.append("   - Overdue Tasks:")
            lines.extend(line.render_due(indent="    ") for line in self.overdue)
        else:
            lines.append("   - No overdue tasks")
        if self.recently_completed:
            lines.append("   - Recently Completed:")
            lines.extend(f'    - "{title}"' for title in self.recently_completed)
        return "\n".join(lines)


@dataclass(frozen=True)
class CounselorSummary:
    """Statistics across every individual assigned to a counselor."""

    role: ClassVar[Literal["counselor"]] = "counselor"

    today: date
    individuals: tuple[IndividualDigest, ...] = ()
    total_tasks: int = 0
    total_completed: int = 0

    @property
    def overall_rate(self) -> int:
        return completion_rate(self.total_completed, self.total_tasks)

    @property
    def needs_attention(self) -> tuple[IndividualDigest, ...]:
        return tuple(d for d in self.individuals if d.needs_attention)

    def render(self) -> str:
        if not self.individuals:
            return (
                "COUNSELOR DATA:\n"
                "You currently have no individuals assigned to you.\n"
                "To start tracking progress, add individuals from your dashboard.\n"
            )

        flagged = self.needs_attention
        if flagged:
            attention = "INDIVIDUALS NEEDING ATTENTION:\n" + "\n".join(
                f"- {d.name} ({d.last_7_days.rate}% completion rate)" for d in flagged
            )
        else:
            attention = "All individuals are performing well!"

        details = "\n\n".join(d.render() for d in self.individuals)

        return f"""COUNSELOR DASHBOARD DATA (Use ONLY this data for analysis):

OVERVIEW:
- Total Individuals: {len(self.individuals)}
- Total Tasks Across All Individuals: {self.total_tasks}
- Total Completed: {self.total_completed}
- Overall Completion Rate: {self.overall_rate}%

{attention}

INDIVIDUAL DETAILS:
{details}
"""


ContextSummary = IndividualSummary | CounselorSummary


def _by_date_desc(tasks: Iterable[Task]) -> list[Task]:
    return sorted(tasks, key=lambda t: t.date, reverse=True)


def _completion_dates(tasks: Iterable[Task], tz: tzinfo | None) -> set[date]:
    return {
        local_date(t.completed_at, tz)
        for t in tasks
        if t.is_done and t.completed_at is not None
    }


def build_individual_summary(tasks: Sequence[Task], now: datetime) -> IndividualSummary:
    """Summarize an individual's recent tasks as of `now`.

    Days are calendar days in `now`'s timezone.
    """
    tz = now.tzinfo
    today = local_date(now, tz)
    tasks = _by_date_desc(tasks)

    todays = [t for t in tasks if local_date(t.date, tz) == today]
    week_start, week_end = week_bounds(today)
    this_week = [t for t in tasks if week_start <= local_date(t.date, tz) <= week_end]
    last_7 = [t for t in tasks if t.date >= now - timedelta(days=7)]
    last_30 = [t for t in tasks if t.date >= now - timedelta(days=30)]

    overdue = [t for t in tasks if not t.is_done and local_date(t.date, tz) < today]

    return IndividualSummary(
        today=today,
        today_total=len(todays),
        today_completed=sum(1 for t in todays if t.is_done),
        today_in_progress=sum(1 for t in todays if t.status == TaskStatus.IN_PROGRESS),
        today_pending=sum(1 for t in todays if not t.is_done),
        today_tasks=tuple(_line(t, tz) for t in todays),
        week=WindowStats.of(this_week),
        last_7_days=WindowStats.of(last_7),
        last_30_days=WindowStats.of(last_30),
        streak=calculate_streak(_completion_dates(tasks, tz), today),
        overdue=tuple(_line(t, tz) for t in overdue[:OVERDUE_LIMIT]),
    )


def build_individual_digest(user: User, tasks: Sequence[Task], now: datetime) -> IndividualDigest:
    tz = now.tzinfo
    today = local_date(now, tz)
    tasks = _by_date_desc(tasks)
    week_ago = now - timedelta(days=7)

    todays = [t for t in tasks if local_date(t.date, tz) == today]
    last_7 = [t for t in tasks if t.date >= week_ago]
    completed = sum(1 for t in tasks if t.is_done)
    overdue = [t for t in tasks if not t.is_done and local_date(t.date, tz) < today]
    recent_done = [t.title for t in last_7 if t.is_done]

    return IndividualDigest(
        user_id=user.id,
        name=user.name,
        email=user.email,
        total=len(tasks),
        completed=completed,
        pending=len(tasks) - completed,
        today_total=len(todays),
        today_completed=sum(1 for t in todays if t.is_done),
        last_7_days=WindowStats.of(last_7),
        streak=calculate_streak(_completion_dates(tasks, tz), today),
        overdue=tuple(_line(t, tz) for t in overdue[:DIGEST_OVERDUE_LIMIT]),
        recently_completed=tuple(recent_done[:DIGEST_RECENT_LIMIT]),
    )


def build_counselor_summary(
    roster: Sequence[tuple[User, Sequence[Task]]], now: datetime
) -> CounselorSummary:
    """Summarize every individual on a counselor's roster as of `now`."""
    digests = tuple(build_individual_digest(user, tasks, now) for user, tasks in roster)
    return CounselorSummary(
        today=local_date(now, now.tzinfo),
        individuals=digests,
        total_tasks=sum(d.total for d in digests),
        total_completed=sum(d.completed for d in digests),
    )
