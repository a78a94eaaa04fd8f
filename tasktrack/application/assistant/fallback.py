"""Local replies used whenever the generation service is unavailable.

`FallbackResponder.respond` works from the typed context summary and the raw
message only. Categories are tried in a fixed order against the lower-cased
message; the first match wins, so a greeting that also mentions a streak is
answered as a greeting.
"""

import random
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from tasktrack.application.assistant.context_builder import (
    ContextSummary,
    CounselorSummary,
    IndividualSummary,
)

S = TypeVar("S", IndividualSummary, CounselorSummary)

GREETING_PATTERN = re.compile(r"^(hi|hello|hey|sup|yo|good morning|good evening)\b")


def _contains(*needles: str) -> Callable[[str], bool]:
    def predicate(text: str) -> bool:
        return any(needle in text for needle in needles)

    return predicate


def _is_greeting(text: str) -> bool:
    return GREETING_PATTERN.match(text) is not None


def _always(text: str) -> bool:
    return True


@dataclass(frozen=True)
class Rule(Generic[S]):
    category: str
    matches: Callable[[str], bool]
    reply: Callable[[S, random.Random], str]


# --- individual replies ---


def _individual_greeting(s: IndividualSummary, rng: random.Random) -> str:
    return (
        "Hello! 👋 I'm your learning assistant.\n\n"
        f"🔥 Current streak: **{s.streak} days**\n"
        f"📊 7-day completion rate: **{s.last_7_days.rate}%**\n"
        f"📋 Tasks today: **{s.today_total}** ({s.today_completed} completed)\n\n"
        "How can I help you today? Ask me about your progress, tasks, or just chat about productivity!"
    )


def _individual_motivation(s: IndividualSummary, rng: random.Random) -> str:
    rate = s.last_7_days.rate
    streak_line = (
        f"You've already built a {s.streak}-day streak - that shows real dedication!\n\n"
        if s.streak > 0
        else ""
    )
    today_line = (
        f"You have {s.today_total} tasks waiting for you. Let's tackle them!\n\n"
        if s.today_total > 0
        else ""
    )
    overdue_line = (
        "I see you have some overdue tasks. That's okay - today is a fresh start!\n\n"
        if s.has_overdue
        else ""
    )
    templates = [
        "💪 **You've Got This!**\n\n"
        f"{streak_line}"
        "Here's how to get started:\n\n"
        "1. **Break it down** - Start with just 5 minutes on one task\n"
        "2. **Remove distractions** - Close unnecessary tabs, silence your phone\n"
        "3. **Reward yourself** - Take a break after completing each task\n"
        "4. **Remember your why** - Why did you set this goal?\n\n"
        + (
            "You're building momentum. Every completed task is progress! 🚀"
            if rate < 50
            else "You're already doing great - keep that energy going! 🌟"
        ),
        "🌟 **Time to Shine!**\n\n"
        f"{today_line}"
        "**Quick Motivation Boost:**\n\n"
        '✨ "The secret of getting ahead is getting started" - Mark Twain\n'
        "💡 Start with the easiest task to build momentum\n"
        "🎯 Focus on progress, not perfection\n"
        "⚡ Action creates motivation, not the other way around\n\n"
        "Pick ONE task right now and give it 10 minutes. You'll be amazed how far you get! 🚀",
        "🔥 **Let's Get Moving!**\n\n"
        f"{overdue_line}"
        "**Your Action Plan:**\n\n"
        "1. **Set a timer for 25 minutes** (Pomodoro technique)\n"
        "2. **Work on ONE task** - no multitasking\n"
        "3. **Take a 5-minute break** when the timer rings\n"
        "4. **Repeat** - you'll be surprised how much you accomplish!\n\n"
        + (
            "You've been completing tasks well - you know you can do this! 💪"
            if rate >= 50
            else "Small steps lead to big results. Start now! 🌱"
        ),
    ]
    return rng.choice(templates)


def _progress_verdict(rate: int) -> str:
    if rate >= 80:
        return "🎉 **Outstanding!** You're crushing it with excellent consistency!"
    if rate >= 60:
        return "💪 **Great work!** You're maintaining solid progress. Keep it up!"
    if rate >= 40:
        return "📈 **Good start!** You're building momentum. Stay focused!"
    if rate > 0:
        return (
            "🌱 **Every journey starts somewhere!** "
            "Focus on one task at a time and you'll see improvement."
        )
    return "🚀 **Ready to start?** Today is the perfect day to begin building your streak!"


def _individual_progress(s: IndividualSummary, rng: random.Random) -> str:
    reply = (
        "📊 **Your Progress Summary**\n\n"
        f"🔥 Current Streak: **{s.streak} days**\n"
        f"📈 7-Day Completion Rate: **{s.last_7_days.rate}%**\n"
        f"📋 Today: **{s.today_completed}/{s.today_total}** tasks completed\n\n"
        f"{_progress_verdict(s.last_7_days.rate)}"
    )
    if s.has_overdue:
        reply += "\n\n⚠️ You have some overdue tasks. Want tips on catching up?"
    return reply


def _individual_today(s: IndividualSummary, rng: random.Random) -> str:
    tasks = "\n".join(line.render_scheduled() for line in s.today_tasks)
    return (
        "📋 **Today's Tasks**\n\n"
        f"{tasks or 'No tasks scheduled for today'}\n\n"
        "💡 **Pro Tip**: Start with your most important or challenging task first - eat that frog! 🐸"
    )


def _streak_encouragement(streak: int) -> str:
    if streak >= 30:
        return "🏆 **LEGENDARY!** A whole month of consistency!"
    if streak >= 14:
        return "🌟 **Two weeks strong!** You're building incredible habits!"
    if streak >= 7:
        return "🎯 **One week milestone!** Amazing dedication!"
    if streak >= 3:
        return "💪 **Building momentum!** Keep it going!"
    return "🌱 **Great start!** Every day counts!"


def _individual_streak(s: IndividualSummary, rng: random.Random) -> str:
    if s.streak > 0:
        return (
            f"🔥 **You're on a {s.streak}-day streak!**\n\n"
            f"{_streak_encouragement(s.streak)}\n\n"
            "Complete at least one task today to keep your streak alive! "
            "Your consistency is inspiring! ✨"
        )
    return (
        "📅 **Start Your Streak Today!**\n\n"
        "Complete at least one task to begin your journey. Consistency is the key to "
        "success - even small daily actions lead to big results over time! 🚀"
    )


def _individual_pareto(s: IndividualSummary, rng: random.Random) -> str:
    closing = (
        f"\nLook at your {s.today_total} tasks today - which ones will move the needle most? "
        "Start there! 🎯"
        if s.today_total > 0
        else "\nApply this to your next task list! 🚀"
    )
    return (
        "📊 **The 80/20 Rule (Pareto Principle)**\n\n"
        "💡 **Key Idea**: 80% of your results come from 20% of your efforts.\n\n"
        "**How to Apply:**\n\n"
        "1. **Identify your 20%** - Which tasks have the biggest impact?\n"
        "2. **Prioritize ruthlessly** - Focus on high-impact activities first\n"
        "3. **Eliminate or delegate** - The low-value 80% can often wait\n\n"
        "**Example**: If you have 10 tasks, 2-3 of them probably matter most. Do those first!\n"
        f"{closing}"
    )


def _individual_time_management(s: IndividualSummary, rng: random.Random) -> str:
    closing = (
        "Try the Pomodoro technique on your next task! 🚀"
        if s.today_total > 0
        else "Ready to boost your productivity? 💪"
    )
    return (
        "⏰ **Time Management Techniques**\n\n"
        "🍅 **Pomodoro Technique:**\n"
        "• Work for 25 minutes (focused)\n"
        "• Take 5-minute break\n"
        "• Repeat 4 times\n"
        "• Take longer 15-30 minute break\n\n"
        "⚡ **Time Blocking:**\n"
        "• Schedule specific times for specific tasks\n"
        "• Treat appointments with yourself seriously\n"
        "• Batch similar tasks together\n\n"
        "🎯 **Eat The Frog:**\n"
        "• Do your hardest/most important task first\n"
        "• Everything else feels easier after!\n\n"
        f"{closing}"
    )


def _individual_study(s: IndividualSummary, rng: random.Random) -> str:
    closing = (
        f"Your {s.streak}-day streak shows you can be consistent - apply that to studying! 🌟"
        if s.streak > 0
        else "Consistency beats intensity. Study a little every day! 📈"
    )
    return (
        "📚 **Effective Learning Strategies**\n\n"
        "**Before Studying:**\n"
        '• 🎯 Set a clear goal (e.g., "Understand Chapter 5")\n'
        "• 📱 Remove distractions\n"
        "• ☕ Have water/snacks ready\n\n"
        "**While Studying:**\n"
        "• 🧠 Active recall - test yourself frequently\n"
        "• 📝 Take notes in your own words\n"
        "• 🔄 Take breaks every 25-50 minutes\n"
        "• 🎨 Use diagrams, mind maps, flashcards\n\n"
        "**After Studying:**\n"
        "• 💭 Explain concepts to yourself or others\n"
        "• 📊 Review and revise regularly\n"
        "• 😴 Sleep well - your brain consolidates learning during sleep\n\n"
        f"{closing}"
    )


def _individual_question(s: IndividualSummary, rng: random.Random) -> str:
    closing = (
        f"\nYou have {s.today_total} tasks today - want to discuss them? 🎯"
        if s.today_total > 0
        else "\nWhat would you like help with? 💪"
    )
    return (
        "I'm here primarily to help you with tasks, learning, and productivity! 📚\n\n"
        "While I can't answer general knowledge questions (like current events or trivia), "
        "I can definitely help you with:\n\n"
        '✅ **Task management** - "What\'s on for today?"\n'
        '✅ **Progress tracking** - "How am I doing?"\n'
        '✅ **Motivation** - "I need motivation"\n'
        '✅ **Study strategies** - "How to focus better?"\n'
        '✅ **Time management** - "Tell me about the Pomodoro technique"\n'
        '✅ **Goal setting** - "How to stay consistent?"\n'
        f"{closing}"
    )


def _individual_default(s: IndividualSummary, rng: random.Random) -> str:
    return (
        "Hi! I'm your learning assistant. 👋\n\n"
        "📊 **Quick Stats:**\n"
        f"🔥 Streak: **{s.streak} days**\n"
        f"📈 7-day completion: **{s.last_7_days.rate}%**\n"
        f"📋 Today: **{s.today_completed}/{s.today_total}** tasks done\n\n"
        "**I can help you with:**\n"
        "• 📊 Progress tracking\n"
        "• 📋 Task management\n"
        "• 💪 Motivation and encouragement\n"
        "• 📚 Study and productivity tips\n"
        "• 🎯 Goal setting strategies\n"
        "• ⏰ Time management techniques\n\n"
        "What would you like to know? 🚀"
    )


INDIVIDUAL_RULES: tuple[Rule[IndividualSummary], ...] = (
    Rule("greeting", _is_greeting, _individual_greeting),
    Rule(
        "motivation",
        _contains("motivation", "motivate", "stuck", "help", "complete work", "need to work"),
        _individual_motivation,
    ),
    Rule("progress", _contains("progress", "how am i", "status", "doing"), _individual_progress),
    Rule("today", _contains("today", "task"), _individual_today),
    Rule("streak", _contains("streak"), _individual_streak),
    Rule("pareto", _contains("80/20", "pareto", "80 20"), _individual_pareto),
    Rule(
        "time_management",
        _contains("pomodoro", "time management", "focus"),
        _individual_time_management,
    ),
    Rule("study", _contains("study", "learn", "exam"), _individual_study),
    Rule("question", _contains("?", "what", "how", "why", "who"), _individual_question),
    Rule("default", _always, _individual_default),
)


# --- counselor replies ---

_NO_INDIVIDUALS = (
    "You currently have no individuals assigned to you. "
    "Add individuals from your dashboard to start tracking their progress."
)


def _counselor_greeting(s: CounselorSummary, rng: random.Random) -> str:
    if not s.individuals:
        return f"Hello! 👋 I'm your counselor assistant.\n\n{_NO_INDIVIDUALS}"
    return (
        "Hello! 👋 I'm your counselor assistant.\n\n"
        f"👥 Individuals: **{len(s.individuals)}**\n"
        f"📈 Overall completion rate: **{s.overall_rate}%**\n"
        f"⚠️ Needing attention: **{len(s.needs_attention)}**\n\n"
        "Ask me who needs support, how your individuals are progressing, "
        "or for motivation strategies."
    )


def _counselor_attention(s: CounselorSummary, rng: random.Random) -> str:
    if not s.individuals:
        return _NO_INDIVIDUALS
    flagged = s.needs_attention
    if not flagged:
        return (
            "✅ **All individuals are performing well!**\n\n"
            "Nobody is below a 50% completion rate over the last 7 days. "
            "Consider recognizing their consistency to keep motivation high."
        )
    lines = "\n".join(
        f"- **{d.name}**: {d.last_7_days.rate}% over the last 7 days, "
        f"{d.pending} pending, streak {d.streak} days"
        for d in flagged
    )
    return (
        "⚠️ **Individuals Needing Attention**\n\n"
        f"{lines}\n\n"
        "💡 Try a short check-in, break their open tasks into smaller steps, "
        "and agree on one task to finish today."
    )


def _counselor_progress(s: CounselorSummary, rng: random.Random) -> str:
    if not s.individuals:
        return _NO_INDIVIDUALS
    lines = "\n".join(
        f"- **{d.name}**: {d.completed}/{d.total} completed, "
        f"7-day rate {d.last_7_days.rate}%, streak {d.streak} days"
        for d in s.individuals
    )
    return (
        "📊 **Roster Overview**\n\n"
        f"👥 Individuals: **{len(s.individuals)}**\n"
        f"📋 Total tasks: **{s.total_tasks}** ({s.total_completed} completed)\n"
        f"📈 Overall completion rate: **{s.overall_rate}%**\n\n"
        f"{lines}"
    )


def _counselor_default(s: CounselorSummary, rng: random.Random) -> str:
    return (
        "I can help you analyze your individuals' progress. You can ask about their "
        "completion rates, who needs attention, or strategies for motivation. "
        "What would you like to know?"
    )


COUNSELOR_RULES: tuple[Rule[CounselorSummary], ...] = (
    Rule("greeting", _is_greeting, _counselor_greeting),
    Rule(
        "attention",
        _contains("attention", "struggl", "behind", "need help", "at risk"),
        _counselor_attention,
    ),
    Rule(
        "progress",
        _contains("progress", "overview", "status", "summary", "doing", "how are"),
        _counselor_progress,
    ),
    Rule("default", _always, _counselor_default),
)


def _rules_for(summary: ContextSummary) -> Sequence[Rule]:
    return COUNSELOR_RULES if isinstance(summary, CounselorSummary) else INDIVIDUAL_RULES


class FallbackResponder:
    """Rule-based replies built from the context summary."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def classify(self, message: str, summary: ContextSummary) -> str:
        return self._match(message, summary).category

    def respond(self, message: str, summary: ContextSummary) -> str:
        return self._match(message, summary).reply(summary, self.rng)

    def _match(self, message: str, summary: ContextSummary) -> Rule:
        text = message.lower().strip()
        rules = _rules_for(summary)
        for rule in rules:
            if rule.matches(text):
                return rule
        return rules[-1]
