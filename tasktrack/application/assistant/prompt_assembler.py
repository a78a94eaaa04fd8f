"""Prompt assembly for the assistant.

Combines a fixed role policy, the rendered context summary and the trailing
conversation into (a) the full system prompt and history kept for the
conversation and (b) the compact request sent to the generation service.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from tasktrack.application.assistant.context_builder import ContextSummary
from tasktrack.domain.entities import ConversationTurn, UserRole
from tasktrack.domain.protocols.providers import GenerationRequest, GenerationTurn

OFF_TOPIC_REPLY = (
    "I'm here to help you with your tasks, learning, and productivity. "
    "Is there something related to your progress I can assist with?"
)

MODEL_ACKNOWLEDGEMENT = "Understood. I'll help with tasks and productivity only."

_RESTRICTIONS = """4. RESTRICTIONS
   - Do NOT answer questions unrelated to: {topics}
   - Do NOT provide medical, legal, financial, or personal advice
   - Do NOT generate content outside the context of this app"""

_DATA_SCOPE = """1. DATA SCOPE & PRIVACY
   - You can ONLY use data provided by this application (shown below)
   - You must NOT use external knowledge, personal assumptions, or information outside this app
   - If a question is unrelated to this app or its data, politely refuse to answer"""

INDIVIDUAL_POLICY = f"""You are an AI Assistant designed EXCLUSIVELY for this learning and task management application. Your purpose is to help the individual plan, track, analyze, and improve their learning and task completion over time.

STRICT RULES YOU MUST FOLLOW:

{_DATA_SCOPE}

2. USER-SPECIFIC LEARNING & TASK ANALYSIS
   - Analyze the individual's tasks, schedules, learning goals, and progress stored in this app
   - Track completed and incomplete tasks by date
   - Identify learning patterns, strengths, weak areas, and consistency over time
   - Provide insights such as what was achieved in a period, missed tasks, and progress toward goals

3. FEEDBACK & MOTIVATION
   - If tasks are incomplete, give constructive feedback and practical suggestions
   - If tasks are completed successfully, acknowledge progress and motivate the user
   - Suggest study strategies or better time management based on the user's data
   - Encourage consistency, discipline, and confidence without judgmental language

{_RESTRICTIONS.format(topics="Tasks, Learning, Exams, Productivity, Progress tracking")}
   - If asked about unrelated topics, respond with: "{OFF_TOPIC_REPLY}"

5. RESPONSE STYLE
   - Be clear, supportive, and concise
   - Use simple language
   - Focus on actionable insights
   - Maintain a motivating and professional tone at all times"""

COUNSELOR_POLICY = f"""You are an AI Assistant designed EXCLUSIVELY for this counselor dashboard application. Your purpose is to help counselors track, analyze, and support their individuals' learning and task completion.

STRICT RULES:

{_DATA_SCOPE}

2. COUNSELOR-SPECIFIC ANALYSIS
   - Analyze individuals' tasks, schedules, learning goals, and progress stored in this app
   - Track completed and incomplete tasks by date
   - Identify learning patterns, strengths, weak areas, and consistency over time
   - Provide insights on individual progress and suggest interventions

3. FEEDBACK & GUIDANCE
   - Suggest effective motivational messages for individuals
   - Provide counseling strategies based on data patterns
   - Help identify individuals who may need extra support

{_RESTRICTIONS.format(topics="Tasks, Learning, Exams, Productivity, Progress tracking, Counseling")}

5. RESPONSE STYLE
   - Be clear, professional, and concise
   - Use simple language
   - Focus on actionable insights
   - Maintain a supportive and professional tone"""

SHORT_INSTRUCTIONS: dict[UserRole, str] = {
    "individual": (
        "You are a helpful learning assistant. Use ONLY the user's data below to provide "
        "insights about their tasks and progress. Be concise and motivating."
    ),
    "counselor": (
        "You are a counselor assistant. Help analyze individual progress and suggest "
        "interventions based on the data below. Be professional and concise."
    ),
}

POLICIES: dict[UserRole, str] = {
    "individual": INDIVIDUAL_POLICY,
    "counselor": COUNSELOR_POLICY,
}


@dataclass(frozen=True)
class AssembledPrompt:
    """Everything the pipeline needs after assembly."""

    role: UserRole
    message: str
    system_prompt: str
    history: tuple[ConversationTurn, ...]
    request: GenerationRequest


def _tail(turns: Sequence[ConversationTurn], limit: int) -> tuple[ConversationTurn, ...]:
    if limit <= 0:
        return ()
    return tuple(turns[-limit:])


def to_generation_turn(turn: ConversationTurn) -> GenerationTurn:
    return GenerationTurn(role="model" if turn.role == "assistant" else "user", text=turn.content)


class PromptAssembler:
    """Builds the system prompt and the outbound generation request."""

    def __init__(
        self,
        history_limit: int = 10,
        request_history_limit: int = 4,
        temperature: float = 0.7,
        max_output_tokens: int = 512,
    ):
        self.history_limit = history_limit
        self.request_history_limit = min(request_history_limit, history_limit)
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens

    def assemble(
        self,
        summary: ContextSummary,
        message: str,
        history: Sequence[ConversationTurn] = (),
    ) -> AssembledPrompt:
        role = summary.role
        context_text = summary.render()
        kept = _tail(history, self.history_limit)

        request = GenerationRequest(
            turns=(
                GenerationTurn(role="user", text=f"{SHORT_INSTRUCTIONS[role]}\n\n{context_text}"),
                GenerationTurn(role="model", text=MODEL_ACKNOWLEDGEMENT),
                *(to_generation_turn(t) for t in _tail(kept, self.request_history_limit)),
                GenerationTurn(role="user", text=message),
            ),
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
            metadata={"role": role},
        )

        return AssembledPrompt(
            role=role,
            message=message,
            system_prompt=f"{POLICIES[role]}\n\n{context_text}",
            history=kept,
            request=request,
        )
