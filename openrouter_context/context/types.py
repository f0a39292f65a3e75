"""Types for the context management system."""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

# Known roles. Anything else is carried through verbatim.
ROLE_SYSTEM = "system"
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A single chat message."""

    role: str
    content: str
    name: str | None = None

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role=ROLE_SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=ROLE_USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role=ROLE_ASSISTANT, content=content)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Message":
        """
        Build a message from an OpenAI-style dict.

        Multi-part content keeps its text parts joined by spaces; image
        and other non-text parts are dropped.
        """
        content = data.get("content")
        if isinstance(content, list):
            content = " ".join(
                p.get("text", "")
                for p in content
                if isinstance(p, dict) and p.get("type") == "text"
            )
        return cls(
            role=str(data.get("role", ROLE_USER)),
            content=content if isinstance(content, str) else "",
            name=data.get("name"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format expected by chat APIs."""
        data: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.name:
            data["name"] = self.name
        return data

    @property
    def is_system(self) -> bool:
        return self.role == ROLE_SYSTEM


@dataclass
class ReductionOutcome:
    """Result of fitting messages to a budget."""

    messages: list[Message]
    was_reduced: bool
    estimated_tokens: int
    budget: int = 0

    @property
    def exceeds_budget(self) -> bool:
        """True when best-effort reduction left the messages over budget."""
        return self.estimated_tokens > self.budget


@dataclass
class ConversationResult:
    """Result of a managed conversation turn."""

    messages: list[Message] = field(default_factory=list)
    was_reduced: bool = False
    estimated_tokens: int = 0


# Injected callables
Summarizer = Callable[[list[Message]], Awaitable[Message]]
RespondFn = Callable[[list[Message]], Awaitable[list[Message]]]

# Constants
CHARS_PER_TOKEN = 4
MESSAGE_OVERHEAD_TOKENS = 5
TRUNCATION_MARKER = "... [truncated] "
MERGE_SEPARATOR = "\n\n"
UNBOUNDED_BUDGET = 2**63 - 1

SUMMARY_PREFIX = "Previous conversation summary: "

SUMMARIZE_SYSTEM_PROMPT = (
    "Summarize the following conversation history concisely, "
    "capturing all important points and context needed for "
    "continuing the conversation."
)

EXTRACT_KEY_INFO_SYSTEM_PROMPT = (
    "Extract the key pieces of information from the following text. "
    "Return each key point as a separate line."
)
