"""
Problem-page assistants.

Each assistant is a system prompt plus two message builders:
- continuing a conversation: prepend the system prompt (with problem context)
  unless the client already sent one
- opening a conversation: one user message built from the page context
"""
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional

from algoprep.schemas.chat import ChatRequest
from algoprep.services import llm_client

logger = logging.getLogger(__name__)

Message = Dict[str, str]


EXPLAIN_PROMPT = """You are a focused problem-solving assistant. Follow these rules strictly:
1. Only answer questions related to the given programming problem
2. Keep responses short and precise (max 3-4 sentences)
3. If asked about anything unrelated, politely decline
4. Focus on clarity over completeness
5. No small talk or pleasantries"""

CODE_ANALYZE_PROMPT = """You are an expert code analysis assistant specializing in algorithms and data structures.
Your role is to help users analyze and improve their code by:
1. Identifying potential bugs and edge cases
2. Suggesting optimizations for better performance
3. Analyzing time and space complexity
4. Recommending better approaches or algorithms
5. Explaining code patterns and best practices

Keep responses concise and actionable (3-4 sentences max).
Focus on providing specific guidance that will help the user solve the problem.
When suggesting improvements, explain the reasoning behind them.
If the code is incomplete or has obvious issues, provide gentle guidance on how to proceed.
"""

CODE_HELP_PROMPT = """You are an expert coding assistant specializing in algorithms and data structures.
Your role is to help users with their coding problems by:
1. Explaining the problem and solution approaches
2. Identifying bugs and suggesting fixes
3. Optimizing code for better performance
4. Analyzing time and space complexity
5. Suggesting alternative approaches

Provide clear, concise explanations with code examples when appropriate.
Focus on helping the user understand the concepts rather than just giving them the answer.
"""

DOCS_PROMPT = """You are a documentation assistant specializing in programming concepts, algorithms, and data structures.
Your role is to provide clear, accurate, and helpful information about:
1. Programming language features and syntax
2. Algorithm concepts and implementations
3. Data structure designs and operations
4. Best practices and design patterns
5. Time and space complexity analysis

Provide comprehensive explanations with examples when appropriate.
Format your responses with clear headings, code blocks, and bullet points for readability.
When explaining concepts, start with a high-level overview before diving into details.
"""

INFO_HELP_PROMPT = """You are an expert documentation and help assistant specializing in algorithms, data structures, and programming concepts.
Your role is to help users understand concepts and implementations by:
1. Explaining programming concepts clearly and concisely
2. Providing relevant code examples and use cases
3. Sharing best practices and design patterns
4. Offering resources for further learning
5. Breaking down complex topics into digestible parts

Focus on making explanations clear and accessible.
Use examples to illustrate concepts when helpful.
Provide context to help users understand the bigger picture.
"""

ANALYZE_KEYWORDS = ("analyze", "check", "review")


def _code_block(code: str) -> str:
    return f"```python\n{code}\n```"


# -- context appended to the system prompt of a running conversation --

def _explain_context(req: ChatRequest) -> str:
    return f'\nContext: Problem "{req.title}"'


def _analyze_context(req: ChatRequest) -> str:
    return f'\nContext: Analyzing code for problem "{req.title}"'


def _problem_context(req: ChatRequest) -> str:
    if not (req.title and req.description):
        return ""
    ctx = f"\n\nThe user is working on the following problem:\nTitle: {req.title}\nDescription: {req.description}\n"
    if req.code:
        ctx += f"\nTheir current code is:\n{_code_block(req.code)}"
    return ctx


def _docs_context(req: ChatRequest) -> str:
    if not req.topic:
        return ""
    ctx = f"\n\nYou're asking about: {req.topic}"
    if req.language:
        ctx += f"\nPreferred programming language: {req.language}"
    return ctx


def _info_context(req: ChatRequest) -> str:
    if not (req.title and req.description):
        return ""
    ctx = f"\n\nProviding help for the following problem:\nTitle: {req.title}\nDescription: {req.description}\n"
    if req.topic:
        ctx += f"\nFocusing on: {req.topic}"
    return ctx


# -- first user message when the client sends no history --

def _explain_opening(req: ChatRequest) -> str:
    return f"Problem: {req.title}\n{req.description}\n\nWhat is this problem about?"


def _analyze_opening(req: ChatRequest) -> str:
    code = f"\n\nHere is the user's current code:\n{_code_block(req.code)}" if req.code else ""
    return (
        f"Problem: {req.title}\n{req.description}{code}\n\n"
        "Please analyze this code and provide guidance on how to improve it or complete it to solve the problem."
    )


def _code_help_opening(req: ChatRequest) -> str:
    if req.title:
        return f"I'm working on: {req.title}. How should I approach it?"
    return "What should I know to get started with this problem?"


def _docs_opening(req: ChatRequest) -> str:
    if req.topic:
        return f"Explain {req.topic}."
    return "What would you like to know about?"


def _info_opening(req: ChatRequest) -> str:
    if req.title:
        return f"Help me understand the concepts behind: {req.title}"
    return "What would you like to learn about?"


@dataclass(frozen=True)
class Assistant:
    name: str
    system_prompt: str
    context: Callable[[ChatRequest], str]
    opening: Callable[[ChatRequest], str]
    temperature: float = 0.7
    max_tokens: int = 1000
    # opening conversations carry the context in the user message, not the system prompt
    context_in_opening: bool = False


ASSISTANTS: Dict[str, Assistant] = {
    "explain": Assistant("explain", EXPLAIN_PROMPT, _explain_context, _explain_opening, 0.3, 200, True),
    "code-analyze": Assistant("code-analyze", CODE_ANALYZE_PROMPT, _analyze_context, _analyze_opening, 0.3, 250, True),
    "code-help": Assistant("code-help", CODE_HELP_PROMPT, _problem_context, _code_help_opening),
    "docs": Assistant("docs", DOCS_PROMPT, _docs_context, _docs_opening),
    "info-help": Assistant("info-help", INFO_HELP_PROMPT, _info_context, _info_opening),
}


def _with_code(messages: List[Message], code: Optional[str]) -> List[Message]:
    """Attach the editor code to the last user message when it asks for an analysis."""
    if not messages or not code:
        return messages
    last = messages[-1]
    content = last["content"]
    asks = last["role"] == "user" and any(k in content.lower() for k in ANALYZE_KEYWORDS)
    if not asks or "```python" in content:
        return messages
    updated = dict(last, content=f"{content}\n\nHere is my current code:\n{_code_block(code)}")
    return messages[:-1] + [updated]


def build_messages(assistant: Assistant, req: ChatRequest) -> List[Message]:
    if req.messages:
        messages = [{"role": m.role, "content": m.content} for m in req.messages]
        if assistant.name == "code-analyze":
            messages = _with_code(messages, req.code)
        if any(m["role"] == "system" for m in messages):
            return messages
        system = {"role": "system", "content": assistant.system_prompt + assistant.context(req)}
        return [system] + messages

    if assistant.context_in_opening:
        system = assistant.system_prompt
    else:
        system = assistant.system_prompt + assistant.context(req)
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": assistant.opening(req)},
    ]


def stream_answer(name: str, req: ChatRequest) -> Iterator[str]:
    """
    Stream the model's answer as text chunks. The first chunk is pulled
    eagerly so upstream failures surface before the response starts.
    """
    assistant = ASSISTANTS[name]
    messages = build_messages(assistant, req)
    logger.info("[CHAT] %s messages=%d", name, len(messages))

    chunks = llm_client.stream_chat(messages, temperature=assistant.temperature, max_tokens=assistant.max_tokens)
    first = next(chunks, "")

    def _body() -> Iterator[str]:
        if first:
            yield first
        yield from chunks

    return _body()
