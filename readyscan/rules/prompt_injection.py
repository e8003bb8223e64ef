"""LLM prompt-injection risk rules."""

import re

from readyscan.models import Category, Rule, Severity


def _rule(name: str, pattern: str, severity: Severity, remediation: str) -> Rule:
    return Rule(
        name=name,
        pattern=re.compile(pattern, re.IGNORECASE),
        severity=severity,
        category=Category.PROMPT_INJECTION,
        remediation=remediation,
        personas=("security", "dev"),
    )


INJECTION_RULES: tuple[Rule, ...] = (
    _rule(
        "Direct Injection: Ignore Previous Instructions",
        r"ignore\s+(?:all\s+)?(?:previous|prior|above)\s+instructions?",
        Severity.CRITICAL,
        "This is a classic prompt injection pattern. Sanitize user inputs before passing to LLMs. "
        "Use an allow-list approach for user-supplied content in prompts.",
    ),
    _rule(
        "System Prompt Override Attempt",
        r"(?:you are now|act as|pretend to be|disregard your|forget your)\s+(?:a\s+)?"
        r"(?:new|different|another)?\s*(?:ai|assistant|bot|model|gpt)",
        Severity.HIGH,
        "Potential jailbreak/persona injection. Validate that user content cannot override system "
        "prompts. Separate system instructions from user data using structured message roles.",
    ),
    # Interpolation only counts on lines that build a prompt.
    _rule(
        "Template Injection in Prompt",
        r"(?=.*prompt).*(?:\{\{[^}]*\}\}|\$\{[^}]*\}|\bf['\"][^'\"]*\{[^}]+\})",
        Severity.HIGH,
        "Template literals in AI prompts can lead to injection attacks. Use parameterized prompt "
        "construction rather than string interpolation with user data.",
    ),
    _rule(
        "Unsanitized User Input Passed to LLM",
        r"(?:prompt|message|input|query|text)\s*[+=]\s*(?:req\.body|req\.query|req\.params|request\.body"
        r"|request\.(?:json|form|args|get_json)|params\.|body\.)",
        Severity.CRITICAL,
        "User input is being directly concatenated into LLM prompts without sanitization. Validate, "
        "sanitize, and limit user inputs before including them in AI prompts.",
    ),
    _rule(
        "Hidden Instruction Pattern",
        r"<!--\s*(?:hidden|secret|system)?\s*prompt",
        Severity.HIGH,
        "Hidden prompts in HTML comments can expose AI configurations. Remove hidden instructions "
        "and use proper system prompt channels.",
    ),
    _rule(
        "System Role Override",
        r"""['"]?role['"]?\s*:\s*['"]system['"]\s*,\s*['"]?content['"]?\s*:\s*(?:req|request|body|params|user)""",
        Severity.CRITICAL,
        "System role content must never come from user input. Only use hardcoded, validated system prompts.",
    ),
    _rule(
        "Unvalidated Prompt Concatenation",
        r"""(?:systemPrompt|userPrompt|aiPrompt|llmPrompt|system_prompt|user_prompt)\s*\+?=\s*[`"'][^`"']*[`"']"""
        r"""\s*\+\s*(?:req\.|request\.|user|body\.|input\.|params\.)""",
        Severity.HIGH,
        "Prompt string concatenation with external data detected. Use a structured prompt builder "
        "with input validation.",
    ),
    _rule(
        "Leaked System Prompt",
        r"(?:print|console\.log|log|puts|echo|logger\.\w+|logging\.\w+)\s*\(?\s*"
        r"(?:systemPrompt|system_prompt|basePrompt|base_prompt)",
        Severity.MEDIUM,
        "System prompts should never be logged or printed. This could expose your AI configuration "
        "and instructions.",
    ),
    # A call that mentions max_tokens on the same line is considered guarded.
    _rule(
        "No Input Length Limit on AI Request",
        r"^(?!.*max_tokens).*(?:(?:openai|client)\.(?:chat\.)?completions\.create|anthropic\.|groq\."
        r"|huggingface\.|together\.ai)",
        Severity.MEDIUM,
        "Ensure all AI API calls have input length limits to prevent prompt injection attacks and "
        "cost overruns. Add max_tokens limits and input validation.",
    ),
    _rule(
        "SQL Injection via LLM Output",
        r"(?:query|execute|db\.run)\s*\([^)]*(?:llm|ai|gpt|completion|response)\.?"
        r"(?:text|content|output|result)",
        Severity.CRITICAL,
        "Using LLM output directly in database queries is extremely dangerous. Always use "
        "parameterized queries and validate AI-generated content before DB operations.",
    ),
)

INJECTION_EXTENSIONS = frozenset({
    ".js", ".ts", ".jsx", ".tsx", ".py", ".rb", ".go", ".java", ".php", ".cs",
})
