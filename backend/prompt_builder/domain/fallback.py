"""Local demo prompts used when the generation relay fails.

Keyword matching on the user's description picks one of several canned
multi-section templates; the topic is the description with leading request
phrases and task verbs stripped. Deterministic, no I/O.
"""

import re

DEFAULT_TOPIC = "the topic you mentioned"

_LEADING_PHRASE = re.compile(r"^(please |can you |help me |i want to |i need to |how to )", re.IGNORECASE)
_TASK_VERBS = re.compile(
    r"\b(analyze|compare|explain|understand|write|create|improve|optimize|strategy|plan)\b",
    re.IGNORECASE,
)
_WHITESPACE = re.compile(r"\s+")

_ANALYSIS_TEMPLATE = """Please conduct a comprehensive analysis of {topic}.

Structure your analysis as follows:
1. Current state and key characteristics
2. Main challenges and opportunities
3. Contributing factors and root causes
4. Potential solutions and recommendations
5. Implementation considerations and next steps

Provide specific examples, data points where relevant, and actionable insights."""

_COMPARISON_TEMPLATE = """Please compare the options involved in {topic}.

Organize the comparison as follows:
1. Brief overview of each option
2. Key similarities
3. Key differences across cost, quality, and effort
4. Strengths and weaknesses of each
5. Recommendation with the reasoning behind it

Use a table where it helps and support claims with concrete examples."""

_EXPLANATION_TEMPLATE = """Please explain {topic} clearly.

Cover the following:
1. A plain-language definition
2. How it works, step by step
3. Why it matters
4. A concrete, real-world example
5. Common misconceptions

Assume an intelligent reader who is new to the subject."""

_STRATEGY_TEMPLATE = """Please develop a strategy for {topic}.

Include:
1. Objectives and measurable success criteria
2. Current situation and constraints
3. Options considered and the chosen approach
4. Action plan with owners and milestones
5. Risks, mitigations, and how progress will be tracked

Keep recommendations practical and prioritized."""

_WRITING_TEMPLATE = """Please write a well-crafted piece about {topic}.

Requirements:
1. A clear purpose and intended audience
2. An engaging opening
3. A logical structure with distinct sections
4. Concrete details and examples
5. A strong conclusion or call to action

Match the tone to the audience and keep the language concise."""

_IMPROVEMENT_TEMPLATE = """Please suggest improvements for {topic}.

Address the following:
1. Assessment of the current state
2. The most significant weaknesses
3. Specific, prioritized improvements
4. Expected impact of each change
5. Steps to implement and measure results

Focus on changes with the highest return for the effort."""

_GENERAL_TEMPLATE = """Please provide a comprehensive response about {topic}.

Address the following aspects:
1. Overview and key points
2. Important details and context
3. Practical implications and applications
4. Relevant examples or case studies
5. Best practices and recommendations

Structure your response clearly and provide actionable insights."""

# First match wins
_KEYWORD_TEMPLATES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("analyze", "analysis"), _ANALYSIS_TEMPLATE),
    (("compare",), _COMPARISON_TEMPLATE),
    (("explain",), _EXPLANATION_TEMPLATE),
    (("strategy",), _STRATEGY_TEMPLATE),
    (("write",), _WRITING_TEMPLATE),
    (("improve",), _IMPROVEMENT_TEMPLATE),
)


def extract_main_topic(description: str) -> str:
    """Strip a leading request phrase and task verbs from ``description``.

    >>> extract_main_topic("Please analyze customer churn")
    'customer churn'
    """
    clean = _LEADING_PHRASE.sub("", description.strip(), count=1)
    clean = _TASK_VERBS.sub("", clean)
    clean = _WHITESPACE.sub(" ", clean).strip()
    return clean or DEFAULT_TOPIC


def build_demo_prompt(description: str) -> str:
    """Return a canned multi-section prompt chosen by keywords in ``description``."""
    lowered = description.lower()
    template = _GENERAL_TEMPLATE
    for keywords, candidate in _KEYWORD_TEMPLATES:
        if any(keyword in lowered for keyword in keywords):
            template = candidate
            break
    return template.format(topic=extract_main_topic(description))
