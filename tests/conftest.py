"""Shared fixtures: a stand-in for the Groq client and sample model answers."""

from types import SimpleNamespace
from typing import Any, List

import pytest


def make_response(content: Any) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeCompletions:
    """Replays queued responses (or raises queued exceptions) in order."""

    def __init__(self, outcomes: List[Any]) -> None:
        self.outcomes = list(outcomes)
        self.calls: List[dict] = []

    def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def make_client(*outcomes: Any) -> SimpleNamespace:
    return SimpleNamespace(chat=SimpleNamespace(completions=FakeCompletions(list(outcomes))))


DESIGN_TEXT = (
    "1. Accessibility\n- Good labels\n"
    "2. Color Contrast\n- Poor contrast\n"
    "3. Design Principles\n- OK\n"
    "4. Recommendations\n- Fix contrast"
)

COMPARISON_TEXT = """DESIGN COMPARISON
- Your layout is denser
- Competitor uses more whitespace

YOUR DESIGN STRENGTHS
- Clear pricing

YOUR DESIGN WEAKNESSES
- Small tap targets

COMPETITOR DESIGN STRENGTHS
- Strong hero image

COMPETITOR DESIGN WEAKNESSES
- Hidden navigation

DESIGNER A/B TEST SUGGESTIONS
Test Name: CTA Color
Hypothesis: Red converts better
Metrics:
- CTR
Impact: High
Complexity: Low
Priority: High

Test Name: Hero Layout
Hypothesis: A shorter hero keeps users scrolling
Metrics:
- Scroll depth
- Bounce rate
Impact: Medium
Complexity: Medium
Priority: Low

PRODUCT MANAGER A/B TEST SUGGESTIONS
- Test a free trial banner

RECOMMENDATIONS
Design Recommendations:
Recommendation: Enlarge tap targets
Details: Buttons should be at least 44px
Priority: High
Effort: Low

Strategy Recommendations:
Recommendation: Emphasize pricing clarity
Impact: High
Timeline: Short-term

Implementation Recommendations:
Recommendation: Ship design tokens
Phase: Phase 1
Complexity: Medium
Steps:
- Audit colors
- Publish tokens
Resources:
- Design team
"""

FLOW_TEXT = """CURRENT FLOW ANALYSIS:
1. User lands on the pricing page
- Pricing table is hard to scan
Users compare plans here first
2. User clicks Sign up

IMPROVED FLOW SUGGESTIONS:
1. Show a plan recommendation
Rationale: Reduces choice overload

GENERAL SUGGESTIONS:
- Reduce form fields

POTENTIAL ISSUES:
- Drop-off at payment

BEST PRACTICES:
- Use progress indicators

COMPETITOR INSIGHTS:
- Competitors offer social login
"""


@pytest.fixture
def design_text() -> str:
    return DESIGN_TEXT


@pytest.fixture
def comparison_text() -> str:
    return COMPARISON_TEXT


@pytest.fixture
def flow_text() -> str:
    return FLOW_TEXT
