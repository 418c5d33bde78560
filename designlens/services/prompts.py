# designlens/services/prompts.py

DESIGN_REVIEW_PROMPT = """
As an expert UI/UX designer, thoroughly analyze this design image and provide detailed, contextual feedback. Focus on specific elements in the image and provide actionable insights in exactly this format:

1. Accessibility
- Evaluate specific text elements, their sizes, and readability in the context shown
- Analyze the interactive elements and their accessibility considerations
- Assess the information hierarchy and how it affects different user groups
- Comment on spacing and layout from an accessibility perspective
- Examine any patterns or repetitive elements that might affect usability

2. Color Contrast
- Analyze specific color combinations present in the design
- Evaluate contrast ratios between text and background elements
- Assess the effectiveness of color usage for different visual elements
- Identify any potential color accessibility issues
- Comment on the color hierarchy and its impact on usability

3. Design Principles
- Evaluate the layout structure and how it guides user attention
- Analyze the visual hierarchy of specific elements
- Assess the consistency of design elements and patterns
- Comment on the use of whitespace and its effectiveness
- Evaluate the balance and alignment of elements shown

4. Recommendations
- Provide specific, actionable improvements for the identified issues
- Suggest alternative approaches for problematic design elements
- Recommend specific color adjustments where needed
- Propose layout modifications that could enhance usability
- Suggest specific accessibility improvements based on the analysis
""".strip()

DESIGN_REVIEW_CONCISE_PROMPT = """
As an expert UI/UX designer, provide brief but specific feedback about this design image in exactly this format:

1. Accessibility
- Provide one critical observation about the accessibility of specific elements shown

2. Color Contrast
- Highlight the most important color contrast consideration in this specific design

3. Design Principles
- Identify the most significant design principle impact in this layout

4. Recommendations
- Give one specific, contextual improvement suggestion based on the most critical issue
""".strip()

COMPARISON_PROMPT = """
As an expert UI/UX designer and Product Strategy consultant, analyze these two designs (first is the client's, second is the competitor's) and provide a detailed comparison following exactly this structure:

DESIGN COMPARISON
- Compare overall layouts and visual hierarchies
- Analyze user flows and interaction patterns
- Evaluate content organization and readability
- Compare visual elements (typography, colors, spacing)

YOUR DESIGN STRENGTHS
- [Strength]

YOUR DESIGN WEAKNESSES
- [Weakness]

COMPETITOR DESIGN STRENGTHS
- [Strength]

COMPETITOR DESIGN WEAKNESSES
- [Weakness]

DESIGNER A/B TEST SUGGESTIONS
Test Name: [short name]
Hypothesis: [what you expect and why]
Metrics:
- [metric]
Impact: [High | Medium | Low]
Complexity: [High | Medium | Low]
Priority: [High | Medium | Low]

PRODUCT MANAGER A/B TEST SUGGESTIONS
Test Name: [short name]
Hypothesis: [business impact hypothesis]
Metrics:
- [metric]
Impact: [High | Medium | Low]
Complexity: [High | Medium | Low]
Priority: [High | Medium | Low]

RECOMMENDATIONS
Design Recommendations:
Recommendation: [title]
Details: [what to change]
Priority: [High | Medium | Low]
Effort: [High | Medium | Low]

Strategy Recommendations:
Recommendation: [title]
Details: [why it matters]
Impact: [High | Medium | Low]
Timeline: [Short-term | Medium-term | Long-term]

Implementation Recommendations:
Recommendation: [title]
Phase: [Phase 1 | Phase 2 | Phase 3]
Complexity: [High | Medium | Low]
Steps:
- [step]
Resources:
- [resource]

Repeat the Test Name and Recommendation blocks as often as needed. Please maintain these exact section headers and labels and provide detailed, specific feedback based on the actual designs shown.
""".strip()

_FLOW_STRUCTURE = """
CURRENT FLOW ANALYSIS:
1. [Step as the user experiences it]
- [Improvement for this step]
[One line explaining why the step matters]

IMPROVED FLOW SUGGESTIONS:
1. [Step of the improved flow]
- [Change compared to the current flow]
[One line of rationale]

GENERAL SUGGESTIONS:
- [Suggestion]

POTENTIAL ISSUES:
- [Issue]

BEST PRACTICES:
- [Practice]
""".strip()

FLOW_IMAGE_PROMPT = (
    "Analyze this user flow screenshot and provide a structured analysis using exactly these headers and format:\n\n"
    + _FLOW_STRUCTURE
    + "\n\nCOMPETITOR INSIGHTS:\n- [Insight]\n\n"
    "Please maintain this exact structure and headers in your response. "
    "Be specific and detailed in your analysis."
)

FLOW_TEXT_PROMPT = (
    "Analyze this user flow and provide a structured analysis using exactly these headers and format:\n\n"
    + _FLOW_STRUCTURE
    + "\n\nUser Flow to Analyze:\n{FLOW_DESCRIPTION}\n\n"
    "Please maintain this exact structure and headers in your response. "
    "Be specific and detailed in your analysis."
)


def build_flow_text_prompt(flow_description: str) -> str:
    return FLOW_TEXT_PROMPT.replace("{FLOW_DESCRIPTION}", flow_description.strip())
