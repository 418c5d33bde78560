from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Rating = Literal["High", "Medium", "Low"]
Timeline = Literal["Short-term", "Medium-term", "Long-term"]
Phase = Literal["Phase 1", "Phase 2", "Phase 3"]


class Record(BaseModel):
    """Base for parsed analysis records: immutable, camelCase on the wire."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --------------------------------------------
# Design review
# --------------------------------------------
class DesignAnalysis(Record):
    accessibility: List[str]
    color_contrast: List[str]
    design_principles: List[str]
    recommendations: List[str]


# --------------------------------------------
# Design comparison
# --------------------------------------------
class StrengthsWeaknesses(Record):
    strengths: List[str]
    weaknesses: List[str]


class DesignPair(Record):
    your_design: StrengthsWeaknesses
    competitor_design: StrengthsWeaknesses


class ABTest(Record):
    name: str
    hypothesis: str
    metrics: List[str]
    impact: Rating = "Medium"
    complexity: Rating = "Medium"
    priority: Rating = "Medium"


class ABTestSuggestions(Record):
    designer: List[ABTest]
    product_manager: List[ABTest]


class DesignRecommendation(Record):
    title: str
    details: Optional[str] = None
    priority: Rating = "Medium"
    effort: Rating = "Medium"


class StrategyRecommendation(Record):
    title: str
    details: Optional[str] = None
    impact: Rating = "Medium"
    timeline: Timeline = "Medium-term"


class ImplementationRecommendation(Record):
    title: str
    phase: Phase = "Phase 2"
    complexity: Rating = "Medium"
    steps: List[str]
    resources: List[str]


class RecommendationBundle(Record):
    design: List[DesignRecommendation]
    strategy: List[StrategyRecommendation]
    implementation: List[ImplementationRecommendation]


class ComparisonAnalysis(Record):
    design_comparison: List[str]
    strengths_weaknesses: DesignPair
    ab_test_suggestions: ABTestSuggestions
    recommendations: RecommendationBundle


# --------------------------------------------
# User flow
# --------------------------------------------
class FlowStep(Record):
    step: str
    improvements: Optional[List[str]] = None
    rationale: Optional[str] = None


class FlowAnalysis(Record):
    current_flow: List[FlowStep]
    improved_flow: List[FlowStep]
    general_suggestions: List[str]
    potential_issues: List[str]
    best_practices: List[str]
    competitor_insights: Optional[List[str]] = None


# --------------------------------------------
# HTTP payloads
# --------------------------------------------
class AnalyzeRequest(Payload):
    image: Optional[str] = Field(default=None, description="Screenshot as a base64 data URL.")
    concise: bool = False


class CompareRequest(Payload):
    your_design: Optional[str] = None
    competitor_design: Optional[str] = None


class FlowRequest(Payload):
    mode: Optional[Literal["text", "image"]] = None
    flow_description: Optional[str] = None
    image: Optional[str] = None


class DesignAnalysisResponse(Payload):
    analysis: DesignAnalysis


class ComparisonAnalysisResponse(Payload):
    analysis: ComparisonAnalysis


class FlowAnalysisResponse(Payload):
    analysis: FlowAnalysis


class HealthResponse(BaseModel):
    status: str = "ok"
    llm_provider: str
    has_api_key: bool
