"""Immutable lookup tables for action generation."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from contracts import InsightImpact, InsightSource


@dataclass(frozen=True)
class DomainSpec:
    """Keywords that select a domain and the phrasing templates it offers."""
    name: str
    keywords: Tuple[str, ...]
    templates: Tuple[str, ...]


DOMAINS: Mapping[str, DomainSpec] = MappingProxyType({
    "product": DomainSpec(
        name="product",
        keywords=(
            "interface", "design", "user experience", "usability", "layout",
            "interaction", "visual", "prototype", "wireframe", "navigation",
        ),
        templates=(
            "Redesign {domain} interface to improve user engagement",
            "Optimize {domain} user flow and interaction patterns",
            "Conduct comprehensive UX audit for {domain} experience",
            "Develop more intuitive navigation for {domain} features",
            "Create user-centric design improvements for {domain}",
        ),
    ),
    "service": DomainSpec(
        name="service",
        keywords=(
            "support", "customer", "onboarding", "training", "help",
            "assistance", "guidance", "resolution", "communication",
        ),
        templates=(
            "Enhance {domain} customer onboarding process",
            "Develop comprehensive support strategy for {domain}",
            "Create advanced customer assistance workflow",
            "Improve service communication and responsiveness",
            "Design proactive customer support mechanisms",
        ),
    ),
    "marketing": DomainSpec(
        name="marketing",
        keywords=(
            "messaging", "brand", "communication", "positioning",
            "value proposition", "storytelling", "audience", "campaign",
        ),
        templates=(
            "Refine {domain} brand messaging and positioning",
            "Develop targeted communication strategy for {domain}",
            "Create compelling narrative for {domain} value proposition",
            "Design audience-specific marketing approach",
            "Optimize brand communication channels",
        ),
    ),
    "technology": DomainSpec(
        name="technology",
        keywords=(
            "performance", "scalability", "architecture", "infrastructure",
            "integration", "security", "optimization", "tech stack",
            "backend", "frontend", "cloud", "api",
        ),
        templates=(
            "Improve {domain} system performance and scalability",
            "Enhance technological infrastructure for {domain}",
            "Develop robust integration strategy",
            "Implement advanced security protocols",
            "Optimize technical architecture and ecosystem",
        ),
    ),
    "operations": DomainSpec(
        name="operations",
        keywords=(
            "process", "efficiency", "workflow", "automation",
            "productivity", "streamline", "optimization", "management",
        ),
        templates=(
            "Streamline {domain} operational workflows",
            "Develop process automation strategy",
            "Improve operational efficiency and productivity",
            "Create comprehensive operational optimization plan",
            "Implement advanced workflow management techniques",
        ),
    ),
    "strategy": DomainSpec(
        name="strategy",
        keywords=(
            "vision", "direction", "roadmap", "growth", "expansion",
            "market", "competitive", "long-term", "objective", "goal",
        ),
        templates=(
            "Develop strategic roadmap for {domain} growth",
            "Create comprehensive market expansion strategy",
            "Define long-term vision and competitive positioning",
            "Align business objectives with market opportunities",
            "Design strategic framework for sustainable development",
        ),
    ),
})

# Substituted for {domain} in every template
DOMAIN_PLACEHOLDER_VALUE = "project"

SOURCE_PREFIXES: Mapping[InsightSource, str] = MappingProxyType({
    InsightSource.USER_FEEDBACK: "Address user-reported",
    InsightSource.TEAM_OBSERVATION: "Implement team-identified",
    InsightSource.ASSUMPTION_IDEA: "Explore potential",
})

IMPACT_PHRASES: Mapping[InsightImpact, str] = MappingProxyType({
    InsightImpact.CORE_EXPERIENCE: "critical improvement for",
    InsightImpact.IMPROVE_EXPERIENCE: "enhancement to",
    InsightImpact.NICE_TO_HAVE: "optimization of",
})

CATEGORY_LABELS: Mapping[InsightSource, Tuple[str, ...]] = MappingProxyType({
    InsightSource.USER_FEEDBACK: (
        "User Experience",
        "Product Improvement",
        "Customer Satisfaction",
        "Feature Enhancement",
    ),
    InsightSource.TEAM_OBSERVATION: (
        "Internal Process",
        "Product Strategy",
        "Technical Optimization",
        "Team Efficiency",
    ),
    InsightSource.ASSUMPTION_IDEA: (
        "Innovation",
        "Future Development",
        "Strategic Planning",
        "Exploratory Initiative",
    ),
})

NORTH_STAR_CATEGORY = "Strategic Alignment"
CORE_FEATURE_CATEGORY = "Core Feature Development"
