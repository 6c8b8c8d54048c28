"""Deterministic stand-in search results for offline runs and fallbacks."""
from __future__ import annotations

import re
from typing import Any

PRODUCT_HUNT_TEMPLATES = (
    ("Scout", "AI companion that researches adjacent products"),
    ("Pulse", "Trend tracker surfacing emerging demand signals"),
    ("LaunchPad", "Go-to-market toolkit for lean teams"),
    ("InsightGrid", "Competitive intelligence dashboards"),
    ("CompEdge", "Workflow automation for niche operators"),
)

GOOGLE_TEMPLATES = (
    ("Guide", "Deep-dive blog outlining market landscape"),
    ("Toolkit", "Open-source starter kit for rapid experiments"),
    ("Navigator", "Comparison article highlighting incumbents"),
    ("Radar", "Newsletter summarizing recent launches"),
    ("Stack", "Case study showcasing customer acquisition"),
)

# Pre-researched competitor lists, keyed by catalogue category.
COMPETITOR_CATALOGUE: dict[str, list[dict[str, str]]] = {
    "ai_job_search": [
        {"name": "LazyApply", "url": "https://lazyapply.com", "description": "AI-powered job application automation platform"},
        {"name": "JobCopilot", "url": "https://jobcopilot.com", "description": "Automated job search and application assistant"},
        {"name": "Sonara", "url": "https://sonara.ai", "description": "AI-driven job matching and application platform"},
        {"name": "CareerFlow", "url": "https://careerflow.ai", "description": "Career tracker managing applications, networking and salary negotiation"},
        {"name": "Teal", "url": "https://www.tealhq.com", "description": "Job tracker and AI resume builder with a browser extension"},
    ],
    "ai_diet_planner": [
        {"name": "Eat This Much", "url": "https://www.eatthismuch.com", "description": "Automatic meal planner built from food preferences, budget and schedule"},
        {"name": "PlateJoy", "url": "https://www.platejoy.com", "description": "Custom meal planning with personalized recipes and grocery lists"},
        {"name": "Strongr Fastr", "url": "https://www.strongrfastr.com", "description": "Nutrition AI generating meal plans with macro tracking"},
        {"name": "Mealime", "url": "https://www.mealime.com", "description": "Personalized meal plans with step-by-step cooking instructions"},
        {"name": "eMeals", "url": "https://www.emeals.com", "description": "Budget-friendly meal planning with grocery delivery integration"},
    ],
    "ai_fitness_coach": [
        {"name": "Freeletics", "url": "https://www.freeletics.com", "description": "AI-powered bodyweight HIIT workouts with a personal coach"},
        {"name": "Fitbod", "url": "https://www.fitbod.me", "description": "AI workout builder creating personalized strength routines"},
        {"name": "FitnessAI", "url": "https://www.fitnessai.com", "description": "Workout app optimizing sets, reps and weight with machine learning"},
        {"name": "Zing Coach", "url": "https://www.zingcoach.com", "description": "AI fitness coach with motion tracking and form corrections"},
        {"name": "Future", "url": "https://www.future.co", "description": "Personal training app pairing users with certified coaches"},
    ],
    "ai_real_estate_agent": [
        {"name": "Redfin", "url": "https://www.redfin.com", "description": "Conversational home search with personalized recommendations"},
        {"name": "Zillow", "url": "https://www.zillow.com", "description": "Zestimate valuations and personalized home matching"},
        {"name": "Compass", "url": "https://www.compass.com", "description": "Real estate platform with market insights and predictive analytics"},
        {"name": "Flyhomes", "url": "https://flyhomes.com", "description": "Home search portal with an AI assistant"},
        {"name": "HouseCanary", "url": "https://www.housecanary.com", "description": "Property valuations and market forecasting for professionals"},
    ],
    "ai_resume_builder": [
        {"name": "Rezi", "url": "https://www.rezi.ai", "description": "AI resume builder with ATS optimization and keyword targeting"},
        {"name": "Kickresume", "url": "https://www.kickresume.com", "description": "GPT-powered resume builder with templates and LinkedIn import"},
        {"name": "Enhancv", "url": "https://enhancv.com", "description": "Resume builder with content analysis and modern templates"},
        {"name": "Jobscan", "url": "https://www.jobscan.co", "description": "ATS resume optimizer with keyword matching"},
        {"name": "Zety", "url": "https://zety.com", "description": "Resume builder with guided content and templates"},
    ],
}

CATALOGUE_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("ai_resume_builder", ("resume", "cv")),
    ("ai_job_search", ("job", "career", "recruit")),
    ("ai_diet_planner", ("diet", "meal", "nutrition")),
    ("ai_fitness_coach", ("fitness", "workout", "gym")),
    ("ai_real_estate_agent", ("real estate", "property", "housing")),
)


def slugify(value: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return slug or "result"


def catalogue_category(query: str) -> str | None:
    lowered = query.lower()
    for category, keywords in CATALOGUE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return None


def product_hunt_results(query: str) -> list[dict[str, Any]]:
    return [
        {
            "name": f"{name} for {query}",
            "url": f"https://example.com/{slugify(name)}-{slugify(query)}-{index + 1}",
            "description": f'{description} tailored to "{query}".',
            "upvotes": 120 - index * 10,
        }
        for index, (name, description) in enumerate(PRODUCT_HUNT_TEMPLATES)
    ]


def google_results(query: str) -> list[dict[str, Any]]:
    category = catalogue_category(query)
    if category is not None:
        return [dict(item) for item in COMPETITOR_CATALOGUE[category]]
    return [
        {
            "name": f"{query} {name}",
            "url": f"https://research.example.com/{slugify(query)}-{slugify(name)}-{index + 1}",
            "description": f'{description} related to "{query}".',
        }
        for index, (name, description) in enumerate(GOOGLE_TEMPLATES)
    ]


def synthetic_results(search_type: str, query: str) -> list[dict[str, Any]]:
    if search_type == "producthunt":
        return product_hunt_results(query)
    return google_results(query)
