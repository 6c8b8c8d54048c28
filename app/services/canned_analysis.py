"""Keyword-routed idea analysis served by ``POST /api/analyze``.

Each category carries pre-written advisor texts and a fixed competitor list.
Templates take ``{idea}`` and ``{count}``.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any

PIVOT_HINT = (
    "Consider pivoting to a niche market or adding unique features that "
    "differentiate from existing competitors"
)

CANNED_WORKFLOW: dict[str, dict[str, Any]] = {
    "step1_productHunt": {"status": "success", "results": 5},
    "step2_google": {"status": "success", "results": 8},
    "step3_analysis": {"status": "success"},
    "step4_advisor": {"status": "success"},
}


@dataclass(frozen=True, slots=True)
class IdeaCategory:
    slug: str
    keywords: tuple[str, ...]
    optimist: str
    realist: str
    opportunity_score: int
    competitor_count: int
    competitors: tuple[tuple[str, str, str], ...]

    def matches(self, idea_lower: str) -> bool:
        return any(keyword in idea_lower for keyword in self.keywords)


CATEGORIES: tuple[IdeaCategory, ...] = (
    IdeaCategory(
        slug="job-search",
        keywords=("job", "career", "employment", "recruiting"),
        optimist=(
            'I see a massive opening in the **Autonomous Agent** layer for "{idea}"! While there are '
            "{count} competitors focusing on basic search, the market is shifting towards *full execution*. "
            "Your AI job agent could dominate by handling the entire lifecycle, from application to salary "
            "negotiation, which 80% of current tools miss. Companies spend $5,000+ per hire on recruitment "
            "and demand for intelligent career automation keeps climbing."
        ),
        realist=(
            'Let\'s be brutally honest: the "AI Job Search" space is a bloodbath. You\'re up against heavily '
            "funded incumbents like LazyApply, Sonara, and Massive that already have millions of users. To "
            'survive, you can\'t just be a "better search". You need proprietary data advantages like exclusive '
            "recruiter API access or verified hiring manager direct lines, which most new entrants lack. The "
            "average job seeker uses 3.2 different tools, and breaking into this ecosystem requires "
            "significant network effects."
        ),
        opportunity_score=8,
        competitor_count=25,
        competitors=(
            ("LazyApply", "https://lazyapply.com", "AI-powered job application automation platform"),
            ("Sorce", "https://sorce.jobs", "Tinder-style job discovery with auto-application"),
            ("JobCopilot", "https://jobcopilot.com", "Automated job search and application assistant"),
            ("AIApply", "https://aiapply.co", "AI resume builder and job application tool"),
            ("Sonara", "https://sonara.ai", "AI-driven job matching and application platform"),
        ),
    ),
    IdeaCategory(
        slug="fitness",
        keywords=("fitness", "workout", "gym", "exercise"),
        optimist=(
            'The **AI fitness revolution** is just beginning for "{idea}"! While {count} competitors offer '
            "generic workout plans, the real opportunity is in *form correction and injury prevention*. Your "
            "AI coach could use computer vision to analyze exercise form in real-time, combined with recovery "
            "data from wearables, creating a personal trainer that's available 24/7 at 1/10th the cost! The "
            "global fitness tech market is worth $15 billion, with personalized training growing at 23% annually."
        ),
        realist=(
            "Face it: the fitness app space is brutal with {count} competitors. Giants like Peloton, Apple "
            "Fitness+, and Freeletics have massive workout libraries and celebrity trainer partnerships. You're "
            "competing with free YouTube content and established apps with hardware ecosystems. Without "
            "breakthrough computer vision tech or exclusive gym partnerships, you'll just be another workout "
            "tracker in a crowded market where 73% of users abandon apps within 90 days."
        ),
        opportunity_score=6,
        competitor_count=30,
        competitors=(
            ("Freeletics", "https://freeletics.com", "AI-powered personal training with custom workouts"),
            ("Peloton Digital", "https://onepeloton.com/app", "AI fitness classes with personalized recommendations"),
            ("Fitbod", "https://fitbod.me", "AI workout generator based on your goals and equipment"),
            ("Aaptiv", "https://aaptiv.com", "Audio-based AI fitness coaching platform"),
            ("Future", "https://future.co", "1-on-1 AI personal training with digital coaches"),
        ),
    ),
    IdeaCategory(
        slug="nutrition",
        keywords=("diet", "nutrition", "meal", "food"),
        optimist=(
            'The **personalized nutrition** space is exploding for "{idea}"! With {count} competitors like '
            "MyFitnessPal still using generic meal plans, there's huge opportunity for *hyper-personalization*. "
            "Your AI diet planner could leverage continuous glucose monitors, DNA data, and real-time activity "
            "tracking to create truly adaptive nutrition plans, something only 5% of current apps offer. The "
            "personalized nutrition market is projected to reach $16.6 billion by 2027."
        ),
        realist=(
            "Here's the harsh truth: the diet app market is oversaturated with {count} players. Competitors "
            "like MyFitnessPal have massive food databases and 10+ years of user data. You're not just "
            "competing with apps, you're battling established habits and platforms like Noom that have "
            "clinical partnerships. Without unique biometric integrations or FDA clearance, you'll struggle to "
            "differentiate in a market where 95% of diets fail."
        ),
        opportunity_score=7,
        competitor_count=22,
        competitors=(
            ("MyFitnessPal", "https://myfitnesspal.com", "AI-enhanced nutrition tracking with voice logging"),
            ("Noom", "https://noom.com", "AI-powered weight management with behavior psychology"),
            ("Lose It!", "https://loseit.com", "AI calorie tracking with personalized meal plans"),
            ("Cronometer", "https://cronometer.com", "AI nutrition analysis with detailed micronutrient tracking"),
            ("Yazio", "https://yazio.com", "AI meal planning and calorie counter app"),
        ),
    ),
    IdeaCategory(
        slug="real-estate",
        keywords=("real estate", "property", "housing", "home"),
        optimist=(
            'The **proptech AI transformation** is massively undervalued for "{idea}"! With only {count} '
            "competitors still using basic MLS data, your AI real estate agent could revolutionize the "
            "industry. Imagine analyzing satellite imagery, zoning laws, school district performance, and "
            "development plans to predict property values with 95% accuracy, something traditional agents "
            "can't match! The real estate tech market is growing at 17% CAGR, with AI adoption still in its infancy."
        ),
        realist=(
            "Let's be brutally honest: real estate is a relationship business with {count} tech players trying "
            "to disrupt it. Competitors like Zillow have $20B market caps and established broker partnerships. "
            "You're fighting against the National Association of Realtors' lobbying power and centuries-old "
            "industry practices. Without exclusive data sources or major brokerage backing, you're just another "
            "property search tool in a heavily regulated market."
        ),
        opportunity_score=5,
        competitor_count=18,
        competitors=(
            ("Zillow", "https://zillow.com", "AI-powered property valuation and market predictions"),
            ("Redfin", "https://redfin.com", "AI real estate with Ask Redfin chatbot and Redesign AI"),
            ("Realtor.com", "https://realtor.com", "AI-enhanced property search and market analysis"),
            ("Compass", "https://compass.com", "AI-driven real estate platform with predictive analytics"),
            ("Apartments.com", "https://apartments.com", "AI rental matching and virtual tour technology"),
        ),
    ),
    IdeaCategory(
        slug="mental-health",
        keywords=("therapy", "mental health", "counseling", "psychology"),
        optimist=(
            'The **digital mental health** revolution is desperately needed for "{idea}"! With {count} '
            "competitors offering basic meditation apps, there's massive opportunity for *therapeutic AI*. "
            "Your mental health AI could provide CBT-based therapy, crisis intervention, and personalized "
            "treatment plans, available 24/7 at a fraction of traditional therapy costs. The digital mental "
            "health market is expected to reach $26.7 billion by 2027."
        ),
        realist=(
            "Here's the reality check: mental health is heavily regulated with {count} apps competing for "
            "attention. Competitors like BetterHelp and Talkspace have clinical validations and insurance "
            "partnerships. You're navigating HIPAA compliance, FDA regulations, and the risk of AI giving "
            "harmful advice. Without licensed therapists backing your AI and clinical trials proving efficacy, "
            "you could face serious legal and ethical issues."
        ),
        opportunity_score=4,
        competitor_count=15,
        competitors=(
            ("BetterHelp", "https://betterhelp.com", "AI-matched therapy with licensed counselors"),
            ("Talkspace", "https://talkspace.com", "AI-powered therapy matching and virtual sessions"),
            ("Headspace", "https://headspace.com", "AI-guided meditation and mental wellness platform"),
            ("Calm", "https://calm.com", "AI mental health app with personalized content"),
            ("Wysa", "https://wysa.io", "AI mental health chatbot for emotional support"),
        ),
    ),
    IdeaCategory(
        slug="dating",
        keywords=("dating", "relationship", "matchmaking", "love"),
        optimist=(
            'The **AI dating revolution** is poised to explode for "{idea}"! With {count} swipe apps still '
            "using superficial matching, your AI could analyze communication patterns, attachment styles, and "
            "life goals to create deeply compatible matches. Imagine an AI that coaches users through "
            "conversations and predicts relationship success with 80% accuracy! The online dating market is "
            "worth $7 billion, with users desperate for meaningful connections."
        ),
        realist=(
            "Let's be blunt: the dating app market is saturated with {count} players, and users have app "
            "fatigue. Giants like Tinder and Bumble have network effects and massive user bases. Most dating "
            "apps share the same fundamental problem: engagement drops once people find relationships. Without "
            "a breakthrough in matching accuracy or a unique niche, you'll struggle to retain users."
        ),
        opportunity_score=3,
        competitor_count=35,
        competitors=(
            ("Tinder", "https://tinder.com", "AI-enhanced dating with smart matching algorithms"),
            ("Bumble", "https://bumble.com", "AI-powered dating with conversation starters"),
            ("Hinge", "https://hinge.co", "AI dating app designed to be deleted with smart matches"),
            ("Match.com", "https://match.com", "AI-driven matchmaking with compatibility analysis"),
            ("eHarmony", "https://eharmony.com", "AI compatibility matching for serious relationships"),
        ),
    ),
)

DEFAULT_OPTIMIST = (
    'Your idea for "{idea}" has strong potential! The AI market is showing positive trends with $190 billion '
    "in projected spending. There's room for innovation, and with the right execution and unique value "
    "proposition, this could capture significant market share. Focus on proprietary data, network effects, "
    "and solving a painful problem that existing solutions overlook."
)

DEFAULT_REALIST = (
    'While "{idea}" is interesting, you\'ll face competition in the crowded AI space. The market has '
    "established players and customer acquisition costs are rising. You'll need solid funding, a clear moat, "
    "and excellent execution to succeed. Consider starting with a niche segment first and proving your "
    "technology before scaling to broader markets."
)

DEFAULT_COMPETITORS = (
    ("OpenAI ChatGPT", "https://chat.openai.com", "Leading AI assistant with broad capabilities"),
    ("Anthropic Claude", "https://claude.ai", "Advanced AI for complex reasoning tasks"),
)


def match_category(idea: str) -> IdeaCategory | None:
    idea_lower = idea.lower()
    for category in CATEGORIES:
        if category.matches(idea_lower):
            return category
    return None


def analyze_idea(idea: str, *, rng: random.Random | None = None) -> dict[str, Any]:
    """Build the ``data`` block of the analyze response for one idea."""
    category = match_category(idea)
    if category is not None:
        slug = category.slug
        count = category.competitor_count
        score = category.opportunity_score
        optimist, realist = category.optimist, category.realist
        competitors = category.competitors
    else:
        rng = rng or random.Random()
        slug = "general"
        count = rng.randint(5, 24)
        score = rng.randint(5, 9)
        optimist, realist = DEFAULT_OPTIMIST, DEFAULT_REALIST
        competitors = DEFAULT_COMPETITORS

    return {
        "optimist": {"text": optimist.format(idea=idea, count=count)},
        "realist": {"text": realist.format(idea=idea, count=count)},
        "analysis": {
            "totalCompetitors": count,
            "opportunityScore": score,
            "category": slug,
            "topCompetitors": [
                {"name": name, "url": url, "description": description}
                for name, url, description in competitors
            ],
        },
        "pivot": PIVOT_HINT if score <= 5 else None,
        "workflow": {step: dict(marker) for step, marker in CANNED_WORKFLOW.items()},
    }
