"""Planner agent — turns the request into an ArchitecturePlan."""

import json
import os

from config.media import (
    detect_niche, hero_image, gallery_images, avatar_images, media_table,
)
from core.context import build_summary
from core.errors import AllProvidersExhausted
from core.state import PipelineContext, ArchitecturePlan, PageSpec, ComponentSpec
from core.telemetry import Tracer, get_logger
from manager.library_matcher import library_catalog
from utils.structured import parse_json_object, Parsed

_PROMPT_FILE = os.path.join(os.path.dirname(__file__), "prompts", "planner.txt")
_MODIFY_PROMPT_FILE = os.path.join(os.path.dirname(__file__), "prompts", "planner_modify.txt")

# Canonical section set every default plan carries: (path, name, capabilities)
CANONICAL_COMPONENTS = [
    ("src/components/layout/Navbar.tsx", "Navbar", ["navigation", "mobile-menu"]),
    ("src/components/Hero.tsx", "Hero", ["hero-image", "cta"]),
    ("src/components/Features.tsx", "Features", ["icons", "grid"]),
    ("src/components/Gallery.tsx", "Gallery", ["images", "hover-zoom"]),
    ("src/components/Testimonials.tsx", "Testimonials", ["avatars", "quotes"]),
    ("src/components/CTA.tsx", "CTA", ["cta"]),
    ("src/components/layout/Footer.tsx", "Footer", ["links"]),
]

# (project type, keywords), first hit wins
PROJECT_TYPES = [
    ("dashboard", ("dashboard", "admin", "analytics")),
    ("portfolio", ("portfolio",)),
    ("blog", ("blog",)),
    ("e-commerce", ("shop", "store", "ecommerce", "e-commerce")),
    ("saas", ("saas", "startup", "software")),
]

# (primary color, keywords)
THEME_COLORS = [
    ("blue", ("blue", "ocean", "corporate")),
    ("green", ("green", "eco", "nature")),
    ("rose", ("pink", "rose", "beauty")),
    ("orange", ("orange", "warm", "bakery", "food")),
]

PLAN_FIELDS = ("projectType", "pages", "components")


def _load_prompt(path):
    with open(path) as f:
        return f.read()


def _first_match(text, table, default):
    for value, keywords in table:
        if any(k in text for k in keywords):
            return value
    return default


def default_plan(prompt):
    """Deterministic plan keyed by niche keywords in the prompt."""
    text = prompt.lower()
    niche = detect_niche(prompt)
    primary = _first_match(text, THEME_COLORS, "purple")

    return ArchitecturePlan(
        project_type=_first_match(text, PROJECT_TYPES, "landing-page"),
        theme={"primary": primary, "accent": "pink" if primary == "purple" else "zinc", "style": "dark"},
        pages=[PageSpec(path="src/pages/Index.tsx", name="Index", description="Landing page")],
        components=[ComponentSpec(path=p, name=n, capabilities=list(c)) for p, n, c in CANONICAL_COMPONENTS],
        routes=["/"],
        media={
            "niche": niche,
            "hero": hero_image(niche),
            "gallery": gallery_images(niche),
            "avatars": avatar_images(),
        },
        special_instructions=f"Use real {niche} imagery, dark theme, hover transitions on every card.",
    )


def _specs(items, cls):
    if not isinstance(items, list):
        return []
    specs = []
    for item in items:
        if isinstance(item, str):
            specs.append(cls(path=item))
        elif isinstance(item, dict) and item.get("path"):
            kwargs = {"path": str(item["path"]), "name": str(item.get("name", ""))}
            if cls is ComponentSpec:
                capabilities = item.get("capabilities")
                kwargs["capabilities"] = [str(c) for c in capabilities] if isinstance(capabilities, list) else []
            else:
                kwargs["description"] = item.get("description", "")
            specs.append(cls(**kwargs))
    return specs


def plan_from_payload(payload):
    """Build a plan from parsed JSON, filling missing fields with empty defaults."""
    theme = payload.get("theme")
    media = payload.get("media")
    routes = payload.get("routes")
    return ArchitecturePlan(
        project_type=str(payload.get("projectType") or "landing-page"),
        theme=theme if isinstance(theme, dict) else {},
        pages=_specs(payload.get("pages"), PageSpec),
        components=_specs(payload.get("components"), ComponentSpec),
        routes=[str(r) for r in routes] if isinstance(routes, list) else [],
        media=media if isinstance(media, dict) else {},
        special_instructions=str(payload.get("specialInstructions") or ""),
    )


class PlannerAgent:
    """Produces an ArchitecturePlan; never fails, falls back to default_plan."""

    name = "planner"

    def __init__(self, router, settings=None):
        self.router = router
        self.settings = settings

    def plan(self, context: PipelineContext) -> ArchitecturePlan:
        context.status = "planning"
        tracer = Tracer(context)
        log = get_logger(__name__, context.session_id)

        if context.is_new_project:
            prompt = f"{_load_prompt(_PROMPT_FILE)}\n\n{library_catalog()}"
            user_message = f"{media_table()}\n\nRequest: {context.prompt}"
        else:
            prompt = _load_prompt(_MODIFY_PROMPT_FILE)
            budget = self.settings.context_summary_chars if self.settings else 2000
            summary = build_summary(context.project, budget) if context.project else ""
            intent = context.intent.type if context.intent else "modify_component"
            user_message = f"{summary}\n\nIntent: {intent}\n\nRequest: {context.prompt}"

        messages = [
            {"role": "system", "content": prompt},
            {"role": "user", "content": user_message},
        ]
        try:
            result = self.router.call(
                "planning", messages,
                max_tokens=4000, temperature=0.4,
                expected_fields=PLAN_FIELDS,
                cancel=context.cancel,
            )
        except AllProvidersExhausted as e:
            tracer.stage_retry("plan", 1, str(e))
            log.warning("planning unavailable, using default plan")
            context.plan = default_plan(context.prompt)
            return context.plan

        tracer.model_call("plan", "planning", result)
        parsed = parse_json_object(result.content)
        if isinstance(parsed, Parsed):
            plan = plan_from_payload(parsed.value)
        else:
            log.warning("plan response had no JSON object, using default plan")
            plan = default_plan(context.prompt)

        # A from-scratch plan without media still gets the niche set
        if context.is_new_project and not plan.media:
            plan.media = default_plan(context.prompt).media

        context.plan = plan
        return plan


def plan_to_json(plan: ArchitecturePlan):
    """Serialize a plan for the generator's user message."""
    return json.dumps({
        "projectType": plan.project_type,
        "theme": plan.theme,
        "pages": [{"path": p.path, "name": p.name, "description": p.description} for p in plan.pages],
        "components": [{"path": c.path, "name": c.name, "capabilities": c.capabilities}
                       for c in plan.components],
        "routes": plan.routes,
        "media": plan.media,
        "specialInstructions": plan.special_instructions,
    }, indent=2)
